from fastapi import APIRouter, Depends

from ..dependencies import get_admin_session, get_election_manager
from ..election_state import ElectionStateManager
from ..models.admin_model import AdminSession
from ..models.election_model import ElectionOut
from ..schemas import CandidateIn, PostUpdate

router = APIRouter(prefix="/election", tags=["Election"])


@router.get("/active", response_model=ElectionOut)
def get_active_election(manager: ElectionStateManager = Depends(get_election_manager)):
    election = manager.get_active()
    return ElectionOut(post=election.post, candidates=manager.list_candidates(election.post))


@router.put("/active", response_model=ElectionOut)
def set_active_election(
    update: PostUpdate,
    session: AdminSession = Depends(get_admin_session),
    manager: ElectionStateManager = Depends(get_election_manager),
):
    election = manager.set_active(session, update.post)
    return ElectionOut(post=election.post, candidates=manager.list_candidates(election.post))


@router.post("/candidates")
def add_candidate(
    candidate: CandidateIn,
    session: AdminSession = Depends(get_admin_session),
    manager: ElectionStateManager = Depends(get_election_manager),
):
    added = manager.add_candidate(session, candidate.name)
    return {"added": added, "candidates": manager.list_candidates()}


@router.delete("/candidates/{name}")
def remove_candidate(
    name: str,
    session: AdminSession = Depends(get_admin_session),
    manager: ElectionStateManager = Depends(get_election_manager),
):
    removed = manager.remove_candidate(session, name)
    return {"removed": removed, "candidates": manager.list_candidates()}
