from fastapi import APIRouter, Depends

from ..auth import VoterAuthenticator
from ..dependencies import get_ledger, get_voter_authenticator, get_voter_session
from ..ledger import VoteLedger
from ..models.voter_model import VoterSession
from ..schemas import BallotIn, BallotOut, LoginRequest, TokenOut, VoteStatusOut

vote_router = APIRouter(prefix="/vote", tags=["Vote"])


@vote_router.post("/login", response_model=TokenOut)
def voter_login(
    credentials: LoginRequest,
    authenticator: VoterAuthenticator = Depends(get_voter_authenticator),
):
    _, token = authenticator.login(credentials.identity, credentials.secret)
    return TokenOut(access_token=token)


@vote_router.post("/logout")
def voter_logout():
    return {"success": True}


@vote_router.get("/status", response_model=VoteStatusOut)
def vote_status(
    voter: VoterSession = Depends(get_voter_session),
    ledger: VoteLedger = Depends(get_ledger),
):
    """Whether the voter has already voted for the active post."""
    post = ledger.elections.get_active().post
    return VoteStatusOut(post=post, has_voted=bool(post) and ledger.has_voted(voter.identity, post))


@vote_router.post("/ballot", response_model=BallotOut)
def cast_ballot(
    ballot: BallotIn,
    voter: VoterSession = Depends(get_voter_session),
    ledger: VoteLedger = Depends(get_ledger),
):
    """Casts the voter's single ballot for the active post."""
    stored = ledger.cast(voter, ballot.candidate)
    return BallotOut(message="Vote cast successfully!", post=stored.post, candidate=stored.candidate)
