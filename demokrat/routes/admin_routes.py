import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..auth import AdminAuthenticator
from ..dependencies import (
    get_admin_authenticator,
    get_admin_session,
    get_attendance,
    get_ledger,
)
from ..ledger import VoteLedger
from ..models.admin_model import AdminSession
from ..privileges import Action, allowed_actions, authorize
from ..schemas import AdminSessionOut, AdminTokenOut, LoginRequest, TallyOut
from ..storage_mongo import MongoAttendanceLog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/login", response_model=AdminTokenOut)
def admin_login(
    credentials: LoginRequest,
    authenticator: AdminAuthenticator = Depends(get_admin_authenticator),
):
    session, token = authenticator.login(credentials.identity, credentials.secret)
    return AdminTokenOut(
        access_token=token,
        privilege_level=session.privilege_level.value,
        issued_version=session.issued_version,
    )


@router.get("/session", response_model=AdminSessionOut)
def admin_session(session: AdminSession = Depends(get_admin_session)):
    return AdminSessionOut(
        identity=session.identity,
        privilege_level=session.privilege_level.value,
        issued_version=session.issued_version,
        allowed_actions=[action.value for action in allowed_actions(session.privilege_level)],
    )


@router.post("/logout")
def admin_logout():
    # Tokens are not tracked server-side; the client drops its copy.
    return {"success": True}


@router.post("/logout-all")
def admin_logout_all(
    session: AdminSession = Depends(get_admin_session),
    authenticator: AdminAuthenticator = Depends(get_admin_authenticator),
):
    version = authenticator.logout_all(session)
    return {"success": True, "session_version": version}


@router.get("/tally", response_model=TallyOut)
def get_tally(
    post: Optional[str] = Query(None, description="Defaults to the active post"),
    include_zero: bool = Query(False),
    session: AdminSession = Depends(get_admin_session),
    ledger: VoteLedger = Depends(get_ledger),
):
    post, results = ledger.report(session, post=post, include_zero=include_zero)
    return TallyOut(post=post, results=results, total=sum(results.values()))


@router.post("/reset-ballots")
def reset_ballots(
    session: AdminSession = Depends(get_admin_session),
    ledger: VoteLedger = Depends(get_ledger),
):
    deleted = ledger.reset(session)
    return {"message": "All voting data has been reset.", "deleted": deleted}


@router.post("/reset-attendance")
def reset_attendance(
    session: AdminSession = Depends(get_admin_session),
    attendance: MongoAttendanceLog = Depends(get_attendance),
):
    authorize(session, Action.RESET_ATTENDANCE)
    deleted = attendance.reset()
    logger.info(f"Admin {session.identity} reset attendance")
    return {"message": "Attendance has been reset.", "deleted": deleted}
