from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.database import Database

from .auth import AdminAuthenticator, VoterAuthenticator
from .database import get_database
from .election_state import ElectionStateManager
from .errors import InvalidCredentials
from .ledger import VoteLedger
from .models.admin_model import AdminSession
from .models.voter_model import VoterSession
from .session_version import SessionVersionCounter, get_version_counter
from .storage_mongo import MongoAttendanceLog, MongoCredentialStore

# auto_error=False so a missing header goes through the same 401 handler
bearer_scheme = HTTPBearer(auto_error=False)


def get_counter(db: Database = Depends(get_database)) -> SessionVersionCounter:
    return get_version_counter(db)


def get_credentials(db: Database = Depends(get_database)) -> MongoCredentialStore:
    return MongoCredentialStore(db)


def get_attendance(db: Database = Depends(get_database)) -> MongoAttendanceLog:
    return MongoAttendanceLog(db)


def get_admin_authenticator(
    credentials: MongoCredentialStore = Depends(get_credentials),
    counter: SessionVersionCounter = Depends(get_counter),
) -> AdminAuthenticator:
    return AdminAuthenticator(credentials, counter)


def get_voter_authenticator(
    credentials: MongoCredentialStore = Depends(get_credentials),
    attendance: MongoAttendanceLog = Depends(get_attendance),
) -> VoterAuthenticator:
    return VoterAuthenticator(credentials, attendance)


def get_election_manager(db: Database = Depends(get_database)) -> ElectionStateManager:
    return ElectionStateManager(db)


def get_ledger(
    db: Database = Depends(get_database),
    elections: ElectionStateManager = Depends(get_election_manager),
) -> VoteLedger:
    return VoteLedger(db, elections)


def _bearer_token(credentials: HTTPAuthorizationCredentials) -> str:
    if credentials is None or not credentials.credentials:
        raise InvalidCredentials()
    return credentials.credentials


def get_admin_session(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    authenticator: AdminAuthenticator = Depends(get_admin_authenticator),
) -> AdminSession:
    """Validated on every request against the live session version."""
    return authenticator.validate(_bearer_token(credentials))


def get_voter_session(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    authenticator: VoterAuthenticator = Depends(get_voter_authenticator),
) -> VoterSession:
    return authenticator.validate(_bearer_token(credentials))
