import logging
from typing import Tuple

from . import config
from .errors import InvalidCredentials, SessionRevoked
from .models.admin_model import AdminSession, PrivilegeLevel
from .models.voter_model import VoterSession
from .privileges import Action, authorize
from .security import create_access_token, decode_access_token, dummy_verify, verify_secret
from .session_version import SessionVersionCounter
from .storage_mongo import MongoAttendanceLog, MongoCredentialStore

logger = logging.getLogger(__name__)

ADMIN_TOKEN_KIND = "admin"
VOTER_TOKEN_KIND = "voter"


class AdminAuthenticator:
    def __init__(self, credentials: MongoCredentialStore, counter: SessionVersionCounter):
        self.credentials = credentials
        self.counter = counter

    def login(self, identity: str, secret: str) -> Tuple[AdminSession, str]:
        admin = self.credentials.find_admin(identity)
        if admin is None:
            dummy_verify()
            logger.warning("Rejected admin login")
            raise InvalidCredentials()
        if not verify_secret(secret, admin.secret):
            logger.warning("Rejected admin login")
            raise InvalidCredentials()

        session = AdminSession(
            identity=admin.identity,
            privilege_level=admin.privilege_level,
            issued_version=self.counter.current_version(),
        )
        token = create_access_token(
            {
                "sub": session.identity,
                "kind": ADMIN_TOKEN_KIND,
                "priv": session.privilege_level.value,
                "ver": session.issued_version,
            },
            config.ADMIN_TOKEN_EXPIRE_MINUTES,
        )
        logger.info(
            f"Admin {session.identity} logged in "
            f"(privilege={session.privilege_level.value}, version={session.issued_version})"
        )
        return session, token

    def validate(self, token: str) -> AdminSession:
        claims = decode_access_token(token, ADMIN_TOKEN_KIND)
        try:
            issued_version = int(claims["ver"])
        except (KeyError, TypeError, ValueError):
            raise InvalidCredentials()
        if issued_version != self.counter.current_version():
            raise SessionRevoked()
        return AdminSession(
            identity=claims["sub"],
            privilege_level=PrivilegeLevel.parse(claims.get("priv")),
            issued_version=issued_version,
        )

    def logout_all(self, session: AdminSession) -> int:
        authorize(session, Action.GLOBAL_LOGOUT)
        version = self.counter.advance()
        logger.info(f"Admin {session.identity} revoked all admin sessions, version is now {version}")
        return version


class VoterAuthenticator:
    def __init__(self, credentials: MongoCredentialStore, attendance: MongoAttendanceLog):
        self.credentials = credentials
        self.attendance = attendance

    def login(self, identity: str, secret: str) -> Tuple[VoterSession, str]:
        voter = self.credentials.find_voter(identity)
        if voter is None:
            dummy_verify()
            logger.warning("Rejected voter login")
            raise InvalidCredentials()
        if not verify_secret(secret, voter.secret):
            logger.warning("Rejected voter login")
            raise InvalidCredentials()

        self.attendance.record(voter.identity)
        session = VoterSession(identity=voter.identity)
        token = create_access_token(
            {"sub": session.identity, "kind": VOTER_TOKEN_KIND},
            config.VOTER_TOKEN_EXPIRE_MINUTES,
        )
        logger.info(f"Voter {session.identity} logged in")
        return session, token

    def validate(self, token: str) -> VoterSession:
        claims = decode_access_token(token, VOTER_TOKEN_KIND)
        return VoterSession(identity=claims["sub"])
