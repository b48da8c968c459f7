# storage_mongo.py
import logging
from datetime import datetime, timezone
from typing import Optional

from pymongo.database import Database
from pymongo.errors import PyMongoError

from . import config
from .errors import StoreUnavailable
from .models.admin_model import AdminPrincipal, PrivilegeLevel
from .models.voter_model import VoterPrincipal

logger = logging.getLogger(__name__)


class MongoCredentialStore:
    """Read-only view of the admin and voter records provisioned out of band."""

    def __init__(self, db: Database):
        self.admins = db[config.ADMINS_COLLECTION_NAME]
        self.voters = db[config.VOTERS_COLLECTION_NAME]

    def find_admin(self, identity: str) -> Optional[AdminPrincipal]:
        """
        Retrieve an administrator record

        Args:
            identity: The admin's login name

        Returns:
            AdminPrincipal if found, None otherwise. Falls back to the
            bootstrap administrator from the environment when configured.
        """
        try:
            admin = self.admins.find_one({"identity": identity})
        except PyMongoError as e:
            logger.error(f"Error retrieving admin {identity}: {e}")
            raise StoreUnavailable()
        if admin:
            return AdminPrincipal(
                identity=admin["identity"],
                secret=_secret_of(admin),
                privilege_level=admin.get("privilege_level"),
            )
        return bootstrap_admin(identity)

    def find_voter(self, identity: str) -> Optional[VoterPrincipal]:
        """
        Retrieve a voter eligibility record

        Args:
            identity: The voter's identity (e.g. email address)

        Returns:
            VoterPrincipal if found, None otherwise
        """
        try:
            voter = self.voters.find_one({"identity": identity})
        except PyMongoError as e:
            logger.error(f"Error retrieving voter {identity}: {e}")
            raise StoreUnavailable()
        if not voter:
            return None
        return VoterPrincipal(identity=voter["identity"], secret=_secret_of(voter))


def _secret_of(record: dict) -> str:
    # pincodes are sometimes stored as numbers
    secret = record.get("secret")
    return "" if secret is None else str(secret)


def bootstrap_admin(identity: str) -> Optional[AdminPrincipal]:
    if not config.ADMIN_USERNAME or not config.ADMIN_PASSWORD:
        return None
    if identity != config.ADMIN_USERNAME:
        return None
    return AdminPrincipal(
        identity=config.ADMIN_USERNAME,
        secret=config.ADMIN_PASSWORD,
        privilege_level=PrivilegeLevel.parse(config.ADMIN_PRIVILEGES),
    )


class MongoAttendanceLog:
    """Append-only check-in log keyed by voter identity."""

    def __init__(self, db: Database):
        self.collection = db[config.ATTENDANCE_COLLECTION_NAME]

    def record(self, identity: str) -> None:
        try:
            self.collection.insert_one(
                {"identity": identity, "checked_in_at": datetime.now(timezone.utc)}
            )
        except PyMongoError as e:
            logger.error(f"Error recording attendance for {identity}: {e}")
            raise StoreUnavailable()

    def count(self) -> int:
        try:
            return self.collection.count_documents({})
        except PyMongoError as e:
            logger.error(f"Error counting attendance: {e}")
            raise StoreUnavailable()

    def reset(self) -> int:
        try:
            result = self.collection.delete_many({})
        except PyMongoError as e:
            logger.error(f"Error resetting attendance: {e}")
            raise StoreUnavailable(outcome_unknown=True)
        logger.info(f"Attendance log reset, {result.deleted_count} entries removed")
        return result.deleted_count
