import logging
from functools import lru_cache

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .. import config
from ..errors import StoreUnavailable

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def get_client() -> MongoClient:
    client = MongoClient(config.MONGO_URI, serverSelectionTimeoutMS=config.MONGO_TIMEOUT_MS)
    logger.info(f"MongoDB client created for database: {config.MONGO_DB}")
    return client


def get_database() -> Database:
    """FastAPI dependency returning the application database."""
    return get_client()[config.MONGO_DB]


def ensure_indexes(db: Database) -> None:
    """Create the unique indexes the voting invariants rely on."""
    try:
        db[config.ADMINS_COLLECTION_NAME].create_index("identity", unique=True)
        db[config.VOTERS_COLLECTION_NAME].create_index("identity", unique=True)
        db[config.CANDIDATES_COLLECTION_NAME].create_index(
            [("post", ASCENDING), ("name", ASCENDING)], unique=True
        )
        # one ballot per voter per post
        db[config.BALLOTS_COLLECTION_NAME].create_index(
            [("voter_identity", ASCENDING), ("post", ASCENDING)], unique=True
        )
        db[config.BALLOTS_COLLECTION_NAME].create_index("post")
        db[config.ATTENDANCE_COLLECTION_NAME].create_index("identity")
    except PyMongoError as e:
        logger.error(f"Failed to create indexes: {e}")
        raise StoreUnavailable()
    logger.info(f"Indexes ensured on database: {db.name}")


def ping(db: Database) -> bool:
    try:
        db.command("ping")
        return True
    except PyMongoError as e:
        logger.error(f"MongoDB ping failed: {e}")
        return False
