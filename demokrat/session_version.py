"""
Admin session version counter.

Every admin token is stamped with the value of this counter at login. A token
is only accepted while the counter still holds that value, so ``advance()``
revokes every outstanding admin token at once.
"""
import logging
import threading

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from . import config
from .errors import StoreUnavailable

logger = logging.getLogger(__name__)

INITIAL_VERSION = 1
COUNTER_ID = "admin_session"


class SessionVersionCounter:
    def current_version(self) -> int:
        raise NotImplementedError

    def advance(self) -> int:
        raise NotImplementedError


class MemoryVersionCounter(SessionVersionCounter):
    """Process-local counter. Only correct for a single server process."""

    def __init__(self, start: int = INITIAL_VERSION):
        self._value = start
        self._lock = threading.Lock()

    def current_version(self) -> int:
        with self._lock:
            return self._value

    def advance(self) -> int:
        with self._lock:
            self._value += 1
            return self._value


class MongoVersionCounter(SessionVersionCounter):
    """Counter document shared by every server process through the store."""

    def __init__(self, db: Database):
        self.collection = db[config.COUNTERS_COLLECTION_NAME]

    def _ensure(self) -> None:
        self.collection.update_one(
            {"_id": COUNTER_ID},
            {"$setOnInsert": {"value": INITIAL_VERSION}},
            upsert=True,
        )

    def current_version(self) -> int:
        try:
            doc = self.collection.find_one({"_id": COUNTER_ID})
        except PyMongoError as e:
            logger.error(f"Error reading session version: {e}")
            raise StoreUnavailable()
        if doc is None:
            return INITIAL_VERSION
        return int(doc["value"])

    def advance(self) -> int:
        try:
            self._ensure()
            doc = self.collection.find_one_and_update(
                {"_id": COUNTER_ID},
                {"$inc": {"value": 1}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Error advancing session version: {e}")
            raise StoreUnavailable(outcome_unknown=True)
        return int(doc["value"])


_memory_counter = MemoryVersionCounter()


def get_version_counter(db: Database) -> SessionVersionCounter:
    if config.SESSION_COUNTER_BACKEND == "memory":
        return _memory_counter
    return MongoVersionCounter(db)
