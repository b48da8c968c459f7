"""
The single active election and its candidate list.

The canonical election document always uses the ``_id`` ``"active"``, so the
store's primary key keeps a second canonical row from ever existing. Rows
with any other key are leftovers from older deployments and are collapsed
away on the next read or write.
"""
import logging
from typing import List, Optional

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from . import config
from .errors import InvalidRequest, NoActiveElection, StoreUnavailable
from .models.admin_model import AdminSession
from .models.election_model import Election
from .privileges import Action, authorize

logger = logging.getLogger(__name__)

ACTIVE_ID = "active"


def _post_of(row: dict) -> str:
    # "election" is the field name used by the first deployment
    return row.get("post", row.get("election")) or ""


class ElectionStateManager:
    def __init__(self, db: Database):
        self.elections = db[config.ELECTIONS_COLLECTION_NAME]
        self.candidates = db[config.CANDIDATES_COLLECTION_NAME]

    def get_active(self) -> Election:
        try:
            rows = list(self.elections.find({}))
            if not rows:
                return self._bootstrap()
            keep = next((r for r in rows if r["_id"] == ACTIVE_ID), rows[0])
            post = _post_of(keep)
            if len(rows) > 1 or keep["_id"] != ACTIVE_ID:
                post = self._collapse(post, len(rows))
        except PyMongoError as e:
            logger.error(f"Error reading active election: {e}")
            raise StoreUnavailable()
        return Election(post=post)

    def _bootstrap(self) -> Election:
        try:
            self.elections.insert_one({"_id": ACTIVE_ID, "post": ""})
            logger.info("Created empty active election")
        except DuplicateKeyError:
            # a concurrent request created it first
            pass
        row = self.elections.find_one({"_id": ACTIVE_ID})
        return Election(post=_post_of(row) if row else "")

    def _collapse(self, post: str, found: int) -> str:
        # never overwrite an existing canonical row, a concurrent set_active may own it
        row = self.elections.find_one_and_update(
            {"_id": ACTIVE_ID},
            {"$setOnInsert": {"post": post}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        self.elections.delete_many({"_id": {"$ne": ACTIVE_ID}})
        post = _post_of(row)
        logger.warning(f"Collapsed {found} election rows into one (post={post!r})")
        return post

    def set_active(self, session: AdminSession, post: str) -> Election:
        authorize(session, Action.MODIFY_ELECTION)
        post = (post or "").strip()
        try:
            self.elections.delete_many({"_id": {"$ne": ACTIVE_ID}})
            self.elections.replace_one({"_id": ACTIVE_ID}, {"post": post}, upsert=True)
        except PyMongoError as e:
            logger.error(f"Error setting active election: {e}")
            raise StoreUnavailable(outcome_unknown=True)
        logger.info(f"Admin {session.identity} set active post to {post!r}")
        return Election(post=post)

    # --- Candidates ---

    def list_candidates(self, post: Optional[str] = None) -> List[str]:
        if post is None:
            post = self.get_active().post
        try:
            cursor = self.candidates.find({"post": post}).sort("name", 1)
            return [row["name"] for row in cursor]
        except PyMongoError as e:
            logger.error(f"Error listing candidates for {post!r}: {e}")
            raise StoreUnavailable()

    def add_candidate(self, session: AdminSession, name: str) -> bool:
        """Add a candidate to the active post. Returns False if already present."""
        authorize(session, Action.MODIFY_CANDIDATES)
        name = (name or "").strip()
        if not name:
            raise InvalidRequest("Candidate name must not be empty")
        post = self.get_active().post
        if not post:
            raise NoActiveElection()
        try:
            result = self.candidates.update_one(
                {"post": post, "name": name},
                {"$setOnInsert": {"post": post, "name": name}},
                upsert=True,
            )
        except DuplicateKeyError:
            return False
        except PyMongoError as e:
            logger.error(f"Error adding candidate {name!r}: {e}")
            raise StoreUnavailable(outcome_unknown=True)
        added = result.upserted_id is not None
        if added:
            logger.info(f"Admin {session.identity} added candidate {name!r} to {post!r}")
        return added

    def remove_candidate(self, session: AdminSession, name: str) -> bool:
        authorize(session, Action.MODIFY_CANDIDATES)
        name = (name or "").strip()
        post = self.get_active().post
        try:
            result = self.candidates.delete_one({"post": post, "name": name})
        except PyMongoError as e:
            logger.error(f"Error removing candidate {name!r}: {e}")
            raise StoreUnavailable(outcome_unknown=True)
        removed = result.deleted_count > 0
        if removed:
            logger.info(f"Admin {session.identity} removed candidate {name!r} from {post!r}")
        return removed
