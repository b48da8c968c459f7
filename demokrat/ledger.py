import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from . import config
from .election_state import ElectionStateManager
from .errors import AlreadyVoted, NoActiveElection, StoreUnavailable, UnknownCandidate
from .models.admin_model import AdminSession
from .models.vote_model import Ballot
from .models.voter_model import VoterSession
from .privileges import Action, authorize

logger = logging.getLogger(__name__)


class VoteLedger:
    """
    One ballot per (voter, post).

    The unique index on ``(voter_identity, post)`` is what guarantees a
    single ballot under concurrent casts; the lookup before the insert only
    gives the common case a clean error.
    """

    def __init__(self, db: Database, elections: ElectionStateManager):
        self.ballots = db[config.BALLOTS_COLLECTION_NAME]
        self.elections = elections

    def cast(self, voter: VoterSession, candidate: str) -> Ballot:
        post = self.elections.get_active().post
        if not post:
            raise NoActiveElection()

        if self.has_voted(voter.identity, post):
            logger.warning(f"Voter {voter.identity} tried to vote twice for {post!r}")
            raise AlreadyVoted()

        candidate = (candidate or "").strip()
        if candidate not in self.elections.list_candidates(post):
            raise UnknownCandidate()

        ballot = Ballot(
            voter_identity=voter.identity,
            post=post,
            candidate=candidate,
            cast_at=datetime.now(timezone.utc),
        )
        try:
            self.ballots.insert_one(ballot.model_dump())
        except DuplicateKeyError:
            logger.warning(f"Voter {voter.identity} lost a concurrent cast for {post!r}")
            raise AlreadyVoted()
        except PyMongoError as e:
            # the insert may have been applied; never retry it here
            logger.error(f"Error storing ballot for {voter.identity}: {e}")
            raise StoreUnavailable(outcome_unknown=True)
        logger.info(f"Ballot cast by {voter.identity} for {post!r}")
        return ballot

    def has_voted(self, identity: str, post: Optional[str] = None) -> bool:
        if post is None:
            post = self.elections.get_active().post
        try:
            return self.ballots.find_one({"voter_identity": identity, "post": post}) is not None
        except PyMongoError as e:
            logger.error(f"Error checking ballot for {identity}: {e}")
            raise StoreUnavailable()

    def tally(
        self,
        session: AdminSession,
        post: Optional[str] = None,
        include_zero: bool = False,
    ) -> Dict[str, int]:
        return self.report(session, post, include_zero)[1]

    def report(
        self,
        session: AdminSession,
        post: Optional[str] = None,
        include_zero: bool = False,
    ) -> Tuple[str, Dict[str, int]]:
        """Tally for ``post`` (the active post when omitted), with the post it resolved to."""
        authorize(session, Action.VIEW_RESULTS)
        if post is None:
            post = self.elections.get_active().post

        pipeline = [
            {"$match": {"post": post}},
            {"$group": {"_id": "$candidate", "count": {"$sum": 1}}},
            {"$sort": {"count": -1, "_id": 1}},
        ]
        try:
            results = {row["_id"]: row["count"] for row in self.ballots.aggregate(pipeline)}
        except PyMongoError as e:
            logger.error(f"Error computing tally for {post!r}: {e}")
            raise StoreUnavailable()

        if include_zero:
            for name in self.elections.list_candidates(post):
                results.setdefault(name, 0)
        return post, results

    def reset(self, session: AdminSession) -> int:
        authorize(session, Action.RESET_BALLOTS)
        try:
            result = self.ballots.delete_many({})
        except PyMongoError as e:
            logger.error(f"Error resetting ballots: {e}")
            raise StoreUnavailable(outcome_unknown=True)
        logger.info(f"Admin {session.identity} reset voting data, {result.deleted_count} ballots removed")
        return result.deleted_count
