"""
Redis Submission Repository

Redis-backed implementation of SubmissionRepositoryProtocol.

Storage Format:
    Redis keys:
    - "submission:{id}"             -> JSON document (Submission.to_dict())
    - "submissions:index"           -> ZSET of ids scored by created_at (epoch seconds)
    - "submissions:email:{email}"   -> ZSET of ids for one email, same scores

Consistency:
    - create() and delete_by_id() write document and indexes in one MULTI/EXEC
    - update_by_id() uses an optimistic WATCH transaction on the document key
    - Each operation touches a single record; no multi-record transactions

Error Handling:
    - RedisError -> StorageError (full detail logged)
    - Malformed id -> None / False without touching Redis
"""

import json
import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Optional

from redis import Redis
from redis.exceptions import RedisError

from src.domain.shared.exceptions import StorageError
from src.domain.submission.constants import DEFAULT_SORT_FIELD, SORT_DESCENDING
from src.domain.submission.entities import Submission
from src.domain.submission.services import is_valid_submission_id
from src.infrastructure.persistence.redis.connection import get_redis_client
from src.infrastructure.persistence.repositories.ordering import paginate, sort_submissions
from src.shared.utils import generate_submission_id, utc_now

# Configure logger for this module
logger = logging.getLogger(__name__)

INDEX_KEY = "submissions:index"
MAX_ID_ATTEMPTS = 5


class RedisSubmissionRepository:
    """
    Submission store on Redis (JSON documents + sorted-set indexes).

    Listing by createdAt reads one page of ids straight from the index;
    other sort fields load all documents and sort in process.

    Examples:
        >>> repo = RedisSubmissionRepository()
        >>> stored = await repo.create(submission)
        >>> await repo.find_by_id(stored.id)
        Submission(name='John Doe', ...)
    """

    def __init__(
        self,
        client: Optional[Redis] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize repository.

        Args:
            client: Redis client (default: pooled client, connects lazily)
            clock: Source of created/updated timestamps
        """
        self.redis: Redis = client if client is not None else get_redis_client()
        self._clock = clock

    @staticmethod
    def _doc_key(submission_id: str) -> str:
        return f"submission:{submission_id}"

    @staticmethod
    def _email_key(email: str) -> str:
        return f"submissions:email:{email}"

    @staticmethod
    def _serialize(submission: Submission) -> str:
        return json.dumps(submission.to_dict())

    def _load_many(self, ids: list[str]) -> list[Submission]:
        if not ids:
            return []
        raws = self.redis.mget([self._doc_key(submission_id) for submission_id in ids])
        return [Submission.from_dict(json.loads(raw)) for raw in raws if raw]

    # ========================================================================
    # PROTOCOL METHODS
    # ========================================================================

    async def create(self, submission: Submission) -> Submission:
        """
        Store a new submission (document + both indexes in one MULTI/EXEC).

        Raises:
            StorageError: If Redis fails
        """
        now = self._clock()
        try:
            stored = replace(
                submission,
                id=self._new_id(),
                email=submission.email.lower(),
                created_at=now,
                updated_at=now,
            )
            score = stored.created_at.timestamp()

            pipe = self.redis.pipeline(transaction=True)
            pipe.set(self._doc_key(stored.id), self._serialize(stored))
            pipe.zadd(INDEX_KEY, {stored.id: score})
            pipe.zadd(self._email_key(stored.email), {stored.id: score})
            pipe.execute()

        except RedisError as e:
            logger.error(f"Redis error creating submission: {e}")
            raise StorageError("Failed to create submission") from e

        logger.info(f"Created submission {stored.id}")
        return stored

    def _new_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = generate_submission_id()
            if not self.redis.exists(self._doc_key(candidate)):
                return candidate
        raise StorageError("Could not allocate a unique submission id")

    async def find_all(
        self,
        limit: Optional[int] = 50,
        skip: int = 0,
        sort_by: str = DEFAULT_SORT_FIELD,
        sort_order: int = SORT_DESCENDING,
    ) -> list[Submission]:
        """
        Return a page of submissions.

        Raises:
            StorageError: If Redis fails
        """
        try:
            if sort_by == "createdAt":
                start = max(0, skip)
                end = -1 if limit is None else start + limit - 1
                if sort_order == SORT_DESCENDING:
                    ids = self.redis.zrevrange(INDEX_KEY, start, end)
                else:
                    ids = self.redis.zrange(INDEX_KEY, start, end)
                return self._load_many(list(ids))

            everything = self._load_many(list(self.redis.zrange(INDEX_KEY, 0, -1)))

        except RedisError as e:
            logger.error(f"Redis error listing submissions: {e}")
            raise StorageError("Failed to fetch submissions") from e

        return paginate(sort_submissions(everything, sort_by, sort_order), limit, skip)

    async def find_by_id(self, submission_id: str) -> Optional[Submission]:
        """
        Return the submission or None.

        Raises:
            StorageError: If Redis fails
        """
        if not is_valid_submission_id(submission_id):
            return None

        try:
            raw = self.redis.get(self._doc_key(submission_id))
        except RedisError as e:
            logger.error(f"Redis error reading submission {submission_id}: {e}")
            raise StorageError("Failed to find submission") from e

        return Submission.from_dict(json.loads(raw)) if raw else None

    async def update_by_id(
        self, submission_id: str, changes: dict[str, Any]
    ) -> Optional[Submission]:
        """
        Merge changes under WATCH and refresh updated_at.

        Returns:
            Updated submission, or None when not found

        Raises:
            StorageError: If Redis fails
        """
        if not is_valid_submission_id(submission_id):
            return None

        key = self._doc_key(submission_id)

        def apply(pipe: Any) -> Optional[Submission]:
            raw = pipe.get(key)
            if not raw:
                return None

            submission = Submission.from_dict(json.loads(raw))
            previous_email = submission.email
            submission.apply_update(changes, now=self._clock())

            pipe.multi()
            pipe.set(key, self._serialize(submission))
            if submission.email != previous_email:
                score = submission.created_at.timestamp()
                pipe.zrem(self._email_key(previous_email), submission_id)
                pipe.zadd(self._email_key(submission.email), {submission_id: score})
            return submission

        try:
            updated = self.redis.transaction(apply, key, value_from_callable=True)
        except RedisError as e:
            logger.error(f"Redis error updating submission {submission_id}: {e}")
            raise StorageError("Failed to update submission") from e

        if updated is not None:
            logger.info(f"Updated submission {submission_id}")
        return updated

    async def delete_by_id(self, submission_id: str) -> bool:
        """
        Remove document and index entries.

        Returns:
            True when a record was removed

        Raises:
            StorageError: If Redis fails
        """
        if not is_valid_submission_id(submission_id):
            return False

        key = self._doc_key(submission_id)
        try:
            raw = self.redis.get(key)
            if not raw:
                return False

            email = json.loads(raw).get("email", "")
            pipe = self.redis.pipeline(transaction=True)
            pipe.delete(key)
            pipe.zrem(INDEX_KEY, submission_id)
            pipe.zrem(self._email_key(email), submission_id)
            deleted, _, _ = pipe.execute()

        except RedisError as e:
            logger.error(f"Redis error deleting submission {submission_id}: {e}")
            raise StorageError("Failed to delete submission") from e

        return bool(deleted)

    async def count(self) -> int:
        """
        Raises:
            StorageError: If Redis fails
        """
        try:
            return int(self.redis.zcard(INDEX_KEY))
        except RedisError as e:
            logger.error(f"Redis error counting submissions: {e}")
            raise StorageError("Failed to count submissions") from e

    async def find_by_email(self, email: str) -> list[Submission]:
        """
        All submissions for an email, newest first.

        Raises:
            StorageError: If Redis fails
        """
        normalized = (email or "").lower()
        try:
            ids = self.redis.zrevrange(self._email_key(normalized), 0, -1)
            return self._load_many(list(ids))
        except RedisError as e:
            logger.error(f"Redis error finding submissions by email: {e}")
            raise StorageError("Failed to find submissions by email") from e

    async def health_check(self) -> bool:
        """True when Redis answers PING (never raises)."""
        try:
            return bool(self.redis.ping())
        except RedisError as e:
            logger.warning(f"Redis health check failed: {e}")
            return False
