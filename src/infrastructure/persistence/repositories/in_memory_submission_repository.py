"""
In-Memory Submission Repository

List-backed implementation of SubmissionRepositoryProtocol.
Used by tests and by local runs with SUBMISSION_STORE=memory.
Records live for the lifetime of the process only.
"""

import copy
import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Optional

from src.domain.submission.entities import Submission
from src.domain.submission.services import is_valid_submission_id
from src.infrastructure.persistence.repositories.ordering import paginate, sort_submissions
from src.shared.utils import generate_submission_id, utc_now

logger = logging.getLogger(__name__)


class InMemorySubmissionRepository:
    """
    Submission store kept in a Python list.

    Returned entities are copies; mutating them never changes stored state.

    Examples:
        >>> repo = InMemorySubmissionRepository()
        >>> stored = await repo.create(submission)
        >>> await repo.count()
        1
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        """
        Args:
            clock: Source of created/updated timestamps
        """
        self._records: list[Submission] = []
        self._clock = clock

    async def create(self, submission: Submission) -> Submission:
        now = self._clock()
        stored = replace(
            submission,
            id=self._new_id(),
            email=submission.email.lower(),
            created_at=now,
            updated_at=now,
        )
        self._records.append(stored)
        logger.debug(f"Created submission {stored.id} (in-memory)")
        return copy.deepcopy(stored)

    async def find_all(
        self,
        limit: Optional[int] = 50,
        skip: int = 0,
        sort_by: str = "createdAt",
        sort_order: int = -1,
    ) -> list[Submission]:
        ordered = sort_submissions(self._records, sort_by, sort_order)
        return [copy.deepcopy(item) for item in paginate(ordered, limit, skip)]

    async def find_by_id(self, submission_id: str) -> Optional[Submission]:
        record = self._get(submission_id)
        return copy.deepcopy(record) if record else None

    async def update_by_id(
        self, submission_id: str, changes: dict[str, Any]
    ) -> Optional[Submission]:
        record = self._get(submission_id)
        if record is None:
            return None
        record.apply_update(changes, now=self._clock())
        return copy.deepcopy(record)

    async def delete_by_id(self, submission_id: str) -> bool:
        record = self._get(submission_id)
        if record is None:
            return False
        self._records.remove(record)
        return True

    async def count(self) -> int:
        return len(self._records)

    async def find_by_email(self, email: str) -> list[Submission]:
        normalized = (email or "").lower()
        matches = [record for record in self._records if record.email == normalized]
        return [copy.deepcopy(item) for item in sort_submissions(matches)]

    async def health_check(self) -> bool:
        return True

    def _get(self, submission_id: str) -> Optional[Submission]:
        if not is_valid_submission_id(submission_id):
            return None
        for record in self._records:
            if record.id == submission_id:
                return record
        return None

    def _new_id(self) -> str:
        existing = {record.id for record in self._records}
        new_id = generate_submission_id()
        while new_id in existing:
            new_id = generate_submission_id()
        return new_id
