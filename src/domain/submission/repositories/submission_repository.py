"""
SubmissionRepository Interface

Repository pattern interface for Submission persistence.
Defines the contract for storing and retrieving submissions.

Responsibility:
    - Define data access contract (interface)
    - Enable Dependency Inversion (Domain defines, Infrastructure implements)
    - Support testing (in-memory implementation, easy to mock)

Architecture Notes:
    - Repository Pattern (Martin Fowler)
    - Protocol-based interface (structural typing)
    - Async methods
    - Implementations in Infrastructure layer:
        * RedisSubmissionRepository (durable document store)
        * InMemorySubmissionRepository (tests, local runs)
"""

from typing import Any, Optional, Protocol

from ..entities.submission import Submission


class SubmissionRepositoryProtocol(Protocol):
    """
    Protocol defining the contract for Submission persistence.

    Every operation is atomic for a single record; no multi-record
    transactions are offered. Operations taking an id reject ids that are
    not 24 hex characters without querying the backend.

    Usage:
        >>> class SubmissionPipeline:
        ...     def __init__(self, repository: SubmissionRepositoryProtocol, ...):
        ...         self.repository = repository
        ...
        ...     async def get_submission(self, submission_id):
        ...         return await self.repository.find_by_id(submission_id)
    """

    async def create(self, submission: Submission) -> Submission:
        """
        Persist a new submission.

        Stamps created_at/updated_at, assigns a fresh id and stores the record.

        Returns:
            The stored Submission (with id and timestamps)
        """
        ...

    async def find_all(
        self,
        limit: Optional[int] = 50,
        skip: int = 0,
        sort_by: str = "createdAt",
        sort_order: int = -1,
    ) -> list[Submission]:
        """
        Return a page of submissions in the requested order.

        Args:
            limit: Page size (None returns every record after skip)
            skip: Records to skip
            sort_by: name, email, createdAt or updatedAt
            sort_order: 1 ascending, -1 descending
        """
        ...

    async def find_by_id(self, submission_id: str) -> Optional[Submission]:
        """Return the submission, or None when missing or the id is malformed."""
        ...

    async def update_by_id(
        self, submission_id: str, changes: dict[str, Any]
    ) -> Optional[Submission]:
        """Merge changes, refresh updated_at, return the updated record or None."""
        ...

    async def delete_by_id(self, submission_id: str) -> bool:
        """Remove the record; True when a record was removed."""
        ...

    async def count(self) -> int:
        """Total number of stored submissions."""
        ...

    async def find_by_email(self, email: str) -> list[Submission]:
        """All submissions for a (normalized) email address, newest first."""
        ...

    async def health_check(self) -> bool:
        """True when the backing store is reachable."""
        ...
