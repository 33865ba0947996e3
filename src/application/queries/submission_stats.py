"""
Submission Statistics Query

Responsibility:
    Reduce a list of submissions to aggregate counts and averages.

Architecture Notes:
    - Part of Application Layer (Queries - read side)
    - Pure function over entities; the pipeline loads the records
    - Time windows are UTC calendar windows

Windows:
    - today: created at or after 00:00 UTC today
    - this_week: created at or after 00:00 UTC seven days before today
    - this_month: created at or after 00:00 UTC on the first day of this month
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from src.application.models import SubmissionStats
from src.domain.submission.entities import Submission, SubmissionStatus
from src.shared.utils import utc_now


def compute_submission_stats(
    submissions: Iterable[Submission], now: Optional[datetime] = None
) -> SubmissionStats:
    """
    Compute statistics over submissions.

    Args:
        submissions: All stored submissions
        now: Reference time (default: current UTC time)

    Returns:
        SubmissionStats with window counts, status counts and the average
        processing time in whole milliseconds (0 when there are no records)

    Examples:
        >>> stats = compute_submission_stats([], now=datetime(2024, 5, 15, tzinfo=timezone.utc))
        >>> stats.total
        0
    """
    reference = now or utc_now()
    start_of_today = reference.replace(hour=0, minute=0, second=0, microsecond=0)
    start_of_week = start_of_today - timedelta(days=7)
    start_of_month = start_of_today.replace(day=1)

    stats = SubmissionStats()
    total_processing = 0

    for submission in submissions:
        stats.total += 1
        total_processing += submission.processing_time or 0

        created = submission.created_at
        if created >= start_of_today:
            stats.today += 1
        if created >= start_of_week:
            stats.this_week += 1
        if created >= start_of_month:
            stats.this_month += 1

        if submission.status == SubmissionStatus.COMPLETED:
            stats.completed += 1
        elif submission.status == SubmissionStatus.PENDING:
            stats.pending += 1
        elif submission.status == SubmissionStatus.FAILED:
            stats.failed += 1

    if stats.total:
        stats.average_processing_time = round(total_processing / stats.total)

    return stats
