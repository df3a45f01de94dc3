"""
Course enrollment progress entity.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from typing import assert_never

from kotoba.domain.common.entity import Entity
from kotoba.domain.common.exceptions import InvariantViolationError
from kotoba.domain.common.value_objects import CourseId, CourseProgressId, UserId
from kotoba.domain.learning.exceptions import (
    CannotUpdateCompletedProgressError,
    CompletedLessonsExceedTotalError,
    InvalidCompletedLessonsError,
)

PERCENTAGE_QUANTUM = Decimal("0.01")
ZERO_PERCENT = Decimal("0.00")


class ProgressStatus(StrEnum):
    """Where a learner stands in a course."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def calculate_percentage(completed_lessons: int, total_lessons: int) -> Decimal:
    """Share of completed lessons, in percent with two decimals."""
    if total_lessons <= 0:
        return ZERO_PERCENT
    ratio = Decimal(completed_lessons) * 100 / Decimal(total_lessons)
    return ratio.quantize(PERCENTAGE_QUANTUM, rounding=ROUND_HALF_UP)


def derive_status(completed_lessons: int, total_lessons: int) -> ProgressStatus:
    """Status for a (completed, total) pair. COMPLETED needs at least one lesson."""
    if completed_lessons <= 0:
        return ProgressStatus.NOT_STARTED
    if completed_lessons < total_lessons:
        return ProgressStatus.IN_PROGRESS
    return ProgressStatus.COMPLETED


@dataclass(eq=False)
class CourseProgress(Entity[CourseProgressId]):
    """
    A learner's enrollment in one course.

    Business Rules:
    - total_lessons is a snapshot taken at enrollment, never refreshed
    - 0 <= completed_lessons <= total_lessons
    - status and progress_percentage are derived from the two lesson counters
    - a completed enrollment is final
    """

    id: CourseProgressId
    user_id: UserId
    course_id: CourseId
    total_lessons: int
    completed_lessons: int = 0
    status: ProgressStatus = ProgressStatus.NOT_STARTED
    progress_percentage: Decimal = ZERO_PERCENT
    started_at: datetime | None = None
    completed_at: datetime | None = None
    last_accessed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.total_lessons < 0:
            raise InvariantViolationError("CourseProgress", "total_lessons must be non-negative")
        if not 0 <= self.completed_lessons <= self.total_lessons:
            raise InvariantViolationError(
                "CourseProgress", "completed_lessons must be within [0, total_lessons]"
            )

    @property
    def is_completed(self) -> bool:
        return self.status is ProgressStatus.COMPLETED

    def ensure_can_record(self, completed_lessons: int) -> None:
        """
        Check that a lesson count may be recorded.

        Raises:
            CannotUpdateCompletedProgressError: If the course is already completed
            InvalidCompletedLessonsError: If the count is negative
            CompletedLessonsExceedTotalError: If the count exceeds the snapshot total
        """
        match self.status:
            case ProgressStatus.COMPLETED:
                raise CannotUpdateCompletedProgressError()
            case ProgressStatus.NOT_STARTED | ProgressStatus.IN_PROGRESS:
                pass
            case _:
                assert_never(self.status)

        if completed_lessons < 0:
            raise InvalidCompletedLessonsError(completed_lessons)
        if completed_lessons > self.total_lessons:
            raise CompletedLessonsExceedTotalError(completed_lessons, self.total_lessons)

    def record_completed_lessons(self, completed_lessons: int, now: datetime) -> None:
        """
        Apply a lesson-completion report.

        started_at and completed_at are stamped only when the status actually
        moves; last_accessed_at is stamped on every successful call.

        Args:
            completed_lessons: New number of completed lessons
            now: Timestamp of the update
        """
        self.ensure_can_record(completed_lessons)

        previous_status = self.status
        new_status = derive_status(completed_lessons, self.total_lessons)

        self.completed_lessons = completed_lessons
        self.progress_percentage = calculate_percentage(completed_lessons, self.total_lessons)
        self.status = new_status

        if (
            previous_status is ProgressStatus.NOT_STARTED
            and completed_lessons > 0
            and self.started_at is None
        ):
            self.started_at = now
        if new_status is ProgressStatus.COMPLETED and previous_status is not ProgressStatus.COMPLETED:
            self.completed_at = now
        self.last_accessed_at = now

    @classmethod
    def create(cls, user_id: UserId, course_id: CourseId, total_lessons: int) -> "CourseProgress":
        """Enroll a user in a course, snapshotting the course's lesson count."""
        return cls(
            id=CourseProgressId.generate(),
            user_id=user_id,
            course_id=course_id,
            total_lessons=total_lessons,
        )

    @classmethod
    def create_with_id(
        cls,
        id: CourseProgressId,
        user_id: UserId,
        course_id: CourseId,
        status: ProgressStatus,
        progress_percentage: Decimal,
        completed_lessons: int,
        total_lessons: int,
        started_at: datetime | None,
        completed_at: datetime | None,
        last_accessed_at: datetime | None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "CourseProgress":
        """Reconstitute a progress record from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            course_id=course_id,
            status=status,
            progress_percentage=progress_percentage,
            completed_lessons=completed_lessons,
            total_lessons=total_lessons,
            started_at=started_at,
            completed_at=completed_at,
            last_accessed_at=last_accessed_at,
            created_at=created_at,
            updated_at=updated_at,
        )
