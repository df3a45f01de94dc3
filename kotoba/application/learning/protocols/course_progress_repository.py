"""Protocol for CourseProgress repository in learning context."""

from collections.abc import Callable
from typing import Protocol

from kotoba.application.common.pagination import Pagination
from kotoba.application.learning.use_cases.dtos import CourseProgressQuery
from kotoba.domain.common.value_objects import CourseId, CourseProgressId, UserId
from kotoba.domain.learning.entities import CourseProgress


class CourseProgressRepositoryProtocol(Protocol):
    """Protocol for course progress persistence."""

    def find_by_id(self, progress_id: CourseProgressId, user_id: UserId) -> CourseProgress | None:
        """
        Find a progress record by ID with user ownership check.

        Args:
            progress_id: The progress record ID
            user_id: The user ID for ownership verification

        Returns:
            CourseProgress entity if found and owned by user, None otherwise
        """
        ...

    def find_by_user_and_course(
        self, user_id: UserId, course_id: CourseId
    ) -> CourseProgress | None:
        """Find the enrollment of a user in a course."""
        ...

    def find_by_user(
        self, user_id: UserId, query: CourseProgressQuery, pagination: Pagination
    ) -> tuple[list[CourseProgress], int]:
        """
        List a user's enrollments.

        Args:
            user_id: Owner of the records
            query: Filters and ordering; NULL sort values are placed last
            pagination: Page to fetch

        Returns:
            Tuple of (records on the page, total matching records)
        """
        ...

    def add(self, progress: CourseProgress) -> CourseProgress:
        """
        Insert a new progress record.

        Raises:
            AlreadyEnrolledError: If a record for (user, course) already exists
        """
        ...

    def update_with_lock(
        self,
        progress_id: CourseProgressId,
        user_id: UserId,
        apply: Callable[[CourseProgress], None],
    ) -> CourseProgress | None:
        """
        Run a read-modify-write on one record under an exclusive row lock.

        The record is read with the lock held, passed to ``apply`` and written
        back in the same transaction. Concurrent callers for the same record
        wait for the lock and then see the committed result. If ``apply``
        raises, nothing is written and the error propagates.

        Returns:
            The updated entity, or None if no record is owned by the user
        """
        ...
