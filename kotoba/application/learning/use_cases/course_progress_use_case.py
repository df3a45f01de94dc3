"""Use case for course enrollment progress."""

from datetime import UTC, datetime
from uuid import UUID

import structlog

from kotoba.application.common.pagination import PaginatedResult, Pagination
from kotoba.application.learning.protocols.course_catalog import CourseCatalogProtocol
from kotoba.application.learning.protocols.course_progress_repository import (
    CourseProgressRepositoryProtocol,
)
from kotoba.application.learning.use_cases.dtos import (
    CourseProgressQuery,
    CourseProgressSortField,
    CourseProgressWithCourse,
    SortOrder,
)
from kotoba.domain.common.value_objects import CourseId, CourseProgressId, UserId
from kotoba.domain.learning.entities import CourseProgress, ProgressStatus
from kotoba.domain.learning.exceptions import (
    AlreadyEnrolledError,
    CourseProgressNotFoundError,
    InvalidCourseReferenceError,
)

logger = structlog.get_logger(__name__)


class CourseProgressUseCase:
    """Use case for enrolling in courses and tracking completed lessons."""

    def __init__(
        self,
        progress_repository: CourseProgressRepositoryProtocol,
        course_catalog: CourseCatalogProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.progress_repository = progress_repository
        self.course_catalog = course_catalog

    def enroll(self, user_id: int, course_id: int) -> CourseProgressWithCourse:
        """
        Enroll a user in a course.

        The course's current lesson count is stored on the record and is not
        refreshed when lessons are later added or removed.

        Args:
            user_id: ID of the user
            course_id: ID of the course

        Returns:
            The new progress record with its course summary

        Raises:
            InvalidCourseReferenceError: If the course does not exist
            AlreadyEnrolledError: If the user is already enrolled
        """
        user_id_vo = UserId(user_id)
        course_id_vo = CourseId(course_id)

        if not self.course_catalog.exists(course_id_vo):
            raise InvalidCourseReferenceError(course_id)

        if self.progress_repository.find_by_user_and_course(user_id_vo, course_id_vo):
            raise AlreadyEnrolledError(course_id)

        total_lessons = self.course_catalog.count_lessons(course_id_vo)
        progress = CourseProgress.create(
            user_id=user_id_vo, course_id=course_id_vo, total_lessons=total_lessons
        )
        progress = self.progress_repository.add(progress)

        logger.info(
            "enrolled_in_course",
            progress_id=str(progress.id),
            user_id=user_id,
            course_id=course_id,
            total_lessons=total_lessons,
        )
        return self._with_courses([progress])[0]

    def get_progress_list(
        self,
        user_id: int,
        page: int | None = None,
        limit: int | None = None,
        status: ProgressStatus | None = None,
        course_id: int | None = None,
        sort_by: CourseProgressSortField = CourseProgressSortField.LAST_ACCESSED_AT,
        sort_order: SortOrder = SortOrder.DESC,
    ) -> PaginatedResult[CourseProgressWithCourse]:
        """
        List a user's enrollments.

        Raises:
            InvalidCourseReferenceError: If filtering by a course that does not exist
        """
        course_id_vo = None
        if course_id is not None:
            course_id_vo = CourseId(course_id)
            if not self.course_catalog.exists(course_id_vo):
                raise InvalidCourseReferenceError(course_id)

        pagination = Pagination.clamped(page, limit)
        query = CourseProgressQuery(
            status=status, course_id=course_id_vo, sort_by=sort_by, sort_order=sort_order
        )
        records, total = self.progress_repository.find_by_user(UserId(user_id), query, pagination)

        return PaginatedResult(
            items=self._with_courses(records), total=total, pagination=pagination
        )

    def get_progress(self, progress_id: UUID, user_id: int) -> CourseProgressWithCourse:
        """
        Get one enrollment of the user.

        Raises:
            CourseProgressNotFoundError: If the record does not exist or is not the user's
        """
        progress = self.progress_repository.find_by_id(
            CourseProgressId(progress_id), UserId(user_id)
        )
        if progress is None:
            raise CourseProgressNotFoundError(progress_id)
        return self._with_courses([progress])[0]

    def update_progress(
        self, progress_id: UUID, user_id: int, completed_lessons: int
    ) -> CourseProgressWithCourse:
        """
        Record how many lessons of the course the user has completed.

        Runs as one locked read-modify-write so that concurrent updates of the
        same enrollment are applied one after the other.

        Args:
            progress_id: ID of the progress record
            user_id: ID of the user
            completed_lessons: New number of completed lessons

        Returns:
            The updated progress record with its course summary

        Raises:
            CourseProgressNotFoundError: If the record does not exist or is not the user's
            CannotUpdateCompletedProgressError: If the course is already completed
            InvalidCompletedLessonsError: If completed_lessons is negative
            CompletedLessonsExceedTotalError: If completed_lessons exceeds total lessons
        """

        def apply(progress: CourseProgress) -> None:
            progress.record_completed_lessons(completed_lessons, datetime.now(UTC))

        progress = self.progress_repository.update_with_lock(
            CourseProgressId(progress_id), UserId(user_id), apply
        )
        if progress is None:
            raise CourseProgressNotFoundError(progress_id)

        logger.info(
            "course_progress_updated",
            progress_id=str(progress_id),
            user_id=user_id,
            completed_lessons=progress.completed_lessons,
            status=progress.status.value,
        )
        return self._with_courses([progress])[0]

    def _with_courses(self, records: list[CourseProgress]) -> list[CourseProgressWithCourse]:
        summaries = self.course_catalog.find_summaries({p.course_id for p in records})
        return [
            CourseProgressWithCourse(progress=p, course=summaries.get(p.course_id.value))
            for p in records
        ]
