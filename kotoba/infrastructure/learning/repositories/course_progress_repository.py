"""Repository for CourseProgress domain entities."""

import logging
from collections.abc import Callable

from sqlalchemy import Select, Table, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kotoba.application.common.pagination import Pagination
from kotoba.application.learning.use_cases.dtos import (
    CourseProgressQuery,
    CourseProgressSortField,
    SortOrder,
)
from kotoba.domain.common.value_objects import CourseId, CourseProgressId, UserId
from kotoba.domain.learning.entities import CourseProgress
from kotoba.domain.learning.exceptions import AlreadyEnrolledError
from kotoba.infrastructure.learning.mappers.course_progress_mapper import CourseProgressMapper
from kotoba.models import UserCourseProgress as UserCourseProgressORM

logger = logging.getLogger(__name__)

UNIQUE_CONSTRAINT = "uq_user_course_progress_user_course"

SORT_COLUMNS = {
    CourseProgressSortField.LAST_ACCESSED_AT: UserCourseProgressORM.last_accessed_at,
    CourseProgressSortField.PROGRESS_PERCENTAGE: UserCourseProgressORM.progress_percentage,
    CourseProgressSortField.STARTED_AT: UserCourseProgressORM.started_at,
}


def select_progress_for_update(
    progress_id: CourseProgressId, user_id: UserId
) -> Select[tuple[UserCourseProgressORM]]:
    """SELECT of one owned progress row that takes an exclusive row lock."""
    return (
        select(UserCourseProgressORM)
        .where(
            UserCourseProgressORM.id == progress_id.value,
            UserCourseProgressORM.user_id == user_id.value,
        )
        .with_for_update()
        .execution_options(populate_existing=True)
    )


def is_unique_violation(error: IntegrityError, table: Table, constraint_name: str) -> bool:
    """Tell a duplicate of the named unique key apart from other integrity failures."""
    message = str(error.orig)
    if constraint_name in message:
        return True
    # SQLite reports the columns of the violated index instead of its name
    constraint = next(c for c in table.constraints if c.name == constraint_name)
    columns = ", ".join(f"{table.name}.{column.name}" for column in constraint.columns)
    return message == f"UNIQUE constraint failed: {columns}"


class CourseProgressRepository:
    """Repository for CourseProgress domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CourseProgressMapper()

    def find_by_id(self, progress_id: CourseProgressId, user_id: UserId) -> CourseProgress | None:
        """
        Find a progress record by ID with user ownership check.

        Args:
            progress_id: The progress record ID
            user_id: The user ID for ownership verification

        Returns:
            CourseProgress entity if found and owned by user, None otherwise
        """
        stmt = select(UserCourseProgressORM).where(
            UserCourseProgressORM.id == progress_id.value,
            UserCourseProgressORM.user_id == user_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user_and_course(
        self, user_id: UserId, course_id: CourseId
    ) -> CourseProgress | None:
        stmt = select(UserCourseProgressORM).where(
            UserCourseProgressORM.user_id == user_id.value,
            UserCourseProgressORM.course_id == course_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user(
        self, user_id: UserId, query: CourseProgressQuery, pagination: Pagination
    ) -> tuple[list[CourseProgress], int]:
        """
        List a user's enrollments.

        Args:
            user_id: Owner of the records
            query: Filters and ordering
            pagination: Page to fetch

        Returns:
            Tuple of (records on the page, total matching records)
        """
        conditions = [UserCourseProgressORM.user_id == user_id.value]
        if query.status is not None:
            conditions.append(UserCourseProgressORM.status == query.status.value)
        if query.course_id is not None:
            conditions.append(UserCourseProgressORM.course_id == query.course_id.value)

        count_stmt = select(func.count(UserCourseProgressORM.id)).where(*conditions)
        total = self.db.execute(count_stmt).scalar() or 0

        column = SORT_COLUMNS[query.sort_by]
        order = column.asc() if query.sort_order is SortOrder.ASC else column.desc()
        stmt = (
            select(UserCourseProgressORM)
            .where(*conditions)
            .order_by(order.nulls_last(), UserCourseProgressORM.created_at.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models], total

    def add(self, progress: CourseProgress) -> CourseProgress:
        """
        Insert a new progress record.

        Raises:
            AlreadyEnrolledError: If the user is already enrolled in the course
        """
        orm_model = self.mapper.to_orm(progress)
        try:
            self.db.add(orm_model)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # Lost a race against a concurrent enrollment
            if is_unique_violation(e, UserCourseProgressORM.__table__, UNIQUE_CONSTRAINT):
                raise AlreadyEnrolledError(progress.course_id.value) from e
            raise
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def update_with_lock(
        self,
        progress_id: CourseProgressId,
        user_id: UserId,
        apply: Callable[[CourseProgress], None],
    ) -> CourseProgress | None:
        """
        Lock one progress row, apply a change to it and commit.

        The row lock is held from the SELECT until the commit or rollback, so
        a concurrent call for the same row reads the state this call wrote.

        Args:
            progress_id: The progress record ID
            user_id: The user ID for ownership verification
            apply: Mutation of the domain entity; may raise to abort

        Returns:
            The updated entity, or None if not found or not owned by the user
        """
        try:
            orm_model = self.db.execute(
                select_progress_for_update(progress_id, user_id)
            ).scalar_one_or_none()
            if orm_model is None:
                self.db.rollback()
                return None

            progress = self.mapper.to_domain(orm_model)
            apply(progress)
            self.mapper.to_orm(progress, orm_model)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(orm_model)
        logger.debug(f"Updated course progress {progress_id} under row lock")
        return self.mapper.to_domain(orm_model)
