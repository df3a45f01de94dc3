"""Repository for VocabularyStatus domain entities."""

from collections.abc import Callable

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kotoba.application.common.pagination import Pagination
from kotoba.application.learning.use_cases.dtos import (
    SortOrder,
    VocabularyStatusQuery,
    VocabularyStatusSortField,
)
from kotoba.domain.common.value_objects import UserId, VocabularyId, VocabularyStatusId
from kotoba.domain.learning.entities import LearningStatus, VocabularyStatus
from kotoba.domain.learning.exceptions import AlreadyLearningError
from kotoba.infrastructure.learning.mappers.vocabulary_status_mapper import (
    VocabularyStatusMapper,
)
from kotoba.infrastructure.learning.repositories.course_progress_repository import (
    is_unique_violation,
)
from kotoba.models import UserVocabularyStatus as UserVocabularyStatusORM

UNIQUE_CONSTRAINT = "uq_user_vocabulary_status_user_vocabulary"

SORT_COLUMNS = {
    VocabularyStatusSortField.ID: UserVocabularyStatusORM.id,
    VocabularyStatusSortField.CREATED_AT: UserVocabularyStatusORM.created_at,
    VocabularyStatusSortField.NEXT_REVIEW_DATE: UserVocabularyStatusORM.last_reviewed_at,
    VocabularyStatusSortField.STATUS: UserVocabularyStatusORM.status,
}


def select_status_for_update(
    user_id: UserId, vocabulary_id: VocabularyId
) -> Select[tuple[UserVocabularyStatusORM]]:
    """SELECT of one owned status row that takes an exclusive row lock."""
    return (
        select(UserVocabularyStatusORM)
        .where(
            UserVocabularyStatusORM.user_id == user_id.value,
            UserVocabularyStatusORM.vocabulary_id == vocabulary_id.value,
        )
        .with_for_update()
        .execution_options(populate_existing=True)
    )


class VocabularyStatusRepository:
    """Repository for VocabularyStatus domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = VocabularyStatusMapper()

    def find_by_id(
        self, status_id: VocabularyStatusId, user_id: UserId
    ) -> VocabularyStatus | None:
        """
        Find a learning status by ID with user ownership check.

        Args:
            status_id: The status ID
            user_id: The user ID for ownership verification

        Returns:
            VocabularyStatus entity if found and owned by user, None otherwise
        """
        stmt = select(UserVocabularyStatusORM).where(
            UserVocabularyStatusORM.id == status_id.value,
            UserVocabularyStatusORM.user_id == user_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user_and_vocabulary(
        self, user_id: UserId, vocabulary_id: VocabularyId
    ) -> VocabularyStatus | None:
        stmt = select(UserVocabularyStatusORM).where(
            UserVocabularyStatusORM.user_id == user_id.value,
            UserVocabularyStatusORM.vocabulary_id == vocabulary_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user(
        self, user_id: UserId, query: VocabularyStatusQuery, pagination: Pagination
    ) -> tuple[list[VocabularyStatus], int]:
        """
        List a user's learning statuses.

        Sorting by next review date puts never-reviewed items first when
        ascending and last when descending.

        Returns:
            Tuple of (statuses on the page, total matching statuses)
        """
        conditions = [UserVocabularyStatusORM.user_id == user_id.value]
        if query.status is not None:
            conditions.append(UserVocabularyStatusORM.status == query.status.value)

        count_stmt = select(func.count(UserVocabularyStatusORM.id)).where(*conditions)
        total = self.db.execute(count_stmt).scalar() or 0

        column = SORT_COLUMNS[query.sort_by]
        if query.sort_order is SortOrder.ASC:
            order = column.asc().nulls_first()
            tie_breaker = UserVocabularyStatusORM.id.asc()
        else:
            order = column.desc().nulls_last()
            tie_breaker = UserVocabularyStatusORM.id.desc()

        stmt = (
            select(UserVocabularyStatusORM)
            .where(*conditions)
            .order_by(order, tie_breaker)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models], total

    def find_due_for_review(self, user_id: UserId) -> list[VocabularyStatus]:
        """
        Get every status of the user that is still being learned.

        Returns:
            Statuses ordered by last review, never-reviewed first, then by id
        """
        stmt = (
            select(UserVocabularyStatusORM)
            .where(
                UserVocabularyStatusORM.user_id == user_id.value,
                UserVocabularyStatusORM.status == LearningStatus.LEARNING.value,
            )
            .order_by(
                UserVocabularyStatusORM.last_reviewed_at.asc().nulls_first(),
                UserVocabularyStatusORM.id.asc(),
            )
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def add(self, status: VocabularyStatus) -> VocabularyStatus:
        """
        Insert a new learning status.

        Raises:
            AlreadyLearningError: If the user already learns the vocabulary item
        """
        orm_model = self.mapper.to_orm(status)
        try:
            self.db.add(orm_model)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if is_unique_violation(e, UserVocabularyStatusORM.__table__, UNIQUE_CONSTRAINT):
                raise AlreadyLearningError(status.vocabulary_id.value) from e
            raise
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def update_with_lock(
        self,
        user_id: UserId,
        vocabulary_id: VocabularyId,
        apply: Callable[[VocabularyStatus], None],
    ) -> VocabularyStatus | None:
        """
        Lock the user's status row for a vocabulary item, apply a change and commit.

        Returns:
            The updated entity, or None if the user has no status for the item
        """
        try:
            orm_model = self.db.execute(
                select_status_for_update(user_id, vocabulary_id)
            ).scalar_one_or_none()
            if orm_model is None:
                self.db.rollback()
                return None

            status = self.mapper.to_domain(orm_model)
            apply(status)
            self.mapper.to_orm(status, orm_model)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
