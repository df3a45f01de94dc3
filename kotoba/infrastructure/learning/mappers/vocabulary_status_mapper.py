"""Mapper for VocabularyStatus ORM ↔ Domain conversion."""

from kotoba.domain.common.value_objects import UserId, VocabularyId, VocabularyStatusId
from kotoba.domain.learning.entities import LearningStatus, VocabularyStatus
from kotoba.models import UserVocabularyStatus as UserVocabularyStatusORM


class VocabularyStatusMapper:
    """Mapper for VocabularyStatus ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserVocabularyStatusORM) -> VocabularyStatus:
        """Convert ORM model to domain entity."""
        return VocabularyStatus.create_with_id(
            id=VocabularyStatusId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            vocabulary_id=VocabularyId(orm_model.vocabulary_id),
            status=LearningStatus(orm_model.status),
            repetitions=orm_model.repetitions,
            last_reviewed_at=orm_model.last_reviewed_at,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(
        self,
        domain_entity: VocabularyStatus,
        orm_model: UserVocabularyStatusORM | None = None,
    ) -> UserVocabularyStatusORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            orm_model.status = domain_entity.status.value
            orm_model.repetitions = domain_entity.repetitions
            orm_model.last_reviewed_at = domain_entity.last_reviewed_at
            return orm_model

        return UserVocabularyStatusORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            user_id=domain_entity.user_id.value,
            vocabulary_id=domain_entity.vocabulary_id.value,
            status=domain_entity.status.value,
            repetitions=domain_entity.repetitions,
            last_reviewed_at=domain_entity.last_reviewed_at,
        )
