"""Mapper for CourseProgress ORM ↔ Domain conversion."""

from kotoba.domain.common.value_objects import CourseId, CourseProgressId, UserId
from kotoba.domain.learning.entities import CourseProgress, ProgressStatus
from kotoba.models import UserCourseProgress as UserCourseProgressORM


class CourseProgressMapper:
    """Mapper for CourseProgress ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserCourseProgressORM) -> CourseProgress:
        """Convert ORM model to domain entity."""
        return CourseProgress.create_with_id(
            id=CourseProgressId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            course_id=CourseId(orm_model.course_id),
            status=ProgressStatus(orm_model.status),
            progress_percentage=orm_model.progress_percentage,
            completed_lessons=orm_model.completed_lessons,
            total_lessons=orm_model.total_lessons,
            started_at=orm_model.started_at,
            completed_at=orm_model.completed_at,
            last_accessed_at=orm_model.last_accessed_at,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(
        self, domain_entity: CourseProgress, orm_model: UserCourseProgressORM | None = None
    ) -> UserCourseProgressORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Only the counters and their derived fields change after enrollment
            orm_model.status = domain_entity.status.value
            orm_model.progress_percentage = domain_entity.progress_percentage
            orm_model.completed_lessons = domain_entity.completed_lessons
            orm_model.started_at = domain_entity.started_at
            orm_model.completed_at = domain_entity.completed_at
            orm_model.last_accessed_at = domain_entity.last_accessed_at
            return orm_model

        return UserCourseProgressORM(
            id=domain_entity.id.value,
            user_id=domain_entity.user_id.value,
            course_id=domain_entity.course_id.value,
            status=domain_entity.status.value,
            progress_percentage=domain_entity.progress_percentage,
            completed_lessons=domain_entity.completed_lessons,
            total_lessons=domain_entity.total_lessons,
            started_at=domain_entity.started_at,
            completed_at=domain_entity.completed_at,
            last_accessed_at=domain_entity.last_accessed_at,
        )
