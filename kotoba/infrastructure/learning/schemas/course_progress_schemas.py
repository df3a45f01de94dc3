"""Pydantic schemas for course progress API request/response validation."""

from uuid import UUID

from pydantic import Field

from kotoba.application.learning.use_cases.dtos import CourseProgressWithCourse, CourseSummary
from kotoba.domain.learning.entities import ProgressStatus
from kotoba.infrastructure.common.schemas import (
    ApiModel,
    PaginatedResponse,
    PositiveId,
    SuccessResponse,
    Timestamp,
)


class CourseSummarySchema(ApiModel):
    """Course attributes embedded in a progress record."""

    id: int
    title: str
    description: str | None = None
    difficulty: str | None = None
    estimated_hours: int | None = None
    thumbnail_url: str | None = None
    is_published: bool = False

    @classmethod
    def from_summary(cls, summary: CourseSummary) -> "CourseSummarySchema":
        return cls(
            id=summary.id,
            title=summary.title,
            description=summary.description,
            difficulty=summary.difficulty,
            estimated_hours=summary.estimated_hours,
            thumbnail_url=summary.thumbnail_url,
            is_published=summary.is_published,
        )


class CourseProgress(ApiModel):
    """Schema for a course progress record."""

    id: UUID
    user_id: int
    course_id: int
    status: ProgressStatus
    progress_percentage: float = Field(..., ge=0, le=100)
    completed_lessons: int
    total_lessons: int
    started_at: Timestamp | None = None
    completed_at: Timestamp | None = None
    last_accessed_at: Timestamp | None = None
    created_at: Timestamp | None = None
    updated_at: Timestamp | None = None
    course: CourseSummarySchema | None = None

    @classmethod
    def from_dto(cls, dto: CourseProgressWithCourse) -> "CourseProgress":
        progress = dto.progress
        return cls(
            id=progress.id.value,
            user_id=progress.user_id.value,
            course_id=progress.course_id.value,
            status=progress.status,
            progress_percentage=float(progress.progress_percentage),
            completed_lessons=progress.completed_lessons,
            total_lessons=progress.total_lessons,
            started_at=progress.started_at,
            completed_at=progress.completed_at,
            last_accessed_at=progress.last_accessed_at,
            created_at=progress.created_at,
            updated_at=progress.updated_at,
            course=CourseSummarySchema.from_summary(dto.course) if dto.course else None,
        )


class CourseProgressCreateRequest(ApiModel):
    """Schema for enrolling in a course."""

    course_id: PositiveId = Field(..., description="ID of the course to enroll in")


class CourseProgressUpdateRequest(ApiModel):
    """Schema for reporting completed lessons."""

    completed_lessons: int = Field(..., description="Number of lessons completed so far")


CourseProgressResponse = SuccessResponse[CourseProgress]
CourseProgressListResponse = PaginatedResponse[CourseProgress]
