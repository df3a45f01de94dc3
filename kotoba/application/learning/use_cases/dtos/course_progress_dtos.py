"""DTOs for course progress use cases."""

from dataclasses import dataclass
from enum import StrEnum

from kotoba.application.learning.use_cases.dtos.catalog_dtos import CourseSummary
from kotoba.domain.common.value_objects import CourseId
from kotoba.domain.learning.entities import CourseProgress, ProgressStatus


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class CourseProgressSortField(StrEnum):
    """Columns a progress listing can be sorted by."""

    LAST_ACCESSED_AT = "last_accessed_at"
    PROGRESS_PERCENTAGE = "progress_percentage"
    STARTED_AT = "started_at"


@dataclass(frozen=True)
class CourseProgressQuery:
    """Filter and ordering for listing a user's enrollments."""

    status: ProgressStatus | None = None
    course_id: CourseId | None = None
    sort_by: CourseProgressSortField = CourseProgressSortField.LAST_ACCESSED_AT
    sort_order: SortOrder = SortOrder.DESC


@dataclass
class CourseProgressWithCourse:
    """DTO for a progress record with its course summary."""

    progress: CourseProgress
    course: CourseSummary | None
