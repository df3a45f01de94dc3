"""Learning context schemas."""

from kotoba.infrastructure.learning.schemas.course_progress_schemas import (
    CourseProgress,
    CourseProgressCreateRequest,
    CourseProgressListResponse,
    CourseProgressResponse,
    CourseProgressUpdateRequest,
    CourseSummarySchema,
)
from kotoba.infrastructure.learning.schemas.vocabulary_status_schemas import (
    VocabularyReviewRequest,
    VocabularyStatus,
    VocabularyStatusCreateRequest,
    VocabularyStatusDueResponse,
    VocabularyStatusListResponse,
    VocabularyStatusResponse,
    VocabularySummarySchema,
)

__all__ = [
    "CourseProgress",
    "CourseProgressCreateRequest",
    "CourseProgressListResponse",
    "CourseProgressResponse",
    "CourseProgressUpdateRequest",
    "CourseSummarySchema",
    "VocabularyReviewRequest",
    "VocabularyStatus",
    "VocabularyStatusCreateRequest",
    "VocabularyStatusDueResponse",
    "VocabularyStatusListResponse",
    "VocabularyStatusResponse",
    "VocabularySummarySchema",
]
