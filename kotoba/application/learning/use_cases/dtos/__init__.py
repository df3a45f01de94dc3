"""DTOs for learning use cases."""

from kotoba.application.learning.use_cases.dtos.catalog_dtos import CourseSummary, VocabularySummary
from kotoba.application.learning.use_cases.dtos.course_progress_dtos import (
    CourseProgressQuery,
    CourseProgressSortField,
    CourseProgressWithCourse,
    SortOrder,
)
from kotoba.application.learning.use_cases.dtos.vocabulary_status_dtos import (
    VocabularyStatusQuery,
    VocabularyStatusSortField,
    VocabularyStatusWithVocabulary,
)

__all__ = [
    "CourseProgressQuery",
    "CourseProgressSortField",
    "CourseProgressWithCourse",
    "CourseSummary",
    "SortOrder",
    "VocabularyStatusQuery",
    "VocabularyStatusSortField",
    "VocabularyStatusWithVocabulary",
    "VocabularySummary",
]
