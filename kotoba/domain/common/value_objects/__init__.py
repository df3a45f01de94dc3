"""Common value objects shared across all domain modules."""

from .ids import CourseId, CourseProgressId, UserId, VocabularyId, VocabularyStatusId

__all__ = [
    "CourseId",
    "CourseProgressId",
    "UserId",
    "VocabularyId",
    "VocabularyStatusId",
]
