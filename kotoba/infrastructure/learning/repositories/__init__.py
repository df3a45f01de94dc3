"""Repositories for learning context."""

from kotoba.infrastructure.learning.repositories.course_progress_repository import (
    CourseProgressRepository,
)
from kotoba.infrastructure.learning.repositories.vocabulary_status_repository import (
    VocabularyStatusRepository,
)

__all__ = ["CourseProgressRepository", "VocabularyStatusRepository"]
