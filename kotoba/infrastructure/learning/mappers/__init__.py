"""Mappers for learning context."""

from kotoba.infrastructure.learning.mappers.course_progress_mapper import CourseProgressMapper
from kotoba.infrastructure.learning.mappers.vocabulary_status_mapper import (
    VocabularyStatusMapper,
)

__all__ = ["CourseProgressMapper", "VocabularyStatusMapper"]
