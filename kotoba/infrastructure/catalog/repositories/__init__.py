"""Catalog repositories."""

from kotoba.infrastructure.catalog.repositories.course_catalog import CourseCatalog
from kotoba.infrastructure.catalog.repositories.vocabulary_catalog import VocabularyCatalog

__all__ = ["CourseCatalog", "VocabularyCatalog"]
