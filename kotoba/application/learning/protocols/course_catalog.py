"""Protocol for read access to the course catalog."""

from collections.abc import Iterable
from typing import Protocol

from kotoba.application.learning.use_cases.dtos import CourseSummary
from kotoba.domain.common.value_objects import CourseId


class CourseCatalogProtocol(Protocol):
    """Read-only view of courses and their lessons."""

    def exists(self, course_id: CourseId) -> bool:
        """Check whether a course exists."""
        ...

    def count_lessons(self, course_id: CourseId) -> int:
        """Count the lessons currently in a course."""
        ...

    def find_summaries(self, course_ids: Iterable[CourseId]) -> dict[int, CourseSummary]:
        """
        Load summaries for several courses at once.

        Returns:
            Mapping of course id to summary; unknown ids are left out
        """
        ...
