"""Course catalog lookups used by the learning context."""

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from kotoba.application.learning.use_cases.dtos import CourseSummary
from kotoba.domain.common.value_objects import CourseId
from kotoba.models import Course as CourseORM
from kotoba.models import Lesson as LessonORM


class CourseCatalog:
    """Read-only access to courses and their lessons."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def exists(self, course_id: CourseId) -> bool:
        stmt = select(CourseORM.id).where(CourseORM.id == course_id.value)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def count_lessons(self, course_id: CourseId) -> int:
        """Count the lessons currently in a course."""
        stmt = select(func.count(LessonORM.id)).where(LessonORM.course_id == course_id.value)
        return self.db.execute(stmt).scalar() or 0

    def find_summaries(self, course_ids: Iterable[CourseId]) -> dict[int, CourseSummary]:
        """
        Load summaries for several courses in one query.

        Args:
            course_ids: Courses to load

        Returns:
            Mapping of course id to summary; unknown ids are left out
        """
        ids = {course_id.value for course_id in course_ids}
        if not ids:
            return {}

        stmt = select(CourseORM).where(CourseORM.id.in_(ids))
        return {
            course.id: CourseSummary(
                id=course.id,
                title=course.title,
                description=course.description,
                difficulty=course.difficulty,
                estimated_hours=course.estimated_hours,
                thumbnail_url=course.thumbnail_url,
                is_published=course.is_published,
            )
            for course in self.db.execute(stmt).scalars()
        }
