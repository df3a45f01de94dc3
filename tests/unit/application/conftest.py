"""In-memory fakes for use case tests."""

import copy
import threading
from collections.abc import Callable, Iterable

import pytest

from kotoba.application.common.pagination import Pagination
from kotoba.application.learning.use_cases.course_progress_use_case import CourseProgressUseCase
from kotoba.application.learning.use_cases.dtos import (
    CourseProgressQuery,
    CourseSummary,
    VocabularyStatusQuery,
    VocabularySummary,
)
from kotoba.application.learning.use_cases.vocabulary_review_use_case import (
    VocabularyReviewUseCase,
)
from kotoba.domain.common.value_objects import (
    CourseId,
    CourseProgressId,
    UserId,
    VocabularyId,
    VocabularyStatusId,
)
from kotoba.domain.learning.entities import CourseProgress, LearningStatus, VocabularyStatus
from kotoba.domain.learning.exceptions import AlreadyEnrolledError, AlreadyLearningError


class FakeCourseCatalog:
    def __init__(self) -> None:
        self.courses: dict[int, CourseSummary] = {}
        self.lesson_counts: dict[int, int] = {}

    def add_course(self, course_id: int, lessons: int, title: str = "Course") -> None:
        self.courses[course_id] = CourseSummary(id=course_id, title=title, is_published=True)
        self.lesson_counts[course_id] = lessons

    def exists(self, course_id: CourseId) -> bool:
        return course_id.value in self.courses

    def count_lessons(self, course_id: CourseId) -> int:
        return self.lesson_counts.get(course_id.value, 0)

    def find_summaries(self, course_ids: Iterable[CourseId]) -> dict[int, CourseSummary]:
        return {c.value: self.courses[c.value] for c in course_ids if c.value in self.courses}


class FakeVocabularyCatalog:
    def __init__(self) -> None:
        self.items: dict[int, VocabularySummary] = {}

    def add_vocabulary(self, vocabulary_id: int, word: str = "word") -> None:
        self.items[vocabulary_id] = VocabularySummary(id=vocabulary_id, word=word)

    def exists(self, vocabulary_id: VocabularyId) -> bool:
        return vocabulary_id.value in self.items

    def find_summaries(
        self, vocabulary_ids: Iterable[VocabularyId]
    ) -> dict[int, VocabularySummary]:
        return {v.value: self.items[v.value] for v in vocabulary_ids if v.value in self.items}


class FakeCourseProgressRepository:
    """Stores copies of entities; update_with_lock is serialized by a mutex."""

    def __init__(self) -> None:
        self.records: dict[CourseProgressId, CourseProgress] = {}
        self.lock = threading.Lock()
        self.observed_before_update: list[int] = []

    def find_by_id(self, progress_id: CourseProgressId, user_id: UserId) -> CourseProgress | None:
        record = self.records.get(progress_id)
        if record is None or record.user_id != user_id:
            return None
        return copy.deepcopy(record)

    def find_by_user_and_course(
        self, user_id: UserId, course_id: CourseId
    ) -> CourseProgress | None:
        for record in self.records.values():
            if record.user_id == user_id and record.course_id == course_id:
                return copy.deepcopy(record)
        return None

    def find_by_user(
        self, user_id: UserId, query: CourseProgressQuery, pagination: Pagination
    ) -> tuple[list[CourseProgress], int]:
        matching = [
            r
            for r in self.records.values()
            if r.user_id == user_id
            and (query.status is None or r.status is query.status)
            and (query.course_id is None or r.course_id == query.course_id)
        ]
        page = matching[pagination.offset : pagination.offset + pagination.limit]
        return [copy.deepcopy(r) for r in page], len(matching)

    def add(self, progress: CourseProgress) -> CourseProgress:
        if self.find_by_user_and_course(progress.user_id, progress.course_id):
            raise AlreadyEnrolledError(progress.course_id.value)
        self.records[progress.id] = copy.deepcopy(progress)
        return copy.deepcopy(progress)

    def update_with_lock(
        self,
        progress_id: CourseProgressId,
        user_id: UserId,
        apply: Callable[[CourseProgress], None],
    ) -> CourseProgress | None:
        with self.lock:
            record = self.find_by_id(progress_id, user_id)
            if record is None:
                return None
            self.observed_before_update.append(record.completed_lessons)
            apply(record)
            self.records[progress_id] = copy.deepcopy(record)
            return record


class FakeVocabularyStatusRepository:
    def __init__(self) -> None:
        self.records: dict[int, VocabularyStatus] = {}
        self.lock = threading.Lock()
        self._next_id = 1

    def find_by_id(
        self, status_id: VocabularyStatusId, user_id: UserId
    ) -> VocabularyStatus | None:
        record = self.records.get(status_id.value)
        if record is None or record.user_id != user_id:
            return None
        return copy.deepcopy(record)

    def find_by_user_and_vocabulary(
        self, user_id: UserId, vocabulary_id: VocabularyId
    ) -> VocabularyStatus | None:
        for record in self.records.values():
            if record.user_id == user_id and record.vocabulary_id == vocabulary_id:
                return copy.deepcopy(record)
        return None

    def find_by_user(
        self, user_id: UserId, query: VocabularyStatusQuery, pagination: Pagination
    ) -> tuple[list[VocabularyStatus], int]:
        matching = [
            r
            for r in self.records.values()
            if r.user_id == user_id and (query.status is None or r.status is query.status)
        ]
        page = matching[pagination.offset : pagination.offset + pagination.limit]
        return [copy.deepcopy(r) for r in page], len(matching)

    def find_due_for_review(self, user_id: UserId) -> list[VocabularyStatus]:
        due = [
            r
            for r in self.records.values()
            if r.user_id == user_id and r.status is LearningStatus.LEARNING
        ]
        due.sort(key=lambda r: (r.last_reviewed_at is not None, r.last_reviewed_at, r.id.value))
        return [copy.deepcopy(r) for r in due]

    def add(self, status: VocabularyStatus) -> VocabularyStatus:
        if self.find_by_user_and_vocabulary(status.user_id, status.vocabulary_id):
            raise AlreadyLearningError(status.vocabulary_id.value)
        status.id = VocabularyStatusId(self._next_id)
        self._next_id += 1
        self.records[status.id.value] = copy.deepcopy(status)
        return copy.deepcopy(status)

    def update_with_lock(
        self,
        user_id: UserId,
        vocabulary_id: VocabularyId,
        apply: Callable[[VocabularyStatus], None],
    ) -> VocabularyStatus | None:
        with self.lock:
            record = self.find_by_user_and_vocabulary(user_id, vocabulary_id)
            if record is None:
                return None
            apply(record)
            self.records[record.id.value] = copy.deepcopy(record)
            return record


@pytest.fixture
def course_catalog() -> FakeCourseCatalog:
    catalog = FakeCourseCatalog()
    catalog.add_course(1, lessons=10, title="Japanese for Beginners")
    catalog.add_course(2, lessons=0, title="Coming Soon")
    return catalog


@pytest.fixture
def progress_repository() -> FakeCourseProgressRepository:
    return FakeCourseProgressRepository()


@pytest.fixture
def course_progress_use_case(
    progress_repository: FakeCourseProgressRepository, course_catalog: FakeCourseCatalog
) -> CourseProgressUseCase:
    return CourseProgressUseCase(
        progress_repository=progress_repository, course_catalog=course_catalog
    )


@pytest.fixture
def vocabulary_catalog() -> FakeVocabularyCatalog:
    catalog = FakeVocabularyCatalog()
    catalog.add_vocabulary(1, word="猫")
    catalog.add_vocabulary(2, word="犬")
    catalog.add_vocabulary(3, word="鳥")
    return catalog


@pytest.fixture
def status_repository() -> FakeVocabularyStatusRepository:
    return FakeVocabularyStatusRepository()


@pytest.fixture
def vocabulary_review_use_case(
    status_repository: FakeVocabularyStatusRepository,
    vocabulary_catalog: FakeVocabularyCatalog,
) -> VocabularyReviewUseCase:
    return VocabularyReviewUseCase(
        status_repository=status_repository, vocabulary_catalog=vocabulary_catalog
    )
