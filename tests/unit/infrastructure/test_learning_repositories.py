"""Tests for the SQLAlchemy learning repositories."""

import sqlite3
import threading
from collections.abc import Iterator
import time
import uuid
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from kotoba import models
from kotoba.application.common.pagination import Pagination
from kotoba.application.learning.use_cases.dtos import (
    CourseProgressQuery,
    CourseProgressSortField,
    SortOrder,
    VocabularyStatusQuery,
    VocabularyStatusSortField,
)
from kotoba.database import Base, enable_sqlite_write_locking
from kotoba.domain.common.value_objects import (
    CourseId,
    CourseProgressId,
    UserId,
    VocabularyId,
)
from kotoba.domain.learning.entities import (
    CourseProgress,
    LearningStatus,
    ProgressStatus,
    VocabularyStatus,
    calculate_percentage,
    derive_status,
)
from kotoba.domain.learning.exceptions import AlreadyEnrolledError, AlreadyLearningError
from kotoba.infrastructure.learning.repositories import (
    CourseProgressRepository,
    VocabularyStatusRepository,
)
from kotoba.infrastructure.learning.repositories.course_progress_repository import (
    is_unique_violation,
    select_progress_for_update,
)
from kotoba.infrastructure.learning.repositories.vocabulary_status_repository import (
    select_status_for_update,
)

BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def _enroll(db: Session, user: models.User, course: models.Course, total: int = 10):
    progress = CourseProgress.create(UserId(user.id), CourseId(course.id), total)
    return CourseProgressRepository(db).add(progress)


@pytest.fixture
def locking_session_factory(tmp_path: Path) -> Iterator[sessionmaker[Session]]:
    """Sessions on a file-backed SQLite database whose transactions take the write lock."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'locking.db'}", connect_args={"check_same_thread": False}
    )
    enable_sqlite_write_locking(engine)
    Base.metadata.create_all(engine)
    yield sessionmaker(autoflush=False, bind=engine)
    engine.dispose()


def _race(*targets) -> None:
    """Start the targets together in threads and wait for all of them."""
    barrier = threading.Barrier(len(targets))

    def run(target) -> None:
        barrier.wait()
        target()

    threads = [threading.Thread(target=run, args=(target,)) for target in targets]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)


class TestRowLocking:
    def test_progress_update_locks_row_on_postgres(self) -> None:
        stmt = select_progress_for_update(CourseProgressId(uuid.uuid4()), UserId(1))

        sql = str(stmt.compile(dialect=postgresql.dialect()))

        assert "FOR UPDATE" in sql
        assert "user_course_progress.user_id" in sql

    def test_review_locks_row_on_postgres(self) -> None:
        stmt = select_status_for_update(UserId(1), VocabularyId(1))

        sql = str(stmt.compile(dialect=postgresql.dialect()))

        assert "FOR UPDATE" in sql

    def test_concurrent_updates_read_committed_state(
        self, locking_session_factory: sessionmaker[Session]
    ) -> None:
        """Two racing updates on one row run one after the other on a real database."""
        with locking_session_factory() as setup:
            user = models.User(email="racer@example.com")
            course = models.Course(title="Race", is_published=True)
            setup.add_all([user, course])
            setup.commit()
            progress = _enroll(setup, user, course)
            user_id = UserId(user.id)

        seen: list[tuple[int, int]] = []
        errors: list[Exception] = []

        def update(completed_lessons: int) -> None:
            def apply(record: CourseProgress) -> None:
                before = record.completed_lessons
                # Widen the window between read and write
                time.sleep(0.05)
                record.record_completed_lessons(completed_lessons, datetime.now(UTC))
                seen.append((before, completed_lessons))

            with locking_session_factory() as session:
                try:
                    CourseProgressRepository(session).update_with_lock(
                        progress.id, user_id, apply
                    )
                except Exception as e:  # noqa: BLE001
                    errors.append(e)

        _race(lambda: update(3), lambda: update(7))

        assert errors == []
        (first_before, first_written), (second_before, second_written) = seen
        assert first_before == 0
        assert second_before == first_written

        with locking_session_factory() as check:
            stored = CourseProgressRepository(check).find_by_id(progress.id, user_id)
        assert stored is not None
        assert stored.completed_lessons == second_written
        assert stored.progress_percentage == calculate_percentage(second_written, 10)
        assert stored.status is derive_status(second_written, 10)

    def test_concurrent_reviews_do_not_lose_updates(
        self, locking_session_factory: sessionmaker[Session]
    ) -> None:
        """Two correct answers submitted at once both count."""
        with locking_session_factory() as setup:
            user = models.User(email="reviewer@example.com")
            vocabulary = models.Vocabulary(word="猫")
            setup.add_all([user, vocabulary])
            setup.commit()
            user_id = UserId(user.id)
            vocabulary_id = VocabularyId(vocabulary.id)
            VocabularyStatusRepository(setup).add(VocabularyStatus.start(user_id, vocabulary_id))

        repetitions_read: list[int] = []
        errors: list[Exception] = []

        def review() -> None:
            def apply(record: VocabularyStatus) -> None:
                repetitions_read.append(record.repetitions)
                time.sleep(0.05)
                record.record_review(True, datetime.now(UTC))

            with locking_session_factory() as session:
                try:
                    VocabularyStatusRepository(session).update_with_lock(
                        user_id, vocabulary_id, apply
                    )
                except Exception as e:  # noqa: BLE001
                    errors.append(e)

        _race(review, review)

        assert errors == []
        assert repetitions_read == [0, 1]
        with locking_session_factory() as check:
            stored = VocabularyStatusRepository(check).find_by_user_and_vocabulary(
                user_id, vocabulary_id
            )
        assert stored is not None
        assert stored.repetitions == 2
        assert stored.status is LearningStatus.LEARNING


class TestUniqueViolationMatching:
    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            (
                "UNIQUE constraint failed: user_course_progress.user_id, "
                "user_course_progress.course_id",
                True,
            ),
            (
                "duplicate key value violates unique constraint "
                '"uq_user_course_progress_user_course"',
                True,
            ),
            ("UNIQUE constraint failed: user_course_progress.id", False),
            ("FOREIGN KEY constraint failed", False),
        ],
    )
    def test_only_the_user_course_pair_counts(self, message: str, expected: bool) -> None:
        error = IntegrityError(
            "INSERT INTO user_course_progress", {}, sqlite3.IntegrityError(message)
        )

        assert (
            is_unique_violation(
                error, models.UserCourseProgress.__table__, "uq_user_course_progress_user_course"
            )
            is expected
        )


class TestCourseProgressRepository:
    def test_add_and_find(self, db_session: Session, test_user, test_course) -> None:
        progress = _enroll(db_session, test_user, test_course)
        repository = CourseProgressRepository(db_session)

        found = repository.find_by_id(progress.id, UserId(test_user.id))

        assert found is not None
        assert found.total_lessons == 10
        assert found.status is ProgressStatus.NOT_STARTED
        assert found.progress_percentage == Decimal("0.00")
        assert found.created_at is not None

    def test_find_by_id_is_scoped_to_owner(
        self, db_session: Session, test_user, other_user, test_course
    ) -> None:
        progress = _enroll(db_session, test_user, test_course)

        assert CourseProgressRepository(db_session).find_by_id(
            progress.id, UserId(other_user.id)
        ) is None

    def test_duplicate_insert_maps_to_conflict(
        self, db_session: Session, test_user, test_course
    ) -> None:
        """A lost race on the unique constraint surfaces as a conflict."""
        _enroll(db_session, test_user, test_course)

        with pytest.raises(AlreadyEnrolledError):
            _enroll(db_session, test_user, test_course)

    def test_update_with_lock_persists_changes(
        self, db_session: Session, test_user, test_course
    ) -> None:
        progress = _enroll(db_session, test_user, test_course)
        repository = CourseProgressRepository(db_session)

        updated = repository.update_with_lock(
            progress.id,
            UserId(test_user.id),
            lambda p: p.record_completed_lessons(4, BASE_TIME),
        )

        assert updated is not None
        assert updated.completed_lessons == 4
        assert updated.progress_percentage == Decimal("40.00")
        assert updated.status is ProgressStatus.IN_PROGRESS
        row = db_session.get(models.UserCourseProgress, progress.id.value)
        assert row.status == "in_progress"

    def test_update_with_lock_rolls_back_on_error(
        self, db_session: Session, test_user, test_course
    ) -> None:
        progress = _enroll(db_session, test_user, test_course)
        repository = CourseProgressRepository(db_session)

        def apply(record: CourseProgress) -> None:
            record.completed_lessons = 5
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            repository.update_with_lock(progress.id, UserId(test_user.id), apply)

        stored = repository.find_by_id(progress.id, UserId(test_user.id))
        assert stored is not None
        assert stored.completed_lessons == 0

    def test_update_with_lock_for_other_user_returns_none(
        self, db_session: Session, test_user, other_user, test_course
    ) -> None:
        progress = _enroll(db_session, test_user, test_course)

        result = CourseProgressRepository(db_session).update_with_lock(
            progress.id, UserId(other_user.id), lambda p: p.record_completed_lessons(1, BASE_TIME)
        )

        assert result is None

    def test_sorting_puts_nulls_last(self, db_session: Session, test_user) -> None:
        courses = [models.Course(title=f"Course {i}") for i in range(3)]
        db_session.add_all(courses)
        db_session.commit()
        repository = CourseProgressRepository(db_session)
        user_id = UserId(test_user.id)

        untouched = _enroll(db_session, test_user, courses[0])
        older = _enroll(db_session, test_user, courses[1])
        newer = _enroll(db_session, test_user, courses[2])
        repository.update_with_lock(
            older.id, user_id, lambda p: p.record_completed_lessons(1, BASE_TIME)
        )
        repository.update_with_lock(
            newer.id,
            user_id,
            lambda p: p.record_completed_lessons(2, BASE_TIME + timedelta(hours=1)),
        )

        for sort_order, expected in (
            (SortOrder.DESC, [newer.id, older.id, untouched.id]),
            (SortOrder.ASC, [older.id, newer.id, untouched.id]),
        ):
            records, total = repository.find_by_user(
                user_id,
                CourseProgressQuery(
                    sort_by=CourseProgressSortField.LAST_ACCESSED_AT, sort_order=sort_order
                ),
                Pagination(),
            )
            assert total == 3
            assert [r.id for r in records] == expected

    def test_filters_and_pagination(self, db_session: Session, test_user, other_user) -> None:
        courses = [models.Course(title=f"Course {i}") for i in range(3)]
        db_session.add_all(courses)
        db_session.commit()
        for course in courses:
            _enroll(db_session, test_user, course)
        _enroll(db_session, other_user, courses[0])
        repository = CourseProgressRepository(db_session)

        records, total = repository.find_by_user(
            UserId(test_user.id), CourseProgressQuery(), Pagination(page=2, page_size=2)
        )
        assert total == 3
        assert len(records) == 1

        records, total = repository.find_by_user(
            UserId(test_user.id),
            CourseProgressQuery(course_id=CourseId(courses[1].id)),
            Pagination(),
        )
        assert total == 1
        assert records[0].course_id.value == courses[1].id


class TestVocabularyStatusRepository:
    def _start(self, db: Session, user: models.User, vocabulary: models.Vocabulary):
        status = VocabularyStatus.start(UserId(user.id), VocabularyId(vocabulary.id))
        return VocabularyStatusRepository(db).add(status)

    def test_add_assigns_id(self, db_session: Session, test_user, test_vocabulary) -> None:
        status = self._start(db_session, test_user, test_vocabulary)

        assert status.id.value > 0
        assert status.status is LearningStatus.LEARNING
        assert status.created_at is not None

    def test_duplicate_insert_maps_to_conflict(
        self, db_session: Session, test_user, test_vocabulary
    ) -> None:
        self._start(db_session, test_user, test_vocabulary)

        with pytest.raises(AlreadyLearningError):
            self._start(db_session, test_user, test_vocabulary)

    def test_due_for_review_order(
        self, db_session: Session, test_user, test_vocabulary, second_vocabulary
    ) -> None:
        third = models.Vocabulary(word="鳥")
        mastered = models.Vocabulary(word="魚")
        db_session.add_all([third, mastered])
        db_session.commit()
        repository = VocabularyStatusRepository(db_session)
        user_id = UserId(test_user.id)

        reviewed_late = self._start(db_session, test_user, test_vocabulary)
        reviewed_early = self._start(db_session, test_user, second_vocabulary)
        never_reviewed = self._start(db_session, test_user, third)
        done = self._start(db_session, test_user, mastered)

        repository.update_with_lock(
            user_id,
            reviewed_late.vocabulary_id,
            lambda s: s.record_review(True, BASE_TIME + timedelta(days=1)),
        )
        repository.update_with_lock(
            user_id, reviewed_early.vocabulary_id, lambda s: s.record_review(False, BASE_TIME)
        )
        for i in range(5):
            repository.update_with_lock(
                user_id,
                done.vocabulary_id,
                lambda s, i=i: s.record_review(True, BASE_TIME + timedelta(minutes=i)),
            )

        due = repository.find_due_for_review(user_id)

        assert [s.id for s in due] == [never_reviewed.id, reviewed_early.id, reviewed_late.id]

    def test_list_sorted_by_next_review_date(
        self, db_session: Session, test_user, test_vocabulary, second_vocabulary
    ) -> None:
        repository = VocabularyStatusRepository(db_session)
        user_id = UserId(test_user.id)
        reviewed = self._start(db_session, test_user, test_vocabulary)
        fresh = self._start(db_session, test_user, second_vocabulary)
        repository.update_with_lock(
            user_id, reviewed.vocabulary_id, lambda s: s.record_review(True, BASE_TIME)
        )

        ascending, _ = repository.find_by_user(
            user_id, VocabularyStatusQuery(), Pagination()
        )
        descending, _ = repository.find_by_user(
            user_id,
            VocabularyStatusQuery(
                sort_by=VocabularyStatusSortField.NEXT_REVIEW_DATE, sort_order=SortOrder.DESC
            ),
            Pagination(),
        )

        assert [s.id for s in ascending] == [fresh.id, reviewed.id]
        assert [s.id for s in descending] == [reviewed.id, fresh.id]

    def test_list_filters_by_status(
        self, db_session: Session, test_user, test_vocabulary, second_vocabulary
    ) -> None:
        repository = VocabularyStatusRepository(db_session)
        user_id = UserId(test_user.id)
        self._start(db_session, test_user, test_vocabulary)
        other = self._start(db_session, test_user, second_vocabulary)
        for _ in range(5):
            repository.update_with_lock(
                user_id, other.vocabulary_id, lambda s: s.record_review(True, BASE_TIME)
            )

        completed, total = repository.find_by_user(
            user_id, VocabularyStatusQuery(status=LearningStatus.COMPLETED), Pagination()
        )

        assert total == 1
        assert completed[0].id == other.id
