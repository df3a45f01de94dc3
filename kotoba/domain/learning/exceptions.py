"""Learning domain exceptions."""

from kotoba.domain.common.exceptions import (
    BusinessRuleViolationError,
    EntityConflictError,
    EntityNotFoundError,
    ValidationError,
)


class CourseProgressNotFoundError(EntityNotFoundError):
    """Raised when a progress record is missing or owned by someone else."""

    code = "course_progress_not_found"

    def __init__(self, progress_id: object) -> None:
        super().__init__("Course progress", progress_id)


class AlreadyEnrolledError(EntityConflictError):
    """Raised when the user already has a progress record for the course."""

    code = "already_enrolled"

    def __init__(self, course_id: int) -> None:
        super().__init__("User already enrolled in this course", {"course_id": course_id})
        self.course_id = course_id


class InvalidCourseReferenceError(ValidationError):
    """Raised when a request references a course that does not exist."""

    code = "invalid_course_reference"

    def __init__(self, course_id: int) -> None:
        super().__init__(f"Course with id {course_id} does not exist", "course_id", course_id)


class InvalidCompletedLessonsError(ValidationError):
    """Raised when the completed lessons count is negative."""

    code = "invalid_completed_lessons"

    def __init__(self, completed_lessons: int) -> None:
        super().__init__(
            "Completed lessons must be between 0 and total lessons",
            "completed_lessons",
            completed_lessons,
        )


class CompletedLessonsExceedTotalError(ValidationError):
    """Raised when more lessons are reported than the course had at enrollment."""

    code = "completed_lessons_exceed_total"

    def __init__(self, completed_lessons: int, total_lessons: int) -> None:
        super().__init__(
            f"Completed lessons cannot exceed total lessons in the course ({total_lessons})",
            "completed_lessons",
            completed_lessons,
        )
        self.total_lessons = total_lessons


class CannotUpdateCompletedProgressError(BusinessRuleViolationError):
    """Raised when progress of an already completed course is updated."""

    code = "cannot_update_completed_progress"

    def __init__(self) -> None:
        super().__init__(
            "completed_progress_is_final",
            "Cannot update progress for a completed course",
        )


class VocabularyStatusNotFoundError(EntityNotFoundError):
    """Raised when a learning status record is missing or owned by someone else."""

    code = "vocabulary_status_not_found"

    def __init__(self, entity_id: object, *, by_vocabulary: bool = False) -> None:
        if by_vocabulary:
            super().__init__("Vocabulary learning status for vocabulary", entity_id)
        else:
            super().__init__("Vocabulary learning status", entity_id)


class AlreadyLearningError(EntityConflictError):
    """Raised when the user already started learning the vocabulary item."""

    code = "already_learning"

    def __init__(self, vocabulary_id: int) -> None:
        super().__init__(
            "Vocabulary already being learned by user", {"vocabulary_id": vocabulary_id}
        )
        self.vocabulary_id = vocabulary_id


class VocabularyNotFoundForLearningError(ValidationError):
    """Raised when learning is started for a vocabulary item that does not exist."""

    code = "vocabulary_not_found_for_learning"

    def __init__(self, vocabulary_id: int) -> None:
        super().__init__(
            "Vocabulary not found, cannot start learning", "vocabulary_id", vocabulary_id
        )
