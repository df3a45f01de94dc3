"""
Vocabulary learning status entity for repetition-based mastery.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from kotoba.domain.common.entity import Entity
from kotoba.domain.common.exceptions import InvariantViolationError
from kotoba.domain.common.value_objects import UserId, VocabularyId, VocabularyStatusId

# Consecutive correct reviews needed to master a word
MASTERY_REPETITIONS = 5


class LearningStatus(StrEnum):
    """Mastery state of a vocabulary item."""

    LEARNING = "learning"
    COMPLETED = "completed"


@dataclass(eq=False)
class VocabularyStatus(Entity[VocabularyStatusId]):
    """
    A learner's progress on one vocabulary item.

    Business Rules:
    - repetitions counts consecutive correct reviews
    - any incorrect review resets repetitions to 0 and reopens the item
    - reaching MASTERY_REPETITIONS marks the item completed
    - completed items can still be reviewed
    """

    id: VocabularyStatusId
    user_id: UserId
    vocabulary_id: VocabularyId
    status: LearningStatus = LearningStatus.LEARNING
    repetitions: int = 0
    last_reviewed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.repetitions < 0:
            raise InvariantViolationError("VocabularyStatus", "repetitions must be non-negative")

    def record_review(self, is_correct: bool, reviewed_at: datetime) -> None:
        """
        Apply one review outcome.

        Args:
            is_correct: Whether the learner answered correctly
            reviewed_at: Timestamp of the review
        """
        if is_correct:
            self.repetitions += 1
            if self.repetitions >= MASTERY_REPETITIONS:
                self.status = LearningStatus.COMPLETED
        else:
            self.repetitions = 0
            self.status = LearningStatus.LEARNING
        self.last_reviewed_at = reviewed_at

    @classmethod
    def start(cls, user_id: UserId, vocabulary_id: VocabularyId) -> "VocabularyStatus":
        """Start learning a vocabulary item (ID will be 0 until persisted)."""
        return cls(
            id=VocabularyStatusId.generate(),
            user_id=user_id,
            vocabulary_id=vocabulary_id,
        )

    @classmethod
    def create_with_id(
        cls,
        id: VocabularyStatusId,
        user_id: UserId,
        vocabulary_id: VocabularyId,
        status: LearningStatus,
        repetitions: int,
        last_reviewed_at: datetime | None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "VocabularyStatus":
        """Reconstitute a learning status from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            vocabulary_id=vocabulary_id,
            status=status,
            repetitions=repetitions,
            last_reviewed_at=last_reviewed_at,
            created_at=created_at,
            updated_at=updated_at,
        )
