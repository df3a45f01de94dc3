"""Pydantic schemas for vocabulary learning status API request/response validation."""

from pydantic import Field

from kotoba.application.learning.use_cases.dtos import (
    VocabularyStatusWithVocabulary,
    VocabularySummary,
)
from kotoba.domain.learning.entities import LearningStatus
from kotoba.infrastructure.common.schemas import (
    ApiModel,
    PaginatedResponse,
    PositiveId,
    SuccessResponse,
    Timestamp,
)


class VocabularySummarySchema(ApiModel):
    """Vocabulary attributes embedded in a learning status."""

    id: int
    word: str
    reading: str | None = None
    meaning: str | None = None
    part_of_speech: str | None = None
    example_sentence: str | None = None
    audio_url: str | None = None
    difficulty: str | None = None

    @classmethod
    def from_summary(cls, summary: VocabularySummary) -> "VocabularySummarySchema":
        return cls(
            id=summary.id,
            word=summary.word,
            reading=summary.reading,
            meaning=summary.meaning,
            part_of_speech=summary.part_of_speech,
            example_sentence=summary.example_sentence,
            audio_url=summary.audio_url,
            difficulty=summary.difficulty,
        )


class VocabularyStatus(ApiModel):
    """Schema for a vocabulary learning status."""

    id: int
    user_id: int
    vocabulary_id: int
    status: LearningStatus
    repetitions: int
    last_reviewed_at: Timestamp | None = None
    created_at: Timestamp | None = None
    updated_at: Timestamp | None = None
    vocabulary: VocabularySummarySchema | None = None

    @classmethod
    def from_dto(cls, dto: VocabularyStatusWithVocabulary) -> "VocabularyStatus":
        status = dto.status
        return cls(
            id=status.id.value,
            user_id=status.user_id.value,
            vocabulary_id=status.vocabulary_id.value,
            status=status.status,
            repetitions=status.repetitions,
            last_reviewed_at=status.last_reviewed_at,
            created_at=status.created_at,
            updated_at=status.updated_at,
            vocabulary=(
                VocabularySummarySchema.from_summary(dto.vocabulary) if dto.vocabulary else None
            ),
        )


class VocabularyStatusCreateRequest(ApiModel):
    """Schema for starting to learn a vocabulary item."""

    vocabulary_id: PositiveId = Field(..., description="ID of the vocabulary item")


class VocabularyReviewRequest(ApiModel):
    """Schema for submitting a review outcome."""

    is_correct: bool = Field(..., description="Whether the learner answered correctly")


VocabularyStatusResponse = SuccessResponse[VocabularyStatus]
VocabularyStatusListResponse = PaginatedResponse[VocabularyStatus]
VocabularyStatusDueResponse = SuccessResponse[list[VocabularyStatus]]
