"""DTOs for vocabulary review use cases."""

from dataclasses import dataclass
from enum import StrEnum

from kotoba.application.learning.use_cases.dtos.catalog_dtos import VocabularySummary
from kotoba.application.learning.use_cases.dtos.course_progress_dtos import SortOrder
from kotoba.domain.learning.entities import LearningStatus, VocabularyStatus


class VocabularyStatusSortField(StrEnum):
    """
    Columns a vocabulary status listing can be sorted by.

    NEXT_REVIEW_DATE orders by last review time: items reviewed longest ago
    (or never) come first when ascending.
    """

    ID = "id"
    CREATED_AT = "created_at"
    NEXT_REVIEW_DATE = "next_review_date"
    STATUS = "status"


@dataclass(frozen=True)
class VocabularyStatusQuery:
    """Filter and ordering for listing a user's vocabulary statuses."""

    status: LearningStatus | None = None
    sort_by: VocabularyStatusSortField = VocabularyStatusSortField.NEXT_REVIEW_DATE
    sort_order: SortOrder = SortOrder.ASC


@dataclass
class VocabularyStatusWithVocabulary:
    """DTO for a learning status with its vocabulary summary."""

    status: VocabularyStatus
    vocabulary: VocabularySummary | None
