"""Protocol for read access to the vocabulary catalog."""

from collections.abc import Iterable
from typing import Protocol

from kotoba.application.learning.use_cases.dtos import VocabularySummary
from kotoba.domain.common.value_objects import VocabularyId


class VocabularyCatalogProtocol(Protocol):
    """Read-only view of vocabulary items."""

    def exists(self, vocabulary_id: VocabularyId) -> bool:
        """Check whether a vocabulary item exists."""
        ...

    def find_summaries(
        self, vocabulary_ids: Iterable[VocabularyId]
    ) -> dict[int, VocabularySummary]:
        """Load summaries keyed by vocabulary id; unknown ids are left out."""
        ...
