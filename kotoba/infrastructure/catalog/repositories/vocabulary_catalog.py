"""Vocabulary catalog lookups used by the learning context."""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from kotoba.application.learning.use_cases.dtos import VocabularySummary
from kotoba.domain.common.value_objects import VocabularyId
from kotoba.models import Vocabulary as VocabularyORM


class VocabularyCatalog:
    """Read-only access to vocabulary items."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def exists(self, vocabulary_id: VocabularyId) -> bool:
        stmt = select(VocabularyORM.id).where(VocabularyORM.id == vocabulary_id.value)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def find_summaries(
        self, vocabulary_ids: Iterable[VocabularyId]
    ) -> dict[int, VocabularySummary]:
        ids = {vocabulary_id.value for vocabulary_id in vocabulary_ids}
        if not ids:
            return {}

        stmt = select(VocabularyORM).where(VocabularyORM.id.in_(ids))
        return {
            vocabulary.id: VocabularySummary(
                id=vocabulary.id,
                word=vocabulary.word,
                reading=vocabulary.reading,
                meaning=vocabulary.meaning,
                part_of_speech=vocabulary.part_of_speech,
                example_sentence=vocabulary.example_sentence,
                audio_url=vocabulary.audio_url,
                difficulty=vocabulary.difficulty,
            )
            for vocabulary in self.db.execute(stmt).scalars()
        }
