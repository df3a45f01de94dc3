"""Read-only catalog summaries attached to learning records for display."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CourseSummary:
    """Course attributes shown next to an enrollment."""

    id: int
    title: str
    description: str | None = None
    difficulty: str | None = None
    estimated_hours: int | None = None
    thumbnail_url: str | None = None
    is_published: bool = False


@dataclass(frozen=True)
class VocabularySummary:
    """Vocabulary attributes shown next to a learning status."""

    id: int
    word: str
    reading: str | None = None
    meaning: str | None = None
    part_of_speech: str | None = None
    example_sentence: str | None = None
    audio_url: str | None = None
    difficulty: str | None = None
