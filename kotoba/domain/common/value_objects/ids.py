from dataclasses import dataclass
from uuid import UUID, uuid4

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Key of the authenticated learner."""

    value: int


@dataclass(frozen=True)
class CourseId(EntityId):
    value: int


@dataclass(frozen=True)
class VocabularyId(EntityId):
    value: int


@dataclass(frozen=True)
class CourseProgressId(EntityId):
    """Enrollment records are keyed by UUID, created before the insert."""

    value: UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, UUID):
            raise ValueError("CourseProgressId must be a UUID")

    @classmethod
    def generate(cls) -> "CourseProgressId":
        return cls(uuid4())


@dataclass(frozen=True)
class VocabularyStatusId(EntityId):
    value: int

    @classmethod
    def generate(cls) -> "VocabularyStatusId":
        return cls(0)  # Database assigns real ID
