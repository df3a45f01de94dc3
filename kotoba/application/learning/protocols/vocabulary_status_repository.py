"""Protocol for VocabularyStatus repository in learning context."""

from collections.abc import Callable
from typing import Protocol

from kotoba.application.common.pagination import Pagination
from kotoba.application.learning.use_cases.dtos import VocabularyStatusQuery
from kotoba.domain.common.value_objects import UserId, VocabularyId, VocabularyStatusId
from kotoba.domain.learning.entities import VocabularyStatus


class VocabularyStatusRepositoryProtocol(Protocol):
    """Protocol for vocabulary learning status persistence."""

    def find_by_id(
        self, status_id: VocabularyStatusId, user_id: UserId
    ) -> VocabularyStatus | None:
        """Find a status by ID, scoped to its owner."""
        ...

    def find_by_user_and_vocabulary(
        self, user_id: UserId, vocabulary_id: VocabularyId
    ) -> VocabularyStatus | None:
        """Find the status a user has for a vocabulary item."""
        ...

    def find_by_user(
        self, user_id: UserId, query: VocabularyStatusQuery, pagination: Pagination
    ) -> tuple[list[VocabularyStatus], int]:
        """
        List a user's learning statuses.

        Returns:
            Tuple of (statuses on the page, total matching statuses)
        """
        ...

    def find_due_for_review(self, user_id: UserId) -> list[VocabularyStatus]:
        """
        Get the statuses a user should review next.

        Returns:
            Statuses still being learned, least recently reviewed first
        """
        ...

    def add(self, status: VocabularyStatus) -> VocabularyStatus:
        """
        Insert a new learning status.

        Raises:
            AlreadyLearningError: If a status for (user, vocabulary) already exists
        """
        ...

    def update_with_lock(
        self,
        user_id: UserId,
        vocabulary_id: VocabularyId,
        apply: Callable[[VocabularyStatus], None],
    ) -> VocabularyStatus | None:
        """
        Run a read-modify-write on one status under an exclusive row lock.

        Returns:
            The updated entity, or None if the user has no status for the item
        """
        ...
