"""Use case for vocabulary learning and repetition reviews."""

from datetime import UTC, datetime

import structlog

from kotoba.application.common.pagination import PaginatedResult, Pagination
from kotoba.application.learning.protocols.vocabulary_catalog import VocabularyCatalogProtocol
from kotoba.application.learning.protocols.vocabulary_status_repository import (
    VocabularyStatusRepositoryProtocol,
)
from kotoba.application.learning.use_cases.dtos import (
    SortOrder,
    VocabularyStatusQuery,
    VocabularyStatusSortField,
    VocabularyStatusWithVocabulary,
)
from kotoba.domain.common.value_objects import UserId, VocabularyId, VocabularyStatusId
from kotoba.domain.learning.entities import LearningStatus, VocabularyStatus
from kotoba.domain.learning.exceptions import (
    AlreadyLearningError,
    VocabularyNotFoundForLearningError,
    VocabularyStatusNotFoundError,
)

logger = structlog.get_logger(__name__)


class VocabularyReviewUseCase:
    """Use case for starting to learn vocabulary and reviewing it."""

    def __init__(
        self,
        status_repository: VocabularyStatusRepositoryProtocol,
        vocabulary_catalog: VocabularyCatalogProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.status_repository = status_repository
        self.vocabulary_catalog = vocabulary_catalog

    def start_learning(self, user_id: int, vocabulary_id: int) -> VocabularyStatusWithVocabulary:
        """
        Start learning a vocabulary item.

        Raises:
            VocabularyNotFoundForLearningError: If the vocabulary item does not exist
            AlreadyLearningError: If the user already learns this item
        """
        user_id_vo = UserId(user_id)
        vocabulary_id_vo = VocabularyId(vocabulary_id)

        if not self.vocabulary_catalog.exists(vocabulary_id_vo):
            raise VocabularyNotFoundForLearningError(vocabulary_id)

        if self.status_repository.find_by_user_and_vocabulary(user_id_vo, vocabulary_id_vo):
            raise AlreadyLearningError(vocabulary_id)

        status = self.status_repository.add(VocabularyStatus.start(user_id_vo, vocabulary_id_vo))

        logger.info(
            "vocabulary_learning_started",
            status_id=status.id.value,
            user_id=user_id,
            vocabulary_id=vocabulary_id,
        )
        return self._with_vocabulary([status])[0]

    def get_status(self, status_id: int, user_id: int) -> VocabularyStatusWithVocabulary:
        """
        Get one learning status of the user.

        Raises:
            VocabularyStatusNotFoundError: If the status does not exist or is not the user's
        """
        status = self.status_repository.find_by_id(VocabularyStatusId(status_id), UserId(user_id))
        if status is None:
            raise VocabularyStatusNotFoundError(status_id)
        return self._with_vocabulary([status])[0]

    def get_status_list(
        self,
        user_id: int,
        page: int | None = None,
        limit: int | None = None,
        status: LearningStatus | None = None,
        sort_by: VocabularyStatusSortField = VocabularyStatusSortField.NEXT_REVIEW_DATE,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> PaginatedResult[VocabularyStatusWithVocabulary]:
        """List a user's learning statuses."""
        pagination = Pagination.clamped(page, limit)
        query = VocabularyStatusQuery(status=status, sort_by=sort_by, sort_order=sort_order)
        statuses, total = self.status_repository.find_by_user(UserId(user_id), query, pagination)
        return PaginatedResult(
            items=self._with_vocabulary(statuses), total=total, pagination=pagination
        )

    def get_due_for_review(self, user_id: int) -> list[VocabularyStatusWithVocabulary]:
        """
        Get the items the user should review now.

        Every item still in the learning state is due. Items never reviewed
        come first, then the ones reviewed longest ago.
        """
        statuses = self.status_repository.find_due_for_review(UserId(user_id))
        return self._with_vocabulary(statuses)

    def review(
        self, user_id: int, vocabulary_id: int, is_correct: bool
    ) -> VocabularyStatusWithVocabulary:
        """
        Submit the outcome of one review.

        A correct answer adds a repetition and completes the item at five in a
        row. A wrong answer resets the count and puts the item back into
        learning, also when it was already completed.

        Raises:
            VocabularyStatusNotFoundError: If the user is not learning this item
        """

        def apply(status: VocabularyStatus) -> None:
            status.record_review(is_correct, datetime.now(UTC))

        status = self.status_repository.update_with_lock(
            UserId(user_id), VocabularyId(vocabulary_id), apply
        )
        if status is None:
            raise VocabularyStatusNotFoundError(vocabulary_id, by_vocabulary=True)

        logger.info(
            "vocabulary_reviewed",
            status_id=status.id.value,
            user_id=user_id,
            vocabulary_id=vocabulary_id,
            is_correct=is_correct,
            repetitions=status.repetitions,
            status=status.status.value,
        )
        return self._with_vocabulary([status])[0]

    def _with_vocabulary(
        self, statuses: list[VocabularyStatus]
    ) -> list[VocabularyStatusWithVocabulary]:
        summaries = self.vocabulary_catalog.find_summaries({s.vocabulary_id for s in statuses})
        return [
            VocabularyStatusWithVocabulary(status=s, vocabulary=summaries.get(s.vocabulary_id.value))
            for s in statuses
        ]
