"""API routes for vocabulary learning and reviews."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from kotoba.application.learning.use_cases.dtos import SortOrder, VocabularyStatusSortField
from kotoba.application.learning.use_cases.vocabulary_review_use_case import (
    VocabularyReviewUseCase,
)
from kotoba.core import container
from kotoba.domain.common.exceptions import DomainError
from kotoba.domain.learning.entities import LearningStatus
from kotoba.exceptions import KotobaError, ServiceError
from kotoba.infrastructure.common.di import inject_use_case
from kotoba.infrastructure.common.schemas import MAX_ID, PaginationMeta
from kotoba.infrastructure.identity.dependencies import CurrentUserId
from kotoba.infrastructure.learning.schemas import (
    VocabularyReviewRequest,
    VocabularyStatus,
    VocabularyStatusCreateRequest,
    VocabularyStatusDueResponse,
    VocabularyStatusListResponse,
    VocabularyStatusResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user-vocabulary-status", tags=["vocabulary-status"])

UNEXPECTED_ERROR = "An unexpected error occurred. Please try again later."


@router.post("", response_model=VocabularyStatusResponse, status_code=status.HTTP_201_CREATED)
def start_learning_vocabulary(
    request: VocabularyStatusCreateRequest,
    user_id: CurrentUserId,
    use_case: VocabularyReviewUseCase = Depends(
        inject_use_case(container.vocabulary_review_use_case)
    ),
) -> VocabularyStatusResponse:
    """
    Start learning a vocabulary item.

    Raises:
        VocabularyNotFoundForLearningError: If the vocabulary item does not exist
        AlreadyLearningError: If the user already learns the item
    """
    try:
        result = use_case.start_learning(user_id=user_id, vocabulary_id=request.vocabulary_id)
        return VocabularyStatusResponse(
            message="Vocabulary learning started",
            data=VocabularyStatus.from_dto(result),
        )
    except (KotobaError, DomainError):
        raise
    except Exception as e:
        logger.error(
            f"Failed to start learning vocabulary {request.vocabulary_id}: {e!s}",
            exc_info=True,
        )
        raise ServiceError(UNEXPECTED_ERROR) from e


@router.get("", response_model=VocabularyStatusListResponse, status_code=status.HTTP_200_OK)
def get_vocabulary_status_list(
    user_id: CurrentUserId,
    page: Annotated[int | None, Query(description="Page number, starting at 1")] = None,
    limit: Annotated[int | None, Query(description="Items per page (1-100)")] = None,
    sort: VocabularyStatusSortField = VocabularyStatusSortField.NEXT_REVIEW_DATE,
    order: SortOrder = SortOrder.ASC,
    learning_status: Annotated[LearningStatus | None, Query(alias="status")] = None,
    use_case: VocabularyReviewUseCase = Depends(
        inject_use_case(container.vocabulary_review_use_case)
    ),
) -> VocabularyStatusListResponse:
    """List the current user's vocabulary learning statuses."""
    try:
        result = use_case.get_status_list(
            user_id=user_id,
            page=page,
            limit=limit,
            status=learning_status,
            sort_by=sort,
            sort_order=order,
        )
        return VocabularyStatusListResponse(
            message="User vocabulary statuses retrieved successfully",
            data=[VocabularyStatus.from_dto(item) for item in result.items],
            pagination=PaginationMeta.from_result(result),
        )
    except (KotobaError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list vocabulary statuses of user {user_id}: {e!s}", exc_info=True)
        raise ServiceError(UNEXPECTED_ERROR) from e


# Declared before /{status_id} so that "due" is not parsed as an ID
@router.get("/due", response_model=VocabularyStatusDueResponse, status_code=status.HTTP_200_OK)
def get_vocabulary_due_for_review(
    user_id: CurrentUserId,
    use_case: VocabularyReviewUseCase = Depends(
        inject_use_case(container.vocabulary_review_use_case)
    ),
) -> VocabularyStatusDueResponse:
    """
    Get the vocabulary items the current user should review.

    Every item still being learned is due; never-reviewed items come first,
    then the ones reviewed longest ago.
    """
    try:
        results = use_case.get_due_for_review(user_id=user_id)
        return VocabularyStatusDueResponse(
            message="Vocabulary due for review retrieved successfully",
            data=[VocabularyStatus.from_dto(item) for item in results],
        )
    except (KotobaError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get due vocabulary of user {user_id}: {e!s}", exc_info=True)
        raise ServiceError(UNEXPECTED_ERROR) from e


@router.get(
    "/{status_id}", response_model=VocabularyStatusResponse, status_code=status.HTTP_200_OK
)
def get_vocabulary_status(
    status_id: Annotated[int, Path(gt=0, le=MAX_ID)],
    user_id: CurrentUserId,
    use_case: VocabularyReviewUseCase = Depends(
        inject_use_case(container.vocabulary_review_use_case)
    ),
) -> VocabularyStatusResponse:
    """
    Get one vocabulary learning status of the current user.

    Statuses of other users are reported as not found.
    """
    try:
        result = use_case.get_status(status_id=status_id, user_id=user_id)
        return VocabularyStatusResponse(
            message="User vocabulary status retrieved successfully",
            data=VocabularyStatus.from_dto(result),
        )
    except (KotobaError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get vocabulary status {status_id}: {e!s}", exc_info=True)
        raise ServiceError(UNEXPECTED_ERROR) from e


@router.post(
    "/{vocabulary_id}/review",
    response_model=VocabularyStatusResponse,
    status_code=status.HTTP_200_OK,
)
def review_vocabulary(
    vocabulary_id: Annotated[int, Path(gt=0, le=MAX_ID)],
    request: VocabularyReviewRequest,
    user_id: CurrentUserId,
    use_case: VocabularyReviewUseCase = Depends(
        inject_use_case(container.vocabulary_review_use_case)
    ),
) -> VocabularyStatusResponse:
    """
    Submit the outcome of reviewing a vocabulary item.

    Five correct answers in a row complete the item; a wrong answer resets
    the streak and puts the item back into learning.

    Args:
        vocabulary_id: ID of the vocabulary item (not of the status record)
        request: Request containing whether the answer was correct
        use_case: VocabularyReviewUseCase injected via dependency container

    Raises:
        VocabularyStatusNotFoundError: If the user is not learning the item
    """
    try:
        result = use_case.review(
            user_id=user_id, vocabulary_id=vocabulary_id, is_correct=request.is_correct
        )
        return VocabularyStatusResponse(
            message="Vocabulary review recorded successfully",
            data=VocabularyStatus.from_dto(result),
        )
    except (KotobaError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to review vocabulary {vocabulary_id}: {e!s}", exc_info=True)
        raise ServiceError(UNEXPECTED_ERROR) from e
