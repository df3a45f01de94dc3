"""API routes for course enrollment progress."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from kotoba.application.learning.use_cases.course_progress_use_case import CourseProgressUseCase
from kotoba.application.learning.use_cases.dtos import CourseProgressSortField, SortOrder
from kotoba.core import container
from kotoba.domain.common.exceptions import DomainError
from kotoba.domain.learning.entities import ProgressStatus
from kotoba.exceptions import KotobaError, ServiceError
from kotoba.infrastructure.common.di import inject_use_case
from kotoba.infrastructure.common.schemas import MAX_ID, PaginationMeta
from kotoba.infrastructure.identity.dependencies import CurrentUserId
from kotoba.infrastructure.learning.schemas import (
    CourseProgress,
    CourseProgressCreateRequest,
    CourseProgressListResponse,
    CourseProgressResponse,
    CourseProgressUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user-course-progress", tags=["course-progress"])

UNEXPECTED_ERROR = "An unexpected error occurred. Please try again later."


@router.post("", response_model=CourseProgressResponse, status_code=status.HTTP_201_CREATED)
def enroll_in_course(
    request: CourseProgressCreateRequest,
    user_id: CurrentUserId,
    use_case: CourseProgressUseCase = Depends(
        inject_use_case(container.course_progress_use_case)
    ),
) -> CourseProgressResponse:
    """
    Enroll the current user in a course.

    Args:
        request: Request containing the course ID
        use_case: CourseProgressUseCase injected via dependency container

    Returns:
        The new progress record

    Raises:
        InvalidCourseReferenceError: If the course does not exist
        AlreadyEnrolledError: If the user is already enrolled
    """
    try:
        result = use_case.enroll(user_id=user_id, course_id=request.course_id)
        return CourseProgressResponse(
            message="User course progress created successfully",
            data=CourseProgress.from_dto(result),
        )
    except (KotobaError, DomainError):
        raise
    except Exception as e:
        logger.error(
            f"Failed to enroll user {user_id} in course {request.course_id}: {e!s}",
            exc_info=True,
        )
        raise ServiceError(UNEXPECTED_ERROR) from e


@router.get("", response_model=CourseProgressListResponse, status_code=status.HTTP_200_OK)
def get_course_progress_list(
    user_id: CurrentUserId,
    page: Annotated[int | None, Query(description="Page number, starting at 1")] = None,
    limit: Annotated[int | None, Query(description="Items per page (1-100)")] = None,
    progress_status: Annotated[ProgressStatus | None, Query(alias="status")] = None,
    course_id: Annotated[int | None, Query(alias="courseId", gt=0, le=MAX_ID)] = None,
    sort_by: Annotated[CourseProgressSortField, Query(alias="sortBy")] = (
        CourseProgressSortField.LAST_ACCESSED_AT
    ),
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = SortOrder.DESC,
    use_case: CourseProgressUseCase = Depends(
        inject_use_case(container.course_progress_use_case)
    ),
) -> CourseProgressListResponse:
    """
    List the current user's enrollments.

    Records without a value for the sort column are listed last.
    """
    try:
        result = use_case.get_progress_list(
            user_id=user_id,
            page=page,
            limit=limit,
            status=progress_status,
            course_id=course_id,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return CourseProgressListResponse(
            message="User course progress retrieved successfully",
            data=[CourseProgress.from_dto(item) for item in result.items],
            pagination=PaginationMeta.from_result(result),
        )
    except (KotobaError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list course progress of user {user_id}: {e!s}", exc_info=True)
        raise ServiceError(UNEXPECTED_ERROR) from e


@router.get(
    "/{progress_id}", response_model=CourseProgressResponse, status_code=status.HTTP_200_OK
)
def get_course_progress(
    progress_id: UUID,
    user_id: CurrentUserId,
    use_case: CourseProgressUseCase = Depends(
        inject_use_case(container.course_progress_use_case)
    ),
) -> CourseProgressResponse:
    """
    Get one enrollment of the current user.

    Records of other users are reported as not found.
    """
    try:
        result = use_case.get_progress(progress_id=progress_id, user_id=user_id)
        return CourseProgressResponse(
            message="User course progress retrieved successfully",
            data=CourseProgress.from_dto(result),
        )
    except (KotobaError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get course progress {progress_id}: {e!s}", exc_info=True)
        raise ServiceError(UNEXPECTED_ERROR) from e


@router.put(
    "/{progress_id}", response_model=CourseProgressResponse, status_code=status.HTTP_200_OK
)
def update_course_progress(
    progress_id: UUID,
    request: CourseProgressUpdateRequest,
    user_id: CurrentUserId,
    use_case: CourseProgressUseCase = Depends(
        inject_use_case(container.course_progress_use_case)
    ),
) -> CourseProgressResponse:
    """
    Report the number of completed lessons.

    Args:
        progress_id: ID of the progress record
        request: Request containing the completed lessons count
        use_case: CourseProgressUseCase injected via dependency container

    Returns:
        The updated progress record

    Raises:
        CourseProgressNotFoundError: If the record does not exist or is not the user's
        CannotUpdateCompletedProgressError: If the course is already completed
        InvalidCompletedLessonsError: If the count is negative
        CompletedLessonsExceedTotalError: If the count exceeds the course's lessons
    """
    try:
        result = use_case.update_progress(
            progress_id=progress_id,
            user_id=user_id,
            completed_lessons=request.completed_lessons,
        )
        return CourseProgressResponse(
            message="User course progress updated successfully",
            data=CourseProgress.from_dto(result),
        )
    except (KotobaError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update course progress {progress_id}: {e!s}", exc_info=True)
        raise ServiceError(UNEXPECTED_ERROR) from e
