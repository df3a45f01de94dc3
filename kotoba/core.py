from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from kotoba.application.learning.use_cases.course_progress_use_case import CourseProgressUseCase
from kotoba.application.learning.use_cases.vocabulary_review_use_case import (
    VocabularyReviewUseCase,
)
from kotoba.infrastructure.catalog.repositories import CourseCatalog, VocabularyCatalog
from kotoba.infrastructure.learning.repositories import (
    CourseProgressRepository,
    VocabularyStatusRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Catalog (read-only)
    course_catalog = providers.Factory(CourseCatalog, db=db)
    vocabulary_catalog = providers.Factory(VocabularyCatalog, db=db)

    # Repositories
    course_progress_repository = providers.Factory(CourseProgressRepository, db=db)
    vocabulary_status_repository = providers.Factory(VocabularyStatusRepository, db=db)

    # Learning module, application use cases
    course_progress_use_case = providers.Factory(
        CourseProgressUseCase,
        progress_repository=course_progress_repository,
        course_catalog=course_catalog,
    )
    vocabulary_review_use_case = providers.Factory(
        VocabularyReviewUseCase,
        status_repository=vocabulary_status_repository,
        vocabulary_catalog=vocabulary_catalog,
    )


container = Container()
