from .course_progress import CourseProgress, ProgressStatus, calculate_percentage, derive_status
from .vocabulary_status import MASTERY_REPETITIONS, LearningStatus, VocabularyStatus

__all__ = [
    "MASTERY_REPETITIONS",
    "CourseProgress",
    "LearningStatus",
    "ProgressStatus",
    "VocabularyStatus",
    "calculate_percentage",
    "derive_status",
]
