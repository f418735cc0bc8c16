from .assignments import Assignment, Assignments
from .scheme import CategoryConfig, GradingMode, GradingScheme
from .gradebook import (
    ClassGradebook,
    calculate_class_grade,
    calculate_locked_weight,
    category_averages,
    predict_final_grade,
)

__all__ = [
    "Assignment",
    "Assignments",
    "CategoryConfig",
    "GradingMode",
    "GradingScheme",
    "ClassGradebook",
    "calculate_class_grade",
    "calculate_locked_weight",
    "category_averages",
    "predict_final_grade",
]
