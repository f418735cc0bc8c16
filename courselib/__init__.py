"""Grade computation and assignment prioritization for student course tracking."""

from .core import (
    Assignment,
    Assignments,
    CategoryConfig,
    GradingMode,
    GradingScheme,
    ClassGradebook,
    calculate_class_grade,
    calculate_locked_weight,
    category_averages,
    predict_final_grade,
)

from .scales import (
    DEFAULT_SCALE,
    GRADE_POINTS,
    calculate_gpa,
    get_letter_grade,
    map_scores_to_letter_grades,
)

from .categorize import (
    CATEGORY_MAPPINGS,
    CategoryMapping,
    categorize_assignment_type,
    find_matching_grading_category,
    get_suggested_grading_categories,
    standardize_assignment_types,
    suggested_grading_scheme,
)

from .prioritize import (
    PriorityFactors,
    PriorityScore,
    get_priority_color,
    get_priority_label,
    get_priority_scores,
    prioritize_assignments,
    priority_table,
)

from .settings import UserSettings, SettingsStore

from . import policies
from . import predicates
from . import summarize
from . import autograde
from . import io

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
    "DEFAULT_SCALE",
    "GRADE_POINTS",
    "calculate_gpa",
    "get_letter_grade",
    "map_scores_to_letter_grades",
    "CATEGORY_MAPPINGS",
    "CategoryMapping",
    "categorize_assignment_type",
    "find_matching_grading_category",
    "get_suggested_grading_categories",
    "standardize_assignment_types",
    "suggested_grading_scheme",
    "PriorityFactors",
    "PriorityScore",
    "get_priority_color",
    "get_priority_label",
    "get_priority_scores",
    "prioritize_assignments",
    "priority_table",
    "UserSettings",
    "SettingsStore",
    "policies",
    "predicates",
    "summarize",
    "autograde",
    "io",
]
