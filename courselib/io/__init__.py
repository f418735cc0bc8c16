from .records import read_assignment, read_assignments, read_grading_scheme, read_csv
from .grade_text import (
    ParsedGrade,
    parse_grade_line,
    parse_grades_from_text,
    match_grades_to_assignments,
)

__all__ = [
    "read_assignment",
    "read_assignments",
    "read_grading_scheme",
    "read_csv",
    "ParsedGrade",
    "parse_grade_line",
    "parse_grades_from_text",
    "match_grades_to_assignments",
]
