"""Summaries of a class, and of every class in a term."""

from __future__ import annotations

import dataclasses
import math
import typing

import pandas as pd

from .core.assignments import Assignment, Assignments
from .core.gradebook import ClassGradebook
from .scales import calculate_gpa, get_letter_grade


@dataclasses.dataclass
class ClassSummary:
    """The grade standing of a single class.

    Attributes
    ----------
    current_grade : Optional[float]
        The class percentage, or `None` if nothing has been graded yet or the
        grade could not be computed.
    letter_grade : str
        The letter grade, or "N/A" when `current_grade` is `None`.
    graded_count : int
        The number of completed, graded assignments.
    total_count : int
        The number of assignments in the class.

    """

    current_grade: typing.Optional[float]
    letter_grade: str
    graded_count: int
    total_count: int


@dataclasses.dataclass
class TermSummary:
    """The grade standing of every class in a term."""

    classes: dict[str, ClassSummary]
    term_gpa: float
    graded_count: int
    total_count: int
    average_grade: float


def summarize_class(assignments, scheme) -> ClassSummary:
    """Summarize a class's grade from its assignments and grading scheme.

    Parameters
    ----------
    assignments : Iterable[Assignment]
        All of the class's assignments. Only completed, graded ones are used.
    scheme : GradingScheme
        The class's grading scheme.

    Returns
    -------
    ClassSummary

    """
    gradebook = ClassGradebook(assignments, scheme)
    graded = gradebook.graded

    if not graded:
        return ClassSummary(None, "N/A", 0, len(gradebook.assignments))

    score = gradebook.overall_score
    if math.isnan(score):
        return ClassSummary(None, "N/A", len(graded), len(gradebook.assignments))

    return ClassSummary(
        score, get_letter_grade(score), len(graded), len(gradebook.assignments)
    )


def average_percentage(assignments: typing.Iterable[Assignment]) -> float:
    """The plain average percentage of graded assignments, ignoring categories.

    A missing grade counts as 0 and a missing maximum as 100 points. If there
    are no graded assignments, the result is 0.

    """
    graded = Assignments(assignments).graded()
    if not graded:
        return 0.0

    percentages = pd.Series(
        [(a.grade or 0) / (a.max_points or 100) * 100 for a in graded], dtype=float
    )
    return float(percentages.mean())


def summarize_term(assignments, schemes_by_class: typing.Mapping) -> TermSummary:
    """Summarize every class in a term, along with the term GPA.

    Parameters
    ----------
    assignments : Iterable[Assignment]
        Every assignment in the term. Each is assigned to a class by its
        ``class_id``.
    schemes_by_class : Mapping[str, GradingScheme]
        The grading scheme of each class, keyed by class id. Assignments of
        classes not in this mapping are counted but not summarized.

    Returns
    -------
    TermSummary
        The term GPA is computed over classes that have a grade; if none do,
        it is 0.

    """
    assignments = Assignments(assignments)
    by_class = assignments.group_by(lambda a: a.class_id)

    classes = {
        class_id: summarize_class(by_class.get(class_id, []), scheme)
        for class_id, scheme in schemes_by_class.items()
    }

    grades = [c.current_grade for c in classes.values() if c.current_grade is not None]
    term_gpa = calculate_gpa(grades) if grades else 0.0
    if math.isnan(term_gpa):
        term_gpa = 0.0

    return TermSummary(
        classes=classes,
        term_gpa=term_gpa,
        graded_count=len(assignments.graded()),
        total_count=len(assignments),
        average_grade=average_percentage(assignments),
    )


def grade_color(percentage: typing.Optional[float]) -> str:
    """The display color token for a class percentage."""
    if percentage is None:
        return "text-muted-foreground"
    if percentage >= 90:
        return "text-green-600"
    if percentage >= 80:
        return "text-blue-600"
    if percentage >= 70:
        return "text-yellow-600"
    return "text-red-600"
