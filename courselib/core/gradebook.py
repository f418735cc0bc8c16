"""Core functions for computing a class grade from a grading scheme."""

from __future__ import annotations

import logging
import math
import typing

import numpy as np
import pandas as pd

from ..policies.drops import drop_lowest
from ..scales import get_letter_grade
from .assignments import Assignment, Assignments
from .scheme import GradingMode, GradingScheme

logger = logging.getLogger(__name__)


# private helper functions -------------------------------------------------------------


def _coerce_scheme(scheme) -> GradingScheme:
    """Accept a GradingScheme, or a flat record with a reserved ``mode`` key."""
    if isinstance(scheme, GradingScheme):
        return scheme
    return GradingScheme.from_flat(scheme)


def _score_table(assignments: typing.Iterable[Assignment]) -> pd.DataFrame:
    """A two-column table of the type and percentage of each graded assignment.

    Assignments that are not completed and graded are left out.

    """
    assignments = [a for a in assignments if a.is_graded]
    return pd.DataFrame(
        {
            "type": pd.Series([a.type for a in assignments], dtype=object),
            "percentage": pd.Series([a.percentage for a in assignments], dtype=float),
        }
    )


def _percentages_by_category(assignments, scheme: GradingScheme) -> dict[str, list]:
    """The percentages of the assignments in each category of the scheme.

    Assignments are matched to categories by exact type. Categories with no
    assignments map to an empty list.

    """
    table = _score_table(assignments)
    return {
        name: list(table.loc[table["type"] == name, "percentage"])
        for name in scheme.category_names
    }


def _category_average(percentages: list, n_dropped: int) -> float:
    kept = drop_lowest(percentages, n_dropped)
    return float(np.mean(kept))


# public functions ---------------------------------------------------------------------


def category_averages(assignments, scheme) -> pd.Series:
    """The average percentage in each category, after drops.

    Parameters
    ----------
    assignments : Iterable[Assignment]
        The assignments to use. Only those that are completed and graded
        count.
    scheme : GradingScheme
        The grading scheme defining the categories.

    Returns
    -------
    pandas.Series
        A series indexed by category name. Categories without any assignments
        have an average of `nan`.

    """
    scheme = _coerce_scheme(scheme)
    by_category = _percentages_by_category(assignments, scheme)

    averages = {}
    for name, category in scheme.items():
        percentages = by_category[name]
        if percentages:
            averages[name] = _category_average(percentages, category.drop_lowest)
        else:
            averages[name] = np.nan

    return pd.Series(averages, index=scheme.category_names, dtype=float)


def calculate_class_grade(assignments, scheme) -> float:
    """Compute a class percentage from assignments and a grading scheme.

    Assignments are grouped into the scheme's categories by their type, which
    must exactly equal a category name; see
    :func:`courselib.find_matching_grading_category` for canonicalizing types
    beforehand. Within each category, the lowest scores are dropped according
    to the category's ``drop_lowest`` and the rest are averaged.

    Categories in which no assignment has been graded are ignored entirely: they
    contribute neither score nor weight. In percentage mode this means the grade
    is renormalized to the weight that has actually been graded so far.

    Parameters
    ----------
    assignments : Iterable[Assignment]
        The assignments to use. Only those that are completed and graded
        count; the rest are ignored.
    scheme : GradingScheme
        The grading scheme. A flat record with a ``mode`` key is also accepted.

    Returns
    -------
    float
        The class percentage, between 0 and 100 unless extra credit was earned.
        If no category has any graded work, this is 0. Malformed grades (such
        as a maximum of zero points) result in `nan` or `inf` rather than an
        error; callers should check for this before displaying the result.

    Example
    -------
    >>> scheme = GradingScheme({"Homework": (50, 2), "Quiz": (50, 1)})
    >>> calculate_class_grade([
    ...     Assignment("hw1", "Homework", grade=80, max_points=100, completed=True),
    ...     Assignment("hw2", "Homework", grade=100, max_points=100, completed=True),
    ...     Assignment("q1", "Quiz", grade=90, max_points=100, completed=True),
    ... ], scheme)
    90.0

    """
    scheme = _coerce_scheme(scheme)
    by_category = _percentages_by_category(assignments, scheme)

    weighted_score = 0.0
    total_weight = 0.0

    for name, category in scheme.items():
        percentages = by_category[name]
        if not percentages:
            logger.debug("Category %r has no graded work; skipping.", name)
            continue

        average = _category_average(percentages, category.drop_lowest)

        if scheme.mode is GradingMode.PERCENTAGE:
            weighted_score += average * (category.weight / 100)
        else:
            weighted_score += (average / 100) * category.weight

        total_weight += category.weight

    if total_weight == 0:
        return 0.0

    if scheme.mode is GradingMode.PERCENTAGE:
        return weighted_score / (total_weight / 100)
    else:
        return (weighted_score / total_weight) * 100


def calculate_locked_weight(assignments, scheme) -> float:
    """The share of the grading scheme's weight already determined by graded work.

    Each category contributes its weight in proportion to how many of its
    expected items have been graded, capped at its full weight. A category
    expecting no items is fully locked in as soon as it has one.

    Parameters
    ----------
    assignments : Iterable[Assignment]
        The assignments. Only those that are completed and graded count.
    scheme : GradingScheme
        The grading scheme.

    Returns
    -------
    float
        The locked-in weight, in the same units as the category weights.

    """
    scheme = _coerce_scheme(scheme)
    counts = _score_table(assignments)["type"].value_counts()

    locked = 0.0
    for name, category in scheme.items():
        n_graded = int(counts.get(name, 0))
        if n_graded == 0:
            continue

        if category.count == 0:
            ratio = 1.0
        else:
            ratio = min(1.0, n_graded / category.count)

        locked += category.weight * ratio

    return locked


def predict_final_grade(assignments, scheme, target_grade: float) -> dict[str, float]:
    """Determine the average needed on the remaining work to reach a target grade.

    The needed average is the same for every category that still has
    ungraded items; no distinction is made between categories.

    Parameters
    ----------
    assignments : Iterable[Assignment]
        The assignments. Only those that are completed and graded count.
    scheme : GradingScheme
        The grading scheme.
    target_grade : float
        The desired class percentage.

    Returns
    -------
    dict[str, float]
        A mapping from each category with fewer graded items than expected to
        the average percentage needed on the rest of the term's work, clamped to
        [0, 100]. If the scheme's weight is already fully accounted for, the
        mapping is empty.

    """
    scheme = _coerce_scheme(scheme)
    assignments = list(assignments)

    current_grade = calculate_class_grade(assignments, scheme)
    current_weight = calculate_locked_weight(assignments, scheme)
    remaining_weight = 100 - current_weight

    if remaining_weight <= 0:
        return {}

    needed_points = target_grade * 100 - current_grade * current_weight
    needed_average = needed_points / remaining_weight

    counts = _score_table(assignments)["type"].value_counts()

    predictions = {}
    for name, category in scheme.items():
        if int(counts.get(name, 0)) < category.count:
            predictions[name] = max(0.0, min(100.0, needed_average))

    return predictions


# ClassGradebook =======================================================================


class ClassGradebook:
    """The assignments and grading scheme of a single class.

    Computes the summative quantities of the class -- its grade, letter grade,
    and the average needed to reach a target -- from the assignments that are
    completed and graded. Ungraded assignments are kept, but ignored by every
    computation.

    Parameters
    ----------
    assignments : Iterable[Assignment]
        All of the class's assignments.
    scheme : GradingScheme
        The class's grading scheme. A flat record with a ``mode`` key is also
        accepted.

    Attributes
    ----------
    assignments : Assignments
        All of the class's assignments. Can be modified.
    scheme : GradingScheme
        The grading scheme. Can be modified.

    """

    def __init__(self, assignments, scheme):
        self.assignments = Assignments(assignments)
        self.scheme = _coerce_scheme(scheme)

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} object with "
            f"{len(self.assignments)} assignments "
            f"and {len(self.scheme)} categories>"
        )

    @property
    def graded(self) -> Assignments:
        """The assignments that count towards the grade.

        This is a dynamically-computed property; it should not be modified.

        """
        return self.assignments.graded()

    @property
    def category_scores(self) -> pd.Series:
        """The average percentage in each category, after drops.

        Categories with no graded work are `nan`.

        This is a dynamically-computed property; it should not be modified.

        """
        return category_averages(self.graded, self.scheme)

    @property
    def overall_score(self) -> float:
        """The class percentage, computed from graded assignments.

        This is a dynamically-computed property; it should not be modified.

        """
        return calculate_class_grade(self.graded, self.scheme)

    @property
    def letter_grade(self) -> str:
        """The letter grade, or "N/A" if there is no valid grade yet.

        This is a dynamically-computed property; it should not be modified.

        """
        score = self.overall_score
        if not self.graded or math.isnan(score):
            return "N/A"
        return get_letter_grade(score)

    @property
    def locked_weight(self) -> float:
        """The share of the scheme's weight already determined by graded work.

        This is a dynamically-computed property; it should not be modified.

        """
        return calculate_locked_weight(self.graded, self.scheme)

    def predict(self, target_grade: float) -> dict[str, float]:
        """The average needed in each unfinished category to reach a target.

        See :func:`predict_final_grade`.

        """
        return predict_final_grade(self.graded, self.scheme, target_grade)

    def copy(self) -> "ClassGradebook":
        """Copy the gradebook.

        Returns
        -------
        ClassGradebook
            A new gradebook with all attributes copied.

        """
        return self.__class__(
            [a.replace() for a in self.assignments], self.scheme.copy()
        )
