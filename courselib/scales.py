"""Mapping percentages to letter grades and GPA points."""

from __future__ import annotations

import collections
import typing

import pandas as pd


# helper functions =====================================================================


def _check_that_scale_monotonically_decreases(scale):
    prev = float("inf")
    for threshold in scale.values():
        if threshold >= prev:
            raise ValueError("Scale is not monotonically decreasing.")
        prev = threshold


def _validate_scale(scale):
    if scale is None:
        return DEFAULT_SCALE

    if list(scale) != list(DEFAULT_SCALE):
        raise ValueError(
            f"Scale has invalid letter grades. Must be in {list(DEFAULT_SCALE)}"
        )
    _check_that_scale_monotonically_decreases(scale)
    return scale


# common scales ========================================================================

DEFAULT_SCALE = collections.OrderedDict(
    [
        ("A+", 97),
        ("A", 93),
        ("A-", 90),
        ("B+", 87),
        ("B", 83),
        ("B-", 80),
        ("C+", 77),
        ("C", 73),
        ("C-", 70),
        ("D+", 67),
        ("D", 65),
        ("F", 0),
    ]
)
"""The default grading scale. Thresholds are percentages between 0 and 100."""

GRADE_POINTS = collections.OrderedDict(
    [
        ("A+", 4.0),
        ("A", 4.0),
        ("A-", 3.7),
        ("B+", 3.3),
        ("B", 3.0),
        ("B-", 2.7),
        ("C+", 2.3),
        ("C", 2.0),
        ("C-", 1.7),
        ("D+", 1.3),
        ("D", 1.0),
        ("F", 0.0),
    ]
)
"""Points on a 4.0 scale earned by each letter grade."""


# public functions =====================================================================


def get_letter_grade(percentage: float, scale=None) -> str:
    """Map a single percentage to a letter grade.

    This is a total function: anything below the lowest threshold, as well as
    `nan`, maps to "F".

    Parameters
    ----------
    percentage : float
        A percentage between 0 and 100 (values outside are allowed).
    scale : OrderedDict
        An ordered dictionary mapping letter grades to their thresholds.
        Default: :attr:`DEFAULT_SCALE`.

    Returns
    -------
    str
        The letter grade.

    """
    scale = _validate_scale(scale)

    for letter, threshold in scale.items():
        if percentage >= threshold:
            return letter
    else:
        return "F"


def map_scores_to_letter_grades(scores, scale=None):
    """Map each percentage to a letter grade.

    Parameters
    ----------
    scores : pandas.Series
        A series containing percentages between 0 and 100.
    scale : OrderedDict
        An ordered dictionary mapping letter grades to their thresholds.
        Default: :attr:`DEFAULT_SCALE`.

    Returns
    -------
    pandas.Series
        A series containing the resulting letter grades.

    Raises
    ------
    ValueError
        If the provided scale has invalid letter grades, or is not
        monotonically decreasing.

    """
    scale = _validate_scale(scale)
    return pd.Series(scores, dtype=float).apply(get_letter_grade, scale=scale)


def gpa_points(percentage: float) -> float:
    """The 4.0 scale points earned by a class percentage."""
    return GRADE_POINTS[get_letter_grade(percentage)]


def calculate_gpa(percentages: typing.Iterable[float]) -> float:
    """Compute a GPA from a collection of class percentages.

    Each percentage is converted to 4.0 scale points and the points are
    averaged, with every class counting equally.

    Parameters
    ----------
    percentages : Iterable[float]
        The class percentages.

    Returns
    -------
    float
        The GPA. If `percentages` is empty, this is `nan`; callers should check
        for this before displaying the result.

    Example
    -------
    >>> calculate_gpa([93, 85, 73])
    3.0

    """
    points = pd.Series([gpa_points(p) for p in percentages], dtype=float)
    return float(points.mean())
