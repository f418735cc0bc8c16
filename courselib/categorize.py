"""Mapping free-text assignment types onto a canonical set of categories."""

from __future__ import annotations

import collections.abc
import dataclasses
import functools
import operator
import typing

from .core.assignments import Assignment
from .core.scheme import GradingScheme
from .predicates import Predicate, equal_ignoring_case, never, overlapping


@dataclasses.dataclass(frozen=True)
class CategoryMapping:
    """A canonical category name and the free-text variations that map onto it.

    Attributes
    ----------
    standard_name : str
        The canonical name of the category.
    variations : tuple[str, ...]
        Lowercase spellings of the category.
    priority : int
        When a type matches several categories, the one with the highest
        priority is used.

    """

    standard_name: str
    variations: typing.Tuple[str, ...]
    priority: int

    @property
    def exact(self) -> Predicate:
        """Matches a type equal to the standard name."""
        return equal_ignoring_case(self.standard_name)

    @property
    def fuzzy(self) -> Predicate:
        """Matches a type that contains, or is contained in, one of the variations."""
        return functools.reduce(operator.or_, map(overlapping, self.variations), never())


CATEGORY_MAPPINGS = (
    CategoryMapping(
        "Homework",
        (
            "homework", "hw", "home work", "homeworks", "assignment", "assignments",
            "problem set", "problem sets", "ps", "practice", "exercises", "exercise",
        ),
        priority=1,
    ),
    CategoryMapping(
        "Quiz",
        ("quiz", "quizzes", "pop quiz", "weekly quiz", "chapter quiz", "unit quiz"),
        priority=3,
    ),
    CategoryMapping(
        "Test",
        ("test", "tests", "exam", "exams", "examination", "unit test", "chapter test"),
        priority=4,
    ),
    CategoryMapping(
        "Midterm",
        (
            "midterm", "midterms", "mid-term", "mid term", "midterm exam",
            "midterm examination", "middle exam", "interim exam",
        ),
        priority=5,
    ),
    CategoryMapping(
        "Final",
        (
            "final", "finals", "final exam", "final examination", "final test",
            "cumulative exam", "comprehensive exam", "end of term exam",
        ),
        priority=6,
    ),
    CategoryMapping(
        "Lab",
        (
            "lab", "labs", "laboratory", "lab report", "lab assignment", "lab work",
            "practical", "practicals", "lab exercise",
        ),
        priority=2,
    ),
    CategoryMapping(
        "Worksheet",
        (
            "worksheet", "worksheets", "work sheet", "work sheets", "activity sheet",
            "practice sheet", "study sheet",
        ),
        priority=1,
    ),
    CategoryMapping(
        "Project",
        (
            "project", "projects", "group project", "individual project",
            "research project", "term project", "capstone", "portfolio",
        ),
        priority=3,
    ),
    CategoryMapping(
        "Essay",
        (
            "essay", "essays", "paper", "papers", "research paper", "term paper",
            "writing assignment", "composition", "report", "reports",
        ),
        priority=3,
    ),
    CategoryMapping(
        "Discussion",
        (
            "discussion", "discussions", "forum", "participation", "comment",
            "discussion post", "discussion board", "online discussion",
        ),
        priority=1,
    ),
)
"""The canonical categories, in order. Earlier entries win priority ties."""


# categorizing -------------------------------------------------------------------------


def categorize_assignment_type(input_type: str) -> str:
    """Map a free-text assignment type onto its canonical category name.

    The rules are applied in order:

    1. If the type, ignoring case and surrounding whitespace, equals a
       category's standard name, that category is used. This makes the
       canonical names fixed points: "Test" maps to "Test", even though it
       also overlaps the variation "final test" of the higher-priority
       "Final".
    2. Otherwise, every category with a variation that contains the type, or is
       contained in it, is a candidate. "Final Exam" is a candidate for both
       "Test" (via "exam") and "Final".
    3. Among several candidates, the one with the highest priority wins. Ties
       go to the category listed first in :data:`CATEGORY_MAPPINGS`.

    Parameters
    ----------
    input_type : str
        The free-text type.

    Returns
    -------
    str
        The canonical category name. If nothing matches, `input_type` is
        returned unchanged. An empty type becomes "Other".

    Example
    -------
    >>> categorize_assignment_type("HW")
    'Homework'
    >>> categorize_assignment_type("Final Exam")
    'Final'
    >>> categorize_assignment_type("Bake Sale")
    'Bake Sale'

    """
    if not input_type or not isinstance(input_type, str):
        return input_type or "Other"

    matches = [m for m in CATEGORY_MAPPINGS if m.exact(input_type)]
    if not matches:
        matches = [m for m in CATEGORY_MAPPINGS if m.fuzzy(input_type)]

    if not matches:
        return input_type

    # max() keeps the first of several equal priorities
    return max(matches, key=lambda m: m.priority).standard_name


def _category_names(grading_categories) -> list[str]:
    if isinstance(grading_categories, GradingScheme):
        return grading_categories.category_names

    names = []
    for category in grading_categories:
        if isinstance(category, collections.abc.Mapping):
            names.append(category["name"])
        else:
            names.append(category)
    return names


def find_matching_grading_category(assignment_type: str, grading_categories) -> str:
    """Find the grading category that an assignment type belongs in.

    Parameters
    ----------
    assignment_type : str
        The assignment's free-text type.
    grading_categories
        The class's grading categories: a :class:`GradingScheme`, a sequence of
        ``{"name": ...}`` records, or a sequence of names.

    Returns
    -------
    str
        The name of the first category that matches, trying in turn:

        1. a category equal (ignoring case) to the canonical type;
        2. a category overlapping the canonical type;
        3. a category overlapping the original type.

        If none match, `assignment_type` is returned unchanged and should be
        treated as uncategorized.

    """
    if not assignment_type or not grading_categories:
        return assignment_type

    names = _category_names(grading_categories)
    if not names:
        return assignment_type

    standardized = categorize_assignment_type(assignment_type)

    for predicate in (
        equal_ignoring_case(standardized),
        overlapping(standardized),
        overlapping(assignment_type),
    ):
        for name in names:
            if predicate(name):
                return name

    return assignment_type


# suggestions and bulk standardization -------------------------------------------------


def get_suggested_grading_categories() -> list[dict]:
    """A starter set of grading categories whose weights sum to 100.

    A new list is returned on every call, so it may be modified freely.

    """
    return [
        {"name": "Homework", "weight": 30, "count": 10, "dropLowest": 1},
        {"name": "Quiz", "weight": 20, "count": 6, "dropLowest": 1},
        {"name": "Test", "weight": 25, "count": 3, "dropLowest": 0},
        {"name": "Final", "weight": 25, "count": 1, "dropLowest": 0},
    ]


def suggested_grading_scheme() -> GradingScheme:
    """The suggested categories as a percentage-mode :class:`GradingScheme`."""
    return GradingScheme.from_categories(get_suggested_grading_categories())


def standardize_assignment_types(assignments):
    """Canonicalize the type of every assignment.

    Parameters
    ----------
    assignments : Iterable[Union[Assignment, dict]]
        Assignments, or assignment records with a ``"type"`` key.

    Returns
    -------
    list
        New assignments (or records) with canonical types. The inputs are not
        modified.

    """
    result = []
    for assignment in assignments:
        if isinstance(assignment, Assignment):
            result.append(
                assignment.replace(type=categorize_assignment_type(assignment.type))
            )
        else:
            result.append(
                {**assignment, "type": categorize_assignment_type(assignment["type"])}
            )
    return result
