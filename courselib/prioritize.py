"""Ranking assignments by how much attention they need."""

from __future__ import annotations

import dataclasses
import logging
import typing

import pandas as pd

from .core.assignments import Assignment
from .settings import UserSettings

logger = logging.getLogger(__name__)


#: importance of each canonical assignment type; others are 50
TYPE_IMPORTANCE = {
    "Final": 100,
    "Midterm": 90,
    "Test": 85,
    "Exam": 85,
    "Project": 75,
    "Essay": 70,
    "Quiz": 60,
    "Homework": 50,
    "Lab": 45,
    "Discussion": 30,
    "Worksheet": 25,
}

DEFAULT_IMPORTANCE = 50

#: (hours until due, urgency) tiers, checked in order
URGENCY_TIERS = (
    (24, 100),
    (72, 80),
    (168, 60),
    (336, 40),
)

#: (percentage, impact) tiers, checked in order
IMPACT_TIERS = (
    (60, 90),
    (70, 75),
    (80, 60),
    (90, 45),
)

FACTOR_WEIGHTS = {
    "urgency": 0.4,
    "importance": 0.3,
    "impact": 0.2,
    "completion": 0.1,
}

#: (minimum score, label, color) buckets, checked in order
PRIORITY_BUCKETS = (
    (80, "Very High", "text-red-600"),
    (60, "High", "text-orange-600"),
    (40, "Medium", "text-yellow-600"),
    (20, "Low", "text-blue-600"),
)


# types --------------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class PriorityFactors:
    """The components of a priority score, each between 0 and 100."""

    urgency: float
    importance: float
    impact: float
    completion: float


@dataclasses.dataclass(frozen=True)
class PriorityScore:
    """The priority of a single assignment."""

    assignment_id: str
    score: float
    factors: PriorityFactors


# factors ------------------------------------------------------------------------------


def urgency_score(due: pd.Timestamp, now: pd.Timestamp) -> float:
    """Score how soon something is due.

    Work that is already past due scores 0, the same as work whose due date
    could not be parsed; overdue work therefore sinks below anything that is
    still upcoming.

    """
    hours_until_due = (due - now) / pd.Timedelta(hours=1)

    if pd.isna(hours_until_due) or hours_until_due < 0:
        return 0

    for hours, score in URGENCY_TIERS:
        if hours_until_due < hours:
            return score
    else:
        return 20


def importance_score(type_: str, weight: typing.Optional[float] = None) -> float:
    """Score an assignment's importance from its type, scaled up by its weight."""
    score = TYPE_IMPORTANCE.get(type_, DEFAULT_IMPORTANCE)

    if weight:
        score = score * (1 + weight / 100)

    return min(score, 100)


def impact_score(
    grade: typing.Optional[float],
    max_points: typing.Optional[float],
    completed: bool,
) -> float:
    """Score how much attention could improve an assignment's grade.

    Completed work has no impact. Work without a grade is assumed to have a
    moderate impact; otherwise the lower the grade, the higher the impact.

    """
    if completed:
        return 0

    if grade is None:
        return 60

    percentage = (grade / max_points) * 100 if max_points else grade

    for threshold, score in IMPACT_TIERS:
        if percentage < threshold:
            return score
    else:
        return 30


def completion_score(completed: bool) -> float:
    return 0 if completed else 100


# scoring ------------------------------------------------------------------------------


def _resolve_now(now) -> pd.Timestamp:
    return pd.Timestamp.now() if now is None else pd.Timestamp(now)


def score_assignment(assignment: Assignment, now=None) -> PriorityScore:
    """Compute the priority score of a single assignment.

    The score is a weighted sum of four factors: 40% urgency, 30% importance,
    20% impact and 10% completion.

    Parameters
    ----------
    assignment : Assignment
        The assignment to score.
    now : Optional[Union[pandas.Timestamp, datetime.datetime, str]]
        The current local time, without a timezone; due dates are naive local
        times and cannot be compared with an aware timestamp. Default: the
        current time.

    Returns
    -------
    PriorityScore

    """
    now = _resolve_now(now)

    factors = PriorityFactors(
        urgency=urgency_score(assignment.due, now),
        importance=importance_score(assignment.type, assignment.weight),
        impact=impact_score(
            assignment.grade, assignment.max_points, assignment.completed
        ),
        completion=completion_score(assignment.completed),
    )

    score = sum(
        getattr(factors, name) * weight for name, weight in FACTOR_WEIGHTS.items()
    )

    return PriorityScore(assignment.id, score, factors)


def get_priority_scores(assignments, now=None) -> list[PriorityScore]:
    """Score each assignment, in the order given.

    Parameters
    ----------
    assignments : Iterable[Assignment]
        The assignments to score.
    now : Optional[Union[pandas.Timestamp, datetime.datetime, str]]
        The current local time, without a timezone; due dates are naive local
        times and cannot be compared with an aware timestamp. Default: the
        current time.

    Returns
    -------
    list[PriorityScore]

    """
    now = _resolve_now(now)
    return [score_assignment(a, now) for a in assignments]


def prioritize_assignments(assignments, settings: UserSettings = None, now=None):
    """Order assignments from highest to lowest priority.

    Parameters
    ----------
    assignments : Iterable[Assignment]
        The assignments to order.
    settings : Optional[UserSettings]
        The user's settings. If smart prioritization is turned off, the
        assignments are returned as given. Default: the default settings, in
        which it is turned on.
    now : Optional[Union[pandas.Timestamp, datetime.datetime, str]]
        The current local time, without a timezone; due dates are naive local
        times and cannot be compared with an aware timestamp. Default: the
        current time.

    Returns
    -------
    Sequence[Assignment]
        If smart prioritization is on, a new list sorted by descending priority
        score. Assignments with equal scores keep their relative order. If it
        is off, the `assignments` object itself.

    """
    if settings is None:
        settings = UserSettings()

    if not settings.smart_prioritization:
        logger.debug("Smart prioritization is disabled; keeping the given order.")
        return assignments

    assignments = list(assignments)
    scores = get_priority_scores(assignments, now)
    order = sorted(range(len(scores)), key=lambda i: scores[i].score, reverse=True)
    return [assignments[i] for i in order]


def priority_table(assignments, now=None) -> pd.DataFrame:
    """A table of priority scores and their factors, indexed by assignment id.

    The columns are ``urgency``, ``importance``, ``impact``, ``completion``,
    ``score`` and ``label``. Rows are in the order given.

    """
    rows = [
        {
            "id": s.assignment_id,
            **dataclasses.asdict(s.factors),
            "score": s.score,
            "label": get_priority_label(s.score),
        }
        for s in get_priority_scores(assignments, now)
    ]
    columns = ["id", *FACTOR_WEIGHTS, "score", "label"]
    return pd.DataFrame(rows, columns=columns).set_index("id")


# display ------------------------------------------------------------------------------


def get_priority_label(score: float) -> str:
    """Bucket a priority score into a label, from "Very High" to "Very Low"."""
    for minimum, label, _ in PRIORITY_BUCKETS:
        if score >= minimum:
            return label
    else:
        return "Very Low"


def get_priority_color(score: float) -> str:
    """The display color token for a priority score's bucket."""
    for minimum, _, color in PRIORITY_BUCKETS:
        if score >= minimum:
            return color
    else:
        return "text-gray-600"
