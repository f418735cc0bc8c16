"""Represents assignments and collections of assignments."""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Sequence

import numpy as np
import pandas as pd


# Assignment ===========================================================================


@dataclasses.dataclass
class Assignment:
    """A single assignment, as supplied by the application's data store.

    Attributes
    ----------
    id : str
        Opaque identifier of the assignment. Must be unique.
    type : str
        The assignment's type. Either free text ("hw", "Quiz 2") or one of the
        canonical names produced by :func:`courselib.categorize_assignment_type`.
    title : str
        Display title. Default: ``""``.
    grade : Optional[float]
        The number of points earned. `None` if the assignment is ungraded.
    max_points : Optional[float]
        The number of points possible. If `None`, `grade` is itself interpreted
        as a percentage.
    due_date : str
        The due date, as ``YYYY-MM-DD``.
    due_time : str
        The due time of day, as ``HH:MM`` on a 24 hour clock.
    completed : bool
        Whether the student has completed the assignment.
    weight : Optional[float]
        An optional weight used when scoring the assignment's importance. This
        is unrelated to the weight of the assignment's category in a grading
        scheme.
    class_id : Optional[str]
        The class that the assignment belongs to.

    """

    id: str
    type: str
    title: str = ""
    grade: typing.Optional[float] = None
    max_points: typing.Optional[float] = None
    due_date: str = ""
    due_time: str = ""
    completed: bool = False
    weight: typing.Optional[float] = None
    class_id: typing.Optional[str] = None

    @property
    def is_graded(self) -> bool:
        """Whether the assignment counts towards a class grade.

        Only assignments which are completed *and* have a grade recorded count.

        """
        return self.completed and self.grade is not None

    @property
    def percentage(self) -> float:
        """The grade as a percentage between 0 and 100.

        If the assignment has no grade, this is `nan`. If the maximum number of
        points is zero, the result is `nan` or `inf`; it is not an error.

        """
        if self.grade is None:
            return np.nan

        if self.max_points is None:
            return float(self.grade)

        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(self.grade) / np.float64(self.max_points) * 100)

    @property
    def due(self) -> pd.Timestamp:
        """The due date and time combined into a single (local) timestamp.

        If the date or time cannot be parsed, this is `NaT`.

        """
        return pd.to_datetime(f"{self.due_date} {self.due_time}".strip(), errors="coerce")

    def replace(self, **changes) -> "Assignment":
        """Create a copy of the assignment with some fields changed."""
        return dataclasses.replace(self, **changes)


# Assignments ==========================================================================


class Assignments(Sequence):
    """A sequence of assignments.

    Behaves essentially like a standard Python list of :class:`Assignment`
    objects, but has some additional methods which make it faster to select
    and group them.

    """

    def __init__(self, assignments: typing.Iterable[Assignment] = ()):
        self._assignments = list(assignments)

    def __contains__(self, element):
        return element in self._assignments

    def __len__(self):
        return len(self._assignments)

    def __iter__(self):
        return iter(self._assignments)

    def __eq__(self, other):
        return list(self) == list(other)

    def __add__(self, other):
        """Concatenates :class:`Assignments`."""
        return Assignments(self._assignments + list(other))

    def __getitem__(self, index):
        return self._assignments[index]

    def __repr__(self):
        return f"Assignments(ids={self.ids})"

    def _repr_pretty_(self, p, cycle):
        p.text("Assignments(ids=[\n")
        for assignment in self._assignments:
            p.text(f"  {assignment.id!r} ({assignment.type})\n")
        p.text("])")

    @property
    def ids(self) -> list[str]:
        """The ids of the assignments, in order."""
        return [a.id for a in self._assignments]

    def graded(self) -> "Assignments":
        """Return only those assignments that are completed and have a grade.

        Returns
        -------
        Assignments
            The assignments which count towards a class grade.

        """
        return self.__class__(a for a in self._assignments if a.is_graded)

    def of_type(self, type_: str) -> "Assignments":
        """Return only those assignments whose type is exactly `type_`.

        Parameters
        ----------
        type_ : str
            The type to search for. The comparison is case-sensitive.

        Returns
        -------
        Assignments
            Only those assignments of the given type.

        """
        return self.__class__(a for a in self._assignments if a.type == type_)

    def group_by(
        self, to_key: typing.Callable[[Assignment], str]
    ) -> dict[str, "Assignments"]:
        """Group the assignments according to a key function.

        Parameters
        ----------
        to_key : Callable[[Assignment], str]
            A function which accepts an assignment and returns a string that
            will be used as the assignment's key in the resulting dictionary.

        Returns
        -------
        dict[str, Assignments]
            A dictionary mapping keys to collections of assignments, in order of
            first appearance.

        Example
        -------
        >>> assignments.group_by(lambda a: a.type)
        {'Homework': Assignments(ids=['hw1', 'hw2']), 'Quiz': Assignments(ids=['q1'])}

        """
        dct = {}
        for assignment in self:
            key = to_key(assignment)
            if key not in dct:
                dct[key] = []
            dct[key].append(assignment)

        return {key: Assignments(value) for key, value in dct.items()}

    def to_frame(self) -> pd.DataFrame:
        """A table with one row per assignment, indexed by id.

        The columns are the assignment fields, along with the computed
        ``percentage`` and ``due`` columns.

        """
        rows = [
            {
                **dataclasses.asdict(a),
                "percentage": a.percentage,
                "due": a.due,
            }
            for a in self._assignments
        ]
        columns = [f.name for f in dataclasses.fields(Assignment)] + ["percentage", "due"]
        table = pd.DataFrame(rows, columns=columns)
        table["percentage"] = table["percentage"].astype(float)
        return table.set_index("id")
