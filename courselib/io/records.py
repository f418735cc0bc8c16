"""Reading assignments and grading schemes from the application's records."""

from __future__ import annotations

import typing

import pandas as pd

from ..core.assignments import Assignment, Assignments
from ..core.scheme import GradingScheme

# record key -> Assignment field
_FIELDS = {
    "title": "title",
    "grade": "grade",
    "maxPoints": "max_points",
    "dueDate": "due_date",
    "dueTime": "due_time",
    "completed": "completed",
    "weight": "weight",
    "classId": "class_id",
}

_NUMERIC_FIELDS = {"grade", "max_points", "weight"}
_STRING_FIELDS = {"title", "due_date", "due_time"}

# columns read from CSV as text, so that ids and times keep their leading zeros
_STRING_COLUMNS = {"_id", "id", "type", "title", "dueDate", "dueTime", "classId"}


def _is_missing(value) -> bool:
    return value is None or (not isinstance(value, str) and pd.isna(value))


def read_assignment(record: typing.Mapping) -> Assignment:
    """Create an :class:`Assignment` from a record with camelCase keys.

    The id is read from ``_id``, or from ``id`` if there is no ``_id``.
    Missing or empty values take the assignment's defaults.

    Raises
    ------
    ValueError
        If the record has no id or no type.

    """
    assignment_id = record.get("_id", record.get("id"))
    if _is_missing(assignment_id):
        raise ValueError("Assignment record is missing required field: _id.")

    type_ = record.get("type")
    if _is_missing(type_):
        raise ValueError(f"Assignment record {assignment_id} is missing required field: type.")

    kwargs = {}
    for key, field in _FIELDS.items():
        value = record.get(key)
        if _is_missing(value):
            continue

        if field in _NUMERIC_FIELDS:
            value = float(value)
        elif field in _STRING_FIELDS:
            value = str(value)
        elif field == "completed":
            value = bool(value)

        kwargs[field] = value

    return Assignment(id=str(assignment_id), type=str(type_), **kwargs)


def read_assignments(records: typing.Iterable[typing.Mapping]) -> Assignments:
    """Create :class:`Assignments` from an iterable of records."""
    return Assignments(read_assignment(r) for r in records)


def read_grading_scheme(record: typing.Mapping) -> GradingScheme:
    """Create a :class:`GradingScheme` from a class's ``gradingScheme`` record.

    Two forms are accepted. The stored form has a list of categories:

        {"mode": "points", "categories": [{"name": "Homework", "weight": 100, "count": 10}]}

    The flat form has a reserved ``mode`` key beside the categories:

        {"mode": "points", "Homework": {"weight": 100, "count": 10}}

    """
    if "categories" in record and not isinstance(
        record["categories"], typing.Mapping
    ):
        return GradingScheme.from_categories(record["categories"], mode=record.get("mode"))
    return GradingScheme.from_flat(record)


def read_csv(path) -> Assignments:
    """Read assignments from a CSV file.

    The columns are the same as the keys of an assignment record: ``_id`` (or
    ``id``), ``type``, and any of ``title``, ``grade``, ``maxPoints``,
    ``dueDate``, ``dueTime``, ``completed``, ``weight`` and ``classId``.

    Parameters
    ----------
    path : str or pathlib.Path
        Path to the CSV file that will be read.

    Returns
    -------
    Assignments

    Raises
    ------
    ValueError
        If a row has no id or type.

    """
    columns = pd.read_csv(path, nrows=0).columns
    table = pd.read_csv(
        path, dtype={c: str for c in columns if c in _STRING_COLUMNS}
    )
    return read_assignments(table.to_dict(orient="records"))
