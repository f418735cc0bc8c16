"""Parsing grades pasted as free text, and matching them to assignments."""

from __future__ import annotations

import dataclasses
import re
import typing

from ..predicates import overlapping

_NUMBER = r"(\d+(?:\.\d+)?)"

# tried in order; the first that matches a line wins
GRADE_PATTERNS = (
    # "Assignment Name: 95/100"
    re.compile(rf"(.+?):\s*{_NUMBER}\s*/\s*{_NUMBER}"),
    # "Assignment Name - 95/100"
    re.compile(rf"(.+?)\s*-\s*{_NUMBER}\s*/\s*{_NUMBER}"),
    # "Assignment Name, 95, 100"
    re.compile(rf"(.+?),\s*{_NUMBER},\s*{_NUMBER}"),
    # "Assignment Name 95 100"
    re.compile(rf"(.+?)\s+{_NUMBER}\s+{_NUMBER}\s*$"),
)


@dataclasses.dataclass
class ParsedGrade:
    """A grade read from text, possibly matched to an existing assignment."""

    assignment_title: str
    grade: float
    max_points: float
    confidence: float = 0.8
    matched: bool = False
    assignment_id: typing.Optional[str] = None
    type: typing.Optional[str] = None
    class_id: typing.Optional[str] = None


def parse_grade_line(line: str) -> typing.Optional[ParsedGrade]:
    """Parse a single line such as ``"Homework 1: 95/100"``.

    Returns `None` if no pattern matches, or if the maximum is not positive.

    """
    for pattern in GRADE_PATTERNS:
        match = pattern.search(line)
        if match is None:
            continue

        title = match.group(1).strip()
        grade = float(match.group(2))
        max_points = float(match.group(3))

        if max_points > 0:
            return ParsedGrade(title, grade, max_points)

    return None


def parse_grades_from_text(text: str) -> list[ParsedGrade]:
    """Parse one grade per line from text; blank and unparseable lines are skipped."""
    grades = []
    for line in text.splitlines():
        if not line.strip():
            continue

        grade = parse_grade_line(line)
        if grade is not None:
            grades.append(grade)

    return grades


def match_grades_to_assignments(grades, assignments) -> list[ParsedGrade]:
    """Match each parsed grade to the first assignment with an overlapping title.

    Titles overlap when either contains the other, ignoring case. Matched grades
    record the assignment's id, type and class. New objects are returned; the
    inputs are not modified.

    """
    assignments = list(assignments)
    result = []

    for grade in grades:
        title_matches = overlapping(grade.assignment_title)
        match = next((a for a in assignments if title_matches(a.title)), None)

        if match is None:
            result.append(dataclasses.replace(grade))
        else:
            result.append(
                dataclasses.replace(
                    grade,
                    matched=True,
                    assignment_id=match.id,
                    type=match.type,
                    class_id=match.class_id,
                )
            )

    return result
