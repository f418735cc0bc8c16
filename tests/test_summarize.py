import pytest

import courselib
from courselib import Assignment, GradingScheme
from courselib.summarize import (
    average_percentage,
    grade_color,
    summarize_class,
    summarize_term,
)


def _assignment(id_, class_id, type_, grade=None, max_points=100, completed=True):
    return Assignment(
        id_,
        type_,
        grade=grade,
        max_points=max_points,
        completed=completed,
        class_id=class_id,
    )


def test_summarize_class():
    # given
    scheme = GradingScheme({"Homework": (50, 2), "Quiz": (50, 1)})
    assignments = [
        _assignment("hw1", "c1", "Homework", 80),
        _assignment("hw2", "c1", "Homework", 100),
        _assignment("q1", "c1", "Quiz", 90),
        _assignment("q2", "c1", "Quiz", completed=False),
    ]

    # when
    summary = summarize_class(assignments, scheme)

    # then
    assert summary.current_grade == pytest.approx(90)
    assert summary.letter_grade == "A-"
    assert summary.graded_count == 3
    assert summary.total_count == 4


def test_summarize_class_without_graded_work():
    # given
    scheme = GradingScheme({"Homework": (100, 2)})
    assignments = [_assignment("hw1", "c1", "Homework", completed=False)]

    # when
    summary = summarize_class(assignments, scheme)

    # then
    assert summary.current_grade is None
    assert summary.letter_grade == "N/A"
    assert summary.total_count == 1


def test_summarize_class_with_invalid_grade_is_not_available():
    # given
    scheme = GradingScheme({"Homework": (100, 2)})
    assignments = [_assignment("hw1", "c1", "Homework", 0, max_points=0)]

    # when
    summary = summarize_class(assignments, scheme)

    # then
    assert summary.current_grade is None
    assert summary.letter_grade == "N/A"
    assert summary.graded_count == 1


def test_summarize_term():
    # given
    schemes = {
        "math": GradingScheme({"Test": (100, 3)}),
        "art": GradingScheme({"Project": (100, 2)}),
        "history": GradingScheme({"Essay": (100, 4)}),
    }
    assignments = [
        _assignment("t1", "math", "Test", 93),
        _assignment("p1", "art", "Project", 85),
        _assignment("e1", "history", "Essay", completed=False),
    ]

    # when
    summary = summarize_term(assignments, schemes)

    # then
    assert summary.classes["math"].letter_grade == "A"
    assert summary.classes["history"].current_grade is None
    assert summary.term_gpa == pytest.approx(3.5)
    assert summary.graded_count == 2
    assert summary.total_count == 3
    assert summary.average_grade == pytest.approx(89)


def test_summarize_term_without_grades_has_zero_gpa():
    # given
    schemes = {"math": GradingScheme({"Test": (100, 3)})}

    # when
    summary = summarize_term([], schemes)

    # then
    assert summary.term_gpa == 0
    assert summary.average_grade == 0
    assert summary.classes["math"].letter_grade == "N/A"


def test_average_percentage_treats_missing_max_points_as_100():
    # given
    assignments = [
        Assignment("a", "Quiz", grade=40, max_points=50, completed=True),
        Assignment("b", "Quiz", grade=70, completed=True),
        Assignment("c", "Quiz", grade=0, max_points=10),
    ]

    # then
    assert average_percentage(assignments) == pytest.approx(75)


def test_grade_color():
    assert grade_color(None) == "text-muted-foreground"
    assert grade_color(95) == "text-green-600"
    assert grade_color(85) == "text-blue-600"
    assert grade_color(72) == "text-yellow-600"
    assert grade_color(50) == "text-red-600"


def test_summarize_is_exposed_on_package():
    assert courselib.summarize.summarize_term is summarize_term
