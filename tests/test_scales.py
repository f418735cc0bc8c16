import math

import pandas as pd
import pytest

import courselib


LETTER_ORDER = list(reversed(list(courselib.DEFAULT_SCALE)))


def test_letter_grade_breakpoints():
    assert courselib.get_letter_grade(100) == "A+"
    assert courselib.get_letter_grade(97) == "A+"
    assert courselib.get_letter_grade(96.99) == "A"
    assert courselib.get_letter_grade(90) == "A-"
    assert courselib.get_letter_grade(87) == "B+"
    assert courselib.get_letter_grade(83) == "B"
    assert courselib.get_letter_grade(80) == "B-"
    assert courselib.get_letter_grade(77) == "C+"
    assert courselib.get_letter_grade(73) == "C"
    assert courselib.get_letter_grade(70) == "C-"
    assert courselib.get_letter_grade(67) == "D+"
    assert courselib.get_letter_grade(65) == "D"
    assert courselib.get_letter_grade(64.9) == "F"


def test_letter_grade_is_total():
    assert courselib.get_letter_grade(-20) == "F"
    assert courselib.get_letter_grade(150) == "A+"
    assert courselib.get_letter_grade(float("nan")) == "F"


def test_letter_grade_is_monotonic():
    # given
    percentages = [p / 4 for p in range(-40, 440)]

    # when
    ranks = [LETTER_ORDER.index(courselib.get_letter_grade(p)) for p in percentages]

    # then
    assert ranks == sorted(ranks)


def test_map_score_to_letter_grade_on_example():
    # given
    scores = pd.Series(data=[84, 95, 55], index=["A1", "A2", "A3"])

    # when
    letters = courselib.map_scores_to_letter_grades(scores)

    # then
    assert list(letters) == ["B", "A", "F"]
    assert list(letters.index) == ["A1", "A2", "A3"]


def test_map_score_to_letter_grade_with_custom_scale():
    # given
    scale = courselib.DEFAULT_SCALE.copy()
    scale["A+"] = 99

    # when
    letters = courselib.map_scores_to_letter_grades(pd.Series([98]), scale=scale)

    # then
    assert list(letters) == ["A"]


def test_map_score_to_letter_grade_raises_on_bad_scale():
    # given
    not_decreasing = courselib.DEFAULT_SCALE.copy()
    not_decreasing["B"] = 95

    wrong_letters = courselib.DEFAULT_SCALE.copy()
    del wrong_letters["D+"]

    # then
    with pytest.raises(ValueError):
        courselib.map_scores_to_letter_grades(pd.Series([90]), scale=not_decreasing)

    with pytest.raises(ValueError):
        courselib.map_scores_to_letter_grades(pd.Series([90]), scale=wrong_letters)


def test_calculate_gpa():
    assert courselib.calculate_gpa([93, 85, 73]) == pytest.approx(3.0)
    assert courselib.calculate_gpa([93, 85, 72]) == pytest.approx((4.0 + 3.0 + 1.7) / 3)


def test_calculate_gpa_breakpoints():
    assert courselib.calculate_gpa([97]) == 4.0
    assert courselib.calculate_gpa([90]) == 3.7
    assert courselib.calculate_gpa([67]) == 1.3
    assert courselib.calculate_gpa([65]) == 1.0
    assert courselib.calculate_gpa([10]) == 0.0


def test_calculate_gpa_of_nothing_is_nan():
    assert math.isnan(courselib.calculate_gpa([]))
