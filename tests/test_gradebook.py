import math

import pandas as pd
import pytest

import courselib
from courselib import GradingScheme

from util import graded


# calculate_class_grade ================================================================


def test_class_grade_on_example():
    # given
    scheme = GradingScheme.from_flat(
        {
            "mode": "percentage",
            "Homework": {"weight": 50, "count": 2, "dropLowest": 0},
            "Quiz": {"weight": 50, "count": 1, "dropLowest": 0},
        }
    )
    assignments = [
        graded("hw1", "Homework", 80),
        graded("hw2", "Homework", 100),
        graded("q1", "Quiz", 90),
    ]

    # when
    actual = courselib.calculate_class_grade(assignments, scheme)

    # then
    assert actual == pytest.approx(90.0)


def test_class_grade_accepts_flat_record_directly():
    # given
    scheme = {
        "mode": "percentage",
        "Homework": {"weight": 50, "count": 2},
        "Quiz": {"weight": 50, "count": 1},
    }

    # when
    actual = courselib.calculate_class_grade([graded("q1", "Quiz", 70)], scheme)

    # then
    assert actual == pytest.approx(70.0)


def test_class_grade_with_no_assignments_is_zero():
    # given
    scheme = courselib.suggested_grading_scheme()

    # then
    assert courselib.calculate_class_grade([], scheme) == 0
    assert courselib.calculate_class_grade([], GradingScheme({})) == 0


def test_class_grade_with_unmatched_types_is_zero():
    # given
    scheme = GradingScheme({"Homework": (100, 5)})

    # when
    actual = courselib.calculate_class_grade([graded("x", "Bake Sale", 50)], scheme)

    # then
    assert actual == 0


def test_class_grade_drops_lowest_within_category():
    # given
    scheme = GradingScheme({"Homework": (100, 3, 1)})
    assignments = [
        graded("hw1", "Homework", 50),
        graded("hw2", "Homework", 90),
        graded("hw3", "Homework", 100),
    ]

    # when
    actual = courselib.calculate_class_grade(assignments, scheme)

    # then
    assert actual == pytest.approx(95)


def test_class_grade_keeps_highest_when_dropping_at_least_as_many_as_graded():
    # given
    scheme = GradingScheme({"Homework": (100, 10, 2)})
    assignments = [graded("hw1", "Homework", 60), graded("hw2", "Homework", 70)]

    # when
    actual = courselib.calculate_class_grade(assignments, scheme)

    # then
    assert actual == pytest.approx(70)


def test_class_grade_renormalizes_over_graded_categories():
    # given
    scheme = GradingScheme({"Homework": (30, 10), "Quiz": (20, 6), "Final": (50, 1)})
    assignments = [graded("hw1", "Homework", 80), graded("q1", "Quiz", 100)]

    # when
    actual = courselib.calculate_class_grade(assignments, scheme)

    # then
    # (80 * .3 + 100 * .2) / .5
    assert actual == pytest.approx(88)


def test_class_grade_is_100_when_everything_is_perfect():
    # given
    scheme = courselib.suggested_grading_scheme()
    assignments = [
        graded(f"{name}{i}", name, 10, max_points=10)
        for name, category in scheme.items()
        for i in range(category.count)
    ]

    # when
    actual = courselib.calculate_class_grade(assignments, scheme)

    # then
    assert actual == pytest.approx(100)


def test_class_grade_in_points_mode():
    # given
    scheme = GradingScheme({"Homework": (200, 4), "Final": (100, 1)}, mode="points")
    assignments = [
        graded("hw1", "Homework", 10, max_points=10),
        graded("hw2", "Homework", 5, max_points=10),
        graded("final", "Final", 60, max_points=100),
    ]

    # when
    actual = courselib.calculate_class_grade(assignments, scheme)

    # then
    # homework: 75% of 200 points, final: 60% of 100 points -> 210 / 300
    assert actual == pytest.approx(70)


def test_class_grade_uses_grade_as_percentage_without_max_points():
    # given
    scheme = GradingScheme({"Quiz": (100, 2)})
    assignments = [
        courselib.Assignment("q1", "Quiz", grade=85, completed=True),
        courselib.Assignment("q2", "Quiz", grade=95, completed=True),
    ]

    # then
    assert courselib.calculate_class_grade(assignments, scheme) == pytest.approx(90)


def test_class_grade_is_nan_with_zero_max_points():
    # given
    scheme = GradingScheme({"Quiz": (100, 2)})
    assignments = [graded("q1", "Quiz", 0, max_points=0)]

    # when
    actual = courselib.calculate_class_grade(assignments, scheme)

    # then
    assert math.isnan(actual)


def test_class_grade_does_not_canonicalize_types():
    # given
    scheme = GradingScheme({"Homework": (100, 2)})

    # when
    actual = courselib.calculate_class_grade([graded("hw1", "hw", 50)], scheme)

    # then
    assert actual == 0


def test_class_grade_ignores_ungraded_and_incomplete_assignments():
    # given
    scheme = GradingScheme({"Homework": (100, 4, 1)})
    assignments = [
        graded("hw1", "Homework", 90),
        graded("hw2", "Homework", 70),
        courselib.Assignment("hw3", "Homework"),
        courselib.Assignment("hw4", "Homework", grade=0, max_points=100),
    ]

    # when
    actual = courselib.calculate_class_grade(assignments, scheme)

    # then
    # only hw1 and hw2 count; hw2 is dropped
    assert actual == pytest.approx(90)


def test_locked_weight_and_prediction_ignore_ungraded_assignments():
    # given
    scheme = GradingScheme({"Homework": (50, 2), "Final": (50, 1)})
    assignments = [
        graded("hw1", "Homework", 80),
        courselib.Assignment("hw2", "Homework"),
        courselib.Assignment("final", "Final", grade=100, max_points=100),
    ]

    # then
    assert courselib.calculate_locked_weight(assignments, scheme) == pytest.approx(25)
    assert courselib.predict_final_grade(assignments, scheme, 80) == pytest.approx(
        {"Homework": 80, "Final": 80}
    )


# category_averages ====================================================================


def test_category_averages():
    # given
    scheme = GradingScheme({"Homework": (50, 3, 1), "Quiz": (50, 2)})
    assignments = [
        graded("hw1", "Homework", 50),
        graded("hw2", "Homework", 90),
        graded("hw3", "Homework", 100),
    ]

    # when
    actual = courselib.category_averages(assignments, scheme)

    # then
    assert list(actual.index) == ["Homework", "Quiz"]
    assert actual["Homework"] == pytest.approx(95)
    assert pd.isna(actual["Quiz"])


# predict_final_grade ==================================================================


def test_locked_weight_is_proportional_to_graded_count():
    # given
    scheme = GradingScheme({"Homework": (40, 4), "Final": (60, 1)})
    assignments = [graded("hw1", "Homework", 90), graded("hw2", "Homework", 90)]

    # then
    assert courselib.calculate_locked_weight(assignments, scheme) == pytest.approx(20)


def test_locked_weight_is_capped_at_category_weight():
    # given
    scheme = GradingScheme({"Quiz": (30, 2), "Final": (70, 1)})
    assignments = [graded(f"q{i}", "Quiz", 90) for i in range(5)]

    # then
    assert courselib.calculate_locked_weight(assignments, scheme) == pytest.approx(30)


def test_locked_weight_with_zero_expected_count():
    # given
    scheme = GradingScheme({"Bonus": (10, 0), "Final": (90, 1)})

    # then
    assert courselib.calculate_locked_weight(
        [graded("b", "Bonus", 100)], scheme
    ) == pytest.approx(10)


def test_predict_final_grade():
    # given
    scheme = GradingScheme({"Homework": (40, 4), "Final": (60, 1)})
    assignments = [graded("hw1", "Homework", 80), graded("hw2", "Homework", 80)]

    # when
    actual = courselib.predict_final_grade(assignments, scheme, 90)

    # then
    # current grade 80 over a locked weight of 20: (9000 - 1600) / 80
    assert actual == pytest.approx({"Homework": 92.5, "Final": 92.5})


def test_predict_final_grade_clamps_to_valid_range():
    # given
    scheme = GradingScheme({"Homework": (50, 2), "Final": (50, 1)})
    high = [graded("hw1", "Homework", 100), graded("hw2", "Homework", 100)]
    low = [graded("hw1", "Homework", 10), graded("hw2", "Homework", 10)]

    # then
    assert courselib.predict_final_grade(high, scheme, 40) == {"Final": 0}
    assert courselib.predict_final_grade(low, scheme, 90) == {"Final": 100}


def test_predict_final_grade_is_empty_when_fully_weighted():
    # given
    scheme = GradingScheme({"Homework": (50, 1), "Final": (50, 1)})
    assignments = [graded("hw1", "Homework", 70), graded("final", "Final", 80)]

    # then
    assert courselib.predict_final_grade(assignments, scheme, 90) == {}


def test_predict_final_grade_with_nothing_graded():
    # given
    scheme = GradingScheme({"Homework": (50, 2), "Final": (50, 1)})

    # when
    actual = courselib.predict_final_grade([], scheme, 85)

    # then
    assert actual == pytest.approx({"Homework": 85, "Final": 85})


# ClassGradebook =======================================================================


def _gradebook():
    scheme = GradingScheme({"Homework": (50, 3, 1), "Quiz": (50, 2)})
    assignments = [
        graded("hw1", "Homework", 50),
        graded("hw2", "Homework", 90),
        graded("hw3", "Homework", 100),
        graded("q1", "Quiz", 85),
        courselib.Assignment("q2", "Quiz", max_points=100),
        courselib.Assignment("hw4", "Homework", grade=0, max_points=100),
    ]
    return courselib.ClassGradebook(assignments, scheme)


def test_gradebook_ignores_ungraded_assignments():
    # given
    gradebook = _gradebook()

    # then
    assert gradebook.graded.ids == ["hw1", "hw2", "hw3", "q1"]
    assert gradebook.overall_score == pytest.approx(90)
    assert gradebook.letter_grade == "A-"


def test_gradebook_category_scores():
    # when
    scores = _gradebook().category_scores

    # then
    assert scores["Homework"] == pytest.approx(95)
    assert scores["Quiz"] == pytest.approx(85)


def test_gradebook_predict():
    # given
    gradebook = _gradebook()

    # when
    actual = gradebook.predict(92)

    # then
    # locked weight 50 + 25 = 75; (9200 - 90 * 75) / 25
    assert gradebook.locked_weight == pytest.approx(75)
    assert actual == pytest.approx({"Quiz": 98})


def test_gradebook_letter_grade_without_graded_work_is_not_available():
    # given
    gradebook = courselib.ClassGradebook(
        [courselib.Assignment("q1", "Quiz")], GradingScheme({"Quiz": (100, 1)})
    )

    # then
    assert gradebook.letter_grade == "N/A"


def test_gradebook_copy_is_independent():
    # given
    gradebook = _gradebook()

    # when
    copied = gradebook.copy()
    copied.assignments[0].grade = 100
    copied.scheme["Homework"].drop_lowest = 0

    # then
    assert gradebook.assignments[0].grade == 50
    assert gradebook.scheme["Homework"].drop_lowest == 1
