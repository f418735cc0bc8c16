"""Automatic grading of question-and-answer assignments."""

from __future__ import annotations

import dataclasses
import typing

QUESTION_TYPES = ("multiple-choice", "true-false", "short-answer", "essay")


@dataclasses.dataclass
class Question:
    """A question on an auto-graded assignment.

    Attributes
    ----------
    id : str
        Identifies the question within the assignment.
    type : str
        One of "multiple-choice", "true-false", "short-answer" or "essay".
    question : str
        The question text.
    points : float
        The points the question is worth.
    options : Optional[list[str]]
        The choices of a multiple choice question.
    correct_answer : Optional[Union[str, int]]
        The correct answer. For a multiple choice question, the index of the
        correct option.

    """

    id: str
    type: str
    question: str
    points: float
    options: typing.Optional[typing.List[str]] = None
    correct_answer: typing.Optional[typing.Union[str, int]] = None


@dataclasses.dataclass
class StudentAnswer:
    question_id: str
    answer: typing.Union[str, int]


@dataclasses.dataclass
class GradingResult:
    question_id: str
    is_correct: bool
    points_earned: float
    max_points: float
    feedback: typing.Optional[str] = None


@dataclasses.dataclass
class AutoGradeReport:
    """The outcome of grading every question on an assignment."""

    results: typing.List[GradingResult]
    total_score: float
    max_score: float
    percentage: float


# per-question graders -----------------------------------------------------------------


def _result(question, is_correct, feedback, points_earned=None):
    if points_earned is None:
        points_earned = question.points if is_correct else 0
    return GradingResult(
        question_id=question.id,
        is_correct=is_correct,
        points_earned=points_earned,
        max_points=question.points,
        feedback=feedback,
    )


def _grade_multiple_choice(question, answer):
    is_correct = answer.answer == question.correct_answer
    if is_correct:
        return _result(question, True, "Correct!")

    try:
        correct_option = question.options[question.correct_answer]
    except (TypeError, IndexError, KeyError):
        correct_option = question.correct_answer

    return _result(
        question, False, f"Incorrect. The correct answer was: {correct_option}"
    )


def _grade_true_false(question, answer):
    is_correct = str(answer.answer).lower() == str(question.correct_answer).lower()
    if is_correct:
        return _result(question, True, "Correct!")
    return _result(
        question, False, f"Incorrect. The correct answer was: {question.correct_answer}"
    )


def _grade_short_answer(question, answer):
    if question.correct_answer is None or not str(question.correct_answer).strip():
        return _result(question, False, "No correct answer defined")

    given = str(answer.answer).lower().strip()
    expected = str(question.correct_answer).lower().strip()

    # keyword match: either answer may contain the other
    is_correct = given == expected or expected in given or given in expected

    if is_correct:
        return _result(question, True, "Correct!")
    return _result(
        question, False, "Please review your answer. Manual review may be required."
    )


def _grade_essay(question, answer):
    word_count = len(str(answer.answer).split())
    return _result(
        question,
        False,
        f"Essay submitted ({word_count} words). Requires manual grading.",
        points_earned=0,
    )


_GRADERS = {
    "multiple-choice": _grade_multiple_choice,
    "true-false": _grade_true_false,
    "short-answer": _grade_short_answer,
    "essay": _grade_essay,
}


# public functions ---------------------------------------------------------------------


def grade_question(question: Question, answer: StudentAnswer) -> GradingResult:
    """Grade the answer to a single question.

    Essays are never marked correct automatically; they earn no points until
    graded by hand. Questions of an unknown type earn no points.

    """
    grader = _GRADERS.get(question.type)
    if grader is None:
        return _result(question, False, "Unknown question type")
    return grader(question, answer)


def grade_assignment(
    questions: typing.Sequence[Question], answers: typing.Iterable[StudentAnswer]
) -> AutoGradeReport:
    """Grade every question on an assignment.

    Parameters
    ----------
    questions : Sequence[Question]
        The assignment's questions.
    answers : Iterable[StudentAnswer]
        The student's answers. Questions without an answer earn no points.

    Returns
    -------
    AutoGradeReport
        The per-question results, in question order, and the totals. The
        percentage is 0 if the assignment is worth no points.

    """
    answers_by_question = {}
    for answer in answers:
        answers_by_question.setdefault(answer.question_id, answer)

    results = []
    total_score = 0
    max_score = 0

    for question in questions:
        max_score += question.points
        answer = answers_by_question.get(question.id)

        if answer is None:
            results.append(_result(question, False, "No answer provided"))
            continue

        result = grade_question(question, answer)
        results.append(result)
        total_score += result.points_earned

    return AutoGradeReport(
        results=results,
        total_score=total_score,
        max_score=max_score,
        percentage=(total_score / max_score) * 100 if max_score > 0 else 0,
    )


def detailed_feedback(results: typing.Sequence[GradingResult]) -> str:
    """A plain-text report of graded results, one paragraph per question."""
    n_correct = sum(r.is_correct for r in results)
    earned = sum(r.points_earned for r in results)
    possible = sum(r.max_points for r in results)
    percentage = (earned / possible) * 100 if possible else 0

    lines = [
        f"You answered {n_correct} out of {len(results)} questions correctly "
        f"({percentage:.1f}%).",
        "",
    ]

    for i, result in enumerate(results, start=1):
        mark = "✓" if result.is_correct else "✗"
        lines.append(
            f"Question {i}: {mark} ({result.points_earned}/{result.max_points} points)"
        )
        if result.feedback:
            lines.append(f"  {result.feedback}")
        lines.append("")

    return "\n".join(lines) + "\n"
