import courselib


def graded(id_, type_, grade, max_points=100):
    """A completed assignment with a grade."""
    return courselib.Assignment(
        id_, type_, grade=grade, max_points=max_points, completed=True
    )


def assert_scores_are_sound(scores):
    for s in scores:
        assert 0 <= s.score <= 100
        for factor in (
            s.factors.urgency,
            s.factors.importance,
            s.factors.impact,
            s.factors.completion,
        ):
            assert 0 <= factor <= 100
