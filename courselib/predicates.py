"""Composable predicates for matching free-text labels."""

from typing import Callable


StringPredicate = Callable[[str], bool]


def _normalize(s: str) -> str:
    return s.lower().strip()


class Predicate:
    """A boolean function of a string that can be combined with ``&``, ``|`` and ``~``."""

    def __init__(self, func):
        self.func = func

    @classmethod
    def new(cls, func):
        return cls(func)

    def __call__(self, x):
        return self.func(x)

    def __and__(self, other):
        def new_func(x):
            return self(x) and other(x)

        return self.__class__(new_func)

    def __or__(self, other):
        def new_func(x):
            return self(x) or other(x)

        return self.__class__(new_func)

    def __invert__(self):
        def new_func(x):
            return not self(x)

        return self.__class__(new_func)


def never() -> Predicate:
    """A predicate that matches nothing. The identity for ``|``."""
    return Predicate(lambda s: False)


def equal_ignoring_case(target: str) -> Predicate:
    """Matches strings equal to `target` after lowercasing and trimming."""
    target = _normalize(target)

    @Predicate.new
    def predicate(s):
        return _normalize(s) == target

    return predicate


def overlapping(target: str) -> Predicate:
    """Matches strings which contain `target`, or are contained in it.

    The comparison ignores case and surrounding whitespace. Equal strings
    overlap.

    """
    target = _normalize(target)

    @Predicate.new
    def predicate(s):
        s = _normalize(s)
        return s == target or target in s or s in target

    return predicate
