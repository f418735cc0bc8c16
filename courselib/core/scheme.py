"""Grading schemes: weighted categories of assignments."""

from __future__ import annotations

import collections.abc
import enum
import typing


class GradingMode(enum.Enum):
    """How category weights are interpreted.

    In ``PERCENTAGE`` mode, weights are percentage points that are expected to
    sum to 100. In ``POINTS`` mode, each weight is the number of points the
    category is worth.

    """

    PERCENTAGE = "percentage"
    POINTS = "points"


# CategoryConfig -----------------------------------------------------------------------


class CategoryConfig:
    """Configuration of a single category in a grading scheme.

    Attributes
    ----------
    weight : float
        The category's share of the class grade. A number of percentage points
        in percentage mode, a number of points in points mode.
    count : int
        The number of graded items expected in the category over the term.
    drop_lowest : int
        The number of lowest-scoring items excluded from the category average.
        Default: 0.

    Raises
    ------
    ValueError
        If any of the attributes is negative.

    """

    _attrs = ["weight", "count", "drop_lowest"]

    def __init__(self, weight, count, drop_lowest=0):
        if weight < 0:
            raise ValueError("Category weight cannot be negative.")

        if count < 0:
            raise ValueError("Category count cannot be negative.")

        if drop_lowest is None:
            drop_lowest = 0

        if drop_lowest < 0:
            raise ValueError("Number of dropped items cannot be negative.")

        self.weight = weight
        self.count = count
        self.drop_lowest = drop_lowest

    def __repr__(self):
        return (
            f"CategoryConfig(weight={self.weight!r}, count={self.count!r}, "
            f"drop_lowest={self.drop_lowest!r})"
        )

    def __eq__(self, other):
        if not isinstance(other, CategoryConfig):
            return False
        return all(getattr(self, attr) == getattr(other, attr) for attr in self._attrs)


def _make_category(definition) -> CategoryConfig:
    """Create a category from any of its accepted forms."""
    if isinstance(definition, CategoryConfig):
        return definition

    if isinstance(definition, collections.abc.Mapping):
        drop_lowest = definition.get("dropLowest", definition.get("drop_lowest", 0))
        return CategoryConfig(definition["weight"], definition["count"], drop_lowest)

    if isinstance(definition, (tuple, list)) and len(definition) in (2, 3):
        return CategoryConfig(*definition)

    raise TypeError("Unexpected type for category definition.")


def _make_mode(mode) -> GradingMode:
    if mode is None:
        return GradingMode.PERCENTAGE

    try:
        return GradingMode(mode)
    except ValueError:
        raise ValueError(
            f'Unknown grading mode "{mode}". Must be "percentage" or "points".'
        ) from None


# GradingScheme ========================================================================


class GradingScheme:
    """Named, weighted categories which determine how a class grade is composed.

    Parameters
    ----------
    categories : Mapping[str, CategoryDefinition]
        A mapping from category names to category definitions. A definition can
        be a :class:`CategoryConfig`, a mapping with ``weight``, ``count`` and
        (optionally) ``dropLowest`` keys, or a ``(weight, count)`` or
        ``(weight, count, drop_lowest)`` tuple.
    mode : Union[GradingMode, str, None]
        How weights are interpreted. Default: percentage mode.

    Example
    -------

    >>> scheme = GradingScheme({
    ...     "Homework": (30, 10, 1),
    ...     "Quiz": {"weight": 20, "count": 6, "dropLowest": 1},
    ...     "Test": CategoryConfig(50, 3),
    ... })

    """

    def __init__(self, categories, mode=None):
        if not isinstance(categories, collections.abc.Mapping):
            raise TypeError("Categories must be provided as a mapping.")

        self.mode = _make_mode(mode)
        self.categories = {
            name: _make_category(definition) for name, definition in categories.items()
        }

    def __repr__(self):
        return f"GradingScheme(categories={self.categories!r}, mode={self.mode!r})"

    def __eq__(self, other):
        if not isinstance(other, GradingScheme):
            return False
        return self.mode == other.mode and self.categories == other.categories

    def __contains__(self, name):
        return name in self.categories

    def __iter__(self):
        return iter(self.categories)

    def __len__(self):
        return len(self.categories)

    def __getitem__(self, name) -> CategoryConfig:
        return self.categories[name]

    def items(self):
        return self.categories.items()

    @property
    def category_names(self) -> list[str]:
        """The names of the categories, in order."""
        return list(self.categories)

    @property
    def total_weight(self) -> float:
        """The sum of the category weights."""
        return sum(c.weight for c in self.categories.values())

    # constructors ---------------------------------------------------------------------

    @classmethod
    def from_flat(cls, record: typing.Mapping) -> "GradingScheme":
        """Create a scheme from a flat record with a reserved ``mode`` key.

        In this form, category names and the ``mode`` key share a single
        mapping. The ``mode`` entry is never treated as a category.

        >>> GradingScheme.from_flat({
        ...     "mode": "points",
        ...     "Homework": {"weight": 200, "count": 10},
        ... })

        """
        record = dict(record)
        mode = record.pop("mode", None)
        return cls(record, mode=mode)

    @classmethod
    def from_categories(
        cls, categories: typing.Iterable[typing.Mapping], mode=None
    ) -> "GradingScheme":
        """Create a scheme from a list of ``{name, weight, count, dropLowest}`` records.

        Raises
        ------
        ValueError
            If two categories have the same name.

        """
        dct = {}
        for category in categories:
            name = category["name"]
            if name in dct:
                raise ValueError(f"Duplicate category name: {name}.")
            dct[name] = category
        return cls(dct, mode=mode)

    def to_categories(self) -> list[dict]:
        """The categories as a list of ``{name, weight, count, dropLowest}`` records."""
        return [
            {
                "name": name,
                "weight": category.weight,
                "count": category.count,
                "dropLowest": category.drop_lowest,
            }
            for name, category in self.categories.items()
        ]

    def copy(self) -> "GradingScheme":
        return self.__class__(
            {
                name: CategoryConfig(c.weight, c.count, c.drop_lowest)
                for name, c in self.categories.items()
            },
            mode=self.mode,
        )
