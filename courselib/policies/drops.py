from __future__ import annotations

import logging
import typing

logger = logging.getLogger(__name__)


def drop_lowest(percentages: typing.Iterable[float], n: int) -> list[float]:
    """Drop the lowest `n` scores within a category.

    Unlike an optimal drop strategy over assignments worth different numbers of
    points, every score here is already a percentage, so dropping the lowest
    percentages is what maximizes the category average.

    If the category has no more than `n` scores, only the single highest score
    is kept; a category with at least one score never becomes empty.

    Parameters
    ----------
    percentages : Iterable[float]
        The scores in the category, as percentages.
    n : int
        The number of scores to drop. Zero (or a negative number) keeps every
        score.

    Returns
    -------
    list[float]
        The kept scores, highest first if anything was dropped; otherwise in
        their original order.

    Example
    -------
    >>> drop_lowest([50, 90, 100], 1)
    [100, 90]

    """
    percentages = list(percentages)

    if not n or n <= 0 or not percentages:
        return percentages

    ranked = sorted(percentages, reverse=True)

    if len(ranked) > n:
        kept = ranked[: len(ranked) - n]
    else:
        kept = ranked[:1]

    logger.debug("Dropped %d of %d scores.", len(percentages) - len(kept), len(percentages))
    return kept
