"""Run statistics polymorphically over a sample."""
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from samplestats.services.numeric import STATISTICS, StatFn

__all__: list[str] = [
    "statistic_name",
    "find_statistic",
    "summarize",
]


def statistic_name(fn: StatFn) -> str:
    return fn.__name__


def find_statistic(name: str) -> StatFn:
    """
    Select one of the known statistics by name.
    Raises KeyError if no statistic has that name.
    """
    for fn in STATISTICS:
        if statistic_name(fn) == name:
            return fn
    raise KeyError(name)


def summarize(
    sample: Sequence[float],
    statistics: Iterable[StatFn] = STATISTICS,
) -> dict[str, Optional[float]]:
    """
    Compute each statistic over the same sample, keyed by statistic name.
    Undefined statistics are reported as None.
    """
    return {statistic_name(fn): fn(sample) for fn in statistics}
