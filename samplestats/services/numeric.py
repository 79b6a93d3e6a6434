"""Descriptive statistics over a sample of floats.

Every statistic takes an ordered sequence of floats and returns either a
float or ``None`` when the statistic is undefined for that sample. The
functions are pure: the caller's sequence is never modified.
"""
from __future__ import annotations

import math
from typing import Callable, Optional, Sequence

__all__: list[str] = [
    "StatFn",
    "STATISTICS",
    "mean",
    "stddev",
    "median",
    "l2",
]

# A statistic over a sample. ``None`` means the statistic is undefined.
StatFn = Callable[[Sequence[float]], Optional[float]]


def mean(sample: Sequence[float]) -> Optional[float]:
    """
    Arithmetic mean of the sample. The mean of an empty sample is 0.0.

    >>> mean([])
    0.0
    >>> mean([-1.0, 1.0])
    0.0
    """
    count = len(sample)
    if count == 0:
        return 0.0
    # Plain left-to-right summation; builtin sum() compensates float error.
    total = 0.0
    for value in sample:
        total += value
    return total / count


def stddev(sample: Sequence[float]) -> Optional[float]:
    """
    Population standard deviation of the sample. Undefined for an empty sample.

    >>> stddev([]) is None
    True
    >>> stddev([1.0, 1.0])
    0.0
    """
    count = len(sample)
    if count == 0:
        return None
    xbar = mean(sample)
    squares = 0.0
    for value in sample:
        deviation = value - xbar
        squares += deviation * deviation
    return math.sqrt(squares / count)


def median(sample: Sequence[float]) -> Optional[float]:
    """
    Median of the sample, taking the lower of the two middle values for
    even-sized samples. Undefined for an empty sample.

    The sample must not contain NaN; a ValueError is raised if it does.

    >>> median([]) is None
    True
    >>> median([0.0, 0.5, -1.0, 1.0])
    0.0
    """
    if not sample:
        return None
    if any(math.isnan(value) for value in sample):
        raise ValueError("median is not defined for samples containing NaN")
    ordered = sorted(sample)
    return ordered[(len(ordered) - 1) // 2]


def l2(sample: Sequence[float]) -> Optional[float]:
    """
    L2 (Euclidean) norm of the sample. The norm of an empty sample is 0.0.

    >>> l2([])
    0.0
    >>> l2([-3.0, 4.0])
    5.0
    """
    squares = 0.0
    for value in sample:
        squares += value * value
    return math.sqrt(squares)


STATISTICS: tuple[StatFn, ...] = (mean, stddev, median, l2)
