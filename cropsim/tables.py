"""Interpolation tables, date tables and small numeric helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date as Date
from typing import Iterable, NamedTuple, Sequence


def limit(low: float, high: float, value: float) -> float:
    """Clamp ``value`` to the closed interval ``[low, high]``."""
    if value < low:
        return low
    if value <= high:
        return value
    return high


def notnul(x: float) -> float:
    """Return ``x`` unless it is zero, in which case return 1."""
    return x if x != 0.0 else 1.0


def insw(x1: float, x2: float, x3: float) -> float:
    """Input switch: ``x2`` when ``x1`` is negative, otherwise ``x3``."""
    return x2 if x1 < 0 else x3


def days_in_year(year: int) -> int:
    """Number of days in the Gregorian ``year``."""
    if year % 400 == 0 or (year % 100 != 0 and year % 4 == 0):
        return 366
    return 365


@dataclass(frozen=True)
class AfgenTable:
    """Piecewise linear function given by ``(x, y)`` breakpoints."""

    points: tuple[tuple[float, float], ...]

    def __post_init__(self) -> None:
        pts = tuple((float(x), float(y)) for x, y in self.points)
        if not pts:
            raise ValueError("an interpolation table needs at least one point")
        object.__setattr__(self, "points", pts)

    def __call__(self, x: float) -> float:
        first_x, first_y = self.points[0]
        if x <= first_x:
            return first_y
        for (x0, y0), (x1, y1) in zip(self.points, self.points[1:]):
            if x0 <= x < x1:
                return y0 + (x - x0) * (y1 - y0) / (x1 - x0)
        return self.points[-1][1]


class DateEntry(NamedTuple):
    """One dated amount of a management table."""

    month: int
    day: int
    amount: float


@dataclass(frozen=True)
class DateTable:
    """Amounts applied on given calendar days (fertiliser, irrigation)."""

    entries: tuple[DateEntry, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "entries",
            tuple(DateEntry(int(m), int(d), float(a)) for m, d, a in self.entries),
        )

    def amount_on(self, date: Date, end_year: int) -> float:
        """Amount for ``date``; zero if none is given or the year is past ``end_year``."""
        if date.year > end_year:
            return 0.0
        for entry in self.entries:
            if entry.month == date.month and entry.day == date.day:
                return entry.amount
        return 0.0


@dataclass(frozen=True)
class Moments:
    """Descriptive statistics of a sample."""

    average: float
    adev: float
    sdev: float
    var: float
    skew: float
    curt: float


def moments(data: Iterable[float]) -> Moments:
    """Mean, mean absolute deviation, deviation, variance, skewness and kurtosis."""
    values: Sequence[float] = [float(v) for v in data]
    n = len(values)
    if n <= 1:
        raise ValueError("n must be at least 2 in moments")
    ave = sum(values) / n
    adev = var = skew = curt = ep = 0.0
    for value in values:
        s = value - ave
        adev += abs(s)
        ep += s
        p = s * s
        var += p
        p *= s
        skew += p
        p *= s
        curt += p
    adev /= n
    var = (var - ep * ep / n) / (n - 1)
    sdev = math.sqrt(var)
    if var:
        skew /= n * var * sdev
        curt = curt / (n * var * var) - 3.0
    return Moments(ave, adev, sdev, var, skew, curt)