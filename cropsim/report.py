"""Sowing dates and the seasonal summary report."""

from __future__ import annotations

import re
from datetime import date as Date
from typing import Sequence, TextIO

from cropsim.tables import moments

_MONTH_DAY = re.compile(r"\s*([+-]?\d+)-\s*([+-]?\d+)")
_MONTH_DAY_SHORT = re.compile(r"\s*(\d{1,2})-\s*(\d{1,2})")

HEADER = "Lat,Lon,Sowing,Length,TSM1,TSM2,Avg,Adev,Stdev,Var,Skew,Curt\n"


def _parse(start: str, pattern: re.Pattern[str]) -> tuple[int, int]:
    match = pattern.match(start)
    if match is None:
        raise ValueError(f"cannot read a month-day date from {start!r}")
    return int(match.group(1)), int(match.group(2))


def is_sowing_day(start: str, date: Date, end_year: int) -> bool:
    """True when ``date`` is the sowing day given as ``"MM-DD"`` and not past ``end_year``."""
    month, day = _parse(start, _MONTH_DAY)
    return date.month == month and date.day == day and date.year <= end_year


def sowing_dekad(start: str) -> int:
    """Dekad of the year (1..36) of a ``"MM-DD"`` sowing date."""
    month, day = _parse(start, _MONTH_DAY_SHORT)
    if not 1 <= month <= 12:
        raise ValueError(f"invalid month in {start!r}")
    if not 1 <= day <= 31:
        raise ValueError(f"invalid day in {start!r}")
    dekad = (month - 1) * 3
    if day <= 10:
        return dekad + 1
    if day <= 20:
        return dekad + 2
    return dekad + 3


def write_header(stream: TextIO) -> None:
    """Write the column header of the summary report."""
    stream.write(HEADER)


def write_summary(
    stream: TextIO,
    start: str,
    latitude: float,
    longitude: float,
    tsum1: float,
    tsum2: float,
    yields: Sequence[float],
    lengths: Sequence[float],
) -> bool:
    """Write one line of yield statistics; only done for more than two seasons.

    Returns whether a line was written.
    """
    dekad = sowing_dekad(start)
    if len(yields) != len(lengths):
        raise ValueError("yields and lengths must have the same number of seasons")
    seasons = len(yields)
    if seasons <= 2:
        return False
    mean_length = sum(lengths) / seasons
    m = moments(yields)
    stream.write(
        "%4.2f, %4.2f, %6d, %6.0f, %4.0f, %4.0f, %6.0f, %6.0f, %6.0f, %9.0f, %5.2f, %5.2f %5d\n"
        % (
            latitude,
            longitude,
            dekad,
            mean_length,
            tsum1,
            tsum2,
            m.average,
            m.adev,
            m.sdev,
            m.var,
            m.skew,
            m.curt,
            seasons,
        )
    )
    return True