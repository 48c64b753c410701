"""Astronomical day length and radiation quantities."""

from __future__ import annotations

import math
from dataclasses import dataclass

_ANGLE = -4.0
_PI = 3.1415926
_RAD = 0.0174533


@dataclass(frozen=True)
class AstroData:
    """Day length, solar height integrals and radiation characteristics of a day."""

    daylength: float
    par_daylength: float
    sin_ld: float
    cos_ld: float
    dsinbe: float
    angot_radiation: float
    atmosph_transm: float
    diff_rad_pp: float


def _asin(x: float) -> float:
    return math.asin(x) if -1.0 <= x <= 1.0 else math.nan


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0.0 else math.nan


def _hours(value: float) -> float:
    # An undefined day length saturates at 24 hours.
    if math.isnan(value):
        return 24.0
    return max(0.0, min(24.0, value))


def astro(day_of_year: float, latitude: float, radiation: float) -> AstroData:
    """Astronomical quantities for a day of the year, a latitude and global radiation (J/m2/d)."""
    if abs(latitude) > 90.0:
        raise ValueError(f"latitude {latitude} is outside -90..90")

    declination = -math.asin(
        math.sin(23.45 * _RAD) * math.cos(2.0 * _PI * (day_of_year + 10.0) / 365.0)
    )
    solar_constant = 1370.0 * (1.0 + 0.033 * math.cos(2.0 * _PI * day_of_year / 365.0))

    sin_ld = math.sin(_RAD * latitude) * math.sin(declination)
    cos_ld = math.cos(_RAD * latitude) * math.cos(declination)
    aob = sin_ld / cos_ld

    daylength = _hours(12.0 * (1.0 + 2.0 * _asin(aob) / _PI))
    par_daylength = _hours(
        12.0 * (1.0 + 2.0 * _asin((-math.sin(_ANGLE * _RAD) + sin_ld) / cos_ld) / _PI)
    )

    if aob <= 1.0:
        root = _sqrt(1.0 - aob * aob)
        dsinb = 3600.0 * (daylength * sin_ld + (24.0 / _PI) * cos_ld * root)
        dsinbe = 3600.0 * (
            daylength * (sin_ld + 0.4 * (sin_ld * sin_ld + cos_ld * cos_ld * 0.5))
            + 12.0 * cos_ld * (2.0 + 3.0 * 0.4 * sin_ld) * root / _PI
        )
    else:
        dsinb = 3600.0 * (daylength * sin_ld)
        dsinbe = 3600.0 * (
            daylength * (sin_ld + 0.4 * (sin_ld * sin_ld + cos_ld * cos_ld * 0.5))
        )

    angot = solar_constant * dsinb
    transm = radiation / angot if angot else math.nan

    if transm > 0.75:
        fraction_diffuse = 0.23
    elif 0.35 < transm <= 0.75:
        fraction_diffuse = 1.33 - 1.46 * transm
    elif 0.07 < transm <= 0.35:
        fraction_diffuse = 1.0 - 2.3 * (transm - 0.07) ** 2
    else:
        fraction_diffuse = 1.0

    return AstroData(
        daylength=daylength,
        par_daylength=par_daylength,
        sin_ld=sin_ld,
        cos_ld=cos_ld,
        dsinbe=dsinbe,
        angot_radiation=angot,
        atmosph_transm=transm,
        diff_rad_pp=0.5 * fraction_diffuse * transm * solar_constant,
    )