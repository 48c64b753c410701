"""Canopy CO2 assimilation by three-point Gaussian integration."""

from __future__ import annotations

import math
from itertools import islice
from typing import Iterable

from cropsim.astro import AstroData
from cropsim.model import Crop

_PI = 3.1415926
_SCAT_COEF = 0.2
_X_GAUSS = (0.1127017, 0.5000000, 0.8872983)
_W_GAUSS = (0.2777778, 0.4444444, 0.2777778)


def instant_assimilation(
    k_diffuse: float,
    eff: float,
    assim_max: float,
    sin_b: float,
    par_diffuse: float,
    par_direct: float,
    lai: float,
) -> float:
    """Instantaneous gross assimilation of the canopy for a given radiation."""
    sqv = math.sqrt(1.0 - _SCAT_COEF)
    reflection = (1.0 - sqv) / (1.0 + sqv) * (2.0 / (1.0 + 1.6 * sin_b))
    k_direct_bl = (0.5 / sin_b) * k_diffuse / (0.8 * sqv)
    k_direct_tl = k_direct_bl * sqv
    saturation = max(2.0, assim_max)

    gross = 0.0
    for x, weight in zip(_X_GAUSS, _W_GAUSS):
        laic = lai * x
        diffuse = (1.0 - reflection) * par_diffuse * k_diffuse * math.exp(-k_diffuse * laic)
        total = (1.0 - reflection) * par_direct * k_direct_tl * math.exp(-k_direct_tl * laic)
        direct = (1.0 - _SCAT_COEF) * par_direct * k_direct_bl * math.exp(-k_direct_bl * laic)

        absorbed_shaded = diffuse + total - direct
        assim_shaded = assim_max * (1.0 - math.exp(-absorbed_shaded * eff / saturation))

        absorbed_direct = (1.0 - _SCAT_COEF) * par_direct / sin_b
        if absorbed_direct <= 0:
            assim_sunlit = assim_shaded
        else:
            assim_sunlit = assim_max * (
                1.0
                - (assim_max - assim_shaded)
                * (1.0 - math.exp(-absorbed_direct * eff / saturation))
                / (eff * absorbed_direct)
            )

        sunlit = math.exp(-k_direct_bl * laic)
        gross += (sunlit * assim_sunlit + (1.0 - sunlit) * assim_shaded) * weight

    return gross * lai


def daily_total_assimilation(
    crop: Crop,
    astro_data: AstroData,
    radiation: float,
    day_temp: float,
    co2: float,
) -> float:
    """Daily gross assimilation of the canopy, integrated over the day length."""
    prm = crop.prm
    dvs = crop.st.development
    lai = crop.st.lai

    k_diffuse = prm.k_diffuse_tb(dvs)
    eff = prm.eff_tb(day_temp) * prm.co2_eff_tb(co2)
    assim_max = (
        prm.factor_assim_rate_temp(day_temp)
        * prm.max_assim_rate(dvs)
        * prm.co2_amax_tb(co2)
    )

    total = 0.0
    if assim_max > 0.0 and lai > 0.0:
        for x, weight in zip(_X_GAUSS, _W_GAUSS):
            hour = 12.0 + 0.5 * astro_data.daylength * x
            sin_b = max(
                0.0,
                astro_data.sin_ld
                + astro_data.cos_ld * math.cos(2.0 * _PI * (hour + 12.0) / 24.0),
            )
            if sin_b <= 0.0:
                # The sun is below the horizon: nothing to assimilate.
                continue
            par = 0.5 * radiation * sin_b * (1.0 + 0.4 * sin_b) / astro_data.dsinbe
            par_diffuse = min(par, sin_b * astro_data.diff_rad_pp)
            par_direct = par - par_diffuse
            total += (
                instant_assimilation(
                    k_diffuse, eff, assim_max, sin_b, par_diffuse, par_direct, lai
                )
                * weight
            )
    return total * astro_data.daylength


def correct_for_low_temperature(
    crop: Crop, assimilation: float, recent_tmin: Iterable[float]
) -> float:
    """Correct the daily assimilation for low night temperatures (to CH2O).

    ``recent_tmin`` holds the minimum temperatures of today and the days
    before, most recent first; up to seven of them are averaged, fewer early
    in the season.
    """
    number = crop.growth_day if crop.growth_day < 6 else 7
    values = list(islice(recent_tmin, max(number, 0)))
    if not values:
        raise ValueError("no minimum temperatures to average")
    average = sum(values) / len(values)
    return assimilation * crop.prm.factor_gross_assim_temp(average) * 30.0 / 44.0