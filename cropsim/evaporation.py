"""Reference evaporation by Penman and by Penman-Monteith."""

from __future__ import annotations

import math

from cropsim.astro import AstroData
from cropsim.model import DailyWeather, Evapotranspiration
from cropsim.tables import limit

_LHVAP = 2.45e6


def _relative_sunshine(transm: float, angst_a: float, angst_b: float) -> float:
    numerator = transm - angst_a
    if angst_b == 0.0:
        return 0.0 if numerator < 0.0 else 1.0
    return limit(0.0, 1.0, numerator / angst_b)


def penman_monteith(weather: DailyWeather, astro_data: AstroData) -> float:
    """Reference crop evapotranspiration ET0 (cm/day) by Penman-Monteith."""
    psycon = 0.665
    refcfc = 0.23
    cres = 70.0
    stbc = 4.903e-3
    soil_heat_flux = 0.0

    temp = weather.temp()
    patm = 101.3 * ((293.0 - 0.0065 * weather.altitude) / 293.0) ** 5.26
    gamma = psycon * patm * 1.0e-3

    svap_tmpa = 0.6108 * math.exp(17.27 * temp / (237.3 + temp))
    delta = 4098.0 * svap_tmpa / (temp + 237.3) ** 2

    svap_tmax = 0.6108 * math.exp(17.27 * weather.tmax / (237.3 + weather.tmax))
    svap_tmin = 0.6108 * math.exp(17.27 * weather.tmin / (237.3 + weather.tmin))
    svap = (svap_tmax + svap_tmin) / 2.0
    vap = min(weather.vapour, svap)

    stb_tmax = stbc * (273.16 + weather.tmax) ** 4
    stb_tmin = stbc * (273.16 + weather.tmin) ** 4
    rnl_tmp = ((stb_tmax + stb_tmin) / 2.0) * (0.34 - 0.14 * math.sqrt(vap))

    clear_sky = (0.75 + 2e-05 * weather.altitude) * astro_data.angot_radiation
    if clear_sky <= 0:
        return 0.0

    rnl = rnl_tmp * (1.35 * (weather.radiation / clear_sky) - 0.35)
    rn = ((1.0 - refcfc) * weather.radiation - rnl) / _LHVAP
    ea = (900.0 / (temp + 273.0)) * weather.windspeed * (svap - vap)
    mgamma = gamma * (1.0 + cres / 208.0 * weather.windspeed)
    et0 = (delta * (rn - soil_heat_flux)) / (delta + mgamma) + (gamma * ea) / (delta + mgamma)
    return max(0.0, 0.1 * et0)


def penman(weather: DailyWeather, astro_data: AstroData) -> Evapotranspiration:
    """Open water (E0) and soil (ES0) evaporation by Penman, with ET0 by Penman-Monteith.

    All values are in cm/day.
    """
    psycon = 0.67
    refcfw = 0.05
    refcfs = 0.15
    stbc = 4.9e-3

    temp = weather.temp()
    tdif = weather.tmax - weather.tmin
    bu = 0.54 + 0.35 * limit(0.0, 1.0, (tdif - 12.0) / 4.0)

    pbar = 1013.0 * math.exp(-0.034 * weather.altitude / (temp + 273.0))
    gamma = psycon * pbar / 1013.0

    saturated = 6.10588 * math.exp(17.32491 * temp / (temp + 238.102))
    delta = 238.102 * 17.32491 * saturated / (temp + 238.102) ** 2
    # Vapour pressure in hPa here.
    vap = min(10.0 * weather.vapour, saturated)

    rel_sun = _relative_sunshine(astro_data.atmosph_transm, weather.angst_a, weather.angst_b)

    rb = stbc * (temp + 273.0) ** 4 * (0.56 - 0.079 * math.sqrt(vap)) * (0.1 + 0.9 * rel_sun)
    rnw = (weather.radiation * (1.0 - refcfw) - rb) / _LHVAP
    rns = (weather.radiation * (1.0 - refcfs) - rb) / _LHVAP

    ea = 0.26 * max(0.0, saturated - vap) * (0.5 + bu * weather.windspeed)

    e0 = max(0.0, 0.1 * (delta * rnw + gamma * ea) / (delta + gamma))
    es0 = max(0.0, 0.1 * (delta * rns + gamma * ea) / (delta + gamma))
    return Evapotranspiration(e0=e0, es0=es0, et0=penman_monteith(weather, astro_data))