"""Phenological development and dry matter partitioning."""

from __future__ import annotations

import math

from cropsim.model import Crop
from cropsim.tables import insw, limit


def development_rate(crop: Crop, temp: float, par_daylength: float) -> float:
    """Set and return the development rate from temperature, day length and vernalization."""
    prm = crop.prm
    dvs = crop.st.development
    if dvs < 1.0:
        rate = prm.delta_temp_sum(temp) / prm.temp_sum1
        if prm.identify_anthesis in (1, 2):
            rate *= limit(
                0.0,
                1.0,
                (par_daylength - prm.critical_daylength)
                / (prm.optimum_daylength - prm.critical_daylength),
            )
        if prm.identify_anthesis == 2:
            crop.rt.vernalization = insw(
                dvs - 0.3, prm.vernalization_rate(temp), 0.0
            )
            factor = limit(
                0.0,
                1.0,
                (crop.st.vernalization - prm.base_vern_requirement)
                / (prm.sat_vern_requirement - prm.base_vern_requirement),
            )
            rate *= insw(dvs - 0.3, factor, 1.0)
    else:
        rate = prm.delta_temp_sum(temp) / prm.temp_sum2
    crop.rt.development = rate
    return rate


def partitioning(crop: Crop, water_stress: float) -> None:
    """Set the partitioning factors, corrected for water or nitrogen stress."""
    prm = crop.prm
    dvs = crop.st.development
    n_index = crop.n_st.index
    if water_stress < n_index:
        factor = max(1.0, 1.0 / (water_stress + 0.5))
        crop.fac_ro = min(0.6, prm.roots(dvs) * factor)
        crop.fac_lv = prm.leaves(dvs)
        crop.fac_st = prm.stems(dvs)
        crop.fac_so = prm.storage(dvs)
    else:
        flv = prm.leaves(dvs)
        factor = math.exp(-prm.n_lv_partitioning * (1.0 - n_index))
        crop.fac_lv = flv * factor
        crop.fac_ro = prm.roots(dvs)
        crop.fac_st = prm.stems(dvs) + flv - crop.fac_lv
        crop.fac_so = prm.storage(dvs)