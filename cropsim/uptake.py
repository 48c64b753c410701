"""Nutrient uptake from the soil, the daily nutrient rate sequence and its integration."""

from __future__ import annotations

from datetime import date as Date

from cropsim.model import Crop, Management, Site
from cropsim.nutrients import (
    crop_nutrient_rates,
    nutrient_demand,
    nutrient_loss,
    nutrient_max,
    nutrient_optimum,
    nutrient_translocation,
    nutrition_index,
    soil_nutrient_rates,
)

_STEP = 1.0
_TINY = 0.001
_MIN_TRANSPIRATION_RATIO = 0.01


def _split(rates, total_demand: float, amount: float) -> None:
    """Share ``amount`` over leaves, stems and roots in proportion to their demand."""
    if total_demand > _TINY:
        rates.uptake_lv = rates.demand_lv / total_demand * amount
        rates.uptake_st = rates.demand_st / total_demand * amount
        rates.uptake_ro = rates.demand_ro / total_demand * amount
    else:
        rates.uptake_lv = rates.uptake_st = rates.uptake_ro = 0.0


def nutrient_partitioning(
    crop: Crop, site: Site, transpiration: float, max_transpiration: float
) -> None:
    """Total N, P and K uptake rates (kg/ha/d) and their partitioning over the organs.

    No nutrients are taken up after the nutrient limit stage or under severe
    water shortage. Biological N fixation is added to the N given to the organs.
    """
    prm = crop.prm
    n_rt, p_rt, k_rt = crop.n_rt, crop.p_rt, crop.k_rt

    total_n = n_rt.demand_lv + n_rt.demand_st + n_rt.demand_ro
    total_p = p_rt.demand_lv + p_rt.demand_st + p_rt.demand_ro
    total_k = k_rt.demand_lv + k_rt.demand_st + k_rt.demand_ro

    active = (
        crop.st.development < prm.development_stage_n_limit
        and transpiration / max_transpiration > _MIN_TRANSPIRATION_RATIO
    )
    nutrient_limit = 1.0 if active else 0.0

    n_fixation = max(0.0, prm.n_fixation * total_n) * nutrient_limit

    n_rt.uptake = (
        max(0.0, min(total_n - n_fixation, site.st_n_tot + site.rt_n_mins))
        * nutrient_limit
        / _STEP
    )
    p_rt.uptake = (
        max(0.0, min(total_p, site.st_p_tot + site.rt_p_mins)) * nutrient_limit / _STEP
    )
    k_rt.uptake = (
        max(0.0, min(total_k, site.st_k_tot + site.rt_k_mins)) * nutrient_limit / _STEP
    )

    _split(n_rt, total_n, n_rt.uptake + n_fixation)
    _split(p_rt, total_p, p_rt.uptake)
    _split(k_rt, total_k, k_rt.uptake)


def rate_calculation_nutrients(
    crop: Crop,
    site: Site,
    management: Management,
    transpiration: float,
    max_transpiration: float,
    date: Date,
    end_year: int,
) -> float:
    """Run the daily crop and soil nutrient rate calculations; return the NPK index."""
    nutrient_max(crop)
    nutrient_demand(crop)
    nutrient_optimum(crop)
    nutrient_loss(crop)
    soil_nutrient_rates(crop, site, management, date, end_year)
    nutrient_partitioning(crop, site, transpiration, max_transpiration)
    nutrient_translocation(crop)
    crop_nutrient_rates(crop)
    soil_nutrient_rates(crop, site, management, date, end_year)
    return nutrition_index(crop)


def integrate_nutrients(crop: Crop, site: Site) -> None:
    """Integrate the soil and crop nutrient rates (kg/ha)."""
    site.st_n_tot = max(0.0, site.st_n_tot + site.rt_n_tot)
    site.st_p_tot = max(0.0, site.st_p_tot + site.rt_p_tot)
    site.st_k_tot = max(0.0, site.st_k_tot + site.rt_k_tot)

    site.st_n_mins = max(0.0, site.st_n_mins - site.rt_n_mins)
    site.st_p_mins = max(0.0, site.st_p_mins - site.rt_p_mins)
    site.st_k_mins = max(0.0, site.st_k_mins - site.rt_k_mins)

    for nst, nrt in ((crop.n_st, crop.n_rt), (crop.p_st, crop.p_rt), (crop.k_st, crop.k_rt)):
        nst.uptake += nrt.uptake

        nst.leaves += nrt.leaves
        nst.stems += nrt.stems
        nst.roots += nrt.roots
        nst.storage += nrt.storage

        nst.death_lv += nrt.death_lv
        nst.death_st += nrt.death_st
        nst.death_ro += nrt.death_ro