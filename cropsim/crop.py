"""Crop emergence, initial state, growth rates, integration and the daily rate sequence."""

from __future__ import annotations

from typing import Iterable

from cropsim.assimilation import correct_for_low_temperature, daily_total_assimilation
from cropsim.astro import AstroData
from cropsim.development import development_rate
from cropsim.leafgrowth import leaf_growth
from cropsim.model import Crop, LeafClass, MaxEvaporation, Site, WaterBalance
from cropsim.nutrients import crop_nutrient_rates, nutrient_loss
from cropsim.respiration import conversion, respiration
from cropsim.senescence import dying_leaves
from cropsim.tables import limit

_STEP = 1.0
_MIN_GROUNDWATER_DISTANCE = 10.0


def emergence(crop: Crop, emerged: bool, temp: float) -> bool:
    """Whether the crop has emerged, counting the temperature sum from the day after sowing."""
    if emerged:
        return True
    if crop.sowing == 1:
        crop.sowing = 2
        return False
    prm = crop.prm
    crop.tsum_emergence += limit(
        0.0,
        prm.temp_eff_max - prm.temp_base_emergence,
        temp - prm.temp_base_emergence,
    )
    return crop.tsum_emergence >= prm.tsum_emergence


def initialize_crop(crop: Crop, site: Site) -> None:
    """Set the crop states at emergence and create the first leaf class."""
    prm = crop.prm
    st = crop.st

    st.development = prm.initial_dvs
    dvs = st.development

    fraction_roots = prm.roots(dvs)
    shoot_weight = prm.initial_dry_weight * (1.0 - fraction_roots)

    st.roots = prm.initial_dry_weight * fraction_roots
    st.root_depth = prm.init_rooting_depth
    st.stems = shoot_weight * prm.stems(dvs)
    st.leaves = shoot_weight * prm.leaves(dvs)
    st.storage = shoot_weight * prm.storage(dvs)

    prm.max_rooting_depth = max(
        prm.init_rooting_depth, min(prm.max_rooting_depth, site.soil_lim_root_depth)
    )

    specific_leaf_area = prm.specific_leaf_area(dvs)
    lai_emergence = st.leaves * specific_leaf_area
    st.lai_exp = lai_emergence
    st.lai = (
        lai_emergence
        + st.stems * prm.specific_stem_area(dvs)
        + st.storage * prm.specific_pod_area
    )

    crop.leaves = [LeafClass(weight=st.leaves, age=0.0, area=specific_leaf_area)]

    crop.emergence = 1
    crop.growth_day = 1

    crop.dst.leaves = 0.0
    crop.dst.stems = 0.0
    crop.dst.roots = 0.0

    st.vernalization = 0.0


def growth(
    crop: Crop,
    new_material: float,
    site: Site,
    water: WaterBalance,
    limits: MaxEvaporation,
    temp: float,
) -> None:
    """Growth and death rates of the organs (kg/ha/d) and the rooting depth rate (cm/d)."""
    prm = crop.prm
    st = crop.st
    rt = crop.rt
    drt = crop.drt
    dvs = st.development

    transloc_st = transloc_dst = 0.0
    if dvs >= 1.0:
        transloc_st = st.stems * crop.rt_dev_prev * prm.frac_translocation
        transloc_dst = crop.dst.stems * crop.rt_dev_prev * prm.frac_translocation
    translocation = transloc_st + transloc_dst

    drt.roots = st.roots * prm.death_rate_roots(dvs)
    rt.roots = new_material * crop.fac_ro - drt.roots

    shoots = new_material * (1.0 - crop.fac_ro)

    drt.stems = st.stems * prm.death_rate_stems(dvs) - transloc_dst
    rt.stems = shoots * crop.fac_st - drt.stems - transloc_st

    rt.storage = shoots * crop.fac_so + translocation

    drt.leaves = dying_leaves(crop, water.rt.transpiration, limits.max_transpiration)
    rt.leaves = shoots * crop.fac_lv
    leaf_growth(crop, water.water_stress, temp)
    rt.leaves -= drt.leaves

    too_wet = (
        not prm.airducts
        and site.groundwater_depth - st.root_depth < _MIN_GROUNDWATER_DISTANCE
    )
    if crop.fac_ro <= 0.0 or too_wet:
        rt.root_depth = 0.0
    else:
        rt.root_depth = min(
            prm.max_rooting_depth - st.root_depth, prm.max_increase_root * _STEP
        )


def integrate_crop(crop: Crop, temp: float) -> None:
    """Integrate the crop rates into the states and age all but the youngest leaf class."""
    prm = crop.prm
    st = crop.st
    rt = crop.rt

    st.roots += rt.roots
    st.stems += rt.stems
    st.leaves += rt.leaves
    st.storage += rt.storage
    st.lai_exp += rt.lai_exp

    st.root_depth_prev = st.root_depth
    st.root_depth += rt.root_depth

    if st.development < 1.0:
        st.development = min(1.0, st.development + rt.development)
    else:
        st.development += rt.development

    crop.dst.roots += crop.drt.roots
    crop.dst.stems += crop.drt.stems
    crop.dst.leaves += crop.drt.leaves

    if prm.identify_anthesis == 2:
        st.vernalization += rt.vernalization

    ageing = max(0.0, (temp - prm.temp_base_leaves) / (35.0 - prm.temp_base_leaves))
    for leaf in crop.leaves[:-1]:
        leaf.age += ageing


def rates_to_zero(crop: Crop, site: Site, water: WaterBalance) -> None:
    """Reset the crop, soil nutrient and water balance rates for a new day."""
    crop.drt.roots = crop.drt.leaves = crop.drt.stems = 0.0

    # Keep yesterday's development rate for stem translocation.
    if crop.st.development > 1.0:
        crop.rt_dev_prev = crop.rt.development

    rt = crop.rt
    rt.development = 0.0
    rt.vernalization = 0.0
    rt.root_depth = 0.0
    rt.roots = rt.leaves = rt.stems = rt.storage = rt.lai_exp = 0.0

    for nrt in (crop.n_rt, crop.p_rt, crop.k_rt):
        nrt.death_lv = nrt.death_st = nrt.death_ro = 0.0
        nrt.leaves = nrt.stems = nrt.roots = nrt.storage = 0.0
        nrt.demand_lv = nrt.demand_st = nrt.demand_ro = nrt.demand_so = 0.0
        nrt.transloc = 0.0
        nrt.uptake = nrt.uptake_lv = nrt.uptake_st = nrt.uptake_ro = 0.0

    site.rt_n_mins = site.rt_p_mins = site.rt_k_mins = 0.0
    site.rt_n_tot = site.rt_p_tot = site.rt_k_tot = 0.0

    wrt = water.rt
    wrt.evap_water = 0.0
    wrt.evap_soil = 0.0
    wrt.infiltration = 0.0
    wrt.irrigation = 0.0
    wrt.loss = 0.0
    wrt.moisture = 0.0
    wrt.moisture_low = 0.0
    wrt.percolation = 0.0
    wrt.root_zone_moisture = 0.0
    wrt.runoff = 0.0
    wrt.water_root_ext = 0.0


def rate_calculation_crop(
    crop: Crop,
    site: Site,
    water: WaterBalance,
    limits: MaxEvaporation,
    astro_data: AstroData,
    weather,
    co2: float,
    recent_tmin: Iterable[float],
) -> float:
    """Daily crop rates from assimilation down to development; return the dry matter growth."""
    temp = weather.temp()
    gross = daily_total_assimilation(
        crop, astro_data, weather.radiation, weather.day_temp(), co2
    )
    stress = min(crop.nutrient_stress, water.water_stress)
    total = stress * correct_for_low_temperature(crop, gross, recent_tmin)
    maintenance = respiration(crop, total, temp)
    gross_growth = conversion(crop, total - maintenance)

    growth(crop, gross_growth, site, water, limits, temp)
    nutrient_loss(crop)
    crop_nutrient_rates(crop)
    development_rate(crop, temp, astro_data.par_daylength)
    return gross_growth