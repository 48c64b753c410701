"""Free-draining soil water balance of the rooted zone and the subsoil."""

from __future__ import annotations

import math
from datetime import date as Date

from cropsim.model import Crop, Management, MaxEvaporation, Site, WaterBalance
from cropsim.tables import limit

_STEP = 1.0


def initialize_water_balance(
    water: WaterBalance, site: Site, crop: Crop, es0: float
) -> None:
    """Set the initial water balance states at crop emergence."""
    ct = water.ct
    st = water.st

    water.soil_max_rooting_depth = 0.0
    water.water_stress = 1.0
    water.inf_previous_day = 0.0

    if site.max_init_soil_m < ct.moisture_wp:
        site.max_init_soil_m = ct.moisture_wp
    if site.max_init_soil_m > ct.moisture_sat:
        site.max_init_soil_m = ct.moisture_sat

    st.surface_storage = site.surface_storage

    # Rice starts on saturated soil.
    if crop.prm.airducts:
        site.max_init_soil_m = ct.moisture_sat

    root_depth = crop.st.root_depth
    st.moisture = limit(
        ct.moisture_wp,
        site.max_init_soil_m,
        ct.moisture_wp + site.init_soil_moisture / root_depth,
    )
    st.root_zone_moisture = st.moisture * root_depth

    water.days_since_last_rain = 1.0
    if st.moisture <= ct.moisture_wp + 0.5 * (ct.moisture_fc - ct.moisture_wp):
        water.days_since_last_rain = 5.0

    max_root = crop.prm.max_rooting_depth
    st.moisture_low = limit(
        0.0,
        ct.moisture_sat * (max_root - root_depth),
        site.init_soil_moisture + max_root * ct.moisture_wp - st.root_zone_moisture,
    )

    k_diffuse = crop.prm.k_diffuse_tb(crop.st.development)
    water.rt.evap_soil = max(0.0, es0 * math.exp(-0.75 * k_diffuse * crop.st.lai))


def rate_water_balance(
    water: WaterBalance,
    site: Site,
    crop: Crop,
    limits: MaxEvaporation,
    management: Management,
    rain: float,
    date: Date,
    end_year: int,
) -> None:
    """Compute the daily water balance rates (cm/day)."""
    ct = water.ct
    st = water.st
    rt = water.rt

    rt.irrigation = management.irrigation.amount_on(date, end_year)

    if st.surface_storage > 1.0:
        rt.evap_water = limits.max_evap_water
    elif water.inf_previous_day >= 1.0:
        # At least 1 cm infiltrated yesterday: the soil evaporates at its maximum.
        rt.evap_soil = limits.max_evap_soil
        water.days_since_last_rain = 1.0
    else:
        water.days_since_last_rain += 1.0
        days = water.days_since_last_rain
        c_max_soil_evap = limits.max_evap_soil * (math.sqrt(days) - math.sqrt(days - 1.0))
        rt.evap_soil = min(limits.max_evap_soil, c_max_soil_evap + water.inf_previous_day)

    if st.surface_storage <= 0.1:
        if site.inf_rain_dependent:
            not_infiltrating = site.not_infiltrating * site.not_inf_table(rain)
        else:
            not_infiltrating = site.not_infiltrating
        preliminary = (
            (1.0 - not_infiltrating) * rain + rt.irrigation + st.surface_storage / _STEP
        )
    else:
        available = st.surface_storage + (
            rain * (1.0 - site.not_infiltrating) + rt.irrigation - rt.evap_soil
        ) * _STEP
        preliminary = min(ct.max_percol_rtz * _STEP, available) / _STEP

    root_depth = crop.st.root_depth
    max_root = crop.prm.max_rooting_depth

    water_eq = ct.moisture_fc * root_depth
    perc1 = limit(
        0.0,
        ct.max_percol_rtz,
        (st.root_zone_moisture - water_eq) / _STEP - rt.transpiration - rt.evap_soil,
    )

    water_eq_low = ct.moisture_fc * (max_root - root_depth)
    rt.loss = limit(
        0.0, ct.max_percol_subs, (st.moisture_low - water_eq_low) / _STEP + perc1
    )
    if crop.prm.airducts:
        rt.loss = min(rt.loss, 0.05 * ct.k0)

    perc2 = (
        (max_root - root_depth) * ct.moisture_sat - st.moisture_low
    ) / _STEP + rt.loss
    rt.percolation = min(perc1, perc2)

    rt.infiltration = max(
        0.0,
        min(
            preliminary,
            (ct.moisture_sat - st.moisture) * root_depth / _STEP
            + rt.transpiration
            + rt.evap_soil
            + rt.percolation,
        ),
    )

    rt.root_zone_moisture = (
        -rt.transpiration - rt.evap_soil - rt.percolation + rt.infiltration
    )
    rt.moisture_low = rt.percolation - rt.loss


def integrate_water_balance(
    water: WaterBalance, site: Site, crop: Crop, rain: float
) -> None:
    """Integrate the water balance rates and update the root zone moisture content."""
    st = water.st
    rt = water.rt

    st.transpiration += rt.transpiration
    st.evap_water += rt.evap_water
    st.evap_soil += rt.evap_soil

    st.rain += rain
    st.infiltration += rt.infiltration
    st.irrigation += rt.irrigation

    pre_surface_storage = st.surface_storage + (
        rain + rt.irrigation - rt.evap_water - rt.infiltration
    ) * _STEP
    st.surface_storage = min(pre_surface_storage, site.max_surface_storage)
    st.runoff += pre_surface_storage - st.surface_storage

    st.root_zone_moisture += rt.root_zone_moisture * _STEP
    if st.root_zone_moisture < 0.0:
        st.evap_soil += st.root_zone_moisture
        st.root_zone_moisture = 0.0

    st.percolation += rt.percolation * _STEP
    st.loss += rt.loss * _STEP
    st.moisture_low += rt.moisture_low

    growth = crop.st.root_depth - crop.st.root_depth_prev
    if growth > 0.001:
        extension = (
            st.moisture_low
            * growth
            / (crop.prm.max_rooting_depth - crop.st.root_depth_prev)
        )
        extension = min(extension, st.moisture_low)
        st.moisture_low -= extension
        st.water_root_ext += extension
        st.root_zone_moisture += extension

    st.moisture = st.root_zone_moisture / crop.st.root_depth
    water.inf_previous_day = rt.infiltration