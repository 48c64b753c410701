"""Crop transpiration, soil water depletion and water stress."""

from __future__ import annotations

import math

from cropsim.model import Crop, Evapotranspiration, MaxEvaporation, WaterBalance
from cropsim.tables import limit

_MAX_OXYGEN_STRESS_DAYS = 4.0


def sweaf(et0: float, crop_group_number: float) -> float:
    """Fraction of easily available soil water between field capacity and wilting point.

    Depends on the potential evapotranspiration ``et0`` (cm/day) and on the
    crop group number, from 1 (drought sensitive) to 5 (drought resistant).
    """
    value = 1.0 / (0.76 + 1.5 * et0) - (5.0 - crop_group_number) * 0.10
    if crop_group_number < 3.0:
        value += (et0 - 0.6) / (crop_group_number * (crop_group_number + 3.0))
    return limit(0.10, 0.95, value)


def evapotranspiration(
    crop: Crop,
    water: WaterBalance,
    reference: Evapotranspiration,
    co2: float,
) -> MaxEvaporation:
    """Maximum evaporation and transpiration under the canopy, and the water stress.

    Sets ``water.water_stress``, ``water.rt.transpiration`` and, for crops with
    air ducts, the count of days with oxygen shortage. ``reference`` is left as
    it is.
    """
    prm = crop.prm
    ct = water.ct
    et0 = reference.et0 * prm.correction_transp

    k_diffuse = prm.k_diffuse_tb(crop.st.development)
    cover = math.exp(-0.75 * k_diffuse * crop.st.lai)
    limits = MaxEvaporation(
        max_evap_water=reference.e0 * cover,
        max_evap_soil=max(0.0, reference.es0 * cover),
        max_transpiration=max(0.0001, et0 * prm.co2_tra_tb(co2) * (1.0 - cover)),
    )

    depletion = sweaf(et0, prm.crop_group_number)
    critical = (1.0 - depletion) * (ct.moisture_fc - ct.moisture_wp) + ct.moisture_wp
    moisture_stress = limit(
        0.0, 1.0, (water.st.moisture - ct.moisture_wp) / (critical - ct.moisture_wp)
    )

    if prm.airducts:
        aeration = ct.moisture_sat - ct.critical_soil_air_c
        if water.st.moisture >= aeration:
            crop.days_oxygen_stress = min(
                crop.days_oxygen_stress + 1.0, _MAX_OXYGEN_STRESS_DAYS
            )
        else:
            crop.days_oxygen_stress = 0.0
        max_reduction = limit(
            0.0,
            1.0,
            (ct.moisture_sat - water.st.moisture) / (ct.moisture_sat - aeration),
        )
        oxygen_stress = max_reduction + (
            1.0 - crop.days_oxygen_stress / _MAX_OXYGEN_STRESS_DAYS
        ) * (1.0 - max_reduction)
    else:
        oxygen_stress = 1.0

    water.water_stress = moisture_stress * oxygen_stress
    water.rt.transpiration = water.water_stress * limits.max_transpiration
    return limits