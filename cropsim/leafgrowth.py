"""Daily growth of leaf area, stored as a new youngest leaf class."""

from __future__ import annotations

import math

from cropsim.model import Crop, LeafClass

_MAX_EXPONENTIAL_LAI = 6.0


def leaf_growth(crop: Crop, water_stress: float, temp: float) -> float:
    """Add today's leaf weight as the youngest leaf class and set the LAI growth rate.

    Returns the exponential LAI growth rate.
    """
    prm = crop.prm
    st = crop.st
    rt = crop.rt

    specific_leaf_area = prm.specific_leaf_area(st.development) * math.exp(
        -prm.nutrient_stress_sla * (1.0 - crop.npk_index)
    )

    if st.lai_exp < _MAX_EXPONENTIAL_LAI and rt.leaves > 0.0:
        if st.development < 0.2 and st.lai < 0.75:
            stress = water_stress * math.exp(
                -prm.nitrogen_stress_lai * (1.0 - crop.npk_index)
            )
        else:
            stress = 1.0
        effective_temp = max(0.0, temp - prm.temp_base_leaves)
        growth_exp_lai = st.lai_exp * prm.rel_increase_lai * effective_temp * stress
        source_limited = rt.leaves * specific_leaf_area
        specific_leaf_area = min(growth_exp_lai, source_limited) / rt.leaves
    else:
        growth_exp_lai = 0.0

    crop.leaves.append(LeafClass(weight=rt.leaves, age=0.0, area=specific_leaf_area))
    rt.lai_exp = growth_exp_lai
    return growth_exp_lai