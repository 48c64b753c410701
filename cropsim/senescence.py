"""Death of leaves by water stress, self-shading, nutrient shortage and age."""

from __future__ import annotations

from cropsim.model import Crop
from cropsim.tables import limit

_TINY = 0.001


def dying_leaves(crop: Crop, transpiration: float, max_transpiration: float) -> float:
    """Remove dying leaf weight from the oldest classes and return the total died (kg/ha).

    Leaf classes older than the life span die as well and are included in the
    result.
    """
    prm = crop.prm
    st = crop.st

    critical_lai = 3.2 / prm.k_diffuse_tb(st.development)
    death_water = (
        st.leaves * (1.0 - transpiration / max_transpiration) * prm.max_rel_death_rate
    )
    death_shading = st.leaves * limit(
        0.0, 0.03, 0.03 * (st.lai - critical_lai) / critical_lai
    )
    death = max(death_water, death_shading)
    death += st.leaves * prm.dying_leaves_npk_stress * (1.0 - crop.npk_index)
    if death < _TINY:
        death = 0.0
    death_stress = death

    leaves = crop.leaves
    while leaves and death > leaves[0].weight:
        death -= leaves[0].weight
        del leaves[0]

    death_age = 0.0
    if leaves:
        leaves[0].weight -= death
        while leaves and leaves[0].age > prm.life_span:
            death_age += leaves[0].weight
            del leaves[0]

    return death_stress + death_age