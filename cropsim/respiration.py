"""Maintenance respiration and conversion of assimilates into dry matter."""

from __future__ import annotations

from cropsim.model import Crop

_TEMP_REF = 25.0


def respiration(crop: Crop, total_assimilation: float, temp: float) -> float:
    """Maintenance respiration (kg/ha/d), never more than the total assimilation."""
    prm = crop.prm
    st = crop.st
    resp = (
        prm.rel_respi_leaves * st.leaves
        + prm.rel_respi_storage * st.storage
        + prm.rel_respi_roots * st.roots
        + prm.rel_respi_stems * st.stems
    )
    resp *= prm.factor_senescence(st.development)
    resp *= prm.q10 ** (0.1 * (temp - _TEMP_REF))
    return min(resp, total_assimilation)


def conversion(crop: Crop, net_assimilation: float) -> float:
    """Dry matter growth (kg/ha/d) from net assimilates, using the partitioning factors."""
    prm = crop.prm
    root = crop.fac_ro / prm.conversion_roots
    shoots = (
        crop.fac_st / prm.conversion_stems
        + crop.fac_lv / prm.conversion_leaves
        + crop.fac_so / prm.conversion_storage
    )
    return net_assimilation / (shoots * (1.0 - crop.fac_ro) + root)