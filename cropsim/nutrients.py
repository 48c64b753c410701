"""Crop and soil N, P and K: maxima, demand, losses, translocation and stress."""

from __future__ import annotations

from datetime import date as Date

from cropsim.model import Crop, Management, NutrientRates, NutrientStates, Site
from cropsim.tables import limit

_STEP = 1.0
_TINY = 0.001
_MIN_AVAILABLE = 0.001


def _nutrients(crop: Crop):
    """The state and rate containers of N, P and K with the matching parameter prefix."""
    return (
        ("n", crop.n_st, crop.n_rt),
        ("p", crop.p_st, crop.p_rt),
        ("k", crop.k_st, crop.k_rt),
    )


def _prm(crop: Crop, element: str, name: str) -> float:
    return getattr(crop.prm, f"{element}_{name}")


def initialize_nutrients(
    crop: Crop, site: Site, management: Management, date: Date, end_year: int
) -> None:
    """Set the initial crop nutrient amounts and the soil nutrient states at emergence."""
    dvs = crop.st.development
    st = crop.st
    max_leaf_tables = {
        "n": crop.prm.n_max_leaves,
        "p": crop.prm.p_max_leaves,
        "k": crop.prm.k_max_leaves,
    }
    for element, nst, _ in _nutrients(crop):
        nst.max_lv = max_leaf_tables[element](dvs)
        nst.max_st = _prm(crop, element, "max_stems") * nst.max_lv
        nst.max_ro = _prm(crop, element, "max_roots") * nst.max_lv
        nst.max_so = 0.0

        nst.leaves = nst.max_lv * st.leaves
        nst.stems = nst.max_st * st.stems
        nst.roots = nst.max_ro * st.roots
        nst.storage = 0.0

        nst.death_lv = nst.death_st = nst.death_ro = 0.0
        nst.uptake = nst.uptake_lv = nst.uptake_st = nst.uptake_ro = 0.0
        nst.index = 1.0

    site.st_n_tot = (
        management.n_fert_table.amount_on(date, end_year) * management.n_uptake_frac
    )
    site.st_p_tot = (
        management.p_fert_table.amount_on(date, end_year) * management.p_uptake_frac
    )
    site.st_k_tot = (
        management.k_fert_table.amount_on(date, end_year) * management.k_uptake_frac
    )

    site.st_n_mins = management.n_mins
    site.st_p_mins = management.p_mins
    site.st_k_mins = management.k_mins

    crop.npk_index = 1.0
    crop.n_st.optimum_lv = 0.0
    crop.n_st.optimum_st = 0.0


def nutrient_max(crop: Crop) -> None:
    """Maximum N, P and K concentrations (kg/kg dry matter) in the organs."""
    dvs = crop.st.development
    prm = crop.prm
    crop.n_st.max_lv = prm.n_max_leaves(dvs)
    crop.p_st.max_lv = prm.p_max_leaves(dvs)
    crop.k_st.max_lv = prm.k_max_leaves(dvs)

    storage_max = {
        "n": prm.max_n_storage,
        "p": prm.max_p_storage,
        "k": prm.max_k_storage,
    }
    for element, nst, _ in _nutrients(crop):
        nst.max_st = _prm(crop, element, "max_stems") * nst.max_lv
        nst.max_ro = _prm(crop, element, "max_roots") * nst.max_lv
        nst.max_so = storage_max[element]


def nutrient_optimum(crop: Crop) -> None:
    """Optimum N, P and K amounts (kg/ha) in the leaves and stems."""
    st = crop.st
    fractions = {
        "n": crop.prm.opt_n_frac,
        "p": crop.prm.opt_p_frac,
        "k": crop.prm.opt_k_frac,
    }
    for element, nst, _ in _nutrients(crop):
        frac = fractions[element]
        nst.optimum_lv = frac * nst.max_lv * st.leaves
        nst.optimum_st = frac * nst.max_st * st.stems


def nutrient_demand(crop: Crop) -> None:
    """Nutrient demand of the organs (kg/ha/d)."""
    st = crop.st
    transloc_time = {"n": crop.prm.tcnt, "p": crop.prm.tcpt, "k": crop.prm.tckt}
    for element, nst, nrt in _nutrients(crop):
        nrt.demand_lv = max(nst.max_lv * st.leaves - nst.leaves, 0.0)
        nrt.demand_st = max(nst.max_st * st.stems - nst.stems, 0.0)
        nrt.demand_ro = max(nst.max_ro * st.roots - nst.roots, 0.0)
        nrt.demand_so = (
            max(nst.max_so * st.storage - nst.storage, 0.0) / transloc_time[element]
        )


def nutrient_loss(crop: Crop) -> None:
    """Nutrient loss rates (kg/ha/d) with dying leaves, stems and roots."""
    drt = crop.drt
    for element, _, nrt in _nutrients(crop):
        nrt.death_lv = _prm(crop, element, "residual_frac_lv") * drt.leaves
        nrt.death_st = _prm(crop, element, "residual_frac_st") * drt.stems
        nrt.death_ro = _prm(crop, element, "residual_frac_ro") * drt.roots


def nutrient_translocation(crop: Crop) -> None:
    """Nutrient amounts available for translocation (kg/ha) and the supply rate."""
    st = crop.st
    prm = crop.prm
    transloc_time = {"n": prm.tcnt, "p": prm.tcpt, "k": prm.tckt}
    late = st.development > prm.development_stage_nt
    for element, nst, nrt in _nutrients(crop):
        nst.avail_lv = max(
            0.0, nst.leaves - st.leaves * _prm(crop, element, "residual_frac_lv")
        )
        nst.avail_st = max(
            0.0, nst.stems - st.stems * _prm(crop, element, "residual_frac_st")
        )
        nst.avail_ro = max(
            (nst.avail_lv + nst.avail_st) * prm.frac_transloc_roots,
            nst.roots - st.roots * _prm(crop, element, "residual_frac_ro"),
        )
        nst.avail = nst.avail_lv + nst.avail_st + nst.avail_ro
        nrt.supply = nst.avail / transloc_time[element] if late else 0.0


def _index(nst: NutrientStates, crop: Crop, element: str, mass: float) -> float:
    st = crop.st
    if mass > 0.0:
        veg = (nst.leaves + nst.stems) / mass
        res = (
            st.leaves * _prm(crop, element, "residual_frac_lv")
            + st.stems * _prm(crop, element, "residual_frac_st")
        ) / mass
        opt = (nst.optimum_lv + nst.optimum_st) / mass
    else:
        veg = res = opt = 0.0
    if opt - res > _TINY:
        return limit(_TINY, 1.0, (veg - res) / (opt - res))
    return _TINY


def nutrition_index(crop: Crop) -> float:
    """Set the N, P and K nutrition indices and the nutrient stress; return the NPK index."""
    mass = crop.st.leaves + crop.st.stems
    for element, nst, _ in _nutrients(crop):
        nst.index = _index(nst, crop, element, mass)
    crop.npk_index = min(crop.n_st.index, crop.p_st.index, crop.k_st.index)
    crop.nutrient_stress = limit(
        0.0, 1.0, 1.0 - crop.prm.nlue * (1.0001 - crop.npk_index) ** 2
    )
    return crop.npk_index


def soil_nutrient_rates(
    crop: Crop, site: Site, management: Management, date: Date, end_year: int
) -> None:
    """Soil mineralization and total inorganic N, P and K rates (kg/ha/d)."""
    dvs = crop.st.development
    if 0.0 < dvs <= crop.prm.development_stage_n_limit:
        site.rt_n_mins = min(
            management.n_mins * management.n_recovery_frac, site.st_n_mins
        )
        site.rt_p_mins = min(
            management.p_mins * management.p_recovery_frac, site.st_p_mins
        )
        site.rt_k_mins = min(
            management.k_mins * management.k_recovery_frac, site.st_k_mins
        )
    else:
        site.rt_n_mins = site.rt_p_mins = site.rt_k_mins = 0.0

    n_fert = management.n_fert_table.amount_on(date, end_year) * management.n_uptake_frac
    p_fert = management.p_fert_table.amount_on(date, end_year) * management.p_uptake_frac
    k_fert = management.k_fert_table.amount_on(date, end_year) * management.k_uptake_frac

    site.rt_n_tot = n_fert / _STEP - crop.n_rt.uptake + site.rt_n_mins
    site.rt_p_tot = p_fert / _STEP - crop.p_rt.uptake + site.rt_p_mins
    site.rt_k_tot = k_fert / _STEP - crop.k_rt.uptake + site.rt_k_mins


def _partition_translocation(nst: NutrientStates, nrt: NutrientRates) -> None:
    available = nst.avail_lv + nst.avail_st + nst.avail_ro
    if available > _MIN_AVAILABLE:
        nrt.transloc_lv = nrt.storage * nst.avail_lv / available
        nrt.transloc_st = nrt.storage * nst.avail_st / available
        nrt.transloc_ro = nrt.storage * nst.avail_ro / available
    else:
        nrt.transloc_lv = nrt.transloc_st = nrt.transloc_ro = 0.0


def crop_nutrient_rates(crop: Crop) -> None:
    """Net nutrient rates of the organs and translocation to the storage organs."""
    for _, _, nrt in _nutrients(crop):
        nrt.leaves = nrt.uptake_lv - nrt.transloc_lv - nrt.death_lv
        nrt.stems = nrt.uptake_st - nrt.transloc_st - nrt.death_st
        nrt.roots = nrt.uptake_ro - nrt.transloc_ro - nrt.death_ro

    if crop.st.development > crop.prm.development_stage_nt:
        for _, _, nrt in _nutrients(crop):
            nrt.storage = min(nrt.demand_so, nrt.supply)

    for _, nst, nrt in _nutrients(crop):
        _partition_translocation(nst, nrt)