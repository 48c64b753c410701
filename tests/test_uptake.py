from datetime import date

import pytest

from cropsim.model import Crop, CropParameters, Management, Site
from cropsim.params import CROP_SCALARS, CROP_TABLES
from cropsim.tables import AfgenTable, DateTable
from cropsim.uptake import (
    integrate_nutrients,
    nutrient_partitioning,
    rate_calculation_nutrients,
)


def _flat(value):
    return AfgenTable(((0.0, value), (2.0, value)))


def _crop():
    prm = CropParameters()
    for _, attr in CROP_SCALARS:
        setattr(prm, attr, 0.5)
    for _, attr in CROP_TABLES:
        setattr(prm, attr, _flat(0.5))
    prm.identify_anthesis = 0
    prm.development_stage_n_limit = 1.3
    prm.development_stage_nt = 0.8
    prm.n_fixation = 0.0
    prm.tcnt = prm.tcpt = prm.tckt = 10.0
    prm.n_max_leaves = _flat(0.06)
    prm.p_max_leaves = _flat(0.006)
    prm.k_max_leaves = _flat(0.05)
    for element in "npk":
        for organ in ("lv", "st", "ro"):
            setattr(prm, f"{element}_residual_frac_{organ}", 0.005)
        setattr(prm, f"opt_{element}_frac", 1.0)
    prm.nlue = 1.1
    crop = Crop(prm=prm)
    crop.st.development = 0.5
    crop.st.leaves = 200.0
    crop.st.stems = 100.0
    crop.st.roots = 80.0
    crop.st.storage = 0.0
    return crop


def _site():
    site = Site(
        flag_groundwater=0.0,
        inf_rain_dependent=0.0,
        flag_drains=0.0,
        max_surface_storage=0.0,
        init_soil_moisture=10.0,
        groundwater_depth=999.0,
        dd=0.0,
        soil_lim_root_depth=120.0,
        not_infiltrating=0.0,
        surface_storage=0.0,
        max_init_soil_m=0.3,
        co2=360.0,
        not_inf_table=_flat(0.0),
    )
    site.st_n_tot = site.st_p_tot = site.st_k_tot = 100.0
    site.rt_n_mins = site.rt_p_mins = site.rt_k_mins = 0.0
    site.st_n_mins = site.st_p_mins = site.st_k_mins = 50.0
    return site


def _management():
    return Management(
        n_uptake_frac=0.7,
        p_uptake_frac=0.1,
        k_uptake_frac=0.6,
        n_mins=50.0,
        n_recovery_frac=0.01,
        p_mins=10.0,
        p_recovery_frac=0.01,
        k_mins=20.0,
        k_recovery_frac=0.01,
        n_fert_table=DateTable(),
        p_fert_table=DateTable(),
        k_fert_table=DateTable(),
        irrigation=DateTable(),
    )


def _with_demand(crop):
    for rates in (crop.n_rt, crop.p_rt, crop.k_rt):
        rates.demand_lv = 3.0
        rates.demand_st = 1.0
        rates.demand_ro = 2.0
    return crop


def test_no_uptake_after_nutrient_limit_stage():
    crop = _with_demand(_crop())
    crop.st.development = 1.5
    nutrient_partitioning(crop, _site(), 0.3, 0.3)
    assert crop.n_rt.uptake == 0.0
    assert crop.n_rt.uptake_lv == 0.0
    assert crop.k_rt.uptake == 0.0


def test_no_uptake_under_severe_water_shortage():
    crop = _with_demand(_crop())
    nutrient_partitioning(crop, _site(), 0.001, 0.3)
    assert crop.p_rt.uptake == 0.0
    assert crop.p_rt.uptake_st == 0.0


def test_uptake_shared_in_proportion_to_demand():
    crop = _with_demand(_crop())
    nutrient_partitioning(crop, _site(), 0.3, 0.3)
    p = crop.p_rt
    assert p.uptake > 0.0
    assert p.uptake_lv + p.uptake_st + p.uptake_ro == pytest.approx(p.uptake)
    assert p.uptake_lv / p.uptake_st == pytest.approx(p.demand_lv / p.demand_st)


def test_uptake_limited_by_soil_supply():
    crop = _with_demand(_crop())
    site = _site()
    site.st_k_tot = 0.5
    site.rt_k_mins = 0.25
    nutrient_partitioning(crop, site, 0.3, 0.3)
    assert crop.k_rt.uptake == pytest.approx(site.st_k_tot + site.rt_k_mins)


def test_nitrogen_fixation_adds_to_the_organs():
    crop = _with_demand(_crop())
    crop.prm.n_fixation = 0.5
    nutrient_partitioning(crop, _site(), 0.3, 0.3)
    n = crop.n_rt
    assert n.uptake_lv + n.uptake_st + n.uptake_ro > n.uptake


def test_integrate_keeps_soil_states_non_negative():
    crop = _crop()
    site = _site()
    site.rt_n_tot = -1000.0
    site.rt_p_mins = 1000.0
    integrate_nutrients(crop, site)
    assert site.st_n_tot == 0.0
    assert site.st_p_mins == 0.0


def test_integrate_adds_crop_rates():
    crop = _crop()
    crop.n_st.leaves = 4.0
    crop.n_rt.leaves = 0.5
    crop.p_st.death_lv = 1.0
    crop.p_rt.death_lv = 0.25
    crop.k_rt.uptake = 0.75
    before_uptake = crop.k_st.uptake
    integrate_nutrients(crop, _site())
    assert crop.n_st.leaves == pytest.approx(4.0 + 0.5)
    assert crop.p_st.death_lv == pytest.approx(1.0 + 0.25)
    assert crop.k_st.uptake == pytest.approx(before_uptake + 0.75)


def test_rate_calculation_nutrients_is_consistent():
    crop = _crop()
    site = _site()
    index = rate_calculation_nutrients(
        crop, site, _management(), 0.3, 0.3, date(2000, 6, 1), 2000
    )
    assert 0.001 <= index <= 1.0
    assert index == crop.npk_index
    assert 0.0 <= crop.nutrient_stress <= 1.0
    assert crop.n_rt.demand_lv >= 0.0
    assert site.rt_n_tot == pytest.approx(site.rt_n_mins - crop.n_rt.uptake)