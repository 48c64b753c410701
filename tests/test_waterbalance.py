from datetime import date

import pytest

from cropsim.model import (
    Crop,
    Management,
    MaxEvaporation,
    Site,
    SoilConstants,
    WaterBalance,
    WaterRates,
)
from cropsim.tables import AfgenTable, DateTable
from cropsim.waterbalance import (
    initialize_water_balance,
    integrate_water_balance,
    rate_water_balance,
)

LIMITS = MaxEvaporation(max_evap_water=0.5, max_evap_soil=0.3, max_transpiration=0.4)
DAY = date(2000, 5, 1)
MANAGEMENT = Management(irrigation=DateTable(((5, 1, 2.0),)))


def make_crop(root_depth=50.0, max_root=100.0, airducts=0.0):
    crop = Crop()
    crop.prm.k_diffuse_tb = AfgenTable(((0.0, 0.6), (2.0, 0.6)))
    crop.prm.max_rooting_depth = max_root
    crop.prm.airducts = airducts
    crop.st.root_depth = root_depth
    crop.st.root_depth_prev = root_depth
    return crop


def make_water():
    return WaterBalance(
        ct=SoilConstants(
            moisture_fc=0.3,
            moisture_wp=0.1,
            moisture_sat=0.4,
            critical_soil_air_c=0.05,
            max_percol_rtz=10.0,
            max_percol_subs=5.0,
            k0=10.0,
        )
    )


def make_site(**overrides):
    values = dict(
        init_soil_moisture=10.0,
        max_init_soil_m=0.35,
        surface_storage=0.0,
        max_surface_storage=1.0,
    )
    values.update(overrides)
    return Site(**values)


def initialized(airducts=0.0, es0=0.2, **site_values):
    water, site, crop = make_water(), make_site(**site_values), make_crop(airducts=airducts)
    initialize_water_balance(water, site, crop, es0)
    return water, site, crop


def test_initial_moisture_from_available_water():
    water, site, crop = initialized()
    assert water.st.moisture == pytest.approx(0.1 + site.init_soil_moisture / crop.st.root_depth)
    assert water.st.root_zone_moisture == pytest.approx(water.st.moisture * crop.st.root_depth)
    assert water.days_since_last_rain == 1.0
    assert water.water_stress == 1.0


def test_dry_start_at_wilting_point():
    water, _, _ = initialized(init_soil_moisture=0.0)
    assert water.st.moisture == pytest.approx(water.ct.moisture_wp)
    assert water.days_since_last_rain == 5.0


def test_initial_moisture_limit_clipped_to_saturation():
    water, site, _ = initialized(max_init_soil_m=0.9, init_soil_moisture=100.0)
    assert site.max_init_soil_m == water.ct.moisture_sat
    assert water.st.moisture == pytest.approx(water.ct.moisture_sat)


def test_rice_starts_saturated():
    water, site, _ = initialized(airducts=1.0, max_init_soil_m=0.2)
    assert site.max_init_soil_m == water.ct.moisture_sat


def test_subsoil_moisture_within_bounds():
    water, _, crop = initialized()
    upper = water.ct.moisture_sat * (crop.prm.max_rooting_depth - crop.st.root_depth)
    assert 0.0 <= water.st.moisture_low <= upper


def test_bare_soil_evaporation_equals_es0():
    water, _, _ = initialized(es0=0.25)
    assert water.rt.evap_soil == pytest.approx(0.25)


def test_irrigation_infiltrates_on_scheduled_day():
    water, site, crop = initialized()
    water.rt.transpiration = 0.2
    rate_water_balance(water, site, crop, LIMITS, MANAGEMENT, 0.0, DAY, 2000)
    assert water.rt.irrigation == 2.0
    assert water.rt.infiltration == pytest.approx(water.rt.irrigation)


def test_no_irrigation_on_other_days():
    water, site, crop = initialized()
    rate_water_balance(water, site, crop, LIMITS, MANAGEMENT, 0.0, date(2000, 5, 2), 2000)
    assert water.rt.irrigation == 0.0
    assert water.rt.infiltration == 0.0


def test_no_irrigation_after_end_year():
    water, site, crop = initialized()
    rate_water_balance(water, site, crop, LIMITS, MANAGEMENT, 0.0, date(2001, 5, 1), 2000)
    assert water.rt.irrigation == 0.0


def test_rate_balance_identities():
    water, site, crop = initialized()
    water.rt.transpiration = 0.2
    rate_water_balance(water, site, crop, LIMITS, MANAGEMENT, 1.5, DAY, 2000)
    rt = water.rt
    assert rt.root_zone_moisture == pytest.approx(
        -rt.transpiration - rt.evap_soil - rt.percolation + rt.infiltration
    )
    assert rt.moisture_low == pytest.approx(rt.percolation - rt.loss)


def test_soil_evaporation_declines_after_rain():
    water, site, crop = initialized()
    before = water.days_since_last_rain
    rate_water_balance(water, site, crop, LIMITS, MANAGEMENT, 0.0, DAY, 2000)
    assert water.days_since_last_rain == before + 1.0
    assert 0.0 <= water.rt.evap_soil <= LIMITS.max_evap_soil


def test_wet_previous_day_gives_maximum_soil_evaporation():
    water, site, crop = initialized()
    water.inf_previous_day = 2.0
    rate_water_balance(water, site, crop, LIMITS, MANAGEMENT, 0.0, DAY, 2000)
    assert water.rt.evap_soil == LIMITS.max_evap_soil
    assert water.days_since_last_rain == 1.0


def test_ponded_surface_evaporates_open_water():
    water, site, crop = initialized()
    water.st.surface_storage = 2.0
    rate_water_balance(water, site, crop, LIMITS, MANAGEMENT, 0.0, DAY, 2000)
    assert water.rt.evap_water == LIMITS.max_evap_water
    assert water.rt.infiltration <= water.ct.max_percol_rtz


def test_rain_dependent_infiltration_uses_table():
    dependent = initialized(
        inf_rain_dependent=1.0,
        not_infiltrating=1.0,
        not_inf_table=AfgenTable(((0.0, 0.5), (10.0, 0.5))),
    )
    fixed = initialized(not_infiltrating=0.5)
    for water, site, crop in (dependent, fixed):
        rate_water_balance(water, site, crop, LIMITS, Management(), 2.0, DAY, 2000)
    assert dependent[0].rt.infiltration == pytest.approx(fixed[0].rt.infiltration)
    assert 0.0 < dependent[0].rt.infiltration < 2.0


def test_excess_surface_water_runs_off():
    water, site, crop = initialized()
    water.rt = WaterRates()
    integrate_water_balance(water, site, crop, 3.0)
    assert water.st.surface_storage == site.max_surface_storage
    assert water.st.runoff == pytest.approx(3.0 - site.max_surface_storage)
    assert water.st.rain == 3.0


def test_root_growth_moves_subsoil_water_into_root_zone():
    water, site, crop = initialized()
    water.rt = WaterRates()
    water.st.moisture_low = 8.0
    total = water.st.root_zone_moisture + water.st.moisture_low
    crop.st.root_depth_prev = 50.0
    crop.st.root_depth = 60.0
    integrate_water_balance(water, site, crop, 0.0)
    assert water.st.moisture_low < 8.0
    assert water.st.water_root_ext > 0.0
    assert water.st.root_zone_moisture + water.st.moisture_low == pytest.approx(total)
    assert water.st.moisture == pytest.approx(water.st.root_zone_moisture / 60.0)


def test_negative_root_zone_water_is_clipped():
    water, site, crop = initialized()
    water.rt = WaterRates(root_zone_moisture=-1.0e3)
    integrate_water_balance(water, site, crop, 0.0)
    assert water.st.root_zone_moisture == 0.0
    assert water.st.evap_soil < 0.0
    assert water.st.moisture == 0.0


def test_infiltration_remembered_for_next_day():
    water, site, crop = initialized()
    water.rt = WaterRates(infiltration=0.7)
    integrate_water_balance(water, site, crop, 1.0)
    assert water.inf_previous_day == 0.7
    assert water.st.infiltration == pytest.approx(0.7)