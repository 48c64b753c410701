import pytest

from cropsim.model import Crop, Evapotranspiration, SoilConstants, WaterBalance
from cropsim.tables import AfgenTable
from cropsim.transpiration import evapotranspiration, sweaf


def _flat(value):
    return AfgenTable(((-100.0, value), (2000.0, value)))


def make_crop(lai=2.0, airducts=0.0, correction=1.0):
    crop = Crop()
    crop.prm.k_diffuse_tb = _flat(0.6)
    crop.prm.co2_tra_tb = _flat(1.0)
    crop.prm.correction_transp = correction
    crop.prm.crop_group_number = 4.0
    crop.prm.airducts = airducts
    crop.st.lai = lai
    return crop


def make_water(moisture):
    water = WaterBalance(
        ct=SoilConstants(
            moisture_fc=0.3, moisture_wp=0.1, moisture_sat=0.4, critical_soil_air_c=0.05
        )
    )
    water.st.moisture = moisture
    return water


def reference():
    return Evapotranspiration(e0=0.5, es0=0.4, et0=0.45)


@pytest.mark.parametrize("et0", [0.0, 0.1, 0.5, 1.0, 3.0])
@pytest.mark.parametrize("group", [1.0, 2.0, 3.0, 4.0, 5.0])
def test_sweaf_within_bounds(et0, group):
    value = sweaf(et0, group)
    assert 0.10 <= value <= 0.95


def test_sweaf_upper_bound_for_low_demand():
    assert sweaf(0.0, 5.0) == 0.95


def test_sweaf_lower_bound_for_high_demand():
    assert sweaf(100.0, 5.0) == 0.10


def test_sweaf_decreases_with_demand():
    values = [sweaf(et0, 4.0) for et0 in (0.1, 0.2, 0.4, 0.6, 0.8)]
    assert values == sorted(values, reverse=True)


def test_well_watered_crop_transpires_at_maximum():
    crop = make_crop()
    water = make_water(0.3)
    limits = evapotranspiration(crop, water, reference(), 360.0)
    assert water.water_stress == 1.0
    assert water.rt.transpiration == pytest.approx(limits.max_transpiration)


def test_wilting_point_stops_transpiration():
    crop = make_crop()
    water = make_water(0.1)
    evapotranspiration(crop, water, reference(), 360.0)
    assert water.water_stress == 0.0
    assert water.rt.transpiration == 0.0


def test_bare_soil_limits():
    crop = make_crop(lai=0.0)
    water = make_water(0.3)
    ref = reference()
    limits = evapotranspiration(crop, water, ref, 360.0)
    assert limits.max_transpiration == 0.0001
    assert limits.max_evap_water == pytest.approx(ref.e0)
    assert limits.max_evap_soil == pytest.approx(ref.es0)


def test_canopy_shades_evaporation():
    crop = make_crop(lai=3.0)
    ref = reference()
    limits = evapotranspiration(crop, make_water(0.3), ref, 360.0)
    assert limits.max_evap_water < ref.e0
    assert limits.max_evap_soil < ref.es0


def test_reference_is_not_changed():
    ref = reference()
    evapotranspiration(make_crop(correction=2.0), make_water(0.3), ref, 360.0)
    assert ref.et0 == 0.45


def test_correction_factor_scales_transpiration():
    single = evapotranspiration(make_crop(correction=1.0), make_water(0.3), reference(), 360.0)
    double = evapotranspiration(make_crop(correction=2.0), make_water(0.3), reference(), 360.0)
    assert double.max_transpiration == pytest.approx(2.0 * single.max_transpiration)


def test_oxygen_stress_builds_up_to_four_days():
    crop = make_crop(airducts=1.0)
    water = make_water(0.4)
    stresses = []
    for _ in range(6):
        evapotranspiration(crop, water, reference(), 360.0)
        stresses.append(water.water_stress)
    assert stresses == sorted(stresses, reverse=True)
    assert crop.days_oxygen_stress == 4.0
    assert water.water_stress == 0.0


def test_oxygen_stress_resets_when_soil_drains():
    crop = make_crop(airducts=1.0)
    water = make_water(0.4)
    evapotranspiration(crop, water, reference(), 360.0)
    water.st.moisture = 0.3
    evapotranspiration(crop, water, reference(), 360.0)
    assert crop.days_oxygen_stress == 0.0
    assert water.water_stress == 1.0