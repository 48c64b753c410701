"""State containers for the crop, soil water, site and management."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from cropsim.tables import AfgenTable, DateTable


@dataclass
class CropParameters:
    """Crop parameters and tables read from a crop file."""

    roots: Optional[AfgenTable] = None
    stems: Optional[AfgenTable] = None
    leaves: Optional[AfgenTable] = None
    storage: Optional[AfgenTable] = None
    vernalization_rate: Optional[AfgenTable] = None
    delta_temp_sum: Optional[AfgenTable] = None
    specific_leaf_area: Optional[AfgenTable] = None
    specific_stem_area: Optional[AfgenTable] = None
    k_diffuse_tb: Optional[AfgenTable] = None
    eff_tb: Optional[AfgenTable] = None
    max_assim_rate: Optional[AfgenTable] = None
    factor_assim_rate_temp: Optional[AfgenTable] = None
    factor_gross_assim_temp: Optional[AfgenTable] = None
    factor_senescence: Optional[AfgenTable] = None
    death_rate_stems: Optional[AfgenTable] = None
    death_rate_roots: Optional[AfgenTable] = None
    co2_amax_tb: Optional[AfgenTable] = None
    co2_eff_tb: Optional[AfgenTable] = None
    co2_tra_tb: Optional[AfgenTable] = None
    n_max_leaves: Optional[AfgenTable] = None
    p_max_leaves: Optional[AfgenTable] = None
    k_max_leaves: Optional[AfgenTable] = None

    temp_base_emergence: float = 0.0
    temp_eff_max: float = 0.0
    tsum_emergence: float = 0.0
    identify_anthesis: int = 0
    optimum_daylength: float = 0.0
    critical_daylength: float = 0.0
    sat_vern_requirement: float = 0.0
    base_vern_requirement: float = 0.0
    temp_sum1: float = 0.0
    temp_sum2: float = 0.0
    initial_dvs: float = 0.0
    develop_stage_harvest: float = 0.0
    initial_dry_weight: float = 0.0
    rel_increase_lai: float = 0.0
    specific_pod_area: float = 0.0
    life_span: float = 0.0
    temp_base_leaves: float = 0.0
    conversion_leaves: float = 0.0
    conversion_storage: float = 0.0
    conversion_roots: float = 0.0
    conversion_stems: float = 0.0
    q10: float = 0.0
    rel_respi_leaves: float = 0.0
    rel_respi_storage: float = 0.0
    rel_respi_roots: float = 0.0
    rel_respi_stems: float = 0.0
    max_rel_death_rate: float = 0.0
    correction_transp: float = 0.0
    crop_group_number: float = 0.0
    airducts: float = 0.0
    init_rooting_depth: float = 0.0
    max_increase_root: float = 0.0
    max_rooting_depth: float = 0.0
    dying_leaves_npk_stress: float = 0.0
    development_stage_n_limit: float = 0.0
    development_stage_nt: float = 0.0
    frac_transloc_roots: float = 0.0
    opt_n_frac: float = 0.0
    opt_p_frac: float = 0.0
    opt_k_frac: float = 0.0
    n_max_roots: float = 0.0
    n_max_stems: float = 0.0
    p_max_roots: float = 0.0
    p_max_stems: float = 0.0
    k_max_roots: float = 0.0
    k_max_stems: float = 0.0
    nitrogen_stress_lai: float = 0.0
    nlue: float = 0.0
    max_n_storage: float = 0.0
    max_p_storage: float = 0.0
    max_k_storage: float = 0.0
    n_lv_partitioning: float = 0.0
    nutrient_stress_sla: float = 0.0
    n_residual_frac_lv: float = 0.0
    n_residual_frac_st: float = 0.0
    n_residual_frac_ro: float = 0.0
    p_residual_frac_lv: float = 0.0
    p_residual_frac_st: float = 0.0
    p_residual_frac_ro: float = 0.0
    k_residual_frac_lv: float = 0.0
    k_residual_frac_st: float = 0.0
    k_residual_frac_ro: float = 0.0
    tcnt: float = 0.0
    tcpt: float = 0.0
    tckt: float = 0.0
    n_fixation: float = 0.0
    frac_translocation: float = 0.0


@dataclass
class GrowthStates:
    roots: float = 0.0
    stems: float = 0.0
    leaves: float = 0.0
    lai: float = 0.0
    lai_exp: float = 0.0
    storage: float = 0.0
    development: float = 0.0
    root_depth: float = 0.0
    root_depth_prev: float = 0.0
    vernalization: float = 0.0


@dataclass
class GrowthRates:
    roots: float = 0.0
    stems: float = 0.0
    leaves: float = 0.0
    lai_exp: float = 0.0
    storage: float = 0.0
    development: float = 0.0
    root_depth: float = 0.0
    vernalization: float = 0.0


@dataclass
class DyingMatter:
    """Dead biomass (states) or dying rates of the organs."""

    roots: float = 0.0
    stems: float = 0.0
    leaves: float = 0.0


@dataclass
class NutrientStates:
    roots: float = 0.0
    stems: float = 0.0
    leaves: float = 0.0
    storage: float = 0.0
    max_lv: float = 0.0
    max_st: float = 0.0
    max_ro: float = 0.0
    max_so: float = 0.0
    optimum_lv: float = 0.0
    optimum_st: float = 0.0
    index: float = 1.0
    uptake: float = 0.0
    uptake_lv: float = 0.0
    uptake_st: float = 0.0
    uptake_ro: float = 0.0
    death_lv: float = 0.0
    death_st: float = 0.0
    death_ro: float = 0.0
    avail: float = 0.0
    avail_lv: float = 0.0
    avail_st: float = 0.0
    avail_ro: float = 0.0


@dataclass
class NutrientRates:
    roots: float = 0.0
    stems: float = 0.0
    leaves: float = 0.0
    storage: float = 0.0
    demand_lv: float = 0.0
    demand_st: float = 0.0
    demand_ro: float = 0.0
    demand_so: float = 0.0
    supply: float = 0.0
    transloc: float = 0.0
    transloc_lv: float = 0.0
    transloc_st: float = 0.0
    transloc_ro: float = 0.0
    uptake: float = 0.0
    uptake_lv: float = 0.0
    uptake_st: float = 0.0
    uptake_ro: float = 0.0
    death_lv: float = 0.0
    death_st: float = 0.0
    death_ro: float = 0.0


@dataclass
class LeafClass:
    """One age class of leaves; the oldest class comes first."""

    weight: float = 0.0
    age: float = 0.0
    area: float = 0.0


@dataclass
class Crop:
    """Parameters, states and rates of one simulated crop."""

    prm: CropParameters = field(default_factory=CropParameters)
    emergence: int = 0
    sowing: int = 0
    seasons: int = 1
    growth_day: int = 0
    npk_index: float = 1.0
    nutrient_stress: float = 1.0
    days_oxygen_stress: float = 0.0
    tsum_emergence: float = 0.0
    fac_ro: float = 0.0
    fac_lv: float = 0.0
    fac_st: float = 0.0
    fac_so: float = 0.0
    rt_dev_prev: float = 0.0
    rt: GrowthRates = field(default_factory=GrowthRates)
    st: GrowthStates = field(default_factory=GrowthStates)
    drt: DyingMatter = field(default_factory=DyingMatter)
    dst: DyingMatter = field(default_factory=DyingMatter)
    n_st: NutrientStates = field(default_factory=NutrientStates)
    p_st: NutrientStates = field(default_factory=NutrientStates)
    k_st: NutrientStates = field(default_factory=NutrientStates)
    n_rt: NutrientRates = field(default_factory=NutrientRates)
    p_rt: NutrientRates = field(default_factory=NutrientRates)
    k_rt: NutrientRates = field(default_factory=NutrientRates)
    leaves: list[LeafClass] = field(default_factory=list)


@dataclass
class SoilConstants:
    max_evap_water: float = 0.0
    moisture_fc: float = 0.0
    moisture_wp: float = 0.0
    moisture_sat: float = 0.0
    critical_soil_air_c: float = 0.0
    max_percol_rtz: float = 0.0
    max_percol_subs: float = 0.0
    max_surface_storage: float = 0.0
    k0: float = 0.0


@dataclass
class WaterStates:
    evap_water: float = 0.0
    evap_soil: float = 0.0
    infiltration: float = 0.0
    irrigation: float = 0.0
    loss: float = 0.0
    moisture: float = 0.0
    moisture_low: float = 0.0
    percolation: float = 0.0
    rain: float = 0.0
    root_zone_moisture: float = 0.0
    runoff: float = 0.0
    surface_storage: float = 0.0
    transpiration: float = 0.0
    water_root_ext: float = 0.0


@dataclass
class WaterRates:
    evap_water: float = 0.0
    evap_soil: float = 0.0
    infiltration: float = 0.0
    irrigation: float = 0.0
    loss: float = 0.0
    moisture: float = 0.0
    moisture_low: float = 0.0
    percolation: float = 0.0
    root_zone_moisture: float = 0.0
    runoff: float = 0.0
    transpiration: float = 0.0
    water_root_ext: float = 0.0


@dataclass
class WaterBalance:
    """Soil tables, constants and the water balance states and rates."""

    days_since_last_rain: float = 0.0
    soil_max_rooting_depth: float = 0.0
    water_stress: float = 1.0
    inf_previous_day: float = 0.0
    volumetric_soil_moisture: Optional[AfgenTable] = None
    hydraulic_conductivity: Optional[AfgenTable] = None
    ct: SoilConstants = field(default_factory=SoilConstants)
    st: WaterStates = field(default_factory=WaterStates)
    rt: WaterRates = field(default_factory=WaterRates)


@dataclass
class Site:
    """Site water parameters and soil mineral nutrient states and rates."""

    flag_groundwater: float = 0.0
    inf_rain_dependent: float = 0.0
    flag_drains: float = 0.0
    max_surface_storage: float = 0.0
    init_soil_moisture: float = 0.0
    groundwater_depth: float = 0.0
    dd: float = 0.0
    soil_lim_root_depth: float = 0.0
    not_infiltrating: float = 0.0
    surface_storage: float = 0.0
    max_init_soil_m: float = 0.0
    co2: float = 0.0
    st_n_tot: float = 0.0
    st_p_tot: float = 0.0
    st_k_tot: float = 0.0
    st_n_mins: float = 0.0
    st_p_mins: float = 0.0
    st_k_mins: float = 0.0
    rt_n_tot: float = 0.0
    rt_p_tot: float = 0.0
    rt_k_tot: float = 0.0
    rt_n_mins: float = 0.0
    rt_p_mins: float = 0.0
    rt_k_mins: float = 0.0
    not_inf_table: Optional[AfgenTable] = None


@dataclass
class Management:
    """Fertiliser and irrigation schedules and soil nutrient supply."""

    n_fert_table: DateTable = field(default_factory=DateTable)
    p_fert_table: DateTable = field(default_factory=DateTable)
    k_fert_table: DateTable = field(default_factory=DateTable)
    irrigation: DateTable = field(default_factory=DateTable)
    n_mins: float = 0.0
    n_recovery_frac: float = 0.0
    p_mins: float = 0.0
    p_recovery_frac: float = 0.0
    k_mins: float = 0.0
    k_recovery_frac: float = 0.0
    n_uptake_frac: float = 0.0
    p_uptake_frac: float = 0.0
    k_uptake_frac: float = 0.0


@dataclass
class Evapotranspiration:
    """Reference evaporation of open water, bare soil and a crop (cm/day)."""

    e0: float = 0.0
    es0: float = 0.0
    et0: float = 0.0


@dataclass
class MaxEvaporation:
    """Maximum evaporation and transpiration under the current canopy."""

    max_evap_water: float = 0.0
    max_evap_soil: float = 0.0
    max_transpiration: float = 0.0


@dataclass
class DailyWeather:
    """Weather of one day at one grid cell."""

    tmin: float
    tmax: float
    radiation: float = 0.0
    rain: float = 0.0
    windspeed: float = 0.0
    vapour: float = 0.0
    altitude: float = 0.0
    angst_a: float = 0.0
    angst_b: float = 0.0

    def temp(self) -> float:
        """Mean daily temperature."""
        return 0.5 * (self.tmax + self.tmin)

    def day_temp(self) -> float:
        """Mean daytime temperature."""
        return 0.5 * (self.tmax + self.temp())