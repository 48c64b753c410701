"""Build parameter containers from named values read from input files."""

from __future__ import annotations

from typing import Mapping, Optional

from cropsim.model import CropParameters, Management, Site, SoilConstants
from cropsim.tables import AfgenTable, DateTable

# File keyword and attribute of every scalar crop parameter, in file order.
CROP_SCALARS: tuple[tuple[str, str], ...] = (
    ("TBASEM", "temp_base_emergence"),
    ("TEFFMX", "temp_eff_max"),
    ("TSUMEM", "tsum_emergence"),
    ("IDSL", "identify_anthesis"),
    ("DLO", "optimum_daylength"),
    ("DLC", "critical_daylength"),
    ("VERNSAT", "sat_vern_requirement"),
    ("VERNBASE", "base_vern_requirement"),
    ("TSUM1", "temp_sum1"),
    ("TSUM2", "temp_sum2"),
    ("DVSI", "initial_dvs"),
    ("DVSEND", "develop_stage_harvest"),
    ("TDWI", "initial_dry_weight"),
    ("RGRLAI", "rel_increase_lai"),
    ("SPA", "specific_pod_area"),
    ("SPAN", "life_span"),
    ("TBASE", "temp_base_leaves"),
    ("CVL", "conversion_leaves"),
    ("CVO", "conversion_storage"),
    ("CVR", "conversion_roots"),
    ("CVS", "conversion_stems"),
    ("Q10", "q10"),
    ("RML", "rel_respi_leaves"),
    ("RMO", "rel_respi_storage"),
    ("RMR", "rel_respi_roots"),
    ("RMS", "rel_respi_stems"),
    ("PERDL", "max_rel_death_rate"),
    ("CFET", "correction_transp"),
    ("DEPNR", "crop_group_number"),
    ("IAIRDU", "airducts"),
    ("RDI", "init_rooting_depth"),
    ("RRI", "max_increase_root"),
    ("RDMCR", "max_rooting_depth"),
    ("RDRLV_NPK", "dying_leaves_npk_stress"),
    ("DVS_NPK_STOP", "development_stage_n_limit"),
    ("DVS_NPK_TRANSL", "development_stage_nt"),
    ("NPK_TRANSLRT_FR", "frac_transloc_roots"),
    ("NCRIT_FR", "opt_n_frac"),
    ("PCRIT_FR", "opt_p_frac"),
    ("KCRIT_FR", "opt_k_frac"),
    ("NMAXRT_FR", "n_max_roots"),
    ("NMAXST_FR", "n_max_stems"),
    ("PMAXRT_FR", "p_max_roots"),
    ("PMAXST_FR", "p_max_stems"),
    ("KMAXRT_FR", "k_max_roots"),
    ("KMAXST_FR", "k_max_stems"),
    ("NLAI_NPK", "nitrogen_stress_lai"),
    ("NLUE_NPK", "nlue"),
    ("NMAXSO", "max_n_storage"),
    ("PMAXSO", "max_p_storage"),
    ("KMAXSO", "max_k_storage"),
    ("NPART", "n_lv_partitioning"),
    ("NSLA_NPK", "nutrient_stress_sla"),
    ("NRESIDLV", "n_residual_frac_lv"),
    ("NRESIDST", "n_residual_frac_st"),
    ("NRESIDRT", "n_residual_frac_ro"),
    ("PRESIDLV", "p_residual_frac_lv"),
    ("PRESIDST", "p_residual_frac_st"),
    ("PRESIDRT", "p_residual_frac_ro"),
    ("KRESIDLV", "k_residual_frac_lv"),
    ("KRESIDST", "k_residual_frac_st"),
    ("KRESIDRT", "k_residual_frac_ro"),
    ("TCNT", "tcnt"),
    ("TCPT", "tcpt"),
    ("TCKT", "tckt"),
    ("NFIX_FR", "n_fixation"),
    ("FRTRL", "frac_translocation"),
)

# File keyword and attribute of every crop table, in file order.  The two
# death rate tables are assigned crosswise, as the crop files expect.
CROP_TABLES: tuple[tuple[str, str], ...] = (
    ("VERNRTB", "vernalization_rate"),
    ("DTSMTB", "delta_temp_sum"),
    ("SLATB", "specific_leaf_area"),
    ("SSATB", "specific_stem_area"),
    ("KDIFTB", "k_diffuse_tb"),
    ("EFFTB", "eff_tb"),
    ("AMAXTB", "max_assim_rate"),
    ("TMPFTB", "factor_assim_rate_temp"),
    ("TMNFTB", "factor_gross_assim_temp"),
    ("CO2AMAXTB", "co2_amax_tb"),
    ("CO2EFFTB", "co2_eff_tb"),
    ("CO2TRATB", "co2_tra_tb"),
    ("RFSETB", "factor_senescence"),
    ("FRTB", "roots"),
    ("FLTB", "leaves"),
    ("FSTB", "stems"),
    ("FOTB", "storage"),
    ("RDRRTB", "death_rate_stems"),
    ("RDRSTB", "death_rate_roots"),
    ("NMAXLV_TB", "n_max_leaves"),
    ("PMAXLV_TB", "p_max_leaves"),
    ("KMAXLV_TB", "k_max_leaves"),
)

SITE_FIELDS: tuple[tuple[str, str], ...] = (
    ("IZT", "flag_groundwater"),
    ("IFUNRN", "inf_rain_dependent"),
    ("IDRAIN", "flag_drains"),
    ("SSMAX", "max_surface_storage"),
    ("WAV", "init_soil_moisture"),
    ("ZTI", "groundwater_depth"),
    ("DD", "dd"),
    ("RDMSOL", "soil_lim_root_depth"),
    ("NOTINF", "not_infiltrating"),
    ("SSI", "surface_storage"),
    ("SMLIM", "max_init_soil_m"),
    ("CO2", "co2"),
)

SOIL_FIELDS: tuple[tuple[str, str], ...] = (
    ("SMW", "moisture_wp"),
    ("SMFCF", "moisture_fc"),
    ("SM0", "moisture_sat"),
    ("CRAIRC", "critical_soil_air_c"),
    ("K0", "k0"),
    ("SOPE", "max_percol_rtz"),
    ("KSUB", "max_percol_subs"),
)

MANAGEMENT_FIELDS: tuple[tuple[str, str], ...] = (
    ("NRFTAB", "n_uptake_frac"),
    ("PRFTAB", "p_uptake_frac"),
    ("KRFTAB", "k_uptake_frac"),
    ("NMINS", "n_mins"),
    ("RTNMINS", "n_recovery_frac"),
    ("PMINS", "p_mins"),
    ("RTPMINS", "p_recovery_frac"),
    ("KMINS", "k_mins"),
    ("RTKMINS", "k_recovery_frac"),
)

MANAGEMENT_TABLES: tuple[tuple[str, str], ...] = (
    ("FERNTAB", "n_fert_table"),
    ("FERPTAB", "p_fert_table"),
    ("FERKTAB", "k_fert_table"),
    ("IRRTAB", "irrigation"),
)

_VERNALIZATION_SCALARS = frozenset({"VERNSAT", "VERNBASE"})
_NO_VERNALIZATION = -99.0


def _take(values: Mapping[str, float], name: str) -> float:
    try:
        return float(values[name])
    except KeyError:
        raise ValueError(f"missing parameter {name}") from None


def _table(tables: Mapping[str, object], name: str) -> object:
    table = tables.get(name)
    if table is None:
        raise ValueError(f"missing table {name}")
    return table


def crop_parameters(
    values: Mapping[str, float], tables: Mapping[str, AfgenTable]
) -> CropParameters:
    """Crop parameters from scalars and tables keyed by their file keywords."""
    idsl = int(_take(values, "IDSL"))
    vernalization = idsl >= 2
    prm = CropParameters()
    for name, attr in CROP_SCALARS:
        if name in _VERNALIZATION_SCALARS and not vernalization:
            setattr(prm, attr, _NO_VERNALIZATION)
        else:
            setattr(prm, attr, _take(values, name))
    prm.identify_anthesis = idsl
    for name, attr in CROP_TABLES:
        if name == "VERNRTB" and not vernalization:
            setattr(prm, attr, None)
        else:
            setattr(prm, attr, _table(tables, name))
    return prm


def site_from_values(
    values: Mapping[str, float], not_infiltrating: Optional[AfgenTable]
) -> Site:
    """Site parameters, including the CO2 concentration, from named values."""
    fields = {attr: _take(values, name) for name, attr in SITE_FIELDS}
    return Site(**fields, not_inf_table=not_infiltrating)


def soil_constants(values: Mapping[str, float]) -> SoilConstants:
    """Soil physical constants from named values."""
    return SoilConstants(**{attr: _take(values, name) for name, attr in SOIL_FIELDS})


def management_from_values(
    values: Mapping[str, float], tables: Mapping[str, DateTable]
) -> Management:
    """Management settings and schedules from named values and date tables."""
    fields: dict[str, object] = {
        attr: _take(values, name) for name, attr in MANAGEMENT_FIELDS
    }
    for name, attr in MANAGEMENT_TABLES:
        fields[attr] = _table(tables, name)
    return Management(**fields)