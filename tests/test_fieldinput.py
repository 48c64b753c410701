from datetime import date

import pytest

from cropsim.cropinput import InputFileError
from cropsim.fieldinput import read_management, read_site, read_soil

SITE_TEXT = """** site file
IZT = 0
IFUNRN = 0
IDRAIN = 0
SSMAX = 0.
WAV = 50.
ZTI = 400.
DD = 0
RDMSOL = 120.
NOTINF = 0.
SSI = 0.
SMLIM = 0.35
CO2 = 360.
NINFTB = 0.0, 0.0,
         3.0, 0.0,
         10.0, 0.5
"""

SOIL_TEXT = """** soil file
SMW = 0.10
SMFCF = 0.30
SM0 = 0.40
CRAIRC = 0.06
K0 = 10.0
SOPE = 1.0
KSUB = 0.5
SPADS = 0.1
SPODS = 0.03
SPASS = 0.2
SPOSS = 0.1
DEFLIM = -0.3
SMTAB = -1.0, 0.40,
        1.0, 0.35,
        4.2, 0.10

CONTAB = 0.0, 1.5,
         2.0, 0.5
"""

MANAGEMENT_TEXT = """** management file
NRFTAB = 0.7
PRFTAB = 0.1
KRFTAB = 0.5
NMINS = 30.
RTNMINS = 0.25
PMINS = 5.
RTPMINS = 0.1
KMINS = 20.
RTKMINS = 0.3

FERNTAB = 03-15 50.
04-20 30.

FERPTAB = 03-15 10.

FERKTAB = 03-15 20.

IRRTAB = 06-01 2.5
07-01 1.5
"""


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_read_site_values_and_table(tmp_path):
    site = read_site(_write(tmp_path, "site.txt", SITE_TEXT))
    assert site.groundwater_depth == 400.0
    assert site.co2 == 360.0
    assert site.max_init_soil_m == 0.35
    assert site.not_inf_table(10.0) == 0.5
    assert site.not_inf_table(0.0) == 0.0


def test_read_site_missing_parameter(tmp_path):
    text = SITE_TEXT.replace("CO2 = 360.\n", "")
    with pytest.raises(InputFileError):
        read_site(_write(tmp_path, "site.txt", text))


def test_read_site_missing_table(tmp_path):
    text = SITE_TEXT.split("NINFTB")[0]
    with pytest.raises(InputFileError):
        read_site(_write(tmp_path, "site.txt", text))


def test_read_site_missing_file(tmp_path):
    with pytest.raises(InputFileError):
        read_site(tmp_path / "absent.txt")


def test_read_soil(tmp_path):
    water = read_soil(_write(tmp_path, "soil.txt", SOIL_TEXT))
    assert water.ct.moisture_wp == 0.10
    assert water.ct.moisture_fc == 0.30
    assert water.ct.moisture_sat == 0.40
    assert water.ct.k0 == 10.0
    assert water.ct.max_percol_subs == 0.5
    assert water.volumetric_soil_moisture(-1.0) == 0.40
    assert water.hydraulic_conductivity(2.0) == 0.5
    assert water.st.moisture == 0.0
    assert water.st.runoff == 0.0


def test_read_soil_missing_table(tmp_path):
    text = SOIL_TEXT.split("CONTAB")[0]
    with pytest.raises(InputFileError):
        read_soil(_write(tmp_path, "soil.txt", text))


def test_read_soil_missing_used_parameter(tmp_path):
    text = SOIL_TEXT.replace("SMFCF = 0.30\n", "")
    with pytest.raises(InputFileError):
        read_soil(_write(tmp_path, "soil.txt", text))


def test_read_management(tmp_path):
    mng = read_management(_write(tmp_path, "mng.txt", MANAGEMENT_TEXT))
    assert mng.n_uptake_frac == 0.7
    assert mng.k_recovery_frac == 0.3
    assert mng.n_fert_table.amount_on(date(2001, 3, 15), 2005) == 50.0
    assert mng.n_fert_table.amount_on(date(2001, 4, 20), 2005) == 30.0
    assert mng.n_fert_table.amount_on(date(2001, 5, 20), 2005) == 0.0
    assert mng.irrigation.amount_on(date(2001, 7, 1), 2005) == 1.5
    assert mng.p_fert_table.amount_on(date(2001, 3, 15), 2005) == 10.0


def test_read_management_long_date(tmp_path):
    text = MANAGEMENT_TEXT.replace("FERKTAB = 03-15 20.", "FERKTAB = 2001-03-15 20.")
    with pytest.raises(InputFileError):
        read_management(_write(tmp_path, "mng.txt", text))


def test_read_management_missing_parameter(tmp_path):
    text = MANAGEMENT_TEXT.replace("PMINS = 5.\n", "")
    with pytest.raises(InputFileError):
        read_management(_write(tmp_path, "mng.txt", text))


def test_read_management_missing_table(tmp_path):
    text = MANAGEMENT_TEXT.split("IRRTAB")[0]
    with pytest.raises(InputFileError):
        read_management(_write(tmp_path, "mng.txt", text))