# cropsim

A library of the processes of a daily-step crop growth model: phenology,
light interception and CO2 assimilation, maintenance respiration,
partitioning of dry matter over roots, stems, leaves and storage organs,
leaf ageing and senescence, a single-layer free-draining soil water balance,
and the uptake and translocation of nitrogen, phosphorus and potassium.

It has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Input files

Crop, site, soil and management descriptions are plain-text files of
`NAME = value` settings, interpolation tables written as `NAME = x, y`
followed by rows of `x, y`, and (in management files) dated tables written as
`NAME = MM-DD amount` followed by rows of `MM-DD amount`. Lines that start
with `*` or a space are skipped when tables are looked for.

```python
from cropsim.cropinput import read_crop
from cropsim.fieldinput import read_site, read_soil, read_management

crop = read_crop("crops/maize.cab")        # a Crop, not yet sown
site = read_site("sites/site.dat")         # a Site, including its CO2 level
water = read_soil("soils/ec3.new")         # a WaterBalance with all states at zero
management = read_management("management/npk.dat")
```

A file that cannot be opened, or that lacks required parameters or tables,
raises `cropsim.cropinput.InputFileError` (a `ValueError`). The lower-level
readers `parse_scalars` and `parse_xy_tables` in `cropsim.cropinput` work on
text already in memory.

## Modules

- `cropsim.tables`: `AfgenTable` (linear interpolation over `(x, y)` points,
  constant beyond the ends), `DateTable` with `amount_on(date, end_year)`
  for fertiliser and irrigation events, `Moments` and `moments(data)`
  (mean, mean absolute deviation, standard deviation, variance, skewness,
  kurtosis), and the helpers `limit`, `notnul`, `insw` and `days_in_year`.
- `cropsim.model`: dataclasses for the state: `Crop` with its
  `CropParameters`, growth, dying and nutrient states and rates and its list
  of `LeafClass` entries; `WaterBalance`, `Site`, `Management`,
  `Evapotranspiration`, `MaxEvaporation` and `DailyWeather` (with `temp()`
  and `day_temp()`).
- `cropsim.params`: builds `CropParameters`, `Site`, `SoilConstants` and
  `Management` from values keyed by their file keywords.
- `cropsim.astro`: `astro(day_of_year, latitude, radiation)` returns an
  `AstroData` with day length, photoactive day length, solar height
  integrals, Angot radiation, atmospheric transmission and diffuse radiation.
- `cropsim.evaporation`: `penman` gives open-water (E0) and soil (ES0)
  evaporation and fills ET0 from `penman_monteith`; all in cm/day.
- `cropsim.transpiration`: `sweaf` and `evapotranspiration`, which returns
  the maximum evaporation and transpiration under the canopy and sets the
  water stress and transpiration rate.
- `cropsim.waterbalance`: `initialize_water_balance`, `rate_water_balance`
  and `integrate_water_balance`.
- `cropsim.assimilation`, `cropsim.respiration`, `cropsim.development`,
  `cropsim.leafgrowth`, `cropsim.senescence`, `cropsim.canopy`: the crop
  growth processes.
- `cropsim.nutrients` and `cropsim.uptake`: N, P, K maxima, demand,
  losses, translocation, uptake, the nutrition index and their integration.
- `cropsim.crop`: `emergence`, `initialize_crop`, `growth`,
  `rate_calculation_crop`, `rates_to_zero` and `integrate_crop`.
- `cropsim.report`: `is_sowing_day`, `sowing_dekad`, `write_header` and
  `write_summary`, which writes one comma-separated line of yield
  statistics when there are more than two seasons and returns whether it
  wrote one.

## A day of simulation

Before emergence, for each day:

```python
from cropsim.crop import emergence, initialize_crop
from cropsim.nutrients import initialize_nutrients
from cropsim.report import is_sowing_day
from cropsim.waterbalance import initialize_water_balance

if is_sowing_day(start, day, end_year):          # start is "MM-DD"
    crop.sowing = 1
if crop.sowing >= 1 and not crop.emergence:
    if emergence(crop, start_at_emergence, weather.temp()):
        initialize_crop(crop, site)
        initialize_water_balance(water, site, crop, reference.es0)
        initialize_nutrients(crop, site, management, day, end_year)
```

After emergence, while the crop is short of its harvest development stage:

```python
from cropsim.astro import astro
from cropsim.canopy import leaf_area_index
from cropsim.crop import integrate_crop, rate_calculation_crop, rates_to_zero
from cropsim.development import partitioning
from cropsim.evaporation import penman
from cropsim.transpiration import evapotranspiration
from cropsim.uptake import integrate_nutrients, rate_calculation_nutrients
from cropsim.waterbalance import integrate_water_balance, rate_water_balance

sun = astro(day.timetuple().tm_yday, latitude, weather.radiation)
reference = penman(weather, sun)
limits = evapotranspiration(crop, water, reference, site.co2)
rates_to_zero(crop, site, water)
rate_water_balance(water, site, crop, limits, management, weather.rain, day, end_year)
partitioning(crop, water.water_stress)
rate_calculation_nutrients(
    crop, site, management, water.rt.transpiration, limits.max_transpiration, day, end_year
)
rate_calculation_crop(crop, site, water, limits, sun, weather, site.co2, recent_tmin)
crop.st.lai = leaf_area_index(crop)
integrate_crop(crop, weather.temp())
integrate_water_balance(water, site, crop, weather.rain)
integrate_nutrients(crop, site)
crop.growth_day += 1
```

`recent_tmin` holds the minimum temperatures of today and the days before,
most recent first. At harvest, the storage organ weight `crop.st.storage`
and the season length `crop.growth_day` are the values to collect for
`write_summary`.

## What the package does not do

The package provides the model processes and the readers of the parameter
files only. It has no command-line program and no driver that loops over
days, seasons and grid cells, and it does not read gridded weather data:
the caller supplies each day's `DailyWeather`, keeps the season records and
opens the output streams.