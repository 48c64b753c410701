"""Reading site, soil and management files."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, Optional, Union

from cropsim.cropinput import InputFileError, parse_scalars, parse_xy_tables
from cropsim.model import Management, Site, WaterBalance
from cropsim.params import (
    MANAGEMENT_FIELDS,
    MANAGEMENT_TABLES,
    SITE_FIELDS,
    management_from_values,
    site_from_values,
    soil_constants,
)
from cropsim.tables import DateEntry, DateTable

SITE_PARAMETER_NAMES: tuple[str, ...] = tuple(name for name, _ in SITE_FIELDS)
SITE_TABLE_NAMES: tuple[str, ...] = ("NINFTB",)

SOIL_PARAMETER_NAMES: tuple[str, ...] = (
    "SMW",
    "SMFCF",
    "SM0",
    "CRAIRC",
    "K0",
    "SOPE",
    "KSUB",
    "SPADS",
    "SPODS",
    "SPASS",
    "SPOSS",
    "DEFLIM",
)
SOIL_TABLE_NAMES: tuple[str, ...] = ("SMTAB", "CONTAB")

MANAGEMENT_PARAMETER_NAMES: tuple[str, ...] = tuple(name for name, _ in MANAGEMENT_FIELDS)
MANAGEMENT_TABLE_NAMES: tuple[str, ...] = tuple(name for name, _ in MANAGEMENT_TABLES)

_MAX_DATE = 6
_SKIP_FIRST = frozenset("* ")
_WORD = re.compile(r"\s*(\S+)")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_DATE = re.compile(r"\s*([+-]?\d+)-\s*([+-]?\d+)")


def _read_text(path: Union[str, os.PathLike]) -> str:
    try:
        return Path(path).read_text()
    except OSError as err:
        raise InputFileError(f"cannot open input file {path}") from err


def _scan_date_row(line: str, pos: int = 0) -> Optional[tuple[str, float]]:
    """Read ``date amount`` from ``line`` starting at ``pos``."""
    word = _WORD.match(line, pos)
    if word is None:
        return None
    number = _FLOAT.match(line, word.end())
    if number is None:
        return None
    return word.group(1), float(number.group(1))


def _entry(date_string: str, amount: float, name: str) -> DateEntry:
    if len(date_string) >= _MAX_DATE:
        raise InputFileError(f"date {date_string!r} in table {name} is too long")
    match = _DATE.match(date_string)
    if match is None:
        raise InputFileError(f"cannot read a month-day date {date_string!r} in table {name}")
    return DateEntry(int(match.group(1)), int(match.group(2)), amount)


def _parse_date_tables(text: str, names: Iterable[str]) -> dict[str, DateTable]:
    """Tables written as ``NAME = MM-DD amount`` followed by rows ``MM-DD amount``."""
    lines = text.split("\n")
    result: dict[str, DateTable] = {}
    for name in names:
        for index, line in enumerate(lines):
            if not line or line[0] in _SKIP_FIRST:
                continue
            first = _WORD.match(line)
            if first is None or first.group(1) != name:
                continue
            label = _WORD.match(line, first.end())
            row = _scan_date_row(line, label.end()) if label is not None else None
            if row is None:
                raise InputFileError(f"cannot read the first row of table {name}")
            entries = [_entry(row[0], row[1], name)]
            for following in lines[index + 1:]:
                row = _scan_date_row(following)
                if row is None:
                    break
                entries.append(_entry(row[0], row[1], name))
            result[name] = DateTable(tuple(entries))
            break
    return result


def read_site(path: Union[str, os.PathLike]) -> Site:
    """Read a site file: water parameters, CO2 concentration and the NINFTB table."""
    text = _read_text(path)
    scalars = parse_scalars(text, SITE_PARAMETER_NAMES)
    if len(scalars) != len(SITE_PARAMETER_NAMES):
        raise InputFileError(f"something wrong with the site variables in file {path}")
    tables = parse_xy_tables(text, SITE_TABLE_NAMES)
    if len(tables) != len(SITE_TABLE_NAMES):
        raise InputFileError(f"something wrong with the site tables in file {path}")
    return site_from_values(scalars, tables["NINFTB"])


def read_soil(path: Union[str, os.PathLike]) -> WaterBalance:
    """Read a soil file and return a water balance with all states at zero."""
    text = _read_text(path)
    scalars = parse_scalars(text, SOIL_PARAMETER_NAMES)
    try:
        constants = soil_constants(scalars)
    except ValueError as err:
        raise InputFileError(
            f"something wrong with the soil variables in file {path}: {err}"
        ) from err
    tables = parse_xy_tables(text, SOIL_TABLE_NAMES)
    if len(tables) != len(SOIL_TABLE_NAMES):
        raise InputFileError(f"something wrong with the soil tables in file {path}")
    return WaterBalance(
        volumetric_soil_moisture=tables["SMTAB"],
        hydraulic_conductivity=tables["CONTAB"],
        ct=constants,
    )


def read_management(path: Union[str, os.PathLike]) -> Management:
    """Read a management file: nutrient supply settings and dated schedules."""
    text = _read_text(path)
    scalars = parse_scalars(text, MANAGEMENT_PARAMETER_NAMES)
    if len(scalars) != len(MANAGEMENT_PARAMETER_NAMES):
        raise InputFileError(
            f"something wrong with the management variables in file {path}"
        )
    tables = _parse_date_tables(text, MANAGEMENT_TABLE_NAMES)
    if len(tables) != len(MANAGEMENT_TABLE_NAMES):
        raise InputFileError(f"something wrong with the management tables in file {path}")
    return management_from_values(scalars, tables)