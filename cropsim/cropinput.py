"""Reading keyword files: scalar parameters, interpolation tables and crop files."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, Optional, Union

from cropsim.model import Crop
from cropsim.params import CROP_SCALARS, CROP_TABLES, crop_parameters
from cropsim.tables import AfgenTable

CROP_PARAMETER_NAMES: tuple[str, ...] = tuple(name for name, _ in CROP_SCALARS)
CROP_TABLE_NAMES: tuple[str, ...] = tuple(name for name, _ in CROP_TABLES)

_MAX_WORD = 98
_WORD = re.compile(r"\S+")
_SPACED_WORD = re.compile(r"\s*(\S+)")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_SKIP_FIRST = frozenset("* \r")


class InputFileError(ValueError):
    """An input file cannot be read or lacks what it must contain."""


def _scan_float(text: str, pos: int) -> Optional[tuple[float, int]]:
    match = _FLOAT.match(text, pos)
    if match is None:
        return None
    return float(match.group(1)), match.end()


def _scan_word(text: str, pos: int) -> Optional[tuple[str, int]]:
    match = _SPACED_WORD.match(text, pos)
    if match is None:
        return None
    return match.group(1), match.end()


def _scan_row(line: str, pos: int = 0) -> Optional[tuple[float, float]]:
    """Read ``x <separator> y`` as in a table row."""
    x = _scan_float(line, pos)
    if x is None:
        return None
    sep = _scan_word(line, x[1])
    if sep is None:
        return None
    y = _scan_float(line, sep[1])
    if y is None:
        return None
    return x[0], y[0]


def parse_scalars(text: str, names: Iterable[str]) -> dict[str, float]:
    """Values of ``NAME = value`` settings; the first occurrence of each name counts.

    Names that do not occur are left out of the result.
    """
    words = list(_WORD.finditer(text))
    for word in words:
        if len(word.group()) > _MAX_WORD:
            raise InputFileError("check the input file: very long strings")
    result: dict[str, float] = {}
    for name in names:
        for word in words:
            if word.group() != name:
                continue
            equals = text.find("=", word.end())
            if equals < 0:
                raise InputFileError(f"no '=' after parameter {name}")
            number = _scan_float(text, equals + 1)
            if number is None:
                raise InputFileError(f"no number after parameter {name}")
            result[name] = number[0]
            break
    return result


def parse_xy_tables(text: str, names: Iterable[str]) -> dict[str, AfgenTable]:
    """Interpolation tables written as ``NAME = x, y`` followed by rows ``x, y``.

    A table ends at the first line that is not a row. Names that do not occur
    are left out of the result.
    """
    lines = text.split("\n")
    result: dict[str, AfgenTable] = {}
    for name in names:
        for index, line in enumerate(lines):
            if not line or line[0] in _SKIP_FIRST:
                continue
            first = _scan_word(line, 0)
            if first is None or first[0] != name:
                continue
            label = _scan_word(line, first[1])
            row = _scan_row(line, label[1]) if label is not None else None
            if row is None:
                raise InputFileError(f"cannot read the first row of table {name}")
            points = [row]
            for following in lines[index + 1:]:
                row = _scan_row(following)
                if row is None:
                    break
                points.append(row)
            result[name] = AfgenTable(tuple(points))
            break
    return result


def _read_text(path: Union[str, os.PathLike]) -> str:
    try:
        return Path(path).read_text()
    except OSError as err:
        raise InputFileError(f"cannot open input file {path}") from err


def read_crop(path: Union[str, os.PathLike]) -> Crop:
    """Read a crop file and return a crop that has not been sown yet."""
    text = _read_text(path)
    scalars = parse_scalars(text, CROP_PARAMETER_NAMES)
    expected = len(CROP_PARAMETER_NAMES)
    if len(scalars) not in (expected, expected - 2):
        raise InputFileError(f"something wrong with the crop variables in file {path}")
    tables = parse_xy_tables(text, CROP_TABLE_NAMES)
    expected = len(CROP_TABLE_NAMES)
    if len(tables) not in (expected, expected - 1):
        raise InputFileError(f"something wrong with the crop tables in file {path}")
    try:
        prm = crop_parameters(scalars, tables)
    except InputFileError:
        raise
    except ValueError as err:
        raise InputFileError(f"{path}: {err}") from err
    return Crop(prm=prm)