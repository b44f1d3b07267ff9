"""
io_utils.py — File loading and normalization utilities

Reads the violation list and the three reference rosters into typed records.
Any unreadable or malformed row aborts the run with an InputError.
"""

from __future__ import annotations
import pandas as pd
import pathlib
import logging
from typing import List
from hygiene_core import config
from hygiene_core.errors import InputError
from hygiene_core.models import (
    ViolationRecord,
    ClassroomEntry,
    ManagerRosterEntry,
    DepartmentRosterEntry,
    ReferenceTables,
    build_reference_tables,
)


def detect_delimiter(path: pathlib.Path) -> str:
    """Infer delimiter based on extension or simple sniffing."""
    if path.suffix.lower() == ".tsv":
        return "\t"
    if path.suffix.lower() == ".csv":
        return ","
    with open(path, "r", encoding=config.CSV_ENCODING) as f:
        head = f.readline()
    return "\t" if "\t" in head else ","


def read_table(path: str | pathlib.Path, columns: List[str]) -> pd.DataFrame:
    """Load a CSV as stripped strings restricted to `columns`.

    Optional columns (see config.OPTIONAL_COLUMNS) may be absent from the
    header or blank on short rows; every other column must be present.
    """
    path = pathlib.Path(path)
    if not path.is_file():
        raise InputError(f"Required file not found: {path}")
    try:
        df = pd.read_csv(
            path,
            delimiter=detect_delimiter(path),
            dtype=str,
            keep_default_na=False,
            encoding=config.CSV_ENCODING,
        )
    except pd.errors.EmptyDataError as e:
        raise InputError(f"{path.name} is empty (no header row)") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise InputError(f"Could not parse {path.name}: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in columns if c not in df.columns and c not in config.OPTIONAL_COLUMNS]
    if missing:
        raise InputError(f"{path.name} is missing required columns: {', '.join(missing)}")
    for col in columns:
        if col not in df.columns:
            df[col] = ""

    df = df.loc[:, columns].fillna("")
    for col in columns:
        df[col] = df[col].astype(str).str.strip()
    blank = df.eq("").all(axis=1)
    df = df.loc[~blank]
    logging.info(f"Loaded {path.name} with {len(df):,} rows.")
    return df


def _line_no(index) -> int:
    # header is line 1
    return int(index) + 2


def _int_field(df: pd.DataFrame, idx, col: str, path: pathlib.Path) -> int:
    raw = df.at[idx, col]
    try:
        return int(raw)
    except ValueError:
        raise InputError(
            f"{path.name} line {_line_no(idx)}: column '{col}' expects an integer, got {raw!r}"
        ) from None


def _text_field(df: pd.DataFrame, idx, col: str, path: pathlib.Path) -> str:
    value = df.at[idx, col]
    if value == "" and col not in config.OPTIONAL_COLUMNS:
        raise InputError(f"{path.name} line {_line_no(idx)}: column '{col}' is empty")
    return value


# ---------------------------------------------------------------------
# Per-file loaders
# ---------------------------------------------------------------------

def load_violations(path: str | pathlib.Path) -> List[ViolationRecord]:
    """Load the inspectors' violation list (年级,班级,公寓,宿舍,原因)."""
    path = pathlib.Path(path)
    df = read_table(path, config.VIOLATION_COLUMNS)
    records = []
    for idx in df.index:
        records.append(ViolationRecord(
            grade=_int_field(df, idx, "年级", path),
            class_no=_int_field(df, idx, "班级", path),
            apartment=_int_field(df, idx, "公寓", path),
            dorm=_int_field(df, idx, "宿舍", path),
            # free text, may legitimately be blank
            reason=df.at[idx, "原因"],
        ))
    return records


def load_classroom_roster(path: str | pathlib.Path) -> List[ClassroomEntry]:
    path = pathlib.Path(path)
    df = read_table(path, config.CLASSROOM_COLUMNS)
    return [
        ClassroomEntry(
            grade=_int_field(df, idx, "年级", path),
            dept=_text_field(df, idx, "级部", path),
            class_no=_int_field(df, idx, "班级", path),
            teacher=_text_field(df, idx, "班主任", path),
        )
        for idx in df.index
    ]


def load_manager_roster(path: str | pathlib.Path) -> List[ManagerRosterEntry]:
    path = pathlib.Path(path)
    df = read_table(path, config.MANAGER_COLUMNS)
    return [
        ManagerRosterEntry(
            apartment=_int_field(df, idx, "公寓", path),
            floor=_int_field(df, idx, "楼层", path),
            manager=_text_field(df, idx, "宿管", path),
        )
        for idx in df.index
    ]


def load_department_roster(path: str | pathlib.Path) -> List[DepartmentRosterEntry]:
    path = pathlib.Path(path)
    df = read_table(path, config.DEPARTMENT_COLUMNS)
    entries = []
    for idx in df.index:
        dept = df.at[idx, "级部"]
        if dept == "":
            # the department roster is keyed by 级部, blank is never valid here
            raise InputError(f"{path.name} line {_line_no(idx)}: column '级部' is empty")
        entries.append(DepartmentRosterEntry(
            grade=_int_field(df, idx, "年级", path),
            dept=dept,
            leader=df.at[idx, "主任"],
            apartment=_int_field(df, idx, "公寓", path),
        ))
    return entries


def load_reference_tables(assets_dir: str | pathlib.Path) -> ReferenceTables:
    """Load nianji.csv, sushe.csv and jibu.csv from `assets_dir`."""
    assets_dir = pathlib.Path(assets_dir)
    classrooms = load_classroom_roster(assets_dir / config.CLASSROOM_ROSTER_FILE)
    managers = load_manager_roster(assets_dir / config.MANAGER_ROSTER_FILE)
    departments = load_department_roster(assets_dir / config.DEPARTMENT_ROSTER_FILE)
    return build_reference_tables(classrooms, managers, departments)


# ---------------------------------------------------------------------
# Template creation
# ---------------------------------------------------------------------

def init_template(name: str | pathlib.Path, overwrite: bool = False) -> pathlib.Path:
    """Create an empty violation CSV with just the header row."""
    path = pathlib.Path(name)
    if path.suffix.lower() != ".csv":
        path = path.with_name(path.name + ".csv")
    if path.exists() and not overwrite:
        raise InputError(f"{path} already exists; pass --force to overwrite it")
    pd.DataFrame(columns=config.VIOLATION_COLUMNS).to_csv(
        path, index=False, encoding=config.CSV_ENCODING
    )
    logging.info(f"Created CSV template: {path}")
    return path
