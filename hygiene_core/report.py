"""
report.py — Excel report generation

Replays the recorded layout instructions into a single xlsxwriter worksheet.
The workbook is written to a temporary file next to the destination and moved
into place only when everything succeeded, so a failed run leaves no output.
"""

from __future__ import annotations
import os
import logging
import pathlib
import tempfile
import pandas as pd
from typing import Any, Dict, List
from hygiene_core import config
from hygiene_core.errors import OutputError, ReportError
from hygiene_core.layout import (
    Instruction, LayoutSink, replay,
    TITLE, HEADER, CELL, LABEL, LABEL_CENTER, TEXT_LEFT,
)


# ---------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------

def _add_formats(wb) -> Dict[str, Any]:
    """One xlsxwriter format per layout style."""
    base = {"border": 1, "valign": "vcenter"}
    return {
        TITLE: wb.add_format({"bold": True, "font_size": 18, "align": "center", "valign": "vcenter"}),
        HEADER: wb.add_format({**base, "bold": True, "align": "center", "text_wrap": True}),
        CELL: wb.add_format({**base, "align": "center", "text_wrap": True}),
        LABEL: wb.add_format({**base, "bold": True, "align": "left"}),
        LABEL_CENTER: wb.add_format({**base, "bold": True, "align": "center"}),
        TEXT_LEFT: wb.add_format({**base, "align": "left", "text_wrap": True}),
    }


class XlsxSink(LayoutSink):
    """LayoutSink writing straight into an xlsxwriter worksheet."""

    def __init__(self, worksheet, formats: Dict[str, Any], logo_path: pathlib.Path) -> None:
        self.ws = worksheet
        self.formats = formats
        self.logo_path = pathlib.Path(logo_path)

    def _check(self, result, what: str) -> None:
        # xlsxwriter reports range errors through return codes
        if result == -1:
            raise OutputError(f"{what} is outside the worksheet limits")

    def write_text(self, row, col, value, style=CELL):
        self._check(self.ws.write_string(row, col, str(value), self.formats[style]), f"cell ({row}, {col})")

    def write_number(self, row, col, value, style=CELL):
        self._check(self.ws.write_number(row, col, value, self.formats[style]), f"cell ({row}, {col})")

    def merge_range(self, row0, col0, row1, col1, value, style=CELL):
        self._check(
            self.ws.merge_range(row0, col0, row1, col1, value, self.formats[style]),
            f"range ({row0}, {col0})-({row1}, {col1})",
        )

    def set_row_height(self, row, height):
        self._check(self.ws.set_row(row, height), f"row {row}")

    def set_column_width(self, col, width):
        self._check(self.ws.set_column(col, col, width), f"column {col}")

    def embed_image(self, row, col):
        if not self.logo_path.is_file():
            raise OutputError(f"Logo image not found: {self.logo_path}")
        self._check(
            self.ws.insert_image(row, col, str(self.logo_path), {
                "x_scale": config.LOGO_SCALE,
                "y_scale": config.LOGO_SCALE,
            }),
            f"image at ({row}, {col})",
        )


# ---------------------------------------------------------------------
# Excel report writer
# ---------------------------------------------------------------------

def write_workbook(instructions: List[Instruction], path: pathlib.Path, logo_path: pathlib.Path) -> pathlib.Path:
    """Write the report workbook atomically; returns the final path."""
    path = pathlib.Path(path)
    logo_path = pathlib.Path(logo_path)
    if any(i.op == "image" for i in instructions) and not logo_path.is_file():
        raise OutputError(f"Logo image not found: {logo_path}")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(suffix=".xlsx", dir=path.parent)
        os.close(fd)
    except OSError as e:
        raise OutputError(f"Cannot write to {path.parent}: {e}") from e

    tmp_path = pathlib.Path(tmp_name)
    try:
        with pd.ExcelWriter(tmp_path, engine="xlsxwriter") as writer:
            wb = writer.book
            ws = wb.add_worksheet(config.SHEET_NAME)
            replay(instructions, XlsxSink(ws, _add_formats(wb), logo_path))
        os.replace(tmp_path, path)
    except ReportError:
        tmp_path.unlink(missing_ok=True)
        raise
    except Exception as e:
        tmp_path.unlink(missing_ok=True)
        raise OutputError(f"Failed to write {path}: {e}") from e

    logging.info(f"Wrote {len(instructions):,} layout instructions to {path}")
    return path
