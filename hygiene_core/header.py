"""
header.py — Title and metadata block shared by both tables
"""

from __future__ import annotations
from typing import List, Tuple
from hygiene_core import config
from hygiene_core.layout import (
    LayoutSink, TITLE, HEADER, CELL, LABEL, LABEL_CENTER, TEXT_LEFT, write_span,
)


def emit_header_block(sink: LayoutSink, row: int, reporter: str, date: str, time: str) -> int:
    """Write title, logo, reporter/date line, fixed rules text.

    Returns the first row after the block (where column headers go).
    """
    last = config.LAST_COL
    sink.merge_range(row, 0, row, last, config.TITLE, TITLE)
    sink.embed_image(row, config.LOGO_COL)
    row += 1

    sink.merge_range(row, 0, row, 4, f"汇报人: {reporter}", LABEL)
    sink.merge_range(row, 5, row, last - 1, config.INSPECTION_TARGET, LABEL_CENTER)
    sink.write_text(row, last, f"日期: {date}", LABEL_CENTER)
    row += 1

    for label, value, style in (
        ("验评部门", config.INSPECTING_OFFICE, CELL),
        ("验评项目", config.INSPECTION_ITEM, CELL),
        ("验评时间", time, CELL),
        ("验评细则", config.RULES_TEXT, TEXT_LEFT),
    ):
        sink.write_text(row, 0, label, LABEL_CENTER)
        sink.merge_range(row, 1, row, last, value, style)
        row += 1
    sink.set_row_height(row - 1, config.RULES_ROW_HEIGHT)
    return row


def emit_column_headers(sink: LayoutSink, row: int, columns: List[Tuple[int, int, str]]) -> int:
    for first_col, last_col, label in columns:
        write_span(sink, row, first_col, row, last_col, label, HEADER)
    return row + 1


def emit_column_widths(sink: LayoutSink) -> None:
    for col, width in enumerate(config.COLUMN_WIDTHS):
        sink.set_column_width(col, width)
