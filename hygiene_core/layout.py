"""
layout.py — Row-layout instructions and the sink interface

The table builders never touch a workbook. They call a LayoutSink, which is
either the in-memory InstructionRecorder (tests, determinism checks) or the
xlsxwriter-backed sink in report.py.
"""

from __future__ import annotations
import pandas as pd
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from hygiene_core import config

# Cell styles. Only title / header / body are visually distinct; the label
# variants mirror the metadata rows of the header block.
TITLE = "title"
HEADER = "header"
CELL = "cell"
LABEL = "label"            # bold, left aligned (reporter line)
LABEL_CENTER = "label_center"
TEXT_LEFT = "text_left"    # wrapped body text, left aligned (rules)


@dataclass(frozen=True)
class Instruction:
    op: str
    row: int = 0
    col: int = 0
    last_row: int = 0
    last_col: int = 0
    value: Any = None
    style: str = CELL


class LayoutSink:
    """Interface offered by the spreadsheet writer."""

    def write_text(self, row: int, col: int, value: str, style: str = CELL) -> None:
        raise NotImplementedError

    def write_number(self, row: int, col: int, value: float, style: str = CELL) -> None:
        raise NotImplementedError

    def merge_range(self, row0: int, col0: int, row1: int, col1: int, value: Any, style: str = CELL) -> None:
        raise NotImplementedError

    def set_row_height(self, row: int, height: float) -> None:
        raise NotImplementedError

    def set_column_width(self, col: int, width: float) -> None:
        raise NotImplementedError

    def embed_image(self, row: int, col: int) -> None:
        raise NotImplementedError


class InstructionRecorder(LayoutSink):
    """Collects instructions in emission order."""

    def __init__(self) -> None:
        self.instructions: List[Instruction] = []

    def write_text(self, row, col, value, style=CELL):
        self.instructions.append(Instruction("text", row, col, row, col, str(value), style))

    def write_number(self, row, col, value, style=CELL):
        self.instructions.append(Instruction("number", row, col, row, col, value, style))

    def merge_range(self, row0, col0, row1, col1, value, style=CELL):
        self.instructions.append(Instruction("merge", row0, col0, row1, col1, value, style))

    def set_row_height(self, row, height):
        self.instructions.append(Instruction("row_height", row=row, last_row=row, value=height))

    def set_column_width(self, col, width):
        self.instructions.append(Instruction("column_width", col=col, last_col=col, value=width))

    def embed_image(self, row, col):
        self.instructions.append(Instruction("image", row, col, row, col))

    # -----------------------------------------------------------------
    # Inspection helpers
    # -----------------------------------------------------------------

    def merges(self) -> List[Tuple[int, int, int, int, Any]]:
        return [
            (i.row, i.col, i.last_row, i.last_col, i.value)
            for i in self.instructions if i.op == "merge"
        ]

    def cells(self) -> Dict[Tuple[int, int], Any]:
        """Value visible in every covered cell; merged ranges repeat their value."""
        grid: Dict[Tuple[int, int], Any] = {}
        for i in self.instructions:
            if i.op in ("text", "number"):
                grid[(i.row, i.col)] = i.value
            elif i.op == "merge":
                for r in range(i.row, i.last_row + 1):
                    for c in range(i.col, i.last_col + 1):
                        grid[(r, c)] = i.value
        return grid

    def to_frame(self, first_row: int = 0, last_row: Optional[int] = None) -> pd.DataFrame:
        """Grid view of the written cells as a DataFrame indexed by sheet row."""
        grid = self.cells()
        if not grid:
            return pd.DataFrame(columns=range(config.LAST_COL + 1))
        top = max(r for r, _ in grid) if last_row is None else last_row
        rows = range(first_row, top + 1)
        data = [[grid.get((r, c), "") for c in range(config.LAST_COL + 1)] for r in rows]
        return pd.DataFrame(data, index=list(rows), columns=range(config.LAST_COL + 1))


def replay(instructions: List[Instruction], sink: LayoutSink) -> None:
    """Send recorded instructions to another sink, in order."""
    for i in instructions:
        if i.op == "text":
            sink.write_text(i.row, i.col, i.value, i.style)
        elif i.op == "number":
            sink.write_number(i.row, i.col, i.value, i.style)
        elif i.op == "merge":
            sink.merge_range(i.row, i.col, i.last_row, i.last_col, i.value, i.style)
        elif i.op == "row_height":
            sink.set_row_height(i.row, i.value)
        elif i.op == "column_width":
            sink.set_column_width(i.col, i.value)
        elif i.op == "image":
            sink.embed_image(i.row, i.col)
        else:
            raise ValueError(f"Unknown layout instruction: {i.op!r}")


def write_value(sink: LayoutSink, row: int, col: int, value: Any, style: str = CELL) -> None:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        sink.write_number(row, col, value, style)
    else:
        sink.write_text(row, col, value, style)


def write_span(sink: LayoutSink, row0: int, col0: int, row1: int, col1: int,
               value: Any, style: str = CELL) -> None:
    """Merge the rectangle, or write the single cell directly when it is one cell."""
    if row1 > row0 or col1 > col0:
        sink.merge_range(row0, col0, row1, col1, value, style)
    else:
        write_value(sink, row0, col0, value, style)


@dataclass
class PendingMerge:
    """Row runs of one group emitted in separate passes, merged afterwards."""
    start: Optional[int] = None
    end: Optional[int] = None
    runs: List[Tuple[int, int]] = field(default_factory=list)

    def add_run(self, first_row: int, last_row: int) -> None:
        if self.start is None:
            self.start = first_row
        self.end = last_row
        self.runs.append((first_row, last_row))

    def is_contiguous(self) -> bool:
        return all(b[0] == a[1] + 1 for a, b in zip(self.runs, self.runs[1:]))

    def spans(self) -> List[Tuple[int, int]]:
        """One span start..end when nothing else sits between the runs, else one per run."""
        if self.start is None:
            return []
        if self.is_contiguous():
            return [(self.start, self.end)]
        return list(self.runs)
