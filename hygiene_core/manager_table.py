"""
manager_table.py — Violations grouped by apartment, then dorm manager

Managers are listed in floor order (lowest serviced floor first), not rank
order. Ranks are apartment-local.
"""

from __future__ import annotations
import logging
from typing import Dict, List
from hygiene_core import config
from hygiene_core.labels import apartment_name, dorm_label
from hygiene_core.layout import LayoutSink, write_span
from hygiene_core.models import ProcessedRecord, ReferenceTables
from hygiene_core.ranking import rank_totals


class ManagerTable:
    """Second table of the report: 公寓 / 宿舍管理员 / 宿舍号 / ... / 排名."""

    def __init__(self, records: List[ProcessedRecord], tables: ReferenceTables) -> None:
        self.records = list(records)
        self.tables = tables
        self.apartments = sorted(
            set(tables.manager_apartments()) | {r.apartment for r in self.records}
        )

    def managers_for(self, apartment: int) -> List[str]:
        """Roster managers of the apartment plus any manager named by its records."""
        names = {m.manager for m in self.tables.managers if m.apartment == apartment}
        names |= {r.manager for r in self.records if r.apartment == apartment}
        return sorted(names)

    def records_for(self, apartment: int, manager: str) -> List[ProcessedRecord]:
        return [r for r in self.records if r.apartment == apartment and r.manager == manager]

    def local_totals(self, apartment: int) -> Dict[str, int]:
        return {
            m: sum(r.deduction for r in self.records_for(apartment, m))
            for m in self.managers_for(apartment)
        }

    def display_order(self, apartment: int) -> List[str]:
        floors = self.tables.min_floors(apartment)
        return sorted(
            self.managers_for(apartment),
            key=lambda m: (floors.get(m, config.UNKNOWN_FLOOR), m),
        )

    def _write_placeholder(self, sink: LayoutSink, row: int, manager: str, rank: int) -> int:
        sink.write_text(row, 1, manager)
        sink.write_text(row, 2, config.FILLER)
        sink.merge_range(row, 3, row, 4, config.FILLER)
        sink.write_text(row, 5, config.FILLER)
        sink.merge_range(row, 6, row, 7, config.FILLER)
        sink.write_number(row, 8, rank)
        return row + 1

    def render_apartment(self, sink: LayoutSink, row: int, apartment: int) -> int:
        totals = self.local_totals(apartment)
        ranks = rank_totals(sorted(totals.items()))
        apt_start = row

        for manager in self.display_order(apartment):
            records = self.records_for(apartment, manager)
            if not records:
                row = self._write_placeholder(sink, row, manager, ranks[manager])
                continue
            mgr_start = row
            for r in sorted(records, key=lambda r: r.dorm):
                sink.write_text(row, 2, dorm_label(r.dorm))
                sink.merge_range(row, 3, row, 4, r.reason)
                sink.write_number(row, 5, r.deduction)
                row += 1
            write_span(sink, mgr_start, 1, row - 1, 1, manager)
            write_span(sink, mgr_start, 6, row - 1, 7, totals[manager])
            write_span(sink, mgr_start, 8, row - 1, 8, ranks[manager])

        if row > apt_start:
            write_span(sink, apt_start, 0, row - 1, 0, apartment_name(apartment))
        return row

    def render(self, sink: LayoutSink, row: int) -> int:
        start = row
        for apartment in self.apartments:
            row = self.render_apartment(sink, row, apartment)
        logging.info(f"Manager table: {row - start} rows for apartments {self.apartments}.")
        return row
