"""
department_table.py — Violations grouped by apartment, then department or class

Which department groups appear is decided by the department roster, not by
the violations: every roster department gets a bucket (possibly empty) before
records are folded in. Records without a department are grouped by their
class number instead, and those classroom groups only appear when they have
records.

Ranks come from two scopes:
  - departments are ranked once, globally, over cross-apartment totals;
  - classroom groups are ranked inside their apartment.
The "total" shown for a department is always the apartment-local sum, except
for the dual-apartment department when it has records in both apartments:
its rows stay in place inside each apartment block and a single deferred
label/total/rank cell (global total, global rank) is written afterwards.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Set, Tuple
from hygiene_core import config
from hygiene_core.labels import apartment_name, department_label, class_label, dorm_label
from hygiene_core.layout import LayoutSink, PendingMerge, write_span
from hygiene_core.models import ProcessedRecord, ReferenceTables
from hygiene_core.ranking import rank_totals

DeptKey = Tuple[int, str]


def sum_deductions(records: List[ProcessedRecord]) -> int:
    return sum(r.deduction for r in records)


def by_dorm(records: List[ProcessedRecord]) -> List[ProcessedRecord]:
    return sorted(records, key=lambda r: r.dorm)


class DepartmentTable:
    """First table of the report: 公寓 / 级部 / 班主任 / ... / 排名."""

    def __init__(self, records: List[ProcessedRecord], tables: ReferenceTables) -> None:
        self.records = list(records)
        self.tables = tables
        self.global_totals = self._global_totals()
        self.global_ranks = rank_totals(sorted(self.global_totals.items()))
        self.apartments = self._apartments()
        self.dual_presence = self._dual_presence()
        self.dual_seed = self._dual_seed_apartments()
        self.pending = PendingMerge()

    # -----------------------------------------------------------------
    # Group universe
    # -----------------------------------------------------------------

    def _global_totals(self) -> Dict[DeptKey, int]:
        """Cross-apartment total per department; roster departments start at 0."""
        totals: Dict[DeptKey, int] = {key: 0 for key in self.tables.departments}
        for r in self.records:
            if r.has_dept:
                totals[r.dept_key] = totals.get(r.dept_key, 0) + r.deduction
        return totals

    def _apartments(self) -> List[int]:
        """Roster apartments (plus any apartment seen in records), descending."""
        roster = set(self.tables.department_apartments())
        observed = {r.apartment for r in self.records}
        extra = sorted(observed - roster)
        if extra:
            logging.warning(f"Apartments not in the department roster: {extra}")
        return sorted(roster | observed, reverse=True)

    def _dual_presence(self) -> Set[int]:
        """Which of the two shared apartments hold records of the dual key."""
        return {
            r.apartment for r in self.records
            if r.has_dept and r.dept_key == config.DUAL_APARTMENT_KEY
            and r.apartment in config.DUAL_APARTMENTS
        }

    @property
    def dual_in_both(self) -> bool:
        return self.dual_presence >= set(config.DUAL_APARTMENTS)

    def _dual_seed_apartments(self) -> Set[int]:
        if self.dual_presence:
            placement = set(self.dual_presence)
        elif config.DUAL_DEFAULT_APARTMENT in self.apartments:
            placement = {config.DUAL_DEFAULT_APARTMENT}
        else:
            home = self.tables.departments.get(config.DUAL_APARTMENT_KEY, ("", None))[1]
            placement = {home} if home is not None else set()
        logging.info(
            f"Dual-apartment department {config.DUAL_APARTMENT_KEY} placed in apartment(s) "
            f"{sorted(placement)}{' (deferred merge)' if self.dual_in_both else ''}."
        )
        return placement

    def seed_buckets(self, apartment: int) -> Dict[DeptKey, List[ProcessedRecord]]:
        """Empty bucket for every roster department homed in this apartment."""
        buckets: Dict[DeptKey, List[ProcessedRecord]] = {}
        for key, (_, home) in self.tables.departments.items():
            if key == config.DUAL_APARTMENT_KEY:
                if apartment in self.dual_seed:
                    buckets[key] = []
            elif home == apartment:
                buckets[key] = []
        return buckets

    def group_apartment(self, apartment: int) -> Tuple[Dict[DeptKey, List[ProcessedRecord]], Dict[int, List[ProcessedRecord]]]:
        dept_buckets = self.seed_buckets(apartment)
        class_buckets: Dict[int, List[ProcessedRecord]] = {}
        for r in self.records:
            if r.apartment != apartment:
                continue
            if r.has_dept:
                dept_buckets.setdefault(r.dept_key, []).append(r)
            else:
                class_buckets.setdefault(r.class_no, []).append(r)
        return dept_buckets, class_buckets

    # -----------------------------------------------------------------
    # Rendering
    # -----------------------------------------------------------------

    def _write_record_rows(self, sink: LayoutSink, row: int, records: List[ProcessedRecord]) -> int:
        for r in by_dorm(records):
            sink.write_text(row, 2, r.teacher)
            sink.write_text(row, 3, r.manager)
            sink.write_text(row, 4, dorm_label(r.dorm))
            sink.write_text(row, 5, r.reason)
            sink.write_number(row, 6, r.deduction)
            row += 1
        return row

    def _write_group_cells(self, sink: LayoutSink, first: int, last: int, label: str, total: int, rank: int) -> None:
        write_span(sink, first, 1, last, 1, label)
        write_span(sink, first, 7, last, 7, total)
        write_span(sink, first, 8, last, 8, rank)

    def _write_placeholder(self, sink: LayoutSink, row: int, label: str, rank: int) -> int:
        sink.write_text(row, 1, label)
        for col in range(2, 8):
            sink.write_text(row, col, config.FILLER)
        sink.write_number(row, 8, rank)
        return row + 1

    def render_apartment(self, sink: LayoutSink, row: int, apartment: int) -> int:
        dept_buckets, class_buckets = self.group_apartment(apartment)
        class_totals = {k: sum_deductions(v) for k, v in class_buckets.items()}
        class_ranks = rank_totals(sorted(class_totals.items()))
        apt_start = row

        for key in sorted(dept_buckets):
            bucket = dept_buckets[key]
            label = department_label(key[0], key[1], self.tables.leader_of(key))
            rank = self.global_ranks[key]
            if not bucket:
                row = self._write_placeholder(sink, row, label, rank)
                continue
            grp_start = row
            row = self._write_record_rows(sink, row, bucket)
            if key == config.DUAL_APARTMENT_KEY and self.dual_in_both:
                self.pending.add_run(grp_start, row - 1)
            else:
                self._write_group_cells(sink, grp_start, row - 1, label, sum_deductions(bucket), rank)

        for class_no in sorted(class_buckets):
            bucket = class_buckets[class_no]
            if not bucket:
                continue
            grp_start = row
            row = self._write_record_rows(sink, row, bucket)
            self._write_group_cells(
                sink, grp_start, row - 1, class_label(class_no), class_totals[class_no], class_ranks[class_no]
            )

        if row > apt_start:
            write_span(sink, apt_start, 0, row - 1, 0, apartment_name(apartment))
        return row

    def resolve_pending(self, sink: LayoutSink) -> None:
        """Write the dual-apartment department's cells once both blocks exist."""
        key = config.DUAL_APARTMENT_KEY
        spans = self.pending.spans()
        if not spans:
            return
        if not self.pending.is_contiguous():
            logging.info(
                f"{key} rows are split by other groups; writing {len(spans)} separate merges."
            )
        label = department_label(key[0], key[1], self.tables.leader_of(key))
        for first, last in spans:
            self._write_group_cells(sink, first, last, label, self.global_totals[key], self.global_ranks[key])

    def render(self, sink: LayoutSink, row: int) -> int:
        """Emit every apartment block starting at `row`; returns the next free row."""
        start = row
        self.pending = PendingMerge()
        for apartment in self.apartments:
            row = self.render_apartment(sink, row, apartment)
        self.resolve_pending(sink)
        logging.info(f"Department table: {row - start} rows for apartments {self.apartments}.")
        return row
