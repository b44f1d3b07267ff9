"""
enrich.py — Join violation entries against the reference rosters

A lookup miss is not an error: the department falls back to "" (grouped by
classroom number later) and the teacher/manager become config.UNKNOWN.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, List
from hygiene_core import config
from hygiene_core.models import ViolationRecord, ProcessedRecord, ReferenceTables


def enrich_record(record: ViolationRecord, tables: ReferenceTables) -> ProcessedRecord:
    dept, teacher = tables.classrooms.get((record.grade, record.class_no), ("", config.UNKNOWN))
    manager = tables.floor_managers.get((record.apartment, record.floor), config.UNKNOWN)
    return ProcessedRecord(
        apartment=record.apartment,
        grade=record.grade,
        class_no=record.class_no,
        dept=dept,
        teacher=teacher,
        manager=manager,
        dorm=record.dorm,
        reason=record.reason,
        deduction=config.DEDUCTION,
    )


def enrich_records(records: Iterable[ViolationRecord], tables: ReferenceTables) -> List[ProcessedRecord]:
    processed = [enrich_record(r, tables) for r in records]
    misses = summarize_lookup_misses(processed)
    if misses["unknown_teacher"] or misses["unknown_manager"]:
        logging.warning(
            f"Lookup misses: {misses['unknown_teacher']} record(s) with unknown class, "
            f"{misses['unknown_manager']} record(s) with unknown apartment/floor."
        )
    logging.info(
        f"Enriched {len(processed):,} records "
        f"({misses['without_dept']} grouped by classroom number)."
    )
    return processed


def summarize_lookup_misses(records: Iterable[ProcessedRecord]) -> Dict[str, int]:
    """Count records that fell back to a default during enrichment."""
    summary = {"unknown_teacher": 0, "unknown_manager": 0, "without_dept": 0}
    for r in records:
        if r.teacher == config.UNKNOWN:
            summary["unknown_teacher"] += 1
        if r.manager == config.UNKNOWN:
            summary["unknown_manager"] += 1
        if not r.has_dept:
            summary["without_dept"] += 1
    return summary
