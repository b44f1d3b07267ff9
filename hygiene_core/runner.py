"""
runner.py — Main orchestrator for the dormitory hygiene report

load inputs -> enrich -> department table -> manager table -> write workbook.
The run is all-or-nothing: any ReportError aborts before the output exists.
"""

from __future__ import annotations
import os
import sys
import logging
import pathlib
import platform
import subprocess
from typing import List, Optional
from hygiene_core import config, io_utils, report
from hygiene_core.department_table import DepartmentTable
from hygiene_core.enrich import enrich_records
from hygiene_core.errors import ReportError
from hygiene_core.header import emit_header_block, emit_column_headers, emit_column_widths
from hygiene_core.layout import InstructionRecorder
from hygiene_core.manager_table import ManagerTable
from hygiene_core.models import ProcessedRecord, ReferenceTables


# ---------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------
def _setup_logging(log_dir: pathlib.Path) -> None:
    """Initialize logging to both console and file."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / config.LOG_FILE_NAME
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.FileHandler(log_path, encoding="utf-8"), logging.StreamHandler()],
    )


def _open_report(path: pathlib.Path) -> None:
    """Open the workbook with the system default application."""
    try:
        system = platform.system()
        if system == "Darwin":
            subprocess.Popen(["open", str(path)])
        elif system == "Windows":
            os.startfile(str(path))
        else:
            subprocess.Popen(["xdg-open", str(path)])
    except Exception as e:
        logging.warning(f"Failed to open report automatically: {e}")


# ---------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------
def build_layout(
    records: List[ProcessedRecord],
    tables: ReferenceTables,
    reporter: str = config.DEFAULT_REPORTER,
    date: str = config.DEFAULT_DATE,
    time: str = config.DEFAULT_TIME,
) -> InstructionRecorder:
    """Produce every layout instruction of the report, in one forward pass."""
    sink = InstructionRecorder()

    row = emit_header_block(sink, 0, reporter, date, time)
    row = emit_column_headers(sink, row, config.DEPARTMENT_HEADERS)
    row = DepartmentTable(records, tables).render(sink, row)

    row += config.TABLE_GAP_ROWS
    row = emit_header_block(sink, row, reporter, date, time)
    row = emit_column_headers(sink, row, config.MANAGER_HEADERS)
    ManagerTable(records, tables).render(sink, row)

    emit_column_widths(sink)
    return sink


# ---------------------------------------------------------------------
# Main report runner
# ---------------------------------------------------------------------
def generate_report(
    input_path: str | pathlib.Path,
    output_path: Optional[str | pathlib.Path] = None,
    reporter: str = config.DEFAULT_REPORTER,
    date: str = config.DEFAULT_DATE,
    time: str = config.DEFAULT_TIME,
    assets_dir: Optional[str | pathlib.Path] = None,
) -> pathlib.Path:
    """Build the report for one violation CSV. Returns the workbook path."""
    input_path = pathlib.Path(input_path)
    output_path = pathlib.Path(output_path) if output_path else input_path.with_suffix(".xlsx")
    assets_dir = pathlib.Path(assets_dir) if assets_dir else config.ASSETS_DIR
    _setup_logging(output_path.resolve().parent)

    logging.info("==============================================")
    logging.info("Starting dormitory hygiene report")
    logging.info(f"Input: {input_path}")
    logging.info(f"Assets: {assets_dir}")
    logging.info("==============================================")

    records = io_utils.load_violations(input_path)
    tables = io_utils.load_reference_tables(assets_dir)
    logging.info(
        f"Reference tables: {len(tables.classrooms)} classes, "
        f"{len(tables.managers)} manager floors, {len(tables.departments)} departments."
    )

    processed = enrich_records(records, tables)
    layout = build_layout(processed, tables, reporter, date, time)

    logging.info(f"Writing Excel report to {output_path} ...")
    report.write_workbook(layout.instructions, output_path, assets_dir / config.LOGO_FILE)

    if config.AUTO_OPEN_REPORT:
        _open_report(output_path)

    logging.info("==============================================")
    logging.info(f"Report written to: {output_path}")
    logging.info("==============================================")
    return output_path


# ---------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------
def _build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description="Generate the dormitory hygiene inspection report (Excel)."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    rep = sub.add_parser("report", help="Generate a report from a violation CSV")
    rep.add_argument("input", help="Path to the violation CSV (年级,班级,公寓,宿舍,原因)")
    rep.add_argument("-o", "--output", help="Output .xlsx path (default: input name with .xlsx)")
    rep.add_argument("-r", "--reporter", default=config.DEFAULT_REPORTER, help="Reporter names")
    rep.add_argument("-d", "--date", default=config.DEFAULT_DATE, help="Inspection date")
    rep.add_argument("-t", "--time", default=config.DEFAULT_TIME, help="Inspection time window")
    rep.add_argument("--assets", default=str(config.ASSETS_DIR),
                     help="Directory holding nianji.csv, sushe.csv, jibu.csv and logo.png")

    init = sub.add_parser("init", help="Create an empty violation CSV template")
    init.add_argument("name", help="File name (.csv is appended when missing)")
    init.add_argument("--force", action="store_true", help="Overwrite an existing file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        if args.command == "init":
            path = io_utils.init_template(args.name, overwrite=args.force)
            print(f"已创建CSV文件: {path}")
        else:
            path = generate_report(
                args.input,
                output_path=args.output,
                reporter=args.reporter,
                date=args.date,
                time=args.time,
                assets_dir=args.assets,
            )
            print(f"报告已生成: {path}")
    except ReportError as e:
        logging.error(f"Report generation failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception:
        logging.exception("Unexpected failure during report generation")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
