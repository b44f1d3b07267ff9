"""
errors.py — Exception hierarchy for report generation

Any of these aborts the whole run; lookup misses are not errors.
"""

from __future__ import annotations


class ReportError(Exception):
    """Base exception for every fatal report failure."""


class InputError(ReportError):
    """Raised when an input or reference file is missing or malformed."""


class OutputError(ReportError):
    """Raised when the workbook cannot be written (e.g. logo image missing)."""
