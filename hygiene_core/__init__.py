"""Dormitory hygiene inspection report: grouping, ranking and Excel layout."""

__version__ = "1.0.0"
