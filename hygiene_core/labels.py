"""
labels.py — Display text for apartments, departments, classes and dorms
"""

from __future__ import annotations
from hygiene_core import config


def apartment_name(apartment: int) -> str:
    """1 -> 一号公寓"""
    return f"{config.CHINESE_NUMERALS.get(apartment, str(apartment))}号公寓"


def grade_name(grade: int) -> str:
    return config.GRADE_NAMES.get(grade, f"{grade}年级")


def department_label(grade: int, dept: str, leader: str = "") -> str:
    """高二A部, with the leader on a second line when known."""
    label = f"{grade_name(grade)}{dept}部"
    if leader:
        label += f"\n({leader})"
    return label


def class_label(class_no: int) -> str:
    return f"{class_no}班"


def dorm_label(dorm: int) -> str:
    return f"{dorm}宿舍"
