import base64
import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path so tests can import `hygiene_core`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hygiene_core.enrich import enrich_records
from hygiene_core.models import (
    ClassroomEntry,
    DepartmentRosterEntry,
    ManagerRosterEntry,
    ViolationRecord,
    build_reference_tables,
)

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def make_tables():
    """Build ReferenceTables from plain tuples.

    classrooms: (grade, dept, class_no, teacher)
    managers: (apartment, floor, manager)
    departments: (grade, dept, leader, apartment)
    """
    def _make(classrooms=(), managers=(), departments=()):
        return build_reference_tables(
            [ClassroomEntry(*c) for c in classrooms],
            [ManagerRosterEntry(*m) for m in managers],
            [DepartmentRosterEntry(*d) for d in departments],
        )
    return _make


@pytest.fixture
def make_records():
    """Enrich (grade, class_no, apartment, dorm, reason) tuples against tables."""
    def _make(rows, tables):
        return enrich_records([ViolationRecord(*r) for r in rows], tables)
    return _make


@pytest.fixture
def assets_dir(tmp_path):
    """A small but complete set of reference files plus logo."""
    d = tmp_path / "assets"
    d.mkdir()
    (d / "nianji.csv").write_text(
        "年级,级部,班级,班主任\n"
        "1,A,1,王老师\n"
        "1,B,3,张老师\n"
        "2,A,5,陈老师\n"
        "2,B,7,赵老师\n"
        "3,,17,马老师\n",
        encoding="utf-8",
    )
    (d / "sushe.csv").write_text(
        "公寓,楼层,宿管\n"
        "1,1,胡宿管\n"
        "1,2,郭宿管\n"
        "2,1,何宿管\n"
        "2,2,高宿管\n",
        encoding="utf-8",
    )
    (d / "jibu.csv").write_text(
        "年级,级部,主任,公寓\n"
        "1,A,郑主任,1\n"
        "1,B,梁主任,1\n"
        "2,A,谢主任,1\n"
        "2,B,宋主任,2\n",
        encoding="utf-8",
    )
    (d / "logo.png").write_bytes(PNG_BYTES)
    return d


@pytest.fixture
def violations_csv(tmp_path):
    path = tmp_path / "violations.csv"
    path.write_text(
        "年级,班级,公寓,宿舍,原因\n"
        "1,1,1,201,被子未叠\n"
        "1,1,1,101,床单不平\n"
        "2,5,1,102,杂物\n"
        "2,5,2,105,簸箕未清理\n"
        "3,17,2,210,杂物\n",
        encoding="utf-8",
    )
    return path
