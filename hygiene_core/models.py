"""
models.py — Record types and the read-only reference lookups

ViolationRecord is what the inspectors wrote down; ProcessedRecord is the same
entry joined against the rosters. ReferenceTables is built once per run.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Iterable


def floor_of(dorm: int) -> int:
    """Dorm 305 is on floor 3."""
    return dorm // 100


@dataclass(frozen=True)
class ViolationRecord:
    grade: int
    class_no: int
    apartment: int
    dorm: int
    reason: str

    @property
    def floor(self) -> int:
        return floor_of(self.dorm)


@dataclass(frozen=True)
class ProcessedRecord:
    apartment: int
    grade: int
    class_no: int
    dept: str
    teacher: str
    manager: str
    dorm: int
    reason: str
    deduction: int

    @property
    def dept_key(self) -> Tuple[int, str]:
        return (self.grade, self.dept)

    @property
    def has_dept(self) -> bool:
        return self.dept != ""


@dataclass(frozen=True)
class ClassroomEntry:
    grade: int
    dept: str
    class_no: int
    teacher: str


@dataclass(frozen=True)
class ManagerRosterEntry:
    apartment: int
    floor: int
    manager: str


@dataclass(frozen=True)
class DepartmentRosterEntry:
    grade: int
    dept: str
    leader: str
    apartment: int


@dataclass(frozen=True)
class ReferenceTables:
    """Immutable lookups shared by the enricher and both table builders."""
    classrooms: Dict[Tuple[int, int], Tuple[str, str]] = field(default_factory=dict)
    floor_managers: Dict[Tuple[int, int], str] = field(default_factory=dict)
    departments: Dict[Tuple[int, str], Tuple[str, int]] = field(default_factory=dict)
    managers: Tuple[ManagerRosterEntry, ...] = ()

    def department_apartments(self) -> List[int]:
        return sorted({apt for _, apt in self.departments.values()})

    def manager_apartments(self) -> List[int]:
        return sorted({m.apartment for m in self.managers})

    def leader_of(self, key: Tuple[int, str]) -> str:
        return self.departments.get(key, ("", 0))[0]

    def min_floors(self, apartment: int) -> Dict[str, int]:
        """Lowest floor each manager services in the apartment."""
        floors: Dict[str, int] = {}
        for m in self.managers:
            if m.apartment != apartment:
                continue
            if m.manager not in floors or m.floor < floors[m.manager]:
                floors[m.manager] = m.floor
        return floors


def build_reference_tables(
    classrooms: Iterable[ClassroomEntry],
    managers: Iterable[ManagerRosterEntry],
    departments: Iterable[DepartmentRosterEntry],
) -> ReferenceTables:
    """Index the three rosters. Later rows override earlier ones on key clashes."""
    managers = tuple(managers)
    return ReferenceTables(
        classrooms={(c.grade, c.class_no): (c.dept, c.teacher) for c in classrooms},
        floor_managers={(m.apartment, m.floor): m.manager for m in managers},
        departments={(d.grade, d.dept): (d.leader, d.apartment) for d in departments},
        managers=managers,
    )
