from __future__ import annotations

from datetime import datetime

import pytest

from src.classroom_records.classroom_records.container import build_memory_container
from src.classroom_records.classroom_records.core.enums import Role
from src.classroom_records.classroom_records.identity.model import Subject
from src.classroom_records.classroom_records.students.model import Student

FIXED_NOW = datetime(2025, 3, 10, 9, 0, 0)

ROSTER = [
    Student("1001", "An", "Nguyễn", "A"),
    Student("1002", "Bình", "Trần", "A"),
    Student("1003", "Cường", "Lê", "A"),
    Student("2001", "Dung", "Phạm", "B"),
]


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def container(clock):
    """Roster of four (group A: 1001 leader, 1002, 1003; group B: 2001) and teacher T01."""
    c = build_memory_container(clock=clock, max_workers=4)
    for student in ROSTER:
        c.roster_service.import_student(student)
    c.permission_service.set_teacher("T01").unwrap()
    c.permission_service.set_group_leader("1001").unwrap()
    return c


@pytest.fixture
def teacher():
    return Subject(account="T01", role=Role.TEACHER, display_name="Cô Lan")


@pytest.fixture
def leader():
    return Subject(account="1001", role=Role.GROUP_LEADER, display_name="Nguyễn An")


@pytest.fixture
def student():
    return Subject(account="1002", role=Role.STUDENT, display_name="Trần Bình")
