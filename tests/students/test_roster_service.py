from __future__ import annotations

from src.classroom_records.classroom_records.core.exceptions import NotFound, PermissionDenied, ValidationError
from src.classroom_records.classroom_records.students.model import Student, StudentFilter


def test_list_sorted_by_surname_then_name(container):
    names = [s.full_name for s in container.roster_service.list_students()]
    assert names == sorted(names, key=lambda n: (n.split(" ")[0], n.split(" ")[1]))
    assert len(names) == 4


def test_filter_by_group(container):
    accounts = [s.account for s in container.roster_service.list_students(StudentFilter(group="A"))]
    assert sorted(accounts) == ["1001", "1002", "1003"]


def test_search_is_case_insensitive(container):
    roster = container.roster_service

    assert [s.account for s in roster.list_students(StudentFilter(search_term="PHẠM"))] == ["2001"]
    assert [s.account for s in roster.list_students(StudentFilter(search_term="200"))] == ["2001"]
    assert [s.account for s in roster.list_students(StudentFilter(group="A", search_term="cường"))] == ["1003"]


def test_list_groups(container):
    assert list(container.roster_service.list_groups()) == ["A", "B"]


def test_add_student_requires_roster_admin(container, teacher, leader):
    roster = container.roster_service
    new = Student("3001", "Em", "Võ", "C")

    assert isinstance(roster.add_student(leader, new).error, PermissionDenied)
    assert roster.add_student(teacher, new).unwrap() == new
    assert roster.get_student("3001") == new


def test_add_student_validates_fields(container, teacher):
    roster = container.roster_service

    assert isinstance(roster.add_student(teacher, Student("abc", "Em", "Võ", "C")).error, ValidationError)
    assert isinstance(roster.add_student(teacher, Student("3001", " ", "Võ", "C")).error, ValidationError)


def test_reimport_overwrites(container):
    container.roster_service.import_student(Student("1002", "Bình", "Trần", "B"))
    assert container.roster_service.get_student("1002").group == "B"


def test_reassign_group(container, teacher, student):
    roster = container.roster_service

    assert isinstance(roster.reassign_group(student, "1002", "B").error, PermissionDenied)
    assert roster.reassign_group(teacher, "1002", "B").unwrap().group == "B"
    assert isinstance(roster.reassign_group(teacher, "9999", "B").error, NotFound)
    assert isinstance(roster.reassign_group(teacher, "1002", "").error, ValidationError)


def test_delete_student(container, teacher):
    roster = container.roster_service

    assert roster.delete_student(teacher, "2001").ok
    assert roster.get_student("2001") is None
    assert isinstance(roster.delete_student(teacher, "2001").error, NotFound)


def test_add_existing_account_cannot_change_name(container, teacher):
    roster = container.roster_service

    result = roster.add_student(teacher, Student("1002", "Khác", "Đổi", "B"))

    assert isinstance(result.error, ValidationError)
    assert roster.get_student("1002") == Student("1002", "Bình", "Trần", "A")


def test_add_existing_account_with_same_name_moves_group(container, teacher):
    moved = container.roster_service.add_student(teacher, Student("1002", "Bình", "Trần", "B")).unwrap()
    assert moved.group == "B"
