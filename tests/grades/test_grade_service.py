from __future__ import annotations

from src.classroom_records.classroom_records.aggregation.calculator.base import TotalCalculator
from src.classroom_records.classroom_records.core.enums import GradeCategory, Role
from src.classroom_records.classroom_records.core.exceptions import NotFound, PermissionDenied, ValidationError
from src.classroom_records.classroom_records.grades.service import GradeService
from src.classroom_records.classroom_records.permissions.model import PermissionGrant


def test_total_recomputed_after_each_category_write(container, teacher):
    grades = container.grade_service

    first = grades.upsert_grade_category(teacher, "1002", GradeCategory.MIDTERM, 8).unwrap()
    assert first.total == 8.0

    second = grades.upsert_grade_category(teacher, "1002", "final", "7").unwrap()
    assert second.total == 7.43
    assert container.grades_repo.get("1002").total == 7.43


def test_zero_score_is_a_valid_grade(container, teacher):
    record = container.grade_service.upsert_grade_category(teacher, "1002", GradeCategory.PROJECT, 0).unwrap()

    assert record.project == 0.0
    assert record.total == 0.0


def test_category_write_keeps_other_categories(container, teacher):
    grades = container.grade_service
    grades.upsert_grade_category(teacher, "1002", GradeCategory.MIDTERM, 8).unwrap()
    record = grades.upsert_grade_category(teacher, "1002", GradeCategory.ASSIGNMENT1, 9).unwrap()

    assert record.midterm == 8.0
    assert record.assignment1 == 9.0
    assert record.updated_by == "T01"


def test_out_of_range_and_non_numeric_scores(container, teacher):
    grades = container.grade_service
    for bad in (11, -0.5, "abc", None, True):
        result = grades.upsert_grade_category(teacher, "1002", GradeCategory.MIDTERM, bad)
        assert isinstance(result.error, ValidationError), bad
    assert container.grades_repo.get("1002") is None


def test_unknown_category(container, teacher):
    result = container.grade_service.upsert_grade_category(teacher, "1002", "bonus", 5)
    assert isinstance(result.error, ValidationError)


def test_unknown_student(container, teacher):
    result = container.grade_service.upsert_grade_category(teacher, "9999", GradeCategory.MIDTERM, 5)
    assert isinstance(result.error, NotFound)


def test_leader_needs_grade_capability(container, leader):
    grades = container.grade_service
    assert isinstance(grades.upsert_grade_category(leader, "1002", GradeCategory.MIDTERM, 5).error, PermissionDenied)

    container.permission_service.set(
        PermissionGrant("1001", can_mark_attendance=True, can_edit_grades=True, is_group_leader=True, role=Role.GROUP_LEADER)
    ).unwrap()

    assert grades.upsert_grade_category(leader, "1002", GradeCategory.MIDTERM, 5).ok
    assert isinstance(grades.upsert_grade_category(leader, "2001", GradeCategory.MIDTERM, 5).error, PermissionDenied)


def test_full_update_ignores_client_total(container, teacher):
    record = container.grade_service.update_full_grade(
        teacher, "1002", {"midterm": 8, "final": 7, "project": "", "total": 10}
    ).unwrap()

    assert record.total == 7.43
    assert record.project is None
    assert container.grades_repo.get("1002") == record


def test_full_update_clears_missing_categories(container, teacher):
    grades = container.grade_service
    grades.upsert_grade_category(teacher, "1002", GradeCategory.PROJECT, 6).unwrap()

    record = grades.update_full_grade(teacher, "1002", {"midterm": 9}).unwrap()

    assert record.project is None
    assert record.total == 9.0


def test_full_update_rejects_unknown_keys(container, teacher):
    result = container.grade_service.update_full_grade(teacher, "1002", {"bonus": 3})
    assert isinstance(result.error, ValidationError)


def test_get_grades_read_rules(container, teacher, student):
    grades = container.grade_service
    grades.upsert_grade_category(teacher, "1002", GradeCategory.MIDTERM, 8).unwrap()

    assert grades.get_grades(student, "1002").unwrap().midterm == 8.0
    assert isinstance(grades.get_grades(student, "1003").error, PermissionDenied)
    assert grades.get_grades(teacher, "1003").unwrap() is None


def test_list_grades_scoped(container, teacher, leader):
    grades = container.grade_service
    for account in ("1002", "2001"):
        grades.upsert_grade_category(teacher, account, GradeCategory.FINAL, 6).unwrap()

    assert [g.student_account for g in grades.list_grades(teacher)] == ["1002", "2001"]
    assert [g.student_account for g in grades.list_grades(leader)] == ["1002"]


def test_delete_grade(container, teacher):
    grades = container.grade_service
    grades.upsert_grade_category(teacher, "1002", GradeCategory.FINAL, 6).unwrap()

    assert grades.delete_grade(teacher, "1002").ok
    assert isinstance(grades.delete_grade(teacher, "1002").error, NotFound)


class FlatCalculator(TotalCalculator):
    def total(self, record) -> float:
        return 5.0


def test_custom_total_calculator(container, teacher):
    service = GradeService(
        container.grades_repo, container.students_repo, container.guard, calculator=FlatCalculator()
    )

    assert service.upsert_grade_category(teacher, "1002", GradeCategory.MIDTERM, 9).unwrap().total == 5.0
