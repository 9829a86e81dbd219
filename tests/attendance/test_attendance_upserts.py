from __future__ import annotations

from datetime import date, datetime

from src.classroom_records.classroom_records.attendance.model import AttendanceFilter
from src.classroom_records.classroom_records.attendance.service import AttendanceService
from src.classroom_records.classroom_records.core.exceptions import (
    NotFound,
    PermissionDenied,
    StorageError,
    ValidationError,
)

DAY = date(2025, 3, 10)


def test_upsert_attendance_is_idempotent(container, teacher):
    service = container.attendance_service

    first = service.upsert_attendance(teacher, "1002", DAY, True).unwrap()
    second = service.upsert_attendance(teacher, "1002", DAY, True).unwrap()

    records = container.attendance_repo.query(AttendanceFilter(student_account="1002"))
    assert len(records) == 1
    assert first.key == second.key == ("1002", DAY)


def test_datetime_is_truncated_to_session_day(container, teacher):
    service = container.attendance_service
    service.upsert_attendance(teacher, "1002", datetime(2025, 3, 10, 14, 30), True).unwrap()
    service.upsert_attendance(teacher, "1002", "2025-03-10", False).unwrap()

    records = container.attendance_repo.query(AttendanceFilter(student_account="1002"))
    assert len(records) == 1
    assert records[0].is_present is False


def test_first_attendance_write_has_zero_participation(container, teacher, clock):
    record = container.attendance_service.upsert_attendance(teacher, "1002", DAY, True).unwrap()

    assert record.participation_count == 0
    assert record.updated_by == "T01"
    assert record.updated_at == clock()
    assert record.created_at == clock()


def test_first_participation_write_is_absent(container, teacher):
    record = container.attendance_service.upsert_participation(teacher, "1002", DAY, 2).unwrap()

    assert record.is_present is False
    assert record.participation_count == 2


def test_presence_and_participation_do_not_overwrite_each_other(container, leader):
    service = container.attendance_service
    service.upsert_participation(leader, "1003", DAY, 3).unwrap()
    record = service.upsert_attendance(leader, "1003", DAY, True).unwrap()

    assert record.participation_count == 3
    assert record.is_present is True


def test_negative_participation_rejected(container, teacher):
    result = container.attendance_service.upsert_participation(teacher, "1002", DAY, -1)

    assert isinstance(result.error, ValidationError)
    assert container.attendance_repo.get("1002", DAY) is None


def test_unknown_student_is_not_found(container, teacher):
    result = container.attendance_service.upsert_attendance(teacher, "9999", DAY, True)
    assert isinstance(result.error, NotFound)


def test_leader_outside_group_is_denied(container, leader):
    result = container.attendance_service.upsert_attendance(leader, "2001", DAY, True)

    assert isinstance(result.error, PermissionDenied)
    assert container.attendance_repo.get("2001", DAY) is None


def test_student_cannot_mark_self(container, student):
    result = container.attendance_service.upsert_attendance(student, "1002", DAY, True)
    assert isinstance(result.error, PermissionDenied)


def test_invalid_date_and_presence(container, teacher):
    service = container.attendance_service
    assert isinstance(service.upsert_attendance(teacher, "1002", "10/03/2025", True).error, ValidationError)
    assert isinstance(service.upsert_attendance(teacher, "1002", DAY, "maybe").error, ValidationError)


def test_presence_accepts_vietnamese_text(container, teacher):
    record = container.attendance_service.upsert_attendance(teacher, "1002", DAY, "có").unwrap()
    assert record.is_present is True


def test_list_records_scoped_to_reader(container, teacher, student, leader):
    service = container.attendance_service
    for account in ("1001", "1002", "1003", "2001"):
        service.upsert_attendance(teacher, account, DAY, True).unwrap()

    assert {r.student_account for r in service.list_records(teacher)} == {"1001", "1002", "1003", "2001"}
    assert {r.student_account for r in service.list_records(leader)} == {"1001", "1002", "1003"}
    assert [r.student_account for r in service.list_records(student)] == ["1002"]


def test_list_dates_newest_first(container, teacher):
    service = container.attendance_service
    service.upsert_attendance(teacher, "1002", date(2025, 3, 3), True).unwrap()
    service.upsert_attendance(teacher, "1002", DAY, True).unwrap()

    assert service.list_dates() == [DAY, date(2025, 3, 3)]


def test_delete_attendance(container, teacher):
    service = container.attendance_service
    service.upsert_attendance(teacher, "1002", DAY, True).unwrap()

    assert service.delete_attendance(teacher, "1002", DAY).ok
    assert isinstance(service.delete_attendance(teacher, "1002", DAY).error, NotFound)


class BrokenAttendance:
    def query(self, attendance_filter):
        raise StorageError("db down")

    def list_dates(self):
        raise StorageError("db down")


def test_listing_fails_soft_on_storage_error(container, teacher):
    service = AttendanceService(BrokenAttendance(), container.students_repo, container.guard)

    assert service.list_records(teacher) == []
    assert service.list_dates() == []


def test_infinite_participation_rejected(container, teacher):
    service = container.attendance_service

    for bad in (float("inf"), "inf", "1e400"):
        result = service.upsert_participation(teacher, "1002", DAY, bad)
        assert isinstance(result.error, ValidationError), bad
    assert container.attendance_repo.get("1002", DAY) is None
