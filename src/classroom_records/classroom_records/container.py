from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from .aggregation.model import BandThresholds
from .attendance.memory_attendance_repository import MemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .authorization.guard import AuthorizationGuard
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_BAND_THRESHOLDS, DEFAULT_BATCH_MAX_WORKERS
from .database.connection import DBConfig, DatabaseConnection
from .database.memory import MemoryDatabase
from .grades.memory_grade_repository import MemoryGradeRepository
from .grades.mysql_grade_repository import MySQLGradeRepository
from .grades.repository import GradeRepository
from .grades.service import GradeService
from .identity.memory_staff_repository import MemoryStaffAccountRepository
from .identity.mysql_staff_repository import MySQLStaffAccountRepository
from .identity.repository import StaffAccountRepository
from .identity.resolver import IdentityResolver
from .imports.policy import AllOrNothingPolicy, CommitPolicy
from .imports.schemas import ImportWriters
from .imports.service import BatchImportService
from .permissions.memory_permission_repository import MemoryPermissionRepository
from .permissions.mysql_permission_repository import MySQLPermissionRepository
from .permissions.repository import PermissionRepository
from .permissions.service import PermissionService
from .reports.service import SummaryReportService
from .students.memory_student_repository import MemoryStudentRepository
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import RosterService


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    permissions_repo: PermissionRepository
    attendance_repo: AttendanceRepository
    grades_repo: GradeRepository
    staff_repo: StaffAccountRepository

    guard: AuthorizationGuard
    identity_resolver: IdentityResolver
    permission_service: PermissionService
    roster_service: RosterService
    attendance_service: AttendanceService
    grade_service: GradeService
    import_service: BatchImportService
    report_service: SummaryReportService


def _wire(
    *,
    students_repo: StudentRepository,
    permissions_repo: PermissionRepository,
    attendance_repo: AttendanceRepository,
    grades_repo: GradeRepository,
    staff_repo: StaffAccountRepository,
    strict_roster_lookup: bool,
    max_workers: int,
    bands: BandThresholds,
    policy: CommitPolicy,
    clock: Callable[[], datetime],
) -> Container:
    guard = AuthorizationGuard(permissions_repo, students_repo)
    roster_service = RosterService(students_repo, guard)
    attendance_service = AttendanceService(attendance_repo, students_repo, guard, clock=clock)
    grade_service = GradeService(grades_repo, students_repo, guard, clock=clock)

    return Container(
        students_repo=students_repo,
        permissions_repo=permissions_repo,
        attendance_repo=attendance_repo,
        grades_repo=grades_repo,
        staff_repo=staff_repo,
        guard=guard,
        identity_resolver=IdentityResolver(
            students_repo, permissions_repo, staff_repo, strict_roster_lookup=strict_roster_lookup
        ),
        permission_service=PermissionService(permissions_repo, clock=clock, max_workers=max_workers),
        roster_service=roster_service,
        attendance_service=attendance_service,
        grade_service=grade_service,
        import_service=BatchImportService(
            ImportWriters(attendance=attendance_service, grades=grade_service, roster=roster_service),
            policy=policy,
            max_workers=max_workers,
        ),
        report_service=SummaryReportService(students_repo, attendance_repo, grades_repo, guard, bands=bands),
    )


def build_container(settings: Any) -> Container:
    """Build repositories and services from a settings module (see config/)."""
    backend = str(getattr(settings, "STORE_BACKEND", "mysql")).lower()
    options = dict(
        strict_roster_lookup=bool(getattr(settings, "STRICT_ROSTER_LOOKUP", True)),
        max_workers=int(getattr(settings, "BATCH_MAX_WORKERS", DEFAULT_BATCH_MAX_WORKERS)),
        bands=BandThresholds.from_sequence(getattr(settings, "ATTENDANCE_BANDS", DEFAULT_BAND_THRESHOLDS)),
    )

    if backend == "memory":
        return build_memory_container(**options)
    if backend != "mysql":
        raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")

    conn = DatabaseConnection(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
    return _wire(
        students_repo=MySQLStudentRepository(conn),
        permissions_repo=MySQLPermissionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        grades_repo=MySQLGradeRepository(conn),
        staff_repo=MySQLStaffAccountRepository(conn),
        policy=AllOrNothingPolicy(),
        clock=now_local,
        **options,
    )


def build_memory_container(
    *,
    db: Optional[MemoryDatabase] = None,
    strict_roster_lookup: bool = True,
    max_workers: int = DEFAULT_BATCH_MAX_WORKERS,
    bands: Optional[BandThresholds] = None,
    policy: Optional[CommitPolicy] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """In-memory wiring (tests, demos). Pass ``db`` to share one store between containers."""
    db = db or MemoryDatabase()
    return _wire(
        students_repo=MemoryStudentRepository(db),
        permissions_repo=MemoryPermissionRepository(db),
        attendance_repo=MemoryAttendanceRepository(db),
        grades_repo=MemoryGradeRepository(db),
        staff_repo=MemoryStaffAccountRepository(db),
        strict_roster_lookup=strict_roster_lookup,
        max_workers=max_workers,
        bands=bands or BandThresholds(),
        policy=policy or AllOrNothingPolicy(),
        clock=clock,
    )
