from __future__ import annotations

import pytest

from src.classroom_records.classroom_records.authorization.model import Target
from src.classroom_records.classroom_records.core.enums import Action, Role
from src.classroom_records.classroom_records.core.exceptions import PermissionDenied
from src.classroom_records.classroom_records.identity.model import Subject
from src.classroom_records.classroom_records.permissions.model import PermissionGrant


def test_group_leader_marks_own_group_only(container, leader):
    guard = container.guard

    assert guard.authorize(leader, Action.MARK_ATTENDANCE, Target("1002")).allowed
    denied = guard.authorize(leader, Action.MARK_ATTENDANCE, Target("2001"))
    assert not denied.allowed
    assert "A" in denied.reason


def test_group_leader_without_grade_capability_cannot_edit(container, leader):
    assert not container.guard.authorize(leader, Action.EDIT_GRADE, Target("1002")).allowed


def test_group_leader_with_grade_capability_edits_own_group(container, leader):
    container.permission_service.set(
        PermissionGrant("1001", can_mark_attendance=True, can_edit_grades=True, is_group_leader=True, role=Role.GROUP_LEADER)
    ).unwrap()

    assert container.guard.authorize(leader, Action.EDIT_GRADE, Target("1003")).allowed
    assert not container.guard.authorize(leader, Action.EDIT_GRADE, Target("2001")).allowed


def test_student_reads_only_self(container, student):
    guard = container.guard

    assert guard.authorize(student, Action.READ, Target("1002")).allowed
    assert not guard.authorize(student, Action.READ, Target("1003")).allowed
    assert not guard.authorize(student, Action.MARK_ATTENDANCE, Target("1002")).allowed
    assert not guard.authorize(student, Action.EDIT_GRADE, Target("1002")).allowed


def test_teacher_acts_on_anyone(container, teacher):
    guard = container.guard
    for action in (Action.MARK_ATTENDANCE, Action.UPDATE_PARTICIPATION, Action.EDIT_GRADE, Action.READ):
        assert guard.authorize(teacher, action, Target("2001")).allowed


def test_teacher_flags_still_gate_writes(container):
    container.permission_service.set(
        PermissionGrant("T02", can_mark_attendance=True, can_edit_grades=False, is_group_leader=False, role=Role.TEACHER)
    ).unwrap()
    t2 = Subject(account="T02", role=Role.TEACHER)

    assert container.guard.authorize(t2, Action.MARK_ATTENDANCE, Target("1002")).allowed
    assert not container.guard.authorize(t2, Action.EDIT_GRADE, Target("1002")).allowed


def test_claimed_teacher_role_without_permission_is_default_deny(container):
    claimed = Subject(account="9999", role=Role.TEACHER)

    assert not container.guard.authorize(claimed, Action.MARK_ATTENDANCE, Target("1002")).allowed
    assert not container.guard.authorize(claimed, Action.MANAGE_PERMISSIONS).allowed


def test_unauthenticated_subject(container):
    anonymous = Subject.anonymous()

    assert container.guard.authorize(anonymous, Action.READ).allowed
    assert not container.guard.authorize(anonymous, Action.READ, Target("1002")).allowed
    assert not container.guard.authorize(anonymous, Action.MARK_ATTENDANCE, Target("1002")).allowed


def test_missing_target_is_denied(container, teacher):
    assert not container.guard.authorize(teacher, Action.MARK_ATTENDANCE).allowed


def test_group_reassignment_applies_on_next_decision(container, teacher, leader):
    guard = container.guard
    assert not guard.authorize(leader, Action.MARK_ATTENDANCE, Target("2001")).allowed

    container.roster_service.reassign_group(teacher, "2001", "A").unwrap()

    assert guard.authorize(leader, Action.MARK_ATTENDANCE, Target("2001")).allowed


def test_revoked_leader_loses_access(container, leader):
    container.permission_service.revoke("1001").unwrap()

    assert not container.guard.authorize(leader, Action.MARK_ATTENDANCE, Target("1002")).allowed


def test_admin_actions_need_stored_teacher_role(container, teacher, leader):
    assert container.guard.authorize(teacher, Action.MANAGE_PERMISSIONS).allowed
    assert container.guard.authorize(teacher, Action.MANAGE_ROSTER).allowed
    assert not container.guard.authorize(leader, Action.MANAGE_ROSTER).allowed


def test_require_raises_permission_denied(container, student):
    with pytest.raises(PermissionDenied):
        container.guard.require(student, Action.MARK_ATTENDANCE, Target("1002"))


def test_read_scope_per_role(container, teacher, leader, student):
    guard = container.guard

    assert guard.read_scope(teacher).everyone
    leader_scope = guard.read_scope(leader)
    assert {a for a in ("1001", "1002", "1003", "2001") if leader_scope.includes(a)} == {"1001", "1002", "1003"}
    student_scope = guard.read_scope(student)
    assert student_scope.includes("1002")
    assert not student_scope.includes("1001")
    assert not guard.read_scope(Subject.anonymous()).includes("1002")
