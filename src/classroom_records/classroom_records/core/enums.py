from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Vai trò hiển thị (phân loại). Cờ quyền mới là thứ được kiểm tra."""

    STUDENT = "student"
    GROUP_LEADER = "group_leader"
    TEACHER = "teacher"


class Action(str, Enum):
    """Thao tác được kiểm tra bởi AuthorizationGuard."""

    MARK_ATTENDANCE = "mark_attendance"
    UPDATE_PARTICIPATION = "update_participation"
    EDIT_GRADE = "edit_grade"
    READ = "read"
    MANAGE_PERMISSIONS = "manage_permissions"
    MANAGE_ROSTER = "manage_roster"


class Capability(str, Enum):
    """Capability flags stored on a Permission record."""

    CAN_MARK_ATTENDANCE = "can_mark_attendance"
    CAN_EDIT_GRADES = "can_edit_grades"
    IS_GROUP_LEADER = "is_group_leader"


class GradeCategory(str, Enum):
    """Cột điểm thành phần (mỗi cột trong khoảng 0-10)."""

    MIDTERM = "midterm"
    FINAL = "final"
    ASSIGNMENT1 = "assignment1"
    ASSIGNMENT2 = "assignment2"
    ASSIGNMENT3 = "assignment3"
    PROJECT = "project"
    PARTICIPATION = "participation"
