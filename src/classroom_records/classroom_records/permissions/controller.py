from __future__ import annotations

from flask import Flask, request

from ..authorization.model import Target
from ..common.http import current_subject, fail, json_body, login_required, ok, respond
from ..common.validators import require_bool
from ..container import Container
from ..core.enums import Action, Capability, Role
from ..core.exceptions import PermissionDenied, ValidationError
from .model import PermissionGrant


def grant_from_body(account: str, body: dict) -> PermissionGrant:
    """Role and every flag must be sent together."""
    try:
        role = Role(str(body.get("role") or ""))
    except ValueError:
        raise ValidationError("Vai trò không hợp lệ")
    for key in ("canMarkAttendance", "canEditGrades", "isGroupLeader"):
        if key not in body:
            raise ValidationError(f"Thiếu trường {key}")
    return PermissionGrant(
        student_account=account,
        can_mark_attendance=require_bool(body["canMarkAttendance"], "canMarkAttendance"),
        can_edit_grades=require_bool(body["canEditGrades"], "canEditGrades"),
        is_group_leader=require_bool(body["isGroupLeader"], "isGroupLeader"),
        role=role,
    )


def register(app: Flask, container: Container) -> None:
    permissions = container.permission_service
    guard = container.guard

    def _require_admin(account=None):
        guard.require(current_subject(), Action.MANAGE_PERMISSIONS, Target(account))

    @app.route("/api/permissions", methods=["GET"], endpoint="api_permissions")
    @login_required
    def list_permissions():
        _require_admin()
        capability = request.args.get("capability")
        if capability:
            try:
                items = permissions.list_by_capability(Capability(capability))
            except ValueError:
                return fail(ValidationError(f"Quyền không hợp lệ: {capability}"))
        else:
            items = permissions.list_all()
        return ok([p.to_dict() for p in items])

    @app.route("/api/permissions/<account>", methods=["GET"], endpoint="api_permission_detail")
    @login_required
    def get_permission(account: str):
        subject = current_subject()
        if subject.account != account:
            decision = guard.authorize(subject, Action.MANAGE_PERMISSIONS, Target(account))
            if not decision.allowed:
                return fail(PermissionDenied(decision.reason))
        return ok(permissions.effective(account).to_dict())

    @app.route("/api/permissions/<account>", methods=["PUT"], endpoint="api_permission_set")
    @login_required
    def set_permission(account: str):
        _require_admin(account)
        grant = grant_from_body(account, json_body())
        result = permissions.set(grant, created_by=current_subject().account)
        return respond(result, serialize=lambda p: p.to_dict())

    @app.route("/api/permissions/<account>", methods=["DELETE"], endpoint="api_permission_delete")
    @login_required
    def delete_permission(account: str):
        _require_admin(account)
        return respond(permissions.delete(account))
