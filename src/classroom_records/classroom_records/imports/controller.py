from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_subject, fail, json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .schemas import AttendanceRowSchema, GradeRowSchema, ParticipationRowSchema, RosterRowSchema, RowSchema


def _rows() -> list:
    rows = json_body().get("rows")
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise ValidationError("Dữ liệu nhập phải là danh sách các dòng")
    return rows


def register(app: Flask, container: Container) -> None:
    imports = container.import_service

    def _process(schema: RowSchema):
        try:
            rows = _rows()
        except ValidationError as e:
            return fail(e)
        result = imports.process(rows, schema, current_subject())
        return jsonify(result.to_dict()), 200 if result.success else 400

    @app.route("/api/imports/grades/<category>", methods=["POST"], endpoint="api_import_grades")
    @login_required
    def import_grades(category: str):
        return _process(GradeRowSchema(category))

    @app.route("/api/imports/attendance/<session_date>", methods=["POST"], endpoint="api_import_attendance")
    @login_required
    def import_attendance(session_date: str):
        return _process(AttendanceRowSchema(session_date))

    @app.route("/api/imports/participation/<session_date>", methods=["POST"], endpoint="api_import_participation")
    @login_required
    def import_participation(session_date: str):
        return _process(ParticipationRowSchema(session_date))

    @app.route("/api/imports/roster", methods=["POST"], endpoint="api_import_roster")
    @login_required
    def import_roster():
        return _process(RosterRowSchema())
