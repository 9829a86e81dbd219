from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import format_date_key, parse_iso_date
from ..common.http import current_subject, json_body, login_required, ok, respond
from ..container import Container
from .model import AttendanceFilter


def _optional_date(name: str):
    raw = request.args.get(name)
    return parse_iso_date(raw) if raw else None


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance")
    @login_required
    def list_attendance():
        attendance_filter = AttendanceFilter(
            session_date=_optional_date("date"),
            student_account=request.args.get("account") or None,
            start_date=_optional_date("start"),
            end_date=_optional_date("end"),
        )
        records = attendance.list_records(current_subject(), attendance_filter)
        return ok([r.to_dict() for r in records])

    @app.route("/api/attendance/dates", methods=["GET"], endpoint="api_attendance_dates")
    @login_required
    def list_dates():
        return ok([format_date_key(d) for d in attendance.list_dates()])

    @app.route("/api/attendance/<session_date>/<account>", methods=["PUT"], endpoint="api_mark_attendance")
    @login_required
    def mark_attendance(session_date: str, account: str):
        body = json_body()
        result = attendance.upsert_attendance(current_subject(), account, session_date, body.get("isPresent"))
        return respond(result, serialize=lambda r: r.to_dict())

    @app.route(
        "/api/attendance/<session_date>/<account>/participation", methods=["PUT"], endpoint="api_participation"
    )
    @login_required
    def update_participation(session_date: str, account: str):
        body = json_body()
        result = attendance.upsert_participation(
            current_subject(), account, session_date, body.get("participationCount")
        )
        return respond(result, serialize=lambda r: r.to_dict())

    @app.route("/api/attendance/<session_date>/<account>", methods=["DELETE"], endpoint="api_delete_attendance")
    @login_required
    def delete_attendance(session_date: str, account: str):
        return respond(attendance.delete_attendance(current_subject(), account, session_date))
