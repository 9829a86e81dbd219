from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_subject, login_required, ok, respond
from ..container import Container


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/summary/students/<account>", methods=["GET"], endpoint="api_student_summary")
    @login_required
    def student_summary(account: str):
        return respond(reports.get_student_summary(current_subject(), account), serialize=lambda s: s.to_dict())

    @app.route("/api/summary/students", methods=["GET"], endpoint="api_student_summaries")
    @login_required
    def student_summaries():
        return ok([s.to_dict() for s in reports.list_student_summaries(current_subject())])

    @app.route("/api/summary/attendance", methods=["GET"], endpoint="api_attendance_stats")
    @login_required
    def attendance_stats():
        start = request.args.get("start")
        end = request.args.get("end")
        result = reports.get_attendance_stats(
            current_subject(),
            parse_iso_date(start) if start else None,
            parse_iso_date(end) if end else None,
        )
        return respond(result, serialize=lambda s: s.to_dict())

    @app.route("/api/summary/class", methods=["GET"], endpoint="api_class_summary")
    @login_required
    def class_summary():
        return respond(reports.get_class_summary(current_subject()), serialize=lambda s: s.to_dict())

    @app.route("/api/summary/grades/<category>", methods=["GET"], endpoint="api_grade_stats")
    @login_required
    def grade_stats(category: str):
        return respond(reports.get_grade_stats(current_subject(), category), serialize=lambda s: s.to_dict())
