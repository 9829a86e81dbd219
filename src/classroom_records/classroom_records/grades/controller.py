from __future__ import annotations

from flask import Flask

from ..common.http import current_subject, json_body, login_required, ok, respond
from ..container import Container


def register(app: Flask, container: Container) -> None:
    grades = container.grade_service

    @app.route("/api/grades", methods=["GET"], endpoint="api_grades")
    @login_required
    def list_grades():
        return ok([g.to_dict() for g in grades.list_grades(current_subject())])

    @app.route("/api/grades/<account>", methods=["GET"], endpoint="api_grade_detail")
    @login_required
    def get_grades(account: str):
        return respond(grades.get_grades(current_subject(), account), serialize=lambda g: g.to_dict())

    @app.route("/api/grades/<account>", methods=["PUT"], endpoint="api_grade_replace")
    @login_required
    def replace_grades(account: str):
        result = grades.update_full_grade(current_subject(), account, json_body())
        return respond(result, serialize=lambda g: g.to_dict())

    @app.route("/api/grades/<account>/<category>", methods=["PUT"], endpoint="api_grade_category")
    @login_required
    def update_category(account: str, category: str):
        value = json_body().get("value")
        result = grades.upsert_grade_category(current_subject(), account, category, value)
        return respond(result, serialize=lambda g: g.to_dict())

    @app.route("/api/grades/<account>", methods=["DELETE"], endpoint="api_grade_delete")
    @login_required
    def delete_grades(account: str):
        return respond(grades.delete_grade(current_subject(), account))
