from __future__ import annotations

from flask import Flask, request

from ..common.http import current_subject, json_body, login_required, ok, respond
from ..container import Container
from .model import Student, StudentFilter


def _student_dict(s: Student) -> dict:
    return {"account": s.account, "name": s.name, "surname": s.surname, "group": s.group, "fullName": s.full_name}


def register(app: Flask, container: Container) -> None:
    roster = container.roster_service

    @app.route("/api/students", methods=["GET"], endpoint="api_students")
    @login_required
    def list_students():
        students = roster.list_students(
            StudentFilter(group=request.args.get("group") or None, search_term=request.args.get("q") or None)
        )
        return ok([_student_dict(s) for s in students])

    @app.route("/api/students/groups", methods=["GET"], endpoint="api_student_groups")
    @login_required
    def list_groups():
        return ok(list(roster.list_groups()))

    @app.route("/api/students", methods=["POST"], endpoint="api_add_student")
    @login_required
    def add_student():
        body = json_body()
        student = Student(
            account=str(body.get("account") or ""),
            name=body.get("name") or "",
            surname=body.get("surname") or "",
            group=body.get("group") or "",
        )
        return respond(roster.add_student(current_subject(), student), serialize=_student_dict, status=201)

    @app.route("/api/students/<account>/group", methods=["PUT"], endpoint="api_reassign_group")
    @login_required
    def reassign_group(account: str):
        group = json_body().get("group") or ""
        return respond(roster.reassign_group(current_subject(), account, group), serialize=_student_dict)

    @app.route("/api/students/<account>", methods=["DELETE"], endpoint="api_delete_student")
    @login_required
    def delete_student(account: str):
        return respond(roster.delete_student(current_subject(), account))
