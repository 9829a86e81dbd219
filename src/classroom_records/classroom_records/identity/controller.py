from __future__ import annotations

import logging

from flask import Flask, session

from ..common.http import SESSION_KEY, current_subject, fail, json_body, ok
from ..container import Container
from ..core.exceptions import ValidationError
from .model import AccountCredential, Credential, FederatedAssertion, PasswordCredential

logger = logging.getLogger(__name__)


def credential_from_body(body: dict) -> Credential:
    """``{account}`` | ``{email, password}`` | ``{assertion: {subjectId, email, emailVerified, displayName}}``."""
    if body.get("assertion"):
        claims = body["assertion"]
        return FederatedAssertion(
            subject_id=str(claims.get("subjectId") or ""),
            email=claims.get("email"),
            email_verified=bool(claims.get("emailVerified", False)),
            display_name=claims.get("displayName"),
        )
    if body.get("email"):
        return PasswordCredential(email=str(body["email"]), password=str(body.get("password") or ""))
    if body.get("account") is not None:
        return AccountCredential(account=str(body["account"]))
    raise ValidationError("Vui lòng nhập MSSV hoặc email")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def login():
        try:
            credential = credential_from_body(json_body())
        except ValidationError as e:
            return fail(e)

        result = container.identity_resolver.resolve(credential)
        if not result.ok:
            logger.info("Login failed: %s", result.error)
            return fail(result.error)

        subject = result.value
        session.clear()
        session[SESSION_KEY] = subject.to_session()
        logger.info("Login %s as %s", subject.account, subject.role.value)
        return ok(subject.to_session(), message=f"Xin chào {subject.display_name}")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        session.clear()
        return ok(message="Đã đăng xuất")

    @app.route("/api/auth/me", methods=["GET"], endpoint="api_me")
    def me():
        subject = current_subject()
        return ok(subject.to_session() if subject.authenticated else None)
