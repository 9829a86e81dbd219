from __future__ import annotations

from werkzeug.security import generate_password_hash

from src.classroom_records.classroom_records.container import build_memory_container
from src.classroom_records.classroom_records.core.enums import Role
from src.classroom_records.classroom_records.core.exceptions import AuthenticationError, ValidationError
from src.classroom_records.classroom_records.database.memory import MemoryDatabase
from src.classroom_records.classroom_records.identity.model import (
    AccountCredential,
    FederatedAssertion,
    PasswordCredential,
    StaffAccount,
)
from src.classroom_records.classroom_records.identity.resolver import IdentityResolver


def _add_staff(container, *, email="lan@teacher.edu.vn", password="secret", active=True, password_hash=None):
    container.staff_repo.upsert(
        StaffAccount(
            account="T01",
            email=email,
            display_name="Cô Lan",
            password_hash=password_hash or generate_password_hash(password),
            is_active=active,
        )
    )


def test_roster_student_logs_in(container):
    subject = container.identity_resolver.resolve(AccountCredential("1002")).unwrap()

    assert subject.account == "1002"
    assert subject.role == Role.STUDENT
    assert subject.authenticated
    assert not subject.provisional
    assert subject.display_name == "Trần Bình"


def test_group_leader_upgrade_from_permission(container):
    subject = container.identity_resolver.resolve(AccountCredential("1001")).unwrap()
    assert subject.role == Role.GROUP_LEADER


def test_unknown_account_rejected_in_strict_mode(container):
    result = container.identity_resolver.resolve(AccountCredential("9999"))

    assert not result.ok
    assert isinstance(result.error, AuthenticationError)


def test_unknown_account_provisional_in_legacy_mode():
    db = MemoryDatabase()
    legacy = build_memory_container(db=db, strict_roster_lookup=False)

    subject = legacy.identity_resolver.resolve(AccountCredential("9999")).unwrap()

    assert subject.account == "9999"
    assert subject.role == Role.STUDENT
    assert subject.provisional
    assert subject.authenticated


def test_blank_account_is_validation_error(container):
    result = container.identity_resolver.resolve(AccountCredential("  "))
    assert isinstance(result.error, ValidationError)


def test_staff_password_login(container):
    _add_staff(container)

    subject = container.identity_resolver.resolve(PasswordCredential("Lan@Teacher.edu.vn", "secret")).unwrap()

    assert subject.account == "T01"
    assert subject.role == Role.TEACHER
    assert subject.email == "lan@teacher.edu.vn"


def test_staff_wrong_password(container):
    _add_staff(container)
    result = container.identity_resolver.resolve(PasswordCredential("lan@teacher.edu.vn", "nope"))
    assert isinstance(result.error, AuthenticationError)


def test_inactive_staff_rejected(container):
    _add_staff(container, active=False)
    result = container.identity_resolver.resolve(PasswordCredential("lan@teacher.edu.vn", "secret"))
    assert isinstance(result.error, AuthenticationError)


def test_placeholder_hash_rejected(container):
    _add_staff(container, password_hash="CHANGE_ME")
    result = container.identity_resolver.resolve(PasswordCredential("lan@teacher.edu.vn", "CHANGE_ME"))
    assert isinstance(result.error, AuthenticationError)


def test_password_login_disabled_without_staff_repo(container):
    resolver = IdentityResolver(container.students_repo, container.permissions_repo)
    result = resolver.resolve(PasswordCredential("lan@teacher.edu.vn", "secret"))
    assert isinstance(result.error, AuthenticationError)


def test_federated_requires_verified_email(container):
    result = container.identity_resolver.resolve(
        FederatedAssertion(subject_id="1001", email="1001@student.edu.vn", email_verified=False)
    )
    assert isinstance(result.error, AuthenticationError)


def test_federated_student_gets_roster_upgrade(container):
    subject = container.identity_resolver.resolve(
        FederatedAssertion(subject_id="1001", email="1001@student.edu.vn", email_verified=True)
    ).unwrap()

    assert subject.account == "1001"
    assert subject.role == Role.GROUP_LEADER


def test_federated_teacher_by_email_marker(container):
    subject = container.identity_resolver.resolve(
        FederatedAssertion(subject_id="T01", email="lan@admin.edu.vn", email_verified=True, display_name="Cô Lan")
    ).unwrap()

    assert subject.role == Role.TEACHER
    assert subject.display_name == "Cô Lan"


def test_federated_other_email_has_no_roster_account(container):
    subject = container.identity_resolver.resolve(
        FederatedAssertion(subject_id="g-123", email="someone@gmail.com", email_verified=True)
    ).unwrap()

    assert subject.role == Role.STUDENT
    assert subject.account is None


def test_subject_session_round_trip(container):
    subject = container.identity_resolver.resolve(AccountCredential("1001")).unwrap()
    restored = type(subject).from_session(subject.to_session())
    assert restored == subject
