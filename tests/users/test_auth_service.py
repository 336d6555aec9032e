from __future__ import annotations

import random
from dataclasses import replace

import pytest

from school_portal.core.enums import Role
from school_portal.core.exceptions import AuthError, RecordNotFoundError, ValidationError
from school_portal.users.service import AuthService, SignupDetails, UserService


@pytest.fixture
def auth(store):
    return AuthService(store, rng=random.Random(7))


def _details(**kwargs):
    base = dict(name="New Person", email="new@school.com", password="secret1", role=Role.STUDENT)
    base.update(kwargs)
    return SignupDetails(**base)


def test_authenticate_with_demo_credentials(auth):
    user = auth.authenticate("teacher@school.com", "password123")
    assert user.role == Role.TEACHER


@pytest.mark.parametrize("email,password", [("teacher@school.com", "wrong"), ("nobody@school.com", "password123")])
def test_authenticate_rejects_bad_credentials(auth, email, password):
    with pytest.raises(AuthError, match="Invalid email or password."):
        auth.authenticate(email, password)


def test_corrupted_password_hash_fails_closed(auth, store):
    user = store.find_user_by_email("teacher@school.com")
    store.put_user(replace(user, password_hash="CHANGE_ME"))

    with pytest.raises(AuthError):
        auth.authenticate("teacher@school.com", "CHANGE_ME")


def test_student_signup_creates_companion_student(auth, store):
    user = auth.register(_details())

    student = store.get_student(user.id)
    assert student.attendance == ()
    assert student.is_access_blocked is False
    assert student.department == store.seed.student_template.department
    assert 100 <= int(student.roll_number[1:]) <= 999
    assert user.enable_scan_on_login is True
    assert user.password_hash != "secret1"


def test_duplicate_email_is_rejected(auth, store):
    count = len(store.users)
    with pytest.raises(AuthError, match="already exists"):
        auth.register(_details(email="student@school.com"))
    assert len(store.users) == count


def test_parent_signup_links_child(auth):
    parent = auth.register(_details(role=Role.PARENT, email="mum@home.com", child_email="student@school.com"))
    assert parent.child_id == "user-student-1"


@pytest.mark.parametrize("child_email", [None, "nobody@school.com", "teacher@school.com"])
def test_parent_signup_without_resolvable_child_fails(auth, store, child_email):
    count = len(store.users)

    with pytest.raises(AuthError):
        auth.register(_details(role=Role.PARENT, email="mum@home.com", child_email=child_email))

    assert len(store.users) == count
    assert store.find_user_by_email("mum@home.com") is None


def test_parent_and_teacher_signup_create_no_student(auth, store):
    count = len(store.students)
    auth.register(_details(role=Role.TEACHER, email="t2@school.com"))
    assert len(store.students) == count


def test_unknown_role_is_an_auth_error(auth):
    with pytest.raises(AuthError, match="Unknown role"):
        auth.register(_details(role="janitor"))


def test_short_password_is_a_validation_error(auth):
    with pytest.raises(ValidationError):
        auth.register(_details(password="123"))


def test_provider_login_by_mobile_and_email(auth):
    assert auth.find_by_provider("5550000002", "mobile").email == "student@school.com"
    assert auth.find_by_provider("parent@school.com", "email").role == Role.PARENT
    with pytest.raises(AuthError, match="User not found."):
        auth.find_by_provider("000", "mobile")


def test_first_with_role(auth):
    assert auth.first_with_role("parent").role == Role.PARENT


def test_update_user_keeps_role_and_password(store):
    svc = UserService(store)
    student = store.find_user_by_email("student@school.com")

    updated = svc.update_user(replace(student, name="Dr. Ellie", role=Role.TEACHER, password_hash="x"))

    assert updated.role == Role.STUDENT
    assert updated.password_hash == student.password_hash
    assert store.get_student(student.id).name == "Dr. Ellie"


def test_update_user_rejects_taken_email(store):
    student = store.find_user_by_email("student@school.com")
    with pytest.raises(ValidationError):
        UserService(store).update_user(replace(student, email="teacher@school.com"))


def test_update_unknown_user(store):
    student = store.find_user_by_email("student@school.com")
    with pytest.raises(RecordNotFoundError):
        UserService(store).update_user(replace(student, id="ghost"))
