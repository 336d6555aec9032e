from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Optional, Union

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.ids import new_id
from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthError, RecordNotFoundError, ValidationError
from ..store.record_store import RecordStore
from ..students.model import Student
from .model import User

INVALID_CREDENTIALS = "Invalid email or password."


@dataclass(frozen=True)
class SignupDetails:
    name: str
    email: str
    password: str
    role: Union[Role, str]
    registered_photo_url: str = ""
    child_email: Optional[str] = None
    mobile: Optional[str] = None


class AuthService:
    """Use cases: authenticate (login) and register (signup)."""

    def __init__(self, store: RecordStore, *, rng: Optional[random.Random] = None):
        self._store = store
        self._rng = rng or random.Random()

    def authenticate(self, email: str, password: str) -> User:
        user = self._store.find_user_by_email((email or "").strip())
        if not user:
            raise AuthError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except Exception:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthError(INVALID_CREDENTIALS)
        return user

    def find_by_provider(self, identifier: str, kind: str) -> User:
        """Passwordless demo login by email or mobile number."""
        if kind == "email":
            user = self._store.find_user_by_email(identifier)
        elif kind == "mobile":
            user = next((u for u in self._store.users if u.mobile and u.mobile == identifier), None)
        else:
            raise AuthError(f"Unsupported login provider: {kind}")
        if not user:
            raise AuthError("User not found.")
        return user

    def first_with_role(self, role: Union[Role, str]) -> User:
        role = _coerce_role(role)
        user = self._store.find_first_user_with_role(role)
        if not user:
            raise AuthError(f"No demo user found for role: {role.value}")
        return user

    def register(self, details: SignupDetails) -> User:
        name = require_non_empty(details.name, "Name")
        email = require_non_empty(details.email, "Email")
        require_min_length(details.password, "Password", 6)
        role = _coerce_role(details.role)

        if self._store.find_user_by_email(email):
            raise AuthError("An account with this email already exists.")

        child_id = None
        if role == Role.PARENT:
            child_email = (details.child_email or "").strip()
            if not child_email:
                raise AuthError("Please provide your child's email to create a parent account.")
            child = self._store.find_user_by_email(child_email)
            if not child or child.role != Role.STUDENT:
                raise AuthError(f"No student account found with the email: {child_email}. Please verify the email.")
            child_id = child.id

        user = User(
            id=new_id("user"),
            name=name,
            email=email,
            role=role,
            password_hash=generate_password_hash(details.password),
            registered_photo_url=details.registered_photo_url or "",
            mobile=details.mobile,
            child_id=child_id,
            enable_scan_on_login=True,
        )

        if role == Role.STUDENT:
            template = self._store.seed.student_template
            self._store.put_student(
                Student(
                    id=user.id,
                    name=user.name,
                    roll_number=f"S{self._rng.randint(100, 999)}",
                    department=template.department,
                )
            )

        self._store.put_user(user)
        return user


class UserService:
    """Use case: profile updates."""

    def __init__(self, store: RecordStore):
        self._store = store

    def update_user(self, user: User) -> User:
        existing = next((u for u in self._store.users if u.id == user.id), None)
        if not existing:
            raise RecordNotFoundError(f"User {user.id!r} does not exist")

        clash = self._store.find_user_by_email(user.email)
        if clash and clash.id != user.id:
            raise ValidationError("An account with this email already exists.")

        # Identity fields are not editable from a profile screen.
        updated = replace(user, role=existing.role, password_hash=existing.password_hash)
        self._store.put_user(updated)

        student = self._store.find_student(user.id)
        if student and student.name != updated.name:
            self._store.put_student(replace(student, name=updated.name))
        return updated


def _coerce_role(role: Union[Role, str]) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise AuthError(f"Unknown role: {role}")
