"""Current-user session: login, signup, logout and restore.

A student-role session start is the only place the attendance access rule is
evaluated, so it runs once per login and never in response to later writes.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Union

from ..core.constants import DEFAULT_IDLE_PROMPT_SECONDS, DEFAULT_IDLE_TIMEOUT_SECONDS
from ..core.enums import Role
from ..store.record_store import RecordStore
from ..students.service import StudentService
from ..users.model import User
from ..users.service import AuthService, SignupDetails, UserService
from .idle_timer import IdleTimer

logger = logging.getLogger(__name__)


class SessionController:
    def __init__(
        self,
        store: RecordStore,
        auth: AuthService,
        users: UserService,
        students: StudentService,
        *,
        idle_seconds: float = DEFAULT_IDLE_TIMEOUT_SECONDS,
        prompt_seconds: float = DEFAULT_IDLE_PROMPT_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._store = store
        self._auth = auth
        self._users = users
        self._students = students
        self.idle_prompt_visible = False
        self.idle_timer = IdleTimer(
            on_idle=self.logout,
            on_prompt=self._show_idle_prompt,
            idle_seconds=idle_seconds,
            prompt_seconds=prompt_seconds,
            clock=clock,
        )

    @property
    def current_user(self) -> Optional[User]:
        return self._store.current_user

    def login(self, email: str, password: str) -> User:
        return self._begin(self._auth.authenticate(email, password))

    def login_with_provider(self, identifier: str, kind: str) -> User:
        return self._begin(self._auth.find_by_provider(identifier, kind))

    def login_as_role(self, role: Union[Role, str]) -> User:
        return self._begin(self._auth.first_with_role(role))

    def signup(self, details: SignupDetails) -> User:
        return self._begin(self._auth.register(details))

    def restore(self) -> Optional[User]:
        """Resume a persisted session, treating it as a fresh login."""
        user = self._store.current_user
        if user is None:
            return None
        # Pick up changes made to the user since the snapshot was stored.
        latest = next((u for u in self._store.users if u.id == user.id), None)
        if latest is None:
            logger.warning("Persisted session user %s no longer exists, logging out", user.id)
            self.logout()
            return None
        return self._begin(latest)

    def logout(self) -> None:
        self.idle_prompt_visible = False
        self.idle_timer.disable()
        self._store.set_current_user(None)

    def stay_logged_in(self) -> None:
        self.idle_prompt_visible = False
        self.idle_timer.reset()

    def update_user(self, user: User) -> User:
        updated = self._users.update_user(user)
        current = self._store.current_user
        if current and current.id == updated.id:
            self._store.set_current_user(updated)
        return updated

    def _begin(self, user: User) -> User:
        self._store.set_current_user(user)
        self.idle_prompt_visible = False
        self.idle_timer.enable()
        if user.role == Role.STUDENT:
            self._students.evaluate_on_login(user.id)
        return user

    def _show_idle_prompt(self) -> None:
        self.idle_prompt_visible = True
