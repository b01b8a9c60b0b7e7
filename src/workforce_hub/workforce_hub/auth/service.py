from __future__ import annotations

import logging
import secrets
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..access.resolver import Capabilities
from ..common.validators import normalize_email
from ..common.versioning import bump
from ..core.constants import OTP_MAX, OTP_MIN
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, InvalidCredentialsError, NotFoundError, ValidationError
from ..organizations.service import AuditLog
from ..users.model import User
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)

# Checked when no account matches so both failure paths cost one hash verification.
_DUMMY_HASH = generate_password_hash("not-a-real-password")


def generate_otp() -> str:
    """Six digits drawn uniformly from [100000, 999999]."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    name: str
    role: Role
    org_ids: tuple[str, ...]
    active_org_id: Optional[str]
    landing: str


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful credential check.

    ``session`` is None while a password rotation is pending.
    """

    user: User
    rotation_required: bool
    session: Optional[SessionUser] = None


@dataclass(frozen=True)
class OneTimeCredential:
    """Generated code, shown to the operator once and never stored in clear."""

    user_id: str
    user_name: str
    otp: str


def session_for(user: User) -> SessionUser:
    if user.role == Role.SUPER_USER:
        return SessionUser(user.id, user.name, user.role, user.org_ids, None, "super")
    active = user.org_ids[0] if user.org_ids else None
    return SessionUser(user.id, user.name, user.role, user.org_ids, active, "dashboard")


class AuthService:
    """Use case: authenticate, issue one-time credentials, force rotation."""

    def __init__(
        self,
        users: UserRepository,
        *,
        audit: AuditLog | None = None,
        lock: threading.RLock | None = None,
        otp_generator: Callable[[], str] | None = None,
    ):
        self._users = users
        self._audit = audit
        self._lock = lock or threading.RLock()
        self._otp = otp_generator or generate_otp

    @staticmethod
    def _password_matches(password_hash: str, password: str) -> bool:
        try:
            return check_password_hash(password_hash, password)
        except (TypeError, ValueError):
            # e.g. placeholder or corrupted hashes
            return False

    def authenticate(self, email: str, password: str) -> LoginResult:
        wanted = normalize_email(email)
        candidates = self._users.list_by(lambda u: normalize_email(u.email) == wanted) if wanted else []

        user = next((u for u in candidates if self._password_matches(u.password_hash, password or "")), None)
        if not candidates:
            self._password_matches(_DUMMY_HASH, password or "")
        if not user:
            logger.info("Login failed")
            raise InvalidCredentialsError()

        if user.must_change_password:
            logger.info("Login for %s held until password rotation", user.id)
            return LoginResult(user=user, rotation_required=True)

        logger.info("Login succeeded for %s", user.id)
        return LoginResult(user=user, rotation_required=False, session=session_for(user))

    def issue_one_time_credential(self, user_id: str) -> OneTimeCredential:
        otp = self._otp()
        with self._lock:
            user = self._users.get_by_id(user_id)
            if not user:
                raise NotFoundError(f"User {user_id} not found")
            user = bump(user, password_hash=generate_password_hash(otp), must_change_password=True)
            self._users.upsert(user)
        logger.info("One-time credential issued for %s", user.id)
        return OneTimeCredential(user_id=user.id, user_name=user.name, otp=otp)

    def reset_security_key(self, actor: Capabilities, user_id: str) -> OneTimeCredential:
        target = self._users.get_by_id(user_id)
        if not target:
            raise NotFoundError(f"User {user_id} not found")
        if not actor.can_reset_credentials(target):
            raise AuthorizationError("Not allowed to reset this user's security key")

        credential = self.issue_one_time_credential(user_id)
        if self._audit and actor.active_org_id:
            self._audit.record(actor.active_org_id, "AUTH", f"Security key reset for {target.name}")
        return credential

    def finalize_rotation(self, user_id: str, new_password: str) -> SessionUser:
        """Set the user's own password and complete the held login."""
        if not new_password or not new_password.strip():
            raise ValidationError("New password is required")
        password = new_password
        with self._lock:
            user = self._users.get_by_id(user_id)
            if not user:
                raise NotFoundError(f"User {user_id} not found")
            if not user.must_change_password:
                raise ValidationError("No password rotation is pending for this account")
            user = bump(user, password_hash=generate_password_hash(password), must_change_password=False)
            self._users.upsert(user)
        logger.info("Password rotated for %s", user.id)
        return session_for(user)
