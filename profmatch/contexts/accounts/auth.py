"""
Mock authentication service.

Accounts live in the key-value store under USERS_KEY (a JSON object keyed by
email); the logged-in user lives under SESSION_KEY. Passwords are stored as
salted PBKDF2 hashes.
"""

import hashlib
import hmac
import json
import secrets
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from profmatch.contexts.accounts.exceptions import (
    AccountExistsError,
    InvalidCredentialsError,
    MissingFieldError,
    WeakPasswordError,
)
from profmatch.contexts.accounts.logger import _log_info, _log_success, _log_warning
from profmatch.contexts.accounts.storage import KeyValueStore
from profmatch.utils.timestamp import epoch_millis, now_exact

SESSION_KEY = "profmatch_user"
USERS_KEY = "profmatch_users"

MIN_PASSWORD_LENGTH = 6
HASH_ITERATIONS = 200_000


@dataclass(frozen=True)
class User:
    """
    Registered user.

    Attributes:
        id: Identifier of the form user_<epoch ms>
        email: Login email (unique)
        name: Display name
        created_at: ISO 8601 registration time
    """

    id: str
    email: str
    name: str
    created_at: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=data["id"],
            email=data["email"],
            name=data["name"],
            created_at=data["created_at"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), HASH_ITERATIONS
    )
    return digest.hex()


class AuthService:
    """
    Register, log in and log out against a key-value store.

    Every failure raises an AuthenticationError subclass whose message can be
    shown to the user directly.
    """

    def __init__(self, store: KeyValueStore, simulated_delay: float = 0.0):
        """
        Initialize the service and restore any stored session.

        Args:
            store: Backing key-value store
            simulated_delay: Seconds to wait before each login/register,
                             imitating a network round trip
        """
        self.store = store
        self.simulated_delay = simulated_delay
        self.current_user: Optional[User] = None
        self.is_loading = True
        self._restore_session()

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def _restore_session(self) -> None:
        stored = self.store.get_item(SESSION_KEY)
        if stored:
            try:
                self.current_user = User.from_dict(json.loads(stored))
            except (ValueError, KeyError, TypeError):
                _log_warning("Discarding unreadable session")
                self.store.remove_item(SESSION_KEY)
                self.current_user = None
        self.is_loading = False

    def _load_users(self) -> Dict[str, Dict[str, Any]]:
        stored = self.store.get_item(USERS_KEY)
        return json.loads(stored) if stored else {}

    def _start_session(self, user: User) -> None:
        self.store.set_item(SESSION_KEY, json.dumps(user.to_dict()))
        self.current_user = user

    def _wait(self) -> None:
        if self.simulated_delay > 0:
            time.sleep(self.simulated_delay)

    def register(self, name: str, email: str, password: str) -> User:
        """
        Create an account and log it in.

        Args:
            name: Display name
            email: Login email
            password: Plain-text password (at least 6 characters)

        Returns:
            The new User

        Raises:
            MissingFieldError: If any field is empty
            WeakPasswordError: If the password is too short
            AccountExistsError: If the email is already registered
        """
        self._wait()

        if not name or not email or not password:
            raise MissingFieldError("All fields are required")

        if len(password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        users = self._load_users()
        if email in users:
            raise AccountExistsError("An account with this email already exists")

        user = User(
            id=f"user_{epoch_millis()}",
            email=email,
            name=name,
            created_at=now_exact(),
        )
        salt = secrets.token_hex(16)
        users[email] = {
            "user": user.to_dict(),
            "salt": salt,
            "password_hash": hash_password(password, salt),
        }
        self.store.set_item(USERS_KEY, json.dumps(users))
        self._start_session(user)

        _log_success(f"Registered {email} as {user.id}")
        return user

    def login(self, email: str, password: str) -> User:
        """
        Log in with an existing account.

        Raises:
            MissingFieldError: If email or password is empty
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        self._wait()

        if not email or not password:
            raise MissingFieldError("Email and password are required")

        record = self._load_users().get(email)
        if record is None or not hmac.compare_digest(
            record["password_hash"], hash_password(password, record["salt"])
        ):
            _log_warning(f"Failed login for {email}")
            raise InvalidCredentialsError("Invalid email or password")

        user = User.from_dict(record["user"])
        self._start_session(user)
        _log_info(f"Logged in {email}")
        return user

    def logout(self) -> None:
        self.store.remove_item(SESSION_KEY)
        if self.current_user is not None:
            _log_info(f"Logged out {self.current_user.email}")
        self.current_user = None
