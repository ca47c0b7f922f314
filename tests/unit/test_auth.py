"""Unit tests for the mock authentication service."""

import json
import re

import pytest

from profmatch.contexts.accounts import (
    AccountExistsError,
    AuthenticationError,
    AuthService,
    InvalidCredentialsError,
    MemoryStore,
    MissingFieldError,
    WeakPasswordError,
)
from profmatch.contexts.accounts.auth import SESSION_KEY, USERS_KEY


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def auth(store):
    return AuthService(store)


@pytest.mark.unit
class TestSession:
    """Tests for session restore on construction."""

    def test_starts_logged_out(self, auth):
        """Test a fresh store has no user and is not loading."""
        assert auth.current_user is None
        assert auth.is_authenticated is False
        assert auth.is_loading is False

    def test_restores_stored_session(self, store, auth):
        """Test a new service picks up the stored session."""
        user = auth.register("Ada", "ada@example.com", "secret1")

        restored = AuthService(store)

        assert restored.current_user == user
        assert restored.is_authenticated

    def test_corrupt_session_discarded(self, store):
        """Test an unreadable session is removed and the user logged out."""
        store.set_item(SESSION_KEY, "{broken")

        auth = AuthService(store)

        assert auth.current_user is None
        assert store.get_item(SESSION_KEY) is None


@pytest.mark.unit
class TestRegister:
    """Tests for AuthService.register."""

    def test_register_logs_in(self, store, auth):
        """Test registration creates the user and starts a session."""
        user = auth.register("Ada", "ada@example.com", "secret1")

        assert re.fullmatch(r"user_\d+", user.id)
        assert user.email == "ada@example.com"
        assert user.name == "Ada"
        assert auth.current_user == user
        assert json.loads(store.get_item(SESSION_KEY))["email"] == "ada@example.com"

    def test_password_not_stored_in_plain_text(self, store, auth):
        """Test only a salted hash is persisted."""
        auth.register("Ada", "ada@example.com", "secret1")

        assert "secret1" not in store.get_item(USERS_KEY)

    @pytest.mark.parametrize(
        "name, email, password",
        [("", "a@b.c", "secret1"), ("Ada", "", "secret1"), ("Ada", "a@b.c", "")],
    )
    def test_missing_fields(self, auth, name, email, password):
        """Test every field is required."""
        with pytest.raises(MissingFieldError, match="All fields are required"):
            auth.register(name, email, password)

    def test_short_password(self, auth):
        """Test passwords under 6 characters are refused."""
        with pytest.raises(WeakPasswordError, match="at least 6 characters"):
            auth.register("Ada", "ada@example.com", "12345")

    def test_duplicate_email(self, auth):
        """Test an email can only register once."""
        auth.register("Ada", "ada@example.com", "secret1")

        with pytest.raises(AccountExistsError, match="already exists"):
            auth.register("Other", "ada@example.com", "secret2")


@pytest.mark.unit
class TestLogin:
    """Tests for AuthService.login and logout."""

    def test_login_after_logout(self, auth):
        """Test the full register, logout, login lifecycle."""
        user = auth.register("Ada", "ada@example.com", "secret1")
        auth.logout()
        assert auth.is_authenticated is False

        assert auth.login("ada@example.com", "secret1") == user
        assert auth.current_user == user

    def test_missing_fields(self, auth):
        """Test email and password are required."""
        with pytest.raises(MissingFieldError, match="Email and password are required"):
            auth.login("", "secret1")

    def test_wrong_password(self, auth):
        """Test a wrong password is rejected without logging in."""
        auth.register("Ada", "ada@example.com", "secret1")
        auth.logout()

        with pytest.raises(InvalidCredentialsError, match="Invalid email or password"):
            auth.login("ada@example.com", "wrong-password")
        assert auth.current_user is None

    def test_unknown_email(self, auth):
        """Test unknown accounts get the same message as a wrong password."""
        with pytest.raises(InvalidCredentialsError, match="Invalid email or password"):
            auth.login("nobody@example.com", "secret1")

    def test_errors_share_base_class(self, auth):
        """Test callers can catch every failure as AuthenticationError."""
        with pytest.raises(AuthenticationError):
            auth.login("nobody@example.com", "secret1")

    def test_logout_clears_session(self, store, auth):
        """Test logout removes the stored session."""
        auth.register("Ada", "ada@example.com", "secret1")
        auth.logout()

        assert store.get_item(SESSION_KEY) is None
        assert AuthService(store).current_user is None
