"""Custom exceptions for the accounts context."""

from pathlib import Path
from typing import Optional


class AuthenticationError(Exception):
    """
    Base class for authentication failures.

    The message is user-facing and is shown as-is by callers.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingFieldError(AuthenticationError):
    """A required login or registration field was empty."""


class WeakPasswordError(AuthenticationError):
    """Password does not meet the minimum length."""


class AccountExistsError(AuthenticationError):
    """An account with the email is already registered."""


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password."""


class StorageError(Exception):
    """
    Exception raised when the key-value store cannot be read or written.

    Attributes:
        message: Error description
        path: Backing file, for file-based stores
        original_error: The underlying error
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.path = path
        self.original_error = original_error

        parts = [message]

        if path:
            parts.append(f"File: {path}")

        if original_error:
            parts.append(f"Original error: {str(original_error)}")

        super().__init__("\n".join(parts))
