"""
Accounts Context

Responsibilities:
- Registers users and manages the login session (mock authentication)
- Saves, lists and deletes each user's searches and their match results
- Persists both through an injected key-value store

Owns: Users, sessions, saved searches, key-value storage
Never: Renders reports (hands MatchResult lists to the exporting context)
"""

from profmatch.contexts.accounts.auth import AuthService, User
from profmatch.contexts.accounts.exceptions import (
    AccountExistsError,
    AuthenticationError,
    InvalidCredentialsError,
    MissingFieldError,
    StorageError,
    WeakPasswordError,
)
from profmatch.contexts.accounts.saved_searches import (
    SavedSearch,
    SavedSearchStore,
    default_search_name,
    format_saved_date,
    match_count_label,
    university_display_name,
)
from profmatch.contexts.accounts.storage import JSONFileStore, KeyValueStore, MemoryStore

__all__ = [
    "AccountExistsError",
    "AuthService",
    "AuthenticationError",
    "InvalidCredentialsError",
    "JSONFileStore",
    "KeyValueStore",
    "MemoryStore",
    "MissingFieldError",
    "SavedSearch",
    "SavedSearchStore",
    "StorageError",
    "User",
    "WeakPasswordError",
    "default_search_name",
    "format_saved_date",
    "match_count_label",
    "university_display_name",
]
