"""
Saved searches, scoped to the logged-in user.

Each user's searches are kept as one JSON list under
"profmatch_saved_searches:<user_id>", so users never see or delete each
other's records.
"""

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from profmatch.contexts.accounts.auth import AuthService
from profmatch.contexts.accounts.exceptions import StorageError
from profmatch.contexts.accounts.logger import _log_error, _log_success, _log_warning
from profmatch.contexts.accounts.storage import KeyValueStore
from profmatch.contexts.matching.match_data_structure import MatchResult, matches_from_records
from profmatch.utils.timestamp import epoch_millis, now_exact

SAVED_SEARCHES_KEY = "profmatch_saved_searches"


@dataclass(frozen=True)
class SavedSearch:
    """
    A named set of match results saved by a user.

    Attributes:
        id: Identifier of the form search_<epoch ms>
        user_id: Owner
        name: User-chosen name
        university: University URL the search targeted
        research_interests: Interests entered for the search
        resume_file_name: Name of the uploaded resume
        results: Matches in rank order
        created_at: ISO 8601 save time
    """

    id: str
    user_id: str
    name: str
    university: str
    research_interests: List[str] = field(default_factory=list)
    resume_file_name: str = ""
    results: List[MatchResult] = field(default_factory=list)
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedSearch":
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            name=data["name"],
            university=data.get("university", ""),
            research_interests=list(data.get("research_interests") or []),
            resume_file_name=data.get("resume_file_name", ""),
            results=matches_from_records(data.get("results") or []),
            created_at=data.get("created_at", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "university": self.university,
            "research_interests": list(self.research_interests),
            "resume_file_name": self.resume_file_name,
            "results": [match.to_dict() for match in self.results],
            "created_at": self.created_at,
        }


class SavedSearchStore:
    """
    List, get, save and delete the current user's saved searches.

    Reads fall back to empty and writes report failure through return values;
    storage problems are logged rather than raised.
    """

    def __init__(self, store: KeyValueStore, auth: AuthService):
        self.store = store
        self.auth = auth

    def _key(self, user_id: str) -> str:
        return f"{SAVED_SEARCHES_KEY}:{user_id}"

    def _read(self, user_id: str) -> List[SavedSearch]:
        stored = self.store.get_item(self._key(user_id))
        if not stored:
            return []
        return [SavedSearch.from_dict(record) for record in json.loads(stored)]

    def _write(self, user_id: str, searches: List[SavedSearch]) -> None:
        payload = json.dumps([search.to_dict() for search in searches])
        self.store.set_item(self._key(user_id), payload)

    def list(self) -> List[SavedSearch]:
        """Current user's searches in save order (empty when logged out)."""
        user = self.auth.current_user
        if user is None:
            return []
        try:
            return self._read(user.id)
        except (StorageError, ValueError, KeyError, TypeError) as e:
            _log_warning(f"Could not read saved searches for {user.id}: {e}")
            return []

    def get(self, search_id: str) -> Optional[SavedSearch]:
        for search in self.list():
            if search.id == search_id:
                return search
        return None

    def save(
        self,
        name: str,
        university: str,
        results: List[MatchResult],
        research_interests: Optional[List[str]] = None,
        resume_file_name: str = "",
    ) -> Optional[SavedSearch]:
        """
        Save a search for the current user.

        Args:
            name: Search name (surrounding whitespace is dropped)
            university: University URL
            results: Matches in rank order
            research_interests: Interests entered for the search
            resume_file_name: Name of the uploaded resume

        Returns:
            The new SavedSearch, or None when logged out or storage fails

        Raises:
            ValueError: If the name is blank
        """
        if not name or not name.strip():
            raise ValueError("Please enter a name for this search")

        user = self.auth.current_user
        if user is None:
            _log_warning("Cannot save search while logged out")
            return None

        search = SavedSearch(
            id=f"search_{epoch_millis()}",
            user_id=user.id,
            name=name.strip(),
            university=university,
            research_interests=list(research_interests or []),
            resume_file_name=resume_file_name,
            results=list(results),
            created_at=now_exact(),
        )

        try:
            searches = self._read(user.id)
            searches.append(search)
            self._write(user.id, searches)
        except (StorageError, ValueError, KeyError, TypeError) as e:
            _log_error(f"Failed to save search '{search.name}': {e}")
            return None

        _log_success(f"Saved search '{search.name}' ({match_count_label(len(search.results))})")
        return search

    def delete(self, search_id: str) -> None:
        """Delete one of the current user's searches; unknown ids are ignored."""
        user = self.auth.current_user
        if user is None:
            return
        try:
            searches = self._read(user.id)
            remaining = [search for search in searches if search.id != search_id]
            if len(remaining) != len(searches):
                self._write(user.id, remaining)
        except (StorageError, ValueError, KeyError, TypeError) as e:
            _log_error(f"Failed to delete search {search_id}: {e}")


# Display helpers


def university_display_name(url: str) -> str:
    """Hostname without 'www.', or the raw string when it isn't a URL."""
    hostname = urlparse(url).hostname
    if not hostname:
        return url
    return hostname.replace("www.", "", 1)


def default_search_name(university_url: str, on_date: Optional[date] = None) -> str:
    """
    Suggested name for a new saved search.

    Args:
        university_url: University URL of the search (may be empty)
        on_date: Date to include; defaults to today

    Returns:
        "<university> - M/D/YYYY" using the first hostname label, or
        "Search - M/D/YYYY" when no university is known
    """
    on_date = on_date or date.today()
    date_label = f"{on_date.month}/{on_date.day}/{on_date.year}"

    if university_url:
        hostname = urlparse(university_url).hostname
        if hostname:
            university = hostname.replace("www.", "", 1).split(".")[0]
        else:
            university = university_url
        return f"{university} - {date_label}"
    return f"Search - {date_label}"


def match_count_label(count: int) -> str:
    """'1 match', '3 matches'."""
    return f"{count} match" if count == 1 else f"{count} matches"


def format_saved_date(created_at: str) -> str:
    """Format an ISO timestamp as 'Jan 15, 2025', or return it unchanged if unparseable."""
    try:
        saved = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return created_at
    return f"{saved.strftime('%b')} {saved.day}, {saved.year}"
