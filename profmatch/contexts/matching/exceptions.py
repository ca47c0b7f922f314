"""Custom exceptions for the matching context."""

from typing import Optional


class InvalidMatchDataError(ValueError):
    """
    Exception raised when a match record is missing required fields or holds
    an invalid value.

    Attributes:
        message: Error description
        field_name: Dotted path of the offending field (e.g., 'professor.name')
        record_index: Position of the record in the input list, when known
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        record_index: Optional[int] = None,
    ):
        self.message = message
        self.field_name = field_name
        self.record_index = record_index

        parts = [message]

        if field_name:
            parts.append(f"Field: {field_name}")

        if record_index is not None:
            parts.append(f"Record: #{record_index + 1}")

        super().__init__("\n".join(parts))
