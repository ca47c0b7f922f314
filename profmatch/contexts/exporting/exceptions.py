"""Custom exceptions for the exporting context."""

from typing import Iterable, Optional


class UnsupportedFormatError(ValueError):
    """
    Exception raised when an export is requested in a format with no renderer.

    Attributes:
        requested: The format value that was asked for
        supported: Format names that are accepted
    """

    def __init__(self, requested: object, supported: Iterable[str]):
        self.requested = requested
        self.supported = list(supported)
        super().__init__(
            f"Unsupported export format: {requested!r}. "
            f"Valid formats: {', '.join(self.supported)}"
        )


class TemplateRenderError(Exception):
    """
    Exception raised when LaTeX template rendering fails.

    Attributes:
        message: Error description
        template_name: Name of the template being rendered
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.original_error = original_error

        parts = [message]

        if template_name:
            parts.append(f"\nTemplate: {template_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
