"""
Exporting context logger.

Provides logging interface for exporting context with automatic [export] prefix.
All exporting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from profmatch.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[export]"


def setup_export_logger(log_dir: Path, export_format: str = "all") -> Path:
    """
    Setup logger for exporting context.

    Configures loguru with provenance tracking and export-specific context.

    Args:
        log_dir: Directory for this export session
        export_format: Requested format(s), recorded in the provenance header

    Returns:
        Path to log file

    Example:
        from profmatch.contexts.exporting.logger import setup_export_logger, _log_info

        log_file = setup_export_logger(log_dir, export_format="pdf")
        _log_info("Starting export...")
    """
    return _setup_logger(
        context_name="export",
        log_dir=log_dir,
        extra_provenance={"Format": export_format},
    )


# Wrapper functions with automatic [export] prefix


def _log_info(message: str) -> None:
    """Log info message with [export] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [export] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [export] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [export] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [export] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level export-specific logging helpers


def log_export_start(export_format: str, match_count: int, generated_on: str) -> None:
    """Log start of an export with context."""
    _log_info(f"Exporting {match_count} matches as {export_format}")
    _log_debug(f"  Report date: {generated_on}")


def log_export_result(export_format: str, artifact, elapsed_time: float) -> None:
    """
    Log the outcome of an export.

    Args:
        export_format: Format that was rendered
        artifact: TextArtifact or SavedDocument
        elapsed_time: Time taken to render and deliver
    """
    _log_success(f"{export_format}: {artifact.describe()} ({elapsed_time:.2f}s)")


def log_pdf_page_break(page_number: int, block: str, y_position: float) -> None:
    """Log a page break taken before a PDF block."""
    _log_debug(f"  Page {page_number} started before {block} (cursor was at {y_position:.1f}mm)")


def log_validation_result(pdf_path: Path, result) -> None:
    """
    Log the outcome of a PDF export validation.

    Args:
        pdf_path: PDF that was checked
        result: PdfValidationResult
    """
    if result.is_valid:
        _log_success(f"Validation passed: {pdf_path.name} ({result.page_count} pages)")
        return

    _log_error(f"Validation failed: {pdf_path.name}")
    for name in result.missing_headings:
        _log_error(f"  Missing heading: {name}")
    for url in result.missing_links:
        _log_error(f"  Missing link: {url}")
