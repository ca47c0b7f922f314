"""
Accounts context logger.

Provides logging interface for accounts context with automatic [accounts] prefix.
All accounts modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from profmatch.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[accounts]"


def setup_accounts_logger(log_dir: Path, storage_file: Path) -> Path:
    """
    Setup logger for accounts context.

    Args:
        log_dir: Directory for this session
        storage_file: Backing store, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="accounts",
        log_dir=log_dir,
        extra_provenance={"Storage": str(storage_file)},
    )


# Wrapper functions with automatic [accounts] prefix


def _log_info(message: str) -> None:
    """Log info message with [accounts] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [accounts] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [accounts] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [accounts] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [accounts] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
