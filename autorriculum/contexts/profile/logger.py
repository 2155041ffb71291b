"""
Profile context logger.

Provides logging interface for profile context with automatic [profile] prefix.
All profile modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from autorriculum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[profile]"


def setup_profile_logger(log_dir: Path, run_name: str = "sync", profile_path: Path = None) -> Path:
    """
    Setup logger for a profile update run.

    Args:
        log_dir: Directory for this session
        run_name: Log file name ("sync", "stats", ...)
        profile_path: Stored profile being updated (recorded in provenance)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name=run_name,
        log_dir=log_dir,
        extra_provenance={"Profile": profile_path} if profile_path else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [profile] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [profile] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [profile] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [profile] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")
