from __future__ import annotations

import logging
import subprocess
from importlib import metadata
from pathlib import Path

import numpy as np
import polars as pl

from ..constants import CONSOLE_LOG_LEVEL, FILE_LOG_LEVEL, PACKAGE_NAME, WARNINGS_CAPTURE_LEVEL

logger = logging.getLogger("sequencing")


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger.

    If ``name`` is provided, returns a named logger so that records include the
    fully-qualified module path (e.g. "sequencing.sequence.builder").
    Otherwise, returns the package base logger "sequencing".
    """
    return logging.getLogger(name if name else "sequencing")


def get_package_info() -> tuple[str, str]:
    """Get the package version and last update date.

    Returns
    -------
    tuple[str, str]
        Package version and last update date.
    """
    version = "unknown"
    try:
        version = metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        # Fallback to pyproject.toml if not installed
        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, encoding="utf-8") as f:
                for line in f:
                    if line.startswith("version ="):
                        version = line.split("=")[1].strip().strip('"')
                        break

    last_update = "unknown"
    try:
        repo_path = Path(__file__).parent.parent.parent
        git_info = subprocess.check_output(
            ["git", "-C", str(repo_path), "describe", "--tags", "--always"],
            stderr=subprocess.STDOUT,
            text=True,
        ).strip()
        git_date = subprocess.check_output(
            ["git", "-C", str(repo_path), "log", "-1", "--format=%ci"],
            stderr=subprocess.STDOUT,
            text=True,
        ).strip()
        last_update = f"{git_info} ({git_date})"
    except (subprocess.CalledProcessError, FileNotFoundError):
        pass

    return version, last_update


def _resolve_level(level: int | str | None, default: int) -> int:
    if level is None:
        return default
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        return resolved
    return level


def setup_logging(
    log_file: Path | str | None = None,
    console_level: int | str | None = None,
    file_level: int | str | None = None,
) -> None:
    """Set up logging to console and optionally to a file.

    Handlers are attached to the package logger "sequencing" and to the
    "py.warnings" logger, so that warnings emitted while building a sequence
    end up in the same outputs.

    Parameters
    ----------
    log_file : Path | str, optional
        Path to the log file.
    console_level : int | str, optional
        Logging level for console output (default logging.WARNING).
    file_level : int | str, optional
        Logging level for file output (default logging.INFO).
    """
    resolved_console_level = _resolve_level(console_level, CONSOLE_LOG_LEVEL)
    resolved_file_level = _resolve_level(file_level, FILE_LOG_LEVEL)

    base_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ANSI colors (only for console)
    RESET = "\033[0m"
    COLORS = {
        logging.DEBUG: "\033[36m",  # Cyan
        logging.INFO: "\033[37m",  # Light gray
        logging.WARNING: "\033[33m",  # Yellow
        logging.ERROR: "\033[31m",  # Red
        logging.CRITICAL: "\033[1;41m",  # Bold on red background
    }

    class ColorFormatter(logging.Formatter):
        def format(self, record: logging.LogRecord) -> str:
            color = COLORS.get(record.levelno, "")
            if record.name == "py.warnings":
                color = "\033[35m"  # Magenta
            msg = super().format(record)
            return f"{color}{msg}{RESET}" if color else msg

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(resolved_console_level)
    console_handler.setFormatter(ColorFormatter(base_format))
    handlers.append(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(resolved_file_level)
        file_handler.setFormatter(logging.Formatter(base_format))
        handlers.append(file_handler)

    level = min(resolved_console_level, resolved_file_level) if log_file else resolved_console_level

    # a fresh capture handler per call, so the summary only counts warnings of this run
    capture_handler = WarningCaptureHandler()
    capture_handler.setLevel(WARNINGS_CAPTURE_LEVEL)

    warnings_logger = logging.getLogger("py.warnings")
    for target in (logger, warnings_logger):
        for handler in list(target.handlers):
            target.removeHandler(handler)
            handler.close()
        for handler in handlers:
            target.addHandler(handler)
        target.setLevel(level)
    warnings_logger.addHandler(capture_handler)

    # re-route warnings even if an earlier call already captured them
    logging.captureWarnings(False)
    logging.captureWarnings(True)

    logger.info("Trial sequencing package loaded.")

    package_version, last_update = get_package_info()
    logger.info(f"Package version: {package_version}")
    logger.info(f"Last updated (git): {last_update}")
    logger.info(f"numpy version: {np.__version__}, polars version: {pl.__version__}")


class WarningCaptureHandler(logging.Handler):
    """Keep the messages of captured warnings for a summary at the end of a run."""

    def __init__(self, level: int = logging.NOTSET):
        super().__init__(level)
        self.captured: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.captured.append(record.getMessage())


def captured_warnings() -> list[str]:
    """Messages of the warnings captured since the last call to ``setup_logging``."""
    for handler in logging.getLogger("py.warnings").handlers:
        if isinstance(handler, WarningCaptureHandler):
            return list(handler.captured)
    return []


def clear_log_file(log_file: Path | str) -> None:
    """Clear the contents of the log file.

    Parameters
    ----------
    log_file : Path | str
        Path to the log file to clear.
    """
    log_file = Path(log_file)
    if log_file.exists():
        open(log_file, "w", encoding="utf-8").close()
