"""
Logging setup for the agent-discovery CLI.

main.py calls ``setup_logging`` once.  Library code only does
``logger = logging.getLogger(__name__)``; importing the package never
configures logging.

What each console level shows:
    WARNING  failed installs, crashed probes      ``warning: <message>``
    INFO     install stages, settings file used   ``12:00:01 <message>``
    DEBUG    every probe and subprocess, tagged with the worker thread
             (``detect_0`` ...) so parallel probes can be told apart

Level: CLI flag > AGD_LOG_LEVEL > WARNING.
AGD_LOG_FILE adds a file handler at AGD_LOG_FILE_LEVEL (default: the
console level), always in the detailed format.
"""

from __future__ import annotations

import logging
import sys

LOG_LEVEL_ENV = "AGD_LOG_LEVEL"
LOG_FILE_ENV = "AGD_LOG_FILE"
LOG_FILE_LEVEL_ENV = "AGD_LOG_FILE_LEVEL"

_PACKAGE = "agent_discovery"

# ── Formats ─────────────────────────────────────────────────────

_DEBUG_FMT = "%(asctime)s.%(msecs)03d %(threadName)-10s %(component)-16s %(message)s"
_INFO_FMT = "%(asctime)s %(message)s"
_WARNING_FMT = "%(levelname_lower)s: %(message)s"
_CLOCK = "%H:%M:%S"

_FILE_FMT = "%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


class AgentLogFormatter(logging.Formatter):
    """Formatter that adds two record fields:

    ``component``       last part of our own logger names
                        (``agent_discovery.core.services.detection.detector``
                        → ``detector``); foreign names are left whole.
    ``levelname_lower`` ``warning`` / ``error`` for the terse console format.
    """

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(f"{_PACKAGE}."):
            name = name.rsplit(".", 1)[-1]
        record.component = name
        record.levelname_lower = record.levelname.lower()
        return super().format(record)


def console_formatter(level: int) -> logging.Formatter:
    """Console format for an effective ``level``."""
    if level <= logging.DEBUG:
        return AgentLogFormatter(_DEBUG_FMT, datefmt=_CLOCK)
    if level <= logging.INFO:
        return AgentLogFormatter(_INFO_FMT, datefmt=_CLOCK)
    return AgentLogFormatter(_WARNING_FMT)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install console (stderr) and optional file handlers on the root logger.

    Replaces any handlers already there, so calling it twice is safe.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(AgentLogFormatter(_FILE_FMT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)


def _parse_level(level: str | None) -> int:
    """Level name → number; unknown or empty names mean WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
