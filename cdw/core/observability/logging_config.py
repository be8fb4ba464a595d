"""
Logging configuration — set up once by main.py.

stdout belongs to the cd signal protocol: a wrapper function reads its
first line.  Log records therefore only ever go to stderr or to a file,
and ``setup_logging`` refuses a stdout stream outright.

Console level, in precedence order:
    --debug  >  $CDW_LOG_LEVEL  >  WARNING

Optional file output via $CDW_LOG_FILE, at $CDW_LOG_FILE_LEVEL
(defaults to the console level).
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from typing import TextIO

LOG_LEVEL_ENV = "CDW_LOG_LEVEL"
LOG_FILE_ENV = "CDW_LOG_FILE"
LOG_FILE_LEVEL_ENV = "CDW_LOG_FILE_LEVEL"

# Plain "cdw: ..." lines, like any other CLI complaining on stderr
_FMT_CONSOLE = "cdw: %(message)s"

# --debug: where each record came from
_FMT_DEBUG = "cdw: %(levelname)s %(name)s:%(lineno)d %(message)s"

_FMT_FILE = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def configure_from_env(
    debug: bool = False,
    environ: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
) -> int:
    """Resolve levels and file output from ``environ`` and set up logging.

    Returns:
        The console level that was applied.
    """
    env = os.environ if environ is None else environ
    level = logging.DEBUG if debug else parse_level(env.get(LOG_LEVEL_ENV))
    setup_logging(
        level=level,
        log_file=env.get(LOG_FILE_ENV) or None,
        log_file_level=env.get(LOG_FILE_LEVEL_ENV),
        stream=stream,
    )
    return level


def setup_logging(
    level: int | str = logging.WARNING,
    log_file: str | None = None,
    log_file_level: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Replace the root logger's handlers with cdw's.

    Args:
        level: Console level, numeric or by name.
        log_file: Optional path to a log file.
        log_file_level: Level name for the log file, defaults to ``level``.
        stream: Console stream, ``sys.stderr`` when None.

    Raises:
        ValueError: If ``stream`` is stdout.
    """
    stream = sys.stderr if stream is None else stream
    if stream is sys.stdout or stream is sys.__stdout__:
        raise ValueError("cdw cannot log to stdout, it carries the cd signal")

    console_level = level if isinstance(level, int) else parse_level(level)

    console = logging.StreamHandler(stream)
    console.setLevel(console_level)
    fmt = _FMT_DEBUG if console_level <= logging.DEBUG else _FMT_CONSOLE
    console.setFormatter(logging.Formatter(fmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)

    # A closed stderr (e.g. `cdw ... 2>&-`) must not turn into a traceback.
    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant, WARNING if unknown."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
