# src/tasklist/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tasklist.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def parse_level(level: str | int | None, default: int = logging.INFO) -> int:
    """'debug' / 'WARNING' / 10 -> logging level; unknown names -> default."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level or "").strip().upper())
    return value if isinstance(value, int) else default


class _ConsoleNoiseFilter(logging.Filter):
    """
    The console shares the terminal with the REPL prompt, so only our own
    loggers get through below ERROR. Per-row store chatter stays in the file.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith("tasklist."):
            return record.levelno >= logging.ERROR
        if record.name.startswith("tasklist.tasks."):
            return record.levelno >= logging.INFO
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasklist",
    console_level: str | int | None = logging.INFO,
    file_level: str | int | None = logging.DEBUG,
) -> Path:
    """
    Console handler on stderr (filtered) plus a full log file in `log_dir`.

    Levels may be given as names ("DEBUG") straight from settings.
    Replaces any handlers already on the root logger. Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(logging.DEBUG)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(parse_level(console_level))
    console.addFilter(_ConsoleNoiseFilter())

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(parse_level(file_level, logging.DEBUG))

    for handler in (console, file_handler):
        handler.setFormatter(fmt)
        root.addHandler(handler)

    logging.captureWarnings(True)
    return log_file
