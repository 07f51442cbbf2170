from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = "/var/log/gentoo-installer.log"

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

_COLORS = {
    logging.DEBUG: "\033[2m",
    logging.INFO: "\033[36m",
    SUCCESS: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
_RESET = "\033[0m"


class ConsoleFormatter(logging.Formatter):
    """Status-line formatter: ``[LEVEL] message``, colored when writing to a tty."""

    def __init__(self, *, color: bool = True) -> None:
        super().__init__(fmt="[%(levelname)s] %(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        if not self.color:
            return line
        return f"{_COLORS.get(record.levelno, '')}{line}{_RESET}"


def success(logger: logging.Logger, msg: str, *args: object) -> None:
    logger.log(SUCCESS, msg, *args)


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging.

    Every command and decision goes to the log file; the console gets colored
    status lines.

    Notes:
    - In a live environment /var/log may not be writable. We still try it
      first and fall back to a file in the working directory.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_gentoo_installer_configured", False):
        return getattr(logger, "_gentoo_installer_log_path", log_path)

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
    except OSError:
        fallback = str(Path.cwd() / "gentoo-installer.log")
        file_handler = logging.FileHandler(fallback)
        chosen_path = fallback
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler(sys.stdout)
        stream = getattr(console.stream, "isatty", None)
        console.setFormatter(ConsoleFormatter(color=bool(stream and stream())))
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_gentoo_installer_configured", True)
    setattr(logger, "_gentoo_installer_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
