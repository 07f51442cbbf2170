from __future__ import annotations

import contextlib
import fcntl
import logging
import os
from pathlib import Path
from typing import Iterator

from ..errors import LockError

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def install_lock(path: str) -> Iterator[None]:
    """Hold an exclusive lock so two installer runs never touch the same machine."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding="utf-8") as f:
        try:
            fcntl.flock(f, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError as e:
            raise LockError(f"Another installer run is in progress (lockfile: {p})") from e
        f.truncate(0)
        f.write(f"{os.getpid()}\n")
        f.flush()
        logger.debug("Acquired install lock %s", p)
        try:
            yield
        finally:
            fcntl.flock(f, fcntl.LOCK_UN)
