from __future__ import annotations

import shlex
from typing import Optional, Sequence


class InstallerError(Exception):
    """Base class for every failure that aborts an install run."""


class PrivilegeError(InstallerError):
    pass


class ConfigError(InstallerError):
    def __init__(self, message: str, *, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class CommandError(InstallerError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command failed ({returncode}): {' '.join(shlex.quote(a) for a in self.argv)}"
        if stderr.strip():
            msg += f"\n{stderr.strip()}"
        super().__init__(msg)


class PreconditionError(InstallerError):
    pass


class FetchError(InstallerError):
    pass


class LockError(InstallerError):
    pass
