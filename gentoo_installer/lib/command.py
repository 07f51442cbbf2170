from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def format_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    timeout_s: Optional[float] = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - argv is always passed as a vector; nothing goes through a shell.
    - Captures stdout/stderr and logs them at DEBUG.
    - check=True raises CommandError on a non-zero exit or a timeout.
    - dry_run logs but does not execute.
    """

    argv_list = [str(a) for a in argv]
    if not argv_list:
        raise ValueError("run_cmd requires a non-empty argv")
    logger.info("CMD %s", format_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
            timeout=timeout_s,
        )
    except subprocess.TimeoutExpired as e:
        raise CommandError(argv_list, -1, f"timed out after {timeout_s}s") from e
    except FileNotFoundError as e:
        raise CommandError(argv_list, 127, f"{argv_list[0]}: command not found") from e

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    if check and p.returncode != 0:
        raise CommandError(argv_list, p.returncode, p.stderr or "")

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout or "", stderr=p.stderr or "")
