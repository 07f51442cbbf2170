from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from typing import Optional, Sequence

from ..errors import PrivilegeError

logger = logging.getLogger(__name__)


def ensure_elevated(argv: Optional[Sequence[str]] = None) -> None:
    """Continue if running as root; otherwise re-run this program under sudo.

    The unprivileged parent process exits with status 0 once the elevated
    copy has finished. Raises PrivilegeError only when sudo itself is missing.
    """

    if os.geteuid() == 0:
        return
    logger.warning("You must have root privileges to continue; restarting as root!")

    sudo = shutil.which("sudo")
    if sudo is None:
        raise PrivilegeError("Not running as root and sudo is not available")

    args = list(sys.argv[1:] if argv is None else argv)
    subprocess.run([sudo, sys.executable, "-m", "gentoo_installer", *args])
    raise SystemExit(0)
