from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gentoo_installer.profile import InstallProfile  # noqa: E402


class FakeRunner:
    """Stands in for subprocess.run and records every argv it is given."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.inputs: List[Optional[str]] = []
        self.kwargs: List[Dict[str, Any]] = []
        self._failures: List[Tuple[Tuple[str, ...], int]] = []

    def fail_on(self, *prefix: str, returncode: int = 1) -> None:
        self._failures.append((tuple(prefix), returncode))

    def __call__(self, argv: Sequence[str], **kwargs: Any) -> subprocess.CompletedProcess:
        argv = list(argv)
        self.calls.append(argv)
        self.inputs.append(kwargs.get("input"))
        self.kwargs.append(kwargs)
        rc = 0
        for prefix, code in self._failures:
            if tuple(argv[: len(prefix)]) == prefix:
                rc = code
                break
        return subprocess.CompletedProcess(argv, rc, stdout="", stderr="boom" if rc else "")

    def programs(self) -> List[str]:
        return [c[0] for c in self.calls]

    def matching(self, *prefix: str) -> List[List[str]]:
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> FakeRunner:
    fake = FakeRunner()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def files_dir(tmp_path: Path) -> Path:
    base = tmp_path / "gentoo-files"
    (base / "package.use").mkdir(parents=True)
    (base / "make.conf").write_text('COMMON_FLAGS="-O2 -pipe"\n', encoding="utf-8")
    (base / "locale.gen").write_text("en_US.UTF-8 UTF-8\n", encoding="utf-8")
    (base / "hosts").write_text("127.0.0.1 localhost\n", encoding="utf-8")
    (base / "package.use" / "gnome").write_text("gnome-base/gnome -games\n", encoding="utf-8")
    return base


@pytest.fixture
def chroot_script(tmp_path: Path) -> Path:
    p = tmp_path / "gentoo-chroot.sh"
    p.write_text("#!/bin/bash\nexit 0\n", encoding="utf-8")
    return p


@pytest.fixture
def profile(tmp_path: Path, files_dir: Path, chroot_script: Path) -> InstallProfile:
    return InstallProfile(
        disk="/dev/sdX",
        hostname="h",
        username="u",
        desktop="gnome",
        usergroups=("wheel", "audio", "video"),
        packages=("a", "b", "c", "d"),
        stage3_url="https://example.invalid/stage3.tar.xz",
        mount_point=str(tmp_path / "gentoo"),
        files_dir=str(files_dir),
        chroot_script=str(chroot_script),
    )


@pytest.fixture(autouse=True)
def reset_logging():
    """configure_logging() installs root handlers once per process; undo it per test."""
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for attr in ("_gentoo_installer_configured", "_gentoo_installer_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
