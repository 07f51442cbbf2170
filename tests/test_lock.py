import os

import pytest

from gentoo_installer.errors import LockError
from gentoo_installer.lib.lock import install_lock


def test_second_run_is_refused(tmp_path):
    path = str(tmp_path / "run" / "installer.lock")

    with install_lock(path):
        with pytest.raises(LockError):
            with install_lock(path):
                pass

    with install_lock(path):
        pass


def test_refused_run_keeps_holder_pid(tmp_path):
    path = tmp_path / "installer.lock"

    with install_lock(str(path)):
        holder = path.read_text(encoding="utf-8")
        with pytest.raises(LockError):
            with install_lock(str(path)):
                pass
        assert path.read_text(encoding="utf-8") == holder

    assert holder == f"{os.getpid()}\n"
