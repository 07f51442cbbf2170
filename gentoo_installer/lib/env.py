from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    profile_default: str = "gnome.toml"
    log_default: str = "/var/log/gentoo-installer.log"
    lock_file: str = "/run/gentoo-installer.lock"
    stage3_name: str = "stage3.tar.xz"
    # Locations inside the target tree.
    chroot_vars: str = "/root/chroot_var.sh"
    chroot_script: str = "/root/gentoo-chroot.sh"
    first_boot_script: str = "/root/gentoo-first-boot.sh"


PATHS = Paths()
