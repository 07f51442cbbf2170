"""Install profile loading.

A profile is a declarative TOML or YAML document::

    disk = "/dev/sda"
    hostname = "gentoo"
    username = "matt"
    usergroups = ["wheel", "audio", "video"]
    desktop = "gnome"

    [packages]
    system = ["app-admin/sudo"]
    gnome = ["gnome-base/gnome"]
    apps = ["app-editors/emacs"]
    fonts = ["media-fonts/noto"]

The ``packages`` table holds one list per desktop key; ``desktop`` selects
which of them joins the combined package list.
"""

from __future__ import annotations

import dataclasses
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_STAGE3_URL = (
    "https://distfiles.gentoo.org/releases/amd64/autobuilds/20250511T165428Z/"
    "stage3-amd64-desktop-systemd-20250511T165428Z.tar.xz"
)
DEFAULT_MOUNT_POINT = "/mnt/gentoo"
DEFAULT_FILES_DIR = "../gentoo-files"
DEFAULT_CHROOT_SCRIPT = "../scripts/gentoo-chroot.sh"
DEFAULT_DOWNLOAD_TIMEOUT = 60.0

# Package categories that are always present, in the order they are combined.
# The desktop-specific list is inserted after "system".
_FIXED_CATEGORIES = ("system", "apps", "fonts")


@dataclass(frozen=True)
class InstallProfile:
    disk: str
    hostname: str
    username: str
    desktop: str
    usergroups: Tuple[str, ...]
    packages: Tuple[str, ...]
    stage3_url: str = DEFAULT_STAGE3_URL
    mount_point: str = DEFAULT_MOUNT_POINT
    files_dir: str = DEFAULT_FILES_DIR
    chroot_script: str = DEFAULT_CHROOT_SCRIPT
    first_boot_script: Optional[str] = None
    download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT

    def with_disk(self, disk: str) -> "InstallProfile":
        return dataclasses.replace(self, disk=disk)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext == "toml":
        return "toml"
    if ext in {"yaml", "yml"}:
        return "yaml"
    raise ConfigError(f"Unsupported profile format: {path} (expected .toml, .yaml or .yml)")


def _read_document(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Profile not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read profile {path}: {e}") from e

    try:
        if _detect_format(path) == "toml":
            data = tomllib.loads(text)
        else:
            data = yaml.safe_load(text) or {}
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Malformed profile {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Profile must be a mapping/table, got {type(data).__name__}: {path}")
    return data


def _require_str(data: Dict[str, Any], key: str, *, label: Optional[str] = None) -> str:
    label = label or key
    if key not in data:
        raise ConfigError(f"Missing required key: {label}", key=label)
    value = data[key]
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Key {label} must be a non-empty string", key=label)
    return value


def _require_str_list(data: Dict[str, Any], key: str, *, label: Optional[str] = None) -> Tuple[str, ...]:
    label = label or key
    if key not in data:
        raise ConfigError(f"Missing required key: {label}", key=label)
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"Key {label} must be a list of strings", key=label)
    return tuple(value)


def _optional_str(data: Dict[str, Any], key: str, default: Optional[str]) -> Optional[str]:
    value = data.get(key, default)
    if value is not None and (not isinstance(value, str) or not value.strip()):
        raise ConfigError(f"Key {key} must be a non-empty string", key=key)
    return value


def _optional_timeout(data: Dict[str, Any]) -> float:
    value = data.get("download_timeout", DEFAULT_DOWNLOAD_TIMEOUT)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError("Key download_timeout must be a positive number", key="download_timeout")
    return float(value)


def combine_packages(packages: Dict[str, Any], desktop: str) -> Tuple[str, ...]:
    """Concatenate system, desktop-specific, apps and fonts lists, in that order."""

    if desktop not in packages:
        raise ConfigError(
            f"Desktop {desktop!r} has no package list (expected packages.{desktop})",
            key=f"packages.{desktop}",
        )
    system, apps, fonts = (
        _require_str_list(packages, name, label=f"packages.{name}") for name in _FIXED_CATEGORIES
    )
    desktop_pkgs = _require_str_list(packages, desktop, label=f"packages.{desktop}")
    return system + desktop_pkgs + apps + fonts


def load_profile(path: str) -> InstallProfile:
    """Parse a profile file into an immutable InstallProfile.

    Raises ConfigError when the file is missing or malformed, when a required
    key is absent, or when the desktop key has no matching package list.
    """

    data = _read_document(Path(path))

    disk = _require_str(data, "disk")
    hostname = _require_str(data, "hostname")
    username = _require_str(data, "username")
    usergroups = _require_str_list(data, "usergroups")
    desktop = _require_str(data, "desktop")

    packages = data.get("packages")
    if packages is None:
        raise ConfigError("Missing required key: packages", key="packages")
    if not isinstance(packages, dict):
        raise ConfigError("Key packages must be a table/mapping", key="packages")

    return InstallProfile(
        disk=disk,
        hostname=hostname,
        username=username,
        desktop=desktop,
        usergroups=usergroups,
        packages=combine_packages(packages, desktop),
        stage3_url=_optional_str(data, "stage3_url", DEFAULT_STAGE3_URL) or DEFAULT_STAGE3_URL,
        mount_point=_optional_str(data, "mount_point", DEFAULT_MOUNT_POINT) or DEFAULT_MOUNT_POINT,
        files_dir=_optional_str(data, "files_dir", DEFAULT_FILES_DIR) or DEFAULT_FILES_DIR,
        chroot_script=_optional_str(data, "chroot_script", DEFAULT_CHROOT_SCRIPT) or DEFAULT_CHROOT_SCRIPT,
        first_boot_script=_optional_str(data, "first_boot_script", None),
        download_timeout=_optional_timeout(data),
    )


def describe_profile(profile: InstallProfile) -> None:
    logger.info("Using profile:")
    logger.info("Disk: %s", profile.disk)
    logger.info("Hostname: %s", profile.hostname)
    logger.info("User: %s Groups: %s", profile.username, ", ".join(profile.usergroups))
    logger.info("Desktop: %s", profile.desktop)
    logger.info("Packages (%d total):", len(profile.packages))
    logger.info("  %s", " ".join(profile.packages))
