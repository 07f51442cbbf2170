from __future__ import annotations

import logging
import shutil
import urllib.error
import urllib.request
from pathlib import Path

from ..errors import FetchError, PreconditionError
from ..logging_utils import success
from .command import run_cmd
from .env import Paths

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


def archive_path(dest_dir: str, paths: Paths) -> Path:
    return Path(dest_dir) / paths.stage3_name


def download_archive(
    url: str,
    dest_dir: str,
    *,
    paths: Paths,
    timeout_s: float = 60.0,
    dry_run: bool = False,
) -> Path:
    """Stream the stage3 tarball to <dest_dir>/stage3.tar.xz.

    No retry and no resume: an interrupted transfer leaves a truncated file
    behind, which tar rejects at extraction time.
    """

    out = archive_path(dest_dir, paths)
    logger.info("Downloading stage3 tarball from %s ...", url)
    if dry_run:
        logger.info("Would download %s -> %s", url, out)
        return out

    try:
        with urllib.request.urlopen(url, timeout=timeout_s) as resp, out.open("wb") as fh:
            shutil.copyfileobj(resp, fh, _CHUNK_SIZE)
    except urllib.error.HTTPError as e:
        raise FetchError(f"Download of {url} failed: HTTP {e.code} {e.reason}") from e
    except urllib.error.URLError as e:
        raise FetchError(f"Download of {url} failed: {e.reason}") from e
    except OSError as e:
        raise FetchError(f"Download of {url} failed: {e}") from e

    success(logger, "Download complete: %s", out)
    return out


def extract_archive(dest_dir: str, *, paths: Paths, dry_run: bool = False) -> None:
    """Unpack the stage3 tarball into dest_dir.

    Extended attributes are kept and ownership is restored by numeric id,
    since the target's passwd/group files do not exist yet.
    """

    archive = archive_path(dest_dir, paths)
    if not dry_run and not archive.is_file():
        raise PreconditionError(f"Stage3 tarball not found: {archive}")

    logger.info("Extracting and installing stage3 tarball...")
    run_cmd(
        [
            "tar",
            "xpvf",
            str(archive),
            "--xattrs-include=*.*",
            "--numeric-owner",
            "-C",
            dest_dir,
        ],
        dry_run=dry_run,
    )
    success(logger, "Stage3 successfully installed into %s", dest_dir)
