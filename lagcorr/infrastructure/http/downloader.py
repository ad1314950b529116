from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

import requests
from loguru import logger

from lagcorr.core.errors import DataFetchError


def _cache_hit(dest: Path, max_age_s: Optional[float]) -> bool:
    if not dest.exists() or dest.stat().st_size == 0:
        return False
    if max_age_s is None:
        return True

    age_s = time.time() - dest.stat().st_mtime
    if age_s >= max_age_s:
        logger.info("Cached {} is {:.1f} h old, downloading again", dest, age_s / 3600)
        return False
    return True


def download(
    url: str,
    dest: Path,
    timeout: int = 120,
    chunk_mb: int = 8,
    force: bool = False,
    max_age_s: Optional[float] = None,
) -> Path:
    """
    Stream ``url`` into ``dest``. An existing non-empty file is reused unless
    ``force`` is set or it is older than ``max_age_s`` seconds.
    """
    dest = Path(dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    if not force and _cache_hit(dest, max_age_s):
        logger.info("Using cached {} ({} bytes)", dest, dest.stat().st_size)
        return dest

    tmp = dest.with_suffix(dest.suffix + ".part")
    chunk_bytes = chunk_mb * 1024 * 1024

    logger.info("Downloading {} -> {}", url, dest)
    try:
        with requests.get(url, stream=True, timeout=timeout) as r:
            r.raise_for_status()
            with open(tmp, "wb") as f:
                for chunk in r.iter_content(chunk_size=chunk_bytes):
                    if chunk:
                        f.write(chunk)
    except requests.RequestException as e:
        tmp.unlink(missing_ok=True)
        raise DataFetchError(f"Download failed: {e}", url=url) from e

    tmp.replace(dest)
    logger.info("Downloaded {} ({} bytes)", dest, dest.stat().st_size)
    return dest
