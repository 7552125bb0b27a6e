import datetime as dt
import json
import logging
import os
import pathlib
import tempfile
import time
from typing import Any, Optional

import requests
from slugify import slugify

import config
from errors import AxeUnavailableError

logger = logging.getLogger(__name__)

AXE_FILENAME = "axe.min.js"


def ensure_axe_js(assets_dir: Optional[str] = None, cdn: Optional[str] = None) -> str:
    """Ensure axe.min.js exists locally, download from CDN if missing."""
    assets = pathlib.Path(assets_dir or config.ASSETS_DIR)
    axe_path = assets / AXE_FILENAME
    if axe_path.exists() and axe_path.stat().st_size > 0:
        logger.debug("Using cached axe-core at %s", axe_path)
        return str(axe_path)
    url = cdn or config.AXE_CDN
    logger.info("Downloading axe-core from %s", url)
    try:
        r = requests.get(url, timeout=config.AXE_DOWNLOAD_TIMEOUT)
        r.raise_for_status()
    except requests.RequestException as e:
        raise AxeUnavailableError(f"Could not download axe-core from {url}: {e}") from e
    if not r.content:
        raise AxeUnavailableError(f"Empty axe-core download from {url}")
    assets.mkdir(parents=True, exist_ok=True)
    axe_path.write_bytes(r.content)
    return str(axe_path)


def safe_filename(name: str) -> str:
    return slugify(name or "report")


def iso_timestamp(when: Optional[dt.datetime] = None) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix, e.g. 2024-05-01T09:30:00.125Z."""
    when = when or dt.datetime.now(dt.timezone.utc)
    if when.tzinfo is None:
        when = when.replace(tzinfo=dt.timezone.utc)
    when = when.astimezone(dt.timezone.utc)
    return when.strftime("%Y-%m-%dT%H:%M:%S.") + f"{when.microsecond // 1000:03d}Z"


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def read_json(path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path, data: Any) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def write_json_atomic(path, data: Any) -> None:
    # temp file in the target directory so os.replace never crosses filesystems
    target = pathlib.Path(path)
    fd, tmp = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, target)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
