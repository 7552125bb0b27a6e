"""On-disk layout of scan output.

``accessibility-summary.json`` is a JSON array that grows by one record per
run. Each run also writes a violations snapshot and the raw axe result, both
stamped with the run's epoch milliseconds.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional, Union

import config
from errors import SummaryFileError
from shaper import FormattedResults, SummaryRecord
from utils import epoch_millis, read_json, write_json, write_json_atomic

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class PersistedFiles(NamedTuple):
    summary: Path
    violations: Path
    full: Path


class Snapshot(NamedTuple):
    stamp: int
    violations: Optional[Path]
    full: Optional[Path]


def summary_path(out_dir: PathLike) -> Path:
    return Path(out_dir) / config.SUMMARY_FILE


def violations_path(out_dir: PathLike, stamp: int) -> Path:
    return Path(out_dir) / f"{config.VIOLATIONS_PREFIX}{stamp}.json"


def full_path(out_dir: PathLike, stamp: int) -> Path:
    return Path(out_dir) / f"{config.FULL_PREFIX}{stamp}.json"


def load_summary_history(path: PathLike) -> List[Dict[str, Any]]:
    path = Path(path)
    if not path.exists():
        return []
    try:
        history = read_json(path)
    except ValueError as e:  # JSONDecodeError, UnicodeDecodeError
        raise SummaryFileError(path, f"invalid JSON ({e})") from e
    if not isinstance(history, list):
        raise SummaryFileError(path, f"expected a JSON array, found {type(history).__name__}")
    for i, record in enumerate(history):
        if not isinstance(record, dict):
            raise SummaryFileError(path, f"record {i} is not an object")
    return history


def append_summary(path: PathLike, record: SummaryRecord,
                   history: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
    """Append *record* to the history at *path* and write it back.

    *history* skips the read when the caller already loaded the file.
    """
    history = list(load_summary_history(path) if history is None else history)
    history.append(record.to_dict())
    write_json_atomic(path, history)
    logger.debug("Summary history %s now holds %d run(s)", path, len(history))
    return history


def snapshot_stamp(out_dir: PathLike, millis: Optional[int] = None) -> int:
    stamp = epoch_millis() if millis is None else millis
    while violations_path(out_dir, stamp).exists() or full_path(out_dir, stamp).exists():
        stamp += 1
    return stamp


def write_snapshots(out_dir: PathLike, formatted: FormattedResults,
                    millis: Optional[int] = None) -> Dict[str, Path]:
    stamp = snapshot_stamp(out_dir, millis)
    v_path = violations_path(out_dir, stamp)
    f_path = full_path(out_dir, stamp)
    write_json(v_path, [d.to_dict() for d in formatted.violations])
    write_json(f_path, formatted.full_results)
    logger.debug("Wrote %s and %s", v_path, f_path)
    return {"violations": v_path, "full": f_path}


def persist(formatted: FormattedResults, out_dir: Optional[PathLike] = None,
            millis: Optional[int] = None) -> PersistedFiles:
    out_dir = Path(out_dir if out_dir is not None else config.OUTPUT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    s_path = summary_path(out_dir)
    # validate the history before anything touches the disk
    history = load_summary_history(s_path)
    append_summary(s_path, formatted.summary, history=history)
    snaps = write_snapshots(out_dir, formatted, millis=millis)
    return PersistedFiles(summary=s_path, violations=snaps["violations"], full=snaps["full"])


# -----------------------------
# Readers (dashboard)
# -----------------------------
def _stamp_of(path: Path, prefix: str) -> Optional[int]:
    digits = path.name[len(prefix):-len(".json")]
    return int(digits) if digits.isdigit() else None


def list_snapshots(out_dir: PathLike) -> List[Snapshot]:
    """All snapshot stamps under *out_dir*, newest first."""
    out_dir = Path(out_dir)
    found: Dict[int, Dict[str, Path]] = {}
    if not out_dir.is_dir():
        return []
    for kind, prefix in (("violations", config.VIOLATIONS_PREFIX), ("full", config.FULL_PREFIX)):
        for p in out_dir.glob(f"{prefix}*.json"):
            stamp = _stamp_of(p, prefix)
            if stamp is not None:
                found.setdefault(stamp, {})[kind] = p
    return [Snapshot(stamp, found[s].get("violations"), found[s].get("full"))
            for s in sorted(found, reverse=True)]


def load_violations(path: PathLike) -> List[Dict[str, Any]]:
    data = read_json(path)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of violations")
    return data


def load_full_result(path: PathLike) -> Dict[str, Any]:
    data = read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return data
