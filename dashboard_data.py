"""pandas views over the scanner's JSON output, used by the Streamlit dashboard."""
import datetime as dt
from typing import Any, Dict, List

import pandas as pd

from shaper import SEVERITY_LEVELS

SUMMARY_COLUMNS = ["timestamp", "url", "violations", "passes", "incomplete", "inapplicable", *SEVERITY_LEVELS]
DETAIL_COLUMNS = ["timestamp", "id", "impact", "description", "help", "helpUrl", "nodes", "tags"]
IMPACT_ORDER = {level: i for i, level in enumerate(SEVERITY_LEVELS)}


def history_to_df(history: List[Dict[str, Any]]) -> pd.DataFrame:
    if not history:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.DataFrame(history)
    for col in SUMMARY_COLUMNS:
        if col not in df.columns:
            df[col] = None
    df = df[SUMMARY_COLUMNS].copy()
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True, errors="coerce")
    # older or hand-edited records may lack a count
    counts = SUMMARY_COLUMNS[2:]
    df[counts] = df[counts].apply(pd.to_numeric, errors="coerce").fillna(0).astype(int)
    return df


def severity_trend(df: pd.DataFrame, url: str = None) -> pd.DataFrame:
    """Per-run severity counts indexed by timestamp, optionally for one URL."""
    if url:
        df = df[df["url"] == url]
    return df.set_index("timestamp")[list(SEVERITY_LEVELS)].fillna(0).astype(int)


def latest_run(df: pd.DataFrame) -> Dict[str, Any]:
    if df.empty:
        return {}
    return df.iloc[-1].to_dict()


def violations_to_df(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=DETAIL_COLUMNS)
    df = pd.DataFrame(rows)
    df = df[[c for c in DETAIL_COLUMNS if c in df.columns]].copy()
    df["impact_rank"] = df["impact"].map(lambda s: IMPACT_ORDER.get(s, len(IMPACT_ORDER)))
    df = df.sort_values(["impact_rank", "nodes"], ascending=[True, False], kind="stable").drop(columns=["impact_rank"])
    return df.reset_index(drop=True)


def df_to_csv_bytes(df: pd.DataFrame) -> bytes:  return df.to_csv(index=False).encode("utf-8")
def df_to_json_bytes(df: pd.DataFrame) -> bytes: return df.to_json(orient="records", indent=2).encode("utf-8")


def summary_for_snapshot(history: List[Dict[str, Any]], rows: List[Dict[str, Any]],
                         full: Dict[str, Any]) -> Dict[str, Any]:
    """The summary record of the run that wrote *rows*, rebuilt from *full* when absent."""
    if rows:
        for record in reversed(history):
            if record.get("timestamp") == rows[0].get("timestamp"):
                return record
    summary = {
        "url": full.get("url"),
        "timestamp": rows[0].get("timestamp") if rows else full.get("timestamp"),
        "violations": len(rows),
        "passes": len(full.get("passes") or []),
        "incomplete": len(full.get("incomplete") or []),
        "inapplicable": len(full.get("inapplicable") or []),
    }
    for level in SEVERITY_LEVELS:
        summary[level] = sum(1 for r in rows if r.get("impact") == level)
    return summary


def snapshot_label(stamp: int) -> str:
    """Millisecond-precision label, so runs in the same second stay distinct."""
    when = dt.datetime.fromtimestamp(stamp / 1000, dt.timezone.utc)
    return when.strftime("%Y-%m-%d %H:%M:%S.") + f"{stamp % 1000:03d} UTC"
