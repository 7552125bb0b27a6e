# app.py — dashboard over axe_scanner.py output (read-only)
# Run: python3 -m streamlit run app.py
from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pandas as pd
import streamlit as st

import config
from dashboard_data import (
    df_to_csv_bytes,
    df_to_json_bytes,
    history_to_df,
    latest_run,
    summary_for_snapshot,
    severity_trend,
    snapshot_label,
    violations_to_df,
)
from errors import SummaryFileError
from report import export_report
from shaper import SEVERITY_LEVELS
from storage import list_snapshots, load_full_result, load_summary_history, load_violations, summary_path
from utils import safe_filename

# -----------------------------
# UI
# -----------------------------
st.set_page_config(page_title=config.APP_NAME, page_icon="✅", layout="wide", initial_sidebar_state="collapsed")
st.markdown(f"""
<style>
:root {{ --wy-primary: {config.PRIMARY}; }}
#MainMenu{{visibility:hidden}} footer{{visibility:hidden}}
.card {{ border:1px solid #e2e8f0; border-radius:16px; padding:18px; box-shadow:0 2px 18px rgba(0,0,0,0.06); }}
.stDownloadButton > button {{ background:var(--wy-primary); color:#fff; border:none; border-radius:999px; padding:8px 14px; font-weight:700; }}
</style>
""", unsafe_allow_html=True)

st.markdown(f"### {config.APP_NAME}")
out_dir = st.text_input("Output directory", value=config.OUTPUT_DIR, key="out_dir")
st.caption(f"Reading `{summary_path(out_dir)}` and its snapshot files.")

try:
    history = load_summary_history(summary_path(out_dir))
except SummaryFileError as e:
    st.error(f"Summary history is unreadable: {e}")
    st.stop()
df_hist = history_to_df(history)

trends_tab, violations_tab, history_tab = st.tabs(["📈 Trends", "🧾 Violations", "📁 History"])

# -----------------------------
# TRENDS TAB
# -----------------------------
with trends_tab:
    st.markdown('<div class="card">', unsafe_allow_html=True)
    st.subheader("Latest run")
    last = latest_run(df_hist)
    if not last:
        st.info("No scans yet. Run `python3 axe_scanner.py <url>` first.")
    else:
        when = "—" if pd.isna(last["timestamp"]) else last["timestamp"].strftime("%Y-%m-%d %H:%M")
        st.caption(f"{last.get('url') or '-'} · {when} UTC")
        cols = st.columns(len(SEVERITY_LEVELS) + 1)
        cols[0].metric("Violations", int(last["violations"]))
        for col, level in zip(cols[1:], SEVERITY_LEVELS):
            col.metric(level.capitalize(), int(last[level]))
    st.markdown('</div>', unsafe_allow_html=True)

    if not df_hist.empty:
        st.markdown('<div class="card">', unsafe_allow_html=True)
        st.subheader("Violations by severity over time")
        urls = sorted(u for u in df_hist["url"].dropna().unique())
        pick = st.selectbox("URL", ["All URLs"] + urls, key="trend_url")
        st.line_chart(severity_trend(df_hist, None if pick == "All URLs" else pick))
        st.markdown('</div>', unsafe_allow_html=True)

# -----------------------------
# VIOLATIONS TAB
# -----------------------------
with violations_tab:
    st.markdown('<div class="card">', unsafe_allow_html=True)
    st.subheader("Run snapshot")
    snaps = [s for s in list_snapshots(out_dir) if s.violations]
    if not snaps:
        st.caption("No violation snapshots found.")
    else:
        by_stamp = {s.stamp: s for s in snaps}
        chosen = by_stamp[st.selectbox("Snapshot", list(by_stamp), format_func=snapshot_label, key="snapshot")]
        rows = load_violations(chosen.violations)
        df = violations_to_df(rows)
        full = load_full_result(chosen.full) if chosen.full else {}
        scanned_url = full.get("url") or "-"
        st.caption(f"{scanned_url} · {len(df)} violation(s)")
        if df.empty:
            st.success("No violations in this run.")
        else:
            st.dataframe(df, use_container_width=True, hide_index=True)

        base = f"axe_{safe_filename(full.get('url', ''))}_{chosen.stamp}"
        st.download_button("⬇️ CSV", data=df_to_csv_bytes(df), file_name=f"{base}.csv", mime="text/csv", use_container_width=True, key="snap_csv")
        st.download_button("⬇️ JSON", data=df_to_json_bytes(df), file_name=f"{base}.json", mime="application/json", use_container_width=True, key="snap_json")

        run_summary = summary_for_snapshot(history, rows, full)
        with tempfile.TemporaryDirectory() as tmp:
            pdf_path = export_report(os.path.join(tmp, f"{base}.pdf"), run_summary, rows)
            pdf_bytes = Path(pdf_path).read_bytes()
        st.download_button("⬇️ PDF", data=pdf_bytes, file_name=f"{base}.pdf", mime="application/pdf", use_container_width=True, key="snap_pdf")
    st.markdown('</div>', unsafe_allow_html=True)

# -----------------------------
# HISTORY TAB
# -----------------------------
with history_tab:
    st.markdown('<div class="card">', unsafe_allow_html=True)
    st.subheader("Run history")
    if df_hist.empty:
        st.caption("No runs recorded.")
    else:
        st.dataframe(df_hist.iloc[::-1], use_container_width=True, hide_index=True)
        st.download_button("⬇️ CSV", data=df_to_csv_bytes(df_hist), file_name="accessibility-summary.csv",
                           mime="text/csv", use_container_width=True, key="hist_csv")
    st.markdown('</div>', unsafe_allow_html=True)
