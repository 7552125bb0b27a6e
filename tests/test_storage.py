import json

import pytest

from errors import SummaryFileError
from shaper import format_for_grafana
from storage import (
    append_summary,
    full_path,
    list_snapshots,
    load_full_result,
    load_summary_history,
    load_violations,
    persist,
    snapshot_stamp,
    summary_path,
    violations_path,
    write_snapshots,
)


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_first_run_creates_history_with_one_record(out_dir, axe_result, fixed_now):
    formatted = format_for_grafana(axe_result, now=fixed_now)
    files = persist(formatted, out_dir, millis=1714555800125)

    assert files.summary == out_dir / "accessibility-summary.json"
    assert _read(files.summary) == [formatted.summary.to_dict()]
    assert files.violations.name == "accessibility-violations-1714555800125.json"
    assert files.full.name == "accessibility-full-1714555800125.json"
    assert _read(files.violations) == [d.to_dict() for d in formatted.violations]
    assert _read(files.full) == axe_result


def test_run_appends_to_existing_history(out_dir, axe_result):
    old = [{"timestamp": f"2024-01-0{i}T00:00:00.000Z", "url": "https://example.com/", "violations": i}
           for i in range(1, 4)]
    summary_path(out_dir).write_text(json.dumps(old), encoding="utf-8")

    formatted = format_for_grafana(axe_result)
    persist(formatted, out_dir)

    history = _read(summary_path(out_dir))
    assert len(history) == 4
    assert history[:3] == old
    assert history[3] == formatted.summary.to_dict()


def test_malformed_history_aborts_before_any_write(out_dir, axe_result):
    bad = '[{"timestamp": "2024-01-01T00:00:00.000Z",'
    summary_path(out_dir).write_text(bad, encoding="utf-8")

    with pytest.raises(SummaryFileError):
        persist(format_for_grafana(axe_result), out_dir)

    assert summary_path(out_dir).read_text(encoding="utf-8") == bad
    assert sorted(p.name for p in out_dir.iterdir()) == ["accessibility-summary.json"]


def test_history_must_be_an_array(tmp_path):
    path = tmp_path / "accessibility-summary.json"
    path.write_text('{"violations": 1}', encoding="utf-8")
    with pytest.raises(SummaryFileError, match="expected a JSON array"):
        load_summary_history(path)


def test_missing_history_loads_empty(tmp_path):
    assert load_summary_history(tmp_path / "nope.json") == []


def test_append_leaves_no_temp_files(tmp_path, axe_result):
    path = tmp_path / "accessibility-summary.json"
    summary = format_for_grafana(axe_result).summary
    append_summary(path, summary)
    append_summary(path, summary)
    assert [p.name for p in tmp_path.iterdir()] == ["accessibility-summary.json"]
    assert len(_read(path)) == 2


def test_snapshot_stamp_skips_taken_names(tmp_path):
    violations_path(tmp_path, 1000).write_text("[]", encoding="utf-8")
    full_path(tmp_path, 1001).write_text("{}", encoding="utf-8")
    assert snapshot_stamp(tmp_path, 1000) == 1002
    assert snapshot_stamp(tmp_path, 999) == 999


def test_successive_runs_never_share_snapshot_names(out_dir, axe_result):
    formatted = format_for_grafana(axe_result)
    first = persist(formatted, out_dir, millis=5000)
    second = persist(formatted, out_dir, millis=5000)

    assert first.violations != second.violations
    assert first.full != second.full
    assert len(_read(summary_path(out_dir))) == 2


def test_snapshots_share_one_stamp(tmp_path, axe_result):
    written = write_snapshots(tmp_path, format_for_grafana(axe_result))
    v_stamp = written["violations"].name[len("accessibility-violations-"):-len(".json")]
    f_stamp = written["full"].name[len("accessibility-full-"):-len(".json")]
    assert v_stamp == f_stamp


def test_list_snapshots_newest_first(tmp_path, axe_result):
    formatted = format_for_grafana(axe_result)
    write_snapshots(tmp_path, formatted, millis=100)
    write_snapshots(tmp_path, formatted, millis=300)
    violations_path(tmp_path, 200).write_text("[]", encoding="utf-8")
    (tmp_path / "accessibility-full-latest.json").write_text("{}", encoding="utf-8")

    snaps = list_snapshots(tmp_path)
    assert [s.stamp for s in snaps] == [300, 200, 100]
    assert snaps[1].full is None
    assert snaps[0].full == full_path(tmp_path, 300)


def test_non_ascii_is_kept_readable(out_dir):
    result = {"url": "https://example.com/ü", "violations": [{"id": "x", "help": "Élément sans libellé"}]}
    files = persist(format_for_grafana(result), out_dir)
    assert "Élément sans libellé" in files.violations.read_text(encoding="utf-8")


def test_snapshot_readers(tmp_path, axe_result):
    formatted = format_for_grafana(axe_result)
    written = write_snapshots(tmp_path, formatted, millis=42)

    assert [r["id"] for r in load_violations(written["violations"])] == ["a", "b", "c"]
    assert load_full_result(written["full"])["url"] == "https://example.com/"
    with pytest.raises(ValueError):
        load_violations(written["full"])


def test_history_records_must_be_objects(out_dir, axe_result):
    summary_path(out_dir).write_text('[1, "x"]', encoding="utf-8")

    with pytest.raises(SummaryFileError, match="record 0 is not an object"):
        persist(format_for_grafana(axe_result), out_dir)

    assert summary_path(out_dir).read_text(encoding="utf-8") == '[1, "x"]'
    assert [p.name for p in out_dir.iterdir()] == ["accessibility-summary.json"]
