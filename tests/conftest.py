"""Shared fixtures for the scanner tests."""
import datetime as dt

import pytest

import config


def violation(rule_id, impact, nodes=1, tags=("wcag2a",)):
    return {
        "id": rule_id,
        "impact": impact,
        "description": f"{rule_id} description",
        "help": f"{rule_id} help",
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.9/{rule_id}",
        "nodes": [{"target": [f"#n{i}"], "html": "<div></div>"} for i in range(nodes)],
        "tags": list(tags),
    }


@pytest.fixture
def make_violation():
    return violation


@pytest.fixture
def axe_result():
    """The worked example: 3 violations, 10 passes, 2 incomplete, 0 inapplicable."""
    return {
        "url": "https://example.com/",
        "timestamp": "2024-05-01T09:30:00.000Z",
        "testEngine": {"name": "axe-core", "version": "4.9.1"},
        "violations": [
            violation("a", "critical", nodes=2, tags=("cat.color", "wcag2aa", "wcag143")),
            violation("b", "serious"),
            violation("c", "serious", nodes=3),
        ],
        "passes": [{"id": f"p{i}"} for i in range(10)],
        "incomplete": [{"id": "i1"}, {"id": "i2"}],
        "inapplicable": [],
    }


@pytest.fixture
def fixed_now():
    return dt.datetime(2024, 5, 1, 9, 30, 0, 125000, tzinfo=dt.timezone.utc)


@pytest.fixture
def out_dir(tmp_path, monkeypatch):
    """Point OUTPUT_DIR at a fresh temp directory."""
    monkeypatch.setattr(config, "OUTPUT_DIR", str(tmp_path))
    return tmp_path
