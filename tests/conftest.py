"""Shared fixtures for graph engine tests."""

from __future__ import annotations

import pytest

from tasks import task_cache
from tasks.models import parse_tasks


def make_tasks(*records):
    """Build Task models from compact (id, deps) pairs or full dicts."""
    raw = []
    for rec in records:
        if isinstance(rec, dict):
            raw.append(rec)
        else:
            tid, deps = rec
            raw.append({"id": tid, "title": f"Task {tid}", "dependencies": list(deps)})
    return parse_tasks(raw)


@pytest.fixture
def chain():
    return make_tasks((1, []), (2, [1]), (3, [2]))


@pytest.fixture
def diamond():
    return make_tasks((1, []), (2, [1]), (3, [1]), (4, [2, 3]))


@pytest.fixture
def cyclic():
    return make_tasks(("A", ["C"]), ("B", ["A"]), ("C", ["B"]), ("D", []))


@pytest.fixture(autouse=True)
def _fresh_view_cache():
    task_cache.clear_view_cache()
    yield
    task_cache.clear_view_cache()
