"""Pytest configuration for the sensornode test suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

root_path = Path(__file__).resolve().parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

from sensornode.records import ParameterRecord  # noqa: E402


@pytest.fixture
def by_label():
    """Index a record list by (label, channel)."""

    def _index(records: list[ParameterRecord]) -> dict[tuple[str, int], ParameterRecord]:
        return {(r.label, r.channel): r for r in records}

    return _index
