"""
Pytest configuration and shared fixtures for the test suite.
"""

import pytest
from pathlib import Path

import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from logparse.config.settings import ParseOptions
from logparse.parser.matcher import Group
from tests.samples import (
    BAD_TIMESTAMP,
    COMBAT,
    CUSTOM_EMOTE_JANE,
    EMOTE_JANE,
    MALFORMED,
    PARTY_JANE,
    SAY_JANE,
    SAY_JOHN,
    SAY_STRANGER,
)


@pytest.fixture
def sample_log_lines():
    """Sample ACT log lines covering every kind of line."""
    return [
        SAY_JANE,
        EMOTE_JANE,
        COMBAT,
        SAY_JOHN,
        MALFORMED,
        SAY_STRANGER,
        PARTY_JANE,
        BAD_TIMESTAMP,
        CUSTOM_EMOTE_JANE,
    ]

@pytest.fixture
def people_group():
    """Group containing Jane Doe and John Smith."""
    return Group.of("people", "People", ["Jane Doe", "John Smith"])

@pytest.fixture
def write_log(tmp_path):
    """Factory writing lines to a .log file under tmp_path."""

    def _write(lines, name="Network_20220305.log"):
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write

@pytest.fixture
def make_options(people_group):
    """Factory for ParseOptions with test defaults."""

    def _make(**changes):
        changes.setdefault("group", people_group)
        return ParseOptions().copy(**changes)

    return _make
