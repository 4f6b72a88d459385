"""Unit tests for the keyword casing table."""

from __future__ import annotations

import logging

import pytest

from sqltree.keywords import DEFAULT_KEYWORDS, KeywordTable


@pytest.mark.parametrize(
    "keyword, expected",
    [
        ("select", "SELECT"),
        ("SELECT", "SELECT"),
        ("order by", "ORDER BY"),
        ("Insert Into", "INSERT INTO"),
        ("if not exists", "IF NOT EXISTS"),
        ("varchar", "VARCHAR"),
    ],
)
def test_upper(keyword, expected):
    assert DEFAULT_KEYWORDS.upper(keyword) == expected


def test_empty_keyword_is_silent(caplog):
    with caplog.at_level(logging.WARNING, logger="sqltree"):
        assert DEFAULT_KEYWORDS.upper("") == ""
    assert caplog.records == []


def test_unknown_keyword_is_echoed_and_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="sqltree"):
        assert DEFAULT_KEYWORDS.upper("having") == "having"
    [record] = caplog.records
    assert record.levelno == logging.WARNING
    assert record.getMessage() == "No upper case keyword for 'having'"


def test_contains_is_case_insensitive():
    assert "Where" in DEFAULT_KEYWORDS
    assert "having" not in DEFAULT_KEYWORDS
    assert 1 not in DEFAULT_KEYWORDS


def test_mapping_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_KEYWORDS.mapping["select"] = "select"  # type: ignore[index]


def test_extend_returns_new_table():
    extended = DEFAULT_KEYWORDS.extend(group_by="GROUP BY", having="HAVING")
    assert extended.upper("group by") == "GROUP BY"
    assert extended.upper("having") == "HAVING"
    assert "group by" not in DEFAULT_KEYWORDS
    assert len(extended) == len(DEFAULT_KEYWORDS) + 2


def test_custom_table_lower_cases_keys():
    table = KeywordTable({"LIMIT": "LIMIT"})
    assert table.upper("limit") == "LIMIT"
