# tests/test_validate_keywords.py
import pytest

from cardioguard.engine.keywords import KeywordTable, first_matching
from cardioguard.validate_keywords import collect_table_errors, validate_keyword_tables


def test_shipped_tables_are_valid():
    assert collect_table_errors() == []


def test_bad_tables_are_reported():
    tables = [
        KeywordTable("empty", ()),
        KeywordTable("shouty", ("Chest Pain",)),
        KeywordTable("dupes", ("dizzy", "dizzy", " ")),
        KeywordTable("dupes", ("ok",)),
    ]
    errors = collect_table_errors(tables)
    assert "Table 'empty': no keywords" in errors
    assert "Table 'shouty': 'Chest Pain' is not lower-case" in errors
    assert "Table 'dupes': duplicate keyword 'dizzy'" in errors
    assert "Table 'dupes': blank keyword" in errors
    assert "Table 'dupes': duplicate table name" in errors


def test_validate_exits_cleanly_when_valid(capsys):
    validate_keyword_tables()
    assert "validated successfully" in capsys.readouterr().out


def test_validate_exits_on_errors(monkeypatch):
    monkeypatch.setattr(
        "cardioguard.validate_keywords.collect_table_errors", lambda: ["Table 'x': no keywords"]
    )
    with pytest.raises(SystemExit) as exc:
        validate_keyword_tables()
    assert exc.value.code == 1


def test_first_matching_respects_order():
    rules = [(KeywordTable("a", ("pain",)), "first"), (KeywordTable("b", ("chest pain",)), "second")]
    assert first_matching("chest pain", rules) == "first"
    assert first_matching("nothing here", rules) is None


def test_first_hit_returns_first_keyword_in_table_order():
    table = KeywordTable("t", ("breathe", "can't"))
    assert table.first_hit("i can't breathe") == "breathe"
    assert table.first_hit("fine") is None
