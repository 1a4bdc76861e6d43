# tests/test_labels.py
from __future__ import annotations

import pytest

from spotplane.dataio import data_path
from spotplane.errors import UserInputError
from spotplane.labels import (
    GlyphTable,
    load_glyph_table,
    make_labels,
    parse_glyph_table,
)
from spotplane.workspace import workspace_dir


def test_numbers_mode():
    assert make_labels(7, "numbers") == ["1", "2", "3", "4", "5", "6", "7"]
    assert make_labels(0, "numbers") == []


def test_packaged_table():
    table = load_glyph_table()
    assert table.version == 1
    assert table.fallback == "7"
    assert {k: len(v) for k, v in table.sets.items()} == {
        "2": 7, "3": 13, "5": 31, "7": 57, "11": 133,
    }


@pytest.mark.parametrize("count", [7, 13, 21, 57, 73, 133])
def test_highest_order_set_is_used(count):
    # every packaged deck size fits in the order 11 set
    table = load_glyph_table()
    assert make_labels(count, "emojis") == list(table.sets["11"][:count])


def test_numeric_keys_rank_by_value():
    table = GlyphTable(
        version=1,
        sets={"9": ("a", "b"), "10": ("c", "d", "e"), "zz": ("f", "g", "h", "i")},
        fallback="zz",
    )
    assert [k for k, _ in table.ordered_sets()] == ["10", "9", "zz"]
    assert make_labels(2, "emojis", table) == ["c", "d"]
    assert make_labels(4, "emojis", table) == ["f", "g", "h", "i"]


def test_emoji_labels_distinct_when_a_set_fits():
    labels = make_labels(91, "emojis")
    assert len(set(labels)) == 91


def test_oversized_deck_cycles_fallback():
    table = load_glyph_table()
    labels = make_labels(183, "emojis")
    assert len(labels) == 183
    assert labels[:57] == list(table.sets["7"])
    assert labels[57] == labels[0]


def test_custom_table():
    table = GlyphTable(version=2, sets={"a": ("x", "y", "z"), "b": ("p", "q")}, fallback="b")
    assert make_labels(2, "emojis", table) == ["p", "q"]
    assert make_labels(3, "emojis", table) == ["x", "y", "z"]
    assert make_labels(5, "emojis", table) == ["p", "q", "p", "q", "p"]


def test_unknown_mode_and_bad_count():
    with pytest.raises(ValueError):
        make_labels(3, "letters")
    with pytest.raises(ValueError):
        make_labels(-1, "numbers")


@pytest.mark.parametrize("doc", [
    {},
    {"sets": {}},
    {"sets": {"2": []}},
    {"sets": {"2": ["a", 3]}},
    {"sets": {"2": ["a"]}, "fallback": "9"},
    {"sets": {"2": ["a"]}, "version": "one"},
])
def test_parse_errors(doc):
    with pytest.raises(UserInputError):
        parse_glyph_table(doc, source="test.toml")


def test_parse_defaults_fallback_to_largest():
    table = parse_glyph_table({"sets": {"small": ["a"], "big": ["a", "b", "c"]}})
    assert table.fallback == "big"
    assert table.version == 0


def test_workspace_override():
    target = workspace_dir() / "data" / "glyphs.toml"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text('version = 9\n[sets]\n"x" = ["A", "B", "C", "D", "E", "F", "G"]\n', encoding="utf-8")

    assert data_path("glyphs.toml") == target
    load_glyph_table.cache_clear()
    assert make_labels(7, "emojis") == ["A", "B", "C", "D", "E", "F", "G"]


def test_broken_workspace_table_is_a_user_error():
    target = workspace_dir() / "data" / "glyphs.toml"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text("[sets\n", encoding="utf-8")
    load_glyph_table.cache_clear()
    with pytest.raises(UserInputError):
        load_glyph_table()
