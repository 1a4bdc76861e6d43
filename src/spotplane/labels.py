# -----------------------------------------------------------------------------
#  labels.py
#  Presentation labels for symbol ids (numbers or glyphs)
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

from spotplane.dataio import data_path, load_toml
from spotplane.errors import UserInputError

SYMBOL_MODES = ("emojis", "numbers")

GLYPHS_FILE = "glyphs.toml"


@dataclass(frozen=True)
class GlyphTable:
    version: int
    sets: Mapping[str, tuple[str, ...]]
    fallback: str

    def ordered_sets(self) -> list[tuple[str, tuple[str, ...]]]:
        """Sets in lookup order: highest order key first, then other keys in reverse."""
        return sorted(self.sets.items(), key=lambda kv: _set_rank(kv[0]), reverse=True)


def _set_rank(key: str) -> tuple[int, int, str]:
    try:
        return 1, int(key), ""
    except ValueError:
        return 0, 0, key


def parse_glyph_table(doc: Mapping, source: str = GLYPHS_FILE) -> GlyphTable:
    raw_sets = doc.get("sets")
    if not isinstance(raw_sets, Mapping) or not raw_sets:
        raise UserInputError(f"{source}: missing or empty [sets] table.")

    sets: dict[str, tuple[str, ...]] = {}
    for key, glyphs in raw_sets.items():
        if not isinstance(glyphs, list) or not glyphs or not all(isinstance(g, str) for g in glyphs):
            raise UserInputError(f"{source}: set '{key}' must be a non-empty list of strings.")
        sets[str(key)] = tuple(glyphs)

    fallback = str(doc.get("fallback") or max(sets, key=lambda k: len(sets[k])))
    if fallback not in sets:
        raise UserInputError(f"{source}: fallback set '{fallback}' is not defined under [sets].")

    try:
        version = int(doc.get("version", 0))
    except (TypeError, ValueError):
        raise UserInputError(f"{source}: version must be an integer.") from None

    return GlyphTable(version=version, sets=sets, fallback=fallback)


@lru_cache(maxsize=1)
def load_glyph_table() -> GlyphTable:
    """Glyph table from the workspace (if overridden) or the packaged default."""
    path = data_path(GLYPHS_FILE)
    return parse_glyph_table(load_toml(path), source=path.name)


def _glyph_labels(count: int, table: GlyphTable) -> list[str]:
    for _, glyphs in table.ordered_sets():
        if len(glyphs) >= count:
            return list(glyphs[:count])
    # nothing large enough: cycle through the fallback set
    fallback = table.sets[table.fallback]
    return [fallback[i % len(fallback)] for i in range(count)]


def make_labels(count: int, mode: str, table: GlyphTable | None = None) -> list[str]:
    """
    Return `count` labels for symbol ids 0..count-1.

    mode "numbers" gives "1".."count"; mode "emojis" draws glyphs from `table`
    (the configured glyph table when omitted). Labels carry no structural meaning.
    """
    if mode not in SYMBOL_MODES:
        raise ValueError(f"Unknown symbol mode {mode!r}; expected one of {', '.join(SYMBOL_MODES)}")
    if count < 0:
        raise ValueError("count must be non-negative")
    if mode == "numbers":
        return [str(i + 1) for i in range(count)]
    return _glyph_labels(count, table if table is not None else load_glyph_table())
