# src/spotplane/config.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from spotplane.dataio import load_toml
from spotplane.errors import UserInputError
from spotplane.labels import SYMBOL_MODES
from spotplane.workspace import ensure_workspace_seeded, workspace_dir


@dataclass
class Settings:
    """
    The profile's TOML dict without its [_PROFILE_] section.
    .as_dict() feeds runtime.apply().
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def _profile_path(name: str) -> Path:
    return _profiles_dir() / f"{name}.toml"


# --- Metadata handling -----------------------------------------------------

def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """Return (settings_without_meta, resolved_name, resolved_description)."""
    meta = raw.get("_PROFILE_") or {}
    data = {k: v for k, v in raw.items() if k != "_PROFILE_"}
    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))
    return data, name, description


def _validate(data: dict[str, Any], source: str) -> None:
    deck = data.get("DECK", {}) or {}
    mode = deck.get("SYMBOL_MODE")
    if mode is not None and mode not in SYMBOL_MODES:
        raise UserInputError(
            f"{source}: DECK.SYMBOL_MODE must be one of {', '.join(SYMBOL_MODES)}, got {mode!r}."
        )
    order = deck.get("DEFAULT_ORDER")
    if order is not None and (not isinstance(order, int) or isinstance(order, bool)):
        raise UserInputError(f"{source}: DECK.DEFAULT_ORDER must be an integer, got {order!r}.")


# --- Public API ------------------------------------------------------------

def list_all_profiles() -> list[str]:
    pdir = _profiles_dir()
    if not pdir.exists():
        return []
    return sorted(p.stem for p in pdir.glob("*.toml"))


def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """[(name, description), ...]; unreadable profiles are listed by file name."""
    items: list[tuple[str, str]] = []
    for p in _profiles_dir().glob("*.toml"):
        try:
            _, nm, desc = _split_profile_data(load_toml(p), p.stem)
        except UserInputError:
            nm, desc = p.stem, "(unreadable profile)"
        items.append((nm, desc))
    return sorted(items, key=lambda t: t[0].lower())


def has_profile(name: str) -> bool:
    return _profile_path(name).exists()


def load_settings(name: str | None) -> Settings:
    """Load profile `name` (default 'default') from the workspace."""
    if not name:
        name = "default"

    path = _profile_path(name)
    if not path.exists():
        ensure_workspace_seeded()
    if not path.exists():
        raise UserInputError(f"Profile '{name}' not found at {path}")

    data, resolved_name, description = _split_profile_data(load_toml(path), path.stem)
    _validate(data, path.name)
    return Settings(data=data, name=resolved_name, description=description, _source=path)


def _current_profile_path() -> Path:
    p = _profiles_dir()
    p.mkdir(parents=True, exist_ok=True)
    return p / ".current"


def read_current_profile() -> str | None:
    try:
        s = _current_profile_path().read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return s[:-5] if s.lower().endswith(".toml") else (s or None)


def write_current_profile(name: str) -> None:
    nm = (name or "").strip()
    if nm.lower().endswith(".toml"):
        nm = nm[:-5]
    _current_profile_path().write_text(nm, encoding="utf-8")
