# src/spotplane/dataio.py
from __future__ import annotations

from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path

from spotplane.errors import UserInputError
from spotplane.workspace import workspace_dir

try:
    import tomllib as _toml  # py311+
except ImportError:  # pragma: no cover
    import tomli as _toml  # type: ignore


def data_path(rel: str) -> Path:
    """
    Resolve a data file with override semantics:

      1) <Workspace>/data/<rel>  (if present)
      2) Packaged resource: spotplane/data/<rel>
    """
    rel = rel.lstrip("/\\")
    p = workspace_dir() / "data" / rel
    if p.exists():
        return p

    ref = pkg_files("spotplane") / "data" / rel
    # materialize to a real path (needed for zip resources)
    with as_file(ref) as real:
        return Path(real)


def load_toml(path: Path) -> dict:
    """Parse a TOML file; syntax errors become a one-line UserInputError."""
    try:
        with path.open("rb") as f:
            return _toml.load(f)
    except _toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        loc = f" (at line {lineno})" if lineno is not None else ""
        raise UserInputError(f"reading {path.name}: {getattr(e, 'msg', e)}{loc}.") from None
