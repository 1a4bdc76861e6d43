# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
import sys

from spotplane.errors import UserInputError


def clear_screen() -> None:
    """Clear the terminal (ANSI on POSIX, 'cls' on Windows); no-op when piped."""
    if not sys.stdout.isatty():
        return
    if os.name == "nt":
        os.system("cls")
    else:
        sys.stdout.write("\033[H\033[2J")
        sys.stdout.flush()


def parse_int(token: str, what: str = "value") -> int:
    """Parse a user-typed integer; '_' and ',' are accepted as separators."""
    cleaned = token.strip().replace("_", "").replace(",", "")
    try:
        return int(cleaned)
    except ValueError:
        raise UserInputError(f"Invalid input: {what} must be an integer, got '{token}'.") from None


def validate_output_setting(output_file: str | None) -> str | None:
    """
    None / ""              -> screen only
    "." / "./" / "dir/"    -> one file per order in that directory
    path/to/file           -> append everything to that file

    Source files and reserved device names are refused with ValueError.
    """
    forbidden_names = {
        "con", "prn", "aux", "nul",
        *(f"com{i}" for i in range(1, 10)),
        *(f"lpt{i}" for i in range(1, 10)),
        "pyproject.toml", "license",
    }
    forbidden_ext = {".py", ".md", ".toml"}

    if not output_file:
        return output_file
    if output_file in (".", "./") or output_file.endswith("/"):
        return output_file

    basename = os.path.basename(output_file)
    stem, ext = os.path.splitext(basename)
    if basename.lower() in forbidden_names or stem.lower() in forbidden_names:
        raise ValueError(f"Forbidden output filename: {basename}")
    if ext.lower() in forbidden_ext:
        raise ValueError(f"Forbidden output file extension: {ext}")
    return output_file


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
