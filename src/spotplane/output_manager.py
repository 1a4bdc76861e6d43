# output_manager.py

import os

from spotplane.fmt import strip_ansi
from spotplane.workspace import workspace_dir


def resolve_output_path(path: str, workspace_root: str) -> str:
    """
    '~' is expanded, absolute paths are kept, relative paths are taken
    relative to the workspace root.
    """
    if not path:
        raise ValueError("Output path is empty")
    path = os.path.expanduser(path)
    if os.path.isabs(path):
        return os.path.normpath(path)
    return os.path.normpath(os.path.join(workspace_root, path))


class OutputManager:
    """
    Handles all printing, to screen and/or file.

    Usage:
        # Split mode (one file per deck order, rewritten on close):
        om = OutputManager(output_file="decks/", order=7)
        om.write("Card 1: ...")
        om.close()                     # writes decks/order_7.txt

        # Single file (append every run to one file):
        om = OutputManager(output_file="all.txt")
        om.write("Card 1: ...")
        om.close()
    """

    def __init__(self, output_file: str | None = None, quiet: bool = False, order: int | None = None):
        """
        output_file:
            None or ""       => screen only
            "." or "dir/"    => order_<q>.txt files in that directory
            path/to/file.txt => append all runs to this file
        quiet: no screen output (file only)
        order: deck order, names the file in split mode
        """
        self.quiet = quiet
        self.output_file = output_file or ""
        self.order = order
        self._buffer: list[str] = []
        self._closed = False

        self._mode = "none"   # "none" | "split" | "single"
        self._path: str | None = None

        workspace = str(workspace_dir())
        if self.output_file in (".", "./") or self.output_file.endswith("/"):
            if order is None:
                raise ValueError("A deck order must be provided when outputting to a directory.")
            directory = resolve_output_path(self.output_file, workspace)
            os.makedirs(directory, exist_ok=True)
            self._mode = "split"
            self._path = os.path.join(directory, f"order_{order}.txt")
        elif self.output_file:
            path = resolve_output_path(self.output_file, workspace)
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            self._mode = "single"
            self._path = path

    @property
    def path(self) -> str | None:
        return self._path

    def write(self, *args, sep: str = " ", end: str = "\n") -> None:
        """Write to screen and file (if configured)."""
        text = sep.join(str(a) for a in args) + end
        self._buffer.append(text)

        if not self.quiet:
            print(text, end="")

        if self._mode == "single" and self._path:
            with open(self._path, "a", encoding="utf-8") as fh:
                fh.write(strip_ansi(text))
        # split mode writes once, on close()

    def close(self) -> None:
        if self._closed or not self._buffer or not self._path:
            return
        self._closed = True
        if self._mode == "split":
            with open(self._path, "w", encoding="utf-8") as fh:
                fh.write(strip_ansi("".join(self._buffer)))
        elif self._mode == "single":
            with open(self._path, "a", encoding="utf-8") as fh:
                fh.write("\n")  # one empty line between runs
