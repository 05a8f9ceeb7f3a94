"""Filesystem collaborator for path normalization and existence checks.

``normalize`` is pure string computation: it never touches the disk and
never follows symlinks, so resolution stays side-effect free. ``exists``
is the only call that performs I/O.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol


class Filesystem(Protocol):
    """Minimal interface the resolver needs from the filesystem."""

    def normalize(self, path: str | Path) -> Path:
        """Return *path* as an absolute, normalized path."""
        ...

    def exists(self, path: str | Path) -> bool:
        """Whether *path* exists."""
        ...


class LocalFilesystem:
    """Filesystem backed by the local OS path rules."""

    def __init__(self, cwd: Path | None = None) -> None:
        self._cwd = cwd

    def normalize(self, path: str | Path) -> Path:
        raw = os.fspath(path)
        if not os.path.isabs(raw):
            base = os.fspath(self._cwd) if self._cwd is not None else os.getcwd()
            raw = os.path.join(base, raw)
        return Path(os.path.normpath(raw))

    def exists(self, path: str | Path) -> bool:
        return Path(path).exists()


def is_within(path: Path, root: Path) -> bool:
    """Whether normalized *path* is *root* itself or lies beneath it."""
    return path == root or path.is_relative_to(root)
