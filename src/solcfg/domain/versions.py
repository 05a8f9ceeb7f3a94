"""Compiler version pattern and parsing.

Only exact releases are accepted: ``major.minor.patch`` with decimal
components. Ranges, tags such as ``latest``, and two-part versions are
rejected.
"""

from __future__ import annotations

import re

VERSION_PATTERN: re.Pattern[str] = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)")


def parse_version(version: str) -> tuple[int, int, int]:
    """Split *version* into its numeric components.

    Raises ValueError if *version* does not match :data:`VERSION_PATTERN`.

    Examples:
        >>> parse_version("0.8.9")
        (0, 8, 9)
    """
    match = VERSION_PATTERN.fullmatch(version)
    if match is None:
        msg = f"Not a major.minor.patch version: {version!r}"
        raise ValueError(msg)
    major, minor, patch = match.groups()
    return int(major), int(minor), int(patch)
