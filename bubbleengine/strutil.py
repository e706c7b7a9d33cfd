"""Small string helpers for paths and names."""

from __future__ import annotations

import os
from typing import Union

PathText = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]


def replace_all(text: str, old: str, new: str) -> str:
    """Replace every occurrence of ``old`` in ``text``, scanning left to right.

    Replacements are never rescanned, so ``new`` may contain ``old``.
    """
    if not old:
        raise ValueError("the substring to replace must not be empty")
    return text.replace(old, new)


def normalize_path(path: PathText) -> str:
    """Return ``path`` as text with every backslash turned into a forward slash."""
    raw = os.fspath(path)
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    return replace_all(raw, "\\", "/")


def _find_last_of(text: str, chars: str) -> int:
    """Index of the last character of ``text`` found in ``chars``, or -1."""
    return max((text.rfind(char) for char in set(chars)), default=-1)


def right_part_last_of(text: str, separators: str) -> str:
    """Return what follows the last character of ``text`` that is in ``separators``.

    The whole text is returned when no separator occurs.
    """
    return text[_find_last_of(text, separators) + 1:]


def mid_part_last_of(text: str, start_separators: str, end_separators: str) -> str:
    """Return the part between the last start separator and the last end separator.

    Without a start separator the part begins at the start of the text; without
    an end separator it runs to the end. If the end comes before the start the
    whole text is returned.
    """
    start = _find_last_of(text, start_separators) + 1
    end = _find_last_of(text, end_separators)
    if end < 0:
        return text[start:]
    if start >= end:
        return text
    return text[start:end]


def create_rel_path(to: str, path: str) -> str:
    """Return ``path`` with every occurrence of the base ``to`` removed."""
    return replace_all(path, to, "")