"""Measuring rendered text and building tree and folder decorations."""

from __future__ import annotations

import os
from typing import Iterable

from wcwidth import wcwidth

EDGE = "\u251c\u2500\u2500"  # "├──"
LINE = "\u2502  "  # "│  "
CORNER = "\u2514\u2500\u2500"  # "└──"
BLANK = "   "

_COLOR_START = "\x1b["
_COLOR_END = "m"
_LINK_START = "\x1b]8;;"
_LINK_END = "\x1b\x5c"


def _char_width(ch: str) -> int:
    width = wcwidth(ch)
    # Control characters such as ESC occupy one column in the raw count;
    # the escape-sequence bookkeeping below removes them again.
    return 1 if width < 0 else width


def _occurrences(text: str, needle: str) -> Iterable[int]:
    start = text.find(needle)
    while start != -1:
        yield start
        start = text.find(needle, start + len(needle))


def _invisible_length(text: str, opener: str, closer: str) -> int:
    total = 0
    for start in _occurrences(text, opener):
        end = text.find(closer, start)
        if end != -1:
            total += end - start + len(closer)
    return total


def get_visible_width(text: str, hyperlink: bool) -> int:
    """Number of terminal columns `text` occupies, ignoring colour codes.

    When `hyperlink` is true, OSC 8 hyperlink sequences are ignored too.
    """
    invisible = _invisible_length(text, _COLOR_START, _COLOR_END)
    if hyperlink:
        invisible += _invisible_length(text, _LINK_START, _LINK_END)
    raw = sum(_char_width(ch) for ch in text)
    return max(raw - invisible, 0)


def tree_prefix(parent_prefix: str, depth: int, is_last: bool) -> str:
    """The prefix drawn before an entry at `depth` in the tree layout."""
    if depth <= 0:
        return parent_prefix
    return f"{parent_prefix}{CORNER if is_last else EDGE} "


def tree_child_prefix(parent_prefix: str, depth: int, is_last: bool) -> str:
    """The prefix handed down to the children of an entry at `depth`."""
    if depth <= 0:
        return parent_prefix
    return f"{parent_prefix}{BLANK if is_last else LINE} "


def display_folder_path(path: os.PathLike | str) -> str:
    """The heading printed before the contents of a directory."""
    return f"\n{os.fspath(path)}:\n"


def should_display_folder_path(depth: int, dir_flags: Iterable[bool]) -> bool:
    """Whether directory headings are needed.

    `dir_flags` holds, for each listed entry, whether it is a directory or a
    symbolic link to one.
    """
    if depth > 0:
        return True
    flags = list(dir_flags)
    folder_number = sum(1 for is_dir in flags if is_dir)
    return folder_number > 1 or folder_number < len(flags)