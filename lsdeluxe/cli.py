"""Command-line interface: option definitions, validation and parsing."""

from __future__ import annotations

import argparse
import sys
from collections import defaultdict
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Iterator, Optional, Sequence

PROG = "lsd"
_VERSION = "1.1.5"
_ABOUT = "An ls command with a lot of pretty colors and some other stuff."

WHEN_CHOICES = ("always", "auto", "never")
ICON_THEME_CHOICES = ("fancy", "unicode")
PERMISSION_CHOICES = ("rwx", "octal", "attributes", "disable")
SIZE_CHOICES = ("default", "short", "bytes")
SORT_CHOICES = ("size", "time", "version", "extension", "git", "none")
GROUP_DIRS_CHOICES = ("none", "first", "last")
BLOCK_CHOICES = (
    "permission",
    "user",
    "group",
    "context",
    "size",
    "date",
    "name",
    "inode",
    "links",
    "git",
)
DATE_KEYWORDS = ("date", "relative", "locale")

_SORT_FLAGS = ("timesort", "sizesort", "extensionsort", "versionsort", "gitsort")

# Options whose later occurrence cancels an earlier occurrence of the others.
_OVERRIDES = {
    "all": ("almost_all",),
    "sort": (*_SORT_FLAGS, "no_sort"),
    "no_sort": (*_SORT_FLAGS, "sort"),
}

# Pairs of options that may not be given together.
_CONFLICTS = (
    ("recursive", "tree"),
    ("directory_only", "depth"),
    ("directory_only", "recursive"),
)

_PLAIN_SPECIFIERS = frozenset("AaBbCcDdeFfGgHhIjklMmnPpRrSsTtUuVvWwXxYyZz+%")
_PADDED_SPECIFIERS = frozenset("CdefGgHIjklMmSsUuVWwYy")
_FRACTION_WIDTHS = frozenset("369")


class CliError(ValueError):
    """Raised when the command line is not valid."""


@dataclass
class Cli:
    """The options given on the command line."""

    inputs: list[Path] = field(default_factory=lambda: [Path(".")])
    all: bool = False
    almost_all: bool = False
    color: Optional[str] = None
    icon: Optional[str] = None
    icon_theme: Optional[str] = None
    indicators: bool = False
    long: bool = False
    ignore_config: bool = False
    config_file: Optional[Path] = None
    oneline: bool = False
    recursive: bool = False
    human_readable: bool = False
    tree: bool = False
    json: bool = False
    depth: Optional[int] = None
    directory_only: bool = False
    permission: Optional[str] = None
    size: Optional[str] = None
    total_size: bool = False
    date: Optional[str] = None
    timesort: bool = False
    sizesort: bool = False
    extensionsort: bool = False
    gitsort: bool = False
    versionsort: bool = False
    sort: Optional[str] = None
    no_sort: bool = False
    reverse: bool = False
    group_dirs: Optional[str] = None
    group_directories_first: bool = False
    blocks: list[str] = field(default_factory=list)
    classic: bool = False
    no_symlink: bool = False
    ignore_glob: list[str] = field(default_factory=list)
    inode: bool = False
    git: bool = False
    dereference: bool = False
    context: bool = False
    hyperlink: Optional[str] = None
    header: bool = False
    truncate_owner_after: Optional[int] = None
    truncate_owner_marker: Optional[str] = None
    system_protected: bool = False
    literal: bool = False

    @classmethod
    def from_argv(cls, argv=None) -> "Cli":
        """Parse arguments (without the program name) into a Cli."""
        return parse_args(argv)


def _next_specifier(chars: Iterator[str]) -> str:
    nxt = next(chars, None)
    if nxt is None:
        raise CliError("missing format specifier")
    return nxt


def _expect(chars: Iterator[str], wanted: str, prefix: str) -> None:
    nxt = _next_specifier(chars)
    if nxt != wanted:
        raise CliError(f"invalid format specifier: {prefix}{nxt}")


def validate_time_format(formatter: str) -> str:
    """Check a strftime-like format string; return it or raise CliError."""
    chars = iter(formatter)
    for ch in chars:
        if ch != "%":
            continue
        spec = _next_specifier(chars)
        if spec == ".":
            nxt = _next_specifier(chars)
            if nxt == "f":
                continue
            if nxt in _FRACTION_WIDTHS:
                _expect(chars, "f", f"%.{nxt}")
                continue
            raise CliError(f"invalid format specifier: %.{nxt}")
        if spec in (":", "#"):
            _expect(chars, "z", f"%{spec}")
        elif spec in ("-", "_", "0"):
            nxt = _next_specifier(chars)
            if nxt not in _PADDED_SPECIFIERS:
                raise CliError(f"invalid format specifier: %{spec}{nxt}")
        elif spec in _PLAIN_SPECIFIERS:
            continue
        elif spec in _FRACTION_WIDTHS:
            _expect(chars, "f", f"%{spec}")
        else:
            raise CliError(f"invalid format specifier: %{spec}")
    return formatter


def validate_date_argument(arg: str) -> str:
    """Check the value of --date; return it or raise CliError."""
    if arg.startswith("+"):
        return validate_time_format(arg)
    if arg in DATE_KEYWORDS:
        return arg
    raise CliError("possible values: date, locale, relative, +date-time-format")


def _date_type(value: str) -> str:
    try:
        return validate_date_argument(value)
    except CliError as err:
        raise argparse.ArgumentTypeError(str(err)) from err


def _non_negative(value: str) -> int:
    try:
        number = int(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'") from err
    if number < 0:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'")
    return number


def _block_list(value: str) -> list[str]:
    blocks = value.split(",")
    for block in blocks:
        if block not in BLOCK_CHOICES:
            raise argparse.ArgumentTypeError(
                f"invalid value '{block}' (possible values: {', '.join(BLOCK_CHOICES)})"
            )
    return blocks


def _override_map() -> dict[str, frozenset[str]]:
    result: dict[str, set[str]] = defaultdict(set)
    for arg, others in _OVERRIDES.items():
        for other in others:
            result[arg].add(other)
            result[other].add(arg)
    return {key: frozenset(value) for key, value in result.items()}


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise CliError(message)


class _OverridingAction(argparse.Action):
    def __init__(self, option_strings, dest, overrides=(), **kwargs):
        super().__init__(option_strings, dest, **kwargs)
        self.overrides = tuple(overrides)

    def _clear_overridden(self, parser, namespace):
        for other in self.overrides:
            setattr(namespace, other, parser.get_default(other))


class _SetTrue(_OverridingAction):
    def __init__(self, option_strings, dest, overrides=(), **kwargs):
        kwargs.setdefault("default", False)
        super().__init__(option_strings, dest, overrides, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        self._clear_overridden(parser, namespace)
        setattr(namespace, self.dest, True)


class _Store(_OverridingAction):
    def __call__(self, parser, namespace, values, option_string=None):
        self._clear_overridden(parser, namespace)
        setattr(namespace, self.dest, values)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the command line."""
    overrides = _override_map()
    parser = _Parser(prog=PROG, description=_ABOUT, add_help=False, allow_abbrev=False)

    def flag(*names, dest, help_text, hidden=False):
        parser.add_argument(
            *names,
            dest=dest,
            action=_SetTrue,
            overrides=sorted(overrides.get(dest, ())),
            help=argparse.SUPPRESS if hidden else help_text,
        )

    def option(*names, dest, help_text, **kwargs):
        parser.add_argument(
            *names,
            dest=dest,
            action=_Store,
            overrides=sorted(overrides.get(dest, ())),
            default=None,
            help=help_text,
            **kwargs,
        )

    parser.add_argument("inputs", metavar="FILE", nargs="*", type=Path)
    flag("-a", "--all", dest="all", help_text="Do not ignore entries starting with .")
    flag("-A", "--almost-all", dest="almost_all", help_text="Do not list implied . and ..")
    option("--color", dest="color", metavar="MODE", choices=WHEN_CHOICES,
           help_text="When to use terminal colours [default: auto]")
    option("--icon", dest="icon", metavar="MODE", choices=WHEN_CHOICES,
           help_text="When to print the icons [default: auto]")
    option("--icon-theme", dest="icon_theme", metavar="THEME", choices=ICON_THEME_CHOICES,
           help_text="Whether to use fancy or unicode icons [default: fancy]")
    flag("-F", "--classify", dest="indicators",
         help_text="Append indicator (one of */=>@|) at the end of the file names")
    flag("-l", "--long", dest="long", help_text="Display extended file metadata as a table")
    flag("--ignore-config", dest="ignore_config", help_text="Ignore the configuration file")
    option("--config-file", dest="config_file", metavar="PATH", type=Path,
           help_text="Provide a custom lsd configuration file")
    flag("-1", "--oneline", dest="oneline", help_text="Display one entry per line")
    flag("-R", "--recursive", dest="recursive", help_text="Recurse into directories")
    flag("-h", "--human-readable", dest="human_readable",
         help_text="For ls compatibility purposes ONLY, currently set by default")
    flag("--tree", dest="tree",
         help_text="Recurse into directories and present the result as a tree")
    flag("--json", dest="json", help_text="Print the output as json")
    option("--depth", dest="depth", metavar="NUM", type=_non_negative,
           help_text="Stop recursing into directories after reaching specified depth")
    flag("-d", "--directory-only", dest="directory_only",
         help_text="Display directories themselves, and not their contents")
    option("--permission", dest="permission", metavar="MODE", choices=PERMISSION_CHOICES,
           help_text="How to display permissions")
    option("--size", dest="size", metavar="MODE", choices=SIZE_CHOICES,
           help_text="How to display size [default: default]")
    flag("--total-size", dest="total_size", help_text="Display the total size of directories")
    option("--date", dest="date", type=_date_type,
           help_text="How to display date [possible values: date, locale, relative, "
                     "+date-time-format]")
    flag("-t", "--timesort", dest="timesort", help_text="Sort by time modified")
    flag("-S", "--sizesort", dest="sizesort", help_text="Sort by size")
    flag("-X", "--extensionsort", dest="extensionsort", help_text="Sort by file extension")
    flag("-G", "--gitsort", dest="gitsort", help_text="Sort by git status")
    flag("-v", "--versionsort", dest="versionsort",
         help_text="Natural sort of (version) numbers within text")
    option("--sort", dest="sort", metavar="TYPE", choices=SORT_CHOICES,
           help_text="Sort by TYPE instead of name")
    flag("-U", "--no-sort", dest="no_sort",
         help_text="Do not sort. List entries in directory order")
    flag("-r", "--reverse", dest="reverse", help_text="Reverse the order of the sort")
    option("--group-dirs", dest="group_dirs", metavar="MODE", choices=GROUP_DIRS_CHOICES,
           help_text="Sort the directories then the files")
    flag("--group-directories-first", dest="group_directories_first",
         help_text="Groups the directories at the top before the files")
    parser.add_argument(
        "--blocks", dest="blocks", action="extend", type=_block_list, default=None,
        help="Specify the blocks that will be displayed and in what order",
    )
    flag("--classic", dest="classic",
         help_text="Enable classic mode (display output similar to ls)")
    flag("--no-symlink", dest="no_symlink", help_text="Do not display symlink target")
    parser.add_argument(
        "-I", "--ignore-glob", dest="ignore_glob", metavar="PATTERN", action="append",
        default=None,
        help="Do not display files/directories with names matching the glob pattern(s)",
    )
    flag("-i", "--inode", dest="inode", help_text="Display the index number of each file")
    flag("-g", "--git", dest="git", help_text="Show git status on file and directory")
    flag("-L", "--dereference", dest="dereference",
         help_text="Show information for the file a symbolic link references")
    flag("-Z", "--context", dest="context",
         help_text="Print security context (label) of each file")
    option("--hyperlink", dest="hyperlink", metavar="MODE", choices=WHEN_CHOICES,
           help_text="Attach hyperlink to filenames [default: never]")
    flag("--header", dest="header", help_text="Display block headers")
    option("--truncate-owner-after", dest="truncate_owner_after", metavar="NUM",
           type=_non_negative,
           help_text="Truncate the user and group names after a number of characters")
    option("--truncate-owner-marker", dest="truncate_owner_marker", metavar="STR",
           help_text="Truncation marker appended to a truncated user or group name")
    flag("--system-protected", dest="system_protected",
         help_text="Includes files with the windows system protection flag set",
         hidden=not sys.platform.startswith("win"))
    flag("-N", "--literal", dest="literal", help_text="Print entry names without quoting")
    parser.add_argument("--help", action="help", help="Print help information")
    parser.add_argument("-V", "--version", action="version",
                        version=f"%(prog)s {_VERSION}", help="Print version")
    return parser


def _is_given(value) -> bool:
    return value is not None and value is not False


def _check_conflicts(namespace: argparse.Namespace) -> None:
    for first, second in _CONFLICTS:
        if _is_given(getattr(namespace, first)) and _is_given(getattr(namespace, second)):
            raise CliError(
                f"the argument '--{first.replace('_', '-')}' cannot be used with "
                f"'--{second.replace('_', '-')}'"
            )


def parse_args(argv: Optional[Sequence[str]] = None) -> Cli:
    """Parse command-line arguments (without the program name) into a Cli."""
    parser = build_parser()
    args = list(argv) if argv is not None else None
    namespace = parser.parse_intermixed_args(args)
    _check_conflicts(namespace)
    values = {f.name: getattr(namespace, f.name) for f in fields(Cli)}
    values["inputs"] = list(values["inputs"] or [Path(".")])
    values["blocks"] = list(values["blocks"] or [])
    values["ignore_glob"] = list(values["ignore_glob"] or [])
    return Cli(**values)