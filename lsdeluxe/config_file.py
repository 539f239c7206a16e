"""Reading the optional YAML configuration file."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping, Optional

import yaml

CONFIG_DIR_NAME = "lsd"
CONFIG_FILE_NAMES = ("config.yaml", "config.yml")

WHEN_VALUES = ("always", "auto", "never")
ICON_THEME_VALUES = ("fancy", "unicode")
DISPLAY_VALUES = ("all", "almost-all", "directory-only", "system-protected")
LAYOUT_VALUES = ("grid", "tree", "oneline")
SIZE_VALUES = ("default", "short", "bytes")
PERMISSION_VALUES = ("rwx", "octal", "attributes", "disable")
SORT_COLUMN_VALUES = ("extension", "git", "name", "time", "size", "version")
DIR_GROUPING_VALUES = ("first", "last", "none")

DEFAULT_CONFIG = """\
---
# Shorthand that makes the output close to plain `ls`.
classic: false

# Columns shown, in order, for the long and tree layouts.
blocks:
  - permission
  - user
  - group
  - size
  - date
  - name

color:
  # never, auto, always
  when: auto
  # default, no-color, no-lscolors or a theme file name
  theme: default

# date, locale, relative or +<format>
# date: date

dereference: false

# all, almost-all, directory-only
# display: all

icons:
  # always, auto, never
  when: auto
  # fancy, unicode
  theme: fancy
  # text placed between the icon and the name
  separator: " "

# ignore-globs:
#   - .git

indicators: false

# grid, tree, oneline
layout: grid

recursion:
  enabled: false
  # depth: 3

# default, short, bytes
size: default

# rwx, octal, attributes, disable
# permission: rwx

sorting:
  # extension, name, time, size, version
  column: name
  reverse: false
  # first, last, none
  dir-grouping: none

no-symlink: false

total-size: false

# always, auto, never
hyperlink: never

symlink-arrow: \u21d2

literal: false

truncate-owner:
  # characters to keep; empty means no truncation
  after:
  # text appended to a truncated name
  marker: ""
"""


class ConfigError(ValueError):
    """Raised when configuration text is not valid."""


def _error(where: str, message: str) -> ConfigError:
    return ConfigError(f"{where}: {message}")


def _as_bool(value: Any, where: str) -> Optional[bool]:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise _error(where, f"invalid type: {value!r}, expected a boolean")
    return value


def _as_uint(value: Any, where: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise _error(where, f"invalid value: {value!r}, expected a non-negative integer")
    return value


def _as_str(value: Any, where: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise _error(where, f"invalid type: {value!r}, expected a string")
    return value


def _as_str_list(value: Any, where: str) -> Optional[list[str]]:
    if value is None:
        return None
    if not isinstance(value, list):
        raise _error(where, f"invalid type: {value!r}, expected a sequence")
    return [_as_str(item, f"{where}[{pos}]") for pos, item in enumerate(value)]


def _choice(values: tuple[str, ...]) -> Callable[[Any, str], Optional[str]]:
    def convert(value: Any, where: str) -> Optional[str]:
        text = _as_str(value, where)
        if text is not None and text not in values:
            raise _error(
                where,
                f"unknown variant `{text}`, expected one of {', '.join(values)}",
            )
        return text

    return convert


def _as_mapping(value: Any, where: str) -> Optional[Mapping[Any, Any]]:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise _error(where, f"invalid type: {value!r}, expected a mapping")
    return value


@dataclass
class ColorConfig:
    """The `color` section."""

    when: Optional[str] = None
    theme: Optional[str] = None

    @classmethod
    def _parse(cls, data: Any, where: str) -> Optional["ColorConfig"]:
        section = _as_mapping(data, where)
        if section is None:
            return None
        return cls(
            when=_choice(WHEN_VALUES)(section.get("when"), f"{where}.when"),
            theme=_as_str(section.get("theme"), f"{where}.theme"),
        )


@dataclass
class IconsConfig:
    """The `icons` section."""

    when: Optional[str] = None
    theme: Optional[str] = None
    separator: Optional[str] = None

    @classmethod
    def _parse(cls, data: Any, where: str) -> Optional["IconsConfig"]:
        section = _as_mapping(data, where)
        if section is None:
            return None
        return cls(
            when=_choice(WHEN_VALUES)(section.get("when"), f"{where}.when"),
            theme=_choice(ICON_THEME_VALUES)(section.get("theme"), f"{where}.theme"),
            separator=_as_str(section.get("separator"), f"{where}.separator"),
        )


@dataclass
class RecursionConfig:
    """The `recursion` section."""

    enabled: Optional[bool] = None
    depth: Optional[int] = None

    @classmethod
    def _parse(cls, data: Any, where: str) -> Optional["RecursionConfig"]:
        section = _as_mapping(data, where)
        if section is None:
            return None
        return cls(
            enabled=_as_bool(section.get("enabled"), f"{where}.enabled"),
            depth=_as_uint(section.get("depth"), f"{where}.depth"),
        )


@dataclass
class SortingConfig:
    """The `sorting` section."""

    column: Optional[str] = None
    reverse: Optional[bool] = None
    dir_grouping: Optional[str] = None

    @classmethod
    def _parse(cls, data: Any, where: str) -> Optional["SortingConfig"]:
        section = _as_mapping(data, where)
        if section is None:
            return None
        return cls(
            column=_choice(SORT_COLUMN_VALUES)(section.get("column"), f"{where}.column"),
            reverse=_as_bool(section.get("reverse"), f"{where}.reverse"),
            dir_grouping=_choice(DIR_GROUPING_VALUES)(
                section.get("dir-grouping"), f"{where}.dir-grouping"
            ),
        )


@dataclass
class TruncateOwnerConfig:
    """The `truncate-owner` section."""

    after: Optional[int] = None
    marker: Optional[str] = None

    @classmethod
    def _parse(cls, data: Any, where: str) -> Optional["TruncateOwnerConfig"]:
        section = _as_mapping(data, where)
        if section is None:
            return None
        return cls(
            after=_as_uint(section.get("after"), f"{where}.after"),
            marker=_as_str(section.get("marker"), f"{where}.marker"),
        )


_FIELD_PARSERS: dict[str, Callable[[Any, str], Any]] = {
    "classic": _as_bool,
    "blocks": _as_str_list,
    "color": ColorConfig._parse,
    "date": _as_str,
    "dereference": _as_bool,
    "display": _choice(DISPLAY_VALUES),
    "icons": IconsConfig._parse,
    "ignore_globs": _as_str_list,
    "indicators": _as_bool,
    "layout": _choice(LAYOUT_VALUES),
    "recursion": RecursionConfig._parse,
    "size": _choice(SIZE_VALUES),
    "permission": _choice(PERMISSION_VALUES),
    "sorting": SortingConfig._parse,
    "no_symlink": _as_bool,
    "total_size": _as_bool,
    "symlink_arrow": _as_str,
    "hyperlink": _choice(WHEN_VALUES),
    "header": _as_bool,
    "literal": _as_bool,
    "truncate_owner": TruncateOwnerConfig._parse,
}


def _home_dir() -> Optional[Path]:
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        return None


def expand_home(path: os.PathLike | str) -> Optional[Path]:
    """Replace a leading `~` component with the home directory.

    Returns the path unchanged when it does not start with `~`, and None
    when the home directory cannot be found.
    """
    p = Path(path)
    if not p.parts or p.parts[0] != "~":
        return p
    home = _home_dir()
    if home is None:
        return None
    if p == Path("~"):
        return home
    rest = p.relative_to("~")
    if home == Path("/"):
        return Path("/") / rest if p.is_absolute() else rest
    return home / rest


def _xdg_config_home(home: Optional[Path]) -> Optional[Path]:
    env = os.environ.get("XDG_CONFIG_HOME")
    if env and Path(env).is_absolute():
        return Path(env)
    return home / ".config" if home is not None else None


def _platform_config_dir(home: Optional[Path]) -> Optional[Path]:
    if sys.platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else None
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" if home is not None else None
    return _xdg_config_home(home)


@dataclass
class Config:
    """Optional settings read from a configuration file."""

    classic: Optional[bool] = None
    blocks: Optional[list[str]] = None
    color: Optional[ColorConfig] = None
    date: Optional[str] = None
    dereference: Optional[bool] = None
    display: Optional[str] = None
    icons: Optional[IconsConfig] = None
    ignore_globs: Optional[list[str]] = None
    indicators: Optional[bool] = None
    layout: Optional[str] = None
    recursion: Optional[RecursionConfig] = None
    size: Optional[str] = None
    permission: Optional[str] = None
    sorting: Optional[SortingConfig] = None
    no_symlink: Optional[bool] = None
    total_size: Optional[bool] = None
    symlink_arrow: Optional[str] = None
    hyperlink: Optional[str] = None
    header: Optional[bool] = None
    literal: Optional[bool] = None
    truncate_owner: Optional[TruncateOwnerConfig] = None

    @classmethod
    def with_none(cls) -> "Config":
        """A configuration in which nothing is set."""
        return cls()

    @classmethod
    def from_yaml(cls, yaml_text: str) -> "Config":
        """Parse YAML text; raise ConfigError when it is not a valid configuration."""
        try:
            data = yaml.safe_load(yaml_text)
        except yaml.YAMLError as err:
            raise ConfigError(str(err)) from err
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"invalid type: {data!r}, expected a mapping")
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            if not isinstance(key, str):
                raise ConfigError(f"invalid key: {key!r}")
            name = key.replace("-", "_")
            if "_" in key or name not in known:
                raise ConfigError(f"unknown field `{key}`")
            values[name] = _FIELD_PARSERS[name](value, key)
        return cls(**values)

    @classmethod
    def from_file(cls, path: os.PathLike | str) -> Optional["Config"]:
        """Read a configuration file.

        Returns None when the file is missing or cannot be used; problems
        other than a missing file are reported on standard error.
        """
        file = Path(path)
        try:
            raw = file.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as err:
            print(f"Can not open config file {file}: {err}.", file=sys.stderr)
            return None
        try:
            return cls.from_yaml(raw.decode("utf-8", errors="replace"))
        except ConfigError as err:
            print(f"Configuration file {file} format error, {err}.", file=sys.stderr)
            return None

    @staticmethod
    def config_paths() -> Iterator[Path]:
        """Directories searched for the configuration file, in order."""
        home = _home_dir()
        candidates = [
            home / ".config" if home is not None else None,
            _platform_config_dir(home),
        ]
        if not sys.platform.startswith("win"):
            candidates.append(_xdg_config_home(home))
        return iter([base / CONFIG_DIR_NAME for base in candidates if base is not None])

    @classmethod
    def load_default(cls) -> "Config":
        """The first usable config file found in the search paths, else the builtin one."""
        for directory in cls.config_paths():
            for name in CONFIG_FILE_NAMES:
                candidate = directory / name
                if candidate.is_file():
                    config = cls.from_file(candidate)
                    if config is not None:
                        return config
                    break
        return cls.builtin()

    @classmethod
    def builtin(cls) -> "Config":
        """The configuration that applies when no file is present."""
        return cls.from_yaml(DEFAULT_CONFIG)