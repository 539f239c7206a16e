# lsdeluxe

Building blocks for a colourful `ls`-style directory lister: the option set,
the YAML configuration file, the rules for which source a setting comes from,
and the text layout of grid, long and tree listings.

## Modules

### `lsdeluxe.cli`

- `parse_args(argv)` and `Cli.from_argv(argv)` take the arguments *without*
  the program name and return a `Cli` dataclass. `inputs` defaults to
  `[Path(".")]`. Invalid command lines raise `CliError`. Examples are an
  unknown option, a value outside its choices, or conflicting options such as
  `--recursive` with `--tree`, or `--directory-only` with `--depth` or
  `--recursive`.
- Later options cancel earlier ones in two cases. `--all` and `--almost-all`
  cancel each other. `--sort` and `--no-sort` cancel each other and the
  `-t/-S/-X/-v/-G` sort flags.
- `--blocks` takes a comma-separated list and may be repeated. `-I/--ignore-glob`
  may be repeated.
- `validate_date_argument(arg)` accepts `date`, `relative`, `locale` or a
  `+format`. `validate_time_format(formatter)` checks the `%` specifiers of a
  strftime-like format. Each returns its argument or raises `CliError`.
- `build_parser()` returns the underlying `argparse` parser. It also provides
  `--help` and `-V/--version`.

### `lsdeluxe.config_file`

- `Config` holds the optional settings. Its sections are the `ColorConfig`,
  `IconsConfig`, `RecursionConfig`, `SortingConfig` and `TruncateOwnerConfig`
  dataclasses.
- `Config.from_yaml(text)` parses a document with kebab-case keys. Unknown
  keys, wrong types and values outside the allowed choices raise `ConfigError`.
- `Config.from_file(path)` returns `None` if the file is missing. If the file
  cannot be read or parsed, it prints a message to standard error and returns
  `None`.
- `Config.config_paths()` yields the directories searched for an `lsd`
  configuration directory:
  1. `~/.config`
  2. the platform configuration directory
  3. on non-Windows systems, `$XDG_CONFIG_HOME` (or `~/.config`)
- `Config.load_default()` reads the first `config.yaml` or `config.yml` found
  in those directories. If none is found, it falls back to `Config.builtin()`.
- `Config.with_none()` gives a configuration with nothing set.
- `expand_home(path)` replaces a leading `~`. It returns `None` if the home
  directory is unknown.

`Config.builtin()` sets these values:

| Setting | Value |
| --- | --- |
| `blocks` | `permission, user, group, size, date, name` |
| `color.when` | `auto` |
| `color.theme` | `default` |
| `icons.when` | `auto` |
| `icons.theme` | `fancy` |
| `icons.separator` | `" "` |
| `layout` | `grid` |
| `size` | `default` |
| `sorting.column` | `name` |
| `sorting.reverse` | `false` |
| `sorting.dir-grouping` | `none` |
| `hyperlink` | `never` |
| `symlink-arrow` | `⇒` |
| `truncate-owner.marker` | `""` |

### `lsdeluxe.flags`

`Configurable` is a mixin for a single setting. `configure_from(cli, config)`
returns the first value that is not `None` from these sources, in order:

1. `from_cli`, via the `cli_key` attribute
2. `from_environment`, via the `env_var` variable
3. `from_config`, via the dotted `config_key` path

If none of them gives a value, it returns `default()`. Raw values are
converted by `from_value`.

### `lsdeluxe.width`

- `get_visible_width(text, hyperlink)` counts terminal columns. Wide
  characters count as two columns and colour escapes are ignored. When
  `hyperlink` is true, OSC 8 hyperlink escapes are ignored as well.
- `tree_prefix` and `tree_child_prefix` build the `├── `, `└── ` and `│`
  prefixes.
- `display_folder_path` formats a directory heading.
- `should_display_folder_path` decides whether headings are needed.

### `lsdeluxe.grid`

- `Cell` holds text and its visible width. Use `Cell.from_text` to measure the
  text for you.
- `Grid` has a `Direction` (`LEFT_TO_RIGHT` or `TOP_TO_BOTTOM`) and a number of
  filling spaces.
- `Grid.fit_into_columns(n)` renders the cells in `n` columns.
- `Grid.fit_into_width(width)` uses as few lines as fit. It returns `None` if a
  cell is too wide.
- `header_cells(headers, cells)` builds centred, underlined headers, each as
  wide as its column.

## Example

```python
from lsdeluxe.cli import Cli, validate_time_format
from lsdeluxe.config_file import Config
from lsdeluxe.grid import Cell, Grid
from lsdeluxe.width import get_visible_width

cli = Cli.from_argv(["--tree", "--blocks", "size,name"])
cli.blocks                                    # ['size', 'name']

config = Config.from_yaml("classic: true\nsorting:\n  reverse: true\n")
config.sorting.reverse                        # True

validate_time_format("+%Y-%m-%d")             # '+%Y-%m-%d'
get_visible_width("\x1b[38;5;184m日本語\x1b[39m", False)   # 6

grid = Grid(filling=1)
for text in ["a", "bb", "ccc", "d"]:
    grid.add(Cell.from_text(text))
print(grid.fit_into_columns(2))
```

## What this package does not do

The package does not list directories, and it has no command to run. It does
not do any of the following:

- read file metadata
- sort entries
- choose colours or icons
- render permissions, owners, sizes or dates
- print JSON listings

It provides the options, configuration and layout pieces that such a lister
is built from.