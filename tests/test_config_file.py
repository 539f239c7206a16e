from pathlib import Path

import pytest

from lsdeluxe.config_file import (
    ColorConfig,
    Config,
    ConfigError,
    IconsConfig,
    RecursionConfig,
    SortingConfig,
    TruncateOwnerConfig,
    expand_home,
)


def test_read_default():
    expected = Config(
        classic=False,
        blocks=["permission", "user", "group", "size", "date", "name"],
        color=ColorConfig(when="auto", theme="default"),
        date=None,
        dereference=False,
        display=None,
        icons=IconsConfig(when="auto", theme="fancy", separator=" "),
        ignore_globs=None,
        indicators=False,
        layout="grid",
        recursion=RecursionConfig(enabled=False, depth=None),
        size="default",
        permission=None,
        sorting=SortingConfig(column="name", reverse=False, dir_grouping="none"),
        no_symlink=False,
        total_size=False,
        symlink_arrow="⇒",
        hyperlink="never",
        header=None,
        literal=False,
        truncate_owner=TruncateOwnerConfig(after=None, marker=""),
    )
    assert Config.builtin() == expected


def test_read_config_ok():
    assert Config.from_yaml("classic: true").classic is True


def test_read_config_bad_bool():
    with pytest.raises(ConfigError):
        Config.from_yaml("classic: notbool")


def test_read_config_file_not_found():
    assert Config.from_file("not-existed") is None


def test_read_bad_display():
    with pytest.raises(ConfigError):
        Config.from_yaml("display: bad")


def test_unknown_field_rejected():
    with pytest.raises(ConfigError):
        Config.from_yaml("no-such-option: 1")


def test_snake_case_key_rejected():
    with pytest.raises(ConfigError):
        Config.from_yaml("no_symlink: true")


def test_negative_depth_rejected():
    with pytest.raises(ConfigError):
        Config.from_yaml("recursion:\n  depth: -1\n")


def test_kebab_case_keys():
    config = Config.from_yaml(
        "no-symlink: true\nsorting:\n  dir-grouping: first\nignore-globs:\n  - .git\n"
    )
    assert config.no_symlink is True
    assert config.sorting == SortingConfig(dir_grouping="first")
    assert config.ignore_globs == [".git"]


def test_with_none_is_empty_yaml():
    assert Config.from_yaml("") == Config.with_none()
    assert Config.with_none().classic is None


def test_from_file_reads_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("layout: tree\nrecursion:\n  depth: 3\n", encoding="utf-8")
    config = Config.from_file(path)
    assert config.layout == "tree"
    assert config.recursion == RecursionConfig(enabled=None, depth=3)


def test_from_file_format_error_reported(tmp_path, capsys):
    path = tmp_path / "config.yaml"
    path.write_text("classic: notbool\n", encoding="utf-8")
    assert Config.from_file(path) is None
    assert "format error" in capsys.readouterr().err


def _isolate_home(monkeypatch, home):
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("APPDATA", str(home / ".config"))


def test_load_default_uses_file(tmp_path, monkeypatch):
    _isolate_home(monkeypatch, tmp_path)
    config_dir = tmp_path / ".config" / "lsd"
    config_dir.mkdir(parents=True)
    (config_dir / "config.yml").write_text("classic: true\n", encoding="utf-8")
    assert Config.load_default().classic is True


def test_load_default_falls_back_to_builtin(tmp_path, monkeypatch):
    _isolate_home(monkeypatch, tmp_path)
    assert Config.load_default() == Config.builtin()


def test_config_paths_end_with_lsd(tmp_path, monkeypatch):
    _isolate_home(monkeypatch, tmp_path)
    paths = list(Config.config_paths())
    assert paths
    assert all(p.name == "lsd" for p in paths)
    assert tmp_path / ".config" / "lsd" in paths


def test_expand_home_without_tilde():
    assert expand_home("some/dir") == Path("some/dir")
    assert expand_home("~foo/bar") == Path("~foo/bar")


def test_expand_home_with_tilde(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    assert expand_home("~") == Path.home()
    assert expand_home("~/a/b") == Path.home() / "a" / "b"