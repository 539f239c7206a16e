import os
from dataclasses import dataclass
from types import SimpleNamespace

from lsdeluxe.cli import parse_args
from lsdeluxe.flags import Configurable

ENV_NAME = "LSDELUXE_TEST_DEPTH"


@dataclass(frozen=True)
class Depth(Configurable):
    value: int = 7

    @classmethod
    def from_cli(cls, cli):
        return cls(cli.depth) if cli.depth is not None else None

    @classmethod
    def from_environment(cls):
        raw = os.environ.get(ENV_NAME)
        return cls(int(raw)) if raw is not None else None

    @classmethod
    def from_config(cls, config):
        return cls(config.depth) if config.depth is not None else None


@dataclass(frozen=True)
class Bare(Configurable):
    value: str = "fallback"


def test_cli_takes_precedence(monkeypatch):
    monkeypatch.setenv(ENV_NAME, "5")
    result = Depth.configure_from(parse_args(["--depth", "3"]), SimpleNamespace(depth=9))
    assert result == Depth(3)


def test_environment_before_config(monkeypatch):
    monkeypatch.setenv(ENV_NAME, "5")
    result = Depth.configure_from(parse_args([]), SimpleNamespace(depth=9))
    assert result == Depth(5)


def test_config_used_without_cli_or_environment(monkeypatch):
    monkeypatch.delenv(ENV_NAME, raising=False)
    result = Depth.configure_from(parse_args([]), SimpleNamespace(depth=9))
    assert result == Depth(9)


def test_default_when_nothing_given(monkeypatch):
    monkeypatch.delenv(ENV_NAME, raising=False)
    result = Depth.configure_from(parse_args([]), SimpleNamespace(depth=None))
    assert result == Depth()


def test_zero_from_cli_is_a_value(monkeypatch):
    monkeypatch.delenv(ENV_NAME, raising=False)
    result = Depth.configure_from(parse_args(["--depth", "0"]), SimpleNamespace(depth=9))
    assert result == Depth(0)


def test_base_hooks_provide_nothing():
    assert Bare.from_cli(parse_args([])) is None
    assert Bare.from_config(SimpleNamespace()) is None
    assert Bare.from_environment() is None


def test_base_default_constructs_class():
    fallback = Bare.configure_from(parse_args([]), SimpleNamespace())
    assert Bare.default() == fallback == Bare("fallback")


def test_bare_subclass_falls_back_to_default():
    assert Bare.configure_from(parse_args(["-l"]), SimpleNamespace()) == Bare()