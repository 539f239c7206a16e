"""Resolution of settings from the command line, environment, config file and defaults."""

from __future__ import annotations

import os
from typing import Any, ClassVar, Optional


class Configurable:
    """Mixin for settings that can come from several sources.

    A subclass names where its value lives in each source through
    ``cli_key`` (an attribute of the parsed command line), ``config_key``
    (a dotted attribute path into the configuration) and ``env_var``
    (an environment variable). A raw value found there is turned into the
    setting by ``from_value``. Subclasses may override any ``from_*`` hook;
    a hook that returns ``None`` means the source does not provide a value.
    """

    cli_key: ClassVar[Optional[str]] = None
    config_key: ClassVar[Optional[str]] = None
    env_var: ClassVar[Optional[str]] = None

    @classmethod
    def configure_from(cls, cli: Any, config: Any) -> Any:
        """Return the first value found in: cli, environment, config, default."""
        sources = (
            lambda: cls.from_cli(cli),
            cls.from_environment,
            lambda: cls.from_config(config),
        )
        for source in sources:
            value = source()
            if value is not None:
                return value
        return cls.default()

    @classmethod
    def from_value(cls, raw: Any) -> Any:
        """Turn a raw value from any source into the setting."""
        return cls(raw)

    @classmethod
    def from_cli(cls, cli: Any) -> Optional[Any]:
        """Value taken from the command line, or None."""
        if cls.cli_key is None or cli is None:
            return None
        raw = getattr(cli, cls.cli_key, None)
        if raw is None:
            return None
        return cls.from_value(raw)

    @classmethod
    def from_config(cls, config: Any) -> Optional[Any]:
        """Value taken from the configuration file, or None."""
        if cls.config_key is None or config is None:
            return None
        raw = config
        for part in cls.config_key.split("."):
            raw = getattr(raw, part, None)
            if raw is None:
                return None
        return cls.from_value(raw)

    @classmethod
    def from_environment(cls) -> Optional[Any]:
        """Value taken from environment variables, or None."""
        if cls.env_var is None:
            return None
        raw = os.environ.get(cls.env_var)
        if raw is None:
            return None
        return cls.from_value(raw)

    @classmethod
    def default(cls) -> Any:
        """Value used when no source provides one."""
        return cls()