"""Options, configuration, setting resolution and column layout for an ls-style directory lister."""

__version__ = "0.1.0"

__all__ = ["cli", "config_file", "flags", "grid", "width"]