"""Configuration knobs for the archive reader."""

from dataclasses import dataclass


@dataclass(slots=True)
class ReaderConfig:
    """Reader options. Defaults give the standard open behavior."""

    # Materialize LOAD_ON_OPEN entries while opening. Inspection tools can
    # turn this off to list archives whose preload entries are unreadable.
    preload_on_open: bool = True
