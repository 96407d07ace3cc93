"""Input adapters that turn raw slate payloads into projection requests."""

from .slate import (
    ParkInput,
    PlayerEntry,
    SkippedEntry,
    SlateEntry,
    SlateLoadResult,
    WeatherInput,
    load_slate,
    parse_slate,
)

__all__ = [
    "ParkInput",
    "PlayerEntry",
    "SkippedEntry",
    "SlateEntry",
    "SlateLoadResult",
    "WeatherInput",
    "load_slate",
    "parse_slate",
]
