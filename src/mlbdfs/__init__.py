"""MLB daily fantasy projection engine."""

__version__ = "0.1.0"
