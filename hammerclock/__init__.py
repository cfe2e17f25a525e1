"""Terminal chess clock and phase tracker for tabletop games."""

__version__ = "0.1"