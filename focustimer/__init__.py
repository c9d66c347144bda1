"""Focus Timer — a single countdown with an audible alert."""

__version__ = "0.1.0"
