"""Plan parsing, task records and per-expert instruction artifacts."""

__version__ = "0.1.0"
