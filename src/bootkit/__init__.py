"""bootkit — deterministic, run-once process bootstrap."""

__version__ = "0.1.0"
