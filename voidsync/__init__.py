"""VoidSync: a toy activity logger with a shared in-memory sync endpoint."""

__version__ = "1.0.0"
