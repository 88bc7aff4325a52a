"""Currency exchange-rate service backed by SQLite."""

__version__ = "0.1.0"

__all__ = ["app", "config", "errors", "logs", "models", "server", "service", "storage"]