"""mysys — idempotent machine bootstrap toolkit."""

__version__ = "0.1.0"
