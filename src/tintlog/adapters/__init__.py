"""Adapters connecting tintlog to other logging front-ends."""

from tintlog.adapters.logging import TintLoggingHandler, level_from_stdlib

__all__ = ["TintLoggingHandler", "level_from_stdlib"]
