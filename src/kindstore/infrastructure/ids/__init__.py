"""Identifier generators."""

from kindstore.infrastructure.ids.time_millis import TimeMillisIdGenerator

__all__ = ["TimeMillisIdGenerator"]
