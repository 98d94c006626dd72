"""Monitoring layer - Contadores del motor."""

from .stats import EngineStats

__all__ = ["EngineStats"]
