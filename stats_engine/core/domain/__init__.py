"""Domain layer - Modelos de reporte."""

from .numeric import try_number
from .report import CalculatedStats, EntityStats, Metric, StatsReport

__all__ = ["try_number", "CalculatedStats", "EntityStats", "Metric", "StatsReport"]
