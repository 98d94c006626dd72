"""Motor de métricas calculadas sobre reportes periódicos de estadísticas.

Estructura:
- core/        → Modelo de reporte, conversión numérica y contadores
- adapters/    → Conversión desde/hacia el formato "internal reports"
- calculators/ → Rate, Difference, StandardDeviation, Codec, AudioLevelRms
- registry.py  → Tipo de entidad → métrica original → calculadoras
- engine.py    → StatsRatesCalculator (anterior/actual + recálculo)
"""

from .adapters.internals.adapter import InternalsReportAdapter
from .core.domain.report import CalculatedStats, EntityStats, Metric, StatsReport
from .engine import StatsRatesCalculator, compute_calculated_stats
from .registry import DEFAULT_REGISTRY, CalculatorRegistry, calculators_for

__all__ = [
    "InternalsReportAdapter",
    "CalculatedStats",
    "EntityStats",
    "Metric",
    "StatsReport",
    "StatsRatesCalculator",
    "compute_calculated_stats",
    "DEFAULT_REGISTRY",
    "CalculatorRegistry",
    "calculators_for",
]
