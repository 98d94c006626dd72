"""Motor de métricas calculadas.

Mantiene el reporte anterior y el actual y, en cada ingesta, calcula las
métricas derivadas (rates, diferencias, desviaciones estándar, codec...)
del nuevo reporte comparándolo con el anterior.

Flujo:
    ingest(records) → adapter.from_internals → add_stats_report
    add_stats_report: previous := current; current := report; recalcular
    export() → adapter.to_internals(current)

Síncrono y sin estado compartido: usar una instancia por flujo de métricas
y serializar externamente las llamadas a una misma instancia.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from common.config import Settings, get_settings

from .adapters.internals.adapter import InternalsReportAdapter
from .core.domain.report import CalculatedStats, Metric, StatsReport
from .core.monitoring.stats import EngineStats
from .registry import DEFAULT_REGISTRY, CalculatorRegistry

logger = logging.getLogger(__name__)


def compute_calculated_stats(
    previous_report: Optional[StatsReport],
    current_report: StatsReport,
    registry: CalculatorRegistry = DEFAULT_REGISTRY,
) -> Dict[str, CalculatedStats]:
    """Calcula todas las métricas derivadas de `current_report`.

    Función pura de (previous, current, registry): no modifica ningún reporte.

    Returns:
        Dict id de entidad → CalculatedStats, en el orden de iteración del reporte
    """
    calculated: Dict[str, CalculatedStats] = {}

    for stats in current_report:
        for original_name, calculators in registry.bindings_for(stats.type):
            for calculator in calculators:
                value = calculator.evaluate(stats.id, previous_report, current_report)
                calculated_stats = calculated.get(stats.id)
                if calculated_stats is None:
                    calculated_stats = CalculatedStats(stats.id)
                    calculated[stats.id] = calculated_stats
                calculated_stats.add_calculated_metric(original_name, Metric(calculator.name, value))

    return calculated


class StatsRatesCalculator:
    """Motor: guarda el reporte anterior y el actual y calcula métricas derivadas.

    Usage:
        engine = StatsRatesCalculator()
        engine.ingest(records_t0)
        engine.ingest(records_t1)
        records = engine.export()
    """

    def __init__(
        self,
        registry: Optional[CalculatorRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        self._registry = registry or DEFAULT_REGISTRY
        self._settings = settings or get_settings()
        self._previous_report: Optional[StatsReport] = None
        self._current_report: Optional[StatsReport] = None
        self.stats = EngineStats()

    @property
    def previous_report(self) -> Optional[StatsReport]:
        return self._previous_report

    @property
    def current_report(self) -> Optional[StatsReport]:
        return self._current_report

    @property
    def registry(self) -> CalculatorRegistry:
        return self._registry

    def add_stats_report(self, report: StatsReport) -> None:
        """Incorpora un reporte nuevo y calcula sus métricas derivadas."""
        self._previous_report = self._current_report
        self._current_report = report
        self.stats.reports_ingested += 1
        self._update_calculated_metrics()

    def ingest(self, internal_reports: Optional[Iterable[Any]]) -> StatsReport:
        """Convierte registros externos a StatsReport y lo incorpora."""
        report = InternalsReportAdapter.from_internals(internal_reports, stats=self.stats)
        self.add_stats_report(report)
        return report

    def export(self) -> List[Dict[str, Any]]:
        """Reporte actual con métricas calculadas, en formato externo."""
        return InternalsReportAdapter.to_internals(
            self._current_report,
            undefined_value=self._settings.undefined_export_value,
        )

    def _update_calculated_metrics(self) -> None:
        current = self._current_report
        if current.is_calculated:
            logger.warning(
                "REPORT_ALREADY_CALCULATED entities=%s (calculated metrics are kept)",
                len(current),
            )
            return

        calculated = compute_calculated_stats(self._previous_report, current, self._registry)
        current.attach_calculated_stats(calculated)

        total = 0
        undefined = 0
        for calculated_stats in calculated.values():
            for original_name in calculated_stats.original_names():
                for metric in calculated_stats.get_calculated_metrics(original_name):
                    total += 1
                    if metric.is_undefined:
                        undefined += 1

        self.stats.metrics_calculated += total
        self.stats.metrics_undefined += undefined
        logger.debug(
            "CALCULATED entities=%s metrics=%s undefined=%s has_previous=%s",
            len(current), total, undefined, self._previous_report is not None,
        )
