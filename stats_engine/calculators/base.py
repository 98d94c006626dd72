"""Contrato común de las calculadoras de métricas derivadas.

Una calculadora es una regla sin estado que produce una métrica calculada
a partir del reporte anterior (opcional) y el actual:

    name                                   → nombre determinista, función de la configuración
    evaluate(id, previous, current)        → número/valor, o None si no se puede calcular

`evaluate` nunca lanza excepciones: datos faltantes, valores no numéricos,
denominadores no positivos o resultados no finitos producen None.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

from ..core.domain.report import EntityStats, StatsReport

logger = logging.getLogger(__name__)


class MetricCalculator(ABC):
    """Clase base de todas las calculadoras."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Nombre de la métrica calculada, p.ej. "[bytesSent/s]"."""

    def evaluate(
        self,
        stats_id: str,
        previous_report: Optional[StatsReport],
        current_report: StatsReport,
    ) -> Optional[Any]:
        try:
            value = self._calculate(stats_id, previous_report, current_report)
        except (ValueError, TypeError, ZeroDivisionError, OverflowError, KeyError, AttributeError) as e:
            logger.debug("CALC_FAILED calculator=%s id=%s error=%s", self.name, stats_id, e)
            return None

        if isinstance(value, float) and not math.isfinite(value):
            logger.debug("CALC_NON_FINITE calculator=%s id=%s value=%s", self.name, stats_id, value)
            return None
        return value

    @abstractmethod
    def _calculate(
        self,
        stats_id: str,
        previous_report: Optional[StatsReport],
        current_report: StatsReport,
    ) -> Optional[Any]:
        ...

    def __str__(self) -> str:
        return self.name


def history_pair(
    stats_id: str,
    previous_report: Optional[StatsReport],
    current_report: Optional[StatsReport],
) -> Optional[Tuple[EntityStats, EntityStats]]:
    """(anterior, actual) de una entidad si ambos reportes la contienen y dt > 0."""
    if previous_report is None or current_report is None:
        return None
    previous_stats = previous_report.get(stats_id)
    current_stats = current_report.get(stats_id)
    if previous_stats is None or current_stats is None:
        return None
    if current_stats.timestamp - previous_stats.timestamp <= 0:
        return None
    return previous_stats, current_stats


def metric_delta(previous_stats: EntityStats, current_stats: EntityStats, metric: str) -> Optional[float]:
    """current[metric] - previous[metric], o None si alguno no es numérico."""
    previous_value = previous_stats.get_number(metric)
    current_value = current_stats.get_number(metric)
    if previous_value is None or current_value is None:
        return None
    return current_value - previous_value
