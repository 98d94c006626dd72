"""Rate: "delta acumulativo / delta muestras" entre dos reportes consecutivos."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.domain.report import TIMESTAMP_FIELD, StatsReport
from .base import MetricCalculator, history_pair, metric_delta
from .modifiers import CalculatorModifier


def calculate_rate(
    stats_id: str,
    previous_report: Optional[StatsReport],
    current_report: Optional[StatsReport],
    accumulative_metric: str,
    samples_metric: str,
) -> Optional[float]:
    """Calcula (Δaccumulative / Δsamples) para una entidad.

    Returns:
        None si falta la entidad en algún reporte, algún valor no es numérico,
        el delta de tiempo o el delta de muestras no es positivo
    """
    pair = history_pair(stats_id, previous_report, current_report)
    if pair is None:
        return None
    previous_stats, current_stats = pair

    delta_value = metric_delta(previous_stats, current_stats, accumulative_metric)
    delta_samples = metric_delta(previous_stats, current_stats, samples_metric)
    if delta_value is None or delta_samples is None:
        return None
    if delta_samples <= 0:
        return None
    return delta_value / delta_samples


@dataclass(frozen=True)
class RateCalculator(MetricCalculator):
    accumulative_metric: str
    samples_metric: str
    modifier: CalculatorModifier = CalculatorModifier.NONE

    @property
    def name(self) -> str:
        if self.samples_metric == TIMESTAMP_FIELD:
            return "[" + self.accumulative_metric + "/s]"
        return "[" + self.accumulative_metric + "/" + self.samples_metric + self.modifier.postfix + "]"

    def _calculate(self, stats_id, previous_report, current_report):
        rate = calculate_rate(
            stats_id, previous_report, current_report, self.accumulative_metric, self.samples_metric
        )
        if rate is None:
            return None
        return rate * self.modifier.multiplier
