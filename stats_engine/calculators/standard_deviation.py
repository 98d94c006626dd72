"""StandardDeviation a partir de totalSquaredSum, totalSum y totalCount.

Sobre el intervalo entre reportes:
    variance = (ΔsquaredSum - ΔSum² / Δcount) / Δcount
    stdev_ms = 1000 * sqrt(variance)

Desviación estándar poblacional, reescalada de segundos a milisegundos.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..core.domain.report import StatsReport
from .base import MetricCalculator, history_pair, metric_delta


def calculate_standard_deviation(
    stats_id: str,
    previous_report: Optional[StatsReport],
    current_report: Optional[StatsReport],
    total_squared_sum_metric: str,
    total_sum_metric: str,
    total_count_metric: str,
) -> Optional[float]:
    pair = history_pair(stats_id, previous_report, current_report)
    if pair is None:
        return None
    previous_stats, current_stats = pair

    delta_count = metric_delta(previous_stats, current_stats, total_count_metric)
    if delta_count is None or delta_count <= 0:
        return None

    delta_squared_sum = metric_delta(previous_stats, current_stats, total_squared_sum_metric)
    delta_sum = metric_delta(previous_stats, current_stats, total_sum_metric)
    if delta_squared_sum is None or delta_sum is None:
        return None

    variance = (delta_squared_sum - delta_sum ** 2 / delta_count) / delta_count
    if variance < 0:
        return None
    return 1000 * math.sqrt(variance)


@dataclass(frozen=True)
class StandardDeviationCalculator(MetricCalculator):
    total_squared_sum_metric: str
    total_sum_metric: str
    total_count_metric: str
    label: str

    @property
    def name(self) -> str:
        return "[" + self.label + "StDev_in_ms]"

    def _calculate(self, stats_id, previous_report, current_report):
        return calculate_standard_deviation(
            stats_id,
            previous_report,
            current_report,
            self.total_squared_sum_metric,
            self.total_sum_metric,
            self.total_count_metric,
        )
