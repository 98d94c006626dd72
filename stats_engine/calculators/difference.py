"""Difference: "metricA - metricB" usando solo el reporte actual."""

from __future__ import annotations

from dataclasses import dataclass

from .base import MetricCalculator


@dataclass(frozen=True)
class DifferenceCalculator(MetricCalculator):
    metric_a: str
    metric_b: str

    @property
    def name(self) -> str:
        return "[" + self.metric_a + "-" + self.metric_b + "]"

    def _calculate(self, stats_id, previous_report, current_report):
        current_stats = current_report.get(stats_id)
        if current_stats is None:
            return None
        value_a = current_stats.get_number(self.metric_a)
        value_b = current_stats.get_number(self.metric_b)
        if value_a is None or value_b is None:
            return None
        return value_a - value_b
