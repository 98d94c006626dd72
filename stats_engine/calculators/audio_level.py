"""Nivel de audio "RMS" entre el reporte anterior y el actual, en [0, 1].

    sqrt(ΔtotalAudioEnergy / ΔtotalSamplesDuration)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .base import MetricCalculator
from .rate import calculate_rate


@dataclass(frozen=True)
class AudioLevelRmsCalculator(MetricCalculator):
    energy_metric: str = "totalAudioEnergy"
    duration_metric: str = "totalSamplesDuration"

    @property
    def name(self) -> str:
        return "[Audio_Level_in_RMS]"

    def _calculate(self, stats_id, previous_report, current_report):
        average_audio_level_squared = calculate_rate(
            stats_id, previous_report, current_report, self.energy_metric, self.duration_metric
        )
        if average_audio_level_squared is None:
            return None
        # Energía acumulada que retrocede (reset del contador) → sin valor.
        if average_audio_level_squared < 0:
            return None
        return math.sqrt(average_audio_level_squared)
