"""Calculadoras de métricas derivadas."""

from .audio_level import AudioLevelRmsCalculator
from .base import MetricCalculator
from .codec import CodecCalculator
from .difference import DifferenceCalculator
from .modifiers import CalculatorModifier
from .rate import RateCalculator, calculate_rate
from .standard_deviation import StandardDeviationCalculator, calculate_standard_deviation

__all__ = [
    "AudioLevelRmsCalculator",
    "CalculatorModifier",
    "CodecCalculator",
    "DifferenceCalculator",
    "MetricCalculator",
    "RateCalculator",
    "StandardDeviationCalculator",
    "calculate_rate",
    "calculate_standard_deviation",
]
