"""Modificadores de unidad para RateCalculator."""

from __future__ import annotations

from enum import Enum


class CalculatorModifier(Enum):
    """Sufijo de nombre y multiplicador aplicados al resultado de un rate."""

    NONE = ("", 1)
    MILLISECONDS_FROM_SECONDS = ("_in_ms", 1000)

    def __init__(self, postfix: str, multiplier: int):
        self.postfix = postfix
        self.multiplier = multiplier
