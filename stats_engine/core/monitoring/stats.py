"""Contadores de ingesta y cálculo del motor."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class EngineStats:
    """Contadores acumulados de un StatsRatesCalculator."""

    reports_ingested: int = 0
    records_received: int = 0
    records_skipped: int = 0
    metrics_calculated: int = 0
    metrics_undefined: int = 0
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __str__(self) -> str:
        return (
            f"EngineStats: reports={self.reports_ingested} records={self.records_received} "
            f"skipped={self.records_skipped} metrics={self.metrics_calculated} "
            f"undefined={self.metrics_undefined}"
        )

    def to_dict(self) -> dict:
        """Convierte a diccionario."""
        return {
            "reports_ingested": self.reports_ingested,
            "records_received": self.records_received,
            "records_skipped": self.records_skipped,
            "metrics_calculated": self.metrics_calculated,
            "metrics_undefined": self.metrics_undefined,
            "started_at": self.started_at.isoformat(),
            "defined_rate": self._defined_rate(),
        }

    def _defined_rate(self) -> float:
        """Fracción de métricas calculadas con valor."""
        if self.metrics_calculated == 0:
            return 1.0
        return (self.metrics_calculated - self.metrics_undefined) / self.metrics_calculated

    def reset(self):
        """Reinicia contadores."""
        self.reports_ingested = 0
        self.records_received = 0
        self.records_skipped = 0
        self.metrics_calculated = 0
        self.metrics_undefined = 0
        self.started_at = datetime.now(timezone.utc)
