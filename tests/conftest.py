"""Fixtures compartidas para los tests del motor de métricas."""

from typing import Any, Dict, List

import pytest

from common.config import Settings
from stats_engine.core.domain.report import EntityStats, StatsReport


def _build_report(entities: List[tuple]) -> StatsReport:
    report = StatsReport()
    for stats_id, stats_type, timestamp, values in entities:
        report.add_stats(EntityStats(id=stats_id, type=stats_type, timestamp=timestamp, values=dict(values)))
    return report


@pytest.fixture
def make_report():
    """Factory: [(id, type, timestamp_s, values)] → StatsReport."""
    return _build_report


@pytest.fixture
def make_record():
    """Factory de registros en formato "internal reports"."""

    def _make(stats_id: str, stats_type: str, timestamp_ms: float, values: List[Any]) -> Dict[str, Any]:
        return {
            "id": stats_id,
            "type": stats_type,
            "stats": {"timestamp": timestamp_ms, "values": list(values)},
        }

    return _make


@pytest.fixture
def settings() -> Settings:
    """Settings fijos (sin depender de variables de entorno)."""
    return Settings(
        log_level="DEBUG",
        log_format="%(asctime)s - %(levelname)s - %(message)s",
        undefined_export_value=0,
    )
