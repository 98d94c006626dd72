"""InternalsReportAdapter - Bridge entre el formato "internal reports" y StatsReport.

El formato externo es una lista de registros aplanados:
    {id, type, stats: {timestamp (ms), values: [name1, value1, name2, value2, ...]}}

Conversión:
- from_internals: registros → StatsReport (timestamp ms → s)
- to_internals: StatsReport → registros (timestamp s → ms), insertando tras
  cada métrica cruda sus métricas calculadas en orden de registro
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from ...core.domain.report import EntityStats, StatsReport
from ...core.monitoring.stats import EngineStats
from ...schemas import validate_internal_report

logger = logging.getLogger(__name__)


class InternalsReportAdapter:
    """Adapter bidireccional: internal reports ↔ StatsReport."""

    @staticmethod
    def from_internals(
        internal_reports: Optional[Iterable[Any]],
        stats: Optional[EngineStats] = None,
    ) -> StatsReport:
        """Convierte una lista de registros a StatsReport.

        Los registros sin `stats.values` o malformados se omiten sin error.

        Args:
            internal_reports: Lista de registros del formato externo
            stats: Contadores opcionales a actualizar

        Returns:
            StatsReport con una EntityStats por registro válido
        """
        report = StatsReport()

        for raw in internal_reports or []:
            if stats is not None:
                stats.records_received += 1

            result = validate_internal_report(raw)
            if not result.valid:
                if stats is not None:
                    stats.records_skipped += 1
                record_id = raw.get("id") if isinstance(raw, dict) else None
                logger.warning("SKIP_RECORD id=%s reason=%s", record_id, result.error)
                continue

            record = result.record
            report.add_stats(
                EntityStats(
                    id=record.id,
                    type=record.type,
                    timestamp=record.stats.timestamp / 1000.0,  # ms -> s
                    values=InternalsReportAdapter._pairs_to_dict(record.stats.values),
                )
            )

        return report

    @staticmethod
    def to_internals(
        report: Optional[StatsReport],
        undefined_value: Union[int, float] = 0,
    ) -> List[Dict[str, Any]]:
        """Convierte un StatsReport al formato externo.

        Args:
            report: Reporte a exportar (None → lista vacía)
            undefined_value: Valor que sustituye a métricas calculadas sin valor,
                para que las gráficas siempre reciban un número

        Returns:
            Lista de registros con métricas crudas y calculadas intercaladas
        """
        if report is None:
            return []

        result: List[Dict[str, Any]] = []
        for entity in report:
            values: List[Any] = []
            for name, value in entity.values.items():
                values.append(name)
                values.append(value)
                for metric in report.get_calculated_metrics(entity.id, name):
                    values.append(metric.name)
                    values.append(undefined_value if metric.is_undefined else metric.value)

            result.append(
                {
                    "id": entity.id,
                    "type": entity.type,
                    "stats": {
                        "timestamp": entity.timestamp * 1000.0,  # s -> ms
                        "values": values,
                    },
                }
            )

        return result

    @staticmethod
    def _pairs_to_dict(values: List[Any]) -> Dict[str, Any]:
        """["a", 1, "b", 2] → {"a": 1, "b": 2}; un nombre final sin valor queda en None."""
        pairs: Dict[str, Any] = {}
        for i in range(0, len(values), 2):
            name = values[i]
            if name is None:
                continue
            pairs[str(name)] = values[i + 1] if i + 1 < len(values) else None
        return pairs
