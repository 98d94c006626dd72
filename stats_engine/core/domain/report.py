"""Modelo de dominio de un reporte de estadísticas.

Un StatsReport es una instantánea periódica: un conjunto ordenado de
EntityStats (orden de inserción) indexado por id, más un almacén de
métricas calculadas por (id, métrica original).

El reporte es inmutable una vez entregado al motor, salvo por el almacén
de métricas calculadas, que se escribe una única vez.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .numeric import is_undefined, try_number

TIMESTAMP_FIELD = "timestamp"


@dataclass(frozen=True)
class EntityStats:
    """Instantánea de una entidad: id, tipo, timestamp (segundos) y valores crudos."""

    id: str
    type: str
    timestamp: float
    values: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        """Valor crudo de una métrica; `timestamp` resuelve al timestamp de la entidad."""
        if name == TIMESTAMP_FIELD:
            return self.timestamp
        return self.values.get(name, default)

    def get_number(self, name: str) -> Optional[float]:
        """Valor de una métrica convertido a número, o None si no es convertible."""
        return try_number(self.get(name))

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "type": self.type, "timestamp": self.timestamp}
        for name, value in self.values.items():
            data.setdefault(name, value)
        return data


@dataclass(frozen=True)
class Metric:
    """Métrica calculada (nombre, valor). El valor puede estar ausente."""

    name: str
    value: Any = None

    @property
    def is_undefined(self) -> bool:
        return is_undefined(self.value)

    def __str__(self) -> str:
        return '{"' + self.name + '":"' + str(self.value) + '"}'


class CalculatedStats:
    """Métricas calculadas de una entidad.

    Mapa métrica original → lista de Metric en orden de registro. Por ejemplo,
    framesReceived → [[framesReceived/s], [framesReceived-framesDecoded]].
    """

    def __init__(self, stats_id: str):
        self.id = stats_id
        self._by_original_name: Dict[str, List[Metric]] = {}

    def add_calculated_metric(self, original_name: str, metric: Metric) -> None:
        self._by_original_name.setdefault(original_name, []).append(metric)

    def get_calculated_metrics(self, original_name: str) -> List[Metric]:
        """Métricas asociadas a `original_name` en orden de inserción, o []."""
        return list(self._by_original_name.get(original_name, []))

    def original_names(self) -> List[str]:
        return list(self._by_original_name.keys())

    def to_dict(self) -> Dict[str, List[Tuple[str, Any]]]:
        return {
            original: [(m.name, m.value) for m in metrics]
            for original, metrics in self._by_original_name.items()
        }

    def __str__(self) -> str:
        parts = ['{id:"' + self.id + '"']
        for original, metrics in self._by_original_name.items():
            parts.append(original + ":[" + ",".join(str(m) for m in metrics) + "]")
        return ",".join(parts) + "}"


class StatsReport:
    """Reporte de estadísticas: EntityStats por id + métricas calculadas."""

    def __init__(self) -> None:
        self._stats_by_id: Dict[str, EntityStats] = {}
        self._calculated_by_id: Optional[Dict[str, CalculatedStats]] = None

    def add_stats(self, stats: EntityStats) -> None:
        # Semántica de mapa: ids repetidos → gana la última escritura.
        self._stats_by_id[stats.id] = stats

    def get(self, stats_id: Optional[str]) -> Optional[EntityStats]:
        if stats_id is None:
            return None
        return self._stats_by_id.get(stats_id)

    def get_by_type(self, stats_type: str) -> List[EntityStats]:
        return [s for s in self._stats_by_id.values() if s.type == stats_type]

    def __iter__(self) -> Iterator[EntityStats]:
        return iter(list(self._stats_by_id.values()))

    def __len__(self) -> int:
        return len(self._stats_by_id)

    def __contains__(self, stats_id: object) -> bool:
        return stats_id in self._stats_by_id

    # ------------------------------------------------------------------
    # Métricas calculadas (escritura única)
    # ------------------------------------------------------------------

    @property
    def is_calculated(self) -> bool:
        return self._calculated_by_id is not None

    def attach_calculated_stats(self, calculated: Dict[str, CalculatedStats]) -> bool:
        """Adjunta el almacén de métricas calculadas.

        Returns:
            False si el reporte ya tenía métricas calculadas (no se sobrescriben)
        """
        if self._calculated_by_id is not None:
            return False
        self._calculated_by_id = dict(calculated)
        return True

    def get_calculated_stats(self, stats_id: str) -> Optional[CalculatedStats]:
        if not self._calculated_by_id:
            return None
        return self._calculated_by_id.get(stats_id)

    def get_calculated_metrics(self, stats_id: str, original_name: str) -> List[Metric]:
        calculated = self.get_calculated_stats(stats_id)
        if calculated is None:
            return []
        return calculated.get_calculated_metrics(original_name)

    def __str__(self) -> str:
        original = ",".join(json.dumps(s.to_dict(), default=str) for s in self._stats_by_id.values())
        calculated = ",".join(str(c) for c in (self._calculated_by_id or {}).values())
        return "[original:" + original + "],calculated:[" + calculated + "]"
