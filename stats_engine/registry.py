"""Registro de calculadoras: tipo de entidad → métrica original → calculadoras.

El registro es configuración pura: se construye una vez al importar el
módulo, no depende del contenido de ningún reporte y es de solo lectura,
por lo que puede compartirse entre instancias del motor e hilos.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, List, Mapping, Sequence, Tuple, Union

from .calculators import (
    AudioLevelRmsCalculator,
    CalculatorModifier,
    CodecCalculator,
    DifferenceCalculator,
    MetricCalculator,
    RateCalculator,
    StandardDeviationCalculator,
)

CalculatorBinding = Union[MetricCalculator, Sequence[MetricCalculator]]

MS = CalculatorModifier.MILLISECONDS_FROM_SECONDS


class CalculatorRegistry:
    """Tabla inmutable de calculadoras por tipo de entidad y métrica original.

    Una métrica original puede tener varias calculadoras; se evalúan en el
    orden en que fueron registradas.
    """

    def __init__(self, table: Mapping[str, Mapping[str, CalculatorBinding]]):
        frozen = {}
        for stats_type, metric_calculators in table.items():
            frozen[stats_type] = MappingProxyType(
                {
                    original_name: self._as_tuple(binding)
                    for original_name, binding in metric_calculators.items()
                }
            )
        self._table = MappingProxyType(frozen)

    @staticmethod
    def _as_tuple(binding: CalculatorBinding) -> Tuple[MetricCalculator, ...]:
        if isinstance(binding, MetricCalculator):
            return (binding,)
        calculators = tuple(binding)
        for calculator in calculators:
            if not isinstance(calculator, MetricCalculator):
                raise TypeError(f"Not a MetricCalculator: {calculator!r}")
        return calculators

    def types(self) -> List[str]:
        return list(self._table.keys())

    def calculators_for(self, stats_type: str, original_name: str) -> List[MetricCalculator]:
        """Calculadoras registradas para (tipo, métrica), en orden; [] si no hay."""
        metric_calculators = self._table.get(stats_type)
        if metric_calculators is None:
            return []
        return list(metric_calculators.get(original_name, ()))

    def bindings_for(self, stats_type: str) -> Iterable[Tuple[str, Tuple[MetricCalculator, ...]]]:
        """Pares (métrica original, calculadoras) de un tipo, en orden de registro."""
        metric_calculators = self._table.get(stats_type)
        if metric_calculators is None:
            return ()
        return tuple(metric_calculators.items())

    def __contains__(self, stats_type: object) -> bool:
        return stats_type in self._table


DEFAULT_REGISTRY = CalculatorRegistry(
    {
        "data-channel": {
            "messagesSent": RateCalculator("messagesSent", "timestamp"),
            "messagesReceived": RateCalculator("messagesReceived", "timestamp"),
            "bytesSent": RateCalculator("bytesSent", "timestamp"),
            "bytesReceived": RateCalculator("bytesReceived", "timestamp"),
        },
        "media-source": {
            "totalAudioEnergy": AudioLevelRmsCalculator(),
        },
        "track": {
            "framesSent": RateCalculator("framesSent", "timestamp"),
            "framesReceived": [
                RateCalculator("framesReceived", "timestamp"),
                DifferenceCalculator("framesReceived", "framesDecoded"),
            ],
            "totalAudioEnergy": AudioLevelRmsCalculator(),
            "jitterBufferDelay": RateCalculator("jitterBufferDelay", "jitterBufferEmittedCount", MS),
        },
        "outbound-rtp": {
            "bytesSent": RateCalculator("bytesSent", "timestamp"),
            "packetsSent": RateCalculator("packetsSent", "timestamp"),
            "totalPacketSendDelay": RateCalculator("totalPacketSendDelay", "packetsSent", MS),
            "framesEncoded": RateCalculator("framesEncoded", "timestamp"),
            "totalEncodedBytesTarget": RateCalculator("totalEncodedBytesTarget", "timestamp"),
            "totalEncodeTime": RateCalculator("totalEncodeTime", "framesEncoded", MS),
            "qpSum": RateCalculator("qpSum", "framesEncoded"),
            "codecId": CodecCalculator(),
        },
        "inbound-rtp": {
            "bytesReceived": RateCalculator("bytesReceived", "timestamp"),
            "packetsReceived": RateCalculator("packetsReceived", "timestamp"),
            "framesDecoded": RateCalculator("framesDecoded", "timestamp"),
            "totalDecodeTime": RateCalculator("totalDecodeTime", "framesDecoded", MS),
            "totalInterFrameDelay": RateCalculator("totalInterFrameDelay", "framesDecoded", MS),
            "totalSquaredInterFrameDelay": StandardDeviationCalculator(
                "totalSquaredInterFrameDelay", "totalInterFrameDelay", "framesDecoded", "interFrameDelay"
            ),
            "qpSum": RateCalculator("qpSum", "framesDecoded"),
            "codecId": CodecCalculator(),
        },
        "transport": {
            "bytesSent": RateCalculator("bytesSent", "timestamp"),
            "bytesReceived": RateCalculator("bytesReceived", "timestamp"),
        },
        "candidate-pair": {
            "bytesSent": RateCalculator("bytesSent", "timestamp"),
            "bytesReceived": RateCalculator("bytesReceived", "timestamp"),
            "requestsSent": RateCalculator("requestsSent", "timestamp"),
            "requestsReceived": RateCalculator("requestsReceived", "timestamp"),
            "responsesSent": RateCalculator("responsesSent", "timestamp"),
            "responsesReceived": RateCalculator("responsesReceived", "timestamp"),
            "consentRequestsSent": RateCalculator("consentRequestsSent", "timestamp"),
            "consentRequestsReceived": RateCalculator("consentRequestsReceived", "timestamp"),
            "totalRoundTripTime": RateCalculator("totalRoundTripTime", "responsesReceived", MS),
        },
    }
)


def calculators_for(stats_type: str, original_name: str) -> List[MetricCalculator]:
    """Búsqueda en el registro por defecto."""
    return DEFAULT_REGISTRY.calculators_for(stats_type, original_name)
