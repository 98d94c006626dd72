"""Codec: resuelve codecId contra el reporte actual y arma un texto legible.

    mimeType "video/VP8", payloadType 96 → "VP8 (payloadType: 96)"
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.domain.numeric import format_number, try_number
from .base import MetricCalculator


@dataclass(frozen=True)
class CodecCalculator(MetricCalculator):
    reference_metric: str = "codecId"
    mime_type_metric: str = "mimeType"
    payload_type_metric: str = "payloadType"

    @property
    def name(self) -> str:
        return "[codec]"

    def _calculate(self, stats_id, previous_report, current_report):
        target_stats = current_report.get(stats_id)
        if target_stats is None:
            return None
        codec_id = target_stats.get(self.reference_metric)
        if codec_id is None:
            return None
        codec_stats = current_report.get(str(codec_id))
        if codec_stats is None:
            return None

        mime_type = codec_stats.get(self.mime_type_metric)
        payload_type = codec_stats.get(self.payload_type_metric)
        if mime_type is None or payload_type is None:
            return None

        mime_type = str(mime_type)
        codec = mime_type[mime_type.rfind("/") + 1:]
        payload_number = try_number(payload_type)
        payload_text = str(format_number(payload_number)) if payload_number is not None else str(payload_type)
        return codec + " (payloadType: " + payload_text + ")"
