"""Esquemas Pydantic del formato "internal reports".

Formato esperado por registro:
{
    "id": "RTCOutboundRTPVideoStream_1234",
    "type": "outbound-rtp",
    "stats": {
        "timestamp": 1706688000123.0,      # milisegundos
        "values": ["bytesSent", 1000, "packetsSent", "12", ...]
    }
}
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import BaseModel, validator


class InternalStatsIn(BaseModel):
    timestamp: float
    values: Optional[List[Any]] = None

    @validator("timestamp")
    def validate_timestamp(cls, v):
        if not math.isfinite(v):
            raise ValueError("timestamp is not finite")
        return v


class InternalReportIn(BaseModel):
    id: str
    type: str
    stats: Optional[InternalStatsIn] = None

    @validator("id", "type", pre=True)
    def coerce_to_str(cls, v):
        if v is None:
            raise ValueError("field is required")
        return str(v)

    @property
    def has_values(self) -> bool:
        return self.stats is not None and self.stats.values is not None


@dataclass
class ValidationResult:
    """Resultado de validación de un registro."""

    valid: bool
    record: Optional[InternalReportIn] = None
    error: Optional[str] = None


def validate_internal_report(data: Any) -> ValidationResult:
    """Valida un registro del formato "internal reports".

    Args:
        data: Diccionario con un registro

    Returns:
        ValidationResult con el registro validado o el error
    """
    if not isinstance(data, dict):
        return ValidationResult(valid=False, error=f"record must be an object, got {type(data).__name__}")

    stats = data.get("stats")
    if not isinstance(stats, dict) or stats.get("values") is None:
        return ValidationResult(valid=False, error="missing stats.values")

    try:
        record = InternalReportIn(**data)
    except Exception as e:
        return ValidationResult(valid=False, error=str(e))

    return ValidationResult(valid=True, record=record)
