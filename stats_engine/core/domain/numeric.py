"""Conversión canónica de valores crudos a número.

Los valores crudos de un reporte pueden llegar como número o como string
numérico (p.ej. contadores uint64 serializados como texto). Todas las
calculadoras leen a través de `try_number` en lugar de convertir ad hoc.

Política:
- Conversión exitosa → float finito
- None, string vacío, texto no numérico, NaN o Infinity → None
"""

from __future__ import annotations

import math
from typing import Any, Optional, Union


def try_number(value: Any) -> Optional[float]:
    """Intenta convertir un valor crudo a float.

    Args:
        value: Valor a convertir (None, int, float, str, Decimal, etc.)

    Returns:
        Float finito, o None si el valor no es interpretable como número
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        f = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(f):
        return None
    return f


def is_undefined(value: Any) -> bool:
    """True si un resultado calculado debe tratarse como "sin valor"."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def format_number(value: float) -> Union[int, float]:
    """Devuelve int si el float es entero (111.0 → 111)."""
    if math.isfinite(value) and float(value).is_integer():
        return int(value)
    return value
