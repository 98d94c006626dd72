from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _default_env_file() -> str:
    # .env junto al directorio de trabajo, como en despliegues locales.
    return str(Path.cwd() / ".env")


def _parse_number(raw: str, default: Union[int, float]) -> Union[int, float]:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    if value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True)
class Settings:
    log_level: str
    log_format: str

    # Valor exportado cuando una métrica calculada no tiene valor.
    undefined_export_value: Union[int, float]


def get_settings() -> Settings:
    # Load env file (if present) but still allow overriding via real environment variables.
    env_file = os.getenv("STATS_ENV_FILE", _default_env_file())
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    log_level = os.getenv("STATS_LOG_LEVEL", "INFO").upper()
    log_format = os.getenv("STATS_LOG_FORMAT", DEFAULT_LOG_FORMAT)
    undefined_export_value = _parse_number(os.getenv("STATS_UNDEFINED_EXPORT_VALUE", "0"), 0)

    return Settings(
        log_level=log_level,
        log_format=log_format,
        undefined_export_value=undefined_export_value,
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=settings.log_format,
        handlers=[logging.StreamHandler()],
    )
