"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/Mongo) lean config de forma consistente.

Los nombres de las variables obligatorias son fijos (los comparte el resto
de la infraestructura), por eso no usamos `env_prefix`.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.errors import ConfigurationError


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "pdf-otter-sync"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "pdf-otter-sync"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "pdf-otter-sync"
    return Path.home() / ".config" / "pdf-otter-sync"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    pdf_otter_api_key: str = Field(
        ...,
        min_length=1,
        description="API key de PDF Otter (usuario de HTTP Basic, password vacío).",
    )
    pdf_otter_endpoint: str = Field(
        ...,
        min_length=1,
        description="Base URL de la API de PDF Otter.",
    )
    mongo_conn_str: str = Field(
        ...,
        min_length=1,
        description="Connection string de MongoDB.",
    )
    mongo_database: str = Field(
        ...,
        min_length=1,
        description="Base de datos destino.",
    )

    mongo_collection: str = Field(
        default="pdfOtter",
        min_length=1,
        description="Colección destino (documentos indexados por `id`).",
    )
    pdf_otter_batch_size: int = Field(
        default=3,
        ge=1,
        le=100,
        description="Máximo de requests de detalle en vuelo por lote.",
    )
    pdf_otter_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request a la API (segundos).",
    )
    pdf_otter_user_agent: str = Field(
        default="pdf-otter-sync/0.1",
        min_length=1,
        description="User-Agent para peticiones a la API.",
    )


_REQUIRED_ENV_VARS = (
    "pdf_otter_api_key",
    "pdf_otter_endpoint",
    "mongo_conn_str",
    "mongo_database",
)


def load_settings(**overrides: Any) -> AppSettings:
    """Construye `AppSettings` traduciendo errores de pydantic a `ConfigurationError`.

    Una variable obligatoria ausente o vacía se reporta por su nombre de
    entorno (p.ej. `MONGO_CONN_STR`), todas a la vez.
    """

    try:
        return AppSettings(**overrides)
    except ValidationError as exc:
        missing: list[str] = []
        for err in exc.errors():
            loc = err.get("loc") or ()
            name = str(loc[0]) if loc else ""
            if name in _REQUIRED_ENV_VARS and err.get("type") in ("missing", "string_too_short"):
                missing.append(name.upper())
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}",
                details={"missing": missing},
            ) from exc
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
