"""Errores del dominio.

Por qué una jerarquía propia:
- La CLI captura `SyncError` en un único punto y reporta el mensaje.
- Los errores de transporte (httpx/pymongo) NO se envuelven: suben tal cual.
"""

from __future__ import annotations

from typing import Any


class SyncError(Exception):
    """Error base de la sincronización."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(SyncError):
    """Falta (o es inválida) una variable de entorno obligatoria."""


class TemplateShapeError(SyncError, TypeError):
    """El listado de la API no es un array de referencias válidas."""


class TemplateStoreError(SyncError):
    """Al menos un upsert falló; los que terminaron quedan persistidos."""

    def __init__(self, message: str, *, outcomes: list[Any]) -> None:
        self.outcomes = outcomes
        super().__init__(
            message,
            details={
                "succeeded": [o.template_id for o in outcomes if o.ok],
                "failed": [o.template_id for o in outcomes if not o.ok],
            },
        )
