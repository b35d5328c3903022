"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- La misma estructura sirve para validar la API y para serializar a Mongo.

Nota:
- Estos modelos describen *qué* es una plantilla, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class TemplateRef(BaseModel):
    """Referencia ligera devuelta por el listado (`/pdf_templates`).

    Modo estricto: `id` y `name` deben llegar como strings no vacíos; un `id`
    numérico NO se convierte a string.
    """

    model_config = ConfigDict(extra="ignore", strict=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Identificador de la plantilla en PDF Otter.",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Nombre legible de la plantilla.",
    )


class TemplateDetails(BaseModel):
    """Payload de detalle (`/pdf_templates/{id}`); solo nos interesa `fields`.

    `fields` se conserva tal cual llega (JSON crudo): no se valida ni se
    recorta ningún item, se persiste completo.
    """

    model_config = ConfigDict(extra="ignore")

    fields: Any = None


class DetailedTemplate(TemplateRef):
    """Referencia + campos. Es también la forma persistida en Mongo."""

    fields: Any = Field(
        default=None,
        description="Campos tal cual los devuelve la API; `None` si el detalle no los trae.",
    )

    def to_record(self) -> dict[str, Any]:
        """Documento para `$set` (clave `id`, `fields` puede ser null)."""

        return self.model_dump(mode="json")


class UpsertOutcome(BaseModel):
    template_id: str
    ok: bool
    error: str | None = None


class SyncReport(BaseModel):
    """Resultado de una corrida completa."""

    listed: int = Field(
        default=0,
        ge=0,
        description="Cantidad de referencias devueltas por el listado.",
    )
    templates: list[DetailedTemplate] = Field(
        default_factory=list,
        description="Plantillas detalladas, en el orden del listado.",
    )
    outcomes: list[UpsertOutcome] = Field(
        default_factory=list,
        description="Un resultado por upsert (vacío en dry-run).",
    )
    warnings: list[str] = Field(default_factory=list)
    dry_run: bool = False
    finished_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Momento de cierre de la corrida (UTC).",
    )

    @property
    def succeeded(self) -> list[str]:
        return [o.template_id for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[str]:
        return [o.template_id for o in self.outcomes if not o.ok]
