"""Contratos de origen y destino de plantillas.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que la API real o un stub en memoria sean intercambiables y que
  el pipeline se teste sin red ni Mongo.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import DetailedTemplate, TemplateDetails, TemplateRef


@runtime_checkable
class TemplateSource(Protocol):
    """Origen de plantillas (API de documentos)."""

    async def list_templates(self) -> list[TemplateRef]:
        """Devuelve las referencias validadas, en el orden de la API."""

        ...

    async def fetch_template_details(self, template: TemplateRef) -> TemplateDetails:
        """Devuelve el detalle de una plantilla."""

        ...


@runtime_checkable
class TemplateStore(Protocol):
    """Destino de plantillas, indexado por `id`."""

    async def upsert_template(self, template: DetailedTemplate) -> None:
        """Update-or-insert por `id` con semántica `$set`."""

        ...
