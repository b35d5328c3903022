"""Cliente de la API de PDF Otter.

Endpoints usados:
- `GET /pdf_templates`       -> array de `{id, name, ...}`
- `GET /pdf_templates/{id}`  -> objeto con `fields` opcional

Los errores HTTP/red se propagan tal cual (sin retries).
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from core.domain.decoding import decode_template_details, decode_template_list
from core.domain.models import TemplateDetails, TemplateRef
from core.interfaces.template_ports import TemplateSource


class PdfOtterClient(TemplateSource):
    """Implementa `TemplateSource` sobre un `httpx.AsyncClient` ya configurado."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def _get_json(self, path: str) -> Any:
        resp = await self._client.get(path)
        resp.raise_for_status()
        return resp.json()

    async def list_templates(self) -> list[TemplateRef]:
        payload = await self._get_json("/pdf_templates")
        return decode_template_list(payload)

    async def fetch_template_details(self, template: TemplateRef) -> TemplateDetails:
        payload = await self._get_json(f"/pdf_templates/{quote(template.id, safe='')}")
        return decode_template_details(payload)
