"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza base_url, auth, timeouts y headers para la API de PDF Otter.
- Facilita testeo: se puede inyectar un `transport` (p.ej. `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` autenticado contra la API.

    Auth: HTTP Basic con la API key como usuario y password vacío, es decir
    `Authorization: Basic base64("<key>:")`.
    """

    headers: dict[str, str] = {
        "User-Agent": settings.pdf_otter_user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=settings.pdf_otter_endpoint.rstrip("/"),
        auth=httpx.BasicAuth(settings.pdf_otter_api_key, ""),
        timeout=httpx.Timeout(settings.pdf_otter_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
