"""
Fixtures compartidas: settings sin .env, colección Mongo en memoria y una
fuente de plantillas falsa que registra la concurrencia.
"""
from __future__ import annotations

import asyncio
from typing import Any

import pytest
from pymongo.errors import PyMongoError

from core.config import AppSettings
from core.domain.decoding import decode_template_details, decode_template_list
from core.domain.models import TemplateDetails, TemplateRef


class InMemoryCollection:
    """Subset de `update_one` con semántica `$set` + upsert."""

    def __init__(self, fail_ids: set[str] | None = None) -> None:
        self.docs: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[dict[str, Any], dict[str, Any], bool]] = []
        self._fail_ids = fail_ids or set()

    async def update_one(self, filter: dict[str, Any], update: dict[str, Any], upsert: bool = False) -> None:
        self.calls.append((filter, update, upsert))
        await asyncio.sleep(0)
        key = filter["id"]
        if key in self._fail_ids:
            raise PyMongoError(f"write failed for {key}")
        doc = self.docs.get(key)
        if doc is None:
            if not upsert:
                return
            doc = dict(filter)
            self.docs[key] = doc
        doc.update(update["$set"])


class FakeTemplateSource:
    def __init__(
        self,
        payload: Any,
        details: dict[str, Any] | None = None,
        *,
        batch_size: int = 3,
        fail_ids: set[str] | None = None,
    ) -> None:
        self.payload = payload
        self.details = details or {}
        self.batch_size = batch_size
        self.fail_ids = fail_ids or set()
        self.list_calls = 0
        self.started: list[str] = []
        self.in_flight: set[str] = set()
        self.max_in_flight = 0
        self.overlaps: list[set[str]] = []

    async def list_templates(self) -> list[TemplateRef]:
        self.list_calls += 1
        return decode_template_list(self.payload)

    async def fetch_template_details(self, template: TemplateRef) -> TemplateDetails:
        self.started.append(template.id)
        self.in_flight.add(template.id)
        self.overlaps.append(set(self.in_flight))
        self.max_in_flight = max(self.max_in_flight, len(self.in_flight))
        try:
            # Duraciones distintas: el orden de fin no coincide con el de inicio.
            position = len(self.started) % self.batch_size
            await asyncio.sleep(0.01 * (self.batch_size - position))
            if template.id in self.fail_ids:
                raise RuntimeError(f"detail request failed for {template.id}")
            return decode_template_details(self.details.get(template.id, {}))
        finally:
            self.in_flight.discard(template.id)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        pdf_otter_api_key="secret-key",
        pdf_otter_endpoint="https://api.pdfotter.test",
        mongo_conn_str="mongodb://localhost:27017",
        mongo_database="testdb",
    )


def template_payload(count: int) -> list[dict[str, str]]:
    return [{"id": f"t{i}", "name": f"Template {i}"} for i in range(1, count + 1)]
