"""Persistencia en MongoDB (pymongo async).

Por qué un context manager:
- La conexión es un recurso único por corrida: se abre una vez y se cierra
  SIEMPRE (éxito, error de forma o error de red).
- El store recibe la colección explícitamente; no hay cliente global.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from pymongo import AsyncMongoClient

from core.config import AppSettings
from core.domain.models import DetailedTemplate
from core.interfaces.template_ports import TemplateStore


class MongoTemplateStore(TemplateStore):
    """Upsert por `id` con `$set` (reemplaza campos presentes, inserta si no existe)."""

    def __init__(self, collection: Any) -> None:
        self._collection = collection

    async def upsert_template(self, template: DetailedTemplate) -> None:
        await self._collection.update_one(
            {"id": template.id},
            {"$set": template.to_record()},
            upsert=True,
        )


@asynccontextmanager
async def open_template_store(settings: AppSettings) -> AsyncIterator[MongoTemplateStore]:
    client: AsyncMongoClient = AsyncMongoClient(settings.mongo_conn_str)
    try:
        await client.aconnect()
        collection = client[settings.mongo_database][settings.mongo_collection]
        yield MongoTemplateStore(collection)
    finally:
        await client.close()


async def ping_mongo(settings: AppSettings) -> None:
    """Comprueba conectividad (usado por `doctor`)."""

    client: AsyncMongoClient = AsyncMongoClient(settings.mongo_conn_str)
    try:
        await client.admin.command("ping")
    finally:
        await client.close()
