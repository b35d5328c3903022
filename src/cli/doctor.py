"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.mongo_store import ping_mongo
from adapters.pdf_otter import PdfOtterClient
from core.config import AppSettings, load_settings
from core.domain.errors import ConfigurationError

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            templates = await PdfOtterClient(client).list_templates()
        return True, f"{len(templates)} templates listed"
    except Exception as exc:
        return False, str(exc)


async def _check_mongo(settings: AppSettings) -> tuple[bool, str]:
    try:
        await ping_mongo(settings)
        return True, f"ping OK ({settings.mongo_database}.{settings.mongo_collection})"
    except Exception as exc:
        return False, str(exc)


def run() -> None:
    """Check configuration, PDF Otter reachability and MongoDB connectivity."""

    table = Table(title="PDF-OTTER-SYNC Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        table.add_row("Config", "FAIL", escape(exc.message))
        _console.print(table)
        raise typer.Exit(code=1) from exc

    table.add_row("Config", "OK", escape(settings.pdf_otter_endpoint))
    table.add_row("Batch size", "OK", str(settings.pdf_otter_batch_size))

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("PDF Otter API", "OK" if ok_api else "FAIL", escape(detail_api))

    ok_mongo, detail_mongo = asyncio.run(_check_mongo(settings))
    table.add_row("MongoDB", "OK" if ok_mongo else "FAIL", escape(detail_mongo))

    _console.print(table)

    if not (ok_api and ok_mongo):
        raise typer.Exit(code=1)
