"""Template synchronization pipeline.

The run is strictly sequential: list -> fetch details in fixed-size batches
-> upsert everything. Side-effects for the UI (printing, progress) go
through `PipelineHooks` so the CLI, tests or a future batch job can plug
their own output without touching the flow.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar

from adapters.http_client import build_async_client
from adapters.mongo_store import open_template_store
from adapters.pdf_otter import PdfOtterClient
from core.config import AppSettings
from core.domain.errors import TemplateStoreError
from core.domain.models import (
    DetailedTemplate,
    SyncReport,
    TemplateDetails,
    TemplateRef,
    UpsertOutcome,
)
from core.interfaces.template_ports import TemplateSource, TemplateStore

T = TypeVar("T")


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    info: Callable[[str], None] | None = None
    warning: Callable[[str], None] | None = None
    error: Callable[[str], None] | None = None
    batch_done: Callable[[int, int], None] | None = None


def _emit(callback: Callable[[str], None] | None, message: str) -> None:
    if callback:
        callback(message)


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split `items` into consecutive chunks of at most `size`, keeping order."""

    if size < 1:
        raise ValueError(f"batch size must be >= 1, got {size}")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def merge_template_details(template: TemplateRef, details: TemplateDetails) -> DetailedTemplate:
    """Copy the reference and attach `fields` exactly as the API returned them."""

    return DetailedTemplate(id=template.id, name=template.name, fields=details.fields)


async def fetch_details_in_batches(
    source: TemplateSource,
    templates: Sequence[TemplateRef],
    *,
    batch_size: int,
    hooks: PipelineHooks | None = None,
    warnings: list[str] | None = None,
) -> list[DetailedTemplate]:
    """Fetch details with at most `batch_size` requests in flight.

    A batch starts only once the previous one has fully completed. The
    first failed request propagates and aborts the remaining batches.
    """

    hooks = hooks or PipelineHooks()
    batches = chunked(templates, batch_size)
    detailed: list[DetailedTemplate] = []

    for index, batch in enumerate(batches, start=1):
        details = await asyncio.gather(*(source.fetch_template_details(t) for t in batch))
        for template, detail in zip(batch, details):
            if detail.fields is None:
                message = f"Template has no fields {template.id}"
                if warnings is not None:
                    warnings.append(message)
                _emit(hooks.warning, message)
            detailed.append(merge_template_details(template, detail))
        if hooks.batch_done:
            hooks.batch_done(index, len(batches))

    return detailed


async def store_templates(
    store: TemplateStore,
    templates: Sequence[DetailedTemplate],
) -> list[UpsertOutcome]:
    """Upsert every template concurrently and report one outcome per item.

    All upserts run to completion; nothing already written is rolled back.
    """

    results = await asyncio.gather(
        *(store.upsert_template(t) for t in templates),
        return_exceptions=True,
    )
    outcomes: list[UpsertOutcome] = []
    for template, result in zip(templates, results):
        if isinstance(result, BaseException):
            outcomes.append(UpsertOutcome(template_id=template.id, ok=False, error=repr(result)))
        else:
            outcomes.append(UpsertOutcome(template_id=template.id, ok=True))
    return outcomes


async def sync_templates(
    source: TemplateSource,
    store: TemplateStore | None,
    *,
    batch_size: int,
    hooks: PipelineHooks | None = None,
) -> SyncReport:
    """Run list -> fetch -> store against the given ports.

    With `store=None` the writer stage is skipped (dry-run).

    Raises:
        TemplateShapeError: the list response is not an array of references.
        TemplateStoreError: one or more upserts failed.
    """

    hooks = hooks or PipelineHooks()
    warnings: list[str] = []

    refs = await source.list_templates()
    templates = await fetch_details_in_batches(
        source,
        refs,
        batch_size=batch_size,
        hooks=hooks,
        warnings=warnings,
    )
    report = SyncReport(
        listed=len(refs),
        templates=templates,
        warnings=warnings,
        dry_run=store is None,
    )
    if store is None:
        return report

    report.outcomes = await store_templates(store, templates)
    if report.failed:
        raise TemplateStoreError(
            f"{len(report.failed)} of {len(report.outcomes)} upserts failed: "
            f"{', '.join(report.failed)}",
            outcomes=report.outcomes,
        )
    return report


async def run_sync(
    *,
    settings: AppSettings,
    hooks: PipelineHooks | None = None,
    batch_size: int | None = None,
    dry_run: bool = False,
) -> SyncReport | None:
    """Wire the real adapters and run one synchronization.

    Any error is caught here and reported through `hooks.error`; the caller
    gets `None` instead of a report. The Mongo connection is scoped to the
    run and closed on every exit path, after the error has been reported.
    """

    hooks = hooks or PipelineHooks()
    size = batch_size or settings.pdf_otter_batch_size

    if dry_run:
        try:
            async with build_async_client(settings) as http:
                return await sync_templates(PdfOtterClient(http), None, batch_size=size, hooks=hooks)
        except Exception as exc:
            _emit(hooks.error, f"An error occurred: {exc}")
            return None

    try:
        async with open_template_store(settings) as store:
            _emit(hooks.info, "Connected successfully to MongoDB server")
            async with build_async_client(settings) as http:
                report = await sync_templates(
                    PdfOtterClient(http),
                    store,
                    batch_size=size,
                    hooks=hooks,
                )
            _emit(hooks.info, "Templates have been fetched and stored successfully")
            return report
    except Exception as exc:
        _emit(hooks.error, f"An error occurred: {exc}")
        return None
    finally:
        _emit(hooks.info, "MongoDB connection closed")
