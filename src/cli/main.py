"""CLI principal (Typer).

Por qué Typer:
- Opciones tipadas y ayuda autogenerada sin boilerplate.
- El Core no sabe nada de la consola: todo lo visual entra por `PipelineHooks`.

Sin subcomando se ejecuta `sync`, de modo que `pdf-otter-sync` a secas hace
una corrida completa.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import export_sync_report_json
from cli import doctor
from cli.ui_components import build_templates_table, print_banner
from core.config import load_settings
from core.domain.errors import ConfigurationError
from core.services.template_sync import PipelineHooks, run_sync

app = typer.Typer(help="Sync PDF Otter templates into MongoDB.")
app.command(name="doctor")(doctor.run)

_console = Console()
_err_console = Console(stderr=True)


def _build_hooks(quiet: bool) -> PipelineHooks:
    def info(message: str) -> None:
        _console.print(escape(message))

    def warning(message: str) -> None:
        _err_console.print(f"[yellow]warning:[/yellow] {escape(message)}")

    def error(message: str) -> None:
        _err_console.print(f"[red]{escape(message)}[/red]")

    def batch_done(index: int, total: int) -> None:
        if not quiet:
            _console.print(f"[dim]Fetched batch {index}/{total}[/dim]")

    return PipelineHooks(info=info, warning=warning, error=error, batch_done=batch_done)


@app.command()
def sync(
    batch_size: int | None = typer.Option(
        None,
        "--batch-size",
        min=1,
        help="Max detail requests in flight (default: PDF_OTTER_BATCH_SIZE or 3).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="List and fetch details but do not write to MongoDB.",
    ),
    report_json: Path | None = typer.Option(
        None,
        "--report-json",
        help="Write the run report as JSON to this path.",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No banner, no table."),
) -> None:
    """Fetch every template with its fields and upsert it by id."""

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        _err_console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    if not quiet:
        print_banner(_console)

    report = asyncio.run(
        run_sync(
            settings=settings,
            hooks=_build_hooks(quiet),
            batch_size=batch_size,
            dry_run=dry_run,
        )
    )
    # El error ya se reportó por `hooks.error`; la corrida termina sin código especial.
    if report is None:
        return

    if not quiet:
        _console.print(build_templates_table(report))
    if report_json is not None:
        path = export_sync_report_json(report=report, output_path=report_json)
        _console.print(f"[green]Report written to:[/green] {escape(str(path))}")


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        ctx.invoke(sync, batch_size=None, dry_run=False, report_json=None, quiet=False)


def run() -> None:
    app()
