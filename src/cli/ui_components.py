"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `sync` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import SyncReport


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (`--quiet`).
    """

    title = Text("PDF-OTTER-SYNC", style="bold cyan")
    subtitle = Text("PDF Otter templates -> MongoDB", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_templates_table(report: SyncReport) -> Table:
    """Tabla con una fila por plantilla y el estado de su upsert."""

    status_by_id = {o.template_id: o for o in report.outcomes}

    table = Table(title="PDF Templates")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Fields", style="magenta", justify="right")
    table.add_column("Stored", style="green")

    for template in report.templates:
        fields = str(len(template.fields)) if isinstance(template.fields, list) else "-"
        outcome = status_by_id.get(template.id)
        if report.dry_run or outcome is None:
            stored = "skipped"
        elif outcome.ok:
            stored = "yes"
        else:
            stored = "[red]no[/red]"
        table.add_row(Text(template.id), Text(template.name), fields, stored)
    return table
