"""Exportación JSON del reporte de sincronización.

Por qué JSON:
- Deja evidencia de qué ids se persistieron y cuáles fallaron.
- Permite encadenar la corrida con otras herramientas sin leer Mongo.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import SyncReport


def export_sync_report_json(*, report: SyncReport, output_path: Path) -> Path:
    """Exporta `SyncReport` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json")
    payload["succeeded"] = report.succeeded
    payload["failed"] = report.failed
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
