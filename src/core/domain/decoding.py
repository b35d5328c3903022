"""Decodificación en el borde de la API.

Cada item del listado se convierte en una referencia válida o en un
`ShapeIssue`; el listado completo solo se acepta si no hay ningún issue.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from pydantic import ValidationError

from core.domain.errors import TemplateShapeError
from core.domain.models import TemplateDetails, TemplateRef


@dataclass(frozen=True)
class ShapeIssue:
    """Item del listado que no es una referencia de plantilla."""

    index: int
    reason: str


def decode_template_ref(item: Any, *, index: int = 0) -> TemplateRef | ShapeIssue:
    if not isinstance(item, dict):
        return ShapeIssue(index=index, reason=f"expected object, got {type(item).__name__}")
    try:
        return TemplateRef.model_validate(item)
    except ValidationError as exc:
        problems = ", ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return ShapeIssue(index=index, reason=problems)


def decode_template_list(payload: Any) -> list[TemplateRef]:
    """Valida la respuesta de `/pdf_templates` completa.

    Raises:
        TemplateShapeError: si no es un array o algún item no es válido.
    """

    if not isinstance(payload, list):
        raise TemplateShapeError(
            "Received non template data",
            details={"expected": "array", "got": type(payload).__name__},
        )

    decoded = [decode_template_ref(item, index=i) for i, item in enumerate(payload)]
    issues: Sequence[ShapeIssue] = [d for d in decoded if isinstance(d, ShapeIssue)]
    if issues:
        raise TemplateShapeError(
            "Received non template data",
            details={"issues": [{"index": i.index, "reason": i.reason} for i in issues]},
        )
    return [d for d in decoded if isinstance(d, TemplateRef)]


def decode_template_details(payload: Any) -> TemplateDetails:
    """Detalle de plantilla: sin validación más allá de `fields`.

    Un payload que no es objeto se trata como "sin campos".
    """

    if not isinstance(payload, dict):
        return TemplateDetails()
    return TemplateDetails.model_validate(payload)
