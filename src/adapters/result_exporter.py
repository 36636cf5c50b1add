"""Exportación del resultado de la operación.

Por qué aquí:
- Escribir a disco es I/O: el Core solo produce un `FetchResult`.
- Permite guardar respuestas binarias sin pasar por la terminal.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import FetchResult


def export_result(*, result: FetchResult, output_path: Path) -> Path:
    """Escribe el valor tal cual: bytes crudos o texto UTF-8."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if result.is_bytes:
        output_path.write_bytes(result.as_bytes())
    else:
        output_path.write_text(str(result.value), encoding="utf-8")
    return output_path


def export_result_json(*, result: FetchResult, output_path: Path) -> Path:
    """Exporta el resultado etiquetado (`output_type` + `value`) a JSON UTF-8."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
