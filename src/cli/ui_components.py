"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `fetch`, `describe` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import FetchResult, OperationMetadata

_PREVIEW_BYTES = 256


def print_banner(console: Console) -> None:
    """Imprime el banner (solo en comandos interactivos, nunca sobre stdout de datos)."""

    title = Text("recipe-fetch", style="bold cyan")
    subtitle = Text("One HTTP request • String or Bytes", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def hex_preview(data: bytes, *, limit: int = _PREVIEW_BYTES) -> str:
    """Volcado hex clásico (16 bytes por línea) de los primeros `limit` bytes."""

    lines: list[str] = []
    for offset in range(0, min(len(data), limit), 16):
        chunk = data[offset : offset + 16]
        hex_part = " ".join(f"{b:02x}" for b in chunk)
        ascii_part = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        lines.append(f"{offset:08x}  {hex_part:<47}  {ascii_part}")
    if len(data) > limit:
        lines.append(f"... ({len(data) - limit} more bytes)")
    return "\n".join(lines)


def build_bytes_panel(result: FetchResult) -> Panel:
    """Panel para una respuesta en modo Bytes."""

    data = result.as_bytes()
    body = Text(hex_preview(data) or "(empty body)")
    title = Text(f"{len(data)} bytes • {result.output_type.value}", style="bold yellow")
    return Panel(body, title=title, border_style="yellow")


def build_metadata_table(metadata: OperationMetadata) -> Table:
    """Tabla con la metadata y el esquema de argumentos de la operación."""

    table = Table(title=f"{metadata.name} ({metadata.module})")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Description", metadata.description)
    table.add_row("Info URL", metadata.info_url)
    table.add_row("Input type", metadata.input_type)
    table.add_row("Output type", metadata.output_type.value)
    for arg in metadata.args:
        if isinstance(arg.value, list):
            value = " | ".join(arg.value)
        else:
            value = repr(arg.value)
        table.add_row(f"Arg: {arg.name}", f"[{arg.type}] {value}")
    return table
