"""CLI de recipe-fetch (Typer).

Por qué Typer + Rich:
- Opciones tipadas (los Enum del dominio se convierten en choices).
- La salida de datos va a stdout sin decorar; diagnósticos y errores a stderr.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from adapters.result_exporter import export_result, export_result_json
from cli.doctor import app as doctor_app
from cli.ui_components import build_bytes_panel, build_metadata_table, print_banner
from core.config import AppSettings
from core.domain.errors import OperationError
from core.domain.models import HttpMethod, ReturnType
from core.logging_config import setup_logging
from core.services.fetch_operation import FetchOperation

app = typer.Typer(no_args_is_help=True, help="Run a single configurable HTTP request.")
app.add_typer(doctor_app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr."),
) -> None:
    setup_logging(level="DEBUG" if verbose else None)


def _collect_headers(header: list[str] | None, headers_file: Path | None) -> str:
    lines: list[str] = []
    if headers_file is not None:
        lines.append(headers_file.read_text(encoding="utf-8"))
    lines.extend(header or [])
    return "\n".join(lines)


@app.command()
def fetch(
    url: str = typer.Argument(..., help="Target URL (recipe input)."),
    method: HttpMethod = typer.Option(HttpMethod.GET, "--method", "-X", case_sensitive=False),
    payload: str = typer.Option("", "--payload", "-d", help="Request body (ignored for GET/HEAD)."),
    header: list[str] | None = typer.Option(None, "--header", "-H", help="'Name: value' (repeatable)."),
    headers_file: Path | None = typer.Option(
        None,
        "--headers-file",
        exists=True,
        dir_okay=False,
        help="File with one 'Name: value' header per line.",
    ),
    return_type: ReturnType = typer.Option(ReturnType.STRING, "--return-type", "-r"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the result to this file."),
    as_json: bool = typer.Option(False, "--json", help="Emit the tagged result as JSON."),
) -> None:
    """Perform the request and print (or save) the response."""

    operation = FetchOperation(settings=AppSettings())
    args = [method.value, payload, _collect_headers(header, headers_file), return_type.value]

    try:
        result = asyncio.run(operation.execute(url, args))
    except OperationError as exc:
        _err_console.print(f"[red]{escape(str(exc))}[/red]", highlight=False)
        raise typer.Exit(code=1)

    if output is not None:
        path = export_result_json(result=result, output_path=output) if as_json else export_result(
            result=result, output_path=output
        )
        _err_console.print(f"[green]Saved result to:[/green] {path}")
        return

    if as_json:
        _console.print_json(data=result.model_dump(mode="json"))
    elif result.is_bytes:
        _console.print(build_bytes_panel(result))
    else:
        typer.echo(result.value, nl=False)


@app.command()
def describe() -> None:
    """Show the operation metadata and its argument schema."""

    print_banner(_console)
    _console.print(build_metadata_table(FetchOperation().metadata()))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
