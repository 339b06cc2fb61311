# src/dynamodb_etl/cli.py
"""dynamodb-etl Command Line Interface.

Entry point for the dynamodb-etl CLI tool.
"""

from __future__ import annotations

import contextlib
import sys
from pathlib import Path
from typing import IO, Any

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from dynamodb_etl import __version__
from dynamodb_etl.contracts import LineError, QueryCompileError, format_error
from dynamodb_etl.core.config import RecodeSettings, load_settings

__all__ = [
    "app",
]

app = typer.Typer(
    name="dynamodb-etl",
    help="Recode DynamoDB JSON exports: decode compressed and stringified JSON fields.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dynamodb-etl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """Recode DynamoDB JSON exports: decode compressed and stringified JSON fields."""
    # Configure logging before any subcommand runs; logs go to stderr
    from dynamodb_etl.core.logging import configure_logging

    log_level = "DEBUG" if verbose else "INFO"
    configure_logging(json_output=json_logs, level=log_level)


def _format_settings_error(
    title: str,
    message: str,
    hint: str | None = None,
    details: list[str] | None = None,
) -> None:
    """Display a formatted settings error with optional hint and details."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console(stderr=True)

    content = Text()
    content.append(message, style="white")

    if details:
        content.append("\n\n")
        for detail in details:
            content.append(f"  • {detail}\n", style="dim")

    if hint:
        content.append("\n")
        content.append("Hint: ", style="yellow bold")
        content.append(hint, style="yellow")

    panel = Panel(
        content,
        title=f"[red bold]❌ {title}[/]",
        border_style="red",
        padding=(0, 1),
    )
    console.print(panel)


def _resolve_settings(
    settings_file: Path | None,
    binpath: str | None,
    textpath: str | None,
) -> RecodeSettings:
    """Load settings, turning configuration failures into a clean exit."""
    overrides: dict[str, Any] = {"binpath": binpath, "textpath": textpath}
    try:
        return load_settings(settings_file.expanduser() if settings_file else None, overrides)
    except (YamlParserError, YamlScannerError) as e:
        _format_settings_error(
            title="YAML Syntax Error",
            message=f"Failed to parse {settings_file}",
            details=[str(e.problem)] if hasattr(e, "problem") else None,
            hint="Check for unclosed brackets, incorrect indentation, or invalid characters.",
        )
        raise typer.Exit(1) from None
    except FileNotFoundError:
        _format_settings_error(
            title="File Not Found",
            message=f"Settings file does not exist: {settings_file}",
            hint="Check the path and ensure the file exists.",
        )
        raise typer.Exit(1) from None
    except ValidationError as e:
        details = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            details.append(f"{loc}: {error['msg']}")
        _format_settings_error(
            title="Configuration Validation Failed",
            message="Invalid settings",
            details=details,
            hint="Recognized settings are binpath and textpath.",
        )
        raise typer.Exit(1) from None


def _report_fatal(error: BaseException) -> None:
    typer.secho(format_error(error), fg=typer.colors.RED, err=True)


_BINPATH_OPTION = typer.Option(
    None,
    "--binpath",
    "-b",
    help="jq path of the base64+gzip encoded field [default: .projectBinaryData.B].",
)
_TEXTPATH_OPTION = typer.Option(
    None,
    "--textpath",
    "-t",
    help="jq path of the JSON-encoded string field [default: .projectData.S].",
)
_SETTINGS_OPTION = typer.Option(
    None,
    "--settings",
    "-s",
    help="Path to settings YAML file.",
)


@app.command()
def recode(
    binpath: str | None = _BINPATH_OPTION,
    textpath: str | None = _TEXTPATH_OPTION,
    settings: Path | None = _SETTINGS_OPTION,
    input_path: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        exists=True,
        dir_okay=False,
        help="Read records from this file instead of stdin.",
    ),
    output_path: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write records to this file instead of stdout.",
    ),
) -> None:
    """Recode newline-delimited JSON records.

    Each line has its binary field decoded (base64, then gzip) and its text
    field parsed as JSON. Malformed lines are reported on stderr and
    skipped. Configuration and engine failures abort the run with exit
    code 1.
    """
    from dynamodb_etl.engine.pipeline import LinePipeline

    config = _resolve_settings(settings, binpath, textpath)

    try:
        pipeline = LinePipeline(config)
    except QueryCompileError as e:
        _report_fatal(e)
        raise typer.Exit(1) from None

    with contextlib.ExitStack() as stack:
        source: IO[bytes] = stack.enter_context(open(input_path, "rb")) if input_path else sys.stdin.buffer
        output: IO[str] = (
            stack.enter_context(open(output_path, "w", encoding="utf-8")) if output_path else sys.stdout
        )
        try:
            pipeline.run(source, output, sys.stderr)
        except LineError as e:
            output.flush()
            _report_fatal(e)
            raise typer.Exit(1) from None


@app.command()
def validate(
    binpath: str | None = _BINPATH_OPTION,
    textpath: str | None = _TEXTPATH_OPTION,
    settings: Path | None = _SETTINGS_OPTION,
) -> None:
    """Compile both path expressions without reading any input."""
    from dynamodb_etl.engine.recoder import RecordRecoder

    config = _resolve_settings(settings, binpath, textpath)

    try:
        recoder = RecordRecoder(config)
    except QueryCompileError as e:
        _report_fatal(e)
        raise typer.Exit(1) from None

    typer.echo("✅ Path expressions valid!")
    typer.echo(f"  Binary path: {recoder.binary.path}")
    typer.echo(f"  Text path: {recoder.text.path}")


@app.command()
def encode(
    input_path: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        exists=True,
        dir_okay=False,
        help="Read text from this file instead of stdin.",
    ),
    output_path: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the encoded value to this file instead of stdout.",
    ),
) -> None:
    """Gzip and base64-encode text, producing a binary field value."""
    from dynamodb_etl.core.codec import encode_binary_data

    data = input_path.read_bytes() if input_path else sys.stdin.buffer.read()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        typer.secho("Error: input is not valid utf-8", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None

    encoded = encode_binary_data(text)
    if output_path is None:
        typer.echo(encoded)
        return
    with open(output_path, "w", encoding="utf-8") as output:
        typer.echo(encoded, file=output)


if __name__ == "__main__":
    app()
