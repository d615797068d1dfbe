"""Typer-based command line interface for unitext."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog
import click
import typer

from ..config import AppConfig, dump_default_config, load_config
from ..exceptions import UnitextError
from ..logging import configure_logging
from ..matcher import Pattern
from ..models import MatchResult
from ..options import ExpressionOption, option_names, parse_options
from ..paths import default_config_path
from ..utf16 import UTF16Text

app = typer.Typer(help="unitext command line interface")
logger = structlog.get_logger(__name__)


@app.callback()
def main(ctx: typer.Context, config: Optional[Path] = typer.Option(None, "--config", metavar="PATH")) -> None:
    ctx.obj = load_config(config)
    configure_logging(ctx.obj.logging.normalized_level(), renderer=ctx.obj.logging.renderer)


def _config() -> AppConfig:
    ctx = click.get_current_context()
    return ctx.obj


def _fail(exc: UnitextError) -> typer.Exit:
    logger.info("cli.command_failed", error=str(exc), kind=type(exc).__name__)
    typer.echo(f"error: {exc}", err=True)
    return typer.Exit(code=2)


def _compile(source: str, extra_options: List[str]) -> Pattern:
    config = _config()
    options = config.matching.resolved_options() | parse_options(ExpressionOption, extra_options)
    return Pattern(source, options, timeout=config.matching.timeout)


def _read_buffer(path: Path) -> UTF16Text:
    text_config = _config().text
    return UTF16Text.from_bytes(path.read_bytes(), text_config.encoding, text_config.lossy)


def _read(path: Path, unit: bool) -> Union[bytes, UTF16Text]:
    if unit:
        return _read_buffer(path)
    return path.read_bytes()


def _plain(value: Union[bytes, UTF16Text, None]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="surrogatepass")
    return value.text


def _result_payload(result: MatchResult) -> Dict[str, Any]:
    return {
        "span": list(result.span.as_tuple()),
        "value": _plain(result.value),
        "captures": [
            {"span": list(span.as_tuple()), "value": _plain(value)} if span is not None else None
            for span, value in zip(result.captures, result.values[1:])
        ],
    }


def _echo_json(payload: object) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


_OPTION_HELP = "Pattern option (repeatable): " + ", ".join(option_names(ExpressionOption))


@app.command()
def find(
    pattern: str = typer.Argument(..., help="Regular expression"),
    path: Path = typer.Argument(..., exists=True, readable=True),
    start: int = typer.Option(1, "--start", "-i", help="1-based starting index; negative counts from the end"),
    end: int = typer.Option(-1, "--end", "-j", help="1-based ending index; negative counts from the end"),
    unit: bool = typer.Option(False, "--unit", help="Address the text by UTF-16 unit instead of byte"),
    option: List[str] = typer.Option([], "--option", "-O", help=_OPTION_HELP),
) -> None:
    """Print the first match inside the given range."""
    try:
        result = _compile(pattern, option).first_match(_read(path, unit), start, end)
    except UnitextError as exc:
        raise _fail(exc) from exc
    _echo_json(_result_payload(result) if result is not None else None)


@app.command()
def matches(
    pattern: str = typer.Argument(..., help="Regular expression"),
    path: Path = typer.Argument(..., exists=True, readable=True),
    start: int = typer.Option(1, "--start", "-i", help="1-based index to start scanning from"),
    unit: bool = typer.Option(False, "--unit", help="Address the text by UTF-16 unit instead of byte"),
    option: List[str] = typer.Option([], "--option", "-O", help=_OPTION_HELP),
) -> None:
    """Print every non-overlapping match."""
    try:
        results = [_result_payload(result) for result in _compile(pattern, option).iter_matches(_read(path, unit), start)]
    except UnitextError as exc:
        raise _fail(exc) from exc
    _echo_json(results)


@app.command()
def gsub(
    pattern: str = typer.Argument(..., help="Regular expression"),
    template: str = typer.Argument(..., help="Replacement template; $n refers to capture n"),
    path: Path = typer.Argument(..., exists=True, readable=True),
    max_count: Optional[int] = typer.Option(None, "-n", "--max", help="Replace at most this many matches"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write the result here instead of stdout"),
    unit: bool = typer.Option(False, "--unit", help="Decode the file with the configured encoding first"),
    option: List[str] = typer.Option([], "--option", "-O", help=_OPTION_HELP),
) -> None:
    """Replace matches using a template and report the replacement count."""
    text_config = _config().text
    try:
        updated, count = _compile(pattern, option).gsub(_read(path, unit), template, max_count)
        if isinstance(updated, UTF16Text):
            data = updated.encode(text_config.encoding, text_config.lossy)
        else:
            data = updated
    except UnitextError as exc:
        raise _fail(exc) from exc
    if output is not None:
        output.write_bytes(data)
        _echo_json({"count": count, "output": str(output)})
    else:
        _echo_json({"count": count, "text": _plain(updated)})


@app.command()
def count(
    path: Path = typer.Argument(..., exists=True, readable=True),
    composed: bool = typer.Option(False, "--composed", help="Count composed character sequences once"),
    start: int = typer.Option(1, "--start", "-i"),
    end: int = typer.Option(-1, "--end", "-j"),
) -> None:
    """Count characters in a UTF-16 view of the file."""
    try:
        buffer = _read_buffer(path)
        result = buffer.character_count(composed, start, end)
    except UnitextError as exc:
        raise _fail(exc) from exc
    _echo_json({"units": len(buffer), "count": result.count, "invalid_index": result.invalid_index})


@app.command()
def codepoints(
    path: Path = typer.Argument(..., exists=True, readable=True),
    start: int = typer.Option(1, "--start", "-i"),
    end: int = typer.Option(-1, "--end", "-j"),
) -> None:
    """Print the Unicode codepoints of the file as U+XXXX values."""
    try:
        values = _read_buffer(path).codepoint(start, end)
    except UnitextError as exc:
        raise _fail(exc) from exc
    _echo_json([f"U+{value:04X}" for value in values])


@app.command("show-config")
def show_config() -> None:
    typer.echo(_config().model_dump_json(indent=2))


@app.command("init-config")
def init_config(
    destination: Optional[Path] = typer.Option(None, "--destination", help="Where to write the default configuration"),
) -> None:
    target = destination or default_config_path()
    dump_default_config(target)
    typer.echo(f"Default configuration written to {target}")


@app.command()
def version() -> None:
    from ..version import __version__

    typer.echo(__version__)


if __name__ == "__main__":  # pragma: no cover
    app()
