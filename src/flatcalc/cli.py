"""
flatcalc command line.

Usage:
    flatcalc eval "2 + 3 * 4"                      # 20
    flatcalc eval "3ae4c66fb32" --notation letters  # 235
    flatcalc eval "7 / 2" --division truncate      # 3
    flatcalc tokens "2 + (3 * 4)"                  # Token table
    flatcalc repl                                  # Interactive prompt
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from flatcalc._version import get_version
from flatcalc.core.errors import ConfigError, EvaluationError
from flatcalc.core.evaluator import Strategy, evaluate
from flatcalc.core.manifest import CalcConfig, load_config
from flatcalc.core.notation import Notation, get_notation
from flatcalc.core.operators import DivisionMode
from flatcalc.core.result import try_evaluate
from flatcalc.core.tokenizer import tokenize

app = typer.Typer(
    name="flatcalc",
    help="Left-to-right calculator: no operator precedence, only brackets",
    no_args_is_help=True,
)
console = Console(stderr=True)

REPL_PROMPT = "calc> "
_REPL_EXIT = {"quit", "exit"}


def version_callback(value: bool) -> None:
    """Print the version and exit."""
    if value:
        typer.echo(f"flatcalc {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
) -> None:
    """flatcalc - evaluate expressions strictly left to right."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression, e.g. '2 + 3 * 4'"),
    notation: str | None = typer.Option(None, "--notation", "-n", help="standard or letters"),
    division: DivisionMode | None = typer.Option(
        None, "--division", "-d", help="Division semantics"
    ),
    strategy: Strategy | None = typer.Option(
        None, "--strategy", "-s", help="Group resolution strategy"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to flatcalc.toml"),
) -> None:
    """Evaluate one expression."""
    settings = _resolve_settings(config, notation, division, strategy)
    if as_json:
        result = try_evaluate(
            expression,
            notation=settings.notation,
            division=settings.evaluation.division,
            strategy=settings.evaluation.strategy,
        )
        typer.echo(result.model_dump_json(indent=2))
        if not result.ok:
            raise typer.Exit(code=1)
        return

    try:
        value = evaluate(
            expression,
            notation=settings.notation,
            division=settings.evaluation.division,
            strategy=settings.evaluation.strategy,
        )
    except EvaluationError as e:
        _print_error(e)
        raise typer.Exit(code=1)
    typer.echo(str(value))


@app.command("tokens")
def cmd_tokens(
    expression: str = typer.Argument(help="Expression to tokenize"),
    notation: str | None = typer.Option(None, "--notation", "-n", help="standard or letters"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to flatcalc.toml"),
) -> None:
    """Show the tokens of an expression."""
    settings = _resolve_settings(config, notation, None, None)
    try:
        tokens = tokenize(expression, settings.notation)
    except EvaluationError as e:
        _print_error(e)
        raise typer.Exit(code=1)

    title = escape(f"Tokens ({settings.notation})")
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Pos", justify="right")
    table.add_column("Kind", style="green")
    table.add_column("Text")
    table.add_column("Value")
    for tok in tokens:
        value = "" if tok.value is None else str(tok.value)
        table.add_row(str(tok.pos), str(tok.kind), escape(tok.text), escape(value))

    Console().print(table)


@app.command("repl")
def cmd_repl(
    notation: str | None = typer.Option(None, "--notation", "-n", help="standard or letters"),
    division: DivisionMode | None = typer.Option(
        None, "--division", "-d", help="Division semantics"
    ),
    strategy: Strategy | None = typer.Option(
        None, "--strategy", "-s", help="Group resolution strategy"
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to flatcalc.toml"),
) -> None:
    """Read expressions from a prompt until EOF, 'quit' or 'exit'."""
    settings = _resolve_settings(config, notation, division, strategy)
    while True:
        try:
            text = input(REPL_PROMPT)
        except (EOFError, KeyboardInterrupt):
            break
        text = text.strip()
        if not text:
            continue
        if text.lower() in _REPL_EXIT:
            break
        try:
            value = evaluate(
                text,
                notation=settings.notation,
                division=settings.evaluation.division,
                strategy=settings.evaluation.strategy,
            )
        except EvaluationError as e:
            _print_error(e)
            continue
        typer.echo(str(value))


def _resolve_settings(
    config: Path | None,
    notation: str | None,
    division: DivisionMode | None,
    strategy: Strategy | None,
) -> CalcConfig:
    """Load flatcalc.toml and apply command line overrides."""
    try:
        settings = load_config(config)
        chosen: Notation = get_notation(notation) if notation else settings.notation
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {escape(e.message)}")
        raise typer.Exit(code=2)

    settings.notation = chosen
    if division is not None:
        settings.evaluation.division = division
    if strategy is not None:
        settings.evaluation.strategy = strategy
    return settings


def _print_error(error: EvaluationError) -> None:
    console.print(f"[red]{error.kind}:[/red] {escape(error.message)}")
    if error.context is not None:
        console.print(escape(error.context.format()), highlight=False)


def main() -> None:
    app()
