"""
Command line interface for spendlog.

    spendlog add --name Coffee --category Food --amount 3.50
    spendlog add -- -name=Coffee -category=Food -amount=3.50
    spendlog summary --category Food --interval 30d

Any failure prints two lines and exits with status 1:

    InvalidFilterError: Interval must look like <number><d|m|n> ...
    summary terminating prematurely
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from spendlog.audit import configure_logging
from spendlog.config import get_settings
from spendlog.errors import LedgerError
from spendlog.orchestrator import create_app_components, describe_error
from spendlog.validation import InvalidInputError, parse_cli_assignments


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Record transactions in a JSON ledger and summarize spending by category.",
)


def _fail(error: Exception, command: str) -> None:
    for line in describe_error(error, command):
        typer.echo(line)
    raise typer.Exit(1)


@app.callback()
def _root(
    ctx: typer.Context,
    ledger: Optional[Path] = typer.Option(
        None,
        "--ledger",
        help="Ledger file to use (defaults to SPENDLOG_LEDGER_PATH or GeneralLedger.json).",
        dir_okay=False,
    ),
) -> None:
    """Load settings and configure logging before any subcommand runs."""
    try:
        settings = get_settings()
    except ValidationError as e:
        typer.echo(f"ConfigurationError: {e.error_count()} invalid setting(s): {e}")
        typer.echo("spendlog terminating prematurely")
        raise typer.Exit(1)

    configure_logging(settings.log_level, settings.log_format)
    ctx.obj = {"ledger_path": ledger, "settings": settings}


@app.command(
    "add",
    context_settings={"ignore_unknown_options": True},
)
def add_cmd(
    ctx: typer.Context,
    assignments: Optional[List[str]] = typer.Argument(
        None,
        help="Legacy form: -name=<name> -category=<category> -amount=<amount>.",
        show_default=False,
    ),
    name: Optional[str] = typer.Option(None, "--name", help="Transaction label."),
    category: Optional[str] = typer.Option(None, "--category", help="Category to file it under."),
    amount: Optional[str] = typer.Option(None, "--amount", help="Non-negative amount, e.g. 3.50."),
) -> None:
    """Append a transaction to the ledger, creating the ledger if needed."""
    append_flow, _, _ = create_app_components(
        ledger_path=ctx.obj["ledger_path"],
        settings=ctx.obj["settings"],
    )

    try:
        if assignments:
            if name is not None or category is not None or amount is not None:
                raise InvalidInputError(
                    "Use either --name/--category/--amount or -key=value assignments, not both"
                )
            raw = parse_cli_assignments(assignments)
        else:
            raw = {"name": name, "category": category, "amount": amount}
        record, record_count = append_flow.append(raw)
    except LedgerError as e:
        _fail(e, "add")

    typer.echo(json.dumps(record.to_ledger_dict(), indent=2, ensure_ascii=False))
    typer.echo(f"Ledger now holds {record_count} transaction(s).")


@app.command("summary")
def summary_cmd(
    ctx: typer.Context,
    category: Optional[str] = typer.Option(
        None, "--category", help="Only include this category (exact match)."
    ),
    interval: Optional[str] = typer.Option(
        None,
        "--interval",
        help="Only include recent records: <n>d days, <n>m months, <n>n years.",
    ),
) -> None:
    """Print spending per category."""
    _, summary_flow, _ = create_app_components(
        ledger_path=ctx.obj["ledger_path"],
        settings=ctx.obj["settings"],
    )

    try:
        report = summary_flow.report(category=category, interval=interval)
    except LedgerError as e:
        _fail(e, "summary")

    typer.echo(report)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
