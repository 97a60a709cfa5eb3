from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from cinema_dashboard.config import get_settings
from cinema_dashboard.context import DashboardContext
from cinema_dashboard.export import write_snapshot, write_transactions_csv
from cinema_dashboard.reporter import (
    print_daily_revenue,
    print_movies,
    print_revenue_by_title,
    print_transactions,
)
from cinema_dashboard.store import SortField
from cinema_dashboard.utils.logging import configure_logging

app = typer.Typer(help="Synthetic movie ticket sales for the cinema dashboard.")


def _build_context() -> DashboardContext:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    ctx = DashboardContext(settings)
    ctx.reload()
    return ctx


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"source={settings.movies_url} | cache={settings.cache_path} "
        f"(ttl={settings.cache_ttl_hours}h) | transactions={settings.transaction_count} "
        f"seed={settings.random_seed} policy={settings.failure_policy}"
    )


@app.command()
def movies() -> None:
    """
    List the movies in the catalog, most relevant first.
    """
    ctx = _build_context()
    print_movies(ctx.catalog.ranked())


@app.command()
def revenue(
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-t",
        help="Number of titles to show (default from settings).",
    ),
) -> None:
    """
    Show total revenue and the best-selling titles.
    """
    ctx = _build_context()
    print_revenue_by_title(ctx.revenue_by_title(top), ctx.total_revenue())


@app.command()
def daily(title: str = typer.Argument(..., help="Exact movie title.")) -> None:
    """
    Show revenue per day for one title.
    """
    ctx = _build_context()
    if ctx.movie_for_title(title) is None:
        typer.echo(f"Unknown title '{title}'.", err=True)
        raise typer.Exit(code=1)
    print_daily_revenue(title, ctx.revenue_for_title(title))


@app.command()
def transactions(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of rows to show."),
    sort: SortField = typer.Option(
        SortField.TIMESTAMP,
        "--sort",
        "-s",
        case_sensitive=False,
        help="Field to sort by.",
    ),
    ascending: bool = typer.Option(False, "--ascending", "-a", help="Sort ascending."),
) -> None:
    """
    Show generated transactions.
    """
    ctx = _build_context()
    ctx.transactions.sort(sort, ascending)
    print_transactions(ctx.transactions[:limit])


@app.command()
def export(
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (default: results dir from settings).",
    ),
) -> None:
    """
    Write transactions as CSV and the aggregates as a JSON snapshot.
    """
    ctx = _build_context()
    out_dir = output or ctx.settings.results_dir
    rows = write_transactions_csv(out_dir / "transactions.csv", ctx.transactions)
    archive = write_snapshot(ctx.snapshot(), out_dir)
    typer.echo(f"Wrote {rows:,} transactions and snapshot {archive}")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
