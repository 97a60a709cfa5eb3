from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from cinema_dashboard.domain.models import DailyRevenue, Movie, TitleRevenue, Transaction


def _console(console: Optional[Console]) -> Console:
    return console or Console()


def print_movies(
    movies: Sequence[Movie], at: Optional[datetime] = None, console: Optional[Console] = None
) -> None:
    """
    Render the catalog as a rich table, most relevant movie first.
    """
    console = _console(console)
    if not movies:
        console.print("[yellow]No movies in catalog.[/yellow]")
        return

    instant = at or datetime.now()
    table = Table(
        title="Movies in Theaters",
        box=box.ROUNDED,
        caption=f"Sorted by relevance at {instant:%Y-%m-%d %H:%M}",
    )
    table.add_column("Title", style="cyan")
    table.add_column("Released", justify="right", style="magenta")
    table.add_column("Duration (min)", justify="right", style="green")
    table.add_column("Critics", justify="right", style="yellow")
    table.add_column("Relevance", justify="right", style="bold green")

    for movie in movies:
        released = f"{movie.release_date:%Y-%m-%d}" if movie.release_date else "N/A"
        table.add_row(
            movie.title,
            released,
            str(movie.duration),
            str(movie.score),
            f"{movie.score_at(instant):.3f}",
        )

    console.print(table)


def print_revenue_by_title(
    rows: List[TitleRevenue], total: float, console: Optional[Console] = None
) -> None:
    console = _console(console)
    if not rows:
        console.print("[yellow]No revenue to display.[/yellow]")
        return

    table = Table(
        title=f"Revenue by Title\n[dim]Total revenue: ${total:,.2f}[/dim]",
        box=box.ROUNDED,
        caption=f"Top {len(rows)} titles",
    )
    table.add_column("#", justify="right", style="blue")
    table.add_column("Title", style="cyan")
    table.add_column("Revenue (USD)", justify="right", style="bold green")

    for rank, row in enumerate(rows, start=1):
        table.add_row(str(rank), row.title, f"{row.revenue:,.2f}")

    console.print(table)


def print_daily_revenue(
    title: str, rows: List[DailyRevenue], console: Optional[Console] = None
) -> None:
    console = _console(console)
    if not rows:
        console.print(f"[yellow]No sales recorded for '{title}'.[/yellow]")
        return

    table = Table(title=f"Daily Revenue: {title}", box=box.ROUNDED)
    table.add_column("Date", style="magenta")
    table.add_column("Revenue (USD)", justify="right", style="bold green")

    for row in rows:
        table.add_row(row.label, f"{row.revenue:,.2f}")

    console.print(table)


def print_transactions(
    transactions: Sequence[Transaction], console: Optional[Console] = None
) -> None:
    console = _console(console)
    if not transactions:
        console.print("[yellow]No transactions to display.[/yellow]")
        return

    table = Table(title="Transactions", box=box.ROUNDED)
    table.add_column("Time", style="magenta", no_wrap=True)
    table.add_column("Country", style="cyan")
    table.add_column("City", style="cyan")
    table.add_column("Theater")
    table.add_column("Room")
    table.add_column("Title", style="bold")
    table.add_column("Seats", justify="right", style="yellow")
    table.add_column("Price", justify="right", style="green")

    for t in transactions:
        table.add_row(
            f"{t.timestamp:%m/%d/%Y %H:%M:%S}",
            t.country,
            t.city,
            t.theater,
            t.room,
            t.title,
            str(t.seats),
            f"{t.price:.2f}",
        )

    console.print(table)
