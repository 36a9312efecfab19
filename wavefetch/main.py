"""Wavefetch CLI — paged Solscan queries from the terminal.

Commands:
    wavefetch transfers     — account transfers, fetched in concurrent page waves
    wavefetch holders       — token holders (with grand total)
    wavefetch transactions  — account transactions (cursor paging)
    wavefetch usage         — API compute-unit usage
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from wavefetch.config import settings
from wavefetch.utils import setup_logging

# Initialize logging on import
setup_logging()

app = typer.Typer(
    name="wavefetch",
    help="Wavefetch — bounded-concurrency pager for the Solscan API",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

_TIER_HELP = "API tier whose rate budget to use: v2 | v3"


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="debug | info | warning | error"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON log lines on stderr"),
):
    """Paged Solscan queries, fetched in rate-limited concurrent waves."""
    if log_level or json_logs:
        setup_logging(log_level=log_level, log_format="json" if json_logs else None)


def _run(coro) -> None:
    """Run a command coroutine; engine errors become a red message and exit 1."""
    from wavefetch.errors import FetchError

    try:
        asyncio.run(coro)
    except FetchError as e:
        console.print(f"[red]✗ {e}[/]")
        raise typer.Exit(code=1)


def _client(token: str | None, tier: str):
    from wavefetch.client import RateBudgets, SolscanClient

    budgets = RateBudgets.from_settings()
    return SolscanClient(auth_token=token, rate_gate=budgets.for_tier(tier))


# ── wavefetch transfers ───────────────────────────────────────


@app.command()
def transfers(
    address: str = typer.Argument(..., help="Account address"),
    total: int = typer.Option(100, "--total", "-n", help="Maximum transfers to return"),
    start_page: int = typer.Option(1, "--start-page", help="First page to request"),
    concurrency: int = typer.Option(settings.default_max_concurrency, "--concurrency", "-c", help="Pages per wave"),
    tier: str = typer.Option("v2", "--tier", help=_TIER_HELP),
    token: str = typer.Option(None, "--token", envvar="SOLSCAN_AUTH_TOKEN", help="API token"),
):
    """Account transfers, newest first."""
    _run(_transfers(address, total, start_page, concurrency, tier, token))


async def _transfers(address, total, start_page, concurrency, tier, token):
    async with _client(token, tier) as client:
        with console.status(f"[dim]Fetching up to {total} transfers...[/]", spinner="dots"):
            rows = await client.account_transfers_paged(
                address,
                total_size=total,
                start_page=start_page,
                max_concurrency=concurrency,
            )

    tbl = Table(title=f"Transfers · {address}", header_style="bold cyan")
    tbl.add_column("Block time", style="dim")
    tbl.add_column("Activity")
    tbl.add_column("From")
    tbl.add_column("To")
    tbl.add_column("Amount", justify="right")
    for t in rows:
        tbl.add_row(str(t.block_time), t.activity_type, t.from_address, t.to_address, str(t.amount))
    console.print(tbl)
    console.print(f"[dim]{len(rows)} transfers[/]")


# ── wavefetch holders ─────────────────────────────────────────


@app.command()
def holders(
    address: str = typer.Argument(..., help="Token mint address"),
    total: int = typer.Option(40, "--total", "-n", help="Maximum holders to return"),
    concurrency: int = typer.Option(settings.default_max_concurrency, "--concurrency", "-c", help="Pages per wave"),
    tier: str = typer.Option("v2", "--tier", help=_TIER_HELP),
    token: str = typer.Option(None, "--token", envvar="SOLSCAN_AUTH_TOKEN", help="API token"),
):
    """Top token holders by amount."""
    _run(_holders(address, total, concurrency, tier, token))


async def _holders(address, total, concurrency, tier, token):
    async with _client(token, tier) as client:
        result = await client.token_holders_paged(address, total_size=total, max_concurrency=concurrency)

    tbl = Table(title=f"Holders · {address}", header_style="bold magenta")
    tbl.add_column("Rank", justify="right")
    tbl.add_column("Owner")
    tbl.add_column("Amount", justify="right")
    for h in result.items:
        tbl.add_row(str(h.rank), h.owner, str(h.amount))
    console.print(tbl)
    console.print(f"[dim]{len(result.items)} of {result.total} holders[/]")


# ── wavefetch transactions ────────────────────────────────────


@app.command()
def transactions(
    address: str = typer.Argument(..., help="Account address"),
    total: int = typer.Option(40, "--total", "-n", help="Maximum transactions to return"),
    tier: str = typer.Option("v2", "--tier", help=_TIER_HELP),
    token: str = typer.Option(None, "--token", envvar="SOLSCAN_AUTH_TOKEN", help="API token"),
):
    """Account transactions, walked page by page with the `before` cursor."""
    _run(_transactions(address, total, tier, token))


async def _transactions(address, total, tier, token):
    async with _client(token, tier) as client:
        rows = await client.account_transactions_paged(address, total_size=total)

    tbl = Table(title=f"Transactions · {address}", header_style="bold yellow")
    tbl.add_column("Slot", justify="right")
    tbl.add_column("Status")
    tbl.add_column("Fee", justify="right")
    tbl.add_column("Hash", style="dim")
    for tx in rows:
        tbl.add_row(str(tx.slot), tx.status, str(tx.fee), tx.tx_hash)
    console.print(tbl)


# ── wavefetch usage ───────────────────────────────────────────


@app.command()
def usage(
    tier: str = typer.Option("v2", "--tier", help=_TIER_HELP),
    token: str = typer.Option(None, "--token", envvar="SOLSCAN_AUTH_TOKEN", help="API token"),
):
    """Remaining and consumed compute units."""
    _run(_usage(tier, token))


async def _usage(tier, token):
    async with _client(token, tier) as client:
        u = await client.api_usage()

    tbl = Table(show_header=False, box=None, padding=(0, 2))
    tbl.add_column("Metric", style="cyan")
    tbl.add_column("Value", style="white")
    tbl.add_row("Remaining CUs", f"{u.remaining_cus:,}")
    tbl.add_row("Used CUs", f"{u.usage_cus:,}")
    tbl.add_row("Requests (24h)", f"{u.total_requests_24h:,}")
    tbl.add_row("Success rate (24h)", str(u.success_rate_24h))
    console.print(tbl)


if __name__ == "__main__":
    app()
