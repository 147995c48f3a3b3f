"""spotprice CLI.

Commands:
- prices: Fetch and price one day of hourly spot prices
- config: Show the effective configuration
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from spotprice.config import get_config
from spotprice.core.logging import configure_logging
from spotprice.errors import ConfigError, FetchError
from spotprice.pricing.money import round_to_ore
from spotprice.service import get_prices

app = typer.Typer(
    name="spotprice",
    help="spotprice - Nord Pool day-ahead prices with consumer tariffs",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def _load_config():
    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[bold red]✗ Configuration error:[/bold red] {e}")
        raise typer.Exit(1)
    configure_logging(config.log_level, config.log_format)
    return config


@app.command()
def prices(
    area: Optional[str] = typer.Argument(None, help="Bidding area (default: DEFAULT_AREA)"),
    day: Optional[datetime] = typer.Option(
        None,
        "--date",
        "-d",
        formats=["%Y-%m-%d"],
        help="Delivery day, YYYY-MM-DD (default: today in the market time zone)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON lines instead of a table"),
):
    """Fetch and price hourly spot prices for one day."""
    config = _load_config()
    area = area or config.market.default_area
    end_date = day.date() if day else datetime.now(config.market.tz).date()

    try:
        hours = asyncio.run(get_prices(area, end_date, config=config))
    except FetchError as e:
        err_console.print(f"[bold red]✗ Fetch failed:[/bold red] {e}")
        raise typer.Exit(1)

    if as_json:
        for hour in hours:
            typer.echo(json.dumps(hour.as_dict()))
        return

    table = Table(title=f"{area} {end_date.isoformat()} ({config.market.currency}/kWh)")
    table.add_column("Hour", style="cyan", no_wrap=True)
    for name in ("Energy", "VAT", "Fee", "Tax", "Total"):
        table.add_column(name, justify="right")

    for hour in hours:
        table.add_row(
            hour.start_time.isoformat(sep=" "),
            *(
                str(round_to_ore(amount))
                for amount in (hour.energy, hour.vat, hour.fee, hour.tax, hour.sum())
            ),
        )

    console.print(table)
    if not hours:
        console.print("[yellow]No prices available for this day[/yellow]")


@app.command(name="config")
def show_config():
    """Show the effective configuration."""
    config = _load_config()

    table = Table(title="spotprice configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Endpoint", config.market.base_url)
    table.add_row("Currency", config.market.currency)
    table.add_row("Time zone", config.market.timezone)
    table.add_row("Default area", config.market.default_area)
    table.add_row("VAT rate", str(config.tariff.vat_rate))
    table.add_row("VAT rounding", f"{config.tariff.vat_quantum} (half up)")
    table.add_row(
        "Grid fee (peak)",
        f"{config.tariff.fee_peak} Mon-Fri "
        f"{config.tariff.peak_start_hour:02d}-{config.tariff.peak_end_hour:02d}",
    )
    table.add_row("Grid fee (off-peak)", str(config.tariff.fee_offpeak))
    table.add_row("Energy tax", str(config.tariff.energy_tax))

    console.print(table)


if __name__ == "__main__":
    app()
