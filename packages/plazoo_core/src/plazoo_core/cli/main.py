"""
Plazoo CLI

Command-line tools for store operators and support.

Commands:
- theme: Show the theme variables derived from brand colors
- combinations: Enumerate variant combinations for a product
- quote: Price a cart (add-ons, line and order discounts)
- stores: Resolve the active store for a user against the database
- init-db: Create tables (local development)
"""

import asyncio
from typing import List, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from plazoo_base.logging import setup_logging
from plazoo_core.branding.colors import contrast_color, hex_to_hsl, normalize_hex
from plazoo_core.branding.theme import StyleBag, ThemeScope
from plazoo_core.catalog.variants import generate_combinations
from plazoo_core.errors import PlazooError
from plazoo_core.pricing.engine import AddOn, Discount, LineItem, price_order
from plazoo_core.pricing.money import format_brl

app = typer.Typer(
    name="plazoo",
    help="Plazoo storefront tools",
)

console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Log level (defaults to LOG_LEVEL)"),
):
    setup_logging(level=log_level)


@app.command()
def theme(
    primary: str = typer.Argument(..., help="Primary color, e.g. #1A73E8"),
    secondary: Optional[str] = typer.Argument(None, help="Secondary color"),
):
    """
    Show the CSS variables a store's brand colors produce.
    """
    colors = {"primary_color": primary, "secondary_color": secondary}
    for label, value in colors.items():
        if value and normalize_hex(value) is None:
            rprint(f"[yellow]Ignoring invalid {label}: {value}[/yellow]")

    table = Table(title="Brand colors")
    table.add_column("Color")
    table.add_column("HSL")
    table.add_column("Text")
    for value in (primary, secondary):
        hsl = hex_to_hsl(value) if value else None
        if hsl is None:
            continue
        table.add_row(normalize_hex(value), f"{hsl[0]} {hsl[1]}% {hsl[2]}%", contrast_color(value))
    console.print(table)

    sink = StyleBag()
    with ThemeScope(sink, colors):
        console.print(sink.to_css(), markup=False)


def _parse_axis(raw: str) -> tuple[str, list[str]]:
    if "=" not in raw:
        raise typer.BadParameter(f"Expected name=value1,value2 but got: {raw}")
    name, values = raw.split("=", 1)
    return name.strip(), [v.strip() for v in values.split(",") if v.strip()]


@app.command()
def combinations(
    axis: List[str] = typer.Option([], "--axis", "-a", help="Axis as name=v1,v2 (repeatable)"),
):
    """
    Enumerate the variant combinations of a product.
    """
    axes = dict(_parse_axis(raw) for raw in axis)
    combos = generate_combinations(axes)

    if not combos:
        rprint("[yellow]No variants: simple product, the base price applies[/yellow]")
        return

    table = Table(title=f"{len(combos)} combinations")
    table.add_column("#", justify="right")
    for name in combos[0].options:
        table.add_column(name)
    for index, combo in enumerate(combos, start=1):
        table.add_row(str(index), *combo.key)
    console.print(table)


def _parse_item(raw: str) -> LineItem:
    """price[:quantity][+addon_price*addon_qty...]"""
    head, *extras = raw.split("+")
    price, _, quantity = head.partition(":")
    add_ons = []
    for extra in extras:
        extra_price, _, extra_qty = extra.partition("*")
        add_ons.append(AddOn(price=extra_price, quantity=int(extra_qty or 1)))
    return LineItem(base_price=price, quantity=int(quantity or 1), add_ons=add_ons)


@app.command()
def quote(
    item: List[str] = typer.Option(
        [], "--item", "-i", help="Line as price[:qty][+addon_price*addon_qty] (repeatable)"
    ),
    discount: float = typer.Option(0, help="Order discount"),
    discount_type: str = typer.Option("percent", help="percent or fixed"),
):
    """
    Price a cart the way checkout does.
    """
    try:
        lines = [_parse_item(raw) for raw in item]
        order_discount = Discount(value=str(discount), type=discount_type) if discount else None
        breakdown = price_order(lines, order_discount)
    except (PlazooError, ValueError) as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Quote")
    table.add_column("#", justify="right")
    table.add_column("Qty", justify="right")
    table.add_column("Unit", justify="right")
    table.add_column("Add-ons", justify="right")
    table.add_column("Total", justify="right")
    for index, priced in enumerate(breakdown.lines, start=1):
        line = priced.line
        table.add_row(
            str(index),
            str(line.quantity),
            format_brl(line.unit_price),
            format_brl(line.extras_total),
            format_brl(priced.total),
        )
    console.print(table)

    rprint(f"Subtotal: {format_brl(breakdown.subtotal)}")
    if breakdown.discount_amount:
        rprint(f"Desconto: -{format_brl(breakdown.discount_amount)}")
    rprint(f"[bold]Total: {format_brl(breakdown.total)}[/bold]")


@app.command()
def stores(
    user_id: str = typer.Argument(..., help="Viewer user id"),
    select: Optional[str] = typer.Option(None, help="Store id to select and remember"),
):
    """
    Resolve the active store for a user (reads the database, remembers the
    selection in Redis).
    """
    from plazoo_core.tenancy.resolver import StoreContextResolver
    from plazoo_core.tenancy.sql import SqlStoreDirectory
    from plazoo_core.tenancy.storage import RedisSelectionStorage

    async def run():
        resolver = StoreContextResolver(
            user_id=user_id,
            directory=SqlStoreDirectory(),
            storage=RedisSelectionStorage(session_id=f"cli:{user_id}"),
        )
        async with resolver:
            if select:
                resolver.select(select)
            return resolver.context()

    try:
        context = asyncio.run(run())
    except PlazooError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not context.stores:
        rprint("[yellow]No stores visible to this user[/yellow]")
        return

    table = Table(title=f"Stores ({context.role.value})")
    table.add_column("")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Slug")
    table.add_column("Mode")
    for store in context.stores:
        marker = "*" if context.selected_store and store.id == context.selected_store.id else ""
        table.add_row(marker, store.id, store.name, store.slug, store.mode.value)
    console.print(table)

    for name, value in context.theme.items():
        rprint(f"  {name}: {value}")


@app.command("init-db")
def init_db():
    """
    Create the Plazoo tables in DATABASE_URL.
    """
    from plazoo_base.db import get_engine
    from plazoo_core.persistence.models import create_tables

    create_tables(get_engine())
    rprint("[green]Tables created[/green]")


if __name__ == "__main__":
    app()
