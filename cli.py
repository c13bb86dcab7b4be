# cli.py
import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.client import StoreClient
from storefront.config import get_settings
from storefront.models import Category, SortKey
from storefront.money import format_vnd

console = Console()

CATEGORIES = [c.value for c in Category]
SORTS = [s.value for s in SortKey]

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=14)
    table.add_column("Name", style="bold", width=26)
    table.add_column("Category", width=10)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Rating", justify="right", width=6)
    table.add_column("Badge", width=12)

    for p in products:
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("category", "N/A"),
            p.get("price_display") or format_vnd(p.get("price", 0)),
            f"{p.get('rating', 0):.1f}",
            p.get("badge", "")
        )
    console.print(table)


def show_cart(cart: Dict[str, Any]):
    if not cart:
        console.print("[italic yellow]No cart data[/italic yellow]")
        return

    title = Text()
    title.append("🛒 Cart", style="bold")
    title.append(f" - {cart.get('item_count', 0)} item(s)", style="bold cyan")
    title.append(f" - Total: {cart.get('total_display', format_vnd(cart.get('total', 0)))}", style="bold green")

    items = cart.get("items", [])
    if not items:
        console.print(Panel("Your cart is empty 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Qty", justify="right", width=6)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Subtotal", justify="right", width=12)

    for it in items:
        if it.get("available") and it.get("product"):
            prod = it["product"]
            table.add_row(
                prod.get("name", "Unknown"),
                str(it.get("qty", 0)),
                prod.get("price_display", format_vnd(prod.get("price", 0))),
                format_vnd(it.get("line_total", 0))
            )
        else:
            table.add_row(
                f"[red]Missing product: {it.get('product_id', 'Unknown')}[/red]",
                str(it.get("qty", "-")),
                "-",
                format_vnd(0)
            )

    console.print(Panel(table, title=title, border_style="blue"))


def show_brand(brand: Dict[str, Any]):
    console.print(
        Panel.fit(
            f"[bold]Logo:[/bold] {brand.get('logoUrl') or '[dim]none[/dim]'}\n"
            f"[bold]Banner:[/bold] {brand.get('heroUrl') or '[dim]none[/dim]'}",
            title=f"🏷️ {brand.get('siteName', '')}",
            border_style="magenta"
        )
    )


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Errors are printed and turned into None so the menu keeps running.
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except Exception as e:
        console.print(show_status(f"Error: {e}", False))
        return None

    if success_msg:
        console.print(show_status(success_msg, True))
    return result


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def product_completer(c: StoreClient):
    products = try_api(c.view_catalog) or []
    words = [p.get("id", "") for p in products] + [p.get("name", "") for p in products]
    return WordCompleter([w for w in words if w], ignore_case=True)


def resolve_product_id(c: StoreClient, entry: str) -> str:
    # accept a product name from the completer as well as an id
    for p in try_api(c.view_catalog) or []:
        if entry in (p.get("id"), p.get("name")):
            return p["id"]
    return entry


# ---------------------------
# Interactive menu
# ---------------------------
def menu(c: StoreClient):
    console.clear()
    console.print(Panel("[bold blue]🛍️ Storefront[/bold blue]", style="bold blue"))

    options = [
        ("1", "📦 Browse catalog", "7", "📝 Edit product"),
        ("2", "🛒 Add to cart", "8", "🗑️ Delete product"),
        ("3", "➕ Increase quantity", "9", "📤 Export inventory"),
        ("4", "➖ Decrease quantity", "10", "📥 Import inventory"),
        ("5", "❌ Remove from cart", "11", "🏷️ Brand settings"),
        ("6", "🆕 Create product", "12", "🔄 Reset store"),
        ("0", "🧾 View cart", "q", "👋 Quit"),
    ]

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=26)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=26)
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(0, 13)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            query = prompt_with_autocomplete("Search (blank for all)", completer=product_completer(c))
            category = prompt_with_autocomplete("Category", completer=WordCompleter(CATEGORIES), default="All")
            sort = prompt_with_autocomplete("Sort", completer=WordCompleter(SORTS), default="relevance")
            products = try_api(c.view_catalog, query, category, sort)
            if products is not None:
                show_products(products)

        elif choice in ("2", "3", "4", "5"):
            entry = prompt_with_autocomplete("Product", completer=product_completer(c))
            pid = resolve_product_id(c, entry)
            action = {"2": c.add_to_cart, "3": c.increment, "4": c.decrement, "5": c.remove_from_cart}[choice]
            cart = try_api(action, pid)
            if cart is not None:
                show_cart(cart)

        elif choice == "0":
            cart = try_api(c.view_cart)
            if cart is not None:
                show_cart(cart)

        elif choice == "6":
            name = Prompt.ask("Product name")
            category = prompt_with_autocomplete("Category", completer=WordCompleter(CATEGORIES[1:]), default="Top Up")
            price = IntPrompt.ask("💰 Price (VND)", default=49000)
            rating = float(Prompt.ask("⭐ Rating", default="4.8"))
            badge = Prompt.ask("Badge (optional)", default="")
            image = Prompt.ask("Image URL", default="")
            resp = try_api(c.create_product, name, price, category, rating, image, badge or None,
                           success_msg=f"Product '{name}' created")
            if resp:
                show_products([resp["product"]], title="Created")

        elif choice == "7":
            pid = resolve_product_id(c, prompt_with_autocomplete("Product", completer=product_completer(c)))
            current = try_api(c.get_product, pid)
            if current:
                changes = {
                    "name": Prompt.ask("Name", default=current["name"]),
                    "price": IntPrompt.ask("Price (VND)", default=current["price"]),
                    "rating": float(Prompt.ask("Rating", default=str(current["rating"]))),
                    "badge": Prompt.ask("Badge", default=current.get("badge", "")),
                }
                resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **changes)
                if resp:
                    show_products([resp], title="Updated")

        elif choice == "8":
            pid = resolve_product_id(c, prompt_with_autocomplete("Product", completer=product_completer(c)))
            if Confirm.ask(f"[red]Delete {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")

        elif choice == "9":
            path = Prompt.ask("Export to", default="products.json")
            data = try_api(c.export_products)
            if data is not None:
                with open(path, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False, indent=2)
                console.print(show_status(f"{len(data)} products written to {path}"))

        elif choice == "10":
            path = Prompt.ask("Import from", default="products.json")
            try:
                with open(path, encoding="utf-8") as fh:
                    payload = json.load(fh)
            except (OSError, ValueError) as e:
                console.print(show_status(f"Invalid JSON file: {e}", False))
                continue
            resp = try_api(c.import_products, payload)
            if resp is not None:
                ok = "imported" in resp
                console.print(show_status(
                    f"{resp['imported']} products imported" if ok else resp.get("detail", "import failed"), ok))

        elif choice == "11":
            brand = try_api(c.get_brand)
            if brand:
                show_brand(brand)
                if Confirm.ask("Edit brand settings?"):
                    resp = try_api(
                        c.save_brand,
                        Prompt.ask("Site name", default=brand["siteName"]),
                        Prompt.ask("Logo URL", default=brand["logoUrl"]),
                        Prompt.ask("Banner URL", default=brand["heroUrl"]),
                        success_msg="Brand settings saved",
                    )
                    if resp:
                        show_brand(resp)

        elif choice == "12":
            if Confirm.ask("[red]This restores the default inventory and brand. Continue?[/red]"):
                try_api(c.reset, success_msg="Store reset successfully")

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
            return

        console.print()
        console.rule(style="dim")


# ---------------------------
# One-shot commands
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Storefront CLI")
    parser.add_argument("--api-url", help="Storefront API base URL")
    subparsers = parser.add_subparsers(dest="command")

    cat = subparsers.add_parser("catalog", help="Browse the catalog")
    cat.add_argument("--query", default="", help="Name substring")
    cat.add_argument("--category", default="All", choices=CATEGORIES)
    cat.add_argument("--sort", default="relevance", choices=SORTS)

    for name in ("add", "increment", "decrement", "remove"):
        sp = subparsers.add_parser(name, help=f"{name.capitalize()} a cart line")
        sp.add_argument("product_id")

    subparsers.add_parser("cart", help="View cart contents")

    exp = subparsers.add_parser("export", help="Export the inventory as JSON")
    exp.add_argument("--out", default="products.json")
    imp = subparsers.add_parser("import", help="Replace the inventory from a JSON file")
    imp.add_argument("path")

    subparsers.add_parser("brand", help="Show brand settings")
    subparsers.add_parser("menu", help="Interactive menu (default)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    c = StoreClient(base_url=args.api_url or get_settings().api_url)

    if args.command in (None, "menu"):
        menu(c)
    elif args.command == "catalog":
        show_products(c.view_catalog(args.query, args.category, args.sort))
    elif args.command == "add":
        show_cart(c.add_to_cart(args.product_id))
    elif args.command == "increment":
        show_cart(c.increment(args.product_id))
    elif args.command == "decrement":
        show_cart(c.decrement(args.product_id))
    elif args.command == "remove":
        show_cart(c.remove_from_cart(args.product_id))
    elif args.command == "cart":
        show_cart(c.view_cart())
    elif args.command == "export":
        with open(args.out, "w", encoding="utf-8") as fh:
            json.dump(c.export_products(), fh, ensure_ascii=False, indent=2)
        console.print(f"[green]Inventory written to {args.out}[/green]")
    elif args.command == "import":
        with open(args.path, encoding="utf-8") as fh:
            resp = c.import_products(json.load(fh))
        if "imported" not in resp:
            console.print(f"[red]{resp.get('detail', 'import failed')}[/red]")
            return 1
        console.print(f"[green]{resp['imported']} products imported[/green]")
    elif args.command == "brand":
        show_brand(c.get_brand())
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
