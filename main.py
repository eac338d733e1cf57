#!/usr/bin/env python3
"""
Maydel Catalog - Command Line Entry Point

Browse the storefront catalog and manage products from the terminal, against
Supabase (default) or a local JSON seed file.

Usage:
    python main.py --list                     # First page of the catalog
    python main.py --list -c ropa --page 2    # Second page of clothing
    python main.py --create draft.json        # Create a product from a draft
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config.settings import AppConfig, config
from src.admin import ProductAdminWorkflow
from src.catalog import CatalogBrowser, CatalogService, Category, Product, ProductDetail
from src.loaders import MemoryStore, SupabaseStore

console = Console(quiet=not config.logging.log_to_console)


class CustomHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that preserves formatting and adds width."""

    def __init__(self, prog):
        super().__init__(prog, max_help_position=40, width=100)


def parse_args(argv=None):
    """Parse command line arguments."""

    category_list = "\n".join(f"    {c.value:<12} {c.label}" for c in Category)

    epilog = f"""
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
CATEGORIES
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
{category_list}

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
EXAMPLES
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
  Browsing:
    python main.py --list                       First page, no filters
    python main.py --list -s M --color Negro    Size M in black
    python main.py --list -q faja --page 2      Search, second page
    python main.py --facets                     Sizes and colours in stock
    python main.py --stats                      Product counts per category
    python main.py --show <id>                  One product with its colours

  Admin:
    python main.py --create draft.json          New product from a JSON draft
    python main.py --edit <id> draft.json       Replace fields and colours
    python main.py --delete <id>                Delete a product

  Offline:
    python main.py --local seed.json --list     Use a local JSON store

Draft files hold name, description, price, category, stock, size, images
(list of URLs) and colors (list of {{"color_name", "color_code"}}).
"""

    parser = argparse.ArgumentParser(
        description="Maydel catalog: browse and manage products",
        formatter_class=CustomHelpFormatter,
        epilog=epilog,
    )

    browse = parser.add_argument_group("Browsing")
    browse.add_argument("--list", action="store_true", help="List one catalog page")
    browse.add_argument("-c", "--category", default="", help="Category id filter")
    browse.add_argument("-s", "--size", default="", help="Size filter")
    browse.add_argument("--color", default="", help="Colour name filter")
    browse.add_argument("-q", "--search", default="", help="Search name/description")
    browse.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    browse.add_argument("--facets", action="store_true", help="Show filter facets")
    browse.add_argument("--stats", action="store_true", help="Product counts per category")
    browse.add_argument("--show", metavar="ID", help="Show one product")

    admin = parser.add_argument_group("Admin")
    admin.add_argument("--create", metavar="FILE", type=Path, help="Create from draft")
    admin.add_argument(
        "--edit", nargs=2, metavar=("ID", "FILE"), help="Edit a product from draft"
    )
    admin.add_argument("--delete", metavar="ID", help="Delete a product")

    storage = parser.add_argument_group("Storage")
    storage.add_argument(
        "--local",
        metavar="FILE",
        type=Path,
        help="Use a local JSON store instead of Supabase (written back on change)",
    )

    return parser.parse_args(argv)


def build_store(args, app_config: AppConfig):
    """Supabase by default, a MemoryStore when --local is given."""
    if args.local:
        return MemoryStore.from_json(args.local)
    return SupabaseStore(app_config.store)


def print_page(browser: CatalogBrowser) -> None:
    table = Table(title=f"Page {browser.current_page} of {browser.total_pages}")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Category")
    table.add_column("Size")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Colours")
    table.add_column("Images", justify="right")

    for p in browser.page_items:
        table.add_row(
            p.id,
            p.name,
            p.category_label,
            p.size or "-",
            f"${p.price}",
            ", ".join(c.color_name for c in p.colors) or "-",
            str(len(p.images)),
        )

    console.print(table)
    console.print(f"[dim]{len(browser.filtered)} matching products[/dim]")


def print_facets(browser: CatalogBrowser) -> None:
    summary = browser.facet_summary()
    console.print("[bold]Categories:[/bold]")
    for opt in summary["categories"]:
        console.print(f"  {opt.value:<12} {opt.label}")
    console.print(f"[bold]Sizes:[/bold] {', '.join(summary['sizes']) or '-'}")
    console.print("[bold]Colours:[/bold]")
    for color in summary["colors"]:
        console.print(f"  {color.name:<16} {color.code}")


def print_stats(products: list[Product]) -> None:
    """Show product counts per category."""
    by_category: dict[str, int] = {}
    for p in products:
        label = p.category_label or "unknown"
        by_category[label] = by_category.get(label, 0) + 1

    table = Table(title="Catalog")
    table.add_column("Category")
    table.add_column("Products", justify="right")
    for label, count in sorted(by_category.items(), key=lambda x: -x[1]):
        table.add_row(label, str(count))
    console.print(table)
    console.print(f"[bold]Total:[/bold] {len(products)} products")


def print_product(product: Product) -> None:
    detail = ProductDetail(product)
    lines = [
        f"[bold]{product.name}[/bold]  [green]${product.price}[/green]",
        f"[dim]{product.category_label} · Talla {product.size or '-'} · "
        f"Stock {product.stock if product.stock is not None else '-'}[/dim]",
        "",
        product.description,
        "",
        "Colours: " + (", ".join(f"{c.color_name} ({c.color_code})" for c in product.colors) or "-"),
        f"Cover image: {detail.current_image or '-'}",
        f"Images: {len(product.images)}",
    ]
    console.print(Panel("\n".join(lines), title=product.id))


def load_draft_file(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


async def run_admin(args, store, products: list[Product], app_config: AppConfig) -> bool:
    workflow = ProductAdminWorkflow(store, products=products, app_config=app_config)

    if args.delete:
        return await workflow.delete(args.delete)

    if args.create:
        workflow.start_create()
        if not workflow.fill_form(load_draft_file(args.create)):
            return False
    else:
        product_id, draft_path = args.edit
        product = next((p for p in products if p.id == product_id), None)
        if product is None:
            console.print(f"[red]Product not found: {product_id}[/red]")
            return False
        if not await workflow.start_edit(product):
            return False
        if not workflow.fill_form(load_draft_file(Path(draft_path))):
            return False

    return await workflow.submit()


async def run(args, app_config: AppConfig = config) -> int:
    store = build_store(args, app_config)
    service = CatalogService(store, app_config)

    if args.show:
        product = await service.get_product(args.show)
        if product is None:
            console.print(f"[red]Product not found: {args.show}[/red]")
            return 1
        print_product(product)
        return 0

    products = await service.load_products()

    if args.stats:
        print_stats(products)
        return 0

    if args.create or args.edit or args.delete:
        ok = await run_admin(args, store, products, app_config)
        if ok and args.local:
            store.save_json(args.local)
        return 0 if ok else 1

    browser = CatalogBrowser(products, page_size=app_config.catalog.page_size)
    browser.set_filter("category", args.category)
    browser.set_filter("size", args.size)
    browser.set_filter("color", args.color)
    browser.set_filter("query", args.search)

    if args.facets:
        print_facets(browser)
        return 0

    requested = args.page
    if browser.go_to_page(requested) != requested:
        console.print(
            f"[yellow]Page {requested} out of range, showing page "
            f"{browser.current_page}[/yellow]"
        )
    print_page(browser)
    return 0


def main():
    args = parse_args()
    if not (
        args.list or args.facets or args.stats or args.show
        or args.create or args.edit or args.delete
    ):
        console.print("[yellow]Nothing to do. Try --list or --help.[/yellow]")
        sys.exit(0)

    try:
        sys.exit(asyncio.run(run(args)))
    except ValueError as e:
        # Missing credentials
        console.print(f"[red]{e}[/red]")
        sys.exit(2)


if __name__ == "__main__":
    main()
