#!/usr/bin/env python3
"""
Web viewer and JSON API for the catalog.

Supports two data sources:
  - Supabase database (default): reads and writes the hosted tables
  - Local JSON file: an in-memory store seeded from a file (use --local)

Usage:
    python viewer.py                    # Supabase
    python viewer.py --local seed.json  # Local file

Then open http://localhost:5000 in your browser.
"""
import argparse
import asyncio
import sys
from pathlib import Path

# Ensure project root is on path for src imports
sys.path.insert(0, str(Path(__file__).resolve().parent))

from flask import Flask, jsonify, render_template_string, request
from rich.console import Console

from config.settings import config
from src.admin import ProductAdminWorkflow
from src.catalog import (
    CatalogBrowser,
    CatalogService,
    Product,
    SessionContext,
    cart_action,
    filter_options,
)
from src.errors import StoreError
from src.loaders import MemoryStore, SupabaseStore
from src.uploaders import CloudinaryUploader

console = Console()

app = Flask(__name__)

# Set at startup (or by tests)
store = None
image_host = None


def get_service() -> CatalogService:
    return CatalogService(store, config)


def product_to_json(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": float(product.price),
        "category": product.category,
        "category_label": product.category_label,
        "stock": product.stock,
        "size": product.size,
        "images": product.images,
        "colors": [
            {"id": c.id, "color_name": c.color_name, "color_code": c.color_code}
            for c in product.colors
        ],
    }


def session_from_request() -> SessionContext:
    """Session facts forwarded by the auth proxy in front of this app."""
    return SessionContext(
        is_authenticated=request.headers.get("X-Authenticated") == "1",
        role=request.headers.get("X-User-Role"),
    )


def load_products() -> list[Product]:
    return asyncio.run(get_service().load_products())


# HTML Template with embedded CSS
HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="es">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Catálogo</title>
    <style>
        body { font-family: system-ui, sans-serif; margin: 2rem; background: #f5f5f5; }
        .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(220px, 1fr)); gap: 1.5rem; }
        .card { background: #fff; border-radius: 12px; overflow: hidden; box-shadow: 0 1px 3px rgba(0,0,0,.1); }
        .card img { width: 100%; aspect-ratio: 1; object-fit: cover; background: #eee; }
        .card .body { padding: 1rem; }
        .price { color: #b0306a; font-weight: 700; }
        .swatch { display: inline-block; width: 16px; height: 16px; border-radius: 50%; border: 1px solid #ddd; }
        .pager a { margin: 0 .25rem; }
        .pager .current { font-weight: 700; }
    </style>
</head>
<body>
    <form method="get">
        <input name="q" value="{{ filters.query }}" placeholder="Buscar productos...">
        <select name="category">
            <option value="">Categoría</option>
            {% for c in facets.categories %}
            <option value="{{ c.value }}" {% if c.value == filters.category %}selected{% endif %}>{{ c.label }}</option>
            {% endfor %}
        </select>
        {% if facets.sizes %}
        <select name="size">
            <option value="">Talla</option>
            {% for s in facets.sizes %}
            <option {% if s == filters.size %}selected{% endif %}>{{ s }}</option>
            {% endfor %}
        </select>
        {% endif %}
        {% if facets.colors %}
        <select name="color">
            <option value="">Color</option>
            {% for c in facets.colors %}
            <option {% if c.name == filters.color %}selected{% endif %}>{{ c.name }}</option>
            {% endfor %}
        </select>
        {% endif %}
        <button type="submit">Filtrar</button>
    </form>

    <div class="grid">
    {% for p in items %}
        <div class="card">
            <img src="{{ p.first_image }}" alt="{{ p.name }}">
            <div class="body">
                <h3>{{ p.name }}</h3>
                <p>{{ p.description }}</p>
                <span class="price">${{ p.price }}</span>
                <div>
                {% for c in p.colors %}
                    <span class="swatch" title="{{ c.color_name }}" style="background: {{ c.color_code }}"></span>
                {% endfor %}
                </div>
            </div>
        </div>
    {% endfor %}
    </div>

    {% if show_pagination %}
    <div class="pager">
        {% for n in page_numbers %}
        <a class="{% if n == page %}current{% endif %}"
           href="?page={{ n }}&category={{ filters.category|urlencode }}&size={{ filters.size|urlencode }}&color={{ filters.color|urlencode }}&q={{ filters.query|urlencode }}">{{ n }}</a>
        {% endfor %}
    </div>
    {% endif %}
</body>
</html>
"""


def browser_from_request() -> CatalogBrowser:
    browser = CatalogBrowser(load_products(), page_size=config.catalog.page_size)
    for field, param in (
        ("category", "category"),
        ("size", "size"),
        ("color", "color"),
        ("query", "q"),
    ):
        browser.set_filter(field, request.args.get(param, ""))
    browser.go_to_page(request.args.get("page", 1, type=int))
    return browser


@app.route("/")
def index():
    """Serve the catalog page."""
    browser = browser_from_request()
    return render_template_string(
        HTML_TEMPLATE,
        items=browser.page_items,
        filters=browser.filters,
        facets=browser.facet_summary(),
        page=browser.current_page,
        page_numbers=browser.page_numbers,
        show_pagination=browser.show_pagination,
    )


@app.route("/api/products")
def api_products():
    """Filtered, paginated catalog."""
    browser = browser_from_request()
    summary = browser.facet_summary()
    return jsonify(
        {
            "items": [product_to_json(p) for p in browser.page_items],
            "page": browser.current_page,
            "total_pages": browser.total_pages,
            "total": len(browser.filtered),
            "facets": {
                "categories": [
                    {"value": c.value, "label": c.label}
                    for c in filter_options(
                        summary["categories"], request.args.get("category_q", "")
                    )
                ],
                "sizes": filter_options(summary["sizes"], request.args.get("size_q", "")),
                "colors": [
                    {"name": c.name, "code": c.code}
                    for c in filter_options(
                        summary["colors"], request.args.get("color_q", "")
                    )
                ],
            },
            "cart_action": cart_action(session_from_request()).value,
        }
    )


@app.route("/api/featured")
def api_featured():
    """Products for the home page."""
    products = asyncio.run(get_service().featured())
    return jsonify([product_to_json(p) for p in products])


@app.route("/api/products/<product_id>")
def api_product(product_id):
    product = asyncio.run(get_service().get_product(product_id))
    if product is None:
        return jsonify({"error": "Product not found"}), 404
    return jsonify(product_to_json(product))


async def _create(data: dict) -> tuple[ProductAdminWorkflow, bool]:
    workflow = ProductAdminWorkflow(store, image_host, app_config=config)
    workflow.start_create()
    ok = workflow.fill_form(data) and await workflow.submit()
    return workflow, ok


async def _edit(product: Product, data: dict) -> tuple[ProductAdminWorkflow, bool]:
    workflow = ProductAdminWorkflow(store, image_host, [product], app_config=config)
    if not await workflow.start_edit(product):
        return workflow, False
    ok = workflow.fill_form(data) and await workflow.submit()
    return workflow, ok


def _workflow_error(workflow: ProductAdminWorkflow):
    kind = type(workflow.last_error).__name__ if workflow.last_error else "Error"
    status = 400 if kind == "ValidationError" else 502
    return jsonify({"error": workflow.error, "kind": kind}), status


@app.route("/api/products", methods=["POST"])
def create_product():
    """Create a product and its colours from a JSON draft."""
    data = request.get_json(silent=True) or {}
    workflow, ok = asyncio.run(_create(data))
    if not ok:
        return _workflow_error(workflow)
    return jsonify(product_to_json(workflow.products[-1])), 201


@app.route("/api/products/<product_id>", methods=["PUT"])
def update_product(product_id):
    """Update a product and replace its colours."""
    product = asyncio.run(get_service().get_product(product_id))
    if product is None:
        return jsonify({"error": "Product not found"}), 404

    data = request.get_json(silent=True) or {}
    workflow, ok = asyncio.run(_edit(product, data))
    if not ok:
        return _workflow_error(workflow)
    return jsonify(product_to_json(workflow.products[0]))


@app.route("/api/products/<product_id>", methods=["DELETE"])
def delete_product(product_id):
    """Delete a product record."""
    workflow = ProductAdminWorkflow(store, app_config=config)
    if not asyncio.run(workflow.delete(product_id)):
        return _workflow_error(workflow)
    return jsonify({"success": True, "message": f"Product {product_id} deleted"})


@app.route("/api/upload", methods=["POST"])
def upload_images():
    """Upload images and return their URLs (all or nothing)."""
    if image_host is None:
        return jsonify({"error": "Image hosting not configured"}), 400

    files = [(f.filename, f.read()) for f in request.files.getlist("file")]
    if not files:
        return jsonify({"error": "No files provided"}), 400
    if len(files) > config.catalog.max_images:
        return (
            jsonify({"error": f"At most {config.catalog.max_images} images"}),
            400,
        )

    workflow = ProductAdminWorkflow(store, image_host, app_config=config)
    workflow.start_create()
    if not asyncio.run(workflow.upload_images(files)):
        return _workflow_error(workflow)
    return jsonify({"urls": list(workflow.draft.images)})


@app.errorhandler(StoreError)
def handle_store_error(e):
    return jsonify({"error": str(e), "kind": "StoreError"}), 502


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Catalog viewer and JSON API")
    parser.add_argument(
        "--local",
        metavar="FILE",
        type=Path,
        help="Serve from a local JSON store instead of Supabase",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=5000,
        help="Port to run the server on (default: 5000)",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()

    if args.local:
        store = MemoryStore.from_json(args.local)
        console.print(f"[dim]Data Source:[/dim] Local file {args.local}")
    else:
        try:
            store = SupabaseStore(config.store)
            console.print("[green]✓ Connected to Supabase[/green]")
        except ValueError as e:
            console.print(f"[red]✗ {e}[/red]")
            sys.exit(1)

    try:
        image_host = CloudinaryUploader(config.upload)
    except ValueError as e:
        console.print(f"[yellow]Warning: uploads disabled: {e}[/yellow]")

    console.print(f"[bold]🌐  http://localhost:{args.port}[/bold]")
    app.run(debug=True, port=args.port)
