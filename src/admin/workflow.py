"""
Admin product workflow.

Drives the create/edit/delete form against the collection store:

    IDLE --start_create--> CREATING --submit--> SUBMITTING --ok--> IDLE
    IDLE --start_edit----> EDITING  --submit--> SUBMITTING --ok--> IDLE
                                      SUBMITTING --error--> CREATING / EDITING

On edit, variants are reconciled by deleting every ``product_colors`` row of
the product and re-inserting the draft's list. The two steps are tracked
separately: if the delete went through but the insert failed, the product is
left without colours and a VariantSyncError is reported instead of a plain
StoreError.

User-facing failures never escape the workflow: they are stored on
``last_error``/``error`` and the method returns False. Calling a transition
from the wrong state raises WorkflowStateError.
"""

from dataclasses import replace
from enum import Enum
from typing import Iterable, Optional

from pydantic import ValidationError as PydanticValidationError
from rich.console import Console

from config.settings import AppConfig, config as default_config
from src.catalog.models import ColorVariant, Product
from src.errors import (
    CatalogError,
    FetchError,
    StoreError,
    UploadError,
    ValidationError,
    VariantSyncError,
    WorkflowStateError,
)
from src.loaders.base_store import CollectionStore
from src.uploaders.cloudinary_uploader import ImageFile, ImageHost

from .draft import ProductDraft, reset_draft, validate_draft
from .variants import VariantStore

console = Console()


class WorkflowState(str, Enum):
    IDLE = "idle"
    CREATING = "creating"
    EDITING = "editing"
    SUBMITTING = "submitting"


OPEN_STATES = (WorkflowState.CREATING, WorkflowState.EDITING)


class ProductAdminWorkflow:
    """
    Admin form lifecycle plus the admin's in-memory product list.

    The product list is only changed after the store has confirmed the
    matching write, and always by whole-list replacement or single-element
    swap.
    """

    def __init__(
        self,
        store: CollectionStore,
        image_host: Optional[ImageHost] = None,
        products: Iterable[Product] = (),
        app_config: Optional[AppConfig] = None,
    ):
        self.store = store
        self.image_host = image_host
        self.config = app_config or default_config
        self.products: list[Product] = list(products)

        self.state = WorkflowState.IDLE
        self.draft: ProductDraft = reset_draft()
        self.editing_id: Optional[str] = None
        self.is_uploading = False
        self.error = ""
        self.last_error: Optional[CatalogError] = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def _products_table(self) -> str:
        return self.config.store.products_table

    @property
    def _colors_table(self) -> str:
        return self.config.store.colors_table

    @property
    def _max_images(self) -> int:
        return self.config.catalog.max_images

    @property
    def is_open(self) -> bool:
        return self.state in OPEN_STATES

    @property
    def can_submit(self) -> bool:
        """Whether the submit button should be enabled."""
        return (
            self.is_open
            and not self.is_uploading
            and len(self.draft.images) > 0
            and len(self.draft.variants) > 0
        )

    @property
    def can_upload(self) -> bool:
        return (
            self.is_open
            and not self.is_uploading
            and len(self.draft.images) < self._max_images
        )

    def _require_open(self, action: str) -> None:
        if not self.is_open:
            raise WorkflowStateError(
                f"Cannot {action} while {self.state.value}; open the form first"
            )

    def _fail(self, error: CatalogError) -> bool:
        self.last_error = error
        self.error = str(error)
        console.print(f"[red]✗ {error}[/red]")
        return False

    def _clear_error(self) -> None:
        self.last_error = None
        self.error = ""

    def _close(self) -> None:
        self.state = WorkflowState.IDLE
        self.draft = reset_draft()
        self.editing_id = None
        self.is_uploading = False

    def _replace_product(self, product: Product) -> None:
        self.products = [product if p.id == product.id else p for p in self.products]

    # ------------------------------------------------------------------
    # Opening and closing the form
    # ------------------------------------------------------------------

    def start_create(self) -> None:
        """Open a blank form."""
        if self.state != WorkflowState.IDLE:
            raise WorkflowStateError(f"Cannot start create while {self.state.value}")
        self._clear_error()
        self.draft = reset_draft()
        self.editing_id = None
        self.state = WorkflowState.CREATING

    async def start_edit(self, product: Product) -> bool:
        """
        Open the form pre-populated from ``product`` and its stored variants.

        Returns:
            True if the form opened; False (with FetchError recorded) if the
            variants could not be loaded
        """
        if self.state != WorkflowState.IDLE:
            raise WorkflowStateError(f"Cannot start edit while {self.state.value}")
        self._clear_error()

        try:
            records = await self.store.query(
                self._colors_table, {"product_id": product.id}
            )
            variants = [ColorVariant.model_validate(r) for r in records]
        except (StoreError, PydanticValidationError) as e:
            return self._fail(
                FetchError(f"Could not load colours for '{product.name}': {e}")
            )

        self.draft = ProductDraft.from_product(product, variants)
        self.editing_id = product.id
        self.state = WorkflowState.EDITING
        return True

    def cancel(self) -> None:
        """Close the form and discard the draft."""
        if self.state == WorkflowState.SUBMITTING:
            raise WorkflowStateError("Cannot cancel while a submit is in flight")
        self._clear_error()
        self._close()

    # ------------------------------------------------------------------
    # Draft editing
    # ------------------------------------------------------------------

    def set_field(self, name: str, value: str) -> None:
        self._require_open("edit fields")
        self.draft = self.draft.with_field(name, value)

    def add_variant(self) -> None:
        self._require_open("add a colour")
        self.draft = self._with_variants(self.draft.variants.add())

    def remove_variant(self, index: int) -> None:
        self._require_open("remove a colour")
        self.draft = self._with_variants(self.draft.variants.remove_at(index))

    def set_variant_field(self, index: int, field: str, value: str) -> None:
        self._require_open("edit a colour")
        self.draft = self._with_variants(
            self.draft.variants.set_field(index, field, value)
        )

    def fill_form(self, data: dict) -> bool:
        """
        Apply a JSON-style draft to the open form through the normal operations.

        Keys: name, description, price, category, stock, size, images (URL
        list, replaces the current list) and colors (list of dicts with
        color_name/color_code, replaces the current variants).

        Returns:
            False if an image was rejected (error recorded), else True
        """
        self._require_open("fill the form")
        for name in ("name", "description", "price", "category", "stock", "size"):
            if name in data:
                value = data[name]
                self.set_field(name, "" if value is None else str(value))

        ok = True
        if "images" in data:
            self.draft = self._with_images(())
            for url in data["images"]:
                ok = self.add_image(url) and ok

        if "colors" in data:
            variants = VariantStore()
            for i, color in enumerate(data["colors"]):
                variants = variants.add()
                variants = variants.set_field(
                    i, "color_name", color.get("color_name", "")
                )
                if color.get("color_code"):
                    variants = variants.set_field(i, "color_code", color["color_code"])
            self.draft = self._with_variants(variants)

        return ok

    def _with_variants(self, variants) -> ProductDraft:
        return replace(self.draft, variants=variants)

    def _with_images(self, images: tuple[str, ...]) -> ProductDraft:
        return replace(self.draft, images=images)

    def add_image(self, url: str) -> bool:
        """Append an image URL; rejected once the draft holds the maximum."""
        self._require_open("add an image")
        if len(self.draft.images) >= self._max_images:
            return self._fail(
                ValidationError(
                    f"A product can have at most {self._max_images} images"
                )
            )
        self._clear_error()
        self.draft = self._with_images(self.draft.images + (url,))
        return True

    def remove_image(self, index: int) -> None:
        self._require_open("remove an image")
        images = self.draft.images
        if 0 <= index < len(images):
            self.draft = self._with_images(images[:index] + images[index + 1 :])

    async def upload_images(self, files: list[ImageFile]) -> bool:
        """
        Upload a batch of files and append their URLs to the draft.

        All uploads run in parallel; if any fails, none of the URLs are
        added.
        """
        self._require_open("upload images")
        if self.is_uploading:
            raise WorkflowStateError("An upload is already in progress")
        if self.image_host is None:
            raise WorkflowStateError("No image host configured")
        if not files:
            return True

        room = self._max_images - len(self.draft.images)
        if len(files) > room:
            return self._fail(
                ValidationError(
                    f"Cannot add {len(files)} images; only {room} more allowed "
                    f"(maximum {self._max_images})"
                )
            )

        self._clear_error()
        self.is_uploading = True
        try:
            urls = await self.image_host.upload_many(files)
        except UploadError as e:
            return self._fail(e)
        finally:
            self.is_uploading = False

        self.draft = self._with_images(self.draft.images + tuple(urls))
        console.print(f"[green]✓ {len(urls)} image(s) uploaded[/green]")
        return True

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    async def submit(self) -> bool:
        """
        Persist the draft.

        Returns:
            True on success (form closed, product list updated); False with
            the error recorded and the draft left intact otherwise
        """
        if self.state == WorkflowState.SUBMITTING:
            raise WorkflowStateError("A submit is already in flight")
        self._require_open("submit")
        if self.is_uploading:
            raise WorkflowStateError("Cannot submit while images are uploading")

        try:
            payload = validate_draft(self.draft, self._max_images)
        except ValidationError as e:
            return self._fail(e)

        self._clear_error()
        previous = self.state
        self.state = WorkflowState.SUBMITTING
        try:
            if previous == WorkflowState.EDITING:
                await self._submit_edit(payload)
            else:
                await self._submit_create(payload)
        except (StoreError, VariantSyncError) as e:
            self.state = previous
            return self._fail(e)
        except BaseException:
            self.state = previous
            raise

        self._close()
        return True

    async def _submit_create(self, payload: dict) -> Product:
        stored = await self.store.insert(self._products_table, payload)
        product_id = str(stored["id"])

        # No rollback of the product row if this fails
        colors = await self.store.insert_many(
            self._colors_table, self.draft.variants.to_records(product_id)
        )

        product = Product.from_record(stored).with_colors(
            [ColorVariant.model_validate(c) for c in colors]
        )
        self.products = self.products + [product]
        console.print(f"[green]✓ Created: {product.name} ({product_id})[/green]")
        return product

    async def _submit_edit(self, payload: dict) -> Product:
        product_id = self.editing_id
        stored = await self.store.update(self._products_table, product_id, payload)
        updated = Product.from_record(stored)

        existing = next((p for p in self.products if p.id == product_id), None)
        old_colors = existing.colors if existing else []
        self._replace_product(updated.with_colors(old_colors))

        await self.store.delete_where(self._colors_table, {"product_id": product_id})
        self._replace_product(updated.with_colors([]))

        try:
            colors = await self.store.insert_many(
                self._colors_table, self.draft.variants.to_records(product_id)
            )
        except StoreError as e:
            raise VariantSyncError(
                f"'{updated.name}' was saved but its colours were removed and "
                f"could not be re-added ({e}). Add the colours again and resubmit.",
                product_id,
            ) from e

        product = updated.with_colors([ColorVariant.model_validate(c) for c in colors])
        self._replace_product(product)
        console.print(f"[green]✓ Updated: {product.name} ({product_id})[/green]")
        return product

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete(self, product_id: str) -> bool:
        """
        Delete a product record.

        Variants are only removed first when ``cascade_variant_delete`` is
        configured; otherwise the store's own foreign-key rules apply.
        """
        self._clear_error()
        try:
            if self.config.store.cascade_variant_delete:
                await self.store.delete_where(
                    self._colors_table, {"product_id": product_id}
                )
            await self.store.delete(self._products_table, product_id)
        except StoreError as e:
            return self._fail(e)

        self.products = [p for p in self.products if p.id != product_id]
        console.print(f"[green]✓ Deleted product: {product_id}[/green]")
        return True
