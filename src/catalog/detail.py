"""
Product detail page state and cart-action gating.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import Product


class CartAction(str, Enum):
    """What pressing the cart button should do for the current session."""

    HIDDEN = "hidden"  # Admins never see cart buttons
    SIGN_IN = "sign_in"  # Redirect to the auth page
    ADD = "add"


@dataclass(frozen=True)
class SessionContext:
    """Session facts supplied by the auth layer."""

    is_authenticated: bool = False
    role: Optional[str] = None


def cart_action(session: SessionContext) -> CartAction:
    if session.role == "admin":
        return CartAction.HIDDEN
    if not session.is_authenticated:
        return CartAction.SIGN_IN
    return CartAction.ADD


class ProductDetail:
    """Image carousel, colour picker and quantity selector for one product."""

    def __init__(self, product: Product):
        self.product = product
        self.image_index = 0
        self.quantity = 1
        self.selected_color_id: Optional[str] = (
            product.colors[0].id if product.colors else None
        )

    @property
    def current_image(self) -> str:
        if not self.product.images:
            return ""
        return self.product.images[self.image_index]

    def next_image(self) -> int:
        count = len(self.product.images)
        if count:
            self.image_index = (self.image_index + 1) % count
        return self.image_index

    def prev_image(self) -> int:
        count = len(self.product.images)
        if count:
            self.image_index = (self.image_index - 1) % count
        return self.image_index

    def show_image(self, index: int) -> int:
        if 0 <= index < len(self.product.images):
            self.image_index = index
        return self.image_index

    def select_color(self, color_id: str) -> None:
        if any(c.id == color_id for c in self.product.colors):
            self.selected_color_id = color_id

    def change_quantity(self, delta: int) -> int:
        self.quantity = max(1, self.quantity + delta)
        return self.quantity
