"""Cart pricing and checkout order items.

A cart line snapshots the product JSON plus the shopper's variant selection.
Prices are never stored on the line: every total and every order item
re-derives the unit price from the product and selectedVariants.priceType,
so offer-vs-regular billing always follows the current catalog data.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from storefront.services.pricing import PriceType, get_price_for_cart_line, get_price_type


class CartError(ValueError):
    pass


@dataclass
class CartItem:
    """A single cart line."""

    product: Mapping[str, Any]
    quantity: int
    selected_variants: dict[str, str] = field(default_factory=dict)

    @property
    def product_id(self) -> str | None:
        product_id = self.product.get("id")
        return str(product_id) if product_id is not None else None

    @property
    def unit_price(self) -> float:
        return get_price_for_cart_line(self.product, self.selected_variants)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass
class OrderItem:
    """Line of the checkout order payload."""

    product_id: str | None
    quantity: int
    price: float
    price_type: PriceType
    selected_variants: dict[str, str] = field(default_factory=dict)


@dataclass
class Cart:
    """In-memory cart keyed by product id."""

    items: list[CartItem] = field(default_factory=list)

    def _find(self, product_id: str | None) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add_item(
        self,
        product: Mapping[str, Any],
        quantity: int = 1,
        variants: Mapping[str, str] | None = None,
    ) -> CartItem:
        """Add a product, merging with an existing line for the same product.

        The variant selection of the first add is kept on merge.

        Raises:
            CartError: If quantity is below 1.
        """
        if quantity < 1:
            raise CartError(f"Quantity must be at least 1, got {quantity}")

        item = CartItem(product=product, quantity=quantity, selected_variants=dict(variants or {}))
        existing = self._find(item.product_id)
        if existing is not None:
            existing.quantity += quantity
            return existing

        self.items.append(item)
        return item

    def remove_item(self, product_id: str) -> None:
        self.items = [item for item in self.items if item.product_id != product_id]

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(product_id)
            return
        item = self._find(product_id)
        if item is not None:
            item.quantity = quantity

    def clear(self) -> None:
        self.items = []

    def get_total(self) -> float:
        return sum((item.line_total for item in self.items), 0.0)

    def get_item_count(self) -> int:
        return sum(item.quantity for item in self.items)


def build_order_items(cart: Cart) -> list[OrderItem]:
    """Build the checkout order payload lines for a cart.

    Unit prices are re-derived per line from selectedVariants.priceType.
    """
    return [
        OrderItem(
            product_id=item.product_id,
            quantity=item.quantity,
            price=item.unit_price,
            price_type=get_price_type(item.selected_variants),
            selected_variants=dict(item.selected_variants),
        )
        for item in cart.items
    ]
