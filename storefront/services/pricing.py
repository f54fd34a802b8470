"""Variant price resolution for catalog products.

Products arrive from the catalog API in one of three shapes:
- basic:   directColors[] carry price and stock directly
- network: networks[].defaultStorages[].price
- region:  regions[].defaultStorages[].price

Resolution rules:
1. Pick the entry flagged isDefault, else the first entry (array order matters)
2. Probe both price spellings (regular/regularPrice, discount/discountPrice/final)
3. If nothing priced, fall back to legacy flat fields on the product
4. A zero discount price means "no discount" and collapses to the regular price

Nothing here raises: malformed or missing data degrades to 0, which callers
render as "price unavailable" / "out of stock".
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
import math
from typing import Any


class ProductType(Enum):
    """Product shape discriminator."""

    BASIC = "basic"
    NETWORK = "network"
    REGION = "region"


class PriceType(Enum):
    """Which of the two billable amounts a shopper picked for a cart line."""

    OFFER = "offer"  # Discounted cash price
    REGULAR = "regular"  # Keeps EMI eligibility


@dataclass(frozen=True)
class ResolvedPrice:
    """Price of the default variant of a product."""

    regular_price: float = 0.0
    discount_price: float = 0.0
    has_discount: bool = False
    discount: int = 0
    stock_quantity: float = 0.0

    @property
    def is_unavailable(self) -> bool:
        """True when nothing could be priced (all-zero result)."""
        return self.regular_price == 0 and self.discount_price == 0

    @property
    def display_price(self) -> float:
        """Price shown on listing cards (the offer price)."""
        return self.discount_price

    @property
    def out_of_stock(self) -> bool:
        return self.stock_quantity == 0


def _first_present(source: Mapping[str, Any], *keys: str) -> Any:
    """Return the first value under `keys` that is not None."""
    for key in keys:
        value = source.get(key)
        if value is not None:
            return value
    return None


def _to_number(value: Any) -> float:
    """Coerce a JSON value to a finite float, 0 for anything unusable."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _pick_default(items: Any) -> Mapping[str, Any] | None:
    """Select the isDefault entry of a collection, else its first entry."""
    if not isinstance(items, Sequence) or isinstance(items, (str, bytes)):
        return None
    for item in items:
        if isinstance(item, Mapping) and item.get("isDefault") is True:
            return item
    if not items or not isinstance(items[0], Mapping):
        return None
    return items[0]


def get_product_type(product: Mapping[str, Any]) -> ProductType:
    """Read the product discriminator; unknown or missing means basic."""
    raw = product.get("productType") or product.get("type") or ProductType.BASIC.value
    try:
        return ProductType(raw)
    except (TypeError, ValueError):
        return ProductType.BASIC


def _storage_prices(group: Mapping[str, Any] | None) -> tuple[float, float, float]:
    """Prices of the default storage in a network/region group."""
    if group is None:
        return 0.0, 0.0, 0.0
    storage = _pick_default(group.get("defaultStorages"))
    if storage is None:
        return 0.0, 0.0, 0.0
    price = storage.get("price")
    if not isinstance(price, Mapping):
        return 0.0, 0.0, 0.0

    regular = _to_number(_first_present(price, "regular", "regularPrice"))
    discounted = _to_number(_first_present(price, "discount", "discountPrice", "final"))
    stock = price.get("stockQuantity")
    if stock is None:
        stock = storage.get("stock")
    return regular, discounted, _to_number(stock)


def _color_prices(color: Mapping[str, Any] | None) -> tuple[float, float, float]:
    """Prices of the default direct color of a basic product."""
    if color is None:
        return 0.0, 0.0, 0.0
    return (
        _to_number(color.get("regularPrice")),
        _to_number(color.get("discountPrice")),
        _to_number(color.get("stockQuantity")),
    )


def resolve_price(product: Mapping[str, Any] | None) -> ResolvedPrice:
    """Resolve the default variant price of a product.

    Args:
        product: Product JSON object as returned by the catalog API.

    Returns:
        ResolvedPrice; all zeros if no price can be found.
    """
    if not isinstance(product, Mapping):
        return ResolvedPrice()

    product_type = get_product_type(product)
    if product_type is ProductType.NETWORK:
        regular, discounted, stock = _storage_prices(_pick_default(product.get("networks")))
    elif product_type is ProductType.REGION:
        regular, discounted, stock = _storage_prices(_pick_default(product.get("regions")))
    else:
        regular, discounted, stock = _color_prices(_pick_default(product.get("directColors")))

    # Legacy flat-schema products
    if regular == 0 and discounted == 0:
        regular = _to_number(_first_present(product, "price", "regularPrice"))
        discounted = _to_number(product.get("discountPrice"))
        stock = _to_number(_first_present(product, "stock", "stockQuantity"))

    if discounted == 0:
        discounted = regular

    has_discount = regular > 0 and discounted > 0 and discounted < regular
    if has_discount:
        discount = calculate_discount(regular, discounted)
    else:
        discount = _round_half_up(_to_number(product.get("discountPercent")))

    return ResolvedPrice(
        regular_price=regular,
        discount_price=discounted,
        has_discount=has_discount,
        discount=discount,
        stock_quantity=stock,
    )


def calculate_discount(original: float, discounted: float) -> int:
    """Whole-number percentage saved going from `original` to `discounted`."""
    if original <= 0:
        return 0
    return _round_half_up((original - discounted) / original * 100)


def get_display_price(product: Mapping[str, Any] | None) -> float:
    return resolve_price(product).display_price


def get_price_type(selected_variants: Mapping[str, Any] | None) -> PriceType:
    """Price type chosen for a cart line; anything but "regular" is the offer."""
    if isinstance(selected_variants, Mapping) and selected_variants.get("priceType") == "regular":
        return PriceType.REGULAR
    return PriceType.OFFER


def get_price_for_cart_line(
    product: Mapping[str, Any] | None,
    selected_variants: Mapping[str, Any] | None = None,
) -> float:
    """Unit price billed for a cart line.

    Shoppers may pay the regular price (e.g. to stay EMI eligible) instead of
    the discounted cash price by selecting priceType=regular.
    """
    resolved = resolve_price(product)
    if get_price_type(selected_variants) is PriceType.REGULAR:
        return resolved.regular_price
    return resolved.discount_price


def is_out_of_stock(product: Mapping[str, Any] | None) -> bool:
    return resolve_price(product).out_of_stock
