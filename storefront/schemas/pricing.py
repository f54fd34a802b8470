"""Schemas for the pricing endpoints (/v1/pricing/*)."""

from typing import Any

from pydantic import BaseModel, Field


class PriceQuote(BaseModel):
    """Resolved default-variant price of a product, ready to render."""

    regular_price: float = Field(alias="regularPrice")
    discount_price: float = Field(alias="discountPrice")
    has_discount: bool = Field(alias="hasDiscount")
    discount: int
    stock_quantity: float = Field(alias="stockQuantity")
    display_price: float = Field(alias="displayPrice")
    out_of_stock: bool = Field(alias="outOfStock")
    currency: str
    formatted_price: str = Field(alias="formattedPrice")
    formatted_regular_price: str = Field(alias="formattedRegularPrice")

    model_config = {"populate_by_name": True}


class CartLineIn(BaseModel):
    """A cart line as sent by the storefront cart."""

    product: dict[str, Any]
    quantity: int = Field(default=1, le=1000)
    selected_variants: dict[str, str] = Field(alias="selectedVariants", default_factory=dict)

    model_config = {"populate_by_name": True}


class CartQuoteRequest(BaseModel):
    """Request body for POST /v1/pricing/cart."""

    items: list[CartLineIn] = Field(default_factory=list, max_length=200)


class OrderItemOut(BaseModel):
    """Checkout order payload line."""

    product_id: str | None = Field(alias="productId")
    quantity: int
    price: float
    price_type: str = Field(alias="priceType")
    line_total: float = Field(alias="lineTotal")
    selected_variants: dict[str, str] = Field(alias="selectedVariants", default_factory=dict)

    model_config = {"populate_by_name": True}


class CartQuoteResponse(BaseModel):
    """Priced cart with totals."""

    items: list[OrderItemOut]
    item_count: int = Field(alias="itemCount")
    total: float
    currency: str
    formatted_total: str = Field(alias="formattedTotal")

    model_config = {"populate_by_name": True}
