"""Pricing endpoints.

POST /v1/pricing/resolve         - Resolve the default-variant price of a product JSON
POST /v1/pricing/cart            - Price a cart and build checkout order items
GET  /v1/pricing/products/{slug} - Fetch a product from the catalog and price it

Routers are thin: call services for business logic.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Path

from storefront.schemas import CartQuoteRequest, CartQuoteResponse, OrderItemOut, PriceQuote
from storefront.services.cart import Cart, CartError, build_order_items
from storefront.services.catalog_client import CatalogError, ProductNotFound, get_catalog_client
from storefront.services.formatting import format_price
from storefront.services.pricing import resolve_price
from storefront.settings import get_settings

router = APIRouter()
logger = logging.getLogger("uvicorn.error")


def _quote(product: dict[str, Any]) -> PriceQuote:
    resolved = resolve_price(product)
    if resolved.is_unavailable:
        logger.warning(f"Product resolved to no price: id={product.get('id')}")

    return PriceQuote(
        regular_price=resolved.regular_price,
        discount_price=resolved.discount_price,
        has_discount=resolved.has_discount,
        discount=resolved.discount,
        stock_quantity=resolved.stock_quantity,
        display_price=resolved.display_price,
        out_of_stock=resolved.out_of_stock,
        currency=get_settings().currency_code,
        formatted_price=format_price(resolved.discount_price),
        formatted_regular_price=format_price(resolved.regular_price),
    )


@router.post("/resolve", response_model=PriceQuote)
async def resolve_product_price(
    product: dict[str, Any] = Body(description="Product JSON as returned by the catalog API"),
) -> PriceQuote:
    """Resolve price, discount and stock of a product's default variant."""
    return _quote(product)


@router.post("/cart", response_model=CartQuoteResponse)
async def quote_cart(request: CartQuoteRequest) -> CartQuoteResponse:
    """Price a cart, honouring each line's priceType (offer or regular).

    Returns:
        Order items with unit prices, item count and total.
    """
    cart = Cart()
    try:
        for line in request.items:
            cart.add_item(line.product, line.quantity, line.selected_variants)
    except CartError as e:
        raise HTTPException(
            status_code=400,
            detail={
                "error": {
                    "code": "INVALID_CART",
                    "message": str(e),
                    "detail": None,
                }
            },
        )

    items = [
        OrderItemOut(
            product_id=order_item.product_id,
            quantity=order_item.quantity,
            price=order_item.price,
            price_type=order_item.price_type.value,
            line_total=order_item.price * order_item.quantity,
            selected_variants=order_item.selected_variants,
        )
        for order_item in build_order_items(cart)
    ]
    total = cart.get_total()

    return CartQuoteResponse(
        items=items,
        item_count=cart.get_item_count(),
        total=total,
        currency=get_settings().currency_code,
        formatted_total=format_price(total),
    )


@router.get("/products/{slug}", response_model=PriceQuote)
async def get_product_price(
    slug: str = Path(
        description="Catalog product slug",
        min_length=1,
        max_length=200,
        pattern=r"^[a-zA-Z0-9_-]+$",
    ),
) -> PriceQuote:
    """Fetch a product from the catalog and resolve its price.

    Raises:
        HTTPException 404: If the catalog has no such product.
        HTTPException 502: If the catalog cannot be reached or misbehaves.
    """
    try:
        product = await get_catalog_client().get_product(slug)
    except ProductNotFound:
        raise HTTPException(
            status_code=404,
            detail={
                "error": {
                    "code": "PRODUCT_NOT_FOUND",
                    "message": f"Product {slug} not found",
                    "detail": {"slug": slug},
                }
            },
        )
    except CatalogError as e:
        raise HTTPException(
            status_code=502,
            detail={
                "error": {
                    "code": "CATALOG_UNAVAILABLE",
                    "message": str(e),
                    "detail": {"slug": slug},
                }
            },
        )

    return _quote(product)
