"""Pydantic schemas for API request/response validation."""

from storefront.schemas.common import ErrorDetail, ErrorResponse
from storefront.schemas.pricing import (
    CartLineIn,
    CartQuoteRequest,
    CartQuoteResponse,
    OrderItemOut,
    PriceQuote,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "CartLineIn",
    "CartQuoteRequest",
    "CartQuoteResponse",
    "OrderItemOut",
    "PriceQuote",
]
