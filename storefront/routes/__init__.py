"""API routes."""

from fastapi import APIRouter

from storefront.routes import pricing

api_router = APIRouter()

# Pricing endpoints (product cards, cart, checkout)
api_router.include_router(pricing.router, prefix="/v1/pricing", tags=["pricing"])
