"""FastAPI application entry point.

Storefront Pricing API - product variant price resolution for cards, cart and checkout.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.routes import api_router
from storefront.schemas import ErrorDetail, ErrorResponse
from storefront.services.catalog_client import close_catalog_client
from storefront.settings import get_settings

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log the catalog target on startup; close the shared catalog client on shutdown."""
    settings = get_settings()
    logger.info(f"Catalog API: {settings.catalog_api_url}")

    yield

    await close_catalog_client()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Product variant price resolution for the storefront",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Unhandled errors become a 500 ErrorResponse; details only in debug."""
        logger.exception(f"Unhandled error on {request.url.path}")
        body = ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message=str(exc) if settings.debug else "Internal server error",
            )
        )
        return JSONResponse(status_code=500, content=body.model_dump())

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        return {"ok": True}

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
