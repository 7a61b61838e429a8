"""
==============================================================================
Storefront - Application Entry Point
==============================================================================

FastAPI application with:
- Product catalog proxy (GET /api/products)
- WebSocket storefront sessions (cart and product details state)
- Static storefront page

Usage:
------
    # Development
    uvicorn storefront.main:app --reload

    # Production
    uvicorn storefront.main:app --host 0.0.0.0 --port 8000

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from storefront.config import get_settings
from storefront.core.exceptions import register_exception_handlers
from storefront.api.router import api_router
from storefront.websockets import storefront_router


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Handles application lifecycle including:
    - Startup and shutdown logging
    - Middleware configuration
    - Router registration
    - Exception handler setup
    """

    def __init__(self):
        """Initialize the application."""
        self._settings = get_settings()
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version="1.0.0",
            description="Product catalog and cart backed by a headless CMS",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        self._configure_middleware(app)
        register_exception_handlers(app)
        self._register_routers(app)

        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

        self._register_root(app)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        self._startup()
        yield
        self._shutdown()

    def _startup(self) -> None:
        """Application startup tasks."""
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {self._settings.app_name}")
        logger.info("=" * 60)

        self._log_catalog_source()

        logger.info(f"✅ {self._settings.app_name} ready")
        logger.info(f"📍 Running on http://{self._settings.host}:{self._settings.port}")
        logger.info(f"📖 API Docs: http://{self._settings.host}:{self._settings.port}/docs")
        logger.info("=" * 60)

    def _shutdown(self) -> None:
        """Application shutdown tasks."""
        logger.info("🛑 Shutting down...")
        logger.info("✅ Shutdown complete")

    def _log_catalog_source(self) -> None:
        """Report where products will be fetched from."""
        if self._settings.catalog_backend == "file":
            products_path = self._settings.products_path
            if products_path.exists():
                logger.info(f"📦 Catalog: local file {products_path}")
            else:
                logger.warning(f"⚠️ Products file not found: {products_path}")
        else:
            logger.info(
                f"📦 Catalog: content service {self._settings.query_host} "
                f"(dataset={self._settings.cms_dataset})"
            )

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _register_routers(self, app: FastAPI) -> None:
        """Register API routers."""
        app.include_router(api_router)
        app.include_router(storefront_router)

    def _register_root(self, app: FastAPI) -> None:
        """Register root endpoint."""

        @app.get("/", include_in_schema=False)
        async def root():
            """Redirect to the storefront page."""
            return RedirectResponse(url="/static/index.html")

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

application = Application()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
