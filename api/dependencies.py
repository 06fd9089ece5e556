"""
API Dependencies - Singleton state management and FastAPI dependency injection

Wires the favorites repository, the OMDb search gateway and the catalog
service once at startup. A missing OMDb API key aborts startup instead of
failing every search later.
"""

import asyncio
import logging
from typing import Optional, Any, Dict
from contextlib import asynccontextmanager

from fastapi import HTTPException

from movie_catalog.adapters.base import BaseSearchGateway
from movie_catalog.adapters.omdb.omdb import OMDb_API
from movie_catalog.settings import get_settings
from api.repositories.base import BaseFavoritesRepository
from api.repositories.local import LocalFileRepository
from api.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class AppState:
    """
    Global application state - holds the wired collaborators.

    Singleton pattern: one instance shared across all requests.
    """

    def __init__(self):
        self.repository: Optional[BaseFavoritesRepository] = None
        self.search_gateway: Optional[BaseSearchGateway] = None
        self.catalog_service: Optional[CatalogService] = None

        self._initialized = False
        self._initialization_lock = asyncio.Lock()

    async def initialize(
        self,
        repository: Optional[BaseFavoritesRepository] = None,
        search_gateway: Optional[BaseSearchGateway] = None,
    ) -> None:
        """
        Build the collaborators (defaults: local JSON file + OMDb).

        Loads in order:
        1. Favorites repository (creates or heals the favorites file)
        2. Search gateway (requires OMDB_API_KEY)
        3. Catalog service
        """
        async with self._initialization_lock:
            if self._initialized:
                logger.debug("AppState already initialized")
                return

            logger.info("Initializing AppState...")
            try:
                cfg = get_settings()

                logger.info("Creating favorites repository...")
                self.repository = repository or LocalFileRepository()

                logger.info("Creating search gateway...")
                self.search_gateway = search_gateway or OMDb_API()

                self.catalog_service = CatalogService(
                    search_gateway=self.search_gateway,
                    favorites=self.repository,
                    max_page_size=cfg.max_page_size,
                )

                self._initialized = True
                logger.info("AppState initialization complete!")

            except Exception as e:
                logger.error(f"Failed to initialize AppState: {e}", exc_info=True)
                raise

    def is_ready(self) -> bool:
        """Check if app is ready to serve requests"""
        return self._initialized and self.catalog_service is not None

    def get_status(self) -> Dict[str, Any]:
        """Get current initialization status"""
        status: Dict[str, Any] = {
            "initialized": self._initialized,
            "ready": self.is_ready(),
            "search_gateway": type(self.search_gateway).__name__ if self.search_gateway else None,
            "storage": None,
        }
        if self.repository is not None:
            get_repo_status = getattr(self.repository, "get_status", None)
            status["storage"] = get_repo_status() if get_repo_status else {
                "backend": type(self.repository).__name__
            }
        return status

    def reset(self) -> None:
        """Drop the wired collaborators so the next initialize() rebuilds them"""
        self.repository = None
        self.search_gateway = None
        self.catalog_service = None
        self._initialized = False


# Global singleton instance
app_state = AppState()


def get_app_state() -> AppState:
    """
    FastAPI dependency to access app state.

    Usage in routers:
        @router.get("/example")
        def example(state: AppState = Depends(get_app_state)):
            ...
    """
    return app_state


def get_catalog_service() -> CatalogService:
    """
    FastAPI dependency to access the catalog service.

    Raises 503 until the lifespan handler has finished wiring the app.
    """
    if not app_state.is_ready():
        raise HTTPException(status_code=503, detail="Service not ready")
    return app_state.catalog_service


@asynccontextmanager
async def lifespan_handler(app):
    """
    FastAPI lifespan context manager for startup/shutdown.

    Usage in main.py:
        app = FastAPI(lifespan=lifespan_handler)
    """
    logger.info("FastAPI starting up...")
    await app_state.initialize()

    yield  # App is now running

    logger.info("FastAPI shutting down...")
    if app_state.search_gateway is not None:
        app_state.search_gateway.close()
    logger.info("Shutdown complete")
