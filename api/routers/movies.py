"""
Movies Router - Movie search and favorites endpoints

Domain errors (CatalogError) are not caught here; the handler registered in
api.main maps each error kind to its HTTP status.
"""

import logging
from fastapi import APIRouter, Depends, Path, Query, status

from movie_catalog.settings import get_settings
from api.dependencies import get_catalog_service
from api.schemas.movies import (
    CreateMovieRequest,
    DataResponse,
    FavoritesListResponse,
    MessageResponse,
    MovieResponse,
    SearchResultsResponse,
)
from api.services.catalog_service import CatalogService

router = APIRouter()
logger = logging.getLogger(__name__)
cfg = get_settings()

# Sync handlers: FastAPI runs them in its threadpool.


@router.get("/search", response_model=DataResponse[SearchResultsResponse])
def search_movies(
    q: str = Query("", description="Title to search for"),
    page: int = Query(1, description="Page number (1-based)"),
    service: CatalogService = Depends(get_catalog_service),
) -> DataResponse[SearchResultsResponse]:
    """
    Search movies by title, flagging the ones already in favorites.

    A blank query returns an empty result instead of an error.
    """
    if not q or not q.strip():
        return DataResponse(data=SearchResultsResponse.empty())

    result = service.search_movies(q.strip(), max(1, page))
    return DataResponse(data=SearchResultsResponse.from_domain(result))


@router.post(
    "/favorites",
    status_code=status.HTTP_201_CREATED,
    response_model=DataResponse[MessageResponse],
)
def add_to_favorites(
    request: CreateMovieRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> DataResponse[MessageResponse]:
    """Add a movie to favorites (409 if it is already there)."""
    saved_movie = service.add_to_favorites(request.to_domain())
    return DataResponse(data=MessageResponse(
        message="Movie added to favorites",
        movie=MovieResponse.from_domain(saved_movie, is_favorite=True),
    ))


@router.get("/favorites/list", response_model=DataResponse[FavoritesListResponse])
def get_favorites(
    page: int = Query(1, description="Page number (1-based)"),
    page_size: int = Query(cfg.default_page_size, alias="pageSize", description="Favorites per page"),
    service: CatalogService = Depends(get_catalog_service),
) -> DataResponse[FavoritesListResponse]:
    """
    Get a page of favorites.

    Out-of-range values are clamped (page >= 1, 1 <= pageSize <= max page size) rather
    than rejected.
    """
    valid_page = max(1, page)
    valid_page_size = min(service.max_page_size, max(1, page_size))

    result = service.get_favorites(valid_page, valid_page_size)
    return DataResponse(data=FavoritesListResponse.from_domain(result))


@router.delete("/favorites/{imdb_id}", response_model=DataResponse[MessageResponse])
def remove_from_favorites(
    imdb_id: str = Path(..., description="IMDb id of the movie to remove"),
    service: CatalogService = Depends(get_catalog_service),
) -> DataResponse[MessageResponse]:
    """Remove a movie from favorites (404 if it is not there)."""
    removed_movie = service.remove_from_favorites(imdb_id)
    logger.debug(f"Removed {removed_movie.imdb_id} via API")
    return DataResponse(data=MessageResponse(
        message="Movie removed from favorites",
        movie=MovieResponse.from_domain(removed_movie),
    ))
