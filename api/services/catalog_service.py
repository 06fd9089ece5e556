"""
Catalog Service - Core business logic for movie search and favorites

Bridges the API layer with the search gateway and the favorites repository:
annotates search hits with their favorite status and implements the
add / remove / paginate use cases with their validation rules.
"""

import logging
import math
from typing import Any, Optional

from movie_catalog.adapters.base import BaseSearchGateway
from movie_catalog.exceptions import DuplicateError, NotFoundError, ValidationError
from movie_catalog.models import (
    AnnotatedMovie,
    AnnotatedSearchResult,
    FavoritesPage,
    Movie,
)
from api.repositories.base import BaseFavoritesRepository

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def _is_positive_int(value: Any) -> bool:
    # bool is an int subclass; True must not pass as page 1
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _require_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


class CatalogService:
    """Orchestrates the search gateway and the favorites repository."""

    def __init__(
        self,
        search_gateway: Optional[BaseSearchGateway],
        favorites: BaseFavoritesRepository,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self._search_gateway = search_gateway
        self._favorites = favorites
        self._max_page_size = max_page_size

    @property
    def max_page_size(self) -> int:
        return self._max_page_size

    def search_movies(self, title: str, page: int) -> AnnotatedSearchResult:
        """
        Search movies by title and flag the ones already in favorites.

        Args:
            title: Search query (surrounding whitespace ignored)
            page: 1-based page number

        Returns:
            AnnotatedSearchResult; total_results is the provider's count

        Raises:
            ValidationError: Empty title or non-positive page
            ExternalTimeout, InvalidCredential, ExternalFailure: from the gateway
        """
        query = _require_text(title)
        if not query:
            raise ValidationError("Search query is required")
        if not _is_positive_int(page):
            raise ValidationError("Page must be a positive integer")

        if self._search_gateway is None:
            raise RuntimeError("No search gateway configured")

        logger.debug(f"Searching movies with title: \"{query}\", page: {page}")
        result = self._search_gateway.search(query, page)

        # One snapshot of the favorites instead of one file read per hit
        favorite_keys = {movie.key for movie in self._favorites.find_all()}
        annotated = [
            AnnotatedMovie(movie=movie, is_favorite=movie.key in favorite_keys)
            for movie in result.movies
        ]

        return AnnotatedSearchResult(movies=annotated, total_results=result.total_results)

    def add_to_favorites(self, movie: Movie) -> Movie:
        """
        Add a movie to favorites.

        Raises:
            ValidationError: Missing imdbID or title
            DuplicateError: Movie already in favorites (never overwritten)
            StorageFailure: The favorites file could not be written
        """
        imdb_id = _require_text(movie.imdb_id)
        title = _require_text(movie.title)
        if not imdb_id or not title:
            raise ValidationError("Movie must have imdbID and title")

        if self._favorites.exists(imdb_id):
            raise DuplicateError(imdb_id)

        movie_to_save = Movie(
            title=title,
            imdb_id=imdb_id,
            year=movie.year,
            poster=movie.poster,
        )

        saved_movie = self._favorites.save(movie_to_save)
        logger.info(f"Added movie to favorites: {saved_movie.imdb_id}")
        return saved_movie

    def remove_from_favorites(self, imdb_id: str) -> Movie:
        """
        Remove a movie from favorites.

        Raises:
            ValidationError: Empty IMDb id
            NotFoundError: Movie not in favorites
            StorageFailure: The favorites file could not be written
        """
        key = _require_text(imdb_id)
        if not key:
            raise ValidationError("Movie ID is required")

        removed_movie = self._favorites.remove(key)
        if removed_movie is None:
            raise NotFoundError(key)

        logger.info(f"Removed movie from favorites: {key}")
        return removed_movie

    def get_favorites(self, page: int, page_size: int) -> FavoritesPage:
        """
        Get one page of favorites.

        A page past the end is not an error: it comes back with no items and
        the usual metadata, so a client paging after a deletion degrades
        gracefully. An empty collection reports total_pages = 0.

        Raises:
            ValidationError: page < 1 or page_size outside [1, max_page_size]
        """
        if not _is_positive_int(page):
            raise ValidationError("Page must be a positive integer")
        if not _is_positive_int(page_size) or page_size > self._max_page_size:
            raise ValidationError(f"Page size must be between 1 and {self._max_page_size}")

        all_favorites = self._favorites.find_all()
        total_count = len(all_favorites)

        if total_count == 0:
            return FavoritesPage(
                items=[],
                count=0,
                total_results=0,
                current_page=page,
                total_pages=0,
            )

        start_index = (page - 1) * page_size
        items = all_favorites[start_index:start_index + page_size]

        return FavoritesPage(
            items=items,
            count=len(items),
            total_results=total_count,
            current_page=page,
            total_pages=math.ceil(total_count / page_size),
        )
