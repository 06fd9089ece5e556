"""
Movie API Schemas - Request/response models for search and favorites

Wire names are camelCase (imdbID, totalResults, ...) to match the web client.
Every successful response is wrapped as {"data": ...}.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from movie_catalog.models import (
    AnnotatedMovie,
    AnnotatedSearchResult,
    FavoritesPage,
    Movie,
)

T = TypeVar("T")


class CreateMovieRequest(BaseModel):
    """Body of POST /movies/favorites. Strings are trimmed before validation."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: str = Field(..., min_length=1, description="Movie title")
    imdb_id: str = Field(..., alias="imdbID", min_length=1, description="IMDb identifier")
    year: Optional[str] = Field(None, description="Release year")
    poster: Optional[str] = Field(None, description="Poster URL")
    is_favorite: Optional[bool] = Field(
        None,
        alias="isFavorite",
        description="Accepted for client convenience, never stored",
    )

    @field_validator("title", "imdb_id", "year", "poster", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    def to_domain(self) -> Movie:
        return Movie(
            title=self.title,
            imdb_id=self.imdb_id,
            year=self.year or "",
            poster=self.poster or "",
        )


class MovieResponse(BaseModel):
    """A movie as returned to clients"""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    imdb_id: str = Field(..., alias="imdbID")
    year: str
    poster: str
    is_favorite: bool = Field(False, alias="isFavorite")

    @classmethod
    def from_domain(cls, movie: Movie, is_favorite: bool = False) -> "MovieResponse":
        return cls(
            title=movie.title,
            imdb_id=movie.imdb_id,
            year=movie.year,
            poster=movie.poster,
            is_favorite=is_favorite,
        )

    @classmethod
    def from_annotated(cls, hit: AnnotatedMovie) -> "MovieResponse":
        return cls.from_domain(hit.movie, is_favorite=hit.is_favorite)


class SearchResultsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    movies: List[MovieResponse] = Field(..., description="Movies on this page")
    count: int = Field(..., description="Movies in this response")
    total_results: int = Field(..., alias="totalResults", description="Matches across all pages")

    @classmethod
    def from_domain(cls, result: AnnotatedSearchResult) -> "SearchResultsResponse":
        movies = [MovieResponse.from_annotated(hit) for hit in result.movies]
        return cls(movies=movies, count=len(movies), total_results=result.total_results)

    @classmethod
    def empty(cls) -> "SearchResultsResponse":
        return cls(movies=[], count=0, total_results=0)


class FavoritesListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    favorites: List[MovieResponse]
    count: int
    total_results: int = Field(..., alias="totalResults")
    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")

    @classmethod
    def from_domain(cls, page: FavoritesPage) -> "FavoritesListResponse":
        # Everything listed here is a favorite by definition
        return cls(
            favorites=[MovieResponse.from_domain(m, is_favorite=True) for m in page.items],
            count=page.count,
            total_results=page.total_results,
            current_page=page.current_page,
            total_pages=page.total_pages,
        )


class MessageResponse(BaseModel):
    message: str
    movie: Optional[MovieResponse] = None


class DataResponse(BaseModel, Generic[T]):
    """Envelope used by every successful response"""

    data: T


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(..., alias="statusCode")
    error: str = Field(..., description="Error kind, e.g. 'duplicate'")
    message: str
