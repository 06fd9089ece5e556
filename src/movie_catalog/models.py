"""
Domain models for movie search and favorites.

Field names are Pythonic; aliases match the JSON layout used in the favorites
file and on the wire (``imdbID``, ``totalResults``, ...).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Movie(BaseModel):
    """
    A movie as stored in the favorites collection.

    Identity is the IMDb id, compared case-insensitively. Whether the movie
    is a favorite is not part of this record, see AnnotatedMovie.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(..., description="Movie title")
    imdb_id: str = Field(..., alias="imdbID", description="IMDb identifier (unique key)")
    year: str = Field("", description="Release year, may be empty")
    poster: str = Field("", description="Poster URL, may be empty")

    @field_validator("year", "poster", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Optional[str]) -> str:
        return "" if value is None else value

    @property
    def key(self) -> str:
        """Case-insensitive identity used for uniqueness checks"""
        return self.imdb_id.lower()

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)


class AnnotatedMovie(BaseModel):
    """Search hit projected with its current favorite status (never persisted)."""

    model_config = ConfigDict(frozen=True)

    movie: Movie
    is_favorite: bool = False


class SearchResult(BaseModel):
    """One page of provider results. total_results counts all pages."""

    movies: List[Movie] = Field(default_factory=list)
    total_results: int = Field(0, ge=0)

    @classmethod
    def empty(cls) -> "SearchResult":
        return cls(movies=[], total_results=0)


class AnnotatedSearchResult(BaseModel):
    movies: List[AnnotatedMovie] = Field(default_factory=list)
    total_results: int = Field(0, ge=0)


class FavoritesPage(BaseModel):
    """A slice of the favorites collection plus pagination metadata."""

    items: List[Movie] = Field(default_factory=list)
    count: int = Field(..., ge=0, description="Items in this page")
    total_results: int = Field(..., ge=0, description="Size of the whole collection")
    current_page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0, description="0 when the collection is empty")
