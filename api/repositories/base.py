"""
Base Repository - Abstract interface for the favorites collection

This defines the contract that all favorites storage implementations must
follow. Implementations must be safe to call from several request threads at
once and must never lose a mutation.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from movie_catalog.models import Movie


class BaseFavoritesRepository(ABC):
    """Abstract base class for favorites storage"""

    @abstractmethod
    def find_all(self) -> List[Movie]:
        """
        Get all favorite movies, in insertion order.
        """
        pass

    @abstractmethod
    def find_by_imdb_id(self, imdb_id: str) -> Optional[Movie]:
        """
        Find a favorite by IMDb id (case-insensitive).

        Returns:
            The stored movie, or None if absent
        """
        pass

    def exists(self, imdb_id: str) -> bool:
        """Check if a movie is in favorites (case-insensitive)"""
        return self.find_by_imdb_id(imdb_id) is not None

    @abstractmethod
    def save(self, movie: Movie) -> Movie:
        """
        Append a movie to favorites and persist it.

        Raises:
            DuplicateError: If the IMDb id is already stored
            StorageFailure: If the write did not reach the durable medium
        """
        pass

    @abstractmethod
    def remove(self, imdb_id: str) -> Optional[Movie]:
        """
        Remove a favorite by IMDb id (case-insensitive).

        Returns:
            The removed movie, or None if nothing matched

        Raises:
            StorageFailure: If the write did not reach the durable medium
        """
        pass

    def count(self) -> int:
        """Total number of favorites"""
        return len(self.find_all())
