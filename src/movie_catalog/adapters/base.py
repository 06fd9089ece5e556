"""
Search Gateway - Abstract interface for external movie search providers

The catalog service only depends on this contract, so the OMDb adapter can be
swapped for another provider (or a fake in tests).
"""

from abc import ABC, abstractmethod

from movie_catalog.models import SearchResult


class BaseSearchGateway(ABC):
    """Abstract base class for movie search providers"""

    @abstractmethod
    def search(self, title: str, page: int) -> SearchResult:
        """
        Search movies by title.

        Args:
            title: Non-empty, already trimmed query
            page: 1-based page number

        Returns:
            SearchResult with the provider's page of movies and its total count.
            A provider-side "no results" answer is an empty SearchResult.

        Raises:
            ExternalTimeout: Provider unreachable or timed out
            InvalidCredential: Provider rejected the API key
            ExternalFailure: Any other transport or parse failure
        """
        pass

    def close(self) -> None:
        """Release network resources (no-op by default)"""
        pass
