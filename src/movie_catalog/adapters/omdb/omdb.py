# Folder in charge of OMDb API interactions
from movie_catalog.adapters.base import BaseSearchGateway
from movie_catalog.adapters.omdb.client import OMDb_APIClient
from movie_catalog.exceptions import ExternalFailure
from movie_catalog.models import Movie, SearchResult
from typing import Any, Dict, List, Optional
import logging


logger = logging.getLogger(__name__)

# OMDb uses this placeholder for unknown year/poster values
MISSING_VALUE = "N/A"


def _clean(value: Any) -> str:
    if value is None:
        return ""
    text = str(value).strip()
    return "" if text == MISSING_VALUE else text


def parse_total_results(raw: Any) -> int:
    """OMDb reports totalResults as a numeric string."""
    if raw is None or raw == "":
        return 0
    try:
        total = int(raw)
    except (TypeError, ValueError) as e:
        raise ExternalFailure(f"Unexpected totalResults value from OMDb: {raw!r}") from e
    if total < 0:
        raise ExternalFailure(f"Unexpected totalResults value from OMDb: {raw!r}")
    return total


def to_movie(item: Dict[str, Any]) -> Optional[Movie]:
    """Map one entry of OMDb's ``Search`` array to a domain Movie."""
    imdb_id = _clean(item.get("imdbID"))
    title = _clean(item.get("Title"))
    if not imdb_id or not title:
        logger.warning(f"Skipping OMDb entry without imdbID/Title: {item}")
        return None
    return Movie(
        title=title,
        imdb_id=imdb_id,
        year=_clean(item.get("Year")),
        poster=_clean(item.get("Poster")),
    )


class OMDb_API(BaseSearchGateway):
    """Wrapper class for OMDb API interactions"""
    def __init__(self, client: Optional[OMDb_APIClient] = None):
        self._client: OMDb_APIClient = client or OMDb_APIClient()

    def search(self, title: str, page: int) -> SearchResult:
        """Searches OMDb by title and returns one page of domain movies"""
        response = self._client.get(params={'s': title, 'page': page, 'plot': 'full'})

        if not isinstance(response, dict):
            raise ExternalFailure("OMDb API returned an unexpected payload")

        if response.get("Response") == "False" or response.get("Error"):
            logger.debug(f"No results for query \"{title}\": {response.get('Error')}")
            return SearchResult.empty()

        raw_movies = response.get("Search") or []
        if not isinstance(raw_movies, list):
            raise ExternalFailure("OMDb API returned an unexpected payload")

        movies: List[Movie] = []
        for item in raw_movies:
            if not isinstance(item, dict):
                continue
            movie = to_movie(item)
            if movie is not None:
                movies.append(movie)

        total_results = parse_total_results(response.get("totalResults"))
        logger.debug(f"OMDb returned {len(movies)} movies for \"{title}\" (page {page}, total {total_results})")
        return SearchResult(movies=movies, total_results=total_results)

    def close(self) -> None:
        self._client.close()
