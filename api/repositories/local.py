"""
Local File Repository - JSON file implementation of the favorites store

Favorites live in a single JSON array on disk (settings.favorites_path).
The file is the source of truth: every call re-reads it, and mutations run
reload + mutate + write inside one lock so concurrent requests in this process
never lose each other's updates. Writes go through a temp file and an atomic
replace, so lock-free readers never see a half-written file.

Only one process may write the file (single writer deployment).
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from movie_catalog.exceptions import DuplicateError, StorageFailure
from movie_catalog.io.readers import read_json
from movie_catalog.io.writers import atomic_write_json
from movie_catalog.models import Movie
from movie_catalog.settings import get_settings
from api.repositories.base import BaseFavoritesRepository

logger = logging.getLogger(__name__)


class LocalFileRepository(BaseFavoritesRepository):
    """Favorites repository backed by a local JSON file"""

    def __init__(self, favorites_path: Optional[Path] = None):
        self.settings = get_settings()
        self.favorites_path = Path(favorites_path or self.settings.favorites_path)
        self._lock = threading.Lock()

        # Create the file (or heal it) up front so problems show at startup
        with self._lock:
            movies = self._load_locked()

        logger.info(
            f"LocalFileRepository initialized with {len(movies)} favorites at {self.favorites_path}"
        )

    # ---- reading ----

    def _parse_records(self, data: List[Any]) -> List[Movie]:
        """Keep well-formed movie records, dropping anything else."""
        movies: List[Movie] = []
        seen = set()
        for item in data:
            if not (
                isinstance(item, dict)
                and isinstance(item.get("imdbID"), str)
                and isinstance(item.get("title"), str)
            ):
                logger.warning(f"Ignoring malformed favorites record: {item!r}")
                continue
            try:
                movie = Movie.model_validate(item)
            except PydanticValidationError as e:
                logger.warning(f"Ignoring malformed favorites record {item!r}: {e}")
                continue
            if movie.key in seen:
                logger.warning(f"Ignoring duplicate favorites record: {movie.imdb_id}")
                continue
            seen.add(movie.key)
            movies.append(movie)
        return movies

    def _read(self) -> Optional[List[Movie]]:
        """
        Read the favorites file.

        Returns:
            The stored movies, or None when the file is missing or does not
            hold a JSON array (caller decides whether to create/heal it)

        Raises:
            StorageFailure: If an existing file cannot be read
        """
        try:
            data = read_json(self.favorites_path)
        except FileNotFoundError:
            return None
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            logger.warning(f"Favorites file {self.favorites_path} is not valid JSON: {e}")
            return None
        except OSError as e:
            logger.error(f"Failed to read favorites from {self.favorites_path}: {e}")
            raise StorageFailure("Failed to read favorites from file") from e

        if not isinstance(data, list):
            logger.warning(
                "Favorites file contains invalid data, starting with empty array"
            )
            return None

        return self._parse_records(data)

    def _load_locked(self) -> List[Movie]:
        """Read the file, creating or self-healing it as an empty list. Caller holds the lock."""
        movies = self._read()
        if movies is None:
            existed = self.favorites_path.exists()
            self._write([])
            if existed:
                logger.warning(f"Reset malformed favorites file {self.favorites_path} to empty")
            else:
                logger.info(f"Created new favorites file at {self.favorites_path}")
            movies = []
        return movies

    def _load(self) -> List[Movie]:
        """Lock-free read; only takes the lock when the file needs creating or healing."""
        movies = self._read()
        if movies is None:
            with self._lock:
                movies = self._load_locked()
        return movies

    # ---- writing ----

    def _write(self, movies: List[Movie]) -> None:
        try:
            atomic_write_json([movie.to_record() for movie in movies], self.favorites_path)
        except OSError as e:
            logger.error(f"Failed to save favorites to {self.favorites_path}: {e}")
            raise StorageFailure("Failed to save favorites to file") from e
        logger.debug(f"Favorites saved to {self.favorites_path}")

    # ---- repository contract ----

    def find_all(self) -> List[Movie]:
        return list(self._load())

    def find_by_imdb_id(self, imdb_id: str) -> Optional[Movie]:
        key = imdb_id.lower()
        return next((m for m in self._load() if m.key == key), None)

    def save(self, movie: Movie) -> Movie:
        with self._lock:
            movies = self._load_locked()
            if any(m.key == movie.key for m in movies):
                raise DuplicateError(movie.imdb_id)
            movies.append(movie)
            self._write(movies)
        return movie

    def remove(self, imdb_id: str) -> Optional[Movie]:
        key = imdb_id.lower()
        with self._lock:
            movies = self._load_locked()
            index = next((i for i, m in enumerate(movies) if m.key == key), None)
            if index is None:
                return None
            removed = movies.pop(index)
            self._write(movies)
        return removed

    def count(self) -> int:
        return len(self._load())

    def get_status(self) -> Dict[str, Any]:
        """Storage details for the health endpoint"""
        return {
            "backend": "local_file",
            "path": str(self.favorites_path),
            "exists": self.favorites_path.exists(),
        }
