"""Unit tests for the JSON file favorites repository."""
import json
import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from api.repositories.local import LocalFileRepository
from movie_catalog.exceptions import DuplicateError, StorageFailure
from movie_catalog.models import Movie


@pytest.fixture
def favorites_path(tmp_path):
    return tmp_path / "data" / "favorites.json"


@pytest.fixture
def repo(favorites_path):
    return LocalFileRepository(favorites_path)


def make_movie(imdb_id: str, title: str = "Some Movie") -> Movie:
    return Movie(title=title, imdb_id=imdb_id, year="1999", poster="http://img/p.jpg")


class TestInitialization:
    """The favorites file is created empty on first use."""

    def test_creates_missing_file_and_directory(self, favorites_path):
        assert not favorites_path.parent.exists()

        LocalFileRepository(favorites_path)

        assert favorites_path.exists()
        assert json.loads(favorites_path.read_text()) == []

    def test_loads_existing_records(self, favorites_path):
        favorites_path.parent.mkdir(parents=True)
        favorites_path.write_text(json.dumps([
            {"title": "The Matrix", "imdbID": "tt0133093", "year": "1999", "poster": ""},
        ]))

        repo = LocalFileRepository(favorites_path)

        assert repo.find_all() == [Movie(title="The Matrix", imdb_id="tt0133093", year="1999")]


class TestSelfHealing:
    """Malformed data degrades to an empty collection and is rewritten."""

    def test_invalid_json_resets_to_empty(self, favorites_path):
        favorites_path.parent.mkdir(parents=True)
        favorites_path.write_text("{not json")

        repo = LocalFileRepository(favorites_path)

        assert repo.find_all() == []
        assert json.loads(favorites_path.read_text()) == []

    def test_non_list_payload_resets_to_empty(self, repo, favorites_path):
        favorites_path.write_text(json.dumps({"favorites": []}))

        assert repo.count() == 0
        assert json.loads(favorites_path.read_text()) == []

    def test_malformed_records_are_dropped(self, repo, favorites_path):
        favorites_path.write_text(json.dumps([
            {"title": "Alien", "imdbID": "tt0078748", "year": "1979", "poster": ""},
            {"title": "No id"},
            "garbage",
            {"title": 42, "imdbID": "tt1"},
        ]))

        movies = repo.find_all()

        assert [m.imdb_id for m in movies] == ["tt0078748"]

    def test_duplicate_records_keep_first(self, repo, favorites_path):
        favorites_path.write_text(json.dumps([
            {"title": "First", "imdbID": "tt0000001"},
            {"title": "Second", "imdbID": "TT0000001"},
        ]))

        movies = repo.find_all()

        assert len(movies) == 1
        assert movies[0].title == "First"


class TestQueries:

    def test_lookup_is_case_insensitive(self, repo):
        repo.save(make_movie("tt0133093"))

        assert repo.exists("TT0133093")
        assert repo.find_by_imdb_id("Tt0133093").imdb_id == "tt0133093"
        assert repo.find_by_imdb_id("tt9999999") is None
        assert not repo.exists("tt9999999")

    def test_find_all_preserves_insertion_order(self, repo):
        for imdb_id in ("a1", "a2", "a3"):
            repo.save(make_movie(imdb_id))

        assert [m.imdb_id for m in repo.find_all()] == ["a1", "a2", "a3"]
        assert repo.count() == 3


class TestMutations:

    def test_save_persists_without_favorite_flag(self, repo, favorites_path):
        repo.save(make_movie("tt0133093", title="The Matrix"))

        stored = json.loads(favorites_path.read_text())
        assert stored == [{
            "title": "The Matrix",
            "imdbID": "tt0133093",
            "year": "1999",
            "poster": "http://img/p.jpg",
        }]

    def test_save_rejects_duplicate_ids(self, repo):
        repo.save(make_movie("tt0133093"))

        with pytest.raises(DuplicateError):
            repo.save(make_movie("TT0133093", title="Other"))

        assert repo.count() == 1

    def test_remove_returns_removed_movie(self, repo):
        movie = make_movie("tt0133093")
        repo.save(movie)

        removed = repo.remove("TT0133093")

        assert removed == movie
        assert repo.count() == 0

    def test_remove_missing_returns_none(self, repo):
        assert repo.remove("tt404") is None

    def test_mutations_reload_the_file(self, favorites_path):
        """Two repositories on one file never overwrite each other's changes."""
        first = LocalFileRepository(favorites_path)
        second = LocalFileRepository(favorites_path)

        first.save(make_movie("a1"))
        second.save(make_movie("a2"))
        first.save(make_movie("a3"))

        assert [m.imdb_id for m in second.find_all()] == ["a1", "a2", "a3"]

    def test_concurrent_saves_are_not_lost(self, repo):
        ids = [f"tt{i:07d}" for i in range(25)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda i: repo.save(make_movie(i)), ids))

        assert sorted(m.imdb_id for m in repo.find_all()) == ids

    def test_concurrent_saves_of_one_id_store_it_once(self, repo):
        workers = 8
        barrier = threading.Barrier(workers)
        duplicates = []

        def add_same_movie(n):
            barrier.wait()
            try:
                repo.save(make_movie("TT0133093" if n % 2 else "tt0133093", title=f"Copy {n}"))
            except DuplicateError:
                duplicates.append(n)

        threads = [threading.Thread(target=add_same_movie, args=(n,)) for n in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert repo.count() == 1
        assert len(duplicates) == workers - 1
        assert len(json.loads(repo.favorites_path.read_text())) == 1


class TestStorageFailures:
    """Write and read errors surface as StorageFailure."""

    def test_write_failure_raises_storage_failure(self, repo):
        with patch("api.repositories.local.atomic_write_json", side_effect=OSError("disk full")):
            with pytest.raises(StorageFailure):
                repo.save(make_movie("tt0133093"))

        assert repo.count() == 0

    def test_remove_write_failure_raises_storage_failure(self, repo):
        repo.save(make_movie("tt0133093"))

        with patch("api.repositories.local.atomic_write_json", side_effect=PermissionError("read-only")):
            with pytest.raises(StorageFailure):
                repo.remove("tt0133093")

        assert repo.exists("tt0133093")

    def test_read_failure_raises_storage_failure(self, repo):
        with patch("api.repositories.local.read_json", side_effect=PermissionError("denied")):
            with pytest.raises(StorageFailure):
                repo.find_all()
