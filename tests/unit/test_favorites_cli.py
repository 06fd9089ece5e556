"""Unit tests for the favorites CLI."""
import json
from unittest.mock import patch

import pytest

from movie_catalog.cli import favorites as cli
from movie_catalog.models import Movie, SearchResult


@pytest.fixture
def favorites_path(tmp_path):
    return tmp_path / "favorites.json"


def run(favorites_path, *args) -> int:
    return cli.main(["--favorites", str(favorites_path), *args])


class TestFavoritesCli:

    def test_add_list_remove(self, favorites_path, capsys):
        assert run(favorites_path, "add", "--imdb-id", "tt0133093", "--title", "The Matrix", "--year", "1999") == 0
        assert json.loads(favorites_path.read_text())[0]["imdbID"] == "tt0133093"

        assert run(favorites_path, "list") == 0
        out = capsys.readouterr().out
        assert "tt0133093  The Matrix (1999)" in out
        assert "Page 1/1 (1 shown, 1 total)" in out

        assert run(favorites_path, "remove", "tt0133093") == 0
        assert json.loads(favorites_path.read_text()) == []

    def test_duplicate_add_fails(self, favorites_path, capsys):
        run(favorites_path, "add", "--imdb-id", "tt1", "--title", "One")

        assert run(favorites_path, "add", "--imdb-id", "TT1", "--title", "One again") == 1
        assert "Error (duplicate)" in capsys.readouterr().out

    def test_remove_unknown_fails(self, favorites_path, capsys):
        assert run(favorites_path, "remove", "tt404") == 1
        assert "Error (not_found)" in capsys.readouterr().out

    def test_invalid_page_size_fails(self, favorites_path):
        assert run(favorites_path, "list", "--page-size", "0") == 1

    def test_search_stars_favorites(self, favorites_path, capsys):
        run(favorites_path, "add", "--imdb-id", "tt0096895", "--title", "Batman")
        result = SearchResult(
            movies=[
                Movie(title="Batman Begins", imdb_id="tt0372784", year="2005"),
                Movie(title="Batman", imdb_id="tt0096895", year="1989"),
            ],
            total_results=2,
        )

        with patch.object(cli, "OMDb_API") as mock_api:
            mock_api.return_value.search.return_value = result
            assert run(favorites_path, "search", "batman") == 0

        out = capsys.readouterr().out
        assert "  tt0372784  Batman Begins (2005)" in out
        assert "* tt0096895  Batman (1989)" in out
        mock_api.return_value.search.assert_called_once_with("batman", 1)
