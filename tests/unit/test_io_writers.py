"""Unit tests for the atomic JSON writer."""
import json

import pytest

from movie_catalog.io.writers import atomic_write_json


class TestAtomicWriteJson:

    def test_writes_pretty_json_and_creates_parents(self, tmp_path):
        out = tmp_path / "nested" / "favorites.json"

        atomic_write_json([{"imdbID": "tt1", "title": "Été"}], out)

        assert json.loads(out.read_text(encoding="utf-8")) == [{"imdbID": "tt1", "title": "Été"}]
        assert '\n  {' in out.read_text(encoding="utf-8")
        assert not (tmp_path / "nested" / "favorites.json.tmp").exists()

    def test_failed_write_leaves_no_temp_file_and_keeps_target(self, tmp_path):
        out = tmp_path / "favorites.json"
        out.write_text("[]", encoding="utf-8")

        with pytest.raises(TypeError):
            atomic_write_json([{"imdbID": object()}], out)

        assert not (tmp_path / "favorites.json.tmp").exists()
        assert out.read_text(encoding="utf-8") == "[]"
