"""
Tests for loader.py - dictionary files and trie seeds.
"""

import io
import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from jiezi.errors import DictionaryLoadError
from jiezi.loader import (
    build_seed, download_dictionary, iter_entries, load_dictionary, load_seed, load_userdict,
)
from jiezi.settings import DATA_DIR, DICT_NAMES, DICT_URLS, seed_path_for

from tests.conftest import SAMPLE_WORDS, write_dict


class TestIterEntries:
    """Tests for line parsing."""

    def test_parse(self, tmp_path):
        path = write_dict(tmp_path / "d.txt", [("研究", 10), ("生命", 6.5)])
        assert list(iter_entries(path)) == [("研究", 10.0), ("生命", 6.5)]

    def test_blank_lines_and_whitespace(self, tmp_path):
        path = tmp_path / "d.txt"
        path.write_text("  研究 10  \n\n生命 6\n", encoding="utf-8")
        assert list(iter_entries(path)) == [("研究", 10.0), ("生命", 6.0)]

    def test_tag_column_ignored(self, tmp_path):
        path = tmp_path / "d.txt"
        path.write_text("研究 10 vn\n", encoding="utf-8")
        assert list(iter_entries(path)) == [("研究", 10.0)]

    def test_bom_ignored(self, tmp_path):
        path = tmp_path / "d.txt"
        path.write_bytes("\ufeff研究 10\n".encode("utf-8"))
        assert list(iter_entries(path)) == [("研究", 10.0)]

    def test_missing_frequency_is_error(self, tmp_path):
        path = tmp_path / "d.txt"
        path.write_text("研究 10\n生命\n", encoding="utf-8")
        with pytest.raises(DictionaryLoadError) as exc_info:
            list(iter_entries(path))
        assert exc_info.value.lineno == 2

    def test_missing_frequency_defaults(self, tmp_path):
        path = tmp_path / "d.txt"
        path.write_text("生命\n", encoding="utf-8")
        assert list(iter_entries(path, default_freq=1.0)) == [("生命", 1.0)]

    def test_invalid_frequency(self, tmp_path):
        path = tmp_path / "d.txt"
        path.write_text("研究 lots\n", encoding="utf-8")
        with pytest.raises(DictionaryLoadError):
            list(iter_entries(path))

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(DictionaryLoadError):
            list(iter_entries(tmp_path / "missing.txt"))

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "d.txt"
        path.write_bytes("研究 10\n".encode("gbk"))
        with pytest.raises(DictionaryLoadError):
            list(iter_entries(path))

    def test_file_objects(self):
        assert list(iter_entries(io.StringIO("研究 10\n"))) == [("研究", 10.0)]
        assert list(iter_entries(io.BytesIO("研究 10\n".encode("utf-8")))) == [("研究", 10.0)]


class TestSeed:
    """Tests for trie seed building and loading."""

    def test_build_seed(self, sample_dict_path):
        seed = build_seed(sample_dict_path)
        assert seed == seed_path_for(sample_dict_path)
        data = json.loads(seed.read_text(encoding="utf-8"))
        assert data["清"]["华"]["end"] == ""
        assert data["清"]["华"]["大"]["学"] == {"end": ""}

    def test_load_seed(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text('{"研": {"究": {"end": ""}}}', encoding="utf-8")
        assert load_seed(path).is_word("研.究")

    def test_invalid_seed(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(DictionaryLoadError):
            load_seed(path)
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(DictionaryLoadError):
            load_seed(path)


class TestLoadDictionary:
    """Tests for load_dictionary and load_userdict."""

    def test_without_seed_derives_structure(self, sample_dict_path, caplog):
        with caplog.at_level(logging.WARNING, logger="jiezi.loader"):
            d = load_dictionary(sample_dict_path)
        assert "No trie seed" in caplog.text
        assert len(d) == len(SAMPLE_WORDS)
        assert d.store.is_word(("清", "华", "大", "学"))
        assert d.total == sum(freq for _, freq in SAMPLE_WORDS)

    def test_with_seed_uses_seed_structure(self, tmp_path):
        dict_path = write_dict(tmp_path / "dict.txt", [("研究", 10), ("生命", 6)])
        build_seed(dict_path)
        # A word only in the frequency list has a count but no trie path
        write_dict(dict_path, [("研究", 10), ("生命", 6), ("研究生", 8)])
        d = load_dictionary(dict_path)
        assert d.is_word("研究生")
        assert d.resolve("研究生") == (False, False)
        assert d.resolve("研究") == (True, True)

    def test_explicit_missing_seed(self, sample_dict_path, tmp_path):
        with pytest.raises(DictionaryLoadError):
            load_dictionary(sample_dict_path, tmp_path / "nope.json")

    def test_duplicate_lines_counted_once(self, tmp_path):
        path = write_dict(tmp_path / "dict.txt", [("研究", 10), ("生命", 6), ("研究", 4)])
        d = load_dictionary(path)
        assert d.total == 10.0
        assert d.model.frequency("研究") == 4.0

    def test_userdict(self, sample_dict_path, tmp_path):
        d = load_dictionary(sample_dict_path)
        user = write_dict(tmp_path / "user.txt", [("鬼灭之刃", None), ("研究生", 8)])
        assert load_userdict(d, user) == 2
        assert d.model.frequency("鬼灭之刃") == 1.0
        assert d.resolve("鬼灭之刃") == (True, True)

    def test_bad_userdict_leaves_dictionary_untouched(self, sample_dict_path, tmp_path):
        d = load_dictionary(sample_dict_path)
        user = tmp_path / "user.txt"
        user.write_text("鬼灭之刃 3\n研究生 many\n", encoding="utf-8")
        with pytest.raises(DictionaryLoadError):
            load_userdict(d, user)
        assert "鬼灭之刃" not in d
        assert len(d) == len(SAMPLE_WORDS)


def _fake_urlretrieve(url, target):
    write_dict(Path(target), [("研究", 10), ("生命", 6)])
    return target, None


class TestDownload:
    """Tests for download_dictionary and the bundled dictionary."""

    def test_download_builds_seed(self, tmp_path):
        with patch("urllib.request.urlretrieve", side_effect=_fake_urlretrieve) as fetch:
            path = download_dictionary("normal", tmp_path)
        assert path == tmp_path / DICT_NAMES["normal"]
        assert fetch.call_args[0][0] == DICT_URLS["normal"]
        assert seed_path_for(path).exists()
        assert load_dictionary(path).resolve("生命") == (True, True)

    def test_download_unknown_size(self, tmp_path):
        with pytest.raises(ValueError):
            download_dictionary("small", tmp_path)

    def test_bundled_dictionary_has_seed(self, caplog):
        path = DATA_DIR / DICT_NAMES["small"]
        assert seed_path_for(path).exists()
        with caplog.at_level(logging.WARNING, logger="jiezi.loader"):
            d = load_dictionary(path)
        assert "No trie seed" not in caplog.text
        for word in d.model:
            assert d.resolve(word) == (True, True)
