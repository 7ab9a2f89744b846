"""
Dictionary loading for Jiezi.

Reads the plain-text frequency lists and the JSON trie seed that
together make up a dictionary.

Dictionary format, one entry per line:
    WORD FREQUENCY [TAG]

User dictionaries use the same format with FREQUENCY optional.
"""

import io
import json
import logging
import time
from pathlib import Path
from typing import IO, Iterator, Optional, Tuple, Union

from jiezi.dictionary import Dictionary
from jiezi.errors import DictionaryLoadError
from jiezi.settings import DATA_DIR, DEFAULT_USER_FREQ, DICT_NAMES, DICT_URLS, seed_path_for
from jiezi.trie import DictionaryStore

logger = logging.getLogger(__name__)

Source = Union[str, Path, IO]


# ============================================================================
# Text dictionaries
# ============================================================================

def _open_lines(source: Source) -> Tuple[str, Iterator[str]]:
    """Return (name, lines) for a path or an open file."""
    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise DictionaryLoadError(path, e.strerror or str(e)) from e
        name = str(path)
    else:
        name = getattr(source, "name", repr(source))
        data = source.read()

    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DictionaryLoadError(name, "dictionary file must be utf-8") from e

    return name, iter(io.StringIO(data.lstrip("\ufeff")))


def iter_entries(source: Source, default_freq: Optional[float] = None) -> Iterator[Tuple[str, float]]:
    """
    Parse dictionary lines into (word, frequency) pairs.

    Args:
        source: Path or open file (text or binary, utf-8).
        default_freq: Frequency for lines without one. When None a
            missing frequency is an error.

    Yields:
        (word, freq) tuples in file order. Blank lines are skipped.

    Raises:
        DictionaryLoadError: If the file cannot be read or a line
            cannot be parsed.
    """
    name, lines = _open_lines(source)
    for lineno, line in enumerate(lines, 1):
        line = line.strip()
        if not line:
            continue

        parts = line.split()
        word = parts[0]
        if len(parts) > 1:
            try:
                freq = float(parts[1])
            except ValueError:
                raise DictionaryLoadError(name, f"invalid frequency {parts[1]!r}", lineno)
        elif default_freq is not None:
            freq = default_freq
        else:
            raise DictionaryLoadError(name, f"missing frequency for {word!r}", lineno)

        if freq < 0:
            raise DictionaryLoadError(name, f"negative frequency for {word!r}", lineno)
        yield word, freq


# ============================================================================
# Trie seed
# ============================================================================

def load_seed(path: Union[str, Path]) -> DictionaryStore:
    """
    Load a JSON trie seed.

    Raises:
        DictionaryLoadError: If the file is unreadable or not a JSON object.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise DictionaryLoadError(path, e.strerror or str(e)) from e
    except ValueError as e:
        raise DictionaryLoadError(path, f"invalid trie seed: {e}") from e

    if not isinstance(data, dict):
        raise DictionaryLoadError(path, "trie seed must be a JSON object")
    return DictionaryStore(data)


def build_seed(dict_path: Union[str, Path], seed_path: Optional[Union[str, Path]] = None) -> Path:
    """
    Write the JSON trie seed for a text dictionary.

    Args:
        dict_path: Main dictionary file.
        seed_path: Output path. Defaults to the dictionary path + ".json".

    Returns:
        Path of the written seed.
    """
    dict_path = Path(dict_path)
    seed_path = Path(seed_path) if seed_path else seed_path_for(dict_path)

    t0 = time.perf_counter()
    store = DictionaryStore()
    count = 0
    for word, _ in iter_entries(dict_path):
        store.insert_word(word)
        count += 1

    seed_path.parent.mkdir(parents=True, exist_ok=True)
    with open(seed_path, "w", encoding="utf-8") as f:
        f.write(store.to_json())

    logger.info(f"Wrote trie seed for {count} words to {seed_path} "
                f"in {time.perf_counter() - t0:.3f}s")
    return seed_path


# ============================================================================
# Dictionaries
# ============================================================================

def load_dictionary(dict_path: Union[str, Path],
                    seed_path: Optional[Union[str, Path]] = None) -> Dictionary:
    """
    Build a Dictionary from a frequency list and its trie seed.

    The seed gives the trie structure and the text file the counts.
    Without a seed file the structure is derived from the listed words.

    Args:
        dict_path: Main dictionary file (WORD FREQ per line).
        seed_path: JSON trie seed. Defaults to the dictionary path + ".json".

    Returns:
        A ready-to-use Dictionary.

    Raises:
        DictionaryLoadError: If either file cannot be loaded.
    """
    dict_path = Path(dict_path)
    explicit_seed = seed_path is not None
    seed_path = Path(seed_path) if explicit_seed else seed_path_for(dict_path)

    logger.debug(f"Building prefix dict from {dict_path} ...")
    t0 = time.perf_counter()

    if seed_path.exists() or explicit_seed:
        store = load_seed(seed_path)
        mark_words = False
    else:
        logger.warning(f"No trie seed at {seed_path}, deriving structure from {dict_path.name}")
        store = DictionaryStore()
        mark_words = True

    dictionary = Dictionary(store=store, name=dict_path.name)
    count = dictionary.update(iter_entries(dict_path), mark_words=mark_words)

    logger.debug(f"Loading model cost {time.perf_counter() - t0:.3f} seconds.")
    logger.info(f"Loaded {count} words from {dict_path}")
    return dictionary


def load_userdict(dictionary: Dictionary, source: Source) -> int:
    """
    Add a user dictionary to an existing Dictionary.

    Every word becomes a trie terminal; missing counts default to
    DEFAULT_USER_FREQ.

    Returns:
        Number of entries added.
    """
    # Parse fully first: a bad line must leave the dictionary untouched
    entries = list(iter_entries(source, default_freq=DEFAULT_USER_FREQ))
    count = dictionary.update(entries)
    logger.info(f"Loaded {count} user words into {dictionary.name or 'dictionary'}")
    return count


# ============================================================================
# Downloads
# ============================================================================

def download_dictionary(size: str = "normal",
                        target_dir: Optional[Union[str, Path]] = None) -> Path:
    """
    Download a full dictionary and build its trie seed.

    Args:
        size: "normal" or "big".
        target_dir: Where to save it. Defaults to the package data directory.

    Returns:
        Path of the downloaded dictionary.

    Raises:
        ValueError: If size has no download location.
    """
    import urllib.request

    if size not in DICT_URLS:
        raise ValueError(f"No download for dictionary size {size!r} "
                         f"(expected one of {', '.join(DICT_URLS)})")

    url = DICT_URLS[size]
    target = Path(target_dir or DATA_DIR) / DICT_NAMES[size]
    target.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Downloading {size} dictionary from {url}...")
    urllib.request.urlretrieve(url, str(target))
    logger.info(f"Saved to {target}")

    build_seed(target)
    return target
