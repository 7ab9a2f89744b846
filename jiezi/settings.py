"""
Settings and configuration for Jiezi.

Paths, dictionary selection and segmentation constants, with
environment variable overrides.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# Dictionary file names by size. Only the small one ships with the
# package; `jiezi download` fetches the others.
DICT_NAMES = {
    "small": "dict.small.txt",
    "normal": "dict.txt",
    "big": "dict.big.txt",
}

# Download locations for the full dictionaries
DICT_URLS = {
    "normal": "https://raw.githubusercontent.com/fxsjy/jieba/master/jieba/dict.txt",
    "big": "https://raw.githubusercontent.com/fxsjy/jieba/master/extra_dict/dict.txt.big",
}

# Which dictionary to use (small, normal, big). Unset: normal once it has
# been downloaded, the bundled small dictionary otherwise.
DICT_SIZE = os.environ.get("JIEZI_DICT_SIZE", "").lower()
if DICT_SIZE not in DICT_NAMES:
    DICT_SIZE = "normal" if (DATA_DIR / DICT_NAMES["normal"]).exists() else "small"

# Main dictionary path
DEFAULT_DICT_PATH = DATA_DIR / DICT_NAMES[DICT_SIZE]

# Environment variable for custom dictionary path
DICT_PATH = Path(os.environ.get("JIEZI_DICT_PATH", DEFAULT_DICT_PATH))

# Trie seed lives beside the dictionary: dict.txt -> dict.txt.json
SEED_SUFFIX = ".json"

# Script mode: "chinese" (Han + ASCII) or "all" (Han, kana and Hangul)
CJK = os.environ.get("JIEZI_CJK", "chinese").lower()

# Debug mode
DEBUG = os.environ.get("JIEZI_DEBUG", "").lower() in ("1", "true", "yes")

# Log-probability used for zero-frequency words and empty models
MIN_FLOAT = -3.14e100

# Frequency given to user dictionary words without a count
DEFAULT_USER_FREQ = 1.0

# Path delimiter for dotted trie access
KEY_DELIMITER = "."

# Marker key for a node that completes a word
END_KEY = "end"


def seed_path_for(dict_path) -> Path:
    """Return the trie seed path that belongs to a dictionary file."""
    dict_path = Path(dict_path)
    return dict_path.with_name(dict_path.name + SEED_SUFFIX)
