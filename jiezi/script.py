"""
Script classification for Jiezi.

Splits raw text into maximal blocks of one kind each. Text that no
pattern claims becomes a skip block, so the blocks always concatenate
back to the input.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator


class ScriptMode(Enum):
    """Which scripts are segmented with the dictionary."""
    STANDARD = "chinese"   # Han, with embedded ASCII words
    CJK = "all"            # Han + Hiragana, Katakana; Hangul detected

    @classmethod
    def from_name(cls, name: str) -> "ScriptMode":
        name = (name or "").lower()
        if name in ("all", "cjk", "cjk-superset"):
            return cls.CJK
        if name in ("chinese", "standard", ""):
            return cls.STANDARD
        raise ValueError(f"Unknown script mode: {name!r}")


class BlockKind(Enum):
    HAN = "han"
    KATAKANA = "katakana"
    HANGUL = "hangul"
    ASCII = "ascii"
    PUNCT = "punct"
    SKIP = "skip"


# Kinds handed to the dictionary segmenter
DICTIONARY_KINDS = frozenset({BlockKind.HAN, BlockKind.KATAKANA})


@dataclass(frozen=True)
class Block:
    text: str
    kind: BlockKind

    @property
    def is_dictionary(self) -> bool:
        return self.kind in DICTIONARY_KINDS


# ============================================================================
# Patterns
# ============================================================================

HAN_CHARS = "\u4e00-\u9fa5"
HIRAGANA_CHARS = "\u3040-\u309f"
KATAKANA_CHARS = "\u30a0-\u30ff"
HANGUL_CHARS = "\uac00-\ud7af"
ASCII_CHARS = "a-zA-Z0-9+#&=._"
PUNCT_CHARS = (
    "～！（）『「」』"
    "、：；，？。"
)

# A Han run may carry ASCII word characters on either side, but a pure
# ASCII run is an ascii block.
HAN_WITH_ASCII = f"[{ASCII_CHARS}]*[{HAN_CHARS}][{HAN_CHARS}{ASCII_CHARS}]*"

_ASCII = f"(?P<ascii>[{ASCII_CHARS}]+)"
_PUNCT = f"(?P<punct>[{PUNCT_CHARS}]+)"

BLOCK_PATTERNS: Dict[ScriptMode, "re.Pattern"] = {
    ScriptMode.STANDARD: re.compile(
        f"(?P<han>{HAN_WITH_ASCII})|{_ASCII}|{_PUNCT}"
    ),
    ScriptMode.CJK: re.compile(
        f"(?P<han>[{HIRAGANA_CHARS}{HAN_CHARS}]+)"
        f"|(?P<katakana>[{KATAKANA_CHARS}]+)"
        f"|(?P<hangul>[{HANGUL_CHARS}]+)"
        f"|{_ASCII}|{_PUNCT}"
    ),
}

RE_SKIP = re.compile(r"(\s+)")
RE_WHITESPACE = re.compile(r"\s+")

# Route steps containing any of these are buffered together when
# segmenting without the fallback
RE_ENG = re.compile(r"[a-zA-Z0-9+#]+")


# ============================================================================
# Splitting
# ============================================================================

def iter_blocks(text: str, mode: ScriptMode = ScriptMode.STANDARD) -> Iterator[Block]:
    """
    Split text into classified blocks.

    Args:
        text: Input text.
        mode: Script mode selecting the dictionary script.

    Yields:
        Non-empty Block objects in text order.

    Example:
        >>> [(b.text, b.kind.value) for b in iter_blocks("Hello 世界!")]
        [('Hello', 'ascii'), (' ', 'skip'), ('世界', 'han'), ('!', 'skip')]
    """
    pos = 0
    for m in BLOCK_PATTERNS[mode].finditer(text):
        start, end = m.span()
        if start == end:
            continue
        if start > pos:
            yield Block(text[pos:start], BlockKind.SKIP)
        yield Block(m.group(), BlockKind(m.lastgroup))
        pos = end
    if pos < len(text):
        yield Block(text[pos:], BlockKind.SKIP)



def split_skip(text: str, cut_all: bool = False) -> Iterator[str]:
    """
    Tokenize a skip block.

    Whitespace runs come out whole. Anything else comes out one
    character at a time, or whole in full enumeration mode.
    """
    if RE_WHITESPACE.fullmatch(text):
        yield text
        return

    for span in RE_SKIP.split(text):
        if not span:
            continue
        if RE_WHITESPACE.fullmatch(span) or cut_all:
            yield span
        else:
            yield from span
