"""
Segmentation session for Jiezi.

A Tokenizer owns one Dictionary, one unknown-word fallback and a script
mode, and drives the full pipeline: script blocks, then the dictionary
strategies or verbatim rules per block.
"""

import logging
import threading
from pathlib import Path
from typing import Iterator, List, Optional, Union

from jiezi import segment
from jiezi.dag import DAG, get_dag
from jiezi.dictionary import Dictionary
from jiezi.errors import DictionaryLoadError
from jiezi.fallback import FallbackLike, as_fallback
from jiezi.loader import Source, load_dictionary, load_userdict
from jiezi.models import SegmentationResult, Token
from jiezi.route import Route, calc
from jiezi.script import Block, BlockKind, ScriptMode, iter_blocks, split_skip
from jiezi.search import expand_for_search, iter_grams
from jiezi.settings import CJK, DICT_PATH

logger = logging.getLogger(__name__)


def _as_text(sentence) -> str:
    if isinstance(sentence, str):
        return sentence
    if isinstance(sentence, (bytes, bytearray)):
        return bytes(sentence).decode("utf-8")
    raise TypeError(f"Expected str or utf-8 bytes, got {type(sentence).__name__}")


class Tokenizer:
    """
    Chinese word segmentation session.

    The dictionary is loaded lazily on first use from ``dictionary``
    (a path), unless a ready Dictionary object is given.

    Example:
        >>> tk = Tokenizer("dict.txt")
        >>> tk.lcut("我来到北京清华大学")
        ['我', '来到', '北京', '清华大学']
    """

    def __init__(self, dictionary: Union[None, str, Path, Dictionary] = None,
                 fallback: FallbackLike = None,
                 mode: Optional[ScriptMode] = None,
                 seed_path: Optional[Union[str, Path]] = None):
        self.lock = threading.RLock()
        self.fallback = as_fallback(fallback)
        self.mode = mode if mode is not None else ScriptMode.from_name(CJK)
        self.seed_path = seed_path
        self.user_dicts: List[str] = []

        if isinstance(dictionary, Dictionary):
            self.dictionary_path = None
            self._dictionary: Optional[Dictionary] = dictionary
            self.initialized = True
        else:
            self.dictionary_path = Path(dictionary) if dictionary else DICT_PATH
            self._dictionary = None
            self.initialized = False

    def __repr__(self):
        return f"<Tokenizer dictionary={str(self.dictionary_path)!r} mode={self.mode.value}>"

    # ------------------------------------------------------------------
    # Dictionary management
    # ------------------------------------------------------------------

    def initialize(self, dictionary_path: Optional[Union[str, Path]] = None) -> None:
        """
        Load the dictionary if it is not loaded yet.

        Args:
            dictionary_path: Switch to this dictionary before loading.

        Raises:
            DictionaryLoadError: If the dictionary cannot be loaded.
        """
        with self.lock:
            if dictionary_path is not None:
                path = Path(dictionary_path)
                if path != self.dictionary_path:
                    self.dictionary_path = path
                    self.initialized = False
            if self.initialized:
                return
            self._dictionary = load_dictionary(self.dictionary_path, self.seed_path)
            self.initialized = True

    def check_initialized(self) -> None:
        if not self.initialized:
            self.initialize()

    @property
    def dictionary(self) -> Dictionary:
        self.check_initialized()
        return self._dictionary

    def set_dictionary(self, dictionary_path: Union[str, Path]) -> None:
        """Point the session at another dictionary; loaded on next use."""
        path = Path(dictionary_path)
        if not path.is_file():
            raise DictionaryLoadError(path, "file does not exist")
        with self.lock:
            self.dictionary_path = path
            self.seed_path = None
            self.initialized = False
        logger.info(f"Dictionary set to {path}")

    def load_userdict(self, source: Source) -> int:
        """
        Add words from a user dictionary (WORD [FREQ] per line).

        Returns:
            Number of entries added.
        """
        count = load_userdict(self.dictionary, source)
        if isinstance(source, (str, Path)):
            name = str(source)
        else:
            name = getattr(source, "name", repr(source))
        self.user_dicts.append(name)
        return count

    def add_word(self, word: str, freq: Optional[float] = None) -> None:
        """Add a word, or change its count. freq defaults to 1.0."""
        self.dictionary.add_word(_as_text(word), freq)

    def del_word(self, word: str) -> bool:
        """Remove a word from the dictionary."""
        return self.dictionary.del_word(_as_text(word))

    # ------------------------------------------------------------------
    # Graph access
    # ------------------------------------------------------------------

    def get_dag(self, sentence: str) -> DAG:
        dictionary = self.dictionary
        with dictionary.lock:
            return get_dag(dictionary, _as_text(sentence))

    def calc(self, sentence: str, dag: Optional[DAG] = None) -> Route:
        """Route table for a sentence, building its DAG when not given."""
        sentence = _as_text(sentence)
        dictionary = self.dictionary
        with dictionary.lock:
            if dag is None:
                dag = get_dag(dictionary, sentence)
            return calc(dictionary.model, sentence, dag)

    # ------------------------------------------------------------------
    # Segmentation
    # ------------------------------------------------------------------

    def blocks(self, sentence: str) -> List[Block]:
        return list(iter_blocks(_as_text(sentence), self.mode))

    def _cut_block(self, block: Block, cut_all: bool, hmm: bool) -> List[str]:
        if block.is_dictionary:
            if cut_all:
                return segment.cut_all(self.dictionary, block.text)
            if hmm:
                return segment.cut_dag(self.dictionary, block.text, self.fallback)
            return segment.cut_dag_no_hmm(self.dictionary, block.text)
        if block.kind is BlockKind.SKIP:
            return list(split_skip(block.text, cut_all))
        # ascii, punctuation and hangul blocks pass through whole
        return [block.text]

    def _segment(self, sentence: str, cut_all: bool, hmm: bool) -> List[str]:
        """Segment a whole sentence; the caller holds the dictionary lock."""
        words = []
        for block in iter_blocks(sentence, self.mode):
            words.extend(self._cut_block(block, cut_all, hmm))
        return words

    def cut(self, sentence: str, cut_all: bool = False, hmm: bool = True) -> Iterator[str]:
        """
        Segment text into words.

        The whole sentence is segmented against one dictionary state on
        the first ``next()``; later dictionary changes do not affect the
        tokens still to be yielded.

        Args:
            sentence: Text to segment (str, or utf-8 bytes).
            cut_all: Emit every dictionary word (overlapping) instead of
                the single best path.
            hmm: Send unknown character runs to the fallback segmenter.

        Yields:
            Tokens in order. Unless cut_all is set they concatenate back
            to the input.
        """
        yield from self.lcut(sentence, cut_all, hmm)

    def lcut(self, sentence: str, cut_all: bool = False, hmm: bool = True) -> List[str]:
        sentence = _as_text(sentence)
        dictionary = self.dictionary
        with dictionary.lock:
            return self._segment(sentence, cut_all, hmm)

    def cut_for_search(self, sentence: str, hmm: bool = True) -> Iterator[str]:
        """Segment text, adding the known bigrams and trigrams of long words."""
        yield from self.lcut_for_search(sentence, hmm)

    def lcut_for_search(self, sentence: str, hmm: bool = True) -> List[str]:
        sentence = _as_text(sentence)
        dictionary = self.dictionary
        with dictionary.lock:
            words = self._segment(sentence, False, hmm)
            return list(expand_for_search(dictionary, words))

    def tokenize(self, sentence: str, mode: str = "default", hmm: bool = True) -> List[Token]:
        """
        Segment text and report character offsets.

        Args:
            sentence: Text to segment.
            mode: "default", or "search" to add contained n-grams.
            hmm: Use the fallback segmenter for unknown runs.

        Returns:
            Token models with start/end offsets into the input.
        """
        if mode not in ("default", "search"):
            raise ValueError(f"Unknown tokenize mode: {mode!r}")

        sentence = _as_text(sentence)
        dictionary = self.dictionary
        tokens = []
        start = 0
        with dictionary.lock:
            for word in self._segment(sentence, False, hmm):
                width = len(word)
                if mode == "search":
                    for gram, offset in iter_grams(dictionary, word):
                        tokens.append(Token(word=gram, start=start + offset,
                                            end=start + offset + len(gram)))
                tokens.append(Token(word=word, start=start, end=start + width))
                start += width
        return tokens

    def analyze(self, sentence: str, mode: str = "default", hmm: bool = True) -> SegmentationResult:
        """Tokenize text into a SegmentationResult."""
        sentence = _as_text(sentence)
        return SegmentationResult.from_tokens(sentence, self.tokenize(sentence, mode, hmm))
