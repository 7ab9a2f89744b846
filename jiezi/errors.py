"""
Exceptions raised by Jiezi.
"""


class JieziError(Exception):
    """Base class for all Jiezi errors."""


class DictionaryLoadError(JieziError):
    """Raised when a dictionary or trie seed cannot be read or parsed."""

    def __init__(self, path, reason: str, lineno=None):
        self.path = str(path)
        self.reason = reason
        self.lineno = lineno
        where = f"{self.path}:{lineno}" if lineno is not None else self.path
        super().__init__(f"Could not load dictionary {where}: {reason}")


class KeyNotFound(JieziError, KeyError):
    """Raised when a trie path has no node."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Could not find key in trie: {path!r}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidStructure(JieziError, ValueError):
    """Raised when a value cannot be stored at a trie path without losing data."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid trie structure at {path!r}: {reason}")
