"""
Prefix-tree dictionary store for Jiezi.

The trie is a nested mapping keyed by single characters. A node that
completes a word holds the END_KEY marker, so the word 研究生 lives at
the path 研.究.生 as ``{"end": ""}`` next to any longer continuations.

Paths are either delimiter-joined strings ("研.究") or sequences of keys
(("研", "究")). Words are always addressed as key sequences so that a
literal delimiter inside a word is a key rather than a separator.

Leaves may hold several values: storing over an existing scalar turns
it into a list holding both, and lists keep growing on further stores.
"""

import copy
import json
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from jiezi.errors import InvalidStructure, KeyNotFound
from jiezi.settings import END_KEY, KEY_DELIMITER

TriePath = Union[str, Sequence[str]]

_MISSING = object()


# ============================================================================
# Node helpers
# ============================================================================

def _child(node: Any, key: str) -> Any:
    """Return the value under key, looking inside multi-value lists."""
    if isinstance(node, dict):
        return node.get(key, _MISSING)
    if isinstance(node, list):
        for item in node:
            if isinstance(item, dict) and key in item:
                return item[key]
    return _MISSING


def _owner(node: Any, key: str) -> Optional[dict]:
    """Return the container that directly holds key, or None."""
    if isinstance(node, dict):
        return node if key in node else None
    if isinstance(node, list):
        for item in node:
            if isinstance(item, dict) and key in item:
                return item
    return None


def is_terminal(value: Any) -> bool:
    """True if a node value marks the end of a word."""
    if isinstance(value, dict):
        return END_KEY in value
    if isinstance(value, list):
        return any(isinstance(item, dict) and END_KEY in item for item in value)
    return False


# ============================================================================
# Store
# ============================================================================

class DictionaryStore:
    """
    Nested key-value store with path access and a lookup cache.

    Every mutation clears the cache and bumps ``version``, so a cached
    lookup can never be observed after the tree has changed.
    """

    def __init__(self, data: Union[None, str, bytes, Dict[str, Any]] = None,
                 delimiter: str = KEY_DELIMITER):
        """
        Create a store.

        Args:
            data: Initial tree as a dict or a JSON object string.
            delimiter: Separator for string paths.

        Raises:
            ValueError: If a string cannot be decoded as JSON.
            TypeError: If the decoded data is not a mapping.
        """
        if data is None:
            data = {}
        if isinstance(data, (str, bytes)):
            try:
                data = json.loads(data)
            except ValueError as e:
                raise ValueError(f"Could not decode json string into trie: {e}") from e
        if not isinstance(data, dict):
            raise TypeError(f"Expected dict or JSON object, got {type(data).__name__}")

        self.storage: Dict[str, Any] = data
        self.delimiter = delimiter
        self.cache: Dict[Tuple[str, ...], Any] = {}
        # Bumped on every mutation
        self.version = 0

    def __repr__(self):
        return f"<DictionaryStore roots={len(self.storage)} cached={len(self.cache)}>"

    def _changed(self) -> None:
        self.cache.clear()
        self.version += 1

    def keys_for(self, path: TriePath) -> Tuple[str, ...]:
        """Split a path into its keys."""
        if isinstance(path, str):
            return tuple(path.split(self.delimiter))
        return tuple(path)

    def _label(self, keys: Sequence[str]) -> str:
        return self.delimiter.join(keys)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _walk(self, keys: Tuple[str, ...]) -> Any:
        if not keys:
            raise KeyNotFound("")
        node: Any = self.storage
        for key in keys:
            node = _child(node, key)
            if node is _MISSING:
                raise KeyNotFound(self._label(keys))
        return node

    def get(self, path: TriePath) -> Any:
        """
        Get the value stored at a path.

        Args:
            path: Dotted string or key sequence.

        Returns:
            The stored value (a container for inner nodes).

        Raises:
            KeyNotFound: If any key along the path is absent.
        """
        keys = self.keys_for(path)
        if keys in self.cache:
            return self.cache[keys]

        value = self._walk(keys)
        self.cache[keys] = value
        return value

    def exists(self, path: TriePath) -> bool:
        """True if the path names a node reachable from the root."""
        if self.keys_for(path) in self.cache:
            return True
        try:
            self.get(path)
        except KeyNotFound:
            return False
        return True

    def resolve(self, path: TriePath) -> Tuple[bool, bool]:
        """Return (exists, is_word) for a path."""
        try:
            value = self.get(path)
        except KeyNotFound:
            return False, False
        return True, is_terminal(value)

    def is_word(self, path: TriePath) -> bool:
        return self.resolve(path)[1]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    @staticmethod
    def _descend(node: dict, key: str, next_key: str) -> dict:
        """
        Return the container under key, creating or converting as needed.

        Inside a multi-value list the container that already holds
        next_key wins, so that set() follows the same branch as get().
        """
        child = node.get(key, _MISSING)
        if child is _MISSING:
            child = node[key] = {}
            return child
        if isinstance(child, dict):
            return child
        if isinstance(child, list):
            owner = _owner(child, next_key)
            if owner is not None:
                return owner
            for item in child:
                if isinstance(item, dict):
                    return item
            container: dict = {}
            child.append(container)
            return container
        # A scalar in the middle of a path stays, next to the new container
        container = {}
        node[key] = [child, container]
        return container

    def set(self, path: TriePath, value: Any) -> Any:
        """
        Store a value at a path.

        Missing intermediate nodes are created. An existing leaf is never
        overwritten: scalars become multi-value lists, lists are appended
        to and containers are merged with container values.

        Args:
            path: Dotted string or key sequence.
            value: Value to store.

        Returns:
            The value now held at the path.

        Raises:
            InvalidStructure: If a scalar would replace a container. The
                store is left unchanged.
        """
        keys = self.keys_for(path)
        if not keys:
            raise InvalidStructure("", "empty path")

        if isinstance(value, (dict, list)):
            value = copy.deepcopy(value)

        # Check the leaf first so a rejected store leaves no new nodes behind
        try:
            current = self._walk(keys)
        except KeyNotFound:
            current = _MISSING
        if isinstance(current, dict) and not isinstance(value, dict):
            raise InvalidStructure(self._label(keys), "cannot store a scalar over a container")

        node = self.storage
        for key, next_key in zip(keys, keys[1:]):
            node = self._descend(node, key, next_key)

        leaf = keys[-1]
        current = node.get(leaf, _MISSING)
        if current is _MISSING:
            node[leaf] = value
        elif isinstance(current, list):
            current.append(value)
        elif isinstance(current, dict):
            if not isinstance(value, dict):
                raise InvalidStructure(self._label(keys), "cannot store a scalar over a container")
            current.update(value)
        else:
            node[leaf] = [current, value]

        self._changed()
        return node[leaf]

    def remove(self, path: TriePath) -> None:
        """
        Remove the value stored at a path.

        Raises:
            KeyNotFound: If the path does not exist.
        """
        keys = self.keys_for(path)
        if not keys:
            raise KeyNotFound("")

        parent: Any = self._walk(keys[:-1]) if len(keys) > 1 else self.storage
        owner = _owner(parent, keys[-1])
        if owner is None:
            raise KeyNotFound(self._label(keys))

        del owner[keys[-1]]
        self._changed()

    # ------------------------------------------------------------------
    # Words
    # ------------------------------------------------------------------

    def insert_word(self, word: str) -> None:
        """Mark word as a complete entry."""
        self.set(tuple(word), {END_KEY: ""})

    def remove_word(self, word: str) -> bool:
        """
        Unmark word as a complete entry.

        Returns:
            True if the word was present.
        """
        keys = tuple(word)
        removed = False
        while self.is_word(keys):
            self.remove(keys + (END_KEY,))
            removed = True
        return removed

    def iter_words(self) -> Iterator[str]:
        """Yield every word in the trie, depth first."""
        stack: List[Tuple[str, Any]] = [("", self.storage)]
        while stack:
            prefix, node = stack.pop()
            containers = node if isinstance(node, list) else [node]
            for container in containers:
                if not isinstance(container, dict):
                    continue
                if prefix and END_KEY in container:
                    yield prefix
                for key, child in container.items():
                    if key == END_KEY:
                        continue
                    stack.append((prefix + key, child))

    # ------------------------------------------------------------------
    # Mapping access
    # ------------------------------------------------------------------

    def __contains__(self, path) -> bool:
        return self.exists(path)

    def __getitem__(self, path):
        return self.get(path)

    def __setitem__(self, path, value):
        self.set(path, value)

    def __delitem__(self, path):
        self.remove(path)

    def __iter__(self):
        return iter(self.storage)

    def to_json(self, **kwargs) -> str:
        """Serialize the tree; keyword arguments go to json.dumps."""
        kwargs.setdefault("ensure_ascii", False)
        return json.dumps(self.storage, **kwargs)
