from __future__ import annotations

from collections.abc import MutableMapping, MutableSet
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, Optional

from subhash.functors import key_hash

HashFn = Callable[[Any], int]


class _Key:
    """Wraps a key so that dict/set bucket it by `hash_fn` instead of the builtin hash."""

    __slots__ = ("key", "_hash")

    def __init__(self, key: Hashable, hash_fn: HashFn):
        self.key = key
        self._hash = hash_fn(key)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other) -> bool:
        return isinstance(other, _Key) and self.key == other.key

    def __repr__(self) -> str:
        return repr(self.key)


class HashedSet(MutableSet):
    """A set whose buckets come from a seeded hash functor (by default `key_hash`)."""

    def __init__(self, iterable: Iterable = (), hash_fn: HashFn = key_hash):
        self._hash_fn = hash_fn
        self._items = set()
        for item in iterable:
            self.add(item)

    def _wrap(self, item) -> _Key:
        return _Key(item, self._hash_fn)

    def __contains__(self, item) -> bool:
        return self._wrap(item) in self._items

    def __iter__(self) -> Iterator:
        return (k.key for k in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, item) -> None:
        self._items.add(self._wrap(item))

    def discard(self, item) -> None:
        self._items.discard(self._wrap(item))

    def _from_iterable(self, it):
        # Set operators (&, |, -, ^) build their result through this
        return type(self)(it, hash_fn=self._hash_fn)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class HashedDict(MutableMapping):
    """A dict whose buckets come from a seeded hash functor (by default `key_hash`)."""

    def __init__(self, mapping: Any = (), hash_fn: HashFn = key_hash):
        self._hash_fn = hash_fn
        self._items: Dict[_Key, Any] = {}
        self.update(mapping)

    def _wrap(self, key) -> _Key:
        return _Key(key, self._hash_fn)

    def __getitem__(self, key):
        try:
            return self._items[self._wrap(key)]
        except KeyError:
            raise KeyError(key) from None

    def __setitem__(self, key, value) -> None:
        self._items[self._wrap(key)] = value

    def __delitem__(self, key) -> None:
        try:
            del self._items[self._wrap(key)]
        except KeyError:
            raise KeyError(key) from None

    def __iter__(self) -> Iterator:
        return (k.key for k in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def increment(self, key, amount: int = 1) -> int:
        """freq[key]++ in one lookup; missing keys start at 0."""
        wrapped = self._wrap(key)
        value = self._items.get(wrapped, 0) + amount
        self._items[wrapped] = value
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.items())!r})"


def counter(keys: Iterable, hash_fn: Optional[HashFn] = None) -> HashedDict:
    """Count occurrences of each key."""
    freq = HashedDict(hash_fn=hash_fn or key_hash)
    for key in keys:
        freq.increment(key)
    return freq
