from __future__ import annotations

import logging
import numbers
import threading
import time
from typing import Iterable, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

# Python's own hash(int) is the identity for small ints, so anyone who knows that can hand a hash table keys that all
# land in one bucket. Every functor below goes through a mixer keyed by a random per-process seed instead.

MASK64 = (1 << 64) - 1
GOLDEN_GAMMA = 0x9E3779B97F4A7C15  # splitmix64 increment
COMBINE_CONSTANT = 0x9E3779B9  # boost::hash_combine constant

_seed_lock = threading.Lock()
_seed: Optional[int] = None


def _process_seed() -> int:
    """The seed is drawn once, on first use, and then only read. Later callers skip the lock."""
    global _seed
    seed = _seed
    if seed is None:
        with _seed_lock:
            if _seed is None:
                _seed = time.monotonic_ns() & MASK64
                logger.debug("Established hash seed for this process")
            seed = _seed
    return seed


def splitmix64(x: int) -> int:
    """Avalanche mixer: flipping one input bit flips about half of the 64 output bits."""
    x = (x + GOLDEN_GAMMA) & MASK64
    x = ((x ^ (x >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
    x = ((x ^ (x >> 27)) * 0x94D049BB133111EB) & MASK64
    return x ^ (x >> 31)


def int_hash(x: int) -> int:
    """Seeded 64-bit hash of an integer. Negative values are taken as their 64-bit two's complement."""
    return splitmix64((int(x) + _process_seed()) & MASK64)


def pair_hash(p: Tuple[int, int]) -> int:
    """Order-sensitive: pair_hash((a, b)) != pair_hash((b, a)) for a != b (barring a 2^-64 accident)."""
    first, second = p
    return int_hash(first) ^ ((int_hash(second) << 1) & MASK64)


def sequence_hash(v: Iterable[int]) -> int:
    """Fold the elements in order like boost::hash_combine. The empty sequence hashes to 0."""
    h = 0
    for x in v:
        h ^= (int_hash(x) + COMBINE_CONSTANT + (h << 6) + (h >> 2)) & MASK64
    return h


def key_hash(key: Union[int, Sequence[int]]) -> int:
    """Pick the functor by the shape of the key: int, 2-tuple, or any other sequence of ints."""
    if isinstance(key, numbers.Integral):
        return int_hash(key)
    if isinstance(key, tuple) and len(key) == 2:
        return pair_hash(key)
    return sequence_hash(key)
