from __future__ import annotations

from typing import Optional, Union

from subhash.containers import HashedDict, HashedSet, counter
from subhash.hashing import Hashing, ordinal_code


def _engine(string: Union[str, bytes]) -> Hashing:
    # Arbitrary text, not just a-z
    return Hashing(string, char_code=ordinal_code)


def distinct_substring_hashes(hs: Hashing, length: int) -> HashedSet:
    """Hashes of every window of `length` characters, deduplicated. Windows that do not fit give an empty set."""
    assert length >= 1
    return HashedSet(hs.substring_hash(i, i + length - 1) for i in range(hs.n - length + 1))


def substring_frequencies(hs: Hashing, length: int) -> HashedDict:
    """How many times each window of `length` characters occurs, keyed by its hash."""
    assert length >= 1
    return counter(hs.substring_hash(i, i + length - 1) for i in range(hs.n - length + 1))


def shares_substring(
    string1: Union[str, bytes],
    string2: Union[str, bytes],
    substring_size: int,
    hs1: Optional[Hashing] = None,
    hs2: Optional[Hashing] = None,
) -> bool:
    """
    Check if two strings contain the same substring of length `substring_size`.

    Every window of string1 goes into a set keyed by its substring hash, then the windows of string2 are probed
    against it: O(|A| + |B|) after preprocessing. A hit is a match with high probability (see `Hashing` on
    collisions). Prebuilt engines can be passed in to skip preprocessing when asking about many lengths.
    """
    assert 0 <= substring_size
    if substring_size == 0:
        return True  # The empty string is in everything
    if substring_size > min(len(string1), len(string2)):
        return False

    hs1 = _engine(string1) if hs1 is None else hs1
    hs2 = _engine(string2) if hs2 is None else hs2
    assert (hs1.moduli, hs1.base, hs1.char_code) == (hs2.moduli, hs2.base, hs2.char_code), \
        "hashes are only comparable under the same parameters"

    seen = distinct_substring_hashes(hs1, substring_size)
    return any(
        hs2.substring_hash(j, j + substring_size - 1) in seen for j in range(len(string2) - substring_size + 1)
    )


def longest_shared_substring_length(
    string1: Union[str, bytes], string2: Union[str, bytes], max_bin_search_iters: int = 1000
) -> int:
    """
    Length of the longest substring common to both strings.

    Binary search works because sharing is monotone in the length: if two strings share a substring of length k,
    then its prefixes show they also share one of every length below k.
    """
    hs1, hs2 = _engine(string1), _engine(string2)

    # Lower bound is inclusive (known shared), top bound is exclusive (known not shared)
    k_min, k_max = 0, min(len(string1), len(string2)) + 1
    bin_search_iters = 0
    while k_max - k_min > 1:
        assert bin_search_iters <= max_bin_search_iters, "binary search failed to converge"
        bin_search_iters += 1

        k_probe = (k_max + k_min) // 2
        if shares_substring(string1, string2, k_probe, hs1, hs2):
            k_min = k_probe
        else:
            k_max = k_probe
    assert 0 <= k_min <= min(len(string1), len(string2))
    return k_min
