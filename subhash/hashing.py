from __future__ import annotations

import logging
from typing import Callable, Sequence, Tuple, Union

import numpy as np  # Table storage and prefix sums P[i] = P[i-1] + term[i]

from subhash.modular import is_probable_prime, mod_inverse, mul_mod, sub_mod

logger = logging.getLogger(__name__)

DEFAULT_BASE = 31  # Common choices are 31 or 131
DEFAULT_MODULI = (1000000009, 100000007)  # Two primes => double hashing

# Every table value is < m, so (value % m) * power stays below 2^62 and a cumulative sum
# of n terms stays inside int64 for any string we could hold in memory.
MAX_MODULUS = 2**31

CharCode = Callable[[Union[str, int]], int]


def lowercase_code(c: Union[str, int]) -> int:
    """
    Map 'a' -> 1, 'b' -> 2, ..., 'z' -> 26. Bytes (which iterate as ints) map b'a' -> 1 the same way.

    Zero is skipped on purpose: a character with code 0 contributes nothing to the polynomial, so "a" and "\\0a"
    would hash the same. Anything outside a-z is rejected, use `ordinal_code` for wider alphabets.
    """
    code = ord(c) if isinstance(c, str) and len(c) == 1 else c
    if not isinstance(code, int) or not (ord("a") <= code <= ord("z")):
        raise ValueError(f"character {c!r} is outside a-z; pass char_code=ordinal_code for arbitrary text")
    return code - ord("a") + 1


def ordinal_code(c: Union[str, int]) -> int:
    """Map any code point (or raw byte, when hashing bytes) to its value + 1."""
    return (ord(c) if isinstance(c, str) else c) + 1


class Hashing:
    """
    Polynomial prefix hashes of one fixed string under several prime moduli.

    hash(s[l..r]) = (P[r] - P[l-1]) * base^-l  (mod m)

    where P[j] = sum_{i <= j} code(s[i]) * base^i. The raw difference P[r] - P[l-1] is scaled by base^l because every
    character is weighted by its absolute position, so we multiply by the inverse power to make equal substrings at
    different offsets hash the same.

    Preprocessing is O(n * k) for k moduli and each query is O(k). Two equal hash tuples mean the substrings are equal
    with high probability, not with certainty: per modulus a pair of distinct substrings collides with probability
    about 1/m, and independent moduli multiply those probabilities.

    Tables (rows follow the order of `moduli`):
        prefix_hash     shape (k, n)      P[j] mod m
        base_power      shape (k, n + 1)  base^j mod m
        inv_base_power  shape (k, n + 1)  base^-j mod m

    All of them are read-only numpy arrays, and there is no method that changes the instance after construction, so
    a single instance can be queried from many threads at once.
    """

    def __init__(
        self,
        text: Union[str, bytes],
        base: int = DEFAULT_BASE,
        moduli: Sequence[int] = DEFAULT_MODULI,
        char_code: CharCode = lowercase_code,
        validate_moduli: bool = False,
    ):
        moduli = tuple(int(m) for m in moduli)
        if not moduli:
            raise ValueError("at least one modulus is required")
        for m in moduli:
            if not (1 < m < MAX_MODULUS):
                raise ValueError(f"modulus {m} must lie in (1, {MAX_MODULUS})")
            if base % m == 0:
                raise ValueError(f"base {base} is not invertible modulo {m}")
            if validate_moduli and not is_probable_prime(m):
                raise ValueError(f"modulus {m} is not prime")

        self.text = text
        self.n: int = len(text)
        self.base: int = base
        self.moduli: Tuple[int, ...] = moduli
        self.char_code: CharCode = char_code

        codes = np.array([char_code(c) for c in text], dtype=np.int64)
        self.base_power = np.empty((len(moduli), self.n + 1), dtype=np.int64)
        self.inv_base_power = np.empty((len(moduli), self.n + 1), dtype=np.int64)
        self.prefix_hash = np.empty((len(moduli), self.n), dtype=np.int64)

        for i, m in enumerate(moduli):
            powers, inverses = self._powers(m)
            self.base_power[i] = powers
            self.inv_base_power[i] = inverses

            # Each term is reduced before the sum so the running total never leaves int64
            terms = (codes % m) * self.base_power[i, : self.n] % m
            self.prefix_hash[i] = np.cumsum(terms) % m

        for table in (self.base_power, self.inv_base_power, self.prefix_hash):
            table.flags.writeable = False

        logger.debug("Built hashing tables for n=%d base=%d moduli=%s", self.n, base, moduli)

    def _powers(self, m: int) -> Tuple[list, list]:
        """base^j and base^-j mod m for j = 0..n, with a single modular inverse."""
        powers = [1] * (self.n + 1)
        for j in range(1, self.n + 1):
            powers[j] = mul_mod(self.base, powers[j - 1], m)

        # Only the top inverse is computed with Fermat; below it base^-j = base^-(j+1) * base.
        # That keeps the whole table O(n) instead of O(n log m).
        inverses = [1] * (self.n + 1)
        inverses[self.n] = mod_inverse(powers[self.n], m)
        for j in range(self.n - 1, -1, -1):
            inverses[j] = mul_mod(inverses[j + 1], self.base, m)
        return powers, inverses

    def __len__(self) -> int:
        return self.n

    def _check_range(self, l: int, r: int) -> None:
        if not (0 <= l <= r < self.n):
            raise IndexError(f"substring [{l}, {r}] is out of range for a string of length {self.n}")

    def _hash_under(self, i: int, l: int, r: int) -> int:
        """Hash of text[l..r] (inclusive) under the i-th modulus; bounds already checked."""
        m = self.moduli[i]
        right = int(self.prefix_hash[i, r])
        left = int(self.prefix_hash[i, l - 1]) if l > 0 else 0
        return mul_mod(sub_mod(right, left, m), int(self.inv_base_power[i, l]), m)

    def substring_hash(self, l: int, r: int) -> Tuple[int, ...]:
        """Hash of text[l..r], inclusive on both ends, as one value per modulus (same order as `moduli`)."""
        self._check_range(l, r)
        return tuple(self._hash_under(i, l, r) for i in range(len(self.moduli)))

    def substring_hash_pair(self, l: int, r: int) -> Tuple[int, int]:
        """Same values as `substring_hash`, skipping the generic loop. Requires exactly two moduli."""
        if len(self.moduli) != 2:
            raise ValueError(f"substring_hash_pair needs exactly 2 moduli, this instance has {len(self.moduli)}")
        self._check_range(l, r)
        return self._hash_under(0, l, r), self._hash_under(1, l, r)

    def equal(self, l1: int, r1: int, l2: int, r2: int) -> bool:
        """Whether text[l1..r1] == text[l2..r2], up to hash collisions."""
        if r1 - l1 != r2 - l2:
            self._check_range(l1, r1)
            self._check_range(l2, r2)
            return False
        return self.substring_hash(l1, r1) == self.substring_hash(l2, r2)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self.n}, base={self.base}, moduli={self.moduli})"
