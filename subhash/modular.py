from __future__ import annotations

# Python ints never overflow, so a*b needs no wide intermediate type even for
# moduli close to 2^63.


def mul_mod(a: int, b: int, m: int) -> int:
    return (a * b) % m


def sub_mod(a: int, b: int, m: int) -> int:
    """(a - b) mod m, always in [0, m) even when a < b."""
    return (a - b) % m


def mod_inverse(a: int, m: int) -> int:
    """
    Multiplicative inverse of a under a PRIME modulus m, via Fermat's little theorem: a^(m-2) = a^-1 (mod m).

    The prime-ness of m is on the caller. For a composite m you get a number back but it means nothing.
    """
    if a % m == 0:
        raise ZeroDivisionError(f"{a} has no inverse modulo {m}")
    return pow(a, m - 2, m)  # Square-and-multiply, O(log m)


# Witnesses that make Miller-Rabin deterministic for every n < 3.3 * 10^24
_MILLER_RABIN_WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)


def is_probable_prime(n: int) -> bool:
    """Miller-Rabin with fixed witnesses; exact for anything a 64-bit modulus can hold."""
    if n < 2:
        return False
    for p in _MILLER_RABIN_WITNESSES:
        if n % p == 0:
            return n == p

    # n - 1 = d * 2^s with d odd
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for a in _MILLER_RABIN_WITNESSES:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = mul_mod(x, x, n)
            if x == n - 1:
                break
        else:
            return False
    return True
