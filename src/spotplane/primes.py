# -----------------------------------------------------------------------------
#  primes.py
#  Primality and prime-power decomposition of deck orders
# -----------------------------------------------------------------------------

from __future__ import annotations

from math import isqrt

from sympy import isprime


def is_prime(n: int) -> bool:
    """True for primes; fails closed (False) for anything below 2."""
    if n < 2:
        return False
    return bool(isprime(n))


def get_prime_power(n: int) -> tuple[int, int] | None:
    """
    Return the unique (p, k) with n = p**k, or None when n is not a prime power.

    Trial division up to isqrt(n): the first prime that divides n is stripped
    completely and the cofactor must be exactly 1. When nothing up to the root
    divides n, n is a prime power only if it is itself prime (k = 1).

        >>> get_prime_power(8)
        (2, 3)
        >>> get_prime_power(6) is None
        True
    """
    if n < 2:
        return None

    p = 2
    limit = isqrt(n)
    while p <= limit:
        if n % p == 0:
            k = 0
            rest = n
            while rest % p == 0:
                rest //= p
                k += 1
            # any other prime factor means n is not a pure power of p
            return (p, k) if rest == 1 else None
        p = 3 if p == 2 else p + 2

    return (n, 1) if is_prime(n) else None


def is_prime_power(n: int) -> bool:
    return get_prime_power(n) is not None
