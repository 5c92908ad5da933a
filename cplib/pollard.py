"""
Factorization of 64-bit integers.

Responsibility: modular arithmetic, deterministic Miller-Rabin and
Pollard-rho, composed into a full prime factorization.
This file must not know about sieves or lookup tables.

Values are integers in [0, 2^64). Entry points convert their arguments
with operator.index, so numpy integers from the sieves work unchanged and
never reach fixed-width arithmetic. The unchecked functions trust the
range; the checked_* variants validate first.
"""

from collections import Counter
from math import gcd
from operator import index
from typing import List, Tuple

U64_LIMIT = 1 << 64

# Deterministic bases, sufficient for every n < 3.3e24.
MILLER_RABIN_BASES = (2, 325, 9375, 28178, 450775, 9780504, 1795265022)

# Pollard-rho accumulates |x - y| for GCD_BATCH steps between gcd calls.
# The counter starts at GCD_FIRST_CHECK so small inputs get an early check.
GCD_BATCH = 40
GCD_FIRST_CHECK = 30


class InvalidInputError(ValueError):
    """Raised by the checked_* variants on out-of-contract arguments."""


def modmul(a: int, b: int, m: int) -> int:
    """Return (a * b) mod m for 0 <= a, b <= m < 2^64."""
    return index(a) * index(b) % index(m)


def modpow(b: int, e: int, m: int) -> int:
    """
    Compute b^e mod m by square-and-multiply.

    Parameters
    ----------
    b : int
        Base, 0 <= b <= m.
    e : int
        Exponent, e >= 0. e = 0 returns 1.
    m : int
        Modulus, m > 0.

    Returns
    -------
    int
        b^e mod m.
    """
    b, e, m = index(b), index(e), index(m)
    result = 1
    while e:
        if e & 1:
            result = modmul(result, b, m)
        b = modmul(b, b, m)
        e >>= 1
    return result


def is_prime(n: int) -> bool:
    """
    Deterministic Miller-Rabin test for 0 <= n < 2^64.

    Parameters
    ----------
    n : int
        Integer to test.

    Returns
    -------
    bool
        True iff n is prime.

    Note
    ----
    Every prime above 3 is 6k+-1, i.e. n % 6 % 4 == 1. Anything else is
    prime only when it is 2 or 3, which is what (n | 1) == 3 checks.
    """
    n = index(n)
    if n < 2 or n % 6 % 4 != 1:
        return (n | 1) == 3

    s = ((n - 1) & (1 - n)).bit_length() - 1  # trailing zeros of n - 1
    d = n >> s

    for a in MILLER_RABIN_BASES:
        a %= n
        if a == 0:
            continue
        x = modpow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s):
            x = modmul(x, x, n)
            if x == n - 1:
                break
            if x == 1:
                return False
        else:
            return False
    return True


def find_factor(n: int) -> int:
    """
    Find a nontrivial divisor of composite n > 2 with Pollard-rho.

    Floyd cycle detection on f(x) = x^2 + 1 over residues in [1, n], with
    the differences |x - y| multiplied together and a single gcd taken
    every GCD_BATCH steps.

    Parameters
    ----------
    n : int
        Composite integer, n > 2.

    Returns
    -------
    int
        d with 1 < d < n and d | n.
    """
    n = index(n)

    def f(v):
        return modmul(v, v, n) + 1

    x = y = 0
    t = GCD_FIRST_CHECK
    prd = 2  # even start makes n = 4 work
    start = 1

    while t % GCD_BATCH or gcd(prd, n) == 1:
        t += 1
        if x == y:
            start += 1
            x = start
            y = f(x)
        q = modmul(prd, abs(x - y), n)
        if q:
            prd = q
        x = f(x)
        y = f(f(y))
    return gcd(prd, n)


def factorize(n: int) -> List[int]:
    """
    Return the prime factors of n with multiplicity, in arbitrary order.

    factorize(1) is []. n = 0 is not allowed and will not terminate;
    use checked_factorize for untrusted input.
    """
    n = index(n)
    if n == 1:
        return []
    if is_prime(n):
        return [n]

    d = find_factor(n)
    assert 1 < d < n, f"find_factor({n}) returned trivial divisor {d}"
    return factorize(d) + factorize(n // d)


def factor_counts(n: int) -> List[Tuple[int, int]]:
    """
    Return the factorization of n as (prime, exponent) pairs sorted by prime.

    Same shape as factorization.factor_from_spf, without needing a table.
    """
    return sorted(Counter(factorize(n)).items())


def _require_u64(name: str, value) -> int:
    """Return value as an int, or raise InvalidInputError."""
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be an integer, got {type(value).__name__}")
    try:
        value = index(value)
    except TypeError:
        raise InvalidInputError(f"{name} must be an integer, got {type(value).__name__}") from None
    if not 0 <= value < U64_LIMIT:
        raise InvalidInputError(f"{name} = {value} is outside [0, 2^64)")
    return value


def checked_modmul(a, b, m) -> int:
    """modmul with argument validation."""
    a, b, m = (_require_u64(name, value) for name, value in (('a', a), ('b', b), ('m', m)))
    if m == 0:
        raise InvalidInputError("modulus must be positive")
    return modmul(a % m, b % m, m)


def checked_modpow(b, e, m) -> int:
    """modpow with argument validation."""
    b, e, m = (_require_u64(name, value) for name, value in (('b', b), ('e', e), ('m', m)))
    if m == 0:
        raise InvalidInputError("modulus must be positive")
    return modpow(b % m, e, m)


def checked_factorize(n) -> List[int]:
    """factorize with argument validation; n must be in [1, 2^64)."""
    n = _require_u64('n', n)
    if n == 0:
        raise InvalidInputError("cannot factorize 0")
    return factorize(n)
