"""
Smallest-prime-factor sieves and table-based factorization.

Responsibility: factor information for every integer up to a bound.
Single large integers go through pollard.factorize instead.

All SPF tables here use the same convention:
spf[0] = 0, spf[1] = 1, and spf[p] = p for primes.
"""

import numpy as np
from math import isqrt, log
from numba import njit
from typing import List, Tuple


def spf_sieve(N: int) -> np.ndarray:
    """
    Compute smallest prime factor for all integers up to N.

    Classic Eratosthenes, O(N log log N).

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Array where spf[i] is the smallest prime factor of i.
        spf[0] = 0, spf[1] = 1, and spf[p] = p for primes.
    """
    if N < 0:
        raise ValueError(f"N must be non-negative, got {N}")
    spf = np.arange(N + 1, dtype=np.int64)

    for p in range(2, isqrt(N) + 1):
        if spf[p] == p:  # p is prime
            multiples = spf[p*p::p]
            unmarked = multiples == np.arange(p * p, N + 1, p)
            multiples[unmarked] = p
    return spf


def prime_count_bound(N: int) -> int:
    """
    Upper bound on the number of primes <= N.

    Uses pi(x) < 1.25506 x / ln x (Rosser and Schoenfeld), valid for x > 1.
    """
    if N < 17:
        return max(N + 1, 0)
    return int(1.26 * N / log(N)) + 10


@njit
def _linear_sieve_kernel(N, spf, primes):
    """Fill spf[2..N] and primes[]; return the number of primes found."""
    count = 0
    for i in range(2, N + 1):
        if spf[i] == 0:
            spf[i] = i
            primes[count] = i
            count += 1
        j = 0
        while j < count and primes[j] <= spf[i] and i * primes[j] <= N:
            spf[i * primes[j]] = primes[j]
            j += 1
    return count


def linear_spf_sieve(N: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute primes and smallest prime factors up to N in O(N).

    Every composite is written exactly once, by its smallest prime factor.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    tuple
        (primes, spf): ascending int64 primes <= N, and the SPF table.
    """
    if N < 0:
        raise ValueError(f"N must be non-negative, got {N}")
    spf = np.zeros(N + 1, dtype=np.int64)
    primes = np.zeros(prime_count_bound(N), dtype=np.int64)

    count = _linear_sieve_kernel(N, spf, primes)
    if N >= 1:
        spf[1] = 1
    return primes[:count].copy(), spf


def sieve(limit: int, method: str = 'linear') -> Tuple[np.ndarray, np.ndarray]:
    """
    Return (primes <= limit, SPF table) using the chosen sieve.

    Parameters
    ----------
    limit : int
        Upper bound (inclusive).
    method : str
        'linear' (O(N)) or 'classic' (Eratosthenes).
    """
    if method == 'linear':
        return linear_spf_sieve(limit)
    if method == 'classic':
        spf = spf_sieve(limit)
        primes = np.nonzero(spf == np.arange(limit + 1))[0]
        return primes[primes >= 2], spf
    raise ValueError(f"Unknown sieve method {method!r}, expected 'linear' or 'classic'")


def spf_sieve_with_flags(N: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute SPF table and prime flags from one sieve.

    Returns
    -------
    tuple
        (spf, flags) where flags[i] is True iff i is prime.
    """
    spf = spf_sieve(N)
    flags = spf == np.arange(N + 1)
    flags[:2] = False
    return spf, flags


def factor_from_spf(x: int, spf: np.ndarray) -> List[Tuple[int, int]]:
    """
    Factor x using a precomputed SPF table.

    Parameters
    ----------
    x : int
        Integer to factor, x < len(spf).
    spf : np.ndarray
        Smallest prime factor table from spf_sieve or linear_spf_sieve.

    Returns
    -------
    list
        (prime, exponent) pairs in ascending prime order. Empty for x <= 1.
    """
    if x >= len(spf):
        raise ValueError(f"{x} is outside the SPF table (covers up to {len(spf) - 1})")
    if x <= 1:
        return []

    factors = []
    while x > 1:
        p = int(spf[x])
        count = 0
        while x % p == 0:
            x //= p
            count += 1
        factors.append((p, count))
    return factors


def Omega(x: int, spf: np.ndarray) -> int:
    """Count prime factors of x with multiplicity."""
    return sum(e for _, e in factor_from_spf(x, spf))


def omega(x: int, spf: np.ndarray) -> int:
    """Count distinct prime factors of x."""
    return len(factor_from_spf(x, spf))
