"""
Prime generation utilities.

Responsibility: prime generation only. No factorization, no SPF tables.
"""

import numpy as np
from math import isqrt

# Segments are at least this long so numpy slicing dominates loop overhead.
MIN_SEGMENT_SIZE = 10**6


def prime_flags_upto(N: int) -> np.ndarray:
    """
    Return boolean array where flags[i] is True iff i is prime.

    Uses Sieve of Eratosthenes.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Boolean array of length N+1.
    """
    if N < 0:
        raise ValueError(f"N must be non-negative, got {N}")
    flags = np.ones(N + 1, dtype=bool)
    flags[:2] = False
    for p in range(2, isqrt(N) + 1):
        if flags[p]:
            flags[p*p::p] = False
    return flags


def primes_upto(N: int) -> np.ndarray:
    """
    Return array of all primes <= N.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Array of primes, ascending.
    """
    flags = prime_flags_upto(N)
    return np.nonzero(flags)[0]


def _sieve_segment(start: int, end: int, base_primes) -> np.ndarray:
    """
    Sieve a single segment [start, end) with the given base primes.

    Returns the primes found in the segment. Assumes start >= 2.
    """
    flags = np.ones(end - start, dtype=bool)

    for p in base_primes:
        if p * p >= end:
            break

        # First multiple of p in [start, end), never below p^2
        first = max(p * p, (start + p - 1) // p * p)
        flags[first - start::p] = False

    return np.nonzero(flags)[0] + start


def range_sieve(low: int, high: int, segment_size: int = None,
                verbose: bool = False) -> np.ndarray:
    """
    Return all primes in [low, high] using a segmented sieve.

    Parameters
    ----------
    low : int
        Lower bound (inclusive). Values below 2 are clamped to 2.
    high : int
        Upper bound (inclusive).
    segment_size : int, optional
        Length of each sieved window. Defaults to max(sqrt(high), 10^6).
    verbose : bool
        Print base prime and segment counts.

    Returns
    -------
    np.ndarray
        Ascending int64 array of primes in [low, high].
    """
    low = max(low, 2)
    if high < low:
        return np.array([], dtype=np.int64)

    # Step 1: base primes up to sqrt(high)
    root = isqrt(high)
    base_primes = primes_upto(root).tolist()

    if verbose:
        print(f"    Found {len(base_primes)} base primes up to {root}")

    # Step 2: walk [low, high] one segment at a time
    if segment_size is None:
        segment_size = max(root + 1, MIN_SEGMENT_SIZE)
    if segment_size < 1:
        raise ValueError(f"segment_size must be positive, got {segment_size}")

    chunks = []
    for start in range(low, high + 1, segment_size):
        end = min(start + segment_size, high + 1)
        chunks.append(_sieve_segment(start, end, base_primes))

    if verbose:
        print(f"    Processed {len(chunks)} segments of size {segment_size:,}")

    return np.concatenate(chunks).astype(np.int64)
