#!/usr/bin/env python3
"""
Benchmark the cplib algorithms.

Times every sieve, the 64-bit factorization core, the Fenwick tree and
centroid decomposition, and cross-checks each result against a simpler
reference before reporting.

Usage:
    python benchmark.py
    python benchmark.py --config config/custom.yaml --save
    python benchmark.py --N 1e8 --samples 500
"""

import argparse
import time
from pathlib import Path

import numpy as np
import pandas as pd
import yaml

from cplib.centroid import centroid_decompose, centroid_depths, tree_from_edges
from cplib.factorization import linear_spf_sieve, spf_sieve, factor_from_spf
from cplib.fenwick import Fenwick
from cplib.pollard import factorize, is_prime
from cplib.primes import primes_upto, range_sieve


def _timed(rows, name: str, size: int, fn, *args, **kwargs):
    """Run fn, record its wall time under name, and return its result."""
    print(f"  {name}...", end=" ", flush=True)
    t0 = time.time()
    result = fn(*args, **kwargs)
    elapsed = time.time() - t0
    print(f"{elapsed:.2f}s")
    rows.append({'operation': name, 'size': size, 'seconds': elapsed})
    return result


def bench_sieves(config: dict, rows: list):
    N = config['sieve_N']
    low, high = config['range_low'], config['range_high']

    primes = _timed(rows, 'primes_upto', N, primes_upto, N)
    spf = _timed(rows, 'spf_sieve', N, spf_sieve, N)
    lin_primes, lin_spf = _timed(rows, 'linear_spf_sieve', N, linear_spf_sieve, N)
    segment = _timed(rows, 'range_sieve', high - low + 1, range_sieve, low, high,
                     verbose=True)

    assert np.array_equal(spf, lin_spf), "classic and linear SPF tables differ"
    assert np.array_equal(primes, lin_primes), "prime lists differ"

    x = N - 1
    pf = factor_from_spf(x, spf)
    assert np.prod([p ** e for p, e in pf], dtype=object) == x
    print(f"    pi({N:,}) = {len(primes):,}; {len(segment):,} primes in [{low:,}, {high:,}]")


def bench_factorize(config: dict, rows: list, rng: np.random.Generator):
    samples = config['factor_samples']
    values = [int(v) for v in rng.integers(1, 2**63, size=samples, dtype=np.uint64)]
    values += [int(v) | (1 << 63) for v in rng.integers(1, 2**63, size=samples, dtype=np.uint64)]

    results = _timed(rows, 'factorize', len(values), lambda vs: [factorize(v) for v in vs], values)

    for n, factors in zip(values, results):
        product = 1
        for p in factors:
            assert is_prime(p), f"factorize({n}) produced non-prime {p}"
            product *= p
        assert product == n, f"factorize({n}) multiplies back to {product}"
    print(f"    {len(values):,} values verified")


def bench_fenwick(config: dict, rows: list, rng: np.random.Generator):
    n = config['fenwick_size']
    values = rng.integers(-1000, 1000, size=n)

    tree = _timed(rows, 'fenwick_build', n, Fenwick, values)
    indices = rng.integers(1, n + 1, size=n)
    deltas = rng.integers(-1000, 1000, size=n)

    def apply_updates():
        for i, d in zip(indices, deltas):
            tree.update(int(i), int(d))

    _timed(rows, 'fenwick_update', n, apply_updates)
    np.add.at(values, indices - 1, deltas)
    assert tree.prefix_sum(n) == values.sum(), "Fenwick total mismatch"


def bench_centroid(config: dict, rows: list, rng: np.random.Generator):
    n = config['tree_size']
    # Random recursive tree: node i attaches to a uniformly chosen earlier node
    edges = [(i, int(rng.integers(0, i))) for i in range(1, n)]
    adjacency = tree_from_edges(n, edges)

    parent, root = _timed(rows, 'centroid_decompose', n, centroid_decompose, adjacency)
    depth = centroid_depths(parent)
    print(f"    root = {root}, centroid tree depth = {depth.max()}")
    assert depth.max() <= int(np.log2(n)) + 1, "centroid tree too deep"


def main():
    parser = argparse.ArgumentParser(description='Benchmark cplib algorithms')
    parser.add_argument('--config', type=str, default='config/default.yaml',
                        help='Path to config file')
    parser.add_argument('--N', type=float, default=None, help='Override sieve bound')
    parser.add_argument('--samples', type=int, default=None,
                        help='Override number of factorization samples')
    parser.add_argument('--save', action='store_true', help='Write data/results/benchmark.csv')
    args = parser.parse_args()

    with open(args.config) as f:
        config = yaml.safe_load(f)
    if args.N is not None:
        config['sieve_N'] = int(args.N)
    if args.samples is not None:
        config['factor_samples'] = args.samples

    rng = np.random.default_rng(config['seed'])
    rows = []

    print("=" * 60)
    print("cplib benchmark")
    print("=" * 60)
    print(f"  sieve_N = {config['sieve_N']:,}")
    print(f"  factor_samples = {config['factor_samples']:,}")
    print(f"  seed = {config['seed']}")
    print()

    total_start = time.time()
    for title, bench in [
        ("1. Sieves", lambda: bench_sieves(config, rows)),
        ("2. Factorization", lambda: bench_factorize(config, rows, rng)),
        ("3. Fenwick tree", lambda: bench_fenwick(config, rows, rng)),
        ("4. Centroid decomposition", lambda: bench_centroid(config, rows, rng)),
    ]:
        print("-" * 60)
        print(title)
        print("-" * 60)
        bench()
        print()

    df = pd.DataFrame(rows)
    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(df.to_string(index=False))
    print(f"\nTotal runtime: {time.time() - total_start:.1f}s")

    if args.save:
        output_dir = Path('data/results')
        output_dir.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_dir / 'benchmark.csv', index=False)
        print(f"\nResults saved to {output_dir / 'benchmark.csv'}")


if __name__ == '__main__':
    main()
