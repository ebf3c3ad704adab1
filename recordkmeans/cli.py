"""
Command-line entry point: load a file, cluster it, write the labelled copy.
"""

import argparse
import os
import sys
from typing import List, Optional

from .io import load_dataset, write_dataset
from .kmeans import run_kmeans


def default_output_path(input_path: str) -> str:
    stem, ext = os.path.splitext(input_path)
    return f"{stem}Clustered{ext or '.csv'}"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog='recordkmeans',
        description='Cluster the rows of a comma-separated file with k-means.',
    )
    p.add_argument('input', help='Input file: header of attribute names, then numeric rows')
    p.add_argument('-k', '--clusters', type=int, default=2, help='Number of clusters')
    p.add_argument('-o', '--output', default=None,
                   help='Output file (default: <input>Clustered.csv)')
    p.add_argument('--drop', nargs='*', default=['Class'],
                   help='Attributes to ignore before clustering')
    p.add_argument('--seed', type=int, default=None, help='Random seed')
    p.add_argument('--max-iters', type=int, default=300, help='Iteration cap')
    p.add_argument('--verbose', action='store_true', help='Print progress information')
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    output = args.output or default_output_path(args.input)

    try:
        data = load_dataset(args.input)
        for name in args.drop:
            data.remove_attribute(name)
        model = run_kmeans(
            data, args.clusters,
            rng_seed=args.seed,
            iteration_cap=args.max_iters,
            verbose=args.verbose,
        )
        write_dataset(data, output)
    except (ValueError, OSError) as e:
        print(f"recordkmeans: error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        info = model.get_cluster_info()
        print(f"Wrote {len(data)} records in {info['n_clusters']} clusters to {output}")
    return 0
