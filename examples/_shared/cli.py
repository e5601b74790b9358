"""
Unified CLI argument parsing for examples.
"""
import argparse
import sys
from typing import Optional, List


def build_parser(description: str) -> argparse.ArgumentParser:
    """Build a standard ArgumentParser with the RAPPOR parameter flags."""
    parser = argparse.ArgumentParser(description=description)

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the IRR random source (default: OS entropy)"
    )
    parser.add_argument(
        "--num-bits",
        type=int,
        default=32,
        help="Number of Bloom filter bits k (default: 32)"
    )
    parser.add_argument(
        "--num-hashes",
        type=int,
        default=2,
        help="Number of Bloom filter hashes h (default: 2)"
    )
    parser.add_argument(
        "--num-cohorts",
        type=int,
        default=64,
        help="Number of cohorts m (default: 64)"
    )
    parser.add_argument("-f", dest="prob_f", type=float, default=0.5, help="PRR probability f")
    parser.add_argument("-p", dest="prob_p", type=float, default=0.25, help="IRR probability p")
    parser.add_argument("-q", dest="prob_q", type=float, default=0.75, help="IRR probability q")
    parser.add_argument(
        "--params-file",
        type=str,
        default=None,
        help="CSV file with header k,h,m,p,q,f; overrides the flags above"
    )
    parser.add_argument(
        "--hash",
        type=str,
        default="md5",
        help="Bloom filter hash backend (md5, xxh128, mmh3)"
    )

    return parser


def parse_args(
    description: str,
    argv: Optional[List[str]] = None,
    parser: Optional[argparse.ArgumentParser] = None,
) -> argparse.Namespace:
    """Parse arguments for an example script."""
    parser = parser or build_parser(description)
    if argv is None:
        argv = sys.argv[1:]
    return parser.parse_args(argv)
