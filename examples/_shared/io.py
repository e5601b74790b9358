"""
Input/Output helpers for examples.
"""
import json
from pathlib import Path
from typing import Any, Dict, Union

from rappor.client import Params


def load_params(args: Any) -> Params:
    """Build Params from a --params-file CSV, or from the individual flags."""
    if args.params_file:
        with open(args.params_file, "r", encoding="utf-8", newline="") as f:
            return Params.from_csv(f)
    return Params(
        num_bits=args.num_bits,
        num_hashes=args.num_hashes,
        num_cohorts=args.num_cohorts,
        prob_f=args.prob_f,
        prob_p=args.prob_p,
        prob_q=args.prob_q,
    )


def write_json(data: Dict[str, Any], path: Union[str, Path]) -> Path:
    """Write data to a JSON file."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, default=str)
    return p


def print_summary(result: Dict[str, Any]) -> None:
    """
    Print a summary of the example result to stdout.

    Expects result dict to have keys: 'name', 'config', 'outputs'.
    """
    print("=" * 60)
    print(f"EXAMPLE: {result.get('name', 'Unknown')}")
    print("-" * 60)

    if "config" in result:
        print("Config:")
        for k, v in result["config"].items():
            print(f"  {k}: {v}")

    if "outputs" in result and result["outputs"]:
        print("-" * 60)
        print("Outputs:")
        for k, v in result["outputs"].items():
            print(f"  {k}: {v}")

    print("=" * 60)
