"""
Encoder demo: encode a handful of values and show every stage.

Goal:
    Show that the Bloom filter and PRR are stable across repeated encodes of
    the same value while the IRR changes on every call.

Usage:
    python examples/encoder_demo.py --seed 1 foo bar foo
"""
import json
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[1]
src_root = project_root / "src"
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from examples._shared import cli, io
from rappor.client import bits_to_string, create_encoder


def main(argv=None):
    parser = cli.build_parser("RAPPOR encoder demo")
    parser.add_argument("--client-secret", type=str, default="client-secret")
    parser.add_argument("--cohort", type=int, default=0)
    parser.add_argument("--output", type=str, default=None, help="Optional JSON output path")
    parser.add_argument("values", nargs="*", default=["foo", "foo", "bar"])
    args = cli.parse_args("RAPPOR encoder demo", argv, parser=parser)

    params = io.load_params(args)
    encoder = create_encoder(
        "demo-metric",
        params,
        args.client_secret,
        args.cohort,
        hash_name=args.hash,
        seed=args.seed,
    )

    rows = []
    for value in args.values:
        report = encoder.encode_report(value)
        rows.append(
            {
                "value": value,
                "bloom": bits_to_string(report.bloom, params.num_bits),
                "prr": bits_to_string(report.prr, params.num_bits),
                "irr": bits_to_string(report.irr, params.num_bits),
            }
        )

    result = {
        "name": "encoder_demo",
        "config": encoder.get_metadata(),
        "outputs": {"reports": rows},
    }
    if args.output:
        io.write_json(result, args.output)
    return result


if __name__ == "__main__":
    res = main()
    io.print_summary({"name": res["name"], "config": res["config"]})
    print(json.dumps(res["outputs"]["reports"], indent=2))
