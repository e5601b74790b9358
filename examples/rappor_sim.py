"""
RAPPOR client simulation.

Reads true values as CSV rows ``client,cohort,value`` (a header row is
optional) and writes ``client,cohort,bloom,prr,irr`` with each bit vector
rendered as a fixed-width binary string. Each distinct client string is used
as that client's secret, and gets its own encoder.

Usage:
    python examples/rappor_sim.py --params-file params.csv --seed 0 < in.csv > out.csv
"""
import csv
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, TextIO

project_root = Path(__file__).resolve().parents[1]
src_root = project_root / "src"
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from examples._shared import cli, io
from rappor.client import (
    Encoder,
    NumpyIrrRand,
    Params,
    SystemIrrRand,
    bits_to_string,
    create_encoder,
)
from rappor.core.utils import get_logger

logger = get_logger("rappor.examples.rappor_sim")

HEADER = ("client", "cohort", "bloom", "prr", "irr")


def simulate(
    rows: Iterable[List[str]],
    params: Params,
    out: TextIO,
    *,
    hash_name: str = "md5",
    seed: Optional[int] = None,
) -> int:
    """Encode every input row and write one output row per input; return the count."""
    # 所有客户端共享同一个随机源，保证给定种子时整次模拟可复现
    irr_rand = NumpyIrrRand(seed) if seed is not None else SystemIrrRand()
    encoders: Dict[str, Encoder] = {}
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(HEADER)

    count = 0
    for i, row in enumerate(rows):
        if not row:
            continue
        if i == 0 and row[:2] == ["client", "cohort"]:
            continue
        if len(row) != 3:
            raise ValueError(f"line {i + 1}: expected client,cohort,value (got {row!r})")
        client, cohort_str, value = row
        cohort = int(cohort_str)

        encoder = encoders.get(client)
        if encoder is None or encoder.cohort != cohort:
            encoder = create_encoder(
                "sim", params, client, cohort, hash_name=hash_name, irr_rand=irr_rand
            )
            encoders[client] = encoder

        report = encoder.encode_report(value)
        writer.writerow(
            (
                client,
                cohort,
                bits_to_string(report.bloom, params.num_bits),
                bits_to_string(report.prr, params.num_bits),
                bits_to_string(report.irr, params.num_bits),
            )
        )
        count += 1

    logger.info("encoded %d rows for %d clients", count, len(encoders))
    return count


def main(argv=None, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    args = cli.parse_args("RAPPOR client simulation", argv)
    params = io.load_params(args)
    return simulate(
        csv.reader(stdin or sys.stdin),
        params,
        stdout or sys.stdout,
        hash_name=args.hash,
        seed=args.seed,
    )


if __name__ == "__main__":
    main()
