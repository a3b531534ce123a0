"""Write a deterministic sample ledger as CSV and XLSX.

Output: data/sample_ledger.csv and data/sample_ledger.xlsx (same rows)
"""

from __future__ import annotations

import argparse
from pathlib import Path

from finanalyzer import synth


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Write a synthetic ledger the dashboard recognises")
    parser.add_argument("--rows", type=int, default=synth.DEFAULT_ROWS)
    parser.add_argument("--seed", type=int, default=synth.DEFAULT_SEED)
    parser.add_argument("--output-dir", type=Path, default=Path("data"))
    args = parser.parse_args(argv)

    csv_path, xlsx_path = synth.write_sample_files(args.output_dir, rows=args.rows, seed=args.seed)
    print(f"Wrote {csv_path} and {xlsx_path} with {args.rows} rows")


if __name__ == "__main__":
    main()
