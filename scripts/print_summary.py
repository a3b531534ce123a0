"""Utility script to print the financial summary of a CSV/XLSX ledger."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from finanalyzer import config, financials, parsing
from finanalyzer.errors import FinAnalyzerError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print the income/expense summary of a ledger file")
    parser.add_argument("path", type=Path)
    args = parser.parse_args(argv)

    config.configure_logging()
    try:
        table = parsing.load_path(args.path)
    except FinAnalyzerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    report = financials.calculate_financials(table)
    payload = {
        "file": args.path.name,
        "stats": financials.table_stats(table),
        "summary": report["summary"] if report else None,
        "expense_by_category": (
            financials.category_breakdown(report["expense_by_category"]) if report else None
        ),
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
