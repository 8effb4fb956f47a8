#!/usr/bin/env python3
"""Sample order file generator.

Writes an order file in the layout the cart link builder expects:
- Row 1: header (Product, Variant ID, Quantity)
- Row 2+: one product per row, variant ids as Shopify gids

Some quantities are left at 0 (or blank) the way a downloaded catalog looks
before the customer fills it in; those rows are skipped by the builder.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

HEADER = ["Product", "Variant ID", "Quantity"]
GID_PREFIX = "gid://shopify/ProductVariant/"


def generate_orders(rows: int, fill_ratio: float = 0.5, seed: int = 42) -> pd.DataFrame:
    """Build a DataFrame of catalog rows, about fill_ratio of them ordered."""
    rng = np.random.default_rng(seed)
    variant_ids = rng.integers(10**13, 10**14, rows)
    ordered = rng.random(rows) < fill_ratio
    quantities = np.where(ordered, rng.integers(1, 25, rows), 0)
    return pd.DataFrame(
        {
            "Product": [f"Product {i + 1}" for i in range(rows)],
            "Variant ID": [f"{GID_PREFIX}{v}" for v in variant_ids],
            "Quantity": quantities.tolist(),
        },
        columns=HEADER,
    )


def write_orders(df: pd.DataFrame, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    suffix = output_path.suffix.lower()
    if suffix == ".csv":
        df.to_csv(output_path, index=False)
    elif suffix == ".xlsx":
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Order", index=False)
    else:
        raise ValueError(f"unsupported output type: {output_path.suffix} (use .csv or .xlsx)")
    ordered = int((df["Quantity"] > 0).sum())
    print(f"Created order file: {output_path}")
    print(f"  Rows: {len(df)} (ordered: {ordered})")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a sample order file (CSV or xlsx)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/order.csv
  %(prog)s data/order.xlsx --rows 200 --fill-ratio 0.2 --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output file path (.csv or .xlsx)")
    parser.add_argument("--rows", type=int, default=20, help="Number of catalog rows (default: 20)")
    parser.add_argument(
        "--fill-ratio", type=float, default=0.5, help="Share of rows with a quantity (default: 0.5)"
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0.0 <= args.fill_ratio <= 1.0:
        print("Error: --fill-ratio must be between 0 and 1", file=sys.stderr)
        return 1

    try:
        write_orders(generate_orders(args.rows, args.fill_ratio, args.seed), args.output)
    except (OSError, ValueError) as e:
        print(f"Error generating order file: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
