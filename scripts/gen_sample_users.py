#!/usr/bin/env python3
"""Sample users CSV generator.

Generates a synthetic teacher/admin roster in the CSV format accepted by the
importer, with a configurable share of deliberately broken rows (short or
invalid usernames, short passwords, malformed e-mails, unknown roles) so that
the validator's messages and the batch importer's throughput can be tried
out by hand.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

FIRST_NAMES = ["Ama", "Kofi", "Esi", "Kwame", "Abena", "Yaw", "Akosua", "Kojo", "Adwoa", "Kwesi"]
LAST_NAMES = ["Mensah", "Owusu", "Boateng", "Asante", "Osei", "Addo", "Badu", "Frimpong"]
ROLES = ["teacher", "teacher", "teacher", "admin"]


def generate_users(rows: int, invalid_ratio: float = 0.1, seed: int = 42) -> pd.DataFrame:
    """Generate a roster DataFrame with canonical column names.

    Args:
        rows: Number of data rows
        invalid_ratio: Share of rows that get one deliberate defect
        seed: Random seed for reproducible data
    """
    rng = np.random.default_rng(seed)

    first = rng.choice(FIRST_NAMES, rows)
    last = rng.choice(LAST_NAMES, rows)
    usernames = [f"{f.lower()}_{l.lower()}{i}" for i, (f, l) in enumerate(zip(first, last))]
    data = {
        "username": usernames,
        "password": [f"pw{rng.integers(100000, 999999)}" for _ in range(rows)],
        "full name": [f"{f} {l}" for f, l in zip(first, last)],
        "email": [f"{u}@school.example" for u in usernames],
        "role": rng.choice(ROLES, rows).tolist(),
    }
    df = pd.DataFrame(data)

    defects = ["short_username", "bad_username", "short_password", "bad_email", "unknown_role"]
    broken = rng.random(rows) < invalid_ratio
    for idx in np.flatnonzero(broken):
        defect = rng.choice(defects)
        if defect == "short_username":
            df.at[idx, "username"] = "ab"
        elif defect == "bad_username":
            df.at[idx, "username"] = f"{df.at[idx, 'username']}!"
        elif defect == "short_password":
            df.at[idx, "password"] = "12345"
        elif defect == "bad_email":
            df.at[idx, "email"] = "not-an-email"
        else:
            df.at[idx, "role"] = "principal"
    return df


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic users CSV for the importer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 500 users, 10% broken rows
  %(prog)s data/users.csv

  # large clean file for throughput checks
  %(prog)s data/big.csv --rows 50000 --invalid-ratio 0
        """
    )
    parser.add_argument("output", type=Path, help="Output CSV file path")
    parser.add_argument("--rows", type=int, default=500, help="Number of data rows (default: 500)")
    parser.add_argument(
        "--invalid-ratio",
        type=float,
        default=0.1,
        help="Share of rows with a deliberate defect (default: 0.1)"
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0.0 <= args.invalid_ratio <= 1.0:
        print("Error: --invalid-ratio must be between 0 and 1", file=sys.stderr)
        return 1

    df = generate_users(args.rows, args.invalid_ratio, args.seed)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.output, index=False)
    print(f"Created users CSV: {args.output}")
    print(f"  Rows: {args.rows}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
