"""CLI script to create the sales database and load the reference/demo data.

Teams and sellers are inserted only when missing. Demo sales are appended on
every run with ``--demo-sales``; use ``--reset`` to start from empty tables.
"""

from __future__ import annotations

import argparse
import os
import random
import sys
from pathlib import Path


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create the sales tables and seed teams, sellers and demo sales."
    )
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="Override DATABASE_URL env var for this run.",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop and recreate all tables before seeding.",
    )
    parser.add_argument(
        "--demo-sales",
        action="store_true",
        help="Also insert the demo sales dated within the last DEMO_WINDOW_DAYS days.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for demo sale dates (reproducible runs).",
    )
    return parser.parse_args()


def ensure_project_on_path() -> None:
    project_dir = Path(__file__).resolve().parents[1]
    if str(project_dir) not in sys.path:
        sys.path.insert(0, str(project_dir))


def main() -> None:
    args = parse_args()
    ensure_project_on_path()

    if args.database_url:
        os.environ["DATABASE_URL"] = args.database_url

    from salesboard.core.config import settings
    from salesboard.db.session import SessionLocal, engine, init_db
    from salesboard.ingest.service import reset_database, seed_demo_sales, seed_reference_data

    if args.reset:
        reset_database(engine)
    else:
        init_db(engine)

    with SessionLocal() as session:
        reference = seed_reference_data(session)
        demo_count = 0
        if args.demo_sales:
            rng = random.Random(args.seed) if args.seed is not None else None
            demo_count = seed_demo_sales(session, rng=rng).sales

    print(
        f"Seeded {reference.teams} teams, {reference.sellers} sellers and "
        f"{demo_count} demo sales into {settings.database_url}"
    )


if __name__ == "__main__":
    main()
