#!/usr/bin/env python3
"""
Seed the database with demo players, tests and test results.

Usage:
    python scripts/seed_db.py [--players 25] [--tests 8] [--results-per-test 12] [--seed 12345] [--force]

Does nothing when players already exist. Refuses to run in production
unless --force is given.
"""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import get_settings
from app.database import AsyncSessionLocal, engine
from app.services.seeding import DEFAULT_SEED, TEST_TEMPLATES, seed_database

logger = logging.getLogger("seed_db")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed SpeedballHub demo data")
    parser.add_argument("--players", type=int, default=25)
    parser.add_argument("--tests", type=int, default=len(TEST_TEMPLATES))
    parser.add_argument("--results-per-test", type=int, default=12)
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--force", action="store_true", help="Allow seeding when ENVIRONMENT=production")
    return parser.parse_args()


async def main(args: argparse.Namespace) -> int:
    settings = get_settings()
    if settings.is_production and not args.force:
        logger.warning("Seeding skipped in production environment (use --force to override)")
        return 0

    async with AsyncSessionLocal() as db:
        summary = await seed_database(
            db,
            players=args.players,
            tests=args.tests,
            results_per_test=args.results_per_test,
            rng=random.Random(args.seed),
        )
    await engine.dispose()

    if summary.skipped:
        print("Database already contains data. Skipping seeding.")
        return 0

    print(f"Players: {summary.players}")
    print(f"Tests:   {summary.tests}")
    print(f"Results: {summary.results}")
    print("Age groups:")
    for label, count in summary.age_groups.items():
        print(f"  {label}: {count}")
    print("Genders:")
    for gender, count in summary.genders.items():
        print(f"  {gender}: {count}")
    print("Test types:")
    for test_type, count in summary.test_types.items():
        print(f"  {test_type}: {count}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    sys.exit(asyncio.run(main(parse_args())))
