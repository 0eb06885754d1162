"""Demo data loader.

Usage:
    python -m src.projecthub.seed
    python -m src.projecthub.seed --count 100 --reset --seed 42
"""

import argparse
import asyncio
import random
from datetime import datetime, timedelta
from decimal import Decimal

from src.projecthub.core.config import Settings, get_settings
from src.projecthub.core.db import (
    build_engine,
    build_session_factory,
    create_tables,
    drop_tables,
    session_scope,
)
from src.projecthub.core.logging import get_logger, setup_logging
from src.projecthub.models import Project, ProjectStatus
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import ProjectRepository

logger = get_logger(__name__)

PROJECT_PREFIXES = [
    "Website Redesign",
    "Mobile App",
    "API Integration",
    "Database Migration",
    "UI/UX Overhaul",
    "Security Audit",
    "Performance Optimization",
    "Feature Development",
    "Infrastructure Upgrade",
    "Analytics Dashboard",
    "E-commerce Platform",
    "CRM Implementation",
    "Payment Gateway",
    "Cloud Migration",
    "DevOps Pipeline",
]

PROJECT_SUFFIXES = ["v1.0", "v2.0", "Phase 1", "Phase 2", "Q1", "Q2", "Enterprise", "Pro", "Lite"]

TEAM_MEMBERS = [
    "John Smith",
    "Sarah Johnson",
    "Michael Chen",
    "Emily Davis",
    "David Wilson",
    "Jessica Martinez",
    "Robert Brown",
    "Amanda Taylor",
    "Christopher Lee",
    "Stephanie Anderson",
]

# Weighted towards active work
STATUS_POOL = [
    ProjectStatus.ACTIVE,
    ProjectStatus.ACTIVE,
    ProjectStatus.ACTIVE,
    ProjectStatus.ON_HOLD,
    ProjectStatus.COMPLETED,
    ProjectStatus.COMPLETED,
]


def build_demo_project(rng: random.Random, now: datetime) -> Project:
    """Build one realistic project. Completed projects are at 100% progress."""
    status = rng.choice(STATUS_POOL)
    created_at = now - timedelta(days=rng.randint(0, 360), minutes=rng.randint(0, 1439))
    updated_at = min(now, created_at + timedelta(days=rng.randint(0, 30)))
    return Project(
        name=f"{rng.choice(PROJECT_PREFIXES)} - {rng.choice(PROJECT_SUFFIXES)}",
        status=status.value,
        deadline=(now + timedelta(days=rng.randint(-30, 180))).date(),
        assigned_to=rng.choice(TEAM_MEMBERS),
        budget=Decimal(rng.randint(1_000, 500_000)),
        progress=100 if status is ProjectStatus.COMPLETED else rng.randint(0, 95),
        created_at=created_at,
        updated_at=updated_at,
    )


async def seed(settings: Settings, count: int, reset: bool, rng_seed: int | None) -> int:
    """Insert ``count`` demo projects. Returns the number inserted."""
    engine = build_engine(settings)
    try:
        if reset:
            await drop_tables(engine)
        await create_tables(engine)

        rng = random.Random(rng_seed)
        now = utc_now()
        async with session_scope(build_session_factory(engine)) as session:
            repo = ProjectRepository(session)
            for _ in range(count):
                repo.add(build_demo_project(rng, now))
            await session.commit()
    finally:
        await engine.dispose()

    logger.info("seed_complete", count=count, reset=reset)
    return count


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load demo projects")
    parser.add_argument("--count", type=int, default=50, help="Projects to create")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate tables first")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    settings = get_settings()
    setup_logging(settings.debug, settings.log_level)
    asyncio.run(seed(settings, count=args.count, reset=args.reset, rng_seed=args.seed))


if __name__ == "__main__":
    main()
