"""Seed script for sample Instagram leads.

Usage:
    python -m agenthub.scripts.seed_instagram_leads
    python -m agenthub.scripts.seed_instagram_leads --force   # seed even if leads exist
"""

import argparse
import asyncio
import sys
from sqlalchemy import select, func

from agenthub.core.database import async_session, engine, Base
from agenthub.core.seed import seed_sample_leads
from agenthub.models.instagram_lead import InstagramLead
import agenthub.models.activity  # noqa: F401
import agenthub.models.schedule_config  # noqa: F401
import agenthub.models.instagram_post  # noqa: F401
import agenthub.models.metric  # noqa: F401


async def main(force: bool, create_tables: bool) -> int:
    try:
        if create_tables:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        async with async_session() as db:
            count = (await db.execute(select(func.count(InstagramLead.id)))).scalar() or 0
            if count and not force:
                print(f"Instagram leads table already has {count} records, use --force to add samples anyway")
                return 0
            leads = await seed_sample_leads(db)
            print(f"Added {len(leads)} sample Instagram leads")
        return 0
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed sample Instagram leads")
    parser.add_argument("--force", action="store_true", help="Seed even when leads already exist")
    parser.add_argument("--create-tables", action="store_true", help="Create tables first (dev only; use alembic otherwise)")
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.force, args.create_tables)))
