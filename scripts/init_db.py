"""
scripts/init_db.py
────────────────────────────────────────────────────────────────────────
Create every table on ``DATABASE_URL``:

    python -m scripts.init_db            # create missing tables
    python -m scripts.init_db --drop     # drop everything first (dev only)
"""
from __future__ import annotations

import asyncio
import logging
from argparse import ArgumentParser

from dotenv import load_dotenv
load_dotenv()

from config import settings  # noqa: E402  (after load_dotenv)
from services.db import Database  # noqa: E402

_LOG = logging.getLogger("scripts.init_db")


async def _async_main() -> None:
    ap = ArgumentParser()
    ap.add_argument("--drop", action="store_true", help="drop all tables before creating")
    args = ap.parse_args()

    if not settings.database_url:
        raise SystemExit("DATABASE_URL is not set")

    database = Database(settings.database_url)
    try:
        await database.create_all(drop_first=args.drop)
    finally:
        await database.dispose()
    _LOG.info("✓ schema ready (drop=%s)", args.drop)


if __name__ == "__main__":  # pragma: no cover
    logging.basicConfig(level=logging.INFO)
    asyncio.run(_async_main())
