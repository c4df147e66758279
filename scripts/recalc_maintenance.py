"""
scripts/recalc_maintenance.py
────────────────────────────────────────────────────────────────────────
Re-derive ``maintenance_calories`` from the stats stored on each profile.
Useful after a change to the energy model.

    python -m scripts.recalc_maintenance              # every profile
    python -m scripts.recalc_maintenance --user 123   # one user
"""
from __future__ import annotations

import asyncio
import logging
from argparse import ArgumentParser

from dotenv import load_dotenv
load_dotenv()

from config import settings  # noqa: E402
from core.profile import recompute_maintenance  # noqa: E402
from services.db import Database  # noqa: E402
from services.store import NutritionStore, SqlStore  # noqa: E402

_LOG = logging.getLogger("scripts.recalc_maintenance")


async def refresh(store: NutritionStore, user_id: int | None = None) -> int:
    """Return the number of profiles whose stored value changed."""
    changed = 0
    for profile in await store.list_profiles(user_id):
        kcal = recompute_maintenance(profile)
        if kcal == profile.maintenance_calories:
            continue
        _LOG.info(
            "user %s: %s → %s kcal", profile.user_id, profile.maintenance_calories, kcal
        )
        await store.save_profile(profile.model_copy(update={"maintenance_calories": kcal}))
        changed += 1
    return changed


async def _async_main() -> None:
    ap = ArgumentParser()
    ap.add_argument("--user", type=int, help="update only this user-id")
    args = ap.parse_args()

    if not settings.database_url:
        raise SystemExit("DATABASE_URL is not set")

    database = Database(settings.database_url)
    try:
        async for session in database.session():
            n = await refresh(SqlStore(session), args.user)
    finally:
        await database.dispose()
    _LOG.info("✓ %d profile(s) updated", n)


if __name__ == "__main__":  # pragma: no cover
    logging.basicConfig(level=logging.INFO)
    asyncio.run(_async_main())
