# ------------------------------------------------------------------------------
# create_pattern.py
#
# Purpose:
# Entry point that reproduces the goal pattern in the megaverse.
# - Loads settings (backend/megaverse.env, environment)
# - Fetches the goal grid and creates one entity per populated cell
# - Logs a summary of the run
# ------------------------------------------------------------------------------

import json
import asyncio
import logging
from config import load_settings, configure_logging
from services.request_service import MegaverseClient
from services.goal_service import create_pattern

logger = logging.getLogger(__name__)


async def run(client: MegaverseClient):
    summary = await create_pattern(client)
    summary.log("PATTERN SUMMARY")

    if not client.settings.dry_run and logger.isEnabledFor(logging.DEBUG):
        snapshot = await asyncio.to_thread(client.fetch_map)
        if snapshot is not None:
            logger.debug(json.dumps(snapshot, indent=2))
    return summary


def main():
    settings = load_settings()
    configure_logging(settings)
    logger.info(f"Target: {settings.goal_url}" + (" (dry run)" if settings.dry_run else ""))

    client = MegaverseClient(settings)
    try:
        asyncio.run(run(client))
    finally:
        client.close()


if __name__ == "__main__":
    main()
