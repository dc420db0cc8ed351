import asyncio
import logging
from models import EntityKind, RunSummary
from services.request_service import MegaverseClient

logger = logging.getLogger(__name__)


async def clean_megaverse(client: MegaverseClient) -> RunSummary:
    """
    Delete every entity kind at every cell of the grid.

    All deletions are launched at once and joined with a single gather; an
    optional semaphore (settings.max_concurrency > 0) bounds how many are in
    flight. Individual failures are logged by the client and only counted here.
    """
    size = client.settings.grid_size
    cap = client.settings.max_concurrency
    semaphore = asyncio.Semaphore(cap) if cap > 0 else None

    async def delete_one(kind: EntityKind, row: int, column: int) -> bool:
        if semaphore is None:
            return await client.delete_entity(kind, row, column)
        async with semaphore:
            return await client.delete_entity(kind, row, column)

    tasks = [
        delete_one(kind, row, column)
        for row in range(size)
        for column in range(size)
        for kind in EntityKind
    ]
    logger.info(f"🧹 Launching {len(tasks)} deletions over a {size}x{size} grid")

    results = await asyncio.gather(*tasks)

    summary = RunSummary()
    for ok in results:
        summary.record(ok)

    logger.info("✅ Megaverse completely cleaned.")
    return summary
