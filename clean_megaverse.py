# clean_megaverse.py
# Deletes every polyanet, soloon and cometh from the megaverse grid.
import asyncio
import logging
from config import load_settings, configure_logging
from services.request_service import MegaverseClient
from services.cleaner_service import clean_megaverse

logger = logging.getLogger(__name__)


def main():
    settings = load_settings()
    configure_logging(settings)
    logger.info(f"Cleaning {settings.grid_size}x{settings.grid_size} grid at {settings.base_url}")

    client = MegaverseClient(settings)
    try:
        summary = asyncio.run(clean_megaverse(client))
    finally:
        client.close()
    summary.log("CLEANUP SUMMARY")


if __name__ == "__main__":
    main()
