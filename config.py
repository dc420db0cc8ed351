# ------------------------------------------------------------------------------
# config.py
#
# Purpose:
# Runtime settings for the megaverse client.
# - Loads environment variables from backend/megaverse.env (if present)
# - Builds an immutable Settings object that is passed into the services
# - Configures logging for the entry scripts
# ------------------------------------------------------------------------------

import os
import logging
from pydantic import BaseModel, ConfigDict
from dotenv import load_dotenv

ENV_PATH = os.path.join(os.path.dirname(__file__), "backend", "megaverse.env")

DEFAULT_BASE_URL = "https://challenge.crossmint.io/api"
DEFAULT_CANDIDATE_ID = "0e27919e-d9b5-46a6-97ec-86aa0ee65ede"
DEFAULT_GRID_SIZE = 30

LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    candidate_id: str = DEFAULT_CANDIDATE_ID
    grid_size: int = DEFAULT_GRID_SIZE
    max_concurrency: int = 0  # 0 = no cap
    timeout: float = 30.0
    dry_run: bool = False
    log_level: str = "INFO"

    @property
    def goal_url(self) -> str:
        return f"{self.base_url}/map/{self.candidate_id}/goal"

    @property
    def map_url(self) -> str:
        return f"{self.base_url}/map/{self.candidate_id}"

    def entity_url(self, entity: str) -> str:
        return f"{self.base_url}/{entity}"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings(env_path: str = ENV_PATH) -> Settings:
    """
    Read settings from the environment, after loading the optional .env file.
    Values already set in the process environment win over the file.
    """
    load_dotenv(dotenv_path=env_path)

    try:
        grid_size = int(os.getenv("MEGAVERSE_GRID_SIZE", str(DEFAULT_GRID_SIZE)))
        max_concurrency = int(os.getenv("MEGAVERSE_MAX_CONCURRENCY", "0"))
        timeout = float(os.getenv("MEGAVERSE_TIMEOUT", "30"))
    except ValueError as e:
        raise ValueError(f"Invalid numeric setting in environment: {e}") from e

    if grid_size < 1:
        raise ValueError(f"MEGAVERSE_GRID_SIZE must be positive, got {grid_size}")
    if max_concurrency < 0:
        raise ValueError(f"MEGAVERSE_MAX_CONCURRENCY must be >= 0, got {max_concurrency}")

    return Settings(
        base_url=os.getenv("MEGAVERSE_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        candidate_id=os.getenv("MEGAVERSE_CANDIDATE_ID", DEFAULT_CANDIDATE_ID),
        grid_size=grid_size,
        max_concurrency=max_concurrency,
        timeout=timeout,
        dry_run=_parse_bool(os.getenv("MEGAVERSE_DRY_RUN", "false")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings):
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
