import json
import asyncio
import logging
from typing import Optional, Union
import requests
import requests.adapters
from config import Settings
from models import EntityKind, EntityPayload

logger = logging.getLogger(__name__)

CREATE = "POST"
DELETE = "DELETE"

HEADERS = {"Content-Type": "application/json"}

# Matches the largest default asyncio.to_thread worker pool.
POOL_MAXSIZE = 32


def build_session() -> requests.Session:
    session = requests.Session()
    adapter = requests.adapters.HTTPAdapter(pool_connections=1, pool_maxsize=POOL_MAXSIZE)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class MegaverseClient:
    """
    Thin wrapper around a shared requests.Session for the megaverse API.

    Blocking calls are exposed as coroutines through asyncio.to_thread, so the
    same session serves every in-flight request of a run.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session if session is not None else build_session()

    def build_payload(self, row: int, column: int, param: Optional[str] = None) -> EntityPayload:
        return EntityPayload(
            candidate_id=self.settings.candidate_id,
            row=row,
            column=column,
            additional_param=param,
        )

    # -------------------- Sending --------------------

    def send_request(self, method: str, entity: Union[EntityKind, str], payload: EntityPayload) -> bool:
        entity = getattr(entity, "value", entity)
        url = self.settings.entity_url(entity)

        if self.settings.dry_run:
            logger.info(f"🧪 Dry run: skipped {method} {url} ({payload})")
            return True

        try:
            resp = self.session.request(
                method,
                url,
                headers=HEADERS,
                data=json.dumps(payload.to_json()),
                timeout=self.settings.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"❌ Exception during {method} entity at ({payload}): {e}")
            return False

        if 200 <= resp.status_code < 300:
            action = "created" if method == CREATE else "deleted"
            logger.info(f"✅ Entity {action} at ({payload})")
            return True

        logger.error(f"❌ Error with {method} entity at ({payload}): {resp.status_code}")
        return False

    async def send(self, method: str, entity: Union[EntityKind, str], payload: EntityPayload) -> bool:
        return await asyncio.to_thread(self.send_request, method, entity, payload)

    async def create_entity(self, entity, row: int, column: int, param: Optional[str] = None) -> bool:
        return await self.send(CREATE, entity, self.build_payload(row, column, param))

    async def delete_entity(self, entity, row: int, column: int, param: Optional[str] = None) -> bool:
        return await self.send(DELETE, entity, self.build_payload(row, column, param))

    # -------------------- Retrieval --------------------

    def get_json(self, url: str):
        """GET a JSON document. Raises requests.RequestException or ValueError."""
        resp = self.session.request("GET", url, headers=HEADERS, timeout=self.settings.timeout)
        resp.raise_for_status()
        return resp.json()

    def fetch_map(self):
        try:
            return self.get_json(self.settings.map_url)
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"⚠️ Could not fetch current map: {e}")
            return None

    def close(self):
        self.session.close()
