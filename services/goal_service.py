import asyncio
import logging
from typing import List, Optional, Tuple
import requests
from jsonschema import validate, ValidationError
from models import AstralObject, EntityKind, RunSummary
from services.request_service import MegaverseClient

logger = logging.getLogger(__name__)

GOAL_SCHEMA = {
    "type": "object",
    "required": ["goal"],
    "properties": {
        "goal": {
            "type": "array",
            "items": {"type": "array", "items": {"type": "string"}},
        }
    },
}

# -------------------- Classification --------------------

def classify_cell(label: str) -> Tuple[Optional[EntityKind], Optional[str]]:
    """
    Map a goal cell label to (kind, attribute).
    - 'POLYANET'    → (POLYANET, None)
    - 'RED_SOLOON'  → (SOLOON, 'red')
    - 'LEFT_COMETH' → (COMETH, 'left')
    Unrecognised labels return (None, None).
    """
    value = label.lower()
    if "polyanet" in value:
        return EntityKind.POLYANET, None
    if "soloon" in value:
        return EntityKind.SOLOON, value.split("_")[0]
    if "cometh" in value:
        return EntityKind.COMETH, value.split("_")[0]
    return None, None


def is_space(label: str) -> bool:
    return "space" in label.lower()


def goal_to_objects(goal: List[List[str]], summary: Optional[RunSummary] = None) -> List[AstralObject]:
    """Row-major list of entities to create; space cells and unknown labels are left out."""
    objects = []
    for row, cells in enumerate(goal):
        for column, label in enumerate(cells):
            if is_space(label):
                continue
            kind, attribute = classify_cell(label)
            if kind is None:
                logger.warning(f"⚠️ Unrecognised cell '{label}' at ({row}, {column}), skipping")
                if summary is not None:
                    summary.skipped += 1
                continue
            objects.append(AstralObject(kind=kind, row=row, column=column, attribute=attribute))
    return objects

# -------------------- Fetch --------------------

def fetch_goal(client: MegaverseClient) -> List[List[str]]:
    document = client.get_json(client.settings.goal_url)
    validate(instance=document, schema=GOAL_SCHEMA)
    return document["goal"]

# -------------------- Replication --------------------

async def create_pattern(client: MegaverseClient) -> RunSummary:
    """
    Fetch the goal grid and create one entity per populated cell, in order,
    awaiting each call before the next. Never raises on API failures.
    """
    summary = RunSummary()
    try:
        goal = await asyncio.to_thread(fetch_goal, client)
    except (requests.RequestException, ValueError, ValidationError) as e:
        msg = e.message if isinstance(e, ValidationError) else str(e)
        logger.error(f"❌ Error obtaining goal coordinates: {msg}")
        return summary

    objects = goal_to_objects(goal, summary)
    logger.info(f"📦 Goal has {len(goal)} rows, {len(objects)} entities to create")

    for obj in objects:
        ok = await client.create_entity(obj.kind, obj.row, obj.column, obj.attribute)
        summary.record(ok)

    return summary

