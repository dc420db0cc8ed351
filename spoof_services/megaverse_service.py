import os
import logging
from typing import List, Optional
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from models import EntityKind

# In-memory stand-in for the megaverse API, for local runs:
#   uvicorn spoof_services.megaverse_service:app --port 8010
#   MEGAVERSE_BASE_URL=http://localhost:8010/api python create_pattern.py

logger = logging.getLogger("megaverse_service")

CANDIDATE_ID = os.getenv("MEGAVERSE_CANDIDATE_ID", "0e27919e-d9b5-46a6-97ec-86aa0ee65ede")
GRID_SIZE = int(os.getenv("MEGAVERSE_GRID_SIZE", "30"))

SOLOON_COLORS = {"blue", "red", "purple", "white"}
COMETH_DIRECTIONS = {"up", "down", "right", "left"}
TYPE_CODES = {EntityKind.POLYANET: 0, EntityKind.SOLOON: 1, EntityKind.COMETH: 2}


def default_goal(size: int = 11) -> List[List[str]]:
    """X-shaped polyanet cross with a two-cell margin."""
    goal = [["SPACE"] * size for _ in range(size)]
    for i in range(2, size - 2):
        goal[i][i] = "POLYANET"
        goal[i][size - 1 - i] = "POLYANET"
    return goal


_goal = default_goal()
_grid = [[None] * GRID_SIZE for _ in range(GRID_SIZE)]

app = FastAPI(title="Spoofed Megaverse Service", version="v1")

# -------------------------
# Models
# -------------------------
class EntityRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidate_id: str = Field(alias="candidateId")
    row: int
    column: int
    additional_param: Optional[str] = Field(default=None, alias="additionalParam")

# -------------------------
# State helpers
# -------------------------
def set_goal(goal: List[List[str]]):
    global _goal
    _goal = goal


def reset():
    global _goal, _grid
    _goal = default_goal()
    _grid = [[None] * GRID_SIZE for _ in range(GRID_SIZE)]


def _check_candidate(candidate_id: str):
    if candidate_id != CANDIDATE_ID:
        raise HTTPException(status_code=404, detail=f"Unknown candidate: {candidate_id}")


def _check_cell(payload: EntityRequest):
    _check_candidate(payload.candidate_id)
    if not (0 <= payload.row < GRID_SIZE and 0 <= payload.column < GRID_SIZE):
        raise HTTPException(status_code=400, detail=f"Cell ({payload.row}, {payload.column}) is outside the grid")


def _build_cell(entity: EntityKind, param: Optional[str]) -> dict:
    cell = {"type": TYPE_CODES[entity]}
    if entity == EntityKind.SOLOON:
        if param not in SOLOON_COLORS:
            raise HTTPException(status_code=400, detail=f"Invalid soloon color: {param}")
        cell["color"] = param
    elif entity == EntityKind.COMETH:
        if param not in COMETH_DIRECTIONS:
            raise HTTPException(status_code=400, detail=f"Invalid cometh direction: {param}")
        cell["direction"] = param
    return cell

# -------------------------
# Routes
# -------------------------
@app.get("/ping")
async def ping():
    return {"status": "ok"}


@app.get("/api/map/{candidate_id}/goal")
async def get_goal(candidate_id: str):
    _check_candidate(candidate_id)
    return {"goal": _goal}


@app.get("/api/map/{candidate_id}")
async def get_map(candidate_id: str):
    _check_candidate(candidate_id)
    return {"map": {"_id": candidate_id, "content": _grid}}


@app.post("/api/{entity}")
async def create_entity(entity: EntityKind, payload: EntityRequest):
    _check_cell(payload)
    _grid[payload.row][payload.column] = _build_cell(entity, payload.additional_param)
    logger.info(f"🔹 POST /api/{entity.value} ({payload.row}, {payload.column})")
    return {}


@app.delete("/api/{entity}")
async def delete_entity(entity: EntityKind, payload: EntityRequest):
    _check_cell(payload)
    cell = _grid[payload.row][payload.column]
    if cell is not None and cell["type"] == TYPE_CODES[entity]:
        _grid[payload.row][payload.column] = None
    logger.info(f"🔹 DELETE /api/{entity.value} ({payload.row}, {payload.column})")
    return {}
