##models.py
import logging
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class EntityKind(str, Enum):
    """Entity types; the value is the API path segment."""
    POLYANET = "polyanets"
    SOLOON = "soloons"
    COMETH = "comeths"


class AstralObject(BaseModel):
    kind: EntityKind
    row: int
    column: int
    attribute: Optional[str] = None  # color for soloons, direction for comeths


class EntityPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidate_id: str = Field(alias="candidateId")
    row: int
    column: int
    additional_param: Optional[str] = Field(default=None, alias="additionalParam")

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)

    def __str__(self):
        return (f"candidateId={self.candidate_id}, row={self.row}, "
                f"column={self.column}, additionalParam={self.additional_param}")


class RunSummary(BaseModel):
    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0

    def record(self, ok: bool):
        self.attempted += 1
        if ok:
            self.succeeded += 1
        else:
            self.failed += 1

    def log(self, title: str):
        logger.info(f"================ {title} ================")
        logger.info(f"Total calls attempted: {self.attempted}")
        logger.info(f"✅ Succeeded: {self.succeeded}")
        logger.info(f"❌ Failed: {self.failed}")
        if self.skipped:
            logger.info(f"⚠️ Skipped: {self.skipped}")
