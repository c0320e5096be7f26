"""
Pydantic schema of the persisted state blob.

The blob is a flat camelCase JSON object:

    prizes, containers, gameState, currentRoundIndex,
    casesOpenedInCurrentRound, isAutoWin, targetPrizeId

Loading is forgiving: every top-level field is validated on its own
and falls back to its default when it is missing or malformed.
"""

from __future__ import annotations
from typing import Any, Optional
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..engine_core.state import Category, GamePhase

logger = logging.getLogger(__name__)


class BlobModel(BaseModel):
    """Base for blob records: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PrizeRecord(BlobModel):
    id: str
    name: str
    image_url: str = ""
    value: float = Field(ge=0)
    category: Category
    is_revealed: bool = False


class ContainerRecord(BlobModel):
    id: int = Field(ge=1)
    prize: PrizeRecord
    is_open: bool = False
    is_held: bool = False
    is_removed: bool = False


class StateBlob(BlobModel):
    """The whole persisted session."""
    prizes: list[PrizeRecord] = Field(default_factory=list)
    containers: list[ContainerRecord] = Field(default_factory=list)
    game_state: GamePhase = GamePhase.SETUP
    current_round_index: int = Field(default=0, ge=0)
    cases_opened_in_current_round: int = Field(default=0, ge=0)
    is_auto_win: bool = False
    target_prize_id: Optional[str] = None

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def parse_blob(raw: Any) -> StateBlob:
    """
    Validate a loaded blob field by field.

    Args:
        raw: Decoded JSON (anything)

    Returns:
        StateBlob with defaults wherever the input was unusable
    """
    if not isinstance(raw, dict):
        if raw is not None:
            logger.error("Saved state is a %s, not an object; using defaults", type(raw).__name__)
        return StateBlob()

    values: dict[str, Any] = {}
    for name, field_info in StateBlob.model_fields.items():
        key = field_info.alias or name
        if key not in raw:
            continue
        try:
            partial = StateBlob.model_validate({key: raw[key]})
        except ValidationError as e:
            logger.warning(
                "Saved field %s is invalid (%d errors); using default",
                key, e.error_count(),
            )
            continue
        values[name] = getattr(partial, name)

    return StateBlob(**values)
