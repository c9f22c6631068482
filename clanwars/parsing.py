"""Translate battle schedule responses into domain models.

The service answers ``GET /clans/<id>/battles/?type=table`` with::

    {"request_data": {"items": [
        {"provinces": [{"name": "Troms", "id": "NO_02"}],
         "started": false, "type": "landing", "time": 0,
         "arenas": ["Erlenberg"], "chips": null}
    ]}}

Every required field must be present with the right type, otherwise the
whole document is rejected with ``DecodeError``.
"""

from __future__ import annotations

import logging
import math
from datetime import timezone
from email.utils import parsedate_to_datetime
from typing import Any

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from clanwars.errors import DecodeError, HeaderUnparsable
from clanwars.models import Battle, BattleTime, Province

logger = logging.getLogger(__name__)


class BattlePayload(BaseModel):
    """Wire shape of one ``request_data.items`` entry.

    Required fields have no default. Optional ones declare theirs here; a
    ``null`` or a value that cannot be read as the field's type falls back
    to that default instead of rejecting the battle.
    """

    type: str = Field(..., description="Required.")
    time: int = Field(..., description="Required. Epoch seconds, 0 when unknown.")
    chips: int = Field(default=0)
    started: bool = Field(default=False)
    provinces: list[Province] = Field(..., description="Required, may be empty.")
    arenas: list[str] = Field(..., description="Required, may be empty.")

    @field_validator("time", "chips", mode="before")
    @classmethod
    def _truncate_fraction(cls, value: Any) -> Any:
        if isinstance(value, float) and math.isfinite(value):
            return int(value)
        return value

    @field_validator("chips", "started", mode="wrap")
    @classmethod
    def _default_when_unreadable(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            default = cls.model_fields[info.field_name].default
            if value is not None:
                logger.debug(
                    "battle_field_defaulted",
                    extra={"field": info.field_name, "value": repr(value)},
                )
            return default

    def to_battle(self) -> Battle:
        return Battle(
            type=self.type,
            schedule=BattleTime.from_server(self.time * 1000, self.started),
            chips=self.chips,
            provinces=tuple(self.provinces),
            arenas=tuple(self.arenas),
        )


def parse_battle(item: Any) -> Battle:
    """Decode one battle entry. Raises DecodeError on any missing or bad field."""
    try:
        payload = BattlePayload.model_validate(item)
    except ValidationError as exc:
        raise DecodeError(f"invalid battle entry: {exc}") from exc
    return payload.to_battle()


def parse_battles_document(document: Any) -> list[Battle]:
    """Decode a full response body (already JSON-decoded) into battles.

    Order is preserved. An empty ``items`` list yields an empty list.
    """
    if not isinstance(document, dict):
        raise DecodeError("response body is not a JSON object")
    request_data = document.get("request_data")
    if not isinstance(request_data, dict):
        raise DecodeError("missing or invalid 'request_data' object")
    items = request_data.get("items")
    if not isinstance(items, list):
        raise DecodeError("missing or invalid 'request_data.items' array")

    battles = [parse_battle(item) for item in items]
    logger.debug("battles_parsed", extra={"count": len(battles)})
    return battles


def parse_server_date(raw: str) -> int:
    """Parse an HTTP ``Date`` header into epoch milliseconds.

    Expects ``"<day-name>, <day> <month-name> <year> HH:MM:SS <zone>"``,
    e.g. ``Wed, 4 Jul 2001 12:08:56 -0700``.
    """
    try:
        parsed = parsedate_to_datetime(raw)
    except (TypeError, ValueError, IndexError) as exc:
        raise HeaderUnparsable(f"unparsable Date header: {raw!r}") from exc
    if parsed is None:
        raise HeaderUnparsable(f"unparsable Date header: {raw!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)
