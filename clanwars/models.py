"""Domain model for scheduled clan wars battles.

A battle's start time arrives in one of three states: the server has not
assigned one yet, it has published an estimate, or it has confirmed the
exact start. ``BattleTime`` carries that state explicitly so that a
confirmed battle without a time cannot be built.

All models are frozen; a fetch produces fresh instances and nothing is
updated in place afterwards.
"""

from __future__ import annotations

import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Returned by ``Battle.time_to_battle`` when the start time is unknown.
TIME_UNKNOWN = -1


def now_millis() -> int:
    """Local wall clock in epoch milliseconds."""
    return int(time.time() * 1000)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TimeState(str, Enum):
    """How much the server has told us about a battle's start."""

    UNKNOWN = "unknown"        # No time assigned
    ESTIMATED = "estimated"    # Time published, not yet confirmed
    CONFIRMED = "confirmed"    # Battle scheduled, exact start known


class BattleTime(BaseModel):
    """Start time of a battle on the server clock."""

    model_config = ConfigDict(frozen=True)

    state: TimeState = Field(default=TimeState.UNKNOWN)
    millis: int = Field(default=0, description="Epoch milliseconds, server clock. 0 when unknown.")

    @model_validator(mode="after")
    def _check_state(self) -> BattleTime:
        if self.state is TimeState.UNKNOWN and self.millis != 0:
            raise ValueError("an unknown start time cannot carry a timestamp")
        if self.state is not TimeState.UNKNOWN and self.millis == 0:
            raise ValueError(f"a {self.state.value} start time needs a timestamp")
        return self

    @classmethod
    def unknown(cls) -> BattleTime:
        return cls()

    @classmethod
    def estimated(cls, millis: int) -> BattleTime:
        return cls(state=TimeState.ESTIMATED, millis=millis)

    @classmethod
    def confirmed(cls, millis: int) -> BattleTime:
        return cls(state=TimeState.CONFIRMED, millis=millis)

    @classmethod
    def from_server(cls, millis: int, started: bool) -> BattleTime:
        """Map the wire pair (time, started) onto a state.

        A zero time is unknown even when the server claims the battle has
        started.
        """
        if millis == 0:
            return cls.unknown()
        if started:
            return cls.confirmed(millis)
        return cls.estimated(millis)


class Province(BaseModel):
    """A contested map region. Identity is the province id alone."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Province id, e.g. NO_02.")
    name: str = Field(..., description="Localized display name.")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Province):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class Battle(BaseModel):
    """One scheduled battle for a clan."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Battle type as reported by the server, e.g. landing.")
    schedule: BattleTime = Field(default_factory=BattleTime.unknown)
    chips: int = Field(default=0, description="Chips at stake.")
    provinces: tuple[Province, ...] = Field(..., description="Required, may be empty.")
    arenas: tuple[str, ...] = Field(..., description="Required, may be empty.")

    @property
    def start_time(self) -> int:
        """Start time in epoch milliseconds (server clock), 0 if unknown."""
        return self.schedule.millis

    @property
    def has_started(self) -> bool:
        """True once the server has assigned a confirmed start time."""
        return self.schedule.state is TimeState.CONFIRMED

    @property
    def is_estimated(self) -> bool:
        return self.schedule.state is TimeState.ESTIMATED

    def time_to_battle(self, drift_ms: int, now_ms: int | None = None) -> int:
        """Milliseconds until the battle starts, never negative.

        ``drift_ms`` is ``local_clock - server_clock``. Returns
        ``TIME_UNKNOWN`` when no start time is known. Evaluated against the
        clock on every call.
        """
        if self.schedule.state is TimeState.UNKNOWN:
            return TIME_UNKNOWN
        if now_ms is None:
            now_ms = now_millis()
        server_now = now_ms - drift_ms
        eta = self.schedule.millis - server_now
        return max(eta, 0)
