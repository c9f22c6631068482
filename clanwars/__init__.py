"""Client for the clan wars battle schedule service.

Fetches the scheduled battles of a clan and converts their start times
into countdowns corrected for the drift between the local clock and the
server clock.

Modules:
    api.battle_client -- BattleClient: fetch + drift tracking
    models            -- Battle, BattleTime, Province
    parsing           -- response document and Date header decoding
    sample_data       -- generated schedules for offline use
    errors            -- exception hierarchy
"""

from clanwars.api.battle_client import BattleClient
from clanwars.errors import ClanWarsError, DecodeError, DriftUnknown, HeaderUnparsable, TransportError
from clanwars.models import TIME_UNKNOWN, Battle, BattleTime, Province, TimeState

__all__ = [
    "BattleClient",
    "Battle",
    "BattleTime",
    "Province",
    "TimeState",
    "TIME_UNKNOWN",
    "ClanWarsError",
    "DecodeError",
    "DriftUnknown",
    "HeaderUnparsable",
    "TransportError",
]
