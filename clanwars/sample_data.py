"""Generated battle schedules for running without the live service."""

from __future__ import annotations

from typing import Any

from clanwars.models import Battle
from clanwars.parsing import parse_battle

_SAMPLE_PROVINCES = ["Tromssa", "Province X", "Province Y", "Province Z"]
_SAMPLE_ARENAS = ["Erlenberg", "Arena X", "Arena Y", "Arena Z"]


def sample_items(now_ms: int) -> list[dict[str, Any]]:
    """Raw items shaped like ``request_data.items`` of a real response.

    Start times are relative to ``now_ms``: 12m15s and 17m45s ahead, two
    minutes past the next full hour, and one with no time at all.
    """
    now_s = now_ms // 1000
    times = [
        now_s + 12 * 60 + 15,
        now_s + 17 * 60 + 45,
        now_s // 3600 * 3600 + 62 * 60,
        0,
    ]
    return [
        {
            "arenas": [arena],
            "started": False,
            "type": "landing",
            "provinces": [{"name": province, "id": "LV_02"}],
            "chips": 15,
            "time": start,
        }
        for province, arena, start in zip(_SAMPLE_PROVINCES, _SAMPLE_ARENAS, times)
    ]


def generate_sample_battles(now_ms: int) -> list[Battle]:
    return [parse_battle(item) for item in sample_items(now_ms)]
