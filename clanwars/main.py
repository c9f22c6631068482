"""Print the scheduled battles of a clan."""

from __future__ import annotations

import argparse
import logging
from datetime import datetime

from clanwars.api.battle_client import BattleClient
from clanwars.config import BASE_URL, DEFAULT_CLAN_ID, USE_SAMPLE_DATA, setup_logging
from clanwars.errors import ClanWarsError
from clanwars.models import Battle

logger = logging.getLogger(__name__)


def format_timer(battle: Battle, drift_ms: int | None, now_ms: int) -> str:
    """Countdown for confirmed battles, start time of day for estimates."""
    if battle.has_started and drift_ms is not None:
        timer_s = battle.time_to_battle(drift_ms, now_ms) // 1000
        minutes, seconds = divmod(timer_s, 60)
        return f"{minutes}min {seconds:02d}s"
    if battle.start_time > 0:
        start = datetime.fromtimestamp(battle.start_time / 1000)
        return f"(estimated) {start:%x %H:%M}"
    return "Unknown"


def format_battles(battles: list[Battle], drift_ms: int | None, now_ms: int) -> list[str]:
    lines: list[str] = []
    for battle in battles:
        timer = format_timer(battle, drift_ms, now_ms)
        lines.append(f"   type: {battle.type} time: {timer} chips: {battle.chips}")
        lines.extend(f"      province: {p.name}" for p in battle.provinces)
        lines.extend(f"      arena: {a}" for a in battle.arenas)
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show the scheduled clan wars battles of a clan.")
    parser.add_argument("clan_id", nargs="?", default=DEFAULT_CLAN_ID,
                        help="Clan id, the numeric part of the clan page url is enough.")
    parser.add_argument("--base-url", default=BASE_URL, help="Server origin (default: %(default)s).")
    parser.add_argument("--sample", action="store_true", default=USE_SAMPLE_DATA,
                        help="Use generated battles instead of the live service.")
    args = parser.parse_args(argv)

    setup_logging()

    with BattleClient(args.base_url, use_sample_data=args.sample) as client:
        print(f"Requesting battles from {client.base_url}.")
        try:
            battles = client.fetch_battles(args.clan_id)
        except ClanWarsError as exc:
            logger.error("battles_unavailable", extra={"clan_id": args.clan_id})
            print(f"   Error retrieving battles: {exc}")
            return 1

        drift_ms = client.drift_ms if client.drift_known else None
        if drift_ms is None:
            print("Response received (server time difference: unknown)\n")
        else:
            print(f"Response received (server time difference: {int(drift_ms / 1000)} seconds)\n")

        print("Battles:")
        for line in format_battles(battles, drift_ms, client.now_millis()):
            print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
