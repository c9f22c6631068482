"""Client configuration loaded from environment variables."""

import logging
import os
import sys

from pythonjsonlogger import jsonlogger

# ---------------------------------------------------------------------------
# Clan wars service
# ---------------------------------------------------------------------------
BASE_URL = os.environ.get("CLANWARS_BASE_URL", "http://cw.worldoftanks.eu")
BATTLES_PATH_TEMPLATE = "/clans/{clan_id}/battles/"
BATTLES_QUERY = {"type": "table"}
DEFAULT_CLAN_ID = "500000218-SPOF"

# ---------------------------------------------------------------------------
# API client settings
# ---------------------------------------------------------------------------
HTTP_TIMEOUT = float(os.environ.get("CLANWARS_HTTP_TIMEOUT", "30.0"))  # httpx timeout in seconds

# Serve generated battles instead of calling the service (offline demos).
USE_SAMPLE_DATA = os.environ.get("CLANWARS_SAMPLE_DATA", "").lower() in ("1", "true", "yes")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def setup_logging() -> None:
    """Configure structured JSON logging."""
    handler = logging.StreamHandler(sys.stderr)
    formatter = jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(LOG_LEVEL)

    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
