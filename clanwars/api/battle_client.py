"""Client for the clan wars battle schedule service."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

import httpx

from clanwars.config import (
    BASE_URL,
    BATTLES_PATH_TEMPLATE,
    BATTLES_QUERY,
    HTTP_TIMEOUT,
    USE_SAMPLE_DATA,
)
from clanwars.errors import DecodeError, DriftUnknown, HeaderUnparsable, TransportError
from clanwars.models import Battle
from clanwars.parsing import parse_battles_document, parse_server_date
from clanwars.sample_data import generate_sample_battles

logger = logging.getLogger(__name__)


class BattleClient:
    """Fetch battle schedules and track the server clock drift.

    Drift (``local_clock - server_clock``, milliseconds) is learned from the
    ``Date`` header of every successful fetch. Create one client per target
    service and share it; drift updates are guarded by a lock so the client
    can be used from several threads.
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        *,
        client: httpx.Client | None = None,
        clock: Callable[[], float] = time.time,
        timeout: float = HTTP_TIMEOUT,
        use_sample_data: bool = USE_SAMPLE_DATA,
    ) -> None:
        self._base_url = ""
        self.set_base_url(base_url)
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        self._clock = clock
        self._use_sample_data = use_sample_data

        self._lock = threading.Lock()
        self._drift_ms = 0
        self._drift_known = False

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> BattleClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Settings / state
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_base_url(self, address: str) -> None:
        """Point subsequent requests at another server origin."""
        if not address:
            raise ValueError("base url must not be empty")
        self._base_url = address.rstrip("/")

    @property
    def drift_known(self) -> bool:
        with self._lock:
            return self._drift_known

    @property
    def drift_ms(self) -> int:
        return self.get_drift_millis()

    def get_drift_millis(self) -> int:
        """Return ``local_clock - server_clock`` in milliseconds.

        Raises DriftUnknown until a fetch has completed successfully.
        """
        with self._lock:
            if not self._drift_known:
                raise DriftUnknown(
                    "server time difference is not known before a request is made"
                )
            return self._drift_ms

    def now_millis(self) -> int:
        return int(self._clock() * 1000)

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def fetch_battles(self, clan_id: str) -> list[Battle]:
        """GET /clans/<clan_id>/battles/?type=table.

        Returns the battles in server order. Raises TransportError or
        DecodeError; in both cases the previous drift is kept.
        """
        if not clan_id:
            raise ValueError("clan_id must not be empty")

        if self._use_sample_data:
            battles = generate_sample_battles(self.now_millis())
            self._set_drift(0)
            logger.info(
                "battles_fetched",
                extra={"clan_id": clan_id, "count": len(battles), "sample": True},
            )
            return battles

        url = self._base_url + BATTLES_PATH_TEMPLATE.format(clan_id=clan_id)
        logger.debug("battles_request", extra={"clan_id": clan_id, "url": url})
        try:
            resp = self._client.get(url, params=BATTLES_QUERY)
            resp.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning(
                "battles_fetch_error", extra={"clan_id": clan_id, "url": url}, exc_info=True
            )
            raise TransportError(f"request to {url} failed: {exc}") from exc

        received_ms = self.now_millis()
        logger.debug(
            "battles_response",
            extra={
                "clan_id": clan_id,
                "status_code": resp.status_code,
                "size_bytes": len(resp.content),
                "date": resp.headers.get("date"),
            },
        )
        drift = self._drift_from_headers(resp.headers, received_ms)

        try:
            document = resp.json()
        except ValueError as exc:
            logger.warning("battles_decode_error", extra={"clan_id": clan_id}, exc_info=True)
            raise DecodeError(f"response from {url} is not valid JSON") from exc
        try:
            battles = parse_battles_document(document)
        except DecodeError:
            logger.warning("battles_decode_error", extra={"clan_id": clan_id}, exc_info=True)
            raise

        # Only a fully successful fetch moves the drift.
        if drift is not None:
            self._set_drift(drift)

        logger.info("battles_fetched", extra={"clan_id": clan_id, "count": len(battles)})
        return battles

    def time_to_battle(self, battle: Battle) -> int:
        """Drift-corrected milliseconds until ``battle`` starts.

        Returns TIME_UNKNOWN for battles without a start time; raises
        DriftUnknown if no fetch has taught us the server clock yet.
        """
        return battle.time_to_battle(self.get_drift_millis(), self.now_millis())

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _drift_from_headers(self, headers: httpx.Headers, received_ms: int) -> int | None:
        raw = headers.get("date")
        if raw is None:
            return None
        try:
            server_ms = parse_server_date(raw)
        except HeaderUnparsable:
            logger.debug("date_header_unparsable", extra={"date": raw})
            return None
        return received_ms - server_ms

    def _set_drift(self, drift_ms: int) -> None:
        with self._lock:
            self._drift_ms = drift_ms
            self._drift_known = True
        logger.debug("drift_updated", extra={"drift_ms": drift_ms})
