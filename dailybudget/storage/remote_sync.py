"""Mini README: Best-effort remote sync over a key-value HTTP endpoint.

Structure:
    * RemoteSyncClient - push/pull serialised ledgers to ``<base_url>/<key>``.
    * MIN_SYNC_KEY_LENGTH - shortest sync key accepted before any request.

Sync is never allowed to break the local ledger: every transport, HTTP or
decoding problem is logged and surfaced as ``False`` (push) or ``None``
(pull). Deciding what to do with a pulled ledger is left to the host.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..budget.ledger import Ledger
from ..configuration import get_settings
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

MIN_SYNC_KEY_LENGTH = 3


class RemoteSyncClient:
    """Push and pull ledgers to a remote key-value store."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.sync_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.sync_timeout_seconds
        self._client = client or httpx.Client(timeout=self.timeout)

    @staticmethod
    def _valid_key(sync_key: str) -> bool:
        return bool(sync_key) and len(sync_key.strip()) >= MIN_SYNC_KEY_LENGTH

    def _url(self, sync_key: str) -> str:
        return f"{self.base_url}/{sync_key.strip()}"

    def push(self, sync_key: str, ledger: Ledger) -> bool:
        """Upload ``ledger``; return whether the endpoint accepted it."""

        if not self._valid_key(sync_key):
            LOGGER.warning("Refusing to push with sync key shorter than %s", MIN_SYNC_KEY_LENGTH)
            return False
        try:
            response = self._client.post(self._url(sync_key), json=ledger.as_dict())
        except httpx.HTTPError as error:
            LOGGER.error("Sync push for %s failed: %s", ledger.key, error)
            return False
        if response.is_success:
            LOGGER.info("Pushed ledger %s to remote store", ledger.key)
            return True
        LOGGER.warning("Sync push for %s rejected with HTTP %s", ledger.key, response.status_code)
        return False

    def pull(self, sync_key: str) -> Optional[Ledger]:
        """Download the ledger stored under ``sync_key`` if there is a usable one."""

        if not self._valid_key(sync_key):
            LOGGER.warning("Refusing to pull with sync key shorter than %s", MIN_SYNC_KEY_LENGTH)
            return None
        try:
            response = self._client.get(self._url(sync_key))
        except httpx.HTTPError as error:
            LOGGER.warning("Sync pull failed (probably a new key): %s", error)
            return None
        if not response.is_success:
            LOGGER.info("Sync pull returned HTTP %s", response.status_code)
            return None
        if not response.text.strip():
            return None
        try:
            return Ledger.from_dict(response.json())
        except ValueError as error:  # includes UnicodeDecodeError and StructuralMismatchError
            LOGGER.error("Pulled payload is not a usable ledger: %s", error)
            return None

    def close(self) -> None:
        self._client.close()
