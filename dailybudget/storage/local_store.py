"""Mini README: Local persistence collaborators for period ledgers.

Structure:
    * LedgerStore - abstract ``load``/``save`` contract keyed by ``YYYY-MM``.
    * InMemoryLedgerStore - dictionary-backed store for tests and previews.
    * JsonFileLedgerStore - one JSON file per period in the data directory.

Stores only move the serialised ``Ledger.as_dict`` shape around. A payload
that cannot be read back into a ledger is reported as missing so the period
manager can rebuild the period instead of failing.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..budget.errors import StructuralMismatchError
from ..budget.ledger import Ledger
from ..configuration import get_settings
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class LedgerStore(ABC):
    """Persistence contract used by ``PeriodManager``."""

    @abstractmethod
    def load(self, key: str) -> Optional[Ledger]:
        """Return the stored ledger for ``key`` or ``None`` when unavailable."""

    @abstractmethod
    def save(self, key: str, ledger: Ledger) -> bool:
        """Persist ``ledger`` under ``key`` and report success."""


class InMemoryLedgerStore(LedgerStore):
    """Keep serialised ledgers in a dictionary."""

    def __init__(self, payloads: Optional[Dict[str, dict]] = None) -> None:
        self._payloads: Dict[str, dict] = dict(payloads or {})

    def load(self, key: str) -> Optional[Ledger]:
        payload = self._payloads.get(key)
        if payload is None:
            return None
        try:
            return Ledger.from_dict(payload)
        except StructuralMismatchError as error:
            LOGGER.warning("Stored ledger %s is unusable: %s", key, error)
            return None

    def save(self, key: str, ledger: Ledger) -> bool:
        self._payloads[key] = ledger.as_dict()
        return True


class JsonFileLedgerStore(LedgerStore):
    """Persist each period as ``<directory>/<key>.json``."""

    def __init__(self, directory: Optional[Path] = None) -> None:
        self.directory = Path(directory or get_settings().data_directory / "ledgers")
        self.directory.mkdir(parents=True, exist_ok=True)
        LOGGER.debug("Ledger storage directory set to %s", self.directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Optional[Ledger]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
            return Ledger.from_dict(payload)
        except (OSError, ValueError) as error:
            LOGGER.warning("Could not read ledger file %s: %s", path, error)
            return None

    def save(self, key: str, ledger: Ledger) -> bool:
        path = self._path(key)
        try:
            path.write_text(json.dumps(ledger.as_dict(), indent=2), encoding="utf-8")
        except OSError as error:
            LOGGER.error("Could not write ledger file %s: %s", path, error)
            return False
        LOGGER.debug("Saved ledger %s to %s", key, path)
        return True
