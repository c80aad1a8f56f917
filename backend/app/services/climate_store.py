"""Versioned climate-record store.

Holds the region -> ClimateRecord mapping as an immutable snapshot. Every
edit builds a new mapping and bumps ``version``; readers keep whatever
snapshot they were handed, so a calculation in flight never sees a
partially applied import. Clients re-fetch when the version changes.
"""

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from app.config import settings
from engine.climate.records import DEFAULT_REGIONAL_DATA, ClimateRecord
from engine.climate.tabular import ImportReport, import_climate_csv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClimateSnapshot:
    version: int
    records: Mapping[str, ClimateRecord]


class ClimateStore:
    def __init__(self, path: str | Path | None = None):
        self._path = Path(path) if path else None
        self._lock = threading.Lock()
        self._snapshot = ClimateSnapshot(
            version=1, records=MappingProxyType(self._load())
        )

    # -- persistence --------------------------------------------------------

    def _load(self) -> dict[str, ClimateRecord]:
        if self._path is None or not self._path.exists():
            return dict(DEFAULT_REGIONAL_DATA)
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Climate data file %s unreadable, using defaults: %s", self._path, exc)
            return dict(DEFAULT_REGIONAL_DATA)
        if not isinstance(raw, dict):
            logger.warning(
                "Climate data file %s holds %s, not a region mapping; using defaults",
                self._path, type(raw).__name__,
            )
            return dict(DEFAULT_REGIONAL_DATA)

        records: dict[str, ClimateRecord] = {}
        for name, data in raw.items():
            if not isinstance(data, dict):
                logger.warning(
                    "Skipping region %r in %s: expected an object", name, self._path,
                    extra={"region": name},
                )
                continue
            records[name] = ClimateRecord.from_dict(data)
        return records

    def _save(self, records: Mapping[str, ClimateRecord]) -> None:
        if self._path is None:
            return
        payload = {name: rec.to_dict() for name, rec in records.items()}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    # -- access -------------------------------------------------------------

    def snapshot(self) -> ClimateSnapshot:
        return self._snapshot

    def get(self, region: str) -> ClimateRecord | None:
        return self._snapshot.records.get(region)

    def _commit(self, records: dict[str, ClimateRecord]) -> ClimateSnapshot:
        # Caller holds the lock.
        self._save(records)
        self._snapshot = ClimateSnapshot(
            version=self._snapshot.version + 1,
            records=MappingProxyType(records),
        )
        logger.info(
            "Climate store updated to version %d (%d regions)",
            self._snapshot.version, len(records),
            extra={"version": self._snapshot.version},
        )
        return self._snapshot

    def put(self, region: str, record: ClimateRecord) -> ClimateSnapshot:
        with self._lock:
            records = dict(self._snapshot.records)
            records[region] = record
            return self._commit(records)

    def import_csv(self, csv_text: str) -> tuple[ClimateSnapshot, ImportReport]:
        with self._lock:
            merged, report = import_climate_csv(self._snapshot.records, csv_text)
            if report.accepted == 0:
                return self._snapshot, report
            return self._commit(merged), report

    def reset(self) -> ClimateSnapshot:
        with self._lock:
            return self._commit(dict(DEFAULT_REGIONAL_DATA))


_store: ClimateStore | None = None


def get_climate_store() -> ClimateStore:
    """FastAPI dependency returning the process-wide store."""
    global _store
    if _store is None:
        _store = ClimateStore(settings.climate_data_path or None)
    return _store
