"""SQLite persistence for designs computed through the gateway."""

from __future__ import annotations

import json
import sqlite3
import threading
import time
import uuid
from contextlib import closing
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from speakerbox_core import EnclosureTopology

DEFAULT_DB_PATH = Path(__file__).resolve().parent / "designs.db"
VALID_TOPOLOGIES = {member.value for member in EnclosureTopology}

_SCHEMA = """
CREATE TABLE IF NOT EXISTS designs (
    id TEXT PRIMARY KEY,
    topology TEXT NOT NULL,
    created_at REAL NOT NULL,
    driver TEXT NOT NULL,
    options TEXT NOT NULL,
    result TEXT NOT NULL
)
"""
_JSON_COLUMNS = ("driver", "options", "result")


@dataclass(slots=True)
class DesignRecord:
    """One stored design: the request that produced it and the result body."""

    id: str
    topology: str
    created_at: float
    driver: dict[str, Any]
    options: dict[str, Any]
    result: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> DesignRecord:
        decoded = {column: json.loads(row[column]) if row[column] else {} for column in _JSON_COLUMNS}
        return cls(id=row["id"], topology=row["topology"], created_at=row["created_at"], **decoded)


class DesignStore:
    """Designs keyed by id; writes are serialised so the store can back a threaded server."""

    def __init__(self, db_path: str | Path | None = None) -> None:
        self._path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._write(_SCHEMA)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._path), timeout=30, isolation_level=None, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _query(self, sql: str, params: tuple[Any, ...] = ()) -> list[sqlite3.Row]:
        with closing(self._connect()) as conn:
            return conn.execute(sql, params).fetchall()

    def _write(self, sql: str, params: tuple[Any, ...] = ()) -> None:
        with self._lock, closing(self._connect()) as conn:
            conn.execute(sql, params)

    def save_design(
        self,
        topology: str,
        driver: dict[str, Any],
        options: dict[str, Any],
        result: dict[str, Any],
    ) -> DesignRecord:
        """Persist a design and return the stored record. ``topology`` must be a canonical name."""

        if topology not in VALID_TOPOLOGIES:
            raise ValueError(f"Unsupported topology: {topology}")
        record = DesignRecord(
            id=uuid.uuid4().hex,
            topology=topology,
            created_at=time.time(),
            driver=dict(driver),
            options=dict(options),
            result=dict(result),
        )
        self._write(
            "INSERT INTO designs (id, topology, created_at, driver, options, result) VALUES (?, ?, ?, ?, ?, ?)",
            (
                record.id,
                record.topology,
                record.created_at,
                *(json.dumps(getattr(record, column)) for column in _JSON_COLUMNS),
            ),
        )
        return record

    def get_design(self, design_id: str) -> DesignRecord | None:
        rows = self._query("SELECT * FROM designs WHERE id = ?", (design_id,))
        return DesignRecord.from_row(rows[0]) if rows else None

    def list_designs(self, *, limit: int = 20, topology: str | None = None) -> list[DesignRecord]:
        """Return the newest designs first, optionally restricted to one topology."""

        if topology is None:
            rows = self._query(
                "SELECT * FROM designs ORDER BY created_at DESC, rowid DESC LIMIT ?", (max(limit, 1),)
            )
        elif topology in VALID_TOPOLOGIES:
            rows = self._query(
                "SELECT * FROM designs WHERE topology = ? ORDER BY created_at DESC, rowid DESC LIMIT ?",
                (topology, max(limit, 1)),
            )
        else:
            raise ValueError(f"Unsupported topology filter: {topology}")
        return [DesignRecord.from_row(row) for row in rows]

    def topology_counts(self) -> dict[str, int]:
        counts = dict.fromkeys(VALID_TOPOLOGIES, 0)
        for row in self._query("SELECT topology, COUNT(*) AS n FROM designs GROUP BY topology"):
            counts[row["topology"]] = int(row["n"])
        return counts

    def delete_all(self) -> None:
        self._write("DELETE FROM designs")


__all__ = ["DesignStore", "DesignRecord", "VALID_TOPOLOGIES"]
