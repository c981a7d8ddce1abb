"""Durable storage for coworker records.

Two interchangeable backends share one contract: a JSON document rewritten
whole on every save, and an SQLite table updated row by row. Keys are always
normalized names; both sides re-normalize on read and write since rows written
by older code paths may carry other casings.

Neither backend offers an atomic check-and-insert. Two concurrent creates of the
same name both pass the registry's existence check and the later save wins.
"""

from __future__ import annotations

import json
import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping

from loguru import logger

from coworkers.registry.models import Coworker, normalize_name
from coworkers.utils.helpers import ensure_dir, parse_timestamp


class CoworkerStore(ABC):
    """Abstract interface for coworker persistence."""

    # Whether upsert can refuse an existing key atomically. Callers that need
    # uniqueness under concurrency must serialize creates themselves.
    atomic_insert: bool = False

    @abstractmethod
    def initialize(self) -> CoworkerStore:
        """Create the backing resource if absent. Safe to call repeatedly."""
        raise NotImplementedError

    @abstractmethod
    def load_all(self) -> dict[str, Coworker]:
        """Return every record keyed by normalized name.

        Never raises: a missing, unreadable or corrupt backing resource reads
        as an empty registry.
        """
        raise NotImplementedError

    @abstractmethod
    def upsert(self, name: str, coworker: Coworker) -> None:
        """Insert or replace one record. Durable when this returns."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, name: str) -> None:
        """Remove a record. Missing names are ignored."""
        raise NotImplementedError

    def upsert_all(self, coworkers: Mapping[str, Coworker]) -> None:
        """Insert or replace every record in the mapping."""
        for name, coworker in coworkers.items():
            self.upsert(name, coworker)


class JsonCoworkerStore(CoworkerStore):
    """Coworker table kept as a single JSON document."""

    FILENAME = "coworkers.json"

    def __init__(self, config_dir: Path):
        self.config_dir = Path(config_dir)
        self.path = self.config_dir / self.FILENAME

    def initialize(self) -> JsonCoworkerStore:
        ensure_dir(self.config_dir)
        if not self.path.exists():
            self._write_raw({})
        return self

    def load_all(self) -> dict[str, Coworker]:
        coworkers: dict[str, Coworker] = {}
        for name, data in self._read_raw().items():
            try:
                coworker = Coworker.from_dict(name, data)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping unreadable coworker '{name}' in {self.path}: {e}")
                continue
            coworkers[coworker.name] = coworker
        logger.debug(f"Loaded {len(coworkers)} coworkers from {self.path}")
        return coworkers

    def upsert(self, name: str, coworker: Coworker) -> None:
        self.upsert_all({name: coworker})

    def upsert_all(self, coworkers: Mapping[str, Coworker]) -> None:
        table = self._read_normalized()
        for name, coworker in coworkers.items():
            table[normalize_name(name)] = coworker.to_dict()
        self._write_raw(table)

    def delete(self, name: str) -> None:
        table = self._read_normalized()
        if table.pop(normalize_name(name), None) is not None:
            self._write_raw(table)

    def _read_raw(self) -> dict[str, dict]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read coworkers from {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed coworker table in {self.path}")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, dict)}

    def _read_normalized(self) -> dict[str, dict]:
        return {normalize_name(k): v for k, v in self._read_raw().items()}

    def _write_raw(self, table: dict[str, dict]) -> None:
        ensure_dir(self.config_dir)
        tmp = self.path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(table, indent=2), encoding="utf-8")
        tmp.replace(self.path)


class SqliteCoworkerStore(CoworkerStore):
    """Coworker table kept in an SQLite database."""

    FILENAME = "coworkers.db"

    def __init__(self, config_dir: Path):
        self.config_dir = Path(config_dir)
        self.db_path = self.config_dir / self.FILENAME

    def initialize(self) -> SqliteCoworkerStore:
        """Create the table if absent.

        A corrupt database file is logged and left in place; it reads as an
        empty registry and writes to it fail.
        """
        ensure_dir(self.config_dir)
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS coworkers (
                        name TEXT PRIMARY KEY,
                        session_id TEXT NOT NULL,
                        agent_type TEXT NOT NULL,
                        created_at TEXT NOT NULL,
                        parent_id TEXT
                    )
                    """)
        except sqlite3.DatabaseError as e:
            logger.warning(f"Could not initialize coworker table in {self.db_path}: {e}")
        return self

    def load_all(self) -> dict[str, Coworker]:
        if not self.db_path.exists():
            return {}
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.row_factory = sqlite3.Row
                rows = conn.execute("SELECT * FROM coworkers").fetchall()
        except sqlite3.Error as e:
            logger.warning(f"Failed to read coworkers from {self.db_path}: {e}")
            return {}

        coworkers: dict[str, Coworker] = {}
        for row in rows:
            try:
                coworker = Coworker(
                    name=normalize_name(row["name"]),
                    session_id=row["session_id"],
                    agent_type=row["agent_type"],
                    created_at=parse_timestamp(row["created_at"]),
                    parent_id=row["parent_id"] or None,
                )
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping unreadable coworker row '{row['name']}': {e}")
                continue
            coworkers[coworker.name] = coworker
        logger.debug(f"Loaded {len(coworkers)} coworkers from {self.db_path}")
        return coworkers

    def upsert(self, name: str, coworker: Coworker) -> None:
        self.upsert_all({name: coworker})

    def upsert_all(self, coworkers: Mapping[str, Coworker]) -> None:
        with sqlite3.connect(self.db_path) as conn:
            for name, coworker in coworkers.items():
                key = normalize_name(name)
                self._delete_variants(conn, key)
                conn.execute(
                    """
                    INSERT OR REPLACE INTO coworkers
                        (name, session_id, agent_type, created_at, parent_id)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        key,
                        coworker.session_id,
                        coworker.agent_type,
                        coworker.created_at.isoformat(),
                        coworker.parent_id,
                    ),
                )

    def delete(self, name: str) -> None:
        key = normalize_name(name)
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM coworkers WHERE name = ?", (key,))
            self._delete_variants(conn, key)

    @staticmethod
    def _delete_variants(conn: sqlite3.Connection, key: str) -> None:
        """Drop rows stored under a differently-cased form of ``key``."""
        names = [row[0] for row in conn.execute("SELECT name FROM coworkers")]
        for stored in names:
            if stored != key and normalize_name(stored) == key:
                conn.execute("DELETE FROM coworkers WHERE name = ?", (stored,))


STORE_BACKENDS: dict[str, type[CoworkerStore]] = {
    "json": JsonCoworkerStore,
    "sqlite": SqliteCoworkerStore,
}


def create_store(backend: str, config_dir: Path) -> CoworkerStore:
    """Build and initialize the store for ``backend`` inside ``config_dir``."""
    try:
        store_cls = STORE_BACKENDS[backend]
    except KeyError:
        raise ValueError(
            f"Unknown coworker storage '{backend}' (expected one of: {', '.join(STORE_BACKENDS)})"
        ) from None
    return store_cls(config_dir).initialize()
