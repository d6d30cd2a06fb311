"""
Adapter: SQL watchlist repository.

Implements the WatchlistRepository port on top of a SQLAlchemy engine
(SQLite by default, any SQLAlchemy-supported database works).
Each entry is a row of the watchlist_entries table; an item id may
in principle appear more than once and is removed by exact match.
"""

import logging
from datetime import datetime

from sqlalchemy import Column, Integer, MetaData, String, Table, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from pocketvest.domain.watchlist.entities import WatchlistEntry
from pocketvest.domain.watchlist.errors import WatchlistPersistenceError
from pocketvest.domain.watchlist.ports import WatchlistRepository

logger = logging.getLogger(__name__)

_metadata = MetaData()

watchlist_entries = Table(
    "watchlist_entries",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("item_id", String(128), nullable=False, index=True),
    # ISO-8601 text keeps timezone offsets intact across backends
    Column("date_added", String(40), nullable=False),
)


class SqlWatchlistRepository(WatchlistRepository):
    """Persists watchlist entries in a SQL table.

    The table is created on first use if it does not exist, so an
    unreachable database surfaces as WatchlistPersistenceError from the
    first operation rather than from the constructor.

    Args:
        engine: SQLAlchemy engine bound to the watchlist database.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._schema_ready = False

    def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        try:
            _metadata.create_all(self._engine, checkfirst=True)
        except SQLAlchemyError as exc:
            raise WatchlistPersistenceError(f"schema setup failed: {exc}") from exc
        self._schema_ready = True

    def list_entries(self) -> list[WatchlistEntry]:
        """Return all entries ordered by date_added descending."""
        query = text(
            """
            SELECT item_id, date_added
            FROM watchlist_entries
            ORDER BY date_added DESC, id DESC
            """
        )

        self._ensure_schema()
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(query).fetchall()
        except SQLAlchemyError as exc:
            raise WatchlistPersistenceError(f"read failed: {exc}") from exc

        entries = []
        for row in rows:
            try:
                added = datetime.fromisoformat(row[1])
            except (TypeError, ValueError) as exc:
                raise WatchlistPersistenceError(
                    f"bad date_added for {row[0]!r}: {row[1]!r}"
                ) from exc
            entries.append(WatchlistEntry(item_id=row[0], date_added=added))

        logger.debug("Read %d watchlist entries.", len(entries))
        return entries

    def add(self, entry: WatchlistEntry) -> None:
        """Insert one entry in its own transaction."""
        query = text(
            """
            INSERT INTO watchlist_entries (item_id, date_added)
            VALUES (:item_id, :date_added)
            """
        )

        self._ensure_schema()
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    query,
                    {
                        "item_id": entry.item_id,
                        "date_added": entry.date_added.isoformat(),
                    },
                )
        except SQLAlchemyError as exc:
            raise WatchlistPersistenceError(f"insert failed: {exc}") from exc

    def remove(self, item_id: str) -> int:
        """Delete every entry for item_id. Returns the number of rows deleted."""
        query = text("DELETE FROM watchlist_entries WHERE item_id = :item_id")

        self._ensure_schema()
        try:
            with self._engine.begin() as conn:
                result = conn.execute(query, {"item_id": item_id})
        except SQLAlchemyError as exc:
            raise WatchlistPersistenceError(f"delete failed: {exc}") from exc

        return result.rowcount or 0
