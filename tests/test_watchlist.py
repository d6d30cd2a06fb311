"""
Tests for the watchlist bounded context.

1. WatchlistManager: write-through behaviour against a fake repository.
2. SqlWatchlistRepository: persistence on a temporary SQLite file.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from sqlalchemy import create_engine

from conftest import FakeWatchlistRepository
from pocketvest.domain.watchlist.entities import WatchlistEntry
from pocketvest.domain.watchlist.errors import InvalidItemIdError
from pocketvest.domain.watchlist.watchlist_manager import WatchlistManager
from pocketvest.infrastructure.watchlist.sql_watchlist_repository import (
    SqlWatchlistRepository,
)

T0 = datetime(2024, 11, 25, 12, 0, tzinfo=timezone.utc)


class _TickingClock:
    """Returns T0, T0+1s, T0+2s, ..."""

    def __init__(self) -> None:
        self.ticks = 0

    def __call__(self) -> datetime:
        moment = T0 + timedelta(seconds=self.ticks)
        self.ticks += 1
        return moment


@pytest.fixture
def manager(watchlist_repo: FakeWatchlistRepository) -> WatchlistManager:
    return WatchlistManager(watchlist_repo, clock=_TickingClock())


# ══════════════════════════════════════════════════════════════════════
# WatchlistManager
# ══════════════════════════════════════════════════════════════════════


class TestToggle:
    """Tests for WatchlistManager.toggle."""

    def test_toggle_once_inserts_one_entry(
        self, manager: WatchlistManager, watchlist_repo: FakeWatchlistRepository
    ) -> None:
        assert manager.toggle("bitcoin") is True

        assert manager.items == frozenset({"bitcoin"})
        assert len(watchlist_repo.rows) == 1
        assert watchlist_repo.rows[0].item_id == "bitcoin"
        assert watchlist_repo.rows[0].date_added == T0

    def test_toggle_twice_returns_to_empty(
        self, manager: WatchlistManager, watchlist_repo: FakeWatchlistRepository
    ) -> None:
        manager.toggle("bitcoin")
        assert manager.toggle("bitcoin") is False

        assert manager.items == frozenset()
        assert watchlist_repo.rows == []

    def test_toggle_keeps_other_items(self, manager: WatchlistManager) -> None:
        manager.toggle("bitcoin")
        manager.toggle("ethereum")
        manager.toggle("bitcoin")
        assert manager.items == frozenset({"ethereum"})


class TestAddRemove:
    """Tests for add/remove and their write-through ordering."""

    def test_add_is_idempotent(
        self, manager: WatchlistManager, watchlist_repo: FakeWatchlistRepository
    ) -> None:
        assert manager.add("bitcoin") is True
        assert manager.add("bitcoin") is False
        assert len(watchlist_repo.rows) == 1

    @pytest.mark.parametrize("item_id", ["", "   "])
    def test_blank_item_id_rejected(self, manager: WatchlistManager, item_id: str) -> None:
        with pytest.raises(InvalidItemIdError):
            manager.add(item_id)
        with pytest.raises(InvalidItemIdError):
            manager.remove(item_id)

    def test_failed_add_leaves_memory_unchanged(
        self, manager: WatchlistManager, watchlist_repo: FakeWatchlistRepository
    ) -> None:
        watchlist_repo.fail_writes = True

        assert manager.add("bitcoin") is False
        assert manager.contains("bitcoin") is False
        assert manager.toggle("bitcoin") is False

    def test_failed_remove_keeps_item(
        self, manager: WatchlistManager, watchlist_repo: FakeWatchlistRepository
    ) -> None:
        manager.add("bitcoin")
        watchlist_repo.fail_writes = True

        assert manager.remove("bitcoin") is False
        assert manager.contains("bitcoin") is True
        assert manager.toggle("bitcoin") is True

    def test_remove_deletes_every_durable_match(
        self, manager: WatchlistManager, watchlist_repo: FakeWatchlistRepository
    ) -> None:
        watchlist_repo.rows = [
            WatchlistEntry("bitcoin", T0),
            WatchlistEntry("bitcoin", T0 + timedelta(minutes=1)),
            WatchlistEntry("solana", T0),
        ]
        manager.load()

        assert manager.remove("bitcoin") is True
        assert [e.item_id for e in watchlist_repo.rows] == ["solana"]

    def test_remove_absent_item_is_no_change(self, manager: WatchlistManager) -> None:
        assert manager.remove("dogecoin") is False


class TestLoadAndNotify:
    """Tests for loading from storage and change notifications."""

    def test_load_projects_durable_entries(
        self, manager: WatchlistManager, watchlist_repo: FakeWatchlistRepository
    ) -> None:
        watchlist_repo.rows = [WatchlistEntry("bitcoin", T0), WatchlistEntry("solana", T0)]
        assert manager.load() == frozenset({"bitcoin", "solana"})

    def test_load_failure_yields_empty_set(
        self, manager: WatchlistManager, watchlist_repo: FakeWatchlistRepository
    ) -> None:
        manager.add("bitcoin")
        watchlist_repo.fail_reads = True

        assert manager.load() == frozenset()
        assert manager.items == frozenset()
        assert manager.entries() == []

    def test_observers_see_committed_state(
        self, manager: WatchlistManager, watchlist_repo: FakeWatchlistRepository
    ) -> None:
        seen: list[tuple[frozenset[str], int]] = []
        manager.subscribe(lambda items: seen.append((items, len(watchlist_repo.rows))))

        manager.toggle("bitcoin")
        manager.toggle("bitcoin")

        assert seen == [(frozenset({"bitcoin"}), 1), (frozenset(), 0)]

    def test_failed_write_is_not_published(
        self, manager: WatchlistManager, watchlist_repo: FakeWatchlistRepository
    ) -> None:
        seen: list[frozenset[str]] = []
        manager.subscribe(seen.append)
        watchlist_repo.fail_writes = True

        manager.toggle("bitcoin")
        assert seen == []

    def test_entries_newest_first(self, manager: WatchlistManager) -> None:
        manager.add("bitcoin")
        manager.add("ethereum")
        assert [e.item_id for e in manager.entries()] == ["ethereum", "bitcoin"]


# ══════════════════════════════════════════════════════════════════════
# SqlWatchlistRepository
# ══════════════════════════════════════════════════════════════════════


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "watchlist.db"


def _repo(db_path: Path) -> SqlWatchlistRepository:
    return SqlWatchlistRepository(create_engine(f"sqlite:///{db_path}"))


class TestSqlWatchlistRepository:
    """Tests for the SQL adapter on a temporary SQLite file."""

    def test_empty_database_lists_nothing(self, db_path: Path) -> None:
        assert _repo(db_path).list_entries() == []

    def test_entries_survive_a_new_engine(self, db_path: Path) -> None:
        _repo(db_path).add(WatchlistEntry("bitcoin", T0))

        entries = _repo(db_path).list_entries()
        assert entries == [WatchlistEntry("bitcoin", T0)]
        assert entries[0].date_added.tzinfo is not None

    def test_ordering_is_newest_first(self, db_path: Path) -> None:
        repo = _repo(db_path)
        repo.add(WatchlistEntry("bitcoin", T0))
        repo.add(WatchlistEntry("ethereum", T0 + timedelta(hours=1)))

        assert [e.item_id for e in repo.list_entries()] == ["ethereum", "bitcoin"]

    def test_remove_returns_deleted_count(self, db_path: Path) -> None:
        repo = _repo(db_path)
        repo.add(WatchlistEntry("bitcoin", T0))
        repo.add(WatchlistEntry("bitcoin", T0 + timedelta(seconds=5)))
        repo.add(WatchlistEntry("Bitcoin", T0))

        assert repo.remove("bitcoin") == 2
        assert [e.item_id for e in repo.list_entries()] == ["Bitcoin"]
        assert repo.remove("bitcoin") == 0

    def test_manager_round_trip_through_sqlite(self, db_path: Path) -> None:
        first = WatchlistManager(_repo(db_path), clock=_TickingClock())
        first.toggle("bitcoin")
        first.toggle("solana")
        first.toggle("bitcoin")

        second = WatchlistManager(_repo(db_path))
        assert second.load() == frozenset({"solana"})

    def test_unreachable_database_degrades(self, tmp_path: Path) -> None:
        missing_dir = tmp_path / "missing" / "watchlist.db"
        manager = WatchlistManager(_repo(missing_dir))

        assert manager.load() == frozenset()
        assert manager.add("bitcoin") is False
        assert manager.items == frozenset()
