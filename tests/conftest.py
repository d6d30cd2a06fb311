"""
Shared fixtures and in-memory port fakes for the test suite.
"""

from datetime import datetime
from typing import Optional

import pytest

from pocketvest.domain.identity.identity_manager import IdentityManager
from pocketvest.domain.identity.ports import CredentialStore
from pocketvest.domain.watchlist.entities import WatchlistEntry
from pocketvest.domain.watchlist.errors import WatchlistPersistenceError
from pocketvest.domain.watchlist.ports import WatchlistRepository


class FakeCredentialStore(CredentialStore):
    """Dict-backed store whose writes can be made to fail."""

    def __init__(self, records: Optional[dict[str, str]] = None) -> None:
        self.records = dict(records or {})
        self.fail_writes = False

    def get(self, username: str) -> Optional[str]:
        return self.records.get(username)

    def put(self, username: str, password_hash: str) -> bool:
        if self.fail_writes:
            return False
        self.records[username] = password_hash
        return True

    def remove(self, username: str) -> bool:
        if self.fail_writes:
            return False
        self.records.pop(username, None)
        return True

    def contains(self, username: str) -> bool:
        return username in self.records

    def all_usernames(self) -> set[str]:
        return set(self.records)


class FakeWatchlistRepository(WatchlistRepository):
    """List-backed repository with switchable read/write failures."""

    def __init__(self) -> None:
        self.rows: list[WatchlistEntry] = []
        self.fail_reads = False
        self.fail_writes = False

    def list_entries(self) -> list[WatchlistEntry]:
        if self.fail_reads:
            raise WatchlistPersistenceError("disk unreadable")
        return sorted(self.rows, key=lambda e: e.date_added, reverse=True)

    def add(self, entry: WatchlistEntry) -> None:
        if self.fail_writes:
            raise WatchlistPersistenceError("disk full")
        self.rows.append(entry)

    def remove(self, item_id: str) -> int:
        if self.fail_writes:
            raise WatchlistPersistenceError("disk full")
        before = len(self.rows)
        self.rows = [e for e in self.rows if e.item_id != item_id]
        return before - len(self.rows)


@pytest.fixture
def store() -> FakeCredentialStore:
    return FakeCredentialStore()


@pytest.fixture
def identity(store: FakeCredentialStore) -> IdentityManager:
    return IdentityManager(store, clock=lambda: datetime(2024, 11, 14, 9, 30))


@pytest.fixture
def watchlist_repo() -> FakeWatchlistRepository:
    return FakeWatchlistRepository()
