"""
Tests for the JSON file credential store adapter.

Uses pytest's tmp_path; no shared state between tests.
"""

import json
from pathlib import Path

import pytest

from pocketvest.domain.identity.identity_manager import IdentityManager, hash_password
from pocketvest.infrastructure.identity.json_credential_store import (
    JsonCredentialStore,
)


@pytest.fixture
def path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "credentials.json"


class TestReading:
    """Tests for loading an existing file."""

    def test_missing_file_is_empty(self, path: Path) -> None:
        store = JsonCredentialStore(path)
        assert store.all_usernames() == set()
        assert not path.exists()

    @pytest.mark.parametrize(
        "content",
        [
            b"",
            b"   \n",
            b"{not json",
            b"[1, 2, 3]",
            b'{"alice": 42}',
            b'"just a string"',
            b'{"alice": "\xff\xfe"}',
        ],
    )
    def test_unusable_content_is_empty(self, path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True)
        path.write_bytes(content)

        assert JsonCredentialStore(path).all_usernames() == set()

    def test_reads_flat_mapping(self, path: Path) -> None:
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"alice": "h1", "bob": "h2"}), encoding="utf-8")

        store = JsonCredentialStore(path)
        assert store.all_usernames() == {"alice", "bob"}
        assert store.get("bob") == "h2"
        assert store.get("carol") is None


class TestWriting:
    """Tests for put/remove persistence."""

    def test_put_creates_file(self, path: Path) -> None:
        store = JsonCredentialStore(path)

        assert store.put("alice", "h1") is True
        assert json.loads(path.read_text(encoding="utf-8")) == {"alice": "h1"}

    def test_records_survive_a_new_instance(self, path: Path) -> None:
        JsonCredentialStore(path).put("alice", "h1")

        reopened = JsonCredentialStore(path)
        assert reopened.contains("alice")
        assert reopened.get("alice") == "h1"

    def test_remove_rewrites_file(self, path: Path) -> None:
        store = JsonCredentialStore(path)
        store.put("alice", "h1")
        store.put("bob", "h2")

        assert store.remove("alice") is True
        assert json.loads(path.read_text(encoding="utf-8")) == {"bob": "h2"}

    def test_remove_absent_user_succeeds(self, path: Path) -> None:
        assert JsonCredentialStore(path).remove("ghost") is True

    def test_failed_write_keeps_memory_unchanged(self, tmp_path: Path) -> None:
        blocked = tmp_path / "credentials.json"
        blocked.mkdir()
        store = JsonCredentialStore(blocked)

        assert store.put("alice", "h1") is False
        assert store.contains("alice") is False
        assert list(tmp_path.glob(".credentials-*")) == []


class TestWithIdentityManager:
    """The identity manager over a real file."""

    def test_account_lifecycle_on_disk(self, path: Path) -> None:
        manager = IdentityManager(JsonCredentialStore(path))
        manager.sign_up("alice", "secret1")
        manager.sign_out()

        restarted = IdentityManager(JsonCredentialStore(path))
        assert restarted.signed_in is False
        assert restarted.login("alice", "secret1") is True

        restarted.delete_account()
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    def test_file_holds_digest_only(self, path: Path) -> None:
        IdentityManager(JsonCredentialStore(path)).sign_up("alice", "secret1")

        raw = path.read_text(encoding="utf-8")
        assert "secret1" not in raw
        assert hash_password("secret1") in raw
