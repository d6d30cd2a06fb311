"""
Adapter: JSON file credential store.

Implements the CredentialStore port.
Persists the username → password hash mapping as a flat JSON object:

    {"alice": "2bb80d53...", "bob": "9f86d081..."}

The file is read once at construction and rewritten on every mutation.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pocketvest.domain.identity.ports import CredentialStore

logger = logging.getLogger(__name__)


class JsonCredentialStore(CredentialStore):
    """Credential store backed by a single JSON file.

    An unreadable or corrupt file is treated as an empty store.
    Writes go to a temporary file in the same directory that then
    replaces the target, so a failed write never truncates the store.
    The in-memory mapping changes only after the replace succeeded.

    Args:
        path: Location of the JSON file. Parent directories are created
            on first write.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._records: dict[str, str] = self._read()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, username: str) -> Optional[str]:
        return self._records.get(username)

    def put(self, username: str, password_hash: str) -> bool:
        updated = dict(self._records)
        updated[username] = password_hash
        return self._commit(updated)

    def remove(self, username: str) -> bool:
        if username not in self._records:
            return True
        updated = dict(self._records)
        del updated[username]
        return self._commit(updated)

    def contains(self, username: str) -> bool:
        return username in self._records

    def all_usernames(self) -> set[str]:
        return set(self._records)

    def _read(self) -> dict[str, str]:
        """Load the mapping, falling back to {} on any problem."""
        if not self._path.exists():
            return {}

        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read credential store %s: %s", self._path, exc)
            return {}

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Corrupt credential store %s: %s", self._path, exc)
            return {}

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            logger.warning(
                "Credential store %s is not a flat string mapping; ignoring it.",
                self._path,
            )
            return {}

        logger.info("Loaded %d credential records.", len(data))
        return data

    def _commit(self, records: dict[str, str]) -> bool:
        """Write the full mapping atomically, then adopt it in memory."""
        tmp_name: Optional[str] = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=".credentials-", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(records, handle, sort_keys=True)
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            logger.error("Failed to write credential store %s: %s", self._path, exc)
            return False
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.debug("Could not remove temp file %s", tmp_name)

        self._records = records
        return True
