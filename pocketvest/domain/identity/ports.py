"""
Port interfaces (ABCs) for the identity bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional


class CredentialStore(ABC):
    """Port for the durable username → password hash mapping.

    Pure data access, no business rules. Implementations never raise
    on unreadable data; they behave as an empty store instead.
    """

    @abstractmethod
    def get(self, username: str) -> Optional[str]:
        """Return the stored password hash, or None if absent."""
        raise NotImplementedError

    @abstractmethod
    def put(self, username: str, password_hash: str) -> bool:
        """Insert or replace a record. Returns True once it is durable."""
        raise NotImplementedError

    @abstractmethod
    def remove(self, username: str) -> bool:
        """Delete a record if present. Returns True once the change is durable."""
        raise NotImplementedError

    @abstractmethod
    def contains(self, username: str) -> bool:
        """Return True if a record exists for the exact username."""
        raise NotImplementedError

    @abstractmethod
    def all_usernames(self) -> set[str]:
        """Return every stored username."""
        raise NotImplementedError
