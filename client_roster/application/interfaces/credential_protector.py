"""Abstract interface for protecting client credentials at rest."""

from abc import ABC, abstractmethod


class CredentialProtector(ABC):
    """Derives both stored credential forms from one plaintext password."""

    @abstractmethod
    def hash_password(self, plain_password: str) -> str:
        """One-way hash for verification."""
        ...

    @abstractmethod
    def verify_password(self, plain_password: str, password_hash: str) -> bool:
        """Compare a plaintext password with a stored hash."""
        ...

    @abstractmethod
    def seal(self, plain_password: str) -> str:
        """Reversibly encrypt the password for later display."""
        ...

    @abstractmethod
    def reveal(self, sealed_password: str) -> str:
        """Decrypt a value produced by :meth:`seal`."""
        ...
