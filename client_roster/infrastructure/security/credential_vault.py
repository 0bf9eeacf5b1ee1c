"""Credential protection — bcrypt hashes plus a Fernet-sealed display copy.

The hash is what a password check would use. The sealed copy exists so an
administrator can see a client's current password in the dashboard; it is
encrypted with a key that lives in configuration, never in the database.
"""

import logging

from cryptography.fernet import Fernet, InvalidToken
from passlib.context import CryptContext

from client_roster.application.interfaces import CredentialProtector
from client_roster.domain.exceptions import CredentialError

logger = logging.getLogger(__name__)


class CredentialVault(CredentialProtector):
    """Implements CredentialProtector with passlib (bcrypt) and Fernet."""

    crypt_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def __init__(self, encryption_key: str | bytes):
        try:
            self._fernet = Fernet(encryption_key)
        except (ValueError, TypeError) as exc:
            raise CredentialError(f"Invalid credential encryption key: {exc}") from exc

    @classmethod
    def from_settings_key(cls, encryption_key: str) -> "CredentialVault":
        """Build a vault, generating a throwaway key when none is configured."""
        if not encryption_key:
            logger.warning(
                "CREDENTIAL_ENCRYPTION_KEY is not set; using an ephemeral key. "
                "Stored passwords will not be readable after a restart."
            )
            return cls(Fernet.generate_key())
        return cls(encryption_key)

    def hash_password(self, plain_password: str) -> str:
        return self.crypt_context.hash(plain_password)

    def verify_password(self, plain_password: str, password_hash: str) -> bool:
        return self.crypt_context.verify(plain_password, password_hash)

    def seal(self, plain_password: str) -> str:
        return self._fernet.encrypt(plain_password.encode("utf-8")).decode("ascii")

    def reveal(self, sealed_password: str) -> str:
        try:
            return self._fernet.decrypt(sealed_password.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError) as exc:
            raise CredentialError("Stored password could not be decrypted") from exc
