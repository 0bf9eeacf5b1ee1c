from .credential_vault import CredentialVault

__all__ = ["CredentialVault"]
