from credhub.repositories.repository import CredentialRepository

__all__ = ["CredentialRepository"]
