"""Credential Store: persisted user identities."""

from taskboard.c2_credential_store.credential_store import CredentialStore

__all__ = ["CredentialStore"]
