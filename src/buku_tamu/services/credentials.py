# src/buku_tamu/services/credentials.py
from __future__ import annotations

import hmac
from typing import Optional, Protocol

from buku_tamu.utils.config import config


class CredentialVerifier(Protocol):
    def verify(self, secret: str) -> bool: ...


class StaticPasswordVerifier:
    """
    Shared staff password from EXPORT_PASSWORD. Exact match, no lockout.

    Swap for a secret-store backed verifier without touching report code.
    """

    def __init__(self, password: Optional[str] = None):
        self._password = password if password is not None else config.EXPORT_PASSWORD

    def verify(self, secret: str) -> bool:
        if secret is None:
            return False
        return hmac.compare_digest(secret.encode("utf-8"), self._password.encode("utf-8"))
