"""
Dashboard Credential Verification

Credentials come from configuration, never from code. DASHBOARD_USERS holds
comma-separated "username:sha256hex" pairs.
"""

import hashlib
import hmac
import logging
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


def hash_secret(secret: str) -> str:
    """SHA-256 hex digest of a secret."""
    return hashlib.sha256(secret.encode()).hexdigest()


class CredentialVerifier(Protocol):
    def verify(self, username: str, secret: str) -> bool:
        ...


class StaticCredentialVerifier:
    """
    Verifier over a fixed username -> digest table.

    Usage:
        verifier = StaticCredentialVerifier.from_config("alice:5e88...")
        verifier.verify("Alice", "password")
    """

    def __init__(self, digests: Dict[str, str]):
        self._digests = {name.strip().lower(): digest.strip().lower() for name, digest in digests.items()}

    @classmethod
    def from_config(cls, raw: Optional[str]) -> "StaticCredentialVerifier":
        """Parse the DASHBOARD_USERS format; malformed entries are skipped."""
        digests = {}
        for entry in (raw or "").split(","):
            entry = entry.strip()
            if not entry:
                continue
            username, sep, digest = entry.partition(":")
            if not sep or not username.strip() or not digest.strip():
                logger.warning("Skipping malformed DASHBOARD_USERS entry")
                continue
            digests[username] = digest

        logger.info(f"Loaded {len(digests)} dashboard users")
        return cls(digests)

    @property
    def is_configured(self) -> bool:
        return bool(self._digests)

    def verify(self, username: str, secret: str) -> bool:
        """Check a username (case-insensitive) and secret."""
        expected = self._digests.get((username or "").strip().lower())
        if expected is None or not secret:
            return False
        return hmac.compare_digest(hash_secret(secret), expected)
