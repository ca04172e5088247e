"""
Dashboard authentication.
"""

from .credentials import CredentialVerifier, StaticCredentialVerifier, hash_secret

__all__ = ["CredentialVerifier", "StaticCredentialVerifier", "hash_secret"]
