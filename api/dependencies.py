"""
FastAPI Dependencies

Shared service instances, built from settings. Tests replace them through
app.dependency_overrides.
"""

import logging
from functools import lru_cache

from seo_studio.audit import AuditOrchestrator
from seo_studio.auth import StaticCredentialVerifier
from seo_studio.persistence import GenerationArchive, HistoryStore
from seo_studio.providers import ModelAdapter, get_adapter
from seo_studio.utils.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_archive() -> GenerationArchive:
    """Process-wide generation archive."""
    settings = get_settings()
    return GenerationArchive(HistoryStore(settings.HISTORY_DIR))


def get_orchestrator() -> AuditOrchestrator:
    settings = get_settings()
    return AuditOrchestrator(
        adapter_factory=lambda provider: get_adapter(provider, settings),
        timeout_seconds=settings.AUDIT_TIMEOUT,
    )


def get_chat_service() -> ModelAdapter:
    """
    Adapter used by the assistant.

    Raises:
        ProviderConfigError: If the assistant provider has no API key
    """
    settings = get_settings()
    return get_adapter(settings.ASSISTANT_PROVIDER, settings)


@lru_cache()
def get_credential_verifier() -> StaticCredentialVerifier:
    return StaticCredentialVerifier.from_config(get_settings().DASHBOARD_USERS)
