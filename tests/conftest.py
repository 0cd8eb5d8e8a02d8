"""
Fixtures pytest partagees pour les tests Dracin Stream.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec URLs amont fictives et log dans tmp_path
- Table des fournisseurs et passerelle construites depuis ces settings
- Container DI dont la configuration est remplacee par les settings de test
"""

from pathlib import Path

import pytest
from dependency_injector import providers

from dracin.adapters.api.gateway import UpstreamGateway
from dracin.config import Settings
from dracin.container import Container
from dracin.core.value_objects.provider import ProviderTable
from tests.fixtures.upstream_responses import PRIMARY_URL, SECONDARY_URL


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings isoles de l'environnement (URLs fictives, log temporaire)."""
    return Settings(
        primary_base_url=PRIMARY_URL,
        secondary_base_url=SECONDARY_URL,
        default_provider="primary",
        log_file=tmp_path / "logs" / "dracin.log",
        page_size=20,
    )


@pytest.fixture
def provider_table(test_settings: Settings) -> ProviderTable:
    return test_settings.provider_table


@pytest.fixture
def gateway(provider_table: ProviderTable) -> UpstreamGateway:
    """Passerelle reelle ; les appels httpx sont interceptes par respx."""
    return UpstreamGateway(providers=provider_table, timeout=5.0)


@pytest.fixture
def container(test_settings: Settings) -> Container:
    """Container dont la configuration pointe vers les URLs fictives."""
    instance = Container()
    instance.config.override(providers.Object(test_settings))
    yield instance
    instance.config.reset_override()
