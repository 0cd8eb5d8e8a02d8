"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
La table des fournisseurs est construite une seule fois depuis la configuration
et partagee (immuable) entre la passerelle et le service catalogue.
"""

from dependency_injector import containers, providers

from .adapters.api.gateway import UpstreamGateway
from .config import Settings
from .services.catalog import CatalogService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        gateway = container.gateway()
        catalog = container.catalog_service()
        ...
        await gateway.close()

    En test, la configuration se remplace par :
        container.config.override(providers.Object(test_settings))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Table des fournisseurs - immuable, derivee de la configuration
    provider_table = providers.Singleton(
        lambda settings: settings.provider_table,
        config,
    )

    # Passerelle amont - Singleton pour partager le pool de connexions
    gateway = providers.Singleton(
        UpstreamGateway,
        providers=provider_table,
        user_agent=config.provided.user_agent,
        timeout=config.provided.request_timeout,
    )

    # Service catalogue - sans etat, nouvelle instance a chaque appel
    catalog_service = providers.Factory(
        CatalogService,
        gateway=gateway,
        providers=provider_table,
        page_size=config.provided.page_size,
    )
