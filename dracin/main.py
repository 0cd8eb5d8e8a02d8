"""
Point d'entrée CLI de Dracin Stream.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import detail, episodes, home, search, stream
from .config import Settings
from .container import Container
from .logging_config import configure_logging_from_settings
from .web.deps import APP_VERSION

app = typer.Typer(
    name="dracin",
    help="Proxy d'agrégation de catalogues de dramas",
)
container = Container()

# Commandes catalogue
app.command()(home)
app.command()(search)
app.command()(detail)
app.command()(episodes)
app.command()(stream)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Fournisseur par défaut : {config.default_provider}")
    typer.echo(f"Primary : {config.primary_base_url}")
    typer.echo(f"Secondary : {config.secondary_base_url}")
    typer.echo(f"Délai des appels : {config.request_timeout}s")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Dracin Stream v{APP_VERSION}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web (proxy /api et API /catalog)."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("dracin.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    configure_logging_from_settings(container.config())
    logger.info("Démarrage de Dracin Stream", version=APP_VERSION)
    app()


if __name__ == "__main__":
    main()
