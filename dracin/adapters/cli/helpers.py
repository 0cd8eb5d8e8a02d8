"""
Utilitaires partages pour les commandes CLI de Dracin Stream.

Ce module fournit :
- console : instance Rich Console partagee
- with_container : decorateur injectant un container et fermant la passerelle
"""

from functools import wraps

from rich.console import Console

from dracin.container import Container

console = Console()


def with_container(func):
    """
    Decorateur qui injecte un container en premier argument.

    La passerelle amont est fermee a la fin de la commande, y compris en cas
    d'erreur.

    Usage:
        @with_container
        async def my_command(container, ...):
            catalog = container.catalog_service()
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        container = Container()
        try:
            return await func(container, *args, **kwargs)
        finally:
            await container.gateway().close()
    return wrapper