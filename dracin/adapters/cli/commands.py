"""
Commandes CLI du catalogue (home, search, detail, episodes, stream).

Chaque commande effectue un appel amont via CatalogService et affiche les
enregistrements normalises dans un tableau Rich.
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.table import Table

from dracin.adapters.cli.helpers import console, with_container
from dracin.core.entities.drama import Drama, Episode, QualityOption

ProviderOption = Annotated[
    Optional[str],
    typer.Option("--provider", "-p", help="Fournisseur amont (primary, secondary)"),
]
PageOption = Annotated[int, typer.Option("--page", min=1, help="Numero de page")]


def _format_count(value: Optional[int]) -> str:
    """Affiche un compteur de vues de facon compacte (1.2M, 750K)."""
    if value is None:
        return "-"
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.0f}K"
    return str(value)


def _render_dramas(dramas: list[Drama], title: str) -> None:
    if not dramas:
        console.print("[yellow]Aucun drama.[/yellow]")
        return

    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Titre", style="bold")
    table.add_column("Statut")
    table.add_column("Note", justify="right")
    table.add_column("Episodes", justify="right")
    table.add_column("Vues", justify="right")
    table.add_column("Genres")
    for drama in dramas:
        status_style = "green" if drama.status.value == "Ongoing" else "cyan"
        table.add_row(
            drama.book_id,
            drama.book_name,
            f"[{status_style}]{drama.status.value}[/{status_style}]",
            f"{drama.rating:.1f}",
            str(drama.latest_episode),
            _format_count(drama.view_count),
            ", ".join(drama.genres),
        )
    console.print(table)


def _render_episodes(episodes: list[Episode], title: str) -> None:
    if not episodes:
        console.print("[yellow]Aucun episode.[/yellow]")
        return

    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("ID", style="dim")
    table.add_column("Nom")
    for episode in episodes:
        table.add_row(str(episode.chapter_index), episode.chapter_id, episode.chapter_name)
    console.print(table)


def _render_options(options: list[QualityOption]) -> None:
    if not options:
        console.print("[yellow]Aucun flux disponible.[/yellow]")
        return

    table = Table(title="Flux")
    table.add_column("Qualite", justify="right")
    table.add_column("Defaut")
    table.add_column("URL", overflow="fold")
    for option in options:
        table.add_row(f"{option.quality}p", "*" if option.is_default else "", option.video_url)
    console.print(table)


@with_container
async def _home_async(container, page: int, provider: Optional[str]) -> list[Drama]:
    dramas = await container.catalog_service().get_home(page, provider)
    _render_dramas(dramas, title=f"Accueil - page {page}")
    return dramas


@with_container
async def _search_async(container, query: str, page: int, provider: Optional[str]) -> list[Drama]:
    dramas = await container.catalog_service().search(query, page, provider)
    _render_dramas(dramas, title=f"Recherche : {query}")
    return dramas


@with_container
async def _detail_async(container, book_id: str, provider: Optional[str]) -> Drama:
    drama = await container.catalog_service().get_drama_detail(book_id, provider)
    console.print(f"[bold]{drama.book_name}[/bold] [dim]({drama.book_id})[/dim]")
    console.print(f"Statut : {drama.status.value}  |  Note : {drama.rating:.1f}  |  Annee : {drama.year or '-'}")
    console.print(f"Episodes : {drama.chapter_count if drama.chapter_count is not None else drama.latest_episode}")
    if drama.genres:
        console.print(f"Genres : {', '.join(drama.genres)}")
    if drama.corner_label:
        console.print(f"Badge : {drama.corner_label}")
    if drama.introduction:
        console.print(f"\n{drama.introduction}")
    return drama


@with_container
async def _episodes_async(container, book_id: str, provider: Optional[str]) -> list[Episode]:
    episodes = await container.catalog_service().get_all_episodes(book_id, provider)
    _render_episodes(episodes, title=f"Episodes de {book_id}")
    return episodes


@with_container
async def _stream_async(
    container,
    book_id: str,
    episode: Optional[int],
    chapter_id: Optional[str],
    provider: Optional[str],
) -> list[QualityOption]:
    options = await container.catalog_service().get_stream(
        book_id, episode=episode, chapter_id=chapter_id, provider=provider
    )
    _render_options(options)
    return options


def home(page: PageOption = 1, provider: ProviderOption = None) -> None:
    """Affiche les dramas de la page d'accueil."""
    asyncio.run(_home_async(page, provider))


def search(
    query: Annotated[str, typer.Argument(help="Mot-cle a rechercher")],
    page: PageOption = 1,
    provider: ProviderOption = None,
) -> None:
    """Recherche des dramas par mot-cle."""
    asyncio.run(_search_async(query, page, provider))


def detail(
    book_id: Annotated[str, typer.Argument(help="Identifiant du drama")],
    provider: ProviderOption = None,
) -> None:
    """Affiche la fiche normalisee d'un drama."""
    asyncio.run(_detail_async(book_id, provider))


def episodes(
    book_id: Annotated[str, typer.Argument(help="Identifiant du drama")],
    provider: ProviderOption = None,
) -> None:
    """Liste les episodes d'un drama."""
    asyncio.run(_episodes_async(book_id, provider))


def stream(
    book_id: Annotated[str, typer.Argument(help="Identifiant du drama")],
    episode: Annotated[
        Optional[int],
        typer.Option("--episode", "-e", min=1, help="Numero d'episode (1-based)"),
    ] = None,
    chapter_id: Annotated[
        Optional[str],
        typer.Option("--chapter-id", "-c", help="Identifiant du chapitre (fournisseur secondary)"),
    ] = None,
    provider: ProviderOption = None,
) -> None:
    """Affiche les flux disponibles pour un episode, 720 en tete."""
    if episode is None and chapter_id is None:
        console.print("[red]Erreur: --episode ou --chapter-id requis[/red]")
        raise typer.Exit(code=1)
    asyncio.run(_stream_async(book_id, episode, chapter_id, provider))
