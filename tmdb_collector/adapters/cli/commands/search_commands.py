"""
Commande CLI de recherche ponctuelle dans le catalogue TMDB (sans persistance).
"""

import asyncio
from enum import Enum
from typing import Annotated

import typer
from rich.table import Table

from tmdb_collector.adapters.cli.helpers import (
    console,
    exit_on_failure,
    require_api_key,
    with_container,
)
from tmdb_collector.core.entities.media import MediaEntry, MediaType


class SearchMedia(str, Enum):
    """Type de catalogue recherche."""

    MOVIE = "movie"
    TV = "tv"


def _render_results(entries: list[MediaEntry], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Titre", style="cyan")
    table.add_column("Date")
    table.add_column("Note", justify="right")
    table.add_column("Popularite", justify="right")
    for entry in entries:
        table.add_row(
            str(entry.id),
            entry.title,
            entry.release_date or "-",
            f"{entry.vote_average:.1f}",
            f"{entry.popularity:.1f}",
        )
    return table


def search(
    query: Annotated[str, typer.Argument(help="Titre a rechercher")],
    media: Annotated[
        SearchMedia,
        typer.Option("--media", "-m", help="Type de catalogue"),
    ] = SearchMedia.MOVIE,
    page: Annotated[
        int,
        typer.Option("--page", min=1, help="Page de resultats"),
    ] = 1,
) -> None:
    """Recherche des films ou des series par titre."""
    asyncio.run(_search_async(query, media, page))


@with_container(requires_db=False)
async def _search_async(container, query: str, media: SearchMedia, page: int) -> None:
    """Implementation async de la commande search."""
    config = container.config()
    require_api_key(config)

    client = container.tmdb_client()
    async with client:
        with exit_on_failure("recherche"):
            entries = await client.search(MediaType(media.value), query, page)

    if not entries:
        console.print(f"[yellow]Aucun resultat pour '{query}'.[/yellow]")
        return

    console.print(_render_results(entries, f"Resultats pour '{query}' (page {page})"))
