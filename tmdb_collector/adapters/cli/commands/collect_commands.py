"""
Commandes CLI de collecte : collect (pipeline complet) et genres.
"""

import asyncio
from enum import Enum
from typing import Annotated, Optional

import typer
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from tmdb_collector.adapters.cli.helpers import (
    console,
    exit_on_failure,
    require_api_key,
    suppress_loguru,
    with_container,
)
from tmdb_collector.core.entities.media import MediaType
from tmdb_collector.services.collector import CollectionReport, PageReport


class MediaFilter(str, Enum):
    """Filtre par type de catalogue."""

    ALL = "all"
    MOVIE = "movie"
    TV = "tv"

    def media_types(self) -> list[MediaType]:
        """Types de catalogue couverts par le filtre (films d'abord)."""
        if self is MediaFilter.ALL:
            return [MediaType.MOVIE, MediaType.TV]
        return [MediaType(self.value)]


_LABELS = {MediaType.MOVIE: "Films", MediaType.TV: "Series"}


def _render_report(report: CollectionReport) -> Table:
    """Tableau de synthese d'une collecte."""
    table = Table(
        title="Resume de la collecte",
        caption=f"Execution {report.run_id}" if report.run_id else None,
    )
    table.add_column("Type", style="cyan")
    table.add_column("Genres", justify="right")
    table.add_column("Pages", justify="right")
    table.add_column("Entrees", justify="right")
    table.add_column("Avec trailer", justify="right", style="green")
    table.add_column("Echecs trailer", justify="right", style="red")

    media_types = list(report.genres)
    for page in report.pages:
        if page.media_type not in media_types:
            media_types.append(page.media_type)

    for media_type in media_types:
        pages = [p for p in report.pages if p.media_type is media_type]
        genres = report.genres.get(media_type)
        table.add_row(
            _LABELS[media_type],
            "-" if genres is None else str(genres),
            str(len(pages)),
            str(sum(p.fetched for p in pages)),
            str(sum(p.with_trailer for p in pages)),
            str(sum(p.failed_trailers for p in pages)),
        )
    return table


def collect(
    pages: Annotated[
        Optional[int],
        typer.Option(
            "--pages", "-p",
            min=1,
            help="Nombre de pages par type (defaut: fetch.num_pages)",
        ),
    ] = None,
    media: Annotated[
        MediaFilter,
        typer.Option("--media", "-m", help="Type de catalogue a collecter"),
    ] = MediaFilter.ALL,
    skip_genres: Annotated[
        bool,
        typer.Option("--skip-genres", help="Ne pas recuperer les listes de genres"),
    ] = False,
) -> None:
    """Decouvre, enrichit avec les trailers et enregistre le catalogue TMDB."""
    asyncio.run(_collect_async(pages, media, skip_genres))


@with_container()
async def _collect_async(
    container, pages: Optional[int], media: MediaFilter, skip_genres: bool
) -> None:
    """Implementation async de la commande collect."""
    config = container.config()
    require_api_key(config)

    num_pages = pages or config.fetch.num_pages
    media_types = media.media_types()
    collector = container.collector_service()
    client = container.tmdb_client()

    console.print(
        f"[bold cyan]Collecte TMDB[/bold cyan]: {num_pages} page(s) "
        f"x {len(media_types)} type(s)\n"
    )

    async with client:
        with exit_on_failure("collecte"), suppress_loguru():
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console,
                transient=False,
            ) as progress:
                task = progress.add_task(
                    "[cyan]Collecte...", total=num_pages * len(media_types)
                )

                def on_page(page: PageReport) -> None:
                    """Callback de progression."""
                    progress.advance(task)
                    progress.console.print(
                        f"  [green]✓[/green] {_LABELS[page.media_type]} page {page.page}: "
                        f"{page.fetched} entree(s), {page.with_trailer} avec trailer"
                    )

                report = await collector.collect(
                    media_types,
                    num_pages,
                    include_genres=not skip_genres,
                    on_page=on_page,
                )

    console.print()
    console.print(_render_report(report))


def genres(
    media: Annotated[
        MediaFilter,
        typer.Option("--media", "-m", help="Type de catalogue"),
    ] = MediaFilter.ALL,
) -> None:
    """Recupere et enregistre les listes de genres TMDB."""
    asyncio.run(_genres_async(media))


@with_container()
async def _genres_async(container, media: MediaFilter) -> None:
    """Implementation async de la commande genres."""
    config = container.config()
    require_api_key(config)

    collector = container.collector_service()
    client = container.tmdb_client()

    async with client:
        with exit_on_failure("recuperation des genres"):
            for media_type in media.media_types():
                count = await collector.collect_genres(media_type)
                console.print(f"  [green]{count}[/green] genre(s) {_LABELS[media_type].lower()}")
