"""
Service de collecte du catalogue.

CollectorService enchaine, page par page :
decouverte -> enrichissement des trailers -> ecriture atomique des entrees
-> ecriture des liens entree-genre.

Les listes de genres suivent le meme schema recuperation -> ecriture, sans
enrichissement. Les pages sont traitees strictement dans l'ordre ; les
erreurs de recuperation ou d'ecriture remontent a l'appelant.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Optional
from uuid import uuid4

from loguru import logger

from tmdb_collector.core.entities.media import MediaType
from tmdb_collector.core.ports.api_clients import ICatalogAPIClient
from tmdb_collector.core.ports.repositories import ICatalogRepository
from tmdb_collector.services.enricher import TrailerEnricherService


@dataclass
class PageReport:
    """Bilan d'une page collectee.

    Attributes:
        media_type: Films ou series
        page: Numero de page
        fetched: Entrees recuperees et ecrites
        with_trailer: Entrees avec trailer
        failed_trailers: Resolutions de trailer en echec
        links: Liens entree-genre ecrits
        created_at: Horodatage commun du lot (None si page vide)
    """

    media_type: MediaType
    page: int
    fetched: int = 0
    with_trailer: int = 0
    failed_trailers: int = 0
    links: int = 0
    created_at: Optional[datetime] = None


@dataclass
class CollectionReport:
    """Bilan d'une collecte complete.

    Attributes:
        run_id: Identifiant de l'execution, present dans le champ "run" des logs
        genres: Nombre de genres ecrits par type
        pages: Bilans des pages, dans l'ordre de collecte
    """

    run_id: str = ""
    genres: dict[MediaType, int] = field(default_factory=dict)
    pages: list[PageReport] = field(default_factory=list)

    @property
    def total_entries(self) -> int:
        """Nombre total d'entrees ecrites."""
        return sum(page.fetched for page in self.pages)

    @property
    def total_with_trailer(self) -> int:
        """Nombre total d'entrees avec trailer."""
        return sum(page.with_trailer for page in self.pages)


class CollectorService:
    """
    Orchestration d'une collecte (une execution = un appel a collect()).

    Example:
        collector = CollectorService(client, enricher, repository)
        report = await collector.collect([MediaType.MOVIE], num_pages=5)
        print(f"{report.total_entries} entrees ecrites")
    """

    def __init__(
        self,
        client: ICatalogAPIClient,
        enricher: TrailerEnricherService,
        repository: ICatalogRepository,
    ) -> None:
        """
        Initialise le service de collecte.

        Args:
            client: Client catalogue
            enricher: Service d'enrichissement des trailers
            repository: Repository catalogue (session deja ouverte)
        """
        self._client = client
        self._enricher = enricher
        self._repository = repository

    async def collect_genres(self, media_type: MediaType) -> int:
        """
        Recupere et ecrit la liste des genres d'un type de catalogue.

        Returns:
            Nombre de genres ecrits
        """
        genres = await self._client.fetch_genres(media_type)
        self._repository.save_genres(genres)
        logger.info(f"{len(genres)} genre(s) {media_type.value} enregistre(s)")
        return len(genres)

    async def collect_page(self, media_type: MediaType, page: int) -> PageReport:
        """
        Collecte une page de decouverte.

        Toutes les entrees sont enrichies avant d'etre confiees au repository.

        Args:
            media_type: Films ou series
            page: Numero de page (>= 1)

        Returns:
            PageReport de la page
        """
        report = PageReport(media_type=media_type, page=page)

        entries = await self._client.discover(media_type, page)
        if not entries:
            logger.info(f"Page {page} ({media_type.value}) vide")
            return report

        enrichment = await self._enricher.enrich(entries)

        report.created_at = self._repository.save_entries_bulk(media_type, enrichment.entries)
        report.fetched = len(enrichment.entries)
        report.with_trailer = enrichment.with_trailer
        report.failed_trailers = enrichment.failed

        links = [link for entry in enrichment.entries for link in entry.genre_links()]
        self._repository.save_genre_links_bulk(media_type, links)
        report.links = len(links)

        logger.info(
            f"Page {page} ({media_type.value}): {report.fetched} entree(s), "
            f"{report.with_trailer} avec trailer, {report.links} lien(s) de genre"
        )
        return report

    async def collect(
        self,
        media_types: Iterable[MediaType],
        num_pages: int,
        include_genres: bool = True,
        on_page: Optional[Callable[[PageReport], None]] = None,
    ) -> CollectionReport:
        """
        Collecte les genres puis les pages 1..num_pages de chaque type.

        Args:
            media_types: Types de catalogue a collecter
            num_pages: Nombre de pages par type (>= 1)
            include_genres: Recuperer aussi les listes de genres
            on_page: Callback de progression optionnel, appele apres chaque page

        Returns:
            CollectionReport de l'execution (run_id unique par appel)
        """
        if num_pages < 1:
            raise ValueError(f"num_pages doit etre >= 1, recu {num_pages}")

        media_types = list(media_types)
        collection = CollectionReport(run_id=uuid4().hex[:8])

        # Tous les logs de l'execution (enrichissement et ecritures compris)
        # portent extra["run"]
        with logger.contextualize(run=collection.run_id):
            logger.info(
                f"Collecte de {num_pages} page(s) pour "
                f"{', '.join(media_type.value for media_type in media_types)}"
            )

            if include_genres:
                for media_type in media_types:
                    collection.genres[media_type] = await self.collect_genres(media_type)

            for media_type in media_types:
                for page in range(1, num_pages + 1):
                    page_report = await self.collect_page(media_type, page)
                    collection.pages.append(page_report)
                    if on_page:
                        on_page(page_report)

            logger.info(
                f"Collecte terminee: {collection.total_entries} entree(s), "
                f"{collection.total_with_trailer} avec trailer"
            )
        return collection
