"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI :
client TMDB, resolver et enrichissement des trailers, repository catalogue
et service de collecte.
"""

from dependency_injector import containers, providers

from .adapters.api.tmdb_client import TMDBClient
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, get_session, init_db
from .infrastructure.persistence.repositories import SQLModelCatalogRepository
from .services.collector import CollectorService
from .services.enricher import TrailerEnricherService
from .services.trailer_resolver import TrailerResolver


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        collector = container.collector_service()
        report = await collector.collect([MediaType.MOVIE], num_pages=1)
        container.shutdown_resources()  # Ferme la session
    """

    # Configuration - singleton charge une seule fois
    # (remplacable via container.config.override(...) pour --config)
    config = providers.Singleton(Settings)

    # Engine - partage par toutes les sessions
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db, engine=engine)

    # Session - Resource unique par container, fermee par shutdown_resources()
    session = providers.Resource(get_session, engine=engine)

    # Client API - Singleton, un seul pool de connexions HTTP
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        fetch=config.provided.fetch,
        base_url=config.provided.tmdb_base_url,
        image_base_url=config.provided.tmdb_image_base_url,
        language=config.provided.language,
        timeout=config.provided.request_timeout,
    )

    # Trailers
    trailer_resolver = providers.Singleton(
        TrailerResolver,
        client=tmdb_client,
        language=config.provided.language,
        fallback_language=config.provided.fallback_language,
    )
    trailer_enricher = providers.Singleton(
        TrailerEnricherService,
        resolver=trailer_resolver,
        concurrency=config.provided.enrichment_concurrency,
        timeout=config.provided.enrichment_timeout,
    )

    # Repository - Factory, partage la session du container
    catalog_repository = providers.Factory(
        SQLModelCatalogRepository,
        session=session,
    )

    # Service de collecte - Factory
    collector_service = providers.Factory(
        CollectorService,
        client=tmdb_client,
        enricher=trailer_enricher,
        repository=catalog_repository,
    )
