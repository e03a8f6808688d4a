"""
Utilitaires partages pour les commandes CLI de TMDB Collector.

Ce module fournit :
- console : instance Rich Console partagee
- cli_state : options globales posees par le callback de l'application
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- exit_on_failure : conversion des erreurs de collecte en code de sortie 1
- require_api_key : arret si la cle API TMDB est absente
"""

from contextlib import contextmanager
from functools import wraps
from pathlib import Path
from typing import Any, Optional

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from tmdb_collector.adapters.api.errors import CatalogAPIError
from tmdb_collector.config import Settings
from tmdb_collector.container import Container
from tmdb_collector.infrastructure.persistence.repositories import PersistenceError

console = Console()

# Options globales (--config), renseignees par le callback Typer
cli_state: dict[str, Any] = {"config_path": None}


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("tmdb_collector")
    try:
        yield
    finally:
        loguru_logger.enable("tmdb_collector")


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Settings depuis un config.json si fourni, sinon depuis l'environnement."""
    config_path = config_path or cli_state.get("config_path")
    if config_path:
        return Settings.from_json_file(config_path)
    return Settings()


def build_container() -> Container:
    """Cree un container, avec la configuration --config si elle a ete fournie."""
    container = Container()
    if cli_state.get("config_path"):
        container.config.override(load_settings())
    return container


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Les ressources du container (session SQL) sont fermees a la sortie de
    la commande, y compris en cas d'erreur.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = build_container()
            if requires_db:
                container.database.init()
            try:
                return await func(container, *args, **kwargs)
            finally:
                container.shutdown_resources()
        return wrapper
    return decorator


@contextmanager
def exit_on_failure(action: str):
    """
    Convertit une erreur API ou d'ecriture en message rouge et code de sortie 1.

    Usage:
        with exit_on_failure("collecte"):
            await collector.collect(...)
    """
    try:
        yield
    except (CatalogAPIError, PersistenceError) as e:
        loguru_logger.error(f"Echec de la {action}: {e}")
        console.print(f"[red]Erreur:[/red] echec de la {action}: {e}")
        raise typer.Exit(code=1) from e


def require_api_key(settings: Settings) -> None:
    """Interrompt la commande si la cle API TMDB n'est pas configuree."""
    if not settings.tmdb_enabled:
        console.print(
            "[red]Erreur:[/red] cle API TMDB non configuree (TMDB_COLLECTOR_TMDB_API_KEY)"
        )
        raise typer.Exit(code=1)
