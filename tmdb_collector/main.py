"""
Point d'entrée CLI de TMDB Collector.

Charge la configuration (environnement ou --config), configure le logging
et fournit les commandes CLI.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import collect, genres, search
from .adapters.cli.helpers import cli_state, load_settings
from .logging_config import configure_logging

app = typer.Typer(
    name="tmdb-collector",
    help="Collecte du catalogue TMDB avec trailers",
)


def _console_level(log_level: str, verbose: int, quiet: bool) -> str:
    """Niveau console selon -v/-q (prioritaires sur log_level)."""
    if quiet:
        return "ERROR"
    if verbose:
        return "DEBUG"
    return log_level


def _mask(secret: Optional[str]) -> str:
    """Masque une cle en ne laissant visibles que ses 4 derniers caracteres."""
    if not secret:
        return "non definie"
    if len(secret) <= 4:
        return "****"
    return f"****{secret[-4:]}"


@app.callback()
def main_callback(
    config: Annotated[
        Optional[Path],
        typer.Option(
            "--config", "-c",
            exists=True,
            dir_okay=False,
            help="Fichier config.json (sections tmdb et fetch)",
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """TMDB Collector - Decouverte du catalogue TMDB et de ses trailers."""
    cli_state["config_path"] = config

    settings = load_settings()
    configure_logging(
        log_level=_console_level(settings.log_level, verbose, quiet),
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )
    logger.debug(f"Demarrage de TMDB Collector v{__version__}")


# Monter les commandes
app.command()(collect)
app.command()(genres)
app.command()(search)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    settings = load_settings()
    fetch = settings.fetch
    typer.echo(f"API TMDB : {'activée' if settings.tmdb_enabled else 'désactivée'}")
    typer.echo(f"Clé API : {_mask(settings.tmdb_api_key)}")
    typer.echo(f"URL API : {settings.tmdb_base_url}")
    typer.echo(f"URL images : {settings.tmdb_image_base_url}")
    typer.echo(f"Langue : {settings.language} (repli {settings.fallback_language})")
    typer.echo(f"Pages par type : {fetch.num_pages}")
    typer.echo(f"Tri films : {fetch.sort.movies.sort_by}")
    typer.echo(f"Tri séries : {fetch.sort.tv_shows.sort_by}")
    typer.echo(f"Date max : {fetch.max_release_date or 'aucune'}")
    typer.echo(f"Contenu adulte : {'oui' if fetch.include_adult else 'non'}")
    typer.echo(f"Trailers simultanés : {settings.enrichment_concurrency}")
    typer.echo(f"Base de données : {settings.database_url}")
    typer.echo(f"Niveau de log : {settings.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"TMDB Collector v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
