"""Sous-package CLI commands - re-exporte les commandes publiques."""

from tmdb_collector.adapters.cli.commands.collect_commands import (
    MediaFilter,
    collect,
    genres,
)
from tmdb_collector.adapters.cli.commands.search_commands import (
    SearchMedia,
    search,
)

__all__ = [
    # collecte
    "MediaFilter",
    "collect",
    "genres",
    # recherche
    "SearchMedia",
    "search",
]
