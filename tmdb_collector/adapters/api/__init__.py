"""
Client API externe pour la collecte du catalogue.

Ce module fournit l'adaptateur pour communiquer avec TMDB (The Movie Database):
- TMDBClient: decouverte, recherche, genres et videos

Taxonomie d'erreurs partagee:
- CatalogAPIError: base
- TransportError: echec reseau
- APIError: statut HTTP hors 2xx
- DecodeError: reponse JSON inattendue

Le client implemente ICatalogAPIClient defini dans core/ports/api_clients.py.
"""

from tmdb_collector.adapters.api.errors import (
    APIError,
    CatalogAPIError,
    DecodeError,
    TransportError,
)
from tmdb_collector.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "TMDBClient",
    "CatalogAPIError",
    "TransportError",
    "APIError",
    "DecodeError",
]
