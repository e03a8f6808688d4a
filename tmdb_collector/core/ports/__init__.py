"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports repository : Contrats de persistance des données
- ICatalogRepository : Ecritures en lot atomiques (entrees, genres, liens)

Ports client API : Contrats pour les services externes
- ICatalogAPIClient : Decouverte, recherche, genres et videos du catalogue
"""

from tmdb_collector.core.ports.api_clients import ICatalogAPIClient
from tmdb_collector.core.ports.repositories import ICatalogRepository

__all__ = [
    # Repositories
    "ICatalogRepository",
    # Clients API
    "ICatalogAPIClient",
]
