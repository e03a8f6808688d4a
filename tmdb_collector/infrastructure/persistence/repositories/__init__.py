"""
Implementations SQLModel des repositories.

Le repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et lignes de tables
"""

from tmdb_collector.infrastructure.persistence.repositories.catalog_repository import (
    PersistenceError,
    SQLModelCatalogRepository,
)

__all__ = [
    "PersistenceError",
    "SQLModelCatalogRepository",
]
