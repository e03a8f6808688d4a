"""
Interfaces ports pour les repositories.

Interface abstraite (port) définissant le contrat de persistance du catalogue.
L'implémentation (adaptateur) fournit le stockage concret
(SQL via SQLModel, base en mémoire pour les tests, etc.).
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from tmdb_collector.core.entities.media import EntryGenreLink, Genre, MediaEntry, MediaType


class ICatalogRepository(ABC):
    """
    Interface de stockage du catalogue.

    Chaque écriture en lot est atomique : toutes les lignes sont validées
    ou aucune. Les écritures sont idempotentes sur la clé de chaque table.
    """

    @abstractmethod
    def save_entries_bulk(
        self, media_type: MediaType, entries: Sequence[MediaEntry]
    ) -> Optional[datetime]:
        """Upsert d'un lot d'entrées. Retourne l'horodatage du lot."""
        ...

    @abstractmethod
    def save_genres(self, genres: Sequence[Genre]) -> None:
        """Upsert d'un lot de genres."""
        ...

    @abstractmethod
    def save_genre_links_bulk(
        self, media_type: MediaType, links: Sequence[EntryGenreLink]
    ) -> None:
        """Insertion idempotente d'un lot de liens entrée-genre."""
        ...

    @abstractmethod
    def count_entries(self, media_type: MediaType) -> int:
        """Nombre d'entrées stockées pour un type de catalogue."""
        ...
