"""
Interfaces ports pour les clients API.

Interface abstraite (port) définissant le contrat de l'API catalogue externe.
L'implémentation (adaptateur) fournit le client concret TMDB.
"""

from abc import ABC, abstractmethod

from tmdb_collector.core.entities.media import Genre, MediaEntry, MediaType, Video


class ICatalogAPIClient(ABC):
    """
    Interface de l'API catalogue (films et séries).

    Définit le contrat pour découvrir, rechercher et décrire les entrées
    du catalogue. Les erreurs réseau, HTTP et de décodage sont levées,
    jamais avalées.
    """

    @abstractmethod
    async def discover(self, media_type: MediaType, page: int) -> list[MediaEntry]:
        """
        Récupère une page de découverte.

        Args :
            media_type : Type de catalogue (films ou séries)
            page : Numéro de page (>= 1)

        Retourne :
            Les entrées de la page, chemins d'images absolus
        """
        ...

    @abstractmethod
    async def search(
        self, media_type: MediaType, query: str, page: int = 1
    ) -> list[MediaEntry]:
        """Recherche des entrées par texte libre."""
        ...

    @abstractmethod
    async def fetch_genres(self, media_type: MediaType) -> list[Genre]:
        """Récupère la liste des genres d'un type de catalogue."""
        ...

    @abstractmethod
    async def get_videos(
        self, media_type: MediaType, entry_id: int, language: str
    ) -> list[Video]:
        """Récupère les vidéos d'une entrée pour une langue donnée."""
        ...
