"""
Resolution du trailer d'une entree du catalogue.

Selectionne la meilleure video YouTube d'une entree selon une priorite stricte
et retente une fois dans la langue de repli (en-US) quand la langue principale
ne donne rien.

Priorite (sur les videos d'une langue, dans l'ordre de l'API):
1. YouTube + Trailer + officiel
2. YouTube + Trailer
3. YouTube + Teaser
4. YouTube + Clip
"""

from typing import Callable, Iterable, Optional, Sequence

from loguru import logger

from tmdb_collector.adapters.api.errors import CatalogAPIError
from tmdb_collector.core.entities.media import MediaType, Video
from tmdb_collector.core.ports.api_clients import ICatalogAPIClient

YOUTUBE_SITE = "YouTube"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={key}"
FALLBACK_LANGUAGE = "en-US"

_RANKS: tuple[Callable[[Video], bool], ...] = (
    lambda v: v.type == "Trailer" and v.official,
    lambda v: v.type == "Trailer",
    lambda v: v.type == "Teaser",
    lambda v: v.type == "Clip",
)


def youtube_url(key: str) -> str:
    """URL de lecture YouTube pour une cle video."""
    return YOUTUBE_WATCH_URL.format(key=key)


def select_trailer(videos: Sequence[Video]) -> str:
    """
    Choisit le meilleur trailer parmi les videos d'une langue.

    Args:
        videos: Videos retournees par l'API pour une langue

    Returns:
        URL YouTube de la video retenue, ou "" si aucune ne qualifie
    """
    candidates = [v for v in videos if v.site == YOUTUBE_SITE and v.key]
    for matches in _RANKS:
        for video in candidates:
            if matches(video):
                return youtube_url(video.key)
    return ""


class TrailerResolver:
    """
    Resout le trailer d'une entree avec repli de langue.

    "Aucun trailer" est un resultat normal (chaine vide). Une erreur API n'est
    levee que si aucune tentative n'a donne de trailer.

    Example:
        resolver = TrailerResolver(client, language="pt-BR")
        url = await resolver.resolve(550, MediaType.MOVIE)
    """

    def __init__(
        self,
        client: ICatalogAPIClient,
        language: str,
        fallback_language: str = FALLBACK_LANGUAGE,
    ) -> None:
        """
        Initialise le resolver.

        Args:
            client: Client catalogue (fournit get_videos)
            language: Langue principale
            fallback_language: Langue de la seconde tentative
        """
        self._client = client
        self._language = language
        self._fallback_language = fallback_language

    def _languages(self) -> Iterable[str]:
        """Langues a essayer, dans l'ordre."""
        yield self._language
        if self._language != self._fallback_language:
            yield self._fallback_language

    async def resolve(self, entry_id: int, media_type: MediaType) -> str:
        """
        Retourne l'URL du meilleur trailer d'une entree.

        Args:
            entry_id: ID TMDB de l'entree
            media_type: Films ou series

        Returns:
            URL YouTube, ou "" si aucun trailer dans aucune langue

        Raises:
            CatalogAPIError: Si une tentative a echoue et qu'aucun trailer
                n'a ete trouve (derniere erreur rencontree)
        """
        last_error: Optional[CatalogAPIError] = None

        for language in self._languages():
            try:
                videos = await self._client.get_videos(media_type, entry_id, language)
            except CatalogAPIError as e:
                logger.debug(
                    f"Videos indisponibles pour {media_type.value} {entry_id} ({language}): {e}"
                )
                last_error = e
                continue

            url = select_trailer(videos)
            if url:
                return url

        if last_error is not None:
            raise last_error

        logger.info(f"Aucun trailer trouve pour {media_type.value} {entry_id}")
        return ""
