"""
Client TMDB pour la decouverte, la recherche et les videos du catalogue.

Implemente l'interface ICatalogAPIClient pour TMDB (The Movie Database).
Chaque operation suit le meme schema requete -> decodage -> erreurs typees
(TransportError, APIError, DecodeError) ; aucune erreur n'est avalee ici.

Usage:
    client = TMDBClient(api_key="your_key", fetch=settings.fetch)
    movies = await client.discover(MediaType.MOVIE, page=1)
    genres = await client.fetch_genres(MediaType.MOVIE)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from tmdb_collector.adapters.api.errors import APIError, DecodeError, TransportError
from tmdb_collector.config import FetchSettings
from tmdb_collector.core.entities.media import (
    Genre,
    MediaEntry,
    MediaType,
    Video,
    absolute_image_url,
)
from tmdb_collector.core.ports.api_clients import ICatalogAPIClient

# Champs titre/date propres a chaque type de catalogue
_TITLE_FIELDS = {
    MediaType.MOVIE: ("title", "release_date"),
    MediaType.TV: ("name", "first_air_date"),
}


def _flag(value: bool) -> str:
    """Booleen au format attendu par TMDB."""
    return "true" if value else "false"


def _text(value: Any, field_name: str) -> str:
    """Chaine JSON, null -> ""."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{field_name}: chaine attendue, recu {type(value).__name__}")
    return value


def _number(value: Any, field_name: str) -> float:
    """Nombre JSON, null -> 0.0."""
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{field_name}: nombre attendu, recu {type(value).__name__}")
    return float(value)


def _boolean(value: Any, field_name: str) -> bool:
    """Booleen JSON, null -> False."""
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"{field_name}: booleen attendu, recu {type(value).__name__}")
    return value


def _identifiers(value: Any, field_name: str) -> list[int]:
    """Liste JSON d'entiers, null -> []."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{field_name}: liste attendue, recu {type(value).__name__}")
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int):
            raise TypeError(f"{field_name}: entier attendu, recu {item!r}")
    return list(value)


def _identifier(item: Any) -> int:
    """ID entier obligatoire d'un element de resultat."""
    if not isinstance(item, dict):
        raise DecodeError(f"Element inattendu dans les resultats: {item!r}")
    value = item.get("id")
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"Element sans ID entier: {item!r}")
    return value


class TMDBClient(ICatalogAPIClient):
    """
    Client API TMDB pour le catalogue films et series.

    Implemente ICatalogAPIClient avec:
    - Decouverte paginee (tri et filtres independants films / series)
    - Recherche par texte libre
    - Listes de genres
    - Videos d'une entree pour une langue donnee

    Les chemins poster/backdrop des entrees decouvertes ou recherchees sont
    reecrits en URLs absolues (une seule fois).

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
        TMDB_IMAGE_BASE_URL: URL de base pour les images (posters)

    Example:
        async with TMDBClient(api_key="xxx") as client:
            movies = await client.discover_movies(page=1)
            for movie in movies:
                print(movie.id, movie.title, movie.poster_path)
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"

    def __init__(
        self,
        api_key: Optional[str],
        fetch: Optional[FetchSettings] = None,
        base_url: str = TMDB_BASE_URL,
        image_base_url: str = TMDB_IMAGE_BASE_URL,
        language: str = "pt-BR",
        timeout: float = 30.0,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB (v3) ou Read Access Token (v4)
            fetch: Options de tri et de filtrage des pages de decouverte
            base_url: URL de base de l'API
            image_base_url: Prefixe des chemins d'images
            language: Langue des requetes (ex: pt-BR)
            timeout: Timeout de chaque requete HTTP en secondes
        """
        self._api_key = api_key or ""
        self._fetch = fetch or FetchSettings()
        self._base_url = base_url.rstrip("/")
        self._image_base_url = image_base_url.rstrip("/")
        self._language = language
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer

        Returns:
            httpx.AsyncClient configure pour l'API TMDB
        """
        if self._client is None or self._client.is_closed:
            # Detecter le type de cle : v3 (32 hex) vs v4 (long JWT)
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    @property
    def language(self) -> str:
        """Langue principale des requetes."""
        return self._language

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        """
        Execute un GET et decode le corps JSON.

        Args:
            path: Chemin relatif a l'URL de base (ex: /discover/movie)
            params: Parametres de requete (la cle API est ajoutee par le client)

        Returns:
            Le document JSON decode

        Raises:
            TransportError: Echec reseau ou timeout
            APIError: Statut HTTP hors 2xx
            DecodeError: Corps qui n'est pas du JSON
        """
        client = self._get_client()
        logger.debug(f"GET {path}", params=params)
        try:
            response = await client.get(path, params=params)
        except httpx.TransportError as e:
            raise TransportError(f"Erreur reseau sur {path}: {e}", url=path) from e

        if not response.is_success:
            raise APIError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Reponse JSON invalide pour {path}: {e}") from e

    @staticmethod
    def _result_list(data: Any, key: str) -> list[Any]:
        """Extrait la liste `key` d'une enveloppe JSON."""
        if not isinstance(data, dict):
            raise DecodeError(f"Enveloppe inattendue: objet JSON attendu, recu {type(data).__name__}")
        results = data.get(key)
        if not isinstance(results, list):
            raise DecodeError(f"Champ '{key}' absent ou invalide dans la reponse")
        return results

    def _parse_entries(self, data: Any, media_type: MediaType) -> list[MediaEntry]:
        """
        Decode la liste `results` d'une page en MediaEntry.

        Les chemins d'images non vides sont prefixes par l'URL de base des images.
        """
        title_field, date_field = _TITLE_FIELDS[media_type]
        entries = []
        for item in self._result_list(data, "results"):
            entry_id = _identifier(item)
            try:
                entry = MediaEntry(
                    id=entry_id,
                    media_type=media_type,
                    title=_text(item.get(title_field), title_field),
                    overview=_text(item.get("overview"), "overview"),
                    release_date=_text(item.get(date_field), date_field),
                    poster_path=_text(item.get("poster_path"), "poster_path"),
                    backdrop_path=_text(item.get("backdrop_path"), "backdrop_path"),
                    vote_average=_number(item.get("vote_average"), "vote_average"),
                    popularity=_number(item.get("popularity"), "popularity"),
                    genre_ids=_identifiers(item.get("genre_ids"), "genre_ids"),
                )
            except (TypeError, ValueError) as e:
                raise DecodeError(f"Entree {entry_id} invalide: {e}") from e

            entry.poster_path = absolute_image_url(self._image_base_url, entry.poster_path)
            entry.backdrop_path = absolute_image_url(self._image_base_url, entry.backdrop_path)
            entries.append(entry)
        return entries

    def _discover_params(self, media_type: MediaType, page: int) -> dict[str, Any]:
        """Construit les parametres de decouverte pour un type de catalogue."""
        fetch = self._fetch
        params: dict[str, Any] = {
            "page": page,
            "include_adult": _flag(fetch.include_adult),
            "language": self._language,
        }
        if media_type is MediaType.MOVIE:
            params["sort_by"] = fetch.sort.movies.sort_by
            params["include_video"] = _flag(fetch.include_video)
            if fetch.max_release_date:
                params["release_date.lte"] = fetch.max_release_date
        else:
            params["sort_by"] = fetch.sort.tv_shows.sort_by
            if fetch.max_release_date:
                params["first_air_date.lte"] = fetch.max_release_date
        return params

    async def discover(self, media_type: MediaType, page: int) -> list[MediaEntry]:
        """
        Recupere une page de decouverte.

        Args:
            media_type: Films ou series
            page: Numero de page (>= 1)

        Returns:
            Entrees de la page, sans trailer (l'enrichissement est separe)
        """
        if page < 1:
            raise ValueError(f"page doit etre >= 1, recu {page}")

        data = await self._get_json(
            f"/discover/{media_type.value}",
            self._discover_params(media_type, page),
        )
        return self._parse_entries(data, media_type)

    async def discover_movies(self, page: int) -> list[MediaEntry]:
        """Page de decouverte des films."""
        return await self.discover(MediaType.MOVIE, page)

    async def discover_tv_shows(self, page: int) -> list[MediaEntry]:
        """Page de decouverte des series."""
        return await self.discover(MediaType.TV, page)

    async def search(
        self,
        media_type: MediaType,
        query: str,
        page: int = 1,
    ) -> list[MediaEntry]:
        """
        Recherche des entrees par titre.

        Args:
            media_type: Films ou series
            query: Texte libre
            page: Numero de page (>= 1)

        Returns:
            Liste d'entrees (vide si aucun resultat)
        """
        if page < 1:
            raise ValueError(f"page doit etre >= 1, recu {page}")

        data = await self._get_json(
            f"/search/{media_type.value}",
            {"query": query, "page": page, "language": self._language},
        )
        return self._parse_entries(data, media_type)

    async def search_movies(self, query: str, page: int = 1) -> list[MediaEntry]:
        """Recherche de films."""
        return await self.search(MediaType.MOVIE, query, page)

    async def search_tv_shows(self, query: str, page: int = 1) -> list[MediaEntry]:
        """Recherche de series."""
        return await self.search(MediaType.TV, query, page)

    async def fetch_genres(self, media_type: MediaType) -> list[Genre]:
        """
        Recupere la liste des genres d'un type de catalogue.

        Returns:
            Liste plate de Genre, dans l'ordre de l'API
        """
        data = await self._get_json(
            f"/genre/{media_type.value}/list",
            {"language": self._language},
        )
        genres = []
        for item in self._result_list(data, "genres"):
            genre_id = _identifier(item)
            try:
                genres.append(Genre(id=genre_id, name=_text(item.get("name"), "name")))
            except TypeError as e:
                raise DecodeError(f"Genre {genre_id} invalide: {e}") from e
        return genres

    async def fetch_movie_genres(self) -> list[Genre]:
        """Genres des films."""
        return await self.fetch_genres(MediaType.MOVIE)

    async def fetch_tv_show_genres(self) -> list[Genre]:
        """Genres des series."""
        return await self.fetch_genres(MediaType.TV)

    async def get_videos(
        self,
        media_type: MediaType,
        entry_id: int,
        language: str,
    ) -> list[Video]:
        """
        Recupere les videos d'une entree.

        Args:
            media_type: Films ou series
            entry_id: ID TMDB de l'entree
            language: Langue des videos (ex: pt-BR, en-US)

        Returns:
            Videos dans l'ordre de l'API (liste vide si aucune)
        """
        data = await self._get_json(
            f"/{media_type.value}/{entry_id}/videos",
            {"language": language},
        )
        videos = []
        for item in self._result_list(data, "results"):
            if not isinstance(item, dict):
                raise DecodeError(f"Video inattendue: {item!r}")
            try:
                videos.append(
                    Video(
                        key=_text(item.get("key"), "key"),
                        site=_text(item.get("site"), "site"),
                        type=_text(item.get("type"), "type"),
                        official=_boolean(item.get("official"), "official"),
                    )
                )
            except TypeError as e:
                raise DecodeError(f"Video invalide pour {entry_id}: {e}") from e
        return videos

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "TMDBClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
