"""
Tests for TMDBClient - TMDB API client implementation.

Uses respx to mock httpx calls and verifies:
- Discover pages are decoded into MediaEntry with absolute image URLs
- Sort, filter and locale parameters are sent as configured
- Genre lists, searches and videos are decoded
- Transport, status and decoding failures raise typed errors
"""

import httpx
import pytest
import respx

from tmdb_collector.adapters.api.errors import APIError, DecodeError, TransportError
from tmdb_collector.adapters.api.tmdb_client import TMDBClient
from tmdb_collector.config import FetchSettings, SortConfig, SortSettings
from tmdb_collector.core.entities.media import Genre, MediaEntry, MediaType
from tmdb_collector.core.ports.api_clients import ICatalogAPIClient
from tests.fixtures.tmdb_responses import (
    TMDB_DISCOVER_MOVIES_RESPONSE,
    TMDB_DISCOVER_TV_RESPONSE,
    TMDB_EMPTY_PAGE_RESPONSE,
    TMDB_MOVIE_GENRES_RESPONSE,
    TMDB_SEARCH_MOVIES_RESPONSE,
    TMDB_UNAUTHORIZED_RESPONSE,
    TMDB_VIDEOS_RESPONSE,
)

BASE = "https://api.themoviedb.org/3"
IMAGES = "https://image.tmdb.org/t/p/w500"


@pytest.fixture
def tmdb_client() -> TMDBClient:
    """TMDBClient instance with default fetch settings."""
    return TMDBClient(api_key="test_api_key")


class TestTMDBClientInterface:
    """Test TMDBClient implements ICatalogAPIClient correctly."""

    def test_implements_interface(self, tmdb_client: TMDBClient):
        """TMDBClient should implement ICatalogAPIClient."""
        assert isinstance(tmdb_client, ICatalogAPIClient)

    def test_source_property_returns_tmdb(self, tmdb_client: TMDBClient):
        """source property should return 'tmdb'."""
        assert tmdb_client.source == "tmdb"

    def test_default_language(self, tmdb_client: TMDBClient):
        """La langue par defaut est pt-BR."""
        assert tmdb_client.language == "pt-BR"


class TestTMDBDiscover:
    """Tests for TMDBClient.discover()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_discover_movies_returns_page(self, tmdb_client: TMDBClient):
        """A page of 20 movies is decoded in API order."""
        respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(200, json=TMDB_DISCOVER_MOVIES_RESPONSE)
        )

        movies = await tmdb_client.discover_movies(page=1)

        assert len(movies) == 20
        assert all(isinstance(m, MediaEntry) for m in movies)
        assert [m.id for m in movies] == list(range(1001, 1021))
        first = movies[0]
        assert first.media_type is MediaType.MOVIE
        assert first.title == "Filme 1001"
        assert first.release_date == "2024-02-10"
        assert first.genre_ids == [18]
        assert first.trailer_url == ""

    @pytest.mark.asyncio
    @respx.mock
    async def test_discover_rewrites_image_paths(self, tmdb_client: TMDBClient):
        """Non-empty poster paths get the image base URL, empty ones stay empty."""
        respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(200, json=TMDB_DISCOVER_MOVIES_RESPONSE)
        )

        movies = await tmdb_client.discover(MediaType.MOVIE, 1)

        with_poster = [m for m in movies if m.poster_path]
        assert len(with_poster) == 18
        assert all(m.poster_path.startswith(f"{IMAGES}/poster") for m in with_poster)
        by_id = {m.id: m for m in movies}
        assert by_id[1007].poster_path == ""
        assert by_id[1014].poster_path == ""
        assert by_id[1001].backdrop_path == f"{IMAGES}/backdrop1001.jpg"

    @pytest.mark.asyncio
    @respx.mock
    async def test_discover_movies_sends_default_params(self, tmdb_client: TMDBClient):
        """Default discover params: popularity.desc, no adult, no video, pt-BR."""
        route = respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(200, json=TMDB_EMPTY_PAGE_RESPONSE)
        )

        await tmdb_client.discover(MediaType.MOVIE, 3)

        params = route.calls.last.request.url.params
        assert params["page"] == "3"
        assert params["sort_by"] == "popularity.desc"
        assert params["include_adult"] == "false"
        assert params["include_video"] == "false"
        assert params["language"] == "pt-BR"
        assert params["api_key"] == "test_api_key"
        assert "release_date.lte" not in params

    @pytest.mark.asyncio
    @respx.mock
    async def test_discover_uses_per_type_sort_and_date_bound(self):
        """Films et series ont leur propre tri et leur propre borne de date."""
        fetch = FetchSettings(
            include_adult=True,
            max_release_date="2024-12-31",
            sort=SortSettings(
                movies=SortConfig(field="vote_average", direction="asc"),
                tv_shows=SortConfig(field="first_air_date", direction="desc"),
            ),
        )
        client = TMDBClient(api_key="test_api_key", fetch=fetch)
        movie_route = respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(200, json=TMDB_EMPTY_PAGE_RESPONSE)
        )
        tv_route = respx.get(f"{BASE}/discover/tv").mock(
            return_value=httpx.Response(200, json=TMDB_EMPTY_PAGE_RESPONSE)
        )

        await client.discover(MediaType.MOVIE, 1)
        await client.discover(MediaType.TV, 1)

        movie_params = movie_route.calls.last.request.url.params
        assert movie_params["sort_by"] == "vote_average.asc"
        assert movie_params["include_adult"] == "true"
        assert movie_params["release_date.lte"] == "2024-12-31"

        tv_params = tv_route.calls.last.request.url.params
        assert tv_params["sort_by"] == "first_air_date.desc"
        assert tv_params["first_air_date.lte"] == "2024-12-31"
        assert "include_video" not in tv_params
        assert "release_date.lte" not in tv_params

    @pytest.mark.asyncio
    @respx.mock
    async def test_discover_tv_uses_name_and_first_air_date(self, tmdb_client: TMDBClient):
        """TV results map name/first_air_date; null fields become empty."""
        respx.get(f"{BASE}/discover/tv").mock(
            return_value=httpx.Response(200, json=TMDB_DISCOVER_TV_RESPONSE)
        )

        shows = await tmdb_client.discover_tv_shows(page=1)

        assert [s.id for s in shows] == [1396, 99999]
        assert shows[0].media_type is MediaType.TV
        assert shows[0].title == "Breaking Bad"
        assert shows[0].release_date == "2008-01-20"
        assert shows[0].genre_ids == [18, 80]
        assert shows[1].release_date == ""
        assert shows[1].overview == ""
        assert shows[1].poster_path == ""
        assert shows[1].backdrop_path == ""
        assert shows[1].vote_average == 0.0

    @pytest.mark.asyncio
    @respx.mock
    async def test_discover_empty_page(self, tmdb_client: TMDBClient):
        """A page beyond the last one yields an empty list."""
        respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(200, json=TMDB_EMPTY_PAGE_RESPONSE)
        )

        assert await tmdb_client.discover(MediaType.MOVIE, 501) == []

    @pytest.mark.asyncio
    async def test_discover_rejects_page_zero(self, tmdb_client: TMDBClient):
        """Les pages commencent a 1."""
        with pytest.raises(ValueError):
            await tmdb_client.discover(MediaType.MOVIE, 0)


class TestTMDBAuthentication:
    """Tests des deux modes d'authentification TMDB."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_v4_token_sent_as_bearer_header(self):
        """A long v4 token goes in the Authorization header, not the query."""
        token = "eyJhbGciOiJIUzI1NiJ9." + "x" * 60
        client = TMDBClient(api_key=token)
        route = respx.get(f"{BASE}/genre/movie/list").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_GENRES_RESPONSE)
        )

        await client.fetch_movie_genres()

        request = route.calls.last.request
        assert request.headers["Authorization"] == f"Bearer {token}"
        assert "api_key" not in request.url.params


class TestTMDBGenresSearchVideos:
    """Tests for fetch_genres(), search() and get_videos()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_genres(self, tmdb_client: TMDBClient):
        """Genre lists are flat (id, name) pairs in API order."""
        respx.get(f"{BASE}/genre/movie/list").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_GENRES_RESPONSE)
        )

        genres = await tmdb_client.fetch_genres(MediaType.MOVIE)

        assert genres[0] == Genre(id=28, name="Ação")
        assert len(genres) == 6

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_movies(self, tmdb_client: TMDBClient):
        """search() sends the query and decodes results like discover."""
        route = respx.get(f"{BASE}/search/movie").mock(
            return_value=httpx.Response(200, json=TMDB_SEARCH_MOVIES_RESPONSE)
        )

        results = await tmdb_client.search_movies("Matrix")

        assert route.calls.last.request.url.params["query"] == "Matrix"
        assert route.calls.last.request.url.params["page"] == "1"
        assert results[0].id == 603
        assert results[0].poster_path == f"{IMAGES}/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg"

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_videos_uses_requested_language(self, tmdb_client: TMDBClient):
        """get_videos() asks for the given locale and keeps API order."""
        route = respx.get(f"{BASE}/movie/1001/videos").mock(
            return_value=httpx.Response(200, json=TMDB_VIDEOS_RESPONSE)
        )

        videos = await tmdb_client.get_videos(MediaType.MOVIE, 1001, "en-US")

        assert route.calls.last.request.url.params["language"] == "en-US"
        assert [v.key for v in videos] == ["clipKey0001", "fanTrailer01", "officialKey1"]
        assert videos[2].official is True
        assert videos[2].type == "Trailer"

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_videos_tv_path(self, tmdb_client: TMDBClient):
        """Les videos de series passent par /tv/{id}/videos."""
        route = respx.get(f"{BASE}/tv/1396/videos").mock(
            return_value=httpx.Response(200, json={"id": 1396, "results": []})
        )

        assert await tmdb_client.get_videos(MediaType.TV, 1396, "pt-BR") == []
        assert route.called


class TestTMDBErrors:
    """Tests de la taxonomie d'erreurs du client."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_success_status_raises_api_error(self, tmdb_client: TMDBClient):
        """A 401 carries its status code and raw body."""
        respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(401, json=TMDB_UNAUTHORIZED_RESPONSE)
        )

        with pytest.raises(APIError) as exc_info:
            await tmdb_client.discover(MediaType.MOVIE, 1)

        assert exc_info.value.status_code == 401
        assert "Invalid API key" in exc_info.value.body
        assert "401" in str(exc_info.value)

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_raises_api_error(self, tmdb_client: TMDBClient):
        """Aucun retry : un 503 remonte immediatement."""
        route = respx.get(f"{BASE}/movie/1001/videos").mock(
            return_value=httpx.Response(503, text="Service Unavailable")
        )

        with pytest.raises(APIError):
            await tmdb_client.get_videos(MediaType.MOVIE, 1001, "pt-BR")

        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_failure_raises_transport_error(self, tmdb_client: TMDBClient):
        """Connection errors are wrapped in TransportError."""
        respx.get(f"{BASE}/genre/tv/list").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(TransportError):
            await tmdb_client.fetch_genres(MediaType.TV)

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout_raises_transport_error(self, tmdb_client: TMDBClient):
        """Timeouts are transport errors too."""
        respx.get(f"{BASE}/discover/tv").mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(TransportError):
            await tmdb_client.discover(MediaType.TV, 1)

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json_raises_decode_error(self, tmdb_client: TMDBClient):
        """A 200 with a non-JSON body is a decode error."""
        respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        with pytest.raises(DecodeError):
            await tmdb_client.discover(MediaType.MOVIE, 1)

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_results_raises_decode_error(self, tmdb_client: TMDBClient):
        """Un document sans 'results' n'a pas la forme attendue."""
        respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(200, json={"page": 1})
        )

        with pytest.raises(DecodeError):
            await tmdb_client.discover(MediaType.MOVIE, 1)

    @pytest.mark.asyncio
    @respx.mock
    async def test_wrong_field_type_raises_decode_error(self, tmdb_client: TMDBClient):
        """A title that is not a string is rejected."""
        respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(200, json={"results": [{"id": 1, "title": 42}]})
        )

        with pytest.raises(DecodeError):
            await tmdb_client.discover(MediaType.MOVIE, 1)

    @pytest.mark.asyncio
    @respx.mock
    @pytest.mark.parametrize("genre_ids", ["28", [28.9], [28, "12"], [True]])
    async def test_genre_ids_must_be_integer_list(self, tmdb_client: TMDBClient, genre_ids):
        """Ni chaine, ni flottant tronque : genre_ids est une liste d'entiers."""
        respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(
                200, json={"results": [{"id": 1, "title": "A", "genre_ids": genre_ids}]}
            )
        )

        with pytest.raises(DecodeError):
            await tmdb_client.discover(MediaType.MOVIE, 1)

    @pytest.mark.asyncio
    @respx.mock
    async def test_null_genre_ids_is_empty(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(
                200, json={"results": [{"id": 1, "title": "A", "genre_ids": None}]}
            )
        )

        movies = await tmdb_client.discover(MediaType.MOVIE, 1)

        assert movies[0].genre_ids == []

    @pytest.mark.asyncio
    @respx.mock
    @pytest.mark.parametrize("official", ["false", 0, 1])
    async def test_official_must_be_boolean(self, tmdb_client: TMDBClient, official):
        """The string "false" must not turn into an official trailer."""
        respx.get(f"{BASE}/movie/1001/videos").mock(
            return_value=httpx.Response(
                200,
                json={
                    "results": [
                        {"key": "k1", "site": "YouTube", "type": "Trailer", "official": official}
                    ]
                },
            )
        )

        with pytest.raises(DecodeError):
            await tmdb_client.get_videos(MediaType.MOVIE, 1001, "pt-BR")

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_official_is_false(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/1001/videos").mock(
            return_value=httpx.Response(
                200, json={"results": [{"key": "k1", "site": "YouTube", "type": "Trailer"}]}
            )
        )

        videos = await tmdb_client.get_videos(MediaType.MOVIE, 1001, "pt-BR")

        assert videos[0].official is False


class TestTMDBClientLifecycle:
    """Tests du cycle de vie du client HTTP."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_context_manager_closes_client(self):
        """Sortir du bloc async with ferme le client HTTP."""
        respx.get(f"{BASE}/genre/movie/list").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_GENRES_RESPONSE)
        )

        async with TMDBClient(api_key="test_api_key") as client:
            await client.fetch_movie_genres()
            http_client = client._client
            assert http_client is not None

        assert http_client.is_closed
        assert client._client is None

    @pytest.mark.asyncio
    async def test_close_without_requests(self, tmdb_client: TMDBClient):
        """close() est sans effet si aucune requete n'a ete faite."""
        await tmdb_client.close()
        assert tmdb_client._client is None
