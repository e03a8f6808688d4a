"""
Media catalog entities.

Entities representing movies and TV shows discovered in the TMDB catalog,
their genres and the transient video descriptors used to pick a trailer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class MediaType(str, Enum):
    """
    Catalog type.

    The values match the TMDB path segments (/discover/movie, /tv/{id}/videos).
    """

    MOVIE = "movie"
    TV = "tv"


def absolute_image_url(base_url: str, path: Optional[str]) -> str:
    """
    Build the absolute URL of a TMDB image.

    Empty paths stay empty. A path that is already absolute is returned
    unchanged, so applying the rewrite twice never double-prefixes it.

    Args:
        base_url: Configured image base URL (ex: https://image.tmdb.org/t/p/w500)
        path: Relative path returned by the API (ex: /abc.jpg)

    Returns:
        The absolute URL, or "" when there is no image
    """
    if not path:
        return ""
    if path.startswith(("http://", "https://")) or (base_url and path.startswith(base_url)):
        return path
    return f"{base_url}{path}"


@dataclass(frozen=True)
class EntryGenreLink:
    """
    Link between a catalog entry and one of its genres.

    The pair itself is the identity (composite key in storage).
    """

    entry_id: int
    genre_id: int


@dataclass
class Genre:
    """Genre from a TMDB genre list."""

    id: int
    name: str = ""


@dataclass
class Video:
    """
    Video attached to a catalog entry (never persisted).

    Attributes:
        key: Provider key used to build the playback URL
        site: Hosting platform ("YouTube", "Vimeo", ...)
        type: Type tag ("Trailer", "Teaser", "Clip", ...)
        official: True when published by the rights holder
    """

    key: str
    site: str = ""
    type: str = ""
    official: bool = False


@dataclass
class MediaEntry:
    """
    Movie or TV show discovered in the TMDB catalog.

    Attributes:
        id: TMDB ID, unique per media type
        media_type: MOVIE or TV
        title: Movie title or show name
        overview: Plot summary
        release_date: Movie release date or show first air date (raw string)
        poster_path: Poster URL (absolute once fetched)
        backdrop_path: Backdrop URL (absolute once fetched)
        vote_average: TMDB rating (0-10)
        popularity: TMDB popularity score
        trailer_url: YouTube URL, "" when no trailer qualifies
        genre_ids: Associated genre IDs, in API order
        created_at: Batch timestamp set when persisted
    """

    id: int
    media_type: MediaType = MediaType.MOVIE
    title: str = ""
    overview: str = ""
    release_date: str = ""
    poster_path: str = ""
    backdrop_path: str = ""
    vote_average: float = 0.0
    popularity: float = 0.0
    trailer_url: str = ""
    genre_ids: list[int] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @property
    def has_trailer(self) -> bool:
        """True when enrichment found a trailer."""
        return bool(self.trailer_url)

    def genre_links(self) -> list[EntryGenreLink]:
        """Return the genre links of this entry, without duplicates."""
        return [
            EntryGenreLink(entry_id=self.id, genre_id=genre_id)
            for genre_id in dict.fromkeys(self.genre_ids)
        ]
