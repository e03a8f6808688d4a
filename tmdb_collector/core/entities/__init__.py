"""
Business entities representing core domain concepts.

Exports:
- MediaType: Catalog type (movie or TV show)
- MediaEntry: A movie or TV show discovered in the catalog
- Genre: Genre from the TMDB genre lists
- EntryGenreLink: Many-to-many link between an entry and a genre
- Video: Transient video descriptor used for trailer selection
"""

from tmdb_collector.core.entities.media import (
    EntryGenreLink,
    Genre,
    MediaEntry,
    MediaType,
    Video,
    absolute_image_url,
)

__all__ = [
    "MediaType",
    "MediaEntry",
    "Genre",
    "EntryGenreLink",
    "Video",
    "absolute_image_url",
]
