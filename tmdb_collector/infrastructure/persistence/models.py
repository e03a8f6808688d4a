"""
Modeles SQLModel pour la base de donnees TMDB Collector.

Ces modeles representent les tables de la base de donnees.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- movies: Films decouverts (cle = ID TMDB)
- tv_shows: Series decouvertes (cle = ID TMDB)
- genres: Genres films et series (cle = ID TMDB)
- movie_genres: Liens film-genre (cle composite)
- tvshow_genres: Liens serie-genre (cle composite)

Les IDs sont ceux de TMDB : pas d'auto-increment, une re-collecte ecrase
la ligne existante au lieu de la dupliquer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class MovieModel(SQLModel, table=True):
    """
    Modele representant un film dans la base de donnees.

    created_at est commun a toutes les lignes d'un meme lot d'ecriture.
    """

    __tablename__ = "movies"

    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    title: str
    overview: str = ""
    release_date: str = ""
    poster_path: str = ""
    backdrop_path: str = ""
    vote_average: float = 0.0
    trailer_url: str = ""
    popularity: float = Field(default=0.0, index=True)
    created_at: Optional[datetime] = Field(default=None, index=True)


class TVShowModel(SQLModel, table=True):
    """Modele representant une serie TV dans la base de donnees."""

    __tablename__ = "tv_shows"

    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    name: str
    overview: str = ""
    first_air_date: str = ""
    poster_path: str = ""
    backdrop_path: str = ""
    vote_average: float = 0.0
    trailer_url: str = ""
    popularity: float = Field(default=0.0, index=True)
    created_at: Optional[datetime] = Field(default=None, index=True)


class GenreModel(SQLModel, table=True):
    """Genre TMDB (les listes films et series partagent la table)."""

    __tablename__ = "genres"

    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    name: str


class MovieGenreModel(SQLModel, table=True):
    """Lien film-genre, identifie par la paire."""

    __tablename__ = "movie_genres"

    movie_id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    genre_id: int = Field(primary_key=True, index=True)


class TVShowGenreModel(SQLModel, table=True):
    """Lien serie-genre, identifie par la paire."""

    __tablename__ = "tvshow_genres"

    tvshow_id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    genre_id: int = Field(primary_key=True, index=True)
