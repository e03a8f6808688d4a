"""
Implementation SQLModel du repository catalogue.

Implemente l'interface ICatalogRepository : ecritures en lot atomiques et
idempotentes des films, series, genres et liens entree-genre.

Chaque appel d'ecriture :
- s'execute dans une seule transaction (tout ou rien)
- fait un upsert par ligne (INSERT ... ON CONFLICT DO UPDATE, remplacement complet)
- annule la transaction et leve PersistenceError a la premiere ligne en echec
- ne reessaie jamais (la politique de retry appartient a l'appelant)
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional, Sequence

from loguru import logger
from sqlalchemy import Table, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from tmdb_collector.core.entities.media import EntryGenreLink, Genre, MediaEntry, MediaType
from tmdb_collector.core.ports.repositories import ICatalogRepository
from tmdb_collector.infrastructure.persistence.models import (
    GenreModel,
    MovieGenreModel,
    MovieModel,
    TVShowGenreModel,
    TVShowModel,
)

# Constructions INSERT supportant ON CONFLICT, par dialecte
_DIALECT_INSERTS: dict[str, Callable[[Table], Any]] = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class PersistenceError(Exception):
    """
    Exception levee quand un lot n'a pas pu etre ecrit.

    La transaction a ete annulee : aucune ligne du lot n'est en base.

    Attributes:
        table: Table visee
        batch_size: Nombre de lignes du lot
    """

    def __init__(self, table: str, batch_size: int) -> None:
        self.table = table
        self.batch_size = batch_size
        super().__init__(
            f"Echec de l'ecriture de {batch_size} ligne(s) dans '{table}', lot annule"
        )


def _movie_row(entry: MediaEntry, created_at: datetime) -> dict[str, Any]:
    return {
        "id": entry.id,
        "title": entry.title,
        "overview": entry.overview,
        "release_date": entry.release_date,
        "poster_path": entry.poster_path,
        "backdrop_path": entry.backdrop_path,
        "vote_average": entry.vote_average,
        "trailer_url": entry.trailer_url,
        "popularity": entry.popularity,
        "created_at": created_at,
    }


def _tv_show_row(entry: MediaEntry, created_at: datetime) -> dict[str, Any]:
    return {
        "id": entry.id,
        "name": entry.title,
        "overview": entry.overview,
        "first_air_date": entry.release_date,
        "poster_path": entry.poster_path,
        "backdrop_path": entry.backdrop_path,
        "vote_average": entry.vote_average,
        "trailer_url": entry.trailer_url,
        "popularity": entry.popularity,
        "created_at": created_at,
    }


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Horodatage relu en base, toujours en UTC avec fuseau."""
    if value is None or value.tzinfo is not None:
        return value
    # Les colonnes DATETIME sans fuseau (SQLite) rendent une valeur naive
    return value.replace(tzinfo=timezone.utc)


class SQLModelCatalogRepository(ICatalogRepository):
    """
    Repository SQLModel pour le catalogue.

    Recoit une session deja ouverte (injection) : le cycle de vie de la
    connexion appartient a l'appelant. Supporte SQLite et PostgreSQL.
    """

    _ENTRY_TABLES = {
        MediaType.MOVIE: (MovieModel, _movie_row),
        MediaType.TV: (TVShowModel, _tv_show_row),
    }
    _LINK_TABLES = {
        MediaType.MOVIE: (MovieGenreModel, "movie_id"),
        MediaType.TV: (TVShowGenreModel, "tvshow_id"),
    }

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _insert_construct(self) -> Callable[[Table], Any]:
        """Construction INSERT ... ON CONFLICT du dialecte de la session."""
        dialect = self._session.get_bind().dialect.name
        insert = _DIALECT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Upsert non supporte pour le dialecte '{dialect}'")
        return insert

    @staticmethod
    def _upsert_statement(
        insert: Callable[[Table], Any],
        table: Table,
        key_columns: Sequence[str],
        row: dict[str, Any],
    ) -> Any:
        """
        Construit l'upsert d'une ligne.

        Toutes les colonnes hors cle sont remplacees en cas de conflit ;
        sans colonne hors cle, le conflit est ignore.
        """
        statement = insert(table).values(**row)
        updates = {
            column: statement.excluded[column]
            for column in row
            if column not in key_columns
        }
        if updates:
            return statement.on_conflict_do_update(index_elements=key_columns, set_=updates)
        return statement.on_conflict_do_nothing(index_elements=key_columns)

    def _write_batch(
        self,
        table: Table,
        key_columns: Sequence[str],
        rows: Sequence[dict[str, Any]],
    ) -> None:
        """
        Ecrit un lot de lignes dans une transaction unique.

        Raises:
            PersistenceError: Si une ligne echoue (transaction annulee)
        """
        insert = self._insert_construct()
        try:
            connection = self._session.connection()
            for row in rows:
                connection.execute(self._upsert_statement(insert, table, key_columns, row))
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Lot annule sur '{table.name}' ({len(rows)} ligne(s)): {e}")
            raise PersistenceError(table.name, len(rows)) from e

        logger.debug(f"{len(rows)} ligne(s) ecrites dans '{table.name}'")

    def save_entries_bulk(
        self, media_type: MediaType, entries: Sequence[MediaEntry]
    ) -> Optional[datetime]:
        """
        Upsert d'un lot de films ou de series.

        created_at (UTC, avec fuseau) est calcule une seule fois et applique
        a toutes les lignes du lot, puis reporte sur les entrees apres
        validation.

        Retourne :
            L'horodatage du lot, ou None si le lot est vide
        """
        if not entries:
            return None

        model, to_row = self._ENTRY_TABLES[media_type]
        created_at = datetime.now(timezone.utc)
        rows = [to_row(entry, created_at) for entry in entries]

        self._write_batch(model.__table__, ["id"], rows)  # type: ignore[attr-defined]

        for entry in entries:
            entry.created_at = created_at
        return created_at

    def save_movies_bulk(self, movies: Sequence[MediaEntry]) -> Optional[datetime]:
        """Upsert d'un lot de films."""
        return self.save_entries_bulk(MediaType.MOVIE, movies)

    def save_tv_shows_bulk(self, shows: Sequence[MediaEntry]) -> Optional[datetime]:
        """Upsert d'un lot de series."""
        return self.save_entries_bulk(MediaType.TV, shows)

    def save_genres(self, genres: Sequence[Genre]) -> None:
        """Upsert d'un lot de genres (le nom est remplace)."""
        if not genres:
            return
        rows = [{"id": genre.id, "name": genre.name} for genre in genres]
        self._write_batch(GenreModel.__table__, ["id"], rows)  # type: ignore[attr-defined]

    def save_genre_links_bulk(
        self, media_type: MediaType, links: Sequence[EntryGenreLink]
    ) -> None:
        """Insertion idempotente d'un lot de liens entree-genre."""
        if not links:
            return
        model, entry_column = self._LINK_TABLES[media_type]
        rows = [
            {entry_column: link.entry_id, "genre_id": link.genre_id}
            for link in dict.fromkeys(links)
        ]
        self._write_batch(
            model.__table__,  # type: ignore[attr-defined]
            [entry_column, "genre_id"],
            rows,
        )

    def save_movie_genres_bulk(self, links: Sequence[EntryGenreLink]) -> None:
        """Liens film-genre."""
        self.save_genre_links_bulk(MediaType.MOVIE, links)

    def save_tv_show_genres_bulk(self, links: Sequence[EntryGenreLink]) -> None:
        """Liens serie-genre."""
        self.save_genre_links_bulk(MediaType.TV, links)

    def save_movie_genres(self, movie_id: int, genre_ids: Sequence[int]) -> None:
        """Liens d'un seul film vers ses genres."""
        self.save_movie_genres_bulk(
            [EntryGenreLink(entry_id=movie_id, genre_id=genre_id) for genre_id in genre_ids]
        )

    def save_tv_show_genres(self, show_id: int, genre_ids: Sequence[int]) -> None:
        """Liens d'une seule serie vers ses genres."""
        self.save_tv_show_genres_bulk(
            [EntryGenreLink(entry_id=show_id, genre_id=genre_id) for genre_id in genre_ids]
        )

    def count_entries(self, media_type: MediaType) -> int:
        """Nombre de films ou de series en base."""
        model, _ = self._ENTRY_TABLES[media_type]
        return self._session.exec(select(func.count()).select_from(model)).one()

    def count_genres(self) -> int:
        """Nombre de genres en base."""
        return self._session.exec(select(func.count()).select_from(GenreModel)).one()

    def count_genre_links(self, media_type: MediaType) -> int:
        """Nombre de liens entree-genre en base."""
        model, _ = self._LINK_TABLES[media_type]
        return self._session.exec(select(func.count()).select_from(model)).one()

    def get_entry(self, media_type: MediaType, entry_id: int) -> Optional[MediaEntry]:
        """Recupere une entree par son ID TMDB."""
        if media_type is MediaType.MOVIE:
            movie = self._session.get(MovieModel, entry_id)
            if movie is None:
                return None
            return MediaEntry(
                id=movie.id,
                media_type=MediaType.MOVIE,
                title=movie.title,
                overview=movie.overview,
                release_date=movie.release_date,
                poster_path=movie.poster_path,
                backdrop_path=movie.backdrop_path,
                vote_average=movie.vote_average,
                popularity=movie.popularity,
                trailer_url=movie.trailer_url,
                created_at=_as_utc(movie.created_at),
            )

        show = self._session.get(TVShowModel, entry_id)
        if show is None:
            return None
        return MediaEntry(
            id=show.id,
            media_type=MediaType.TV,
            title=show.name,
            overview=show.overview,
            release_date=show.first_air_date,
            poster_path=show.poster_path,
            backdrop_path=show.backdrop_path,
            vote_average=show.vote_average,
            popularity=show.popularity,
            trailer_url=show.trailer_url,
            created_at=_as_utc(show.created_at),
        )
