"""
Tests pour les modeles SQLModel de persistance.

Verifie les tables creees, les cles primaires (IDs TMDB, pas d'auto-increment)
et les index de lecture (popularity, created_at).
"""

from sqlalchemy import inspect

from tmdb_collector.infrastructure.persistence.models import (
    GenreModel,
    MovieGenreModel,
    MovieModel,
    TVShowGenreModel,
    TVShowModel,
)


class TestMovieModel:
    """Tests pour MovieModel."""

    def test_movie_model_defaults(self):
        """Les champs texte optionnels valent "" et created_at None."""
        model = MovieModel(id=550, title="Clube da Luta")
        assert model.overview == ""
        assert model.trailer_url == ""
        assert model.vote_average == 0.0
        assert model.created_at is None

    def test_movie_primary_key_is_tmdb_id(self):
        assert [c.name for c in MovieModel.__table__.primary_key.columns] == ["id"]
        assert MovieModel.__table__.c.id.autoincrement is False

    def test_title_not_nullable(self):
        assert MovieModel.__table__.c.title.nullable is False


class TestTVShowModel:
    """Tests pour TVShowModel."""

    def test_tv_show_uses_name_and_first_air_date(self):
        model = TVShowModel(id=1396, name="Breaking Bad", first_air_date="2008-01-20")
        assert model.name == "Breaking Bad"
        assert model.first_air_date == "2008-01-20"


class TestLinkModels:
    """Tests des tables de liens entree-genre."""

    def test_movie_genre_composite_key(self):
        keys = {c.name for c in MovieGenreModel.__table__.primary_key.columns}
        assert keys == {"movie_id", "genre_id"}

    def test_tv_show_genre_composite_key(self):
        keys = {c.name for c in TVShowGenreModel.__table__.primary_key.columns}
        assert keys == {"tvshow_id", "genre_id"}


class TestSchema:
    """Tests du schema cree par init_db."""

    def test_all_tables_created(self, engine):
        tables = set(inspect(engine).get_table_names())
        assert {"movies", "tv_shows", "genres", "movie_genres", "tvshow_genres"} <= tables

    def test_read_indexes(self, engine):
        """popularity et created_at sont indexes pour les lectures."""
        indexed = {
            column
            for index in inspect(engine).get_indexes("movies")
            for column in index["column_names"]
        }
        assert {"popularity", "created_at"} <= indexed

    def test_genre_model(self):
        assert GenreModel(id=28, name="Ação").name == "Ação"
