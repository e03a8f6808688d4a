"""
Module de persistance SQL pour TMDB Collector.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Creation de l'engine et initialisation des tables
- models.py : Modeles SQLModel representant les tables de la base de donnees
- repositories/ : Ecritures en lot atomiques (SQLModelCatalogRepository)

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.

Usage:
    from tmdb_collector.infrastructure.persistence import create_db_engine, init_db

    engine = create_db_engine("sqlite:///tmdb_collector.db")
    init_db(engine)
"""

from tmdb_collector.infrastructure.persistence.database import (
    create_db_engine,
    get_session,
    init_db,
)
from tmdb_collector.infrastructure.persistence.models import (
    GenreModel,
    MovieGenreModel,
    MovieModel,
    TVShowGenreModel,
    TVShowModel,
)

__all__ = [
    "create_db_engine",
    "get_session",
    "init_db",
    "MovieModel",
    "TVShowModel",
    "GenreModel",
    "MovieGenreModel",
    "TVShowGenreModel",
]
