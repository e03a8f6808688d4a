"""
Fixtures pytest partagees pour les tests TMDB Collector.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Engine SQLite en memoire et session SQLModel
- Repository catalogue branche sur cette session
- Fabrique d'entrees du catalogue
"""

from pathlib import Path
from typing import Callable, Iterator

import pytest
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from tmdb_collector.config import Settings
from tmdb_collector.core.entities.media import MediaEntry, MediaType
from tmdb_collector.infrastructure.persistence.database import init_db
from tmdb_collector.infrastructure.persistence.repositories import SQLModelCatalogRepository


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler la base et les logs de chaque test.
    """
    return Settings(
        tmdb_api_key="test_api_key",
        database_url=f"sqlite:///{tmp_path}/test.db",
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Engine SQLite en memoire partage par toutes les connexions du test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    """Session SQLModel sur la base en memoire."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def repository(session: Session) -> SQLModelCatalogRepository:
    """Repository catalogue sur la session de test."""
    return SQLModelCatalogRepository(session)


@pytest.fixture
def make_entry() -> Callable[..., MediaEntry]:
    """Fabrique d'entrees avec des valeurs par defaut realistes."""

    def _make(entry_id: int, media_type: MediaType = MediaType.MOVIE, **kwargs) -> MediaEntry:
        values = {
            "title": f"Titre {entry_id}",
            "overview": f"Synopsis {entry_id}",
            "release_date": "2024-01-15",
            "vote_average": 7.2,
            "popularity": 100.0 + entry_id,
        }
        values.update(kwargs)
        return MediaEntry(id=entry_id, media_type=media_type, **values)

    return _make
