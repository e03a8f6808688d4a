"""
Configuration de la base de donnees pour TMDB Collector.

Ce module fournit :
- Engine SQL (SQLite par defaut, toute URL SQLAlchemy acceptee)
- Fonction d'initialisation des tables
- Generateur de session ferme en fin d'utilisation

La base de donnees est configuree via TMDB_COLLECTOR_DATABASE_URL
(defaut: sqlite:///tmdb_collector.db). Le repository ne cree jamais
lui-meme de connexion : il recoit une session deja ouverte.

Usage:
    engine = create_db_engine("sqlite:///tmdb_collector.db")
    init_db(engine)
    with Session(engine) as session:
        repo = SQLModelCatalogRepository(session)
"""

from pathlib import Path
from typing import Iterator

from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, create_engine


def create_db_engine(database_url: str) -> Engine:
    """
    Cree un engine pour l'URL donnee.

    Cree le repertoire parent si l'URL designe un fichier SQLite.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if database_url.startswith("sqlite:///") and not database_url.startswith(
            "sqlite:///:memory:"
        ):
            db_path = Path(database_url.replace("sqlite:///", ""))
            db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(database_url, echo=False, connect_args=connect_args)


def init_db(engine: Engine) -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Importe les modeles pour enregistrer leurs metadonnees dans
    SQLModel.metadata, puis cree les tables manquantes.
    Doit etre appelee une fois au demarrage de l'application.
    """
    # L'import est fait ici pour eviter les imports circulaires
    from tmdb_collector.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session(engine: Engine) -> Iterator[Session]:
    """
    Generateur de session SQLModel.

    La session est fermee quand le generateur est repris ou ferme. Sert de
    Resource au container : container.shutdown_resources() la ferme.
    """
    with Session(engine) as session:
        yield session
