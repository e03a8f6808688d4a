"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe
TMDB_COLLECTOR_, et peut optionnellement être fournie via un fichier .env ou via
un fichier config.json (format historique {"tmdb": {...}, "fetch": {...}}).

Les options imbriquées utilisent le délimiteur "__".
Exemple : TMDB_COLLECTOR_FETCH__SORT__MOVIES__FIELD=vote_average
"""

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de tmdb_collector/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class SortConfig(BaseModel):
    """Tri d'une requête de découverte (champ + direction)."""

    field: str = "popularity"
    direction: str = "desc"

    @field_validator("direction")
    @classmethod
    def check_direction(cls, v: str) -> str:
        """La direction doit être asc ou desc."""
        v = v.lower()
        if v not in ("asc", "desc"):
            raise ValueError(f"direction de tri invalide: {v!r} (asc ou desc)")
        return v

    @property
    def sort_by(self) -> str:
        """Valeur du paramètre sort_by TMDB (ex: popularity.desc)."""
        return f"{self.field}.{self.direction}"


class SortSettings(BaseModel):
    """Tri indépendant pour les films et pour les séries."""

    movies: SortConfig = Field(default_factory=SortConfig)
    tv_shows: SortConfig = Field(default_factory=SortConfig)


class FetchSettings(BaseModel):
    """Options de filtrage des pages de découverte."""

    num_pages: int = Field(default=1, ge=1)
    include_adult: bool = False
    include_video: bool = False
    max_release_date: str = ""
    sort: SortSettings = Field(default_factory=SortSettings)


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe TMDB_COLLECTOR_.
    Exemple : TMDB_COLLECTOR_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="TMDB_COLLECTOR_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    # API TMDB (clé OPTIONNELLE - la collecte est refusée si non définie)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3")
    tmdb_image_base_url: str = Field(default="https://image.tmdb.org/t/p/w500")
    language: str = Field(default="pt-BR")
    fallback_language: str = Field(default="en-US")
    request_timeout: float = Field(default=30.0, gt=0)

    # Découverte
    fetch: FetchSettings = Field(default_factory=FetchSettings)

    # Enrichissement (10 résolutions de trailer simultanées au maximum)
    enrichment_concurrency: int = Field(default=10, ge=1)
    enrichment_timeout: Optional[float] = Field(default=None, gt=0)

    # Base de données
    database_url: str = Field(default="sqlite:///tmdb_collector.db")

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/tmdb_collector.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("tmdb_base_url", "tmdb_image_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Les chemins TMDB commencent par '/', la base ne doit pas finir par '/'."""
        return v.rstrip("/")

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)

    @classmethod
    def from_json_file(cls, path: Path, **overrides: Any) -> "Settings":
        """
        Charge les paramètres depuis un fichier config.json.

        Format attendu :
            {
              "tmdb": {"api_key": "...", "base_url": "...",
                       "image_base_url": "...", "language": "pt-BR"},
              "fetch": {"num_pages": 5, "include_adult": false, ...}
            }

        Les valeurs du fichier priment sur les variables d'environnement.

        Args:
            path: Chemin du fichier JSON
            **overrides: Valeurs supplémentaires (prioritaires sur le fichier)

        Returns:
            Settings construits depuis le fichier
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))

        values: dict[str, Any] = {}
        tmdb = data.get("tmdb", {})
        mapping = {
            "api_key": "tmdb_api_key",
            "base_url": "tmdb_base_url",
            "image_base_url": "tmdb_image_base_url",
            "language": "language",
        }
        for key, attr in mapping.items():
            if tmdb.get(key):
                values[attr] = tmdb[key]
        if "fetch" in data:
            values["fetch"] = data["fetch"]
        values.update(overrides)
        return cls(**values)
