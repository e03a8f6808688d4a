"""
Configuration du logging de l'application via loguru.

Deux sorties :
- console : lisible, coloree, au niveau choisi par -v / -q
- fichier : JSON serialise (un objet par ligne), rotation et compression

Chaque message porte un champ extra "run" : l'identifiant de la collecte en
cours (pose par CollectorService.collect via logger.contextualize), ou "-"
hors collecte. Le fichier JSON peut ainsi etre filtre par execution.
"""

import sys
from pathlib import Path

from loguru import logger

# Valeur du champ "run" hors d'une collecte
NO_RUN = "-"

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[run]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/tmdb_collector.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Remplace les handlers loguru par la console et le fichier JSON.

    Args :
        log_level : Niveau minimum de la console (le fichier recoit tout des DEBUG)
        log_file : Fichier JSON, son repertoire est cree si besoin
        rotation_size : Taille declenchant la rotation (ex: "10 MB")
        retention_count : Nombre de fichiers archives conserves
    """
    logger.remove()
    logger.configure(extra={"run": NO_RUN})

    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=_CONSOLE_FORMAT,
        colorize=True,
    )

    # Requetes HTTP et ecritures de lots en DEBUG
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug(
        f"Logging configure (console {log_level.upper()}, fichier {log_file})",
        rotation=rotation_size,
    )
