"""
Service d'enrichissement des entrees avec leur trailer.

TrailerEnricherService decore chaque entree d'une page avec l'URL de son
trailer, en lancant une resolution par entree sous une limite fixe de
resolutions simultanees (10 par defaut).

Responsabilites:
- Limiter la concurrence via une porte d'admission (AdmissionGate)
- Isoler les echecs : une erreur sur une entree n'interrompt pas le lot
- Rendre la main seulement quand toutes les entrees ont ete traitees
- Conserver l'ordre d'entree, quel que soit l'ordre de completion
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from loguru import logger

from tmdb_collector.core.entities.media import MediaEntry
from tmdb_collector.services.admission_gate import AdmissionGate
from tmdb_collector.services.trailer_resolver import TrailerResolver


@dataclass
class EnrichmentResult:
    """Resultat d'un lot d'enrichissement.

    Attributes:
        entries: Entrees decorees, dans l'ordre d'entree
        with_trailer: Entrees pour lesquelles un trailer a ete trouve
        without_trailer: Entrees sans trailer (resultat normal)
        failed: Entrees dont la resolution a echoue (trailer vide)
        peak_concurrency: Nombre maximum de resolutions simultanees observe
    """

    entries: list[MediaEntry] = field(default_factory=list)
    with_trailer: int = 0
    without_trailer: int = 0
    failed: int = 0
    peak_concurrency: int = 0

    @property
    def total(self) -> int:
        """Nombre total d'entrees traitees."""
        return self.with_trailer + self.without_trailer + self.failed


class TrailerEnricherService:
    """
    Enrichissement concurrent et borne d'un lot d'entrees.

    Attributes:
        DEFAULT_CONCURRENCY: Resolutions simultanees par defaut

    Example:
        enricher = TrailerEnricherService(resolver, concurrency=10)
        result = await enricher.enrich(movies)
        print(f"{result.with_trailer}/{result.total} avec trailer")
    """

    DEFAULT_CONCURRENCY: int = 10

    def __init__(
        self,
        resolver: TrailerResolver,
        concurrency: int = DEFAULT_CONCURRENCY,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Initialise le service d'enrichissement.

        Args:
            resolver: Resolver de trailer (une resolution par entree)
            concurrency: Nombre maximum de resolutions en vol
            timeout: Delai maximum d'une resolution en secondes (optionnel),
                un depassement compte comme un echec
        """
        if concurrency < 1:
            raise ValueError(f"concurrency doit etre >= 1, recu {concurrency}")
        self._resolver = resolver
        self._concurrency = concurrency
        self._timeout = timeout

    @property
    def concurrency(self) -> int:
        """Limite de resolutions simultanees."""
        return self._concurrency

    async def _resolve_one(self, gate: AdmissionGate, entry: MediaEntry) -> str:
        """Resout le trailer d'une entree une fois admise par la porte."""
        async with gate:
            resolution = self._resolver.resolve(entry.id, entry.media_type)
            if self._timeout is None:
                return await resolution
            return await asyncio.wait_for(resolution, timeout=self._timeout)

    async def enrich(self, entries: Sequence[MediaEntry]) -> EnrichmentResult:
        """
        Decore chaque entree avec son trailer.

        Les entrees sont modifiees en place. Un echec de resolution (erreur API,
        timeout, annulation) laisse trailer_url vide et n'affecte pas les autres.

        Args:
            entries: Entrees d'une page

        Returns:
            EnrichmentResult avec les entrees dans l'ordre d'entree
        """
        entries = list(entries)
        result = EnrichmentResult(entries=entries)
        if not entries:
            return result

        gate = AdmissionGate(self._concurrency)
        outcomes: list[Union[str, BaseException]] = await asyncio.gather(
            *(self._resolve_one(gate, entry) for entry in entries),
            return_exceptions=True,
        )

        for entry, outcome in zip(entries, outcomes):
            if isinstance(outcome, (Exception, asyncio.CancelledError)):
                entry.trailer_url = ""
                result.failed += 1
                logger.warning(
                    f"Echec resolution trailer {entry.media_type.value} {entry.id}: "
                    f"{type(outcome).__name__}: {outcome}"
                )
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                entry.trailer_url = outcome or ""
                if entry.trailer_url:
                    result.with_trailer += 1
                else:
                    result.without_trailer += 1

        result.peak_concurrency = gate.peak
        logger.info(
            f"Enrichissement: {result.with_trailer} avec trailer, "
            f"{result.without_trailer} sans, {result.failed} echec(s) "
            f"sur {result.total} entree(s)"
        )
        return result
