"""
Porte d'admission asynchrone pour limiter les appels simultanes.

Une operation ne demarre que si moins de `limit` operations sont en cours ;
le creneau est libere dans tous les cas (succes, resultat vide ou erreur).
"""

import asyncio
from typing import Any


class AdmissionGate:
    """
    Semaphore comptant les operations en vol.

    Utilisable comme context manager asynchrone :

        gate = AdmissionGate(limit=10)
        async with gate:
            await resolver.resolve(...)

    Attributes:
        limit: Nombre maximum d'operations simultanees
        in_flight: Operations actuellement admises
        peak: Maximum observe de in_flight depuis la creation
    """

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError(f"limit doit etre >= 1, recu {limit}")
        self.limit = limit
        self.in_flight = 0
        self.peak = 0
        self._semaphore = asyncio.BoundedSemaphore(limit)

    async def __aenter__(self) -> "AdmissionGate":
        await self._semaphore.acquire()
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.in_flight -= 1
        self._semaphore.release()
