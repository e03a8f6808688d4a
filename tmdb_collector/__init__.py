"""
TMDB Collector - Collecte du catalogue TMDB (films et series).

Ce package decouvre les entrees du catalogue TMDB page par page, les enrichit
avec un lien de bande-annonce et les persiste en base de maniere idempotente.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports)
- services/ : Couche application (resolution des trailers, enrichissement, collecte)
- adapters/ : Clients API et CLI
- infrastructure/ : Persistance SQLModel
"""

__version__ = "0.1.0"
