"""
Erreurs de l'API catalogue.

Taxonomie commune a toutes les operations du client TMDB :
- TransportError : echec reseau (connexion, timeout)
- APIError : statut HTTP hors 2xx (code et corps bruts conserves)
- DecodeError : JSON invalide ou forme inattendue

"Aucun trailer trouve" n'est PAS une erreur et n'a pas d'exception associee.
"""

from typing import Optional


class CatalogAPIError(Exception):
    """Base des erreurs remontees par le client catalogue."""


class TransportError(CatalogAPIError):
    """
    Exception levee quand la requete n'a pas pu aboutir.

    Attributes:
        url: URL appelee, si connue
    """

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        self.url = url
        super().__init__(message)


class APIError(CatalogAPIError):
    """
    Exception levee quand l'API retourne un statut hors 2xx.

    Attributes:
        status_code: Code HTTP retourne
        body: Corps brut de la reponse
    """

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Erreur API (status {status_code}): {body}")


class DecodeError(CatalogAPIError):
    """Exception levee quand la reponse n'a pas la forme JSON attendue."""
