"""Taxonomie des erreurs du menu vidéo.

Aucune de ces erreurs ne traverse la frontière du cœur : elles sont levées
par les passerelles distantes puis absorbées localement (log + abandon de
l'opération concernée). L'annulation d'une opération remplacée reste un
`asyncio.CancelledError` et n'est jamais considérée comme une erreur.
"""
from __future__ import annotations


class VideoMenuError(Exception):
    """Base commune des erreurs du menu vidéo."""


class AuthorizationDenied(VideoMenuError):
    """Utilisateur non connecté (ou vérification impossible : refus par défaut)."""


class FetchFailed(VideoMenuError):
    """Lecture de l'état distant (playlists, catalogue) en échec."""


class MutationFailed(VideoMenuError):
    """Modification distante (playlist, abonnement, avis) en échec."""


__all__ = ["VideoMenuError", "AuthorizationDenied", "FetchFailed", "MutationFailed"]
