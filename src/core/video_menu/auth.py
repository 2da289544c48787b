from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from .errors import AuthorizationDenied
from .gateway import RemoteStateGateway
from .models import SLOT_AUTH_CHECK
from .slots import ActionSlotRegistry, invoke

logger = logging.getLogger(__name__)


class AuthGate:
    """Vérifie la connexion de l'utilisateur avant les actions privilégiées.

    Une seule des deux continuations est appelée, une seule fois, de façon
    asynchrone. Un nouvel appel à `check` annule le précédent (slot `authCheck`) :
    les continuations de l'appel remplacé ne sont jamais invoquées.
    Une erreur de vérification vaut refus (fermeture par défaut).
    """

    def __init__(self, gateway: RemoteStateGateway, slots: ActionSlotRegistry):
        self._gateway = gateway
        self._slots = slots

    def check(self, on_authorized: Callable[[], Any], on_unauthorized: Callable[[], Any]) -> asyncio.Task:
        return self._slots.claim(SLOT_AUTH_CHECK, self._run(on_authorized, on_unauthorized))

    async def verify(self) -> None:
        """Lève `AuthorizationDenied` si l'utilisateur n'est pas connecté ou si la vérification échoue."""
        try:
            signed_in = bool(await self._gateway.is_signed_in())
        except Exception as exc:  # noqa: BLE001
            raise AuthorizationDenied("vérification de connexion impossible") from exc
        if not signed_in:
            raise AuthorizationDenied("utilisateur non connecté")

    async def _run(self, on_authorized: Callable[[], Any], on_unauthorized: Callable[[], Any]) -> None:
        try:
            await self.verify()
        except AuthorizationDenied as denial:
            logger.debug("Accès refusé: %s", denial, exc_info=denial.__cause__ is not None)
            await invoke(on_unauthorized)
            return
        await invoke(on_authorized)


__all__ = ["AuthGate"]
