"""
Session de menu vidéo : orchestre vérification de connexion, lecture des playlists,
construction des entrées et rendu, puis porte les slots des actions utilisateur.

Cycle de vie :
    IDLE -> AUTH_PENDING -> FETCHING -> BUILT -> CLOSED

- Sujet absent ou non lisible : passage direct à CLOSED, sans effet de bord
- Refus de connexion : notification "réservé aux connectés" puis CLOSED
- Echec de lecture des playlists : fermeture silencieuse (aucun menu partiel)
- `close()` est le seul point d'annulation : tous les slots sont annulés et le
  menu affiché est retiré via la fonction de retrait renvoyée par le renderer

Un compteur de génération invalide toute réponse asynchrone arrivée après
fermeture ou réouverture ; elle est alors ignorée.
"""
from __future__ import annotations

import enum
import functools
import logging
from typing import Any, Callable, List, Optional

from views import video_menu as texts

from .auth import AuthGate
from .builder import MenuOptionBuilder
from .gateway import Navigator, RemoteStateGateway, Renderer
from .models import SLOT_PLAYLIST_FETCH, FeatureFlags, MenuEntry, Subject
from .slots import ActionSlotRegistry

logger = logging.getLogger(__name__)


class MenuState(enum.Enum):
    IDLE = "idle"
    AUTH_PENDING = "auth_pending"
    FETCHING = "fetching"
    BUILT = "built"
    CLOSED = "closed"


class MenuSession:
    def __init__(self, gateway: RemoteStateGateway, renderer: Renderer, navigator: Navigator, *, optimistic_subscribe_notice: bool = True):
        self._gateway = gateway
        self._renderer = renderer
        self._navigator = navigator
        self._optimistic_subscribe_notice = optimistic_subscribe_notice
        self._slots = ActionSlotRegistry()
        self._auth = AuthGate(gateway, self._slots)
        self._generation = 0
        self.state = MenuState.IDLE
        self.subject: Optional[Subject] = None
        self.flags = FeatureFlags()
        self.entries: List[MenuEntry] = []
        self._teardown: Optional[Callable[[], Any]] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def live_slots(self):
        return self._slots.live_slots

    @property
    def is_closed(self) -> bool:
        return self.state is MenuState.CLOSED

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and self.state is not MenuState.CLOSED

    def open(self, subject: Optional[Subject], flags: Optional[FeatureFlags] = None) -> None:
        # Réouverture : la session précédente est fermée avant toute chose
        if self.state not in (MenuState.IDLE, MenuState.CLOSED):
            self.close()
        if subject is None or not subject.is_playable:
            self.state = MenuState.CLOSED
            return
        self._generation += 1
        generation = self._generation
        self.subject = subject
        self.flags = flags if flags is not None else FeatureFlags.full()
        self.entries = []
        self.state = MenuState.AUTH_PENDING
        logger.debug("Menu %s: vérification connexion (gen %s)", subject.id, generation)
        self._auth.check(
            functools.partial(self._on_authorized, generation),
            functools.partial(self._on_unauthorized, generation),
        )

    def _on_authorized(self, generation: int) -> None:
        if not self._is_current(generation):
            return
        self.state = MenuState.FETCHING
        self._slots.claim(SLOT_PLAYLIST_FETCH, self._fetch_and_show(generation))

    async def _on_unauthorized(self, generation: int) -> None:
        if not self._is_current(generation):
            return
        try:
            await self._renderer.notify(texts.msg_signed_users_only())
        except Exception:  # noqa: BLE001
            logger.exception("Echec notification connexion requise")
        if self._is_current(generation):
            self.close()

    async def _fetch_and_show(self, generation: int) -> None:
        subject = self.subject
        try:
            playlist_info = list(await self._gateway.fetch_playlist_info(subject.id))
        except Exception:  # noqa: BLE001
            logger.warning("Lecture des playlists impossible pour %s", subject.id, exc_info=True)
            if self._is_current(generation):
                self.close()
            return
        if not self._is_current(generation):
            return
        builder = MenuOptionBuilder(
            self._gateway,
            self._slots,
            self._renderer,
            self._navigator,
            optimistic_subscribe_notice=self._optimistic_subscribe_notice,
            is_live=functools.partial(self._is_current, generation),
        )
        self.entries = builder.build(subject, playlist_info, self.flags)
        self.state = MenuState.BUILT
        logger.debug("Menu %s construit: %s entrée(s)", subject.id, len(self.entries))
        try:
            teardown = await self._renderer.render(subject.title, self.entries, functools.partial(self._close_if_current, generation))
        except Exception:  # noqa: BLE001
            logger.exception("Echec affichage menu vidéo %s", subject.id)
            if self._is_current(generation):
                self.close()
            return
        if self._is_current(generation):
            self._teardown = teardown
        else:
            self._run_teardown(teardown)

    def _close_if_current(self, generation: int) -> None:
        # Le rendu d'un menu remplacé ne doit pas fermer la session suivante
        if generation == self._generation:
            self.close()

    def close(self) -> None:
        """Ferme la session et annule tous les slots ; idempotent."""
        self._slots.cancel_all()
        if self.state is MenuState.CLOSED:
            return
        logger.debug("Menu %s fermé (gen %s)", getattr(self.subject, "id", "?"), self._generation)
        self._generation += 1
        self.state = MenuState.CLOSED
        self.entries = []
        teardown, self._teardown = self._teardown, None
        self._run_teardown(teardown)

    @staticmethod
    def _run_teardown(teardown: Optional[Callable[[], Any]]) -> None:
        # Retire le menu affiché (vue arrêtée, boutons désactivés)
        if teardown is None:
            return
        try:
            teardown()
        except Exception:  # noqa: BLE001
            logger.exception("Echec retrait du menu vidéo affiché")


__all__ = ["MenuSession", "MenuState"]
