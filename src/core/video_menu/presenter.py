from __future__ import annotations

import logging
from typing import Dict, Optional

from .models import FeatureFlags, Subject
from .session import MenuSession

logger = logging.getLogger(__name__)


class VideoMenuPresenter:
    """Garde au plus une session de menu ouverte par utilisateur Discord.

    Ouvrir un menu pour un nouveau sujet ferme d'abord la session précédente
    de l'utilisateur (dernier demandé gagnant).
    """

    def __init__(self, *, optimistic_subscribe_notice: bool = True):
        self.optimistic_subscribe_notice = optimistic_subscribe_notice
        self.sessions: Dict[int, MenuSession] = {}

    def show_menu(self, user_id: int, subject: Optional[Subject], gateway, renderer, navigator, flags: Optional[FeatureFlags] = None) -> MenuSession:
        self.close(user_id)
        self._prune()
        session = MenuSession(
            gateway,
            renderer,
            navigator,
            optimistic_subscribe_notice=self.optimistic_subscribe_notice,
        )
        session.open(subject, flags if flags is not None else FeatureFlags.full())
        if not session.is_closed:
            self.sessions[user_id] = session
        return session

    def show_short_menu(self, user_id: int, subject: Optional[Subject], gateway, renderer, navigator) -> MenuSession:
        return self.show_menu(user_id, subject, gateway, renderer, navigator, FeatureFlags.short())

    def _prune(self) -> None:
        # Sessions fermées d'elles-mêmes (timeout, refus, échec de lecture)
        for uid in [u for u, s in self.sessions.items() if s.is_closed]:
            del self.sessions[uid]

    def close(self, user_id: int) -> None:
        session = self.sessions.pop(user_id, None)
        if session is not None:
            session.close()

    def close_all(self) -> int:
        count = len(self.sessions)
        for session in list(self.sessions.values()):
            session.close()
        self.sessions.clear()
        if count:
            logger.info("Menus vidéo fermés: %s", count)
        return count


__all__ = ["VideoMenuPresenter"]
