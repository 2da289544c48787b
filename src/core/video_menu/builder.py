"""
Construction de la liste d'entrées du menu vidéo.

Ordre d'affichage (fixe) :
1. Une entrée cochable par playlist, dans l'ordre reçu
2. "Ouvrir la chaîne" (flag + chaîne connue)
3. "S'abonner" / "Se désabonner" (flag + chaîne connue)
4. "Pas intéressé" (flag + jeton de feedback présent)
5. "Partager" (flag + identifiant présent)

Une étape dont la condition échoue est simplement absente (jamais grisée).
Les entrées ne portent aucun appel distant : les callbacks sont des closures
sur les slots, la passerelle et le renderer.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from views import video_menu as texts

from .gateway import Navigator, RemoteStateGateway, Renderer
from .models import (
    SLOT_NOT_INTERESTED,
    SLOT_PLAYLIST_EDIT,
    SLOT_SUBSCRIBE,
    ButtonEntry,
    always_live,
    ChecklistEntry,
    FeatureFlags,
    MenuEntry,
    PlaylistMembership,
    Subject,
)
from .slots import ActionSlotRegistry

logger = logging.getLogger(__name__)


class MenuOptionBuilder:
    def __init__(
        self,
        gateway: RemoteStateGateway,
        slots: ActionSlotRegistry,
        renderer: Renderer,
        navigator: Navigator,
        *,
        optimistic_subscribe_notice: bool = True,
        is_live: Optional[Callable[[], bool]] = None,
    ):
        self._gateway = gateway
        self._slots = slots
        self._renderer = renderer
        self._navigator = navigator
        self.optimistic_subscribe_notice = optimistic_subscribe_notice
        # Faux dès que la session propriétaire est fermée ou remplacée
        self._is_live = is_live or always_live

    def build(self, subject: Subject, playlist_info: Sequence[PlaylistMembership], flags: FeatureFlags) -> List[MenuEntry]:
        entries: List[MenuEntry] = [self._playlist_entry(subject, info) for info in playlist_info]
        if flags.open_channel and subject.channel_id:
            entries.append(ButtonEntry(texts.lbl_open_channel(), self._open_channel_action(subject), self._is_live))
        # open_channel_uploads : flag conservé, entrée volontairement non construite
        if flags.subscribe and subject.channel_id:
            label = texts.lbl_unsubscribe() if subject.subscribed else texts.lbl_subscribe()
            entries.append(ButtonEntry(label, self._subscribe_action(subject), self._is_live))
        if flags.not_interested and subject.feedback_token:
            entries.append(ButtonEntry(texts.lbl_not_interested(), self._not_interested_action(subject), self._is_live))
        if flags.share and subject.id:
            entries.append(ButtonEntry(texts.lbl_share(), self._share_action(subject), self._is_live))
        return entries

    # ---------- playlists ----------
    def _playlist_entry(self, subject: Subject, info: PlaylistMembership) -> ChecklistEntry:
        async def _on_toggle(checked: bool) -> None:
            if not self._is_live():
                return
            self._slots.claim(SLOT_PLAYLIST_EDIT, self._edit_playlist(info.playlist_id, subject.id, checked))

        return ChecklistEntry(info.title, info.is_member, _on_toggle, self._is_live)

    async def _edit_playlist(self, playlist_id: str, subject_id: str, checked: bool) -> None:
        try:
            if checked:
                await self._gateway.add_to_playlist(playlist_id, subject_id)
            else:
                await self._gateway.remove_from_playlist(playlist_id, subject_id)
        except Exception:  # noqa: BLE001
            logger.debug("Edition playlist %s en échec pour %s", playlist_id, subject_id, exc_info=True)

    # ---------- abonnement ----------
    def _subscribe_action(self, subject: Subject):
        async def _on_activate() -> None:
            if not self._is_live():
                return
            self._slots.claim(SLOT_SUBSCRIBE, self._edit_subscription(subject))
            # Retour immédiat, sans attendre la réponse du serveur
            if self.optimistic_subscribe_notice:
                await self._notify(self._subscription_notice(subject))

        return _on_activate

    async def _edit_subscription(self, subject: Subject) -> None:
        try:
            if subject.subscribed:
                await self._gateway.unsubscribe(subject.channel_id)
            else:
                await self._gateway.subscribe(subject.channel_id)
        except Exception:  # noqa: BLE001
            logger.debug("Abonnement %s en échec", subject.channel_id, exc_info=True)
            return
        if not self.optimistic_subscribe_notice and self._is_live():
            await self._notify(self._subscription_notice(subject))

    @staticmethod
    def _subscription_notice(subject: Subject) -> str:
        return texts.msg_unsubscribed() if subject.subscribed else texts.msg_subscribed()

    # ---------- pas intéressé ----------
    def _not_interested_action(self, subject: Subject):
        async def _on_activate() -> None:
            if not self._is_live():
                return
            self._slots.claim(SLOT_NOT_INTERESTED, self._mark_not_interested(subject))

        return _on_activate

    async def _mark_not_interested(self, subject: Subject) -> None:
        try:
            await self._gateway.mark_not_interested(subject)
        except Exception:  # noqa: BLE001
            logger.debug("Avis 'pas intéressé' en échec pour %s", subject.id, exc_info=True)
            return
        if self._is_live():
            await self._notify(texts.msg_not_interested_done())

    # ---------- navigation ----------
    def _open_channel_action(self, subject: Subject):
        async def _on_activate() -> None:
            if self._is_live():
                await self._navigator.open_channel(subject)

        return _on_activate

    def _share_action(self, subject: Subject):
        async def _on_activate() -> None:
            if self._is_live():
                await self._navigator.share(subject)

        return _on_activate

    async def _notify(self, message: str) -> None:
        try:
            await self._renderer.notify(message)
        except Exception:  # noqa: BLE001
            logger.exception("Echec envoi notification menu vidéo")


__all__ = ["MenuOptionBuilder"]
