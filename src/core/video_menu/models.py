from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

# Noms de slots fixes ; un slot porte au plus une opération vivante
SLOT_PLAYLIST_FETCH = "playlistFetch"
SLOT_PLAYLIST_EDIT = "playlistEdit"
SLOT_AUTH_CHECK = "authCheck"
SLOT_NOT_INTERESTED = "notInterested"
SLOT_SUBSCRIBE = "subscribe"

SLOT_NAMES = frozenset({
    SLOT_PLAYLIST_FETCH,
    SLOT_PLAYLIST_EDIT,
    SLOT_AUTH_CHECK,
    SLOT_NOT_INTERESTED,
    SLOT_SUBSCRIBE,
})


@dataclass(frozen=True)
class Subject:
    """Instantané immuable de la vidéo ciblée par le menu.

    Les champs rechargés à distance (appartenance aux playlists) ne sont pas
    embarqués ici : ils sont fournis séparément au moment de la construction.
    """

    id: str
    title: str
    channel_id: Optional[str] = None
    is_playable: bool = True
    subscribed: bool = False
    feedback_token: Optional[str] = None


@dataclass(frozen=True)
class FeatureFlags:
    """Boutons optionnels affichés dans le menu."""

    open_channel: bool = False
    open_channel_uploads: bool = False
    not_interested: bool = False
    subscribe: bool = False
    share: bool = False

    @classmethod
    def full(cls) -> "FeatureFlags":
        return cls(
            open_channel=True,
            open_channel_uploads=True,
            not_interested=True,
            subscribe=True,
            share=True,
        )

    @classmethod
    def short(cls) -> "FeatureFlags":
        # Menu court : uniquement la liste des playlists
        return cls()


@dataclass(frozen=True)
class PlaylistMembership:
    playlist_id: str
    title: str
    is_member: bool


def always_live() -> bool:
    return True


@dataclass
class ChecklistEntry:
    """Entrée cochable ; l'état coché reflète le dernier choix de l'utilisateur.

    Sur une session fermée (`is_live` faux), `toggle` ne change rien et retourne False.
    """

    label: str
    checked: bool
    on_toggle: Callable[[bool], Awaitable[None]]
    is_live: Callable[[], bool] = always_live

    async def toggle(self, checked: bool) -> bool:
        if not self.is_live():
            return False
        self.checked = checked
        await self.on_toggle(checked)
        return True


@dataclass
class ButtonEntry:
    label: str
    on_activate: Callable[[], Awaitable[None]]
    is_live: Callable[[], bool] = always_live

    async def activate(self) -> bool:
        if not self.is_live():
            return False
        await self.on_activate()
        return True


MenuEntry = Union[ChecklistEntry, ButtonEntry]

__all__ = [
    "Subject",
    "FeatureFlags",
    "PlaylistMembership",
    "ChecklistEntry",
    "ButtonEntry",
    "always_live",
    "MenuEntry",
    "SLOT_NAMES",
    "SLOT_PLAYLIST_FETCH",
    "SLOT_PLAYLIST_EDIT",
    "SLOT_AUTH_CHECK",
    "SLOT_NOT_INTERESTED",
    "SLOT_SUBSCRIBE",
]
