"""
Contrats des collaborateurs externes du menu vidéo.

- RemoteStateGateway : état distant (connexion, playlists, abonnements, avis)
- Renderer : affichage du menu et notifications courtes
- Navigator : ouverture de la chaîne et partage
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Sequence

from .models import MenuEntry, PlaylistMembership, Subject


class RemoteStateGateway(Protocol):
    async def is_signed_in(self) -> bool: ...

    async def fetch_playlist_info(self, subject_id: str) -> Sequence[PlaylistMembership]: ...

    async def add_to_playlist(self, playlist_id: str, subject_id: str) -> None: ...

    async def remove_from_playlist(self, playlist_id: str, subject_id: str) -> None: ...

    async def subscribe(self, channel_id: str) -> None: ...

    async def unsubscribe(self, channel_id: str) -> None: ...

    async def mark_not_interested(self, subject: Subject) -> None: ...


class Renderer(Protocol):
    async def render(self, title: str, entries: Sequence[MenuEntry], on_close: Callable[[], Any]) -> Optional[Callable[[], Any]]:
        """Affiche le menu ; retourne éventuellement une fonction de retrait appelée à la fermeture."""

    async def notify(self, message: str) -> None: ...


class Navigator(Protocol):
    async def open_channel(self, subject: Subject) -> None: ...

    async def share(self, subject: Subject) -> None: ...


__all__ = ["RemoteStateGateway", "Renderer", "Navigator"]
