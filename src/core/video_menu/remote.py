"""
Passerelle d'état distant adossée à PostgreSQL (asyncpg).

Chaque instance est liée à un utilisateur Discord. Les erreurs de transport
sont converties en `FetchFailed` / `MutationFailed` ; la vérification de
connexion laisse remonter l'erreur brute (l'AuthGate la traite comme un refus).
"""
from __future__ import annotations

import logging
from typing import List, Optional

import asyncpg

from db import video_menu as db

from .errors import FetchFailed, MutationFailed
from .models import PlaylistMembership, Subject

logger = logging.getLogger(__name__)

_TRANSPORT_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


def subject_from_record(rec) -> Subject:
    return Subject(
        id=str(rec["id"]),
        title=str(rec["title"]),
        channel_id=rec["channel_id"],
        is_playable=bool(rec["is_playable"]),
        subscribed=bool(rec["subscribed"]),
        feedback_token=rec["feedback_token"],
    )


def _playlist_key(playlist_id: str) -> int:
    try:
        return int(playlist_id)
    except (TypeError, ValueError) as exc:
        raise MutationFailed(f"Playlist invalide: {playlist_id!r}") from exc


class PostgresGateway:
    def __init__(self, pool: asyncpg.Pool, user_id: int):
        self.pool = pool
        self.user_id = user_id

    async def is_signed_in(self) -> bool:
        return await db.has_account(self.pool, self.user_id)

    async def fetch_subject(self, video_id: str) -> Optional[Subject]:
        try:
            rec = await db.fetch_video(self.pool, video_id, self.user_id)
        except _TRANSPORT_ERRORS as exc:
            raise FetchFailed(f"Lecture vidéo {video_id} impossible") from exc
        return subject_from_record(rec) if rec else None

    async def fetch_playlist_info(self, subject_id: str) -> List[PlaylistMembership]:
        try:
            rows = await db.fetch_playlist_memberships(self.pool, self.user_id, subject_id)
        except _TRANSPORT_ERRORS as exc:
            raise FetchFailed(f"Lecture playlists impossible pour {subject_id}") from exc
        return [PlaylistMembership(str(r["id"]), str(r["title"]), bool(r["is_member"])) for r in rows]

    async def add_to_playlist(self, playlist_id: str, subject_id: str) -> None:
        try:
            added = await db.add_playlist_item(self.pool, self.user_id, _playlist_key(playlist_id), subject_id)
        except _TRANSPORT_ERRORS as exc:
            raise MutationFailed(f"Ajout à la playlist {playlist_id} impossible") from exc
        if not added:
            logger.debug("Vidéo %s déjà présente (ou playlist %s étrangère)", subject_id, playlist_id)

    async def remove_from_playlist(self, playlist_id: str, subject_id: str) -> None:
        try:
            await db.remove_playlist_item(self.pool, self.user_id, _playlist_key(playlist_id), subject_id)
        except _TRANSPORT_ERRORS as exc:
            raise MutationFailed(f"Retrait de la playlist {playlist_id} impossible") from exc

    async def subscribe(self, channel_id: str) -> None:
        try:
            await db.insert_subscription(self.pool, self.user_id, channel_id)
        except _TRANSPORT_ERRORS as exc:
            raise MutationFailed(f"Abonnement à {channel_id} impossible") from exc

    async def unsubscribe(self, channel_id: str) -> None:
        try:
            await db.delete_subscription(self.pool, self.user_id, channel_id)
        except _TRANSPORT_ERRORS as exc:
            raise MutationFailed(f"Désabonnement de {channel_id} impossible") from exc

    async def mark_not_interested(self, subject: Subject) -> None:
        if not subject.feedback_token:
            raise MutationFailed(f"Aucun jeton de feedback pour {subject.id}")
        try:
            await db.insert_feedback(self.pool, self.user_id, subject.id, subject.feedback_token)
        except _TRANSPORT_ERRORS as exc:
            raise MutationFailed(f"Avis 'pas intéressé' impossible pour {subject.id}") from exc


__all__ = ["PostgresGateway", "subject_from_record"]
