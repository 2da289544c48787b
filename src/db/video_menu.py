"""
Helpers base de données pour le menu vidéo (catalogue, playlists, abonnements, avis).

Schéma :
- media_account : comptes liés (présence = utilisateur connecté)
- media_video : catalogue des vidéos (chaîne, jeton de feedback, lisibilité)
- media_playlist / media_playlist_item : playlists par utilisateur, ordre par `position`
- media_subscription : abonnements utilisateur -> chaîne
- media_feedback : vidéos marquées "pas intéressé"
"""
from __future__ import annotations

import asyncpg
from typing import Optional, Sequence

SCHEMA = """
CREATE TABLE IF NOT EXISTS media_account (
    user_id BIGINT PRIMARY KEY,
    username TEXT NOT NULL,
    linked_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS media_video (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    channel_id TEXT NULL,
    feedback_token TEXT NULL,
    is_playable BOOLEAN NOT NULL DEFAULT TRUE,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS media_playlist (
    id BIGSERIAL PRIMARY KEY,
    owner_id BIGINT NOT NULL,
    title TEXT NOT NULL,
    position INT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    UNIQUE(owner_id, title)
);

CREATE TABLE IF NOT EXISTS media_playlist_item (
    playlist_id BIGINT NOT NULL REFERENCES media_playlist(id) ON DELETE CASCADE,
    video_id TEXT NOT NULL,
    added_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    PRIMARY KEY (playlist_id, video_id)
);

CREATE TABLE IF NOT EXISTS media_subscription (
    user_id BIGINT NOT NULL,
    channel_id TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    PRIMARY KEY (user_id, channel_id)
);

CREATE TABLE IF NOT EXISTS media_feedback (
    user_id BIGINT NOT NULL,
    video_id TEXT NOT NULL,
    feedback_token TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    PRIMARY KEY (user_id, video_id)
);

CREATE INDEX IF NOT EXISTS idx_media_playlist_owner ON media_playlist(owner_id, position);
"""


async def ensure_schema(pool: asyncpg.Pool):
    async with pool.acquire() as conn:
        await conn.execute(SCHEMA)

# ---------- comptes ----------
async def link_account(pool: asyncpg.Pool, user_id: int, username: str):
    q = """
    INSERT INTO media_account(user_id, username, linked_at) VALUES($1,$2,NOW())
    ON CONFLICT (user_id) DO UPDATE SET username = EXCLUDED.username, linked_at = NOW()
    """
    async with pool.acquire() as conn:
        await conn.execute(q, user_id, username)

async def unlink_account(pool: asyncpg.Pool, user_id: int) -> bool:
    q = "DELETE FROM media_account WHERE user_id=$1 RETURNING user_id"
    async with pool.acquire() as conn:
        return await conn.fetchval(q, user_id) is not None

async def has_account(pool: asyncpg.Pool, user_id: int) -> bool:
    q = "SELECT 1 FROM media_account WHERE user_id=$1"
    async with pool.acquire() as conn:
        return await conn.fetchval(q, user_id) is not None

# ---------- catalogue ----------
async def upsert_video(pool: asyncpg.Pool, video_id: str, title: str, channel_id: Optional[str], feedback_token: Optional[str], is_playable: bool = True):
    q = """
    INSERT INTO media_video(id, title, channel_id, feedback_token, is_playable, updated_at)
    VALUES($1,$2,$3,$4,$5,NOW())
    ON CONFLICT (id) DO UPDATE SET title = EXCLUDED.title, channel_id = EXCLUDED.channel_id,
        feedback_token = EXCLUDED.feedback_token, is_playable = EXCLUDED.is_playable, updated_at = NOW()
    """
    async with pool.acquire() as conn:
        await conn.execute(q, video_id, title, channel_id, feedback_token, is_playable)

async def fetch_video(pool: asyncpg.Pool, video_id: str, user_id: int) -> Optional[asyncpg.Record]:
    # `subscribed` calculé pour l'utilisateur courant
    q = """
    SELECT v.id, v.title, v.channel_id, v.feedback_token, v.is_playable,
           EXISTS(SELECT 1 FROM media_subscription s WHERE s.user_id=$2 AND s.channel_id=v.channel_id) AS subscribed
    FROM media_video v WHERE v.id=$1
    """
    async with pool.acquire() as conn:
        return await conn.fetchrow(q, video_id, user_id)

# ---------- playlists ----------
async def create_playlist(pool: asyncpg.Pool, owner_id: int, title: str) -> Optional[asyncpg.Record]:
    q = """
    INSERT INTO media_playlist(owner_id, title, position)
    VALUES($1, $2, COALESCE((SELECT MAX(position) FROM media_playlist WHERE owner_id=$1), 0) + 1)
    ON CONFLICT (owner_id, title) DO NOTHING
    RETURNING id, title, position
    """
    async with pool.acquire() as conn:
        return await conn.fetchrow(q, owner_id, title)

async def fetch_playlist_memberships(pool: asyncpg.Pool, owner_id: int, video_id: str) -> Sequence[asyncpg.Record]:
    q = """
    SELECT p.id, p.title,
           EXISTS(SELECT 1 FROM media_playlist_item i WHERE i.playlist_id=p.id AND i.video_id=$2) AS is_member
    FROM media_playlist p WHERE p.owner_id=$1
    ORDER BY p.position, p.id
    """
    async with pool.acquire() as conn:
        return await conn.fetch(q, owner_id, video_id)

async def add_playlist_item(pool: asyncpg.Pool, owner_id: int, playlist_id: int, video_id: str) -> bool:
    # Insertion limitée aux playlists de l'utilisateur
    q = """
    INSERT INTO media_playlist_item(playlist_id, video_id)
    SELECT id, $3 FROM media_playlist WHERE id=$2 AND owner_id=$1
    ON CONFLICT DO NOTHING
    RETURNING playlist_id
    """
    async with pool.acquire() as conn:
        return await conn.fetchval(q, owner_id, playlist_id, video_id) is not None

async def remove_playlist_item(pool: asyncpg.Pool, owner_id: int, playlist_id: int, video_id: str):
    q = """
    DELETE FROM media_playlist_item i USING media_playlist p
    WHERE i.playlist_id=p.id AND p.owner_id=$1 AND i.playlist_id=$2 AND i.video_id=$3
    """
    async with pool.acquire() as conn:
        await conn.execute(q, owner_id, playlist_id, video_id)

# ---------- abonnements / avis ----------
async def insert_subscription(pool: asyncpg.Pool, user_id: int, channel_id: str):
    q = "INSERT INTO media_subscription(user_id, channel_id) VALUES($1,$2) ON CONFLICT DO NOTHING"
    async with pool.acquire() as conn:
        await conn.execute(q, user_id, channel_id)

async def delete_subscription(pool: asyncpg.Pool, user_id: int, channel_id: str):
    q = "DELETE FROM media_subscription WHERE user_id=$1 AND channel_id=$2"
    async with pool.acquire() as conn:
        await conn.execute(q, user_id, channel_id)

async def insert_feedback(pool: asyncpg.Pool, user_id: int, video_id: str, feedback_token: str):
    q = """
    INSERT INTO media_feedback(user_id, video_id, feedback_token) VALUES($1,$2,$3)
    ON CONFLICT (user_id, video_id) DO UPDATE SET feedback_token = EXCLUDED.feedback_token, created_at = NOW()
    """
    async with pool.acquire() as conn:
        await conn.execute(q, user_id, video_id, feedback_token)
