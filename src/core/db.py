"""
Accès PostgreSQL via asyncpg.

Principes :
- Un pool global unique, créé à la demande (`get_pool`), fermé par `close_pool`
- Les requêtes vivent dans le paquet `db` (fonctions atomiques, pas d'ORM)
"""
from __future__ import annotations

import asyncpg
import logging

from db import video_menu as video_menu_db

logger = logging.getLogger(__name__)

_pool = None


async def get_pool(dsn: str):
    """
    Retourne (et crée si nécessaire) le pool asyncpg.
    Args :
        dsn : URL de connexion Postgres
    """
    global _pool
    if _pool is None:
        _pool = await asyncpg.create_pool(dsn, min_size=1, max_size=5)
        logger.info("Pool asyncpg initialisé")
    return _pool


async def ensure_schema(pool: asyncpg.Pool):
    """Vérifie et crée les tables du menu vidéo si absentes."""
    await video_menu_db.ensure_schema(pool)
    logger.info("Schéma vérifié (media_*)")


async def close_pool():
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
        logger.info("Pool asyncpg fermé")
