"""
Classe principale du bot Discord.

Responsabilités :
- Crée le client Discord et l'arbre de commandes slash.
- Initialise la base de données (pool + schéma) si configurée.
- Porte le presenter des menus vidéo (une session ouverte par utilisateur).
- Enregistre les commandes dynamiquement.

Note : L'initialisation asynchrone est centralisée dans `setup_hook`, appelé avant `on_ready`.
"""
from __future__ import annotations

import logging
import discord
from discord import app_commands

from core import config, db
from core.video_menu.presenter import VideoMenuPresenter

logger = logging.getLogger(__name__)

class Bot(discord.Client):
    """
    Client Discord étendu, encapsulant l'état applicatif.

    Attributs principaux :
        tree : Arbre des commandes slash (CommandTree)
        db_pool : Pool asyncpg (None si aucune DB configurée)
        video_menus : Presenter des menus vidéo ouverts
    """

    def __init__(self):
        super().__init__(intents=config.INTENTS)
        self.tree = app_commands.CommandTree(self)
        self.db_pool = None  # Sera peuplé si DATABASE_URL défini
        self.video_menus = VideoMenuPresenter(optimistic_subscribe_notice=config.VIDEO_MENU_OPTIMISTIC_SUBSCRIBE)

    async def setup_hook(self):
        """
        Séquence :
        1. Connexion et schéma DB (si configurée)
        2. Enregistrement des commandes
        3. Synchronisation de l'arbre slash
        """
        try:
            if config.DATABASE_URL:
                self.db_pool = await db.get_pool(config.DATABASE_URL)
                await db.ensure_schema(self.db_pool)
                logger.info("DB prête")
            else:
                logger.warning("DATABASE_URL absent : commandes /video inactives")
        except Exception:  # noqa: BLE001
            logger.exception("Erreur init DB")
        try:
            from commands import load_all_commands  # type: ignore
            await load_all_commands(self)
        except Exception:  # noqa: BLE001
            logger.exception("Erreur chargement commandes dynamiques")
        try:
            await self.tree.sync()
            logger.info("Slash commands synchronisées")
        except Exception:  # noqa: BLE001
            logger.exception("Erreur sync slash commands")

    async def on_ready(self):
        logger.info("Connecté: %s (%s)", self.user, getattr(self.user, 'id', '?'))

    async def close(self):  # type: ignore[override]
        """
        Fermeture propre : annule les menus vidéo ouverts puis ferme le pool asyncpg.
        """
        self.video_menus.close_all()
        try:
            if self.db_pool is not None:
                await db.close_pool()
                self.db_pool = None
        except Exception:  # noqa: BLE001
            logger.exception("Erreur fermeture pool")
        await super().close()
