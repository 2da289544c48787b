"""
Configuration centrale du bot Discord.

Ce module charge les variables d'environnement (.env) et prépare :
- Les intents Discord (members suffit au menu vidéo)
- Le token du bot (BOT_TOKEN, obligatoire)
- L'URL de la base de données (DATABASE_URL, optionnelle)
- Les réglages du menu vidéo (timeout, notification d'abonnement, liens)

Un warning est émis si BOT_TOKEN est absent pour détecter le problème avant le lancement du bot.
"""
from __future__ import annotations

import os
import logging
from dotenv import load_dotenv
import discord

load_dotenv()

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("%s invalide (%r), valeur par défaut %s", name, raw, default)
        return default
    return value if value > 0 else default


INTENTS = discord.Intents.default()
INTENTS.members = True

BOT_TOKEN = os.getenv("BOT_TOKEN")
DATABASE_URL = os.getenv("DATABASE_URL")

# Durée de vie du menu affiché (secondes) ; expiration = fermeture
VIDEO_MENU_TIMEOUT = env_float("VIDEO_MENU_TIMEOUT", 180.0)
# Notification d'abonnement immédiate (sans attendre la réponse du serveur)
VIDEO_MENU_OPTIMISTIC_SUBSCRIBE = env_bool("VIDEO_MENU_OPTIMISTIC_SUBSCRIBE", True)
VIDEO_SHARE_URL = os.getenv("VIDEO_SHARE_URL") or "https://www.youtube.com/watch?v={id}"
VIDEO_CHANNEL_URL = os.getenv("VIDEO_CHANNEL_URL") or "https://www.youtube.com/channel/{id}"


# Avertit si le token du bot est absent
if not BOT_TOKEN:
    logger.warning("BOT_TOKEN manquant dans l'environnement")
