"""
Groupe de commandes slash `/video`.

Commandes disponibles :
- /video menu <video_id> [complet] : ouvre le menu contextuel d'une vidéo
- /video connexion : lie le compte média (condition des actions du menu)
- /video deconnexion : délie le compte média
- /video playlist <titre> : crée une playlist personnelle
- /video ajouter <video_id> <titre> [chaine] [jeton] [lisible] : enregistre une vidéo (admin)
"""
from __future__ import annotations

import logging
import discord
from discord import app_commands

from core import config
from core.permissions import require_perms, ADMINISTRATOR
from core.video_menu.errors import FetchFailed
from core.video_menu.models import FeatureFlags
from core.video_menu.presenter import VideoMenuPresenter
from core.video_menu.remote import PostgresGateway
from db import video_menu as db
from views import video_menu as texts
from views.video_menu_panel import DiscordMenuRenderer, DiscordNavigator

logger = logging.getLogger(__name__)

video = app_commands.Group(name="video", description="Menu contextuel des vidéos")


def get_presenter(interaction: discord.Interaction) -> VideoMenuPresenter:
    presenter = getattr(interaction.client, "video_menus", None)
    if presenter is None:
        raise RuntimeError("Presenter des menus vidéo non initialisé")
    return presenter  # type: ignore


@video.command(name="menu", description="Ouvrir le menu d'une vidéo")
@app_commands.describe(video_id="Identifiant de la vidéo", complet="Afficher toutes les actions (oui par défaut)")
async def menu_cmd(inter: discord.Interaction, video_id: str, complet: bool = True):
    pool = getattr(inter.client, 'db_pool', None)
    if pool is None:
        await inter.response.send_message(texts.msg_db_missing(), ephemeral=True)
        return
    presenter = get_presenter(inter)
    await inter.response.defer(ephemeral=True)
    gateway = PostgresGateway(pool, inter.user.id)
    try:
        subject = await gateway.fetch_subject(video_id.strip())
    except FetchFailed:
        logger.exception("Echec lecture catalogue pour %s", video_id)
        await inter.followup.send(texts.msg_catalogue_erreur(), ephemeral=True)
        return
    if subject is None:
        await inter.followup.send(texts.msg_video_introuvable(video_id), ephemeral=True)
        return
    renderer = DiscordMenuRenderer(inter, timeout=config.VIDEO_MENU_TIMEOUT)
    navigator = DiscordNavigator(inter)
    if complet:
        session = presenter.show_menu(inter.user.id, subject, gateway, renderer, navigator)
    else:
        session = presenter.show_short_menu(inter.user.id, subject, gateway, renderer, navigator)
    if session.is_closed:
        # Sujet non lisible : la session s'est fermée sans rien afficher
        await inter.followup.send(texts.msg_video_non_lisible(video_id), ephemeral=True)


@video.command(name="connexion", description="Lier votre compte média")
async def connexion_cmd(inter: discord.Interaction):
    pool = getattr(inter.client, 'db_pool', None)
    if pool is None:
        await inter.response.send_message(texts.msg_db_missing(), ephemeral=True)
        return
    await db.link_account(pool, inter.user.id, inter.user.name)
    logger.info("Compte média lié pour %s", inter.user.id)
    await inter.response.send_message(texts.msg_connecte(), ephemeral=True)


@video.command(name="deconnexion", description="Délier votre compte média")
async def deconnexion_cmd(inter: discord.Interaction):
    pool = getattr(inter.client, 'db_pool', None)
    if pool is None:
        await inter.response.send_message(texts.msg_db_missing(), ephemeral=True)
        return
    # Un menu ouvert n'a plus lieu d'être sans compte
    get_presenter(inter).close(inter.user.id)
    was_linked = await db.unlink_account(pool, inter.user.id)
    await inter.response.send_message(texts.msg_deconnecte(was_linked), ephemeral=True)


@video.command(name="playlist", description="Créer une playlist")
@app_commands.describe(titre="Titre de la playlist")
async def playlist_cmd(inter: discord.Interaction, titre: str):
    pool = getattr(inter.client, 'db_pool', None)
    if pool is None:
        await inter.response.send_message(texts.msg_db_missing(), ephemeral=True)
        return
    titre = (titre or '').strip()
    if not titre or len(titre) > 100:
        await inter.response.send_message(texts.msg_titre_invalide(), ephemeral=True)
        return
    rec = await db.create_playlist(pool, inter.user.id, titre)
    if not rec:
        await inter.response.send_message(texts.msg_playlist_existe(titre), ephemeral=True)
        return
    await inter.response.send_message(texts.msg_playlist_creee(titre), ephemeral=True)


@video.command(name="ajouter", description="Enregistrer une vidéo dans le catalogue")
@app_commands.describe(
    video_id="Identifiant de la vidéo",
    titre="Titre affiché",
    chaine="Identifiant de la chaîne (optionnel)",
    jeton="Jeton de feedback 'pas intéressé' (optionnel)",
    lisible="Vidéo lisible (oui par défaut)",
)
@require_perms(ADMINISTRATOR, message="Admin requis (bit 8)")
async def ajouter_cmd(inter: discord.Interaction, video_id: str, titre: str, chaine: str | None = None, jeton: str | None = None, lisible: bool = True):
    pool = getattr(inter.client, 'db_pool', None)
    if pool is None:
        await inter.response.send_message(texts.msg_db_missing(), ephemeral=True)
        return
    video_id = video_id.strip()
    await db.upsert_video(pool, video_id, titre.strip(), (chaine or '').strip() or None, (jeton or '').strip() or None, lisible)
    await inter.response.send_message(texts.msg_video_ajoutee(video_id, titre), ephemeral=True)


def register(bot: discord.Client):
    try:
        bot.tree.add_command(video)
    except Exception:
        logger.exception("Echec enregistrement commandes video")

__all__ = ["register"]
