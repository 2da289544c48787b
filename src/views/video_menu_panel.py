"""
Embed, vue et renderer Discord pour le menu vidéo.

Contraintes Discord :
- Une vue accepte au plus 25 composants (5 lignes de 5)
- Le bouton "Fermer" est toujours présent ; les playlists en trop sont ignorées
  (embed et boutons partagent la même liste tronquée)
- Un champ d'embed est limité à 1024 caractères : les playlists sont réparties sur plusieurs champs
- Expiration de la vue (timeout) = fermeture du menu
- Fermeture de la session = vue arrêtée et boutons désactivés
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, List, Optional, Sequence

import discord

from core import config
from core.video_menu.models import ButtonEntry, ChecklistEntry, MenuEntry, Subject
from core.video_menu.slots import invoke
from views import video_menu as texts

logger = logging.getLogger(__name__)

PRIMARY = discord.Color.red()
MAX_COMPONENTS = 25
LINES_PER_FIELD = 10


def visible_entries(entries: Sequence[MenuEntry]) -> List[MenuEntry]:
    """Entrées affichables : toutes les actions, puis autant de playlists que la vue le permet."""
    buttons = [e for e in entries if isinstance(e, ButtonEntry)]
    checklist = [e for e in entries if isinstance(e, ChecklistEntry)]
    room = max(0, MAX_COMPONENTS - 1 - len(buttons))
    if len(checklist) > room:
        logger.warning("Menu vidéo: %s playlist(s) ignorée(s) (limite Discord)", len(checklist) - room)
        checklist = checklist[:room]
    return [*checklist, *buttons]


def build_menu_embed(title: str, entries: Sequence[MenuEntry]) -> discord.Embed:
    e = discord.Embed(title=title[:256] or "Vidéo", color=PRIMARY)
    lines = [texts.fmt_checklist_label(p.label, p.checked) for p in entries if isinstance(p, ChecklistEntry)]
    if not lines:
        e.add_field(name=texts.lbl_add_to_playlist(), value="(aucune playlist)", inline=False)
    for start in range(0, len(lines), LINES_PER_FIELD):
        name = texts.lbl_add_to_playlist() if start == 0 else "\u200b"
        e.add_field(name=name, value="\n".join(lines[start:start + LINES_PER_FIELD]), inline=False)
    return e


class VideoMenuView(discord.ui.View):
    """Vue boutons : une bascule par playlist, un bouton par action, puis "Fermer"."""

    def __init__(self, title: str, entries: Sequence[MenuEntry], on_close: Callable[[], Any], *, timeout: Optional[float] = 180.0):
        super().__init__(timeout=timeout)
        self.title = title
        self.entries = visible_entries(entries)
        self.message: Optional[discord.Message] = None
        self._on_close = on_close
        self._dismissed = False
        self._torn_down = False
        self._removed = False
        self._edit_task: Optional[asyncio.Task] = None
        self._build()

    def build_embed(self) -> discord.Embed:
        return build_menu_embed(self.title, self.entries)

    def _build(self):
        for entry in self.entries:
            if isinstance(entry, ChecklistEntry):
                self.add_item(self._checklist_button(entry))
            else:
                self.add_item(self._action_button(entry))
        close_btn = discord.ui.Button(label=texts.lbl_close(), style=discord.ButtonStyle.danger)

        async def _close_cb(interaction: discord.Interaction):  # type: ignore
            self._removed = True
            await interaction.response.edit_message(content=texts.msg_menu_closed(), embed=None, view=None)
            await self.dismiss()

        close_btn.callback = _close_cb  # type: ignore
        self.add_item(close_btn)

    def _checklist_button(self, entry: ChecklistEntry) -> discord.ui.Button:
        btn = discord.ui.Button(label=entry.label[:80], style=self._checklist_style(entry.checked))

        async def _cb(interaction: discord.Interaction):  # type: ignore
            if not await entry.toggle(not entry.checked):
                await interaction.response.send_message(texts.msg_menu_closed(), ephemeral=True)
                return
            # L'état affiché (bouton et embed) suit le dernier clic, indépendamment du réseau
            btn.style = self._checklist_style(entry.checked)
            await interaction.response.edit_message(embed=self.build_embed(), view=self)

        btn.callback = _cb  # type: ignore
        return btn

    def _action_button(self, entry: ButtonEntry) -> discord.ui.Button:
        btn = discord.ui.Button(label=entry.label[:80], style=discord.ButtonStyle.primary)

        async def _cb(interaction: discord.Interaction):  # type: ignore
            await interaction.response.defer(ephemeral=True, thinking=False)
            if not await entry.activate():
                await interaction.followup.send(texts.msg_menu_closed(), ephemeral=True)

        btn.callback = _cb  # type: ignore
        return btn

    @staticmethod
    def _checklist_style(checked: bool) -> discord.ButtonStyle:
        return discord.ButtonStyle.success if checked else discord.ButtonStyle.secondary

    async def dismiss(self):
        """Fermeture côté utilisateur (bouton "Fermer" ou timeout) : prévient la session."""
        if self._dismissed:
            return
        self._dismissed = True
        self.stop()
        await invoke(self._on_close)

    def teardown(self):
        """Fermeture côté session : désactive les boutons et arrête la vue ; idempotent."""
        if self._torn_down:
            return
        self._torn_down = True
        self._dismissed = True
        for child in self.children:
            child.disabled = True  # type: ignore[attr-defined]
        self.stop()
        if self.message is None or self._removed:
            return
        try:
            self._edit_task = asyncio.get_running_loop().create_task(self._refresh_message())
        except RuntimeError:
            logger.debug("Pas de boucle active, menu vidéo non rafraîchi")

    async def _refresh_message(self):
        try:
            await self.message.edit(view=self)  # type: ignore[union-attr]
        except discord.HTTPException:
            logger.debug("Impossible de désactiver le menu vidéo affiché", exc_info=True)

    async def on_timeout(self):
        await self.dismiss()

    async def on_error(self, interaction: discord.Interaction, error: Exception, item: discord.ui.Item):  # type: ignore[override]
        logger.exception("Erreur composant menu vidéo", exc_info=error)


class DiscordMenuRenderer:
    """Affiche le menu en réponse éphémère à l'interaction de la commande."""

    def __init__(self, interaction: discord.Interaction, *, timeout: Optional[float] = None):
        self.interaction = interaction
        self.timeout = timeout if timeout is not None else config.VIDEO_MENU_TIMEOUT
        self.view: Optional[VideoMenuView] = None

    async def render(self, title: str, entries: Sequence[MenuEntry], on_close: Callable[[], Any]) -> Callable[[], None]:
        view = VideoMenuView(title, entries, on_close, timeout=self.timeout)
        self.view = view
        try:
            view.message = await self.interaction.followup.send(embed=view.build_embed(), view=view, ephemeral=True, wait=True)
        except asyncio.CancelledError:
            # Session fermée pendant l'envoi
            view.teardown()
            raise
        return view.teardown

    async def notify(self, message: str) -> None:
        await self.interaction.followup.send(message, ephemeral=True)


class DiscordNavigator:
    def __init__(self, interaction: discord.Interaction):
        self.interaction = interaction

    async def open_channel(self, subject: Subject) -> None:
        if not subject.channel_id:
            return
        url = config.VIDEO_CHANNEL_URL.format(id=subject.channel_id)
        await self.interaction.followup.send(texts.msg_channel_link(url), ephemeral=True)

    async def share(self, subject: Subject) -> None:
        url = config.VIDEO_SHARE_URL.format(id=subject.id)
        await self.interaction.followup.send(texts.msg_share_link(url), ephemeral=True)


__all__ = ["build_menu_embed", "visible_entries", "VideoMenuView", "DiscordMenuRenderer", "DiscordNavigator"]
