"""
Vérification des permissions Discord via bitmask.

Rappel :
- `discord.Permissions` expose un attribut `.value` (int) contenant les bits cumulés
- On teste un sous-ensemble via : (current & required) == required

Le décorateur `require_perms` protège les commandes d'administration (catalogue vidéo).
Les actions du menu vidéo, elles, passent par l'AuthGate (compte lié).
"""
from __future__ import annotations

from typing import Callable, TypeVar, Awaitable, Any
import functools
import discord

T = TypeVar("T", bound=Callable[..., Awaitable[Any]])

ADMINISTRATOR = 0x00000008


def has_perms(value: int, bits: int) -> bool:
    return (value & bits) == bits


async def _reply(interaction: discord.Interaction, text: str, ephemeral: bool):
    if interaction.response.is_done():
        await interaction.followup.send(text, ephemeral=ephemeral)
    else:
        await interaction.response.send_message(text, ephemeral=ephemeral)


def require_perms(bits: int, *, ephemeral: bool = True, message: str | None = None):
    """
    Décorateur : n'exécute la commande que si l'utilisateur possède tous les bits demandés.

    En DM (pas de guilde) l'accès est refusé.
    """
    def decorator(func: T) -> T:
        @functools.wraps(func)
        async def wrapper(interaction: discord.Interaction, *args, **kwargs):  # type: ignore[misc]
            if interaction.guild is None:
                await _reply(interaction, message or "Commande uniquement disponible dans une guilde.", ephemeral)
                return  # type: ignore[return-value]
            perms_value = interaction.user.guild_permissions.value  # type: ignore[union-attr]
            if not has_perms(perms_value, bits):
                await _reply(interaction, message or f"Permissions insuffisantes (requis bitmask: {bits}).", ephemeral)
                return  # type: ignore[return-value]
            return await func(interaction, *args, **kwargs)
        return wrapper  # type: ignore[return-value]
    return decorator

__all__ = ["require_perms", "has_perms", "ADMINISTRATOR"]
