"""Menu contextuel vidéo (orchestration asynchrone des actions).

Les imports sont effectués de manière lazy, comme pour les autres sous-paquets
de `core`, afin de ne pas charger discord.py tant que le menu n'est pas utilisé.
"""
from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # aide mypy/IDE sans exécuter les imports au runtime initial
	from .auth import AuthGate  # noqa: F401
	from .builder import MenuOptionBuilder  # noqa: F401
	from .models import ButtonEntry, ChecklistEntry, FeatureFlags, PlaylistMembership, Subject  # noqa: F401
	from .presenter import VideoMenuPresenter  # noqa: F401
	from .session import MenuSession, MenuState  # noqa: F401
	from .slots import ActionSlotRegistry  # noqa: F401

_LAZY = {
	"ActionSlotRegistry": "slots",
	"AuthGate": "auth",
	"MenuOptionBuilder": "builder",
	"MenuSession": "session",
	"MenuState": "session",
	"VideoMenuPresenter": "presenter",
	"Subject": "models",
	"FeatureFlags": "models",
	"PlaylistMembership": "models",
	"ChecklistEntry": "models",
	"ButtonEntry": "models",
}

__all__ = sorted(_LAZY)


def __getattr__(name: str):  # lazy resolution
	module = _LAZY.get(name)
	if module is None:
		raise AttributeError(name)
	mod = import_module(f"core.video_menu.{module}")
	return getattr(mod, name)
