"""
Configuration centralisée du logging pour le bot Discord.

Objectifs :
- Un seul setup idempotent (évite la duplication des handlers)
- Déduplication des messages identiques (boutons cliqués en rafale, timeouts de vues)
- Format uniforme configurable via variables d'environnement
- Niveau séparé pour la hiérarchie `discord` (très bavarde en DEBUG)
"""
from __future__ import annotations

import logging
import threading
import os

_INITIALIZED = False

DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DISCORD_LEVEL = os.getenv("DISCORD_LOG_LEVEL", "WARNING").upper()
DEFAULT_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'
MAX_SEEN = 5000


class _DeduplicateFilter(logging.Filter):
    """Ignore un enregistrement déjà vu (même logger, niveau, message rendu)."""

    def __init__(self, max_seen: int = MAX_SEEN):
        super().__init__()
        self._lock = threading.Lock()
        self._seen: set = set()
        self._max_seen = max_seen

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        try:
            rendered = record.getMessage()
        except Exception:  # noqa: BLE001
            rendered = str(record.msg)
        # Les traces d'exception ne sont jamais dédupliquées
        if record.exc_info:
            return True
        key = (record.name, record.levelno, rendered)
        with self._lock:
            if key in self._seen:
                return False
            if len(self._seen) >= self._max_seen:
                self._seen.clear()
            self._seen.add(key)
        return True


def _level(name: str, fallback: int) -> int:
    return getattr(logging, name, fallback)


def setup_logging(force: bool = False) -> None:
    global _INITIALIZED
    if _INITIALIZED and not force:
        return

    root = logging.getLogger()
    if force:
        for h in list(root.handlers):
            root.removeHandler(h)
    if not root.handlers:
        root.addHandler(logging.StreamHandler())
    formatter = logging.Formatter(DEFAULT_FORMAT)
    for h in root.handlers:
        if not any(isinstance(f, _DeduplicateFilter) for f in h.filters):
            h.addFilter(_DeduplicateFilter())
        h.setFormatter(formatter)
    root.setLevel(_level(DEFAULT_LEVEL, logging.INFO))
    logging.getLogger("discord").setLevel(_level(DISCORD_LEVEL, logging.WARNING))
    _INITIALIZED = True


__all__ = ["setup_logging"]
