"""
Registre des slots d'actions annulables.

Principes :
- Un slot nommé porte zéro ou une tâche asyncio vivante
- Réclamer un slot annule (de façon synchrone) l'occupant précédent avant de lancer la nouvelle opération
- Le slot se libère tout seul quand l'opération se termine
- `cancel_all` annule tout ; idempotent, sans effet sur un registre vide

L'annulation est coopérative : un appel réseau déjà parti peut aboutir côté serveur,
seule la suite (callback de fin) est garantie de ne pas s'exécuter.
"""
from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Callable, Coroutine, Dict, Iterable, Tuple

from .models import SLOT_NAMES

logger = logging.getLogger(__name__)


async def invoke(callback: Callable[..., Any], *args: Any) -> Any:
    """Appelle un callback synchrone ou asynchrone et attend son résultat si besoin."""
    result = callback(*args)
    if hasattr(result, "__await__"):
        result = await result
    return result


class ActionSlotRegistry:
    def __init__(self, names: Iterable[str] = SLOT_NAMES):
        self._names = frozenset(names)
        self._tasks: Dict[str, asyncio.Task] = {}

    def claim(self, name: str, operation: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """
        Installe `operation` dans le slot `name` et retourne la tâche créée.

        Args :
            name : nom de slot enregistré (ValueError sinon, la coroutine est alors fermée)
            operation : coroutine à exécuter sur la boucle courante
        """
        if name not in self._names:
            operation.close()
            raise ValueError(f"Slot inconnu: {name}")
        previous = self._tasks.pop(name, None)
        if previous is not None and not previous.done():
            previous.cancel()
            logger.debug("Slot %s: opération précédente annulée", name)
        task = asyncio.get_running_loop().create_task(operation, name=f"video-menu:{name}")
        self._tasks[name] = task
        task.add_done_callback(functools.partial(self._release, name))
        return task

    def _release(self, name: str, task: asyncio.Task) -> None:
        # Ne libère que si la tâche est toujours l'occupant (pas déjà remplacée)
        if self._tasks.get(name) is task:
            del self._tasks[name]
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.debug("Slot %s: opération terminée en erreur", name, exc_info=exc)

    def cancel_all(self) -> int:
        """Annule toutes les opérations vivantes et vide le registre. Retourne le nombre annulé."""
        cancelled = 0
        for task in list(self._tasks.values()):
            if not task.done():
                task.cancel()
                cancelled += 1
        self._tasks.clear()
        if cancelled:
            logger.debug("%s opération(s) annulée(s)", cancelled)
        return cancelled

    def is_live(self, name: str) -> bool:
        task = self._tasks.get(name)
        return task is not None and not task.done()

    @property
    def live_slots(self) -> Tuple[str, ...]:
        return tuple(sorted(n for n, t in self._tasks.items() if not t.done()))

    def __len__(self) -> int:
        return len(self.live_slots)


__all__ = ["ActionSlotRegistry", "invoke"]
