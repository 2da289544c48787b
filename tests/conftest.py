import asyncio
from typing import Optional

import pytest

from core.video_menu.errors import FetchFailed, MutationFailed
from core.video_menu.models import PlaylistMembership, Subject


class FakeGateway:
    """Passerelle en mémoire ; `gates[nom]` bloque l'appel jusqu'à `set()`."""

    def __init__(self, *, signed_in=True, playlists=(), auth_error: Optional[Exception] = None,
                 fetch_error: Optional[Exception] = None, mutation_error: Optional[Exception] = None):
        self.signed_in = signed_in
        self.playlists = list(playlists)
        self.auth_error = auth_error
        self.fetch_error = fetch_error
        self.mutation_error = mutation_error
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple] = []
        self.completed: list[tuple] = []

    def gate(self, name: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[name] = event
        return event

    async def _step(self, name, *args, error=None):
        self.calls.append((name, *args))
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        if error is not None:
            raise error
        self.completed.append((name, *args))

    async def is_signed_in(self):
        await self._step("is_signed_in", error=self.auth_error)
        return self.signed_in

    async def fetch_playlist_info(self, subject_id):
        await self._step("fetch_playlist_info", subject_id, error=self.fetch_error)
        return list(self.playlists)

    async def add_to_playlist(self, playlist_id, subject_id):
        await self._step("add_to_playlist", playlist_id, subject_id, error=self.mutation_error)

    async def remove_from_playlist(self, playlist_id, subject_id):
        await self._step("remove_from_playlist", playlist_id, subject_id, error=self.mutation_error)

    async def subscribe(self, channel_id):
        await self._step("subscribe", channel_id, error=self.mutation_error)

    async def unsubscribe(self, channel_id):
        await self._step("unsubscribe", channel_id, error=self.mutation_error)

    async def mark_not_interested(self, subject):
        await self._step("mark_not_interested", subject.id, error=self.mutation_error)


class FakeRenderer:
    def __init__(self):
        self.rendered: list[tuple] = []
        self.notices: list[str] = []
        self.on_close = None
        self.torn_down: list[str] = []

    async def render(self, title, entries, on_close):
        self.rendered.append((title, list(entries)))
        self.on_close = on_close
        return lambda: self.torn_down.append(title)

    async def notify(self, message):
        self.notices.append(message)


class FakeNavigator:
    def __init__(self):
        self.opened: list[str] = []
        self.shared: list[str] = []

    async def open_channel(self, subject):
        self.opened.append(subject.channel_id)

    async def share(self, subject):
        self.shared.append(subject.id)


async def settle(rounds: int = 10):
    """Laisse tourner la boucle le temps que les tâches en attente progressent."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def subject():
    return Subject(id="v1", title="Vidéo 1", channel_id="c1", subscribed=False, feedback_token="t1")


@pytest.fixture
def playlists():
    return [PlaylistMembership("p1", "Watch Later", False)]


@pytest.fixture
def gateway(playlists):
    return FakeGateway(playlists=playlists)


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def navigator():
    return FakeNavigator()


__all__ = ["FakeGateway", "FakeRenderer", "FakeNavigator", "settle", "FetchFailed", "MutationFailed"]
