import asyncio
import inspect

import pytest

from conftest import settle
from core.video_menu.models import SLOT_NAMES, SLOT_PLAYLIST_EDIT, SLOT_SUBSCRIBE
from core.video_menu.slots import ActionSlotRegistry, invoke


def test_registry_knows_the_fixed_slot_names() -> None:
    assert SLOT_NAMES == {"playlistFetch", "playlistEdit", "authCheck", "notInterested", "subscribe"}


@pytest.mark.asyncio
async def test_claim_cancels_previous_occupant_and_keeps_one_live_task() -> None:
    registry = ActionSlotRegistry()
    gate = asyncio.Event()
    finished: list[str] = []

    async def operation(tag: str) -> None:
        await gate.wait()
        finished.append(tag)

    first = registry.claim(SLOT_SUBSCRIBE, operation("first"))
    await settle()
    second = registry.claim(SLOT_SUBSCRIBE, operation("second"))

    assert registry.live_slots == (SLOT_SUBSCRIBE,)
    assert len(registry) == 1

    gate.set()
    await settle()

    assert first.cancelled()
    assert second.done() and not second.cancelled()
    assert finished == ["second"]
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_back_to_back_claims_never_start_the_superseded_operation() -> None:
    registry = ActionSlotRegistry()
    started: list[int] = []

    async def operation(n: int) -> None:
        started.append(n)

    for n in range(5):
        registry.claim(SLOT_PLAYLIST_EDIT, operation(n))
        assert len(registry) <= 1

    await settle()

    assert started == [4]
    assert registry.live_slots == ()


@pytest.mark.asyncio
async def test_slots_are_independent() -> None:
    registry = ActionSlotRegistry()
    gate = asyncio.Event()

    async def operation() -> None:
        await gate.wait()

    registry.claim(SLOT_SUBSCRIBE, operation())
    registry.claim(SLOT_PLAYLIST_EDIT, operation())

    assert registry.live_slots == (SLOT_PLAYLIST_EDIT, SLOT_SUBSCRIBE)
    gate.set()
    await settle()
    assert registry.live_slots == ()


@pytest.mark.asyncio
async def test_unknown_slot_is_rejected_and_coroutine_closed() -> None:
    registry = ActionSlotRegistry()

    async def operation() -> None:
        return None

    coro = operation()
    with pytest.raises(ValueError):
        registry.claim("bogus", coro)

    assert inspect.getcoroutinestate(coro) == inspect.CORO_CLOSED
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_cancel_all_is_idempotent_and_silences_callbacks() -> None:
    registry = ActionSlotRegistry()
    gate = asyncio.Event()
    callbacks: list[str] = []

    async def operation(tag: str) -> None:
        await gate.wait()
        callbacks.append(tag)

    registry.claim(SLOT_SUBSCRIBE, operation("subscribe"))
    registry.claim(SLOT_PLAYLIST_EDIT, operation("edit"))
    await settle()

    assert registry.cancel_all() == 2
    assert registry.cancel_all() == 0
    assert len(registry) == 0

    gate.set()
    await settle()
    assert callbacks == []


@pytest.mark.asyncio
async def test_cancel_all_on_empty_registry() -> None:
    registry = ActionSlotRegistry()
    assert registry.cancel_all() == 0
    assert registry.live_slots == ()


@pytest.mark.asyncio
async def test_failing_operation_releases_its_slot() -> None:
    registry = ActionSlotRegistry()

    async def operation() -> None:
        raise RuntimeError("boom")

    task = registry.claim(SLOT_SUBSCRIBE, operation())
    await settle()

    assert task.done()
    assert isinstance(task.exception(), RuntimeError)
    assert not registry.is_live(SLOT_SUBSCRIBE)


@pytest.mark.asyncio
async def test_invoke_accepts_sync_and_async_callbacks() -> None:
    async def async_cb(value):
        return value * 2

    assert await invoke(lambda value: value + 1, 1) == 2
    assert await invoke(async_cb, 2) == 4
