import asyncio

import pytest

from conftest import FakeGateway, settle
from core.video_menu.auth import AuthGate
from core.video_menu.errors import AuthorizationDenied
from core.video_menu.slots import ActionSlotRegistry


def _recorder():
    calls: list[str] = []
    return calls, (lambda: calls.append("ok")), (lambda: calls.append("denied"))


@pytest.mark.asyncio
async def test_signed_in_user_reaches_authorized_continuation_once() -> None:
    gate = AuthGate(FakeGateway(signed_in=True), ActionSlotRegistry())
    calls, ok, denied = _recorder()

    gate.check(ok, denied)
    await settle()

    assert calls == ["ok"]


@pytest.mark.asyncio
async def test_signed_out_user_is_denied() -> None:
    gate = AuthGate(FakeGateway(signed_in=False), ActionSlotRegistry())
    calls, ok, denied = _recorder()

    gate.check(ok, denied)
    await settle()

    assert calls == ["denied"]


@pytest.mark.asyncio
async def test_failed_check_fails_closed() -> None:
    gateway = FakeGateway(signed_in=True, auth_error=ConnectionError("down"))
    gate = AuthGate(gateway, ActionSlotRegistry())
    calls, ok, denied = _recorder()

    gate.check(ok, denied)
    await settle()

    assert calls == ["denied"]


@pytest.mark.asyncio
async def test_continuations_run_asynchronously() -> None:
    gate = AuthGate(FakeGateway(signed_in=True), ActionSlotRegistry())
    calls, ok, denied = _recorder()

    gate.check(ok, denied)

    assert calls == []
    await settle()
    assert calls == ["ok"]


@pytest.mark.asyncio
async def test_superseded_check_never_fires_its_continuations() -> None:
    gateway = FakeGateway(signed_in=True)
    release = gateway.gate("is_signed_in")
    gate = AuthGate(gateway, ActionSlotRegistry())
    calls: list[str] = []

    gate.check(lambda: calls.append("first-ok"), lambda: calls.append("first-denied"))
    await settle()
    gate.check(lambda: calls.append("second-ok"), lambda: calls.append("second-denied"))
    release.set()
    await settle()

    assert calls == ["second-ok"]


@pytest.mark.asyncio
async def test_async_continuations_are_awaited() -> None:
    gate = AuthGate(FakeGateway(signed_in=False), ActionSlotRegistry())
    calls: list[str] = []

    async def denied() -> None:
        await asyncio.sleep(0)
        calls.append("denied")

    gate.check(lambda: calls.append("ok"), denied)
    await settle()

    assert calls == ["denied"]

@pytest.mark.asyncio
async def test_verify_raises_authorization_denied_for_signed_out_user() -> None:
    gate = AuthGate(FakeGateway(signed_in=False), ActionSlotRegistry())

    with pytest.raises(AuthorizationDenied):
        await gate.verify()


@pytest.mark.asyncio
async def test_verify_chains_the_failed_check() -> None:
    error = ConnectionError("down")
    gate = AuthGate(FakeGateway(auth_error=error), ActionSlotRegistry())

    with pytest.raises(AuthorizationDenied) as excinfo:
        await gate.verify()

    assert excinfo.value.__cause__ is error
