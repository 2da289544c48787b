import dataclasses

import pytest

from conftest import FakeGateway, FakeNavigator, FakeRenderer, settle
from core.video_menu.models import FeatureFlags, Subject
from core.video_menu.presenter import VideoMenuPresenter
from core.video_menu.session import MenuState


@pytest.mark.asyncio
async def test_new_menu_closes_previous_one_for_same_user(subject, playlists) -> None:
    presenter = VideoMenuPresenter()
    gateway = FakeGateway(playlists=playlists)
    first = presenter.show_menu(1, subject, gateway, FakeRenderer(), FakeNavigator())
    await settle()

    second = presenter.show_menu(1, dataclasses.replace(subject, id="v2"), gateway, FakeRenderer(), FakeNavigator())
    await settle()

    assert first.state is MenuState.CLOSED
    assert second.state is MenuState.BUILT
    assert presenter.sessions == {1: second}


@pytest.mark.asyncio
async def test_users_have_independent_menus(subject, playlists) -> None:
    presenter = VideoMenuPresenter()
    a = presenter.show_menu(1, subject, FakeGateway(playlists=playlists), FakeRenderer(), FakeNavigator())
    b = presenter.show_menu(2, subject, FakeGateway(playlists=playlists), FakeRenderer(), FakeNavigator())
    await settle()

    assert a.state is MenuState.BUILT and b.state is MenuState.BUILT
    assert presenter.close_all() == 2
    assert a.is_closed and b.is_closed
    assert presenter.sessions == {}


@pytest.mark.asyncio
async def test_short_menu_uses_short_flags(subject, playlists) -> None:
    presenter = VideoMenuPresenter()
    renderer = FakeRenderer()
    session = presenter.show_short_menu(1, subject, FakeGateway(playlists=playlists), renderer, FakeNavigator())
    await settle()

    assert session.flags == FeatureFlags.short()
    assert [e.label for e in renderer.rendered[0][1]] == ["Watch Later"]


@pytest.mark.asyncio
async def test_unplayable_subject_is_not_tracked() -> None:
    presenter = VideoMenuPresenter()
    session = presenter.show_menu(1, Subject(id="v1", title="x", is_playable=False), FakeGateway(), FakeRenderer(), FakeNavigator())

    assert session.is_closed
    assert presenter.sessions == {}


@pytest.mark.asyncio
async def test_optimistic_setting_reaches_sessions(subject) -> None:
    presenter = VideoMenuPresenter(optimistic_subscribe_notice=False)
    gateway = FakeGateway()
    release = gateway.gate("subscribe")
    renderer = FakeRenderer()
    presenter.show_menu(1, subject, gateway, renderer, FakeNavigator(), FeatureFlags(subscribe=True))
    await settle()
    (button,) = renderer.rendered[0][1]

    await button.activate()
    await settle()
    assert renderer.notices == []

    release.set()
    await settle()
    assert len(renderer.notices) == 1
