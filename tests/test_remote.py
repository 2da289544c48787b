import pytest

from core.video_menu import remote
from core.video_menu.errors import FetchFailed, MutationFailed
from core.video_menu.models import PlaylistMembership, Subject


class Recorder:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.args = None

    async def __call__(self, *args):
        self.args = args
        if self.error is not None:
            raise self.error
        return self.result


@pytest.mark.asyncio
async def test_playlist_info_keeps_database_order(monkeypatch) -> None:
    rows = [
        {"id": 7, "title": "Musique", "is_member": True},
        {"id": 3, "title": "Watch Later", "is_member": False},
    ]
    fetch = Recorder(result=rows)
    monkeypatch.setattr(remote.db, "fetch_playlist_memberships", fetch)
    gateway = remote.PostgresGateway(pool=object(), user_id=42)

    info = await gateway.fetch_playlist_info("v1")

    assert info == [PlaylistMembership("7", "Musique", True), PlaylistMembership("3", "Watch Later", False)]
    assert fetch.args[1:] == (42, "v1")


@pytest.mark.asyncio
async def test_transport_errors_become_fetch_failed(monkeypatch) -> None:
    monkeypatch.setattr(remote.db, "fetch_playlist_memberships", Recorder(error=OSError("down")))
    gateway = remote.PostgresGateway(pool=object(), user_id=42)

    with pytest.raises(FetchFailed):
        await gateway.fetch_playlist_info("v1")


@pytest.mark.asyncio
async def test_mutation_errors_become_mutation_failed(monkeypatch) -> None:
    monkeypatch.setattr(remote.db, "insert_subscription", Recorder(error=OSError("down")))
    gateway = remote.PostgresGateway(pool=object(), user_id=42)

    with pytest.raises(MutationFailed):
        await gateway.subscribe("c1")


@pytest.mark.asyncio
async def test_playlist_edit_converts_identifier(monkeypatch) -> None:
    add = Recorder(result=True)
    monkeypatch.setattr(remote.db, "add_playlist_item", add)
    gateway = remote.PostgresGateway(pool=object(), user_id=42)

    await gateway.add_to_playlist("7", "v1")

    assert add.args[1:] == (42, 7, "v1")
    with pytest.raises(MutationFailed):
        await gateway.add_to_playlist("not-a-number", "v1")


@pytest.mark.asyncio
async def test_not_interested_requires_feedback_token(monkeypatch) -> None:
    insert = Recorder()
    monkeypatch.setattr(remote.db, "insert_feedback", insert)
    gateway = remote.PostgresGateway(pool=object(), user_id=42)

    with pytest.raises(MutationFailed):
        await gateway.mark_not_interested(Subject(id="v1", title="x"))
    assert insert.args is None

    await gateway.mark_not_interested(Subject(id="v1", title="x", feedback_token="t1"))
    assert insert.args[1:] == (42, "v1", "t1")


@pytest.mark.asyncio
async def test_fetch_subject_maps_record(monkeypatch) -> None:
    record = {
        "id": "v1",
        "title": "Vidéo 1",
        "channel_id": "c1",
        "feedback_token": None,
        "is_playable": True,
        "subscribed": True,
    }
    monkeypatch.setattr(remote.db, "fetch_video", Recorder(result=record))
    gateway = remote.PostgresGateway(pool=object(), user_id=42)

    subject = await gateway.fetch_subject("v1")

    assert subject == Subject(id="v1", title="Vidéo 1", channel_id="c1", subscribed=True)


@pytest.mark.asyncio
async def test_fetch_subject_unknown_video(monkeypatch) -> None:
    monkeypatch.setattr(remote.db, "fetch_video", Recorder(result=None))
    gateway = remote.PostgresGateway(pool=object(), user_id=42)

    assert await gateway.fetch_subject("nope") is None
