from __future__ import annotations

import pytest

from guildtrack.domain.errors import (
    GuildNotFoundError,
    MissingCollaboratorError,
    NotFoundError,
    UserNotFoundError,
)
from guildtrack.domain.resolution import UserService
from guildtrack.domain.tracking import UserTracker
from tests.helpers.guild_users import (
    FakeDirectoryClient,
    FakeGuildUserStore,
    FakeRequestContext,
    TickingClock,
    make_remote_user,
)


def _service(
    directory: FakeDirectoryClient,
    *,
    current_guild_id: int | None = None,
    store: FakeGuildUserStore | None = None,
) -> tuple[UserService, FakeGuildUserStore]:
    effective_store = store or FakeGuildUserStore()
    tracker = UserTracker(effective_store, clock=TickingClock())
    context = FakeRequestContext(current_guild_id=current_guild_id)
    return UserService(directory, context, tracker), effective_store


@pytest.mark.asyncio
async def test_get_user_without_context_guild_uses_global_lookup() -> None:
    global_user = make_remote_user(guild_id=None)
    directory = FakeDirectoryClient(users={42: global_user})
    directory.add_member(make_remote_user(guild_id=1))
    service, store = _service(directory)

    user = await service.get_user(42)

    assert user is global_user
    assert directory.calls == [("get_user", 42)]
    assert store.transactions == 0


@pytest.mark.asyncio
async def test_get_user_with_context_guild_resolves_through_guild() -> None:
    member = make_remote_user(guild_id=7)
    directory = FakeDirectoryClient(users={42: make_remote_user(guild_id=None)})
    directory.add_member(member)
    service, store = _service(directory, current_guild_id=7)

    user = await service.get_user(42)

    assert user is member
    assert directory.calls == [("get_guild", 7)]
    assert directory.guilds[7].lookups == [42]
    assert store.get(42, 7) is not None


@pytest.mark.asyncio
async def test_get_user_with_context_guild_does_not_fall_back_to_global() -> None:
    directory = FakeDirectoryClient(users={42: make_remote_user(guild_id=None)})
    directory.add_member(make_remote_user(user_id=99, guild_id=7))
    service, store = _service(directory, current_guild_id=7)

    with pytest.raises(UserNotFoundError) as excinfo:
        await service.get_user(42)

    assert excinfo.value.guild_id == 7
    assert ("get_user", 42) not in directory.calls
    assert store.transactions == 0


@pytest.mark.asyncio
async def test_get_user_with_unknown_context_guild_raises() -> None:
    service, store = _service(FakeDirectoryClient(), current_guild_id=3)

    with pytest.raises(GuildNotFoundError):
        await service.get_user(42)

    assert store.transactions == 0


@pytest.mark.asyncio
async def test_get_user_unknown_globally_raises_not_found() -> None:
    service, _ = _service(FakeDirectoryClient())

    with pytest.raises(NotFoundError, match="Discord user 42 does not exist"):
        await service.get_user(42)


@pytest.mark.asyncio
async def test_get_user_tracks_guild_member_returned_by_global_lookup() -> None:
    scoped = make_remote_user(guild_id=5)
    service, store = _service(FakeDirectoryClient(users={42: scoped}))

    await service.get_user(42)

    assert store.get(42, 5) is not None


@pytest.mark.asyncio
async def test_get_user_can_skip_tracking() -> None:
    directory = FakeDirectoryClient()
    directory.add_member(make_remote_user(guild_id=7))
    service, store = _service(directory, current_guild_id=7)

    await service.get_user(42, track=False)

    assert store.transactions == 0


@pytest.mark.asyncio
async def test_resolve_user_takes_explicit_guild_over_context() -> None:
    directory = FakeDirectoryClient()
    directory.add_member(make_remote_user(guild_id=7))
    directory.add_member(make_remote_user(guild_id=8, nickname="Eight"))
    service, store = _service(directory, current_guild_id=7)

    user = await service.resolve_user(42, guild_id=8)

    assert user.nickname == "Eight"
    assert store.get(42, 8) is not None
    assert store.get(42, 7) is None


@pytest.mark.asyncio
async def test_get_guild_user_tracks_member() -> None:
    directory = FakeDirectoryClient()
    member = directory.add_member(make_remote_user(guild_id=7, username="bob"))
    service, store = _service(directory)

    user = await service.get_guild_user(7, 42)

    assert user is member
    record = store.get(42, 7)
    assert record is not None
    assert record.username == "bob"


@pytest.mark.asyncio
async def test_get_guild_user_unknown_guild_raises_without_mutation() -> None:
    service, store = _service(FakeDirectoryClient())

    with pytest.raises(GuildNotFoundError) as excinfo:
        await service.get_guild_user(7, 42)

    assert excinfo.value.guild_id == 7
    assert store.transactions == 0
    assert store.records == {}


@pytest.mark.asyncio
async def test_get_guild_user_unknown_member_raises_without_mutation() -> None:
    directory = FakeDirectoryClient()
    directory.add_member(make_remote_user(user_id=1, guild_id=7))
    service, store = _service(directory)

    with pytest.raises(UserNotFoundError) as excinfo:
        await service.get_guild_user(7, 42)

    assert excinfo.value.user_id == 42
    assert store.transactions == 0


@pytest.mark.asyncio
async def test_get_guild_user_can_skip_tracking() -> None:
    directory = FakeDirectoryClient()
    directory.add_member(make_remote_user(guild_id=7))
    service, store = _service(directory)

    await service.get_guild_user(7, 42, track=False)

    assert store.records == {}


@pytest.mark.asyncio
async def test_track_user_delegates_to_tracker() -> None:
    service, store = _service(FakeDirectoryClient())

    await service.track_user(make_remote_user(guild_id=3))

    assert store.get(42, 3) is not None


@pytest.mark.parametrize("missing", ["directory", "context", "tracker"])
def test_service_requires_every_collaborator(missing: str) -> None:
    collaborators: dict[str, object] = {
        "directory": FakeDirectoryClient(),
        "context": FakeRequestContext(),
        "tracker": UserTracker(FakeGuildUserStore()),
    }
    collaborators[missing] = None

    with pytest.raises(MissingCollaboratorError, match=missing):
        UserService(**collaborators)  # type: ignore[arg-type]
