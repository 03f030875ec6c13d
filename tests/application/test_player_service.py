from __future__ import annotations

import uuid

import pytest

from chessforyou.application.errors import AlreadyExistsError, InvalidIdentifierError, NotFoundError
from chessforyou.application.player_service import CreatePlayerCmd, PlayerAppService
from chessforyou.infrastructure.repositories import InMemoryPlayerRepository


def make_service() -> PlayerAppService:
    return PlayerAppService(InMemoryPlayerRepository())


def test_create_and_find_player() -> None:
    svc = make_service()
    player = svc.create(CreatePlayerCmd(user_name="  magnus "))
    assert player.user_name == "magnus"
    assert uuid.UUID(player.id)
    assert svc.find_by_id(player.id) == player
    assert svc.find_by_user_name("magnus") == player


@pytest.mark.parametrize("name", ["", "   "])
def test_blank_user_name_rejected(name: str) -> None:
    with pytest.raises(ValueError):
        make_service().create(CreatePlayerCmd(user_name=name))


def test_find_by_malformed_id() -> None:
    with pytest.raises(InvalidIdentifierError, match="Player id is not UUID"):
        make_service().find_by_id("not-a-uuid")


def test_find_unknown_player() -> None:
    svc = make_service()
    with pytest.raises(NotFoundError):
        svc.find_by_id(str(uuid.uuid4()))
    with pytest.raises(NotFoundError):
        svc.find_by_user_name("nobody")


def test_duplicate_user_name_is_rejected() -> None:
    svc = make_service()
    first = svc.create(CreatePlayerCmd(user_name="alice"))
    with pytest.raises(AlreadyExistsError):
        svc.create(CreatePlayerCmd(user_name=" alice "))
    assert svc.find_by_user_name("alice") == first
