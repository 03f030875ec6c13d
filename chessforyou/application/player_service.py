from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import parse_uuid

if TYPE_CHECKING:  # pragma: no cover
    from ..infrastructure.repositories import InMemoryPlayerRepository


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Player:
    user_name: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True)
class CreatePlayerCmd:
    user_name: str


class PlayerAppService:
    """Create and look up players."""

    def __init__(self, player_repository: "InMemoryPlayerRepository") -> None:
        self.player_repository = player_repository

    def create(self, cmd: CreatePlayerCmd) -> Player:
        """Register a player under a unique, stripped user name.

        Raises:
            ValueError: If the name is blank.
            AlreadyExistsError: If the name is taken.
        """
        if not cmd.user_name or not cmd.user_name.strip():
            raise ValueError("user name must be a non-empty string")
        player = self.player_repository.add(Player(user_name=cmd.user_name.strip()))
        logger.info("player created", extra={"player_id": player.id})
        return player

    def find_by_id(self, player_id: str) -> Player:
        return self.player_repository.get_by_id(parse_uuid(player_id, "Player"))

    def find_by_user_name(self, user_name: str) -> Player:
        return self.player_repository.get_by_user_name(user_name)
