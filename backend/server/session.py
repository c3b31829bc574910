from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Optional

from core.actions import Rejected
from core.game import Game
from core.pieces import Color
from core.settings import GameSettings

from .schemas import ActionRequest, ResetRequest
from .serializers import serialize_destinations, serialize_game, serialize_result

logger = logging.getLogger(__name__)


class ActionRejected(ValueError):
    def __init__(self, rejection: Rejected) -> None:
        super().__init__(rejection.message)
        self.rejection = rejection


class GameSession:
    """Thread-safe orchestrator around a single Game instance.

    Every request takes the lock, so actions reach the engine one at a time
    and each is fully applied before the next is looked at.
    """

    def __init__(self, settings: Optional[GameSettings] = None) -> None:
        self.lock = Lock()
        self.game = Game(settings)

    # public API ---------------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        with self.lock:
            return serialize_game(self.game)

    def reset(self, payload: Optional[ResetRequest] = None) -> dict[str, Any]:
        with self.lock:
            first_color = None
            if payload and payload.firstColor:
                first_color = Color(payload.firstColor)
            self.game.reset(first_color=first_color)
            logger.info("Game reset, %s to move", self.game.current_player.value)
            return serialize_game(self.game)

    def submit(self, payload: ActionRequest) -> dict[str, Any]:
        with self.lock:
            result = self.game.submit_action(payload.position)
            if isinstance(result, Rejected):
                raise ActionRejected(result)
            return {"result": serialize_result(result), **serialize_game(self.game)}

    def get_legal_destinations(self, position: int) -> dict[str, Any]:
        with self.lock:
            destinations = self.game.destinations_for(position)
            if isinstance(destinations, Rejected):
                raise ValueError(destinations.message)
            return serialize_destinations(position, destinations)
