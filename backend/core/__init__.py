"""Core checkers rule engine package."""

from .actions import (
    ActionResult,
    Deselected,
    ErrorKind,
    GameOver,
    Moved,
    Rejected,
    Selected,
    TurnEnded,
)
from .board import Board
from .game import Game, Phase, TurnState
from .geometry import Direction, Position
from .move import Destinations, Move
from .outcome import EndReason, Outcome
from .pieces import Color, King, Man, Piece
from .settings import GameSettings

__all__ = [
    "ActionResult",
    "Board",
    "Color",
    "Deselected",
    "Destinations",
    "Direction",
    "EndReason",
    "ErrorKind",
    "Game",
    "GameOver",
    "GameSettings",
    "King",
    "Man",
    "Move",
    "Moved",
    "Outcome",
    "Phase",
    "Piece",
    "Position",
    "Rejected",
    "Selected",
    "TurnEnded",
    "TurnState",
]
