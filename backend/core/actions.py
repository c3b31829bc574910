"""Tagged results returned by :meth:`core.game.Game.submit_action`."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .geometry import Position
from .outcome import Outcome
from .pieces import Color


class ErrorKind(str, Enum):
    INVALID_PIECE_COLOR = "invalid_piece_color"
    NO_LEGAL_MOVES = "no_legal_moves"
    MUST_USE_CAPTURING_PIECE = "must_use_capturing_piece"
    ILLEGAL_DESTINATION = "illegal_destination"
    MUST_FINISH_JUMP_SEQUENCE = "must_finish_jump_sequence"
    GAME_ALREADY_OVER = "game_already_over"
    OFF_BOARD = "off_board"


class ActionResult:
    accepted: bool = True


@dataclass(frozen=True, slots=True)
class Selected(ActionResult):
    position: Position


@dataclass(frozen=True, slots=True)
class Deselected(ActionResult):
    position: Position


@dataclass(frozen=True, slots=True)
class Moved(ActionResult):
    """One step of a turn. Returned alone while a jump chain is still pending."""

    start: Position
    end: Position
    captured: Optional[Position] = None
    promoted: bool = False

    @property
    def was_capture(self) -> bool:
        return self.captured is not None


@dataclass(frozen=True, slots=True)
class TurnEnded(ActionResult):
    next_color: Color
    move: Moved


@dataclass(frozen=True, slots=True)
class GameOver(ActionResult):
    outcome: Outcome
    move: Moved


@dataclass(frozen=True, slots=True)
class Rejected(ActionResult):
    kind: ErrorKind
    message: str

    accepted = False
