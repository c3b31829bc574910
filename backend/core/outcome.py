from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Board
from .pieces import Color
from .rules import count_candidate_destinations


class EndReason(str, Enum):
    NO_PIECES = "no_pieces"
    NO_MOVES = "no_moves"


@dataclass(frozen=True, slots=True)
class Outcome:
    winner: Optional[Color]
    reason: EndReason

    @property
    def is_tie(self) -> bool:
        return self.winner is None

    def describe(self) -> str:
        if self.winner is None:
            return "The game is a tie."
        return f"{self.winner.value.capitalize()} wins!"


def material_outcome(board: Board) -> Optional[Color]:
    """Winner by material: more pieces, then more kings. ``None`` on a tie."""
    red, black = board.count(Color.RED), board.count(Color.BLACK)
    if red != black:
        return Color.RED if red > black else Color.BLACK
    red_kings, black_kings = board.king_count(Color.RED), board.king_count(Color.BLACK)
    if red_kings != black_kings:
        return Color.RED if red_kings > black_kings else Color.BLACK
    return None


def evaluate(board: Board, to_move: Color, *, blocked_player_loses: bool = True) -> Optional[Outcome]:
    """Decide whether the game is over with ``to_move`` about to play.

    Returns ``None`` while play continues.
    """
    for color in (to_move, to_move.opponent):
        if board.count(color) == 0:
            return Outcome(winner=color.opponent, reason=EndReason.NO_PIECES)

    if count_candidate_destinations(board, to_move) > 0:
        return None

    if blocked_player_loses:
        return Outcome(winner=to_move.opponent, reason=EndReason.NO_MOVES)
    return Outcome(winner=material_outcome(board), reason=EndReason.NO_MOVES)
