from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

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
from .geometry import BOARD_SQUARES, Position, is_on_board
from .move import Destinations, Move
from .outcome import Outcome, evaluate
from .pieces import Color, Piece
from .rules import any_capture_available, legal_destinations, legal_moves
from .settings import GameSettings

logger = logging.getLogger(__name__)

SKIP_REQUIRED_MESSAGE = "A skip is available, you must skip."
CANNOT_MOVE_MESSAGE = "Cannot move there. Please try again."


class Phase(str, Enum):
    AWAITING_SELECTION = "awaiting_selection"
    PIECE_SELECTED = "piece_selected"
    MUST_CONTINUE_JUMP = "must_continue_jump"
    GAME_OVER = "game_over"


@dataclass(frozen=True, slots=True)
class TurnState:
    current_color: Color
    selected: Optional[Position]
    mandatory_capture_available: bool
    must_continue_jump_from: Optional[Position]
    outcome: Optional[Outcome]
    message: str = ""

    @property
    def selection_valid(self) -> bool:
        return self.selected is not None

    @property
    def game_over(self) -> bool:
        return self.outcome is not None

    @property
    def phase(self) -> Phase:
        if self.outcome is not None:
            return Phase.GAME_OVER
        if self.must_continue_jump_from is not None:
            return Phase.MUST_CONTINUE_JUMP
        if self.selected is not None:
            return Phase.PIECE_SELECTED
        return Phase.AWAITING_SELECTION


class Game:
    """Turn controller: the only writer of the board and the turn state.

    Players act by naming a square with :meth:`submit_action`. Every call is
    processed to completion and returns a tagged result; invalid actions come
    back as :class:`Rejected` and leave the board, turn, selection and jump
    pin unchanged.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        *,
        board: Optional[Board] = None,
        first_color: Optional[Color] = None,
    ) -> None:
        self.settings = settings if settings is not None else GameSettings()
        # Running tally for this session; reset() starts a new game but keeps it.
        self.wins: dict[Color, int] = {Color.BLACK: 0, Color.RED: 0}
        self.ties = 0
        self.reset(board=board, first_color=first_color)

    def reset(self, *, board: Optional[Board] = None, first_color: Optional[Color] = None) -> None:
        self.board = board.copy() if board is not None else Board.initial(self.settings.top_color)
        self.current_player = first_color if first_color is not None else self.settings.first_color
        self.selected: Optional[Position] = None
        self.must_continue_from: Optional[Position] = None
        self.outcome: Optional[Outcome] = None
        self.message = ""
        self.mandatory_capture = any_capture_available(self.board, self.current_player)
        logger.debug("New game, %s to move", self.current_player.value)

    # read-only views ----------------------------------------------------

    def current_board(self) -> Board:
        return self.board.copy()

    def current_turn_state(self) -> TurnState:
        return TurnState(
            current_color=self.current_player,
            selected=self.selected,
            mandatory_capture_available=self.mandatory_capture,
            must_continue_jump_from=self.must_continue_from,
            outcome=self.outcome,
            message=self.message,
        )

    @property
    def phase(self) -> Phase:
        return self.current_turn_state().phase

    def legal_moves(self) -> list[Move]:
        if self.outcome is not None:
            return []
        if self.must_continue_from is not None:
            origin = self.must_continue_from
            captures = legal_destinations(self.board, origin, self.current_player).captures
            return [Move(origin, landing, jumped) for landing, jumped in sorted(captures.items())]
        return legal_moves(self.board, self.current_player)

    def selected_destinations(self) -> Destinations:
        if self.selected is None or self.outcome is not None:
            return Destinations()
        return self._playable(self.selected)

    def destinations_for(self, position: Position) -> Union[Destinations, Rejected]:
        """Destinations ``submit_action`` would accept for the piece on ``position``.

        Read-only: a rejection is returned, not recorded as the status message.
        """
        problem = self._selection_problem(position)
        if problem is not None:
            return problem
        return self._playable(position)

    def _playable(self, position: Position) -> Destinations:
        destinations = legal_destinations(self.board, position, self.current_player)
        if self.mandatory_capture or self.must_continue_from is not None:
            return Destinations(captures=destinations.captures)
        return destinations

    def status_text(self) -> str:
        if self.outcome is not None:
            return f"Game over. {self.outcome.describe()}"
        color = self.current_player.value.capitalize()
        if self.must_continue_from is not None:
            return f"{color} must keep jumping with the piece on {self.must_continue_from}."
        if self.mandatory_capture:
            return f"{color} to move. {SKIP_REQUIRED_MESSAGE}"
        return f"{color} to move."

    def wins_text(self) -> str:
        text = f"Black: {self.wins[Color.BLACK]} Red: {self.wins[Color.RED]}"
        if self.ties:
            text += f" Ties: {self.ties}"
        return text

    def rules_text(self) -> list[str]:
        """Short rules summary for display, reflecting the current settings."""
        first = self.settings.first_color.value.capitalize()
        if self.settings.blocked_player_loses:
            ending = "A side with no pieces or no moves loses."
        else:
            ending = "If blocked, fewer pieces then fewer kings loses."
        return [
            f"{first} moves first. Men move forward, kings both ways.",
            f"Captures are mandatory and chain. {ending}",
        ]

    # actions ------------------------------------------------------------

    def submit_action(self, position: Position) -> ActionResult:
        if self.outcome is not None:
            return self._reject(ErrorKind.GAME_ALREADY_OVER, "The game is over. Reset to play again.")
        if not is_on_board(position):
            return self._reject(ErrorKind.OFF_BOARD, f"Position must be between 1 and {BOARD_SQUARES}.")

        if self.must_continue_from is not None:
            result = self._continue_jump(position)
        elif self.selected is None:
            result = self._select(position)
        else:
            result = self._act_on_selection(position)

        if result.accepted:
            self.message = ""
        return result

    def _selection_problem(self, position: Position) -> Optional[Rejected]:
        """Why ``position`` cannot be picked up right now, or ``None``. Never mutates."""
        if self.outcome is not None:
            return Rejected(ErrorKind.GAME_ALREADY_OVER, "The game is over. Reset to play again.")
        if not is_on_board(position):
            return Rejected(ErrorKind.OFF_BOARD, f"Position must be between 1 and {BOARD_SQUARES}.")
        if self.must_continue_from is not None and position != self.must_continue_from:
            return Rejected(
                ErrorKind.MUST_FINISH_JUMP_SEQUENCE,
                f"You must continue jumping with the piece on {self.must_continue_from}.",
            )

        piece = self.board.getPiece(position)
        if piece is None or piece.color is not self.current_player:
            return Rejected(
                ErrorKind.INVALID_PIECE_COLOR,
                f"Invalid piece. Please choose a {self.current_player.value} piece.",
            )

        destinations = legal_destinations(self.board, position, self.current_player)
        if self.mandatory_capture and not destinations.has_captures:
            return Rejected(ErrorKind.MUST_USE_CAPTURING_PIECE, SKIP_REQUIRED_MESSAGE)
        if destinations.is_empty:
            return Rejected(
                ErrorKind.NO_LEGAL_MOVES,
                "Selected piece does not have any available moves. Please select a different piece.",
            )
        return None

    def _select(self, position: Position) -> ActionResult:
        problem = self._selection_problem(position)
        if problem is not None:
            return self._reject(problem.kind, problem.message)

        self.selected = position
        logger.debug("%s selected %d", self.current_player.value, position)
        return Selected(position)

    def _act_on_selection(self, position: Position) -> ActionResult:
        origin = self.selected
        if position == origin:
            self.selected = None
            logger.debug("%s deselected %d", self.current_player.value, position)
            return Deselected(position)

        occupant = self.board.getPiece(position)
        if occupant is not None and occupant.color is self.current_player:
            return self._select(position)

        destinations = legal_destinations(self.board, origin, self.current_player)
        if position in destinations.captures:
            return self._capture(origin, position, destinations.captures[position])
        if position in destinations.simple:
            if self.mandatory_capture:
                return self._reject(ErrorKind.MUST_USE_CAPTURING_PIECE, SKIP_REQUIRED_MESSAGE)
            return self._simple_move(origin, position)
        return self._reject(ErrorKind.ILLEGAL_DESTINATION, CANNOT_MOVE_MESSAGE)

    def _continue_jump(self, position: Position) -> ActionResult:
        origin = self.must_continue_from
        captures = legal_destinations(self.board, origin, self.current_player).captures
        if position not in captures:
            return self._reject(
                ErrorKind.MUST_FINISH_JUMP_SEQUENCE,
                f"You must continue jumping with the piece on {origin}.",
            )
        return self._capture(origin, position, captures[position])

    def _simple_move(self, start: Position, end: Position) -> ActionResult:
        piece = self.board.getPiece(start)
        self.board.clear(start)
        promoted = self._land(piece, end)
        return self._end_turn(Moved(start, end, None, promoted))

    def _capture(self, start: Position, landing: Position, jumped: Position) -> ActionResult:
        piece = self.board.getPiece(start)
        self.board.clear(jumped)
        self.board.clear(start)
        promoted = self._land(piece, landing)
        moved = Moved(start, landing, jumped, promoted)
        logger.debug("%s captured on %d: %d x %d", self.current_player.value, jumped, start, landing)

        if legal_destinations(self.board, landing, self.current_player).has_captures:
            self.selected = landing
            self.must_continue_from = landing
            return moved
        return self._end_turn(moved)

    def _land(self, piece: Piece, position: Position) -> bool:
        if not piece.is_king and self.board.is_promotion_square(position, piece.color):
            self.board.setPiece(position, piece.promote())
            logger.debug("%s piece promoted on %d", piece.color.value, position)
            return True
        self.board.setPiece(position, piece)
        return False

    def _end_turn(self, moved: Moved) -> ActionResult:
        self.selected = None
        self.must_continue_from = None
        self.current_player = self.current_player.opponent

        outcome = evaluate(
            self.board,
            self.current_player,
            blocked_player_loses=self.settings.blocked_player_loses,
        )
        if outcome is not None:
            self.outcome = outcome
            self.mandatory_capture = False
            if outcome.is_tie:
                self.ties += 1
            else:
                self.wins[outcome.winner] += 1
            logger.info("Game over (%s): %s", outcome.reason.value, outcome.describe())
            return GameOver(outcome, moved)

        self.mandatory_capture = any_capture_available(self.board, self.current_player)
        logger.debug("Turn passes to %s\n%s", self.current_player.value, self.board)
        return TurnEnded(self.current_player, moved)

    def _reject(self, kind: ErrorKind, message: str) -> Rejected:
        self.message = message
        logger.debug("Rejected action (%s): %s", kind.value, message)
        return Rejected(kind, message)
