from __future__ import annotations

from typing import Any, Optional

from core.actions import ActionResult, Deselected, GameOver, Moved, Rejected, Selected, TurnEnded
from core.board import Board
from core.game import Game, TurnState
from core.move import Destinations, Move
from core.outcome import Outcome
from core.pieces import Color, Piece


def serialize_piece(piece: Optional[Piece]) -> Optional[dict[str, Any]]:
    if piece is None:
        return None
    return {"color": piece.color.value, "isKing": piece.is_king}


def serialize_board(board: Board) -> dict[str, Any]:
    return {
        "topColor": board.top_color.value,
        "squares": {str(pos): serialize_piece(piece) for pos, piece in board},
        "pieceCounts": {
            color.value: {"total": board.count(color), "kings": board.king_count(color)}
            for color in (Color.RED, Color.BLACK)
        },
    }


def serialize_outcome(outcome: Optional[Outcome]) -> Optional[dict[str, Any]]:
    if outcome is None:
        return None
    return {
        "winner": outcome.winner.value if outcome.winner else None,
        "tie": outcome.is_tie,
        "reason": outcome.reason.value,
    }


def serialize_turn_state(state: TurnState) -> dict[str, Any]:
    return {
        "phase": state.phase.value,
        "turn": state.current_color.value,
        "selected": state.selected,
        "selectionValid": state.selection_valid,
        "mandatoryCapture": state.mandatory_capture_available,
        "mustContinueJumpFrom": state.must_continue_jump_from,
        "gameOver": state.game_over,
        "outcome": serialize_outcome(state.outcome),
        "message": state.message,
    }


def serialize_move(move: Move) -> dict[str, Any]:
    return {
        "start": move.start,
        "end": move.end,
        "captured": move.captured,
        "isCapture": move.is_capture,
        "notation": str(move),
    }


def serialize_destinations(position: int, destinations: Destinations) -> dict[str, Any]:
    return {
        "position": position,
        "simple": sorted(destinations.simple),
        "captures": [
            {"landing": landing, "captured": captured}
            for landing, captured in sorted(destinations.captures.items())
        ],
    }


def _serialize_moved(moved: Moved) -> dict[str, Any]:
    return {
        "from": moved.start,
        "to": moved.end,
        "wasCapture": moved.was_capture,
        "captured": moved.captured,
        "promoted": moved.promoted,
    }


def serialize_result(result: ActionResult) -> dict[str, Any]:
    if isinstance(result, Selected):
        return {"type": "selected", "position": result.position}
    if isinstance(result, Deselected):
        return {"type": "deselected", "position": result.position}
    if isinstance(result, Moved):
        return {"type": "moved", **_serialize_moved(result)}
    if isinstance(result, TurnEnded):
        return {"type": "turn_ended", "nextColor": result.next_color.value, "move": _serialize_moved(result.move)}
    if isinstance(result, GameOver):
        return {
            "type": "game_over",
            "outcome": serialize_outcome(result.outcome),
            "move": _serialize_moved(result.move),
        }
    if isinstance(result, Rejected):
        return {"type": "rejected", "kind": result.kind.value, "message": result.message}
    raise TypeError(f"Unsupported action result {result!r}.")


def serialize_game(game: Game) -> dict[str, Any]:
    return {
        "board": serialize_board(game.current_board()),
        "state": serialize_turn_state(game.current_turn_state()),
        "status": game.status_text(),
        "legalMoves": [serialize_move(move) for move in game.legal_moves()],
        "wins": {"black": game.wins[Color.BLACK], "red": game.wins[Color.RED], "ties": game.ties},
    }
