"""Move generation for simple moves and single-jump captures."""

from __future__ import annotations

from .board import Board
from .geometry import (
    Position,
    corner_direction,
    feasible_directions,
    immediate_neighbors,
    is_on_board,
    jump_landing,
)
from .move import Destinations, Move
from .pieces import Color


def legal_destinations(board: Board, pos: Position, color: Color) -> Destinations:
    piece = board.getPiece(pos)
    if piece is None or piece.color is not color:
        return Destinations()

    neighbors = immediate_neighbors(pos)
    empty_neighbors: set[Position] = set()
    opponent_neighbors: list[Position] = []
    for neighbor in neighbors:
        occupant = board.getPiece(neighbor)
        if occupant is None:
            empty_neighbors.add(neighbor)
        elif occupant.color is not color:
            opponent_neighbors.append(neighbor)

    captures: dict[Position, Position] = {}
    feasible = feasible_directions(pos)
    for jumped in opponent_neighbors:
        direction = corner_direction(pos, jumped)
        if direction not in feasible:
            continue
        landing = jump_landing(pos, direction)
        if is_on_board(landing) and board.is_empty(landing):
            captures[landing] = jumped

    if not piece.is_king:
        sign = board.forward_sign(color)
        empty_neighbors = {n for n in empty_neighbors if (n - pos) * sign > 0}
        captures = {landing: jumped for landing, jumped in captures.items() if (landing - pos) * sign > 0}

    return Destinations(simple=frozenset(empty_neighbors), captures=captures)


def capturing_positions(board: Board, color: Color) -> list[Position]:
    return [pos for pos, _ in board.pieces(color) if legal_destinations(board, pos, color).has_captures]


def any_capture_available(board: Board, color: Color) -> bool:
    return any(legal_destinations(board, pos, color).has_captures for pos, _ in board.pieces(color))


def legal_moves(board: Board, color: Color) -> list[Move]:
    """Every move ``color`` may make, honouring mandatory capture."""
    capture_moves: list[Move] = []
    quiet_moves: list[Move] = []
    for pos, _ in board.pieces(color):
        for move in legal_destinations(board, pos, color).moves_from(pos):
            (capture_moves if move.is_capture else quiet_moves).append(move)
    return capture_moves if capture_moves else quiet_moves


def count_candidate_destinations(board: Board, color: Color) -> int:
    """Total simple plus capture destinations over all of ``color``'s pieces."""
    return sum(len(legal_destinations(board, pos, color)) for pos, _ in board.pieces(color))
