"""Board geometry for the 32-square checkers numbering.

Squares are numbered 1..32, four per row across eight rows. Odd rows are
shifted one column to the right of even rows, so the arithmetic offsets to
the diagonal neighbours depend on the parity of the row:

    row 1:    1   2   3   4
    row 2:  5   6   7   8
    row 3:    9  10  11  12
    ...
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

Position = int
Cell = tuple[int, int]

BOARD_SQUARES = 32
SQUARES_PER_ROW = 4
TOP_ROW = 1
BOTTOM_ROW = 8


class Direction(Enum):
    UP_LEFT = "up_left"
    UP_RIGHT = "up_right"
    DOWN_LEFT = "down_left"
    DOWN_RIGHT = "down_right"

    @property
    def is_up(self) -> bool:
        return self in (Direction.UP_LEFT, Direction.UP_RIGHT)

    @property
    def is_left(self) -> bool:
        return self in (Direction.UP_LEFT, Direction.DOWN_LEFT)


# Single-step offsets, keyed by row parity (True for odd rows).
_STEP_OFFSETS: dict[bool, dict[Direction, int]] = {
    True: {
        Direction.UP_LEFT: -4,
        Direction.UP_RIGHT: -3,
        Direction.DOWN_LEFT: 4,
        Direction.DOWN_RIGHT: 5,
    },
    False: {
        Direction.UP_LEFT: -5,
        Direction.UP_RIGHT: -4,
        Direction.DOWN_LEFT: 3,
        Direction.DOWN_RIGHT: 4,
    },
}

# A jump always lands two rows away, so the offset is parity independent.
_JUMP_OFFSETS: dict[Direction, int] = {
    Direction.UP_LEFT: -9,
    Direction.UP_RIGHT: -7,
    Direction.DOWN_LEFT: 7,
    Direction.DOWN_RIGHT: 9,
}


def is_on_board(pos: int) -> bool:
    return isinstance(pos, int) and not isinstance(pos, bool) and 1 <= pos <= BOARD_SQUARES


def _require_position(pos: int) -> None:
    if not is_on_board(pos):
        raise ValueError(f"Position {pos!r} is outside 1..{BOARD_SQUARES}.")


def row_of(pos: Position) -> int:
    _require_position(pos)
    return (pos - 1) // SQUARES_PER_ROW + 1


def column_of(pos: Position) -> int:
    """Zero-based column of ``pos`` on the full 8x8 grid."""
    index = (pos - 1) % SQUARES_PER_ROW
    return 2 * index + 1 if row_of(pos) % 2 == 1 else 2 * index


def cell_of(pos: Position) -> Cell:
    """Zero-based (row, col) grid cell holding ``pos``."""
    return (row_of(pos) - 1, column_of(pos))


def position_at(row: int, col: int) -> Optional[Position]:
    """Inverse of :func:`cell_of`; ``None`` for light squares and off-grid cells."""
    if not (0 <= row < BOTTOM_ROW and 0 <= col < BOTTOM_ROW):
        return None
    if (row + col) % 2 == 0:
        return None
    return row * SQUARES_PER_ROW + col // 2 + 1


def _is_left_edge(pos: Position) -> bool:
    return pos % SQUARES_PER_ROW == 1


def _is_right_edge(pos: Position) -> bool:
    return pos % SQUARES_PER_ROW == 0


def _step_directions(pos: Position) -> list[Direction]:
    row = row_of(pos)
    odd = row % 2 == 1
    directions: list[Direction] = []
    for direction in Direction:
        if direction.is_up and row == TOP_ROW:
            continue
        if not direction.is_up and row == BOTTOM_ROW:
            continue
        # Odd rows hug the right edge, even rows the left one.
        if odd and not direction.is_left and _is_right_edge(pos):
            continue
        if not odd and direction.is_left and _is_left_edge(pos):
            continue
        directions.append(direction)
    return directions


def _compute_neighbors(pos: Position) -> dict[Direction, Position]:
    offsets = _STEP_OFFSETS[row_of(pos) % 2 == 1]
    return {direction: pos + offsets[direction] for direction in _step_directions(pos)}


_NEIGHBOR_TABLE: dict[Position, dict[Direction, Position]] = {
    pos: _compute_neighbors(pos) for pos in range(1, BOARD_SQUARES + 1)
}


def immediate_neighbors(pos: Position) -> frozenset[Position]:
    _require_position(pos)
    return frozenset(_NEIGHBOR_TABLE[pos].values())


def corner_direction(start: Position, target: Position) -> Direction:
    _require_position(start)
    for direction, neighbor in _NEIGHBOR_TABLE[start].items():
        if neighbor == target:
            return direction
    raise ValueError(f"Position {target} is not diagonally adjacent to {start}.")


def jump_landing(start: Position, direction: Direction) -> Position:
    """Square two diagonal steps away; callers check it is on-board and empty."""
    return start + _JUMP_OFFSETS[direction]


def feasible_directions(pos: Position) -> frozenset[Direction]:
    """Directions in which a jump from ``pos`` stays on the board.

    A jump needs two rows and two columns of clearance, so the two outer
    rows and the outer column pair on each side rule directions out.
    """
    row = row_of(pos)
    feasible = set(Direction)
    if row <= TOP_ROW + 1:
        feasible -= {Direction.UP_LEFT, Direction.UP_RIGHT}
    if row >= BOTTOM_ROW - 1:
        feasible -= {Direction.DOWN_LEFT, Direction.DOWN_RIGHT}
    if _is_left_edge(pos):
        feasible -= {Direction.UP_LEFT, Direction.DOWN_LEFT}
    if _is_right_edge(pos):
        feasible -= {Direction.UP_RIGHT, Direction.DOWN_RIGHT}
    return frozenset(feasible)
