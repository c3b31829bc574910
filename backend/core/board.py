from __future__ import annotations

from typing import Iterator, Mapping, Optional

from .geometry import BOARD_SQUARES, BOTTOM_ROW, TOP_ROW, Position, is_on_board, row_of
from .pieces import Color, King, Man, Piece

BoardStatePiece = tuple[int, str, bool]
BoardState = tuple[str, tuple[BoardStatePiece, ...]]

STARTING_ROWS_SQUARES = 12


class Board:
    """Placement of pieces on the 32 playable squares.

    The board is a plain store: every square is always present and ``None``
    marks an empty one. It knows its orientation (which colour started on
    squares 1..12) because forward movement and promotion depend on it, but
    it never checks move legality.
    """

    def __init__(self, top_color: Color = Color.BLACK) -> None:
        self.top_color = top_color
        self.squares: dict[Position, Optional[Piece]] = {
            pos: None for pos in range(1, BOARD_SQUARES + 1)
        }

    @classmethod
    def initial(cls, top_color: Color = Color.BLACK) -> "Board":
        board = cls(top_color)
        bottom_color = top_color.opponent
        for pos in range(1, STARTING_ROWS_SQUARES + 1):
            board.squares[pos] = Man(top_color)
        for pos in range(BOARD_SQUARES - STARTING_ROWS_SQUARES + 1, BOARD_SQUARES + 1):
            board.squares[pos] = Man(bottom_color)
        return board

    @classmethod
    def empty(cls, top_color: Color = Color.BLACK) -> "Board":
        return cls(top_color)

    @classmethod
    def from_layout(cls, layout: Mapping[Position, Piece], top_color: Color = Color.BLACK) -> "Board":
        board = cls(top_color)
        for pos, piece in layout.items():
            board.setPiece(pos, piece)
        return board

    def getPiece(self, pos: Position) -> Optional[Piece]:
        self._check_position(pos)
        return self.squares[pos]

    def setPiece(self, pos: Position, piece: Optional[Piece]) -> None:
        self._check_position(pos)
        self.squares[pos] = piece

    def clear(self, pos: Position) -> None:
        self.setPiece(pos, None)

    def is_empty(self, pos: Position) -> bool:
        return self.getPiece(pos) is None

    def getAllPieces(self) -> list[tuple[Position, Piece]]:
        return [(pos, piece) for pos, piece in self.squares.items() if piece is not None]

    def pieces(self, color: Color) -> list[tuple[Position, Piece]]:
        return [(pos, piece) for pos, piece in self.getAllPieces() if piece.color is color]

    def count(self, color: Color) -> int:
        return len(self.pieces(color))

    def king_count(self, color: Color) -> int:
        return sum(1 for _, piece in self.pieces(color) if piece.is_king)

    def forward_sign(self, color: Color) -> int:
        """+1 if ``color`` advances toward higher numbers, -1 otherwise."""
        return 1 if color is self.top_color else -1

    def promotion_row(self, color: Color) -> int:
        return BOTTOM_ROW if color is self.top_color else TOP_ROW

    def is_promotion_square(self, pos: Position, color: Color) -> bool:
        return row_of(pos) == self.promotion_row(color)

    def copy(self) -> "Board":
        clone = Board(self.top_color)
        clone.squares = dict(self.squares)
        return clone

    def to_state(self) -> BoardState:
        pieces = tuple(
            (pos, piece.color.value, piece.is_king) for pos, piece in self.getAllPieces()
        )
        return (self.top_color.value, pieces)

    @classmethod
    def from_state(cls, state: BoardState) -> "Board":
        top_value, pieces = state
        if len(pieces) > BOARD_SQUARES:
            raise ValueError(f"A board holds at most {BOARD_SQUARES} pieces, got {len(pieces)}.")
        board = cls(Color(top_value))
        for pos, color_value, is_king in pieces:
            if not board.is_empty(pos):
                raise ValueError(f"Square {pos} appears more than once in the board state.")
            color = Color(color_value)
            board.setPiece(pos, King(color) if is_king else Man(color))
        return board

    def __len__(self) -> int:
        return len(self.squares)

    def __iter__(self) -> Iterator[tuple[Position, Optional[Piece]]]:
        return iter(self.squares.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.top_color is other.top_color and self.squares == other.squares

    def __str__(self) -> str:
        rows = []
        for row in range(TOP_ROW, BOTTOM_ROW + 1):
            cells = []
            for offset in range(4):
                piece = self.squares[(row - 1) * 4 + offset + 1]
                cells.append(piece.symbol if piece else ".")
            line = "   ".join(cells)
            rows.append(("  " + line) if row % 2 == 1 else line)
        return "\n".join(rows)

    @staticmethod
    def _check_position(pos: Position) -> None:
        if not is_on_board(pos):
            raise ValueError(f"Position {pos!r} is outside 1..{BOARD_SQUARES}.")
