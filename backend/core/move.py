from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .geometry import Position


@dataclass(frozen=True, slots=True)
class Move:
    start: Position
    end: Position
    captured: Optional[Position] = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def __str__(self) -> str:
        connector = "x" if self.is_capture else "-"
        return f"{self.start}{connector}{self.end}"


@dataclass(frozen=True, slots=True)
class Destinations:
    """Legal destinations for one piece.

    ``captures`` maps each landing square to the square of the piece jumped
    to get there.
    """

    simple: frozenset[Position] = frozenset()
    captures: dict[Position, Position] = field(default_factory=dict)

    @property
    def has_captures(self) -> bool:
        return bool(self.captures)

    @property
    def is_empty(self) -> bool:
        return not self.simple and not self.captures

    def __len__(self) -> int:
        return len(self.simple) + len(self.captures)

    def moves_from(self, start: Position) -> list[Move]:
        moves = [Move(start, landing, captured) for landing, captured in sorted(self.captures.items())]
        moves.extend(Move(start, end) for end in sorted(self.simple))
        return moves
