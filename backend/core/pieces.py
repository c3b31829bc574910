from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class Color(Enum):
    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.RED else Color.RED


@dataclass(frozen=True, slots=True)
class Piece:
    color: Color

    is_king: ClassVar[bool] = False

    @property
    def symbol(self) -> str:
        letter = "r" if self.color is Color.RED else "b"
        return letter.upper() if self.is_king else letter

    def __repr__(self) -> str:
        piece_type = "K" if self.is_king else "M"
        return f"{piece_type}({self.color.name})"


@dataclass(frozen=True, slots=True, repr=False)
class King(Piece):
    is_king: ClassVar[bool] = True


@dataclass(frozen=True, slots=True, repr=False)
class Man(Piece):
    def promote(self) -> King:
        return King(self.color)
