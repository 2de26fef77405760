"""
A coordinate on the board, plus helpers for square names.

(placed in its own module as multiple other modules need to import it)

Squares are indexed 0-63 rank by rank: a1=0, b1=1, ..., h1=7, a2=8, ..., h8=63.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

from src.core.exceptions import InvalidSquareError

# Chess board is always 8x8
BOARD_DIMENSIONS = (8, 8)
NUM_SQUARES = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]

FILE_NAMES = "abcdefgh"
RANK_NAMES = "12345678"

# First rank linear indices
A1, B1, C1, D1, E1, F1, G1, H1 = range(0, 8)
# Last rank linear indices
A8, B8, C8, D8, E8, F8, G8, H8 = range(56, 64)


def file_of(index: int) -> int:
    return index & 0b000111


def rank_of(index: int) -> int:
    return index >> 3


def square_index(file: int, rank: int) -> int:
    return rank * BOARD_DIMENSIONS[0] + file


def file_name(file: int) -> str:
    return FILE_NAMES[file]


def rank_name(rank: int) -> str:
    return str(rank + 1)


def square_name(index: int) -> str:
    """'a1' for 0 up to 'h8' for 63"""
    return Coordinate.from_index(index).to_text()


@total_ordering
@dataclass(frozen=True)
class Coordinate:
    """File and rank both count from zero: (0, 0) is a1, (7, 7) is h8."""

    file: int
    rank: int

    @classmethod
    def from_index(cls, index: int) -> Coordinate:
        return cls(file_of(index), rank_of(index))

    @classmethod
    def from_text(cls, text: str) -> Coordinate:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        if len(text) != 2 or text[0] not in FILE_NAMES or text[1] not in RANK_NAMES:
            raise InvalidSquareError(f"Cannot interpret {text!r} as a square name.")
        return cls(FILE_NAMES.index(text[0]), RANK_NAMES.index(text[1]))

    @property
    def index(self) -> int:
        return square_index(self.file, self.rank)

    def is_valid(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )

    def is_light_square(self) -> bool:
        return (self.file + self.rank) % 2 != 0

    def compare(self, other: Coordinate) -> int:
        """-1, 0 or 1 depending on sort order. 0 means both point at the same square."""
        if self.index == other.index:
            return 0
        return -1 if self.index < other.index else 1

    def __lt__(self, other: Coordinate) -> bool:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self.compare(other) < 0

    def to_text(self) -> str:
        if not self.is_valid():
            return "Invalid"
        return f"{FILE_NAMES[self.file]}{RANK_NAMES[self.rank]}"

    def __str__(self) -> str:
        return self.to_text()


# Marks "no square", e.g. the origin of a move without a piece
INVALID_COORDINATE = Coordinate(-1, -1)
