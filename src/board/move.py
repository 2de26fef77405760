"""
A proposed move: where a piece starts, where it goes, and what (if anything) it lands on.

Validity here only means "the record is complete". Whether the board accepts it is decided by BoardState.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from src.board.coordinate import INVALID_COORDINATE, Coordinate
from src.board.piece_id import TYPE_TO_SYMBOL, PieceType, type_of


@dataclass
class MoveRecord:
    origin: Coordinate = INVALID_COORDINATE
    piece: Optional[int] = None
    target: Coordinate = INVALID_COORDINATE
    target_piece: Optional[int] = None

    @classmethod
    def from_uci(cls, uci: str, squares: Sequence[int]) -> MoveRecord:
        """
        Build a move from coordinate notation ("e2e4"), reading the occupants of both squares from the given board array.

        Raises InvalidSquareError if either square name cannot be interpreted.
        """
        origin = Coordinate.from_text(uci[:2])
        target = Coordinate.from_text(uci[2:4])
        return cls(
            origin=origin,
            piece=squares[origin.index],
            target=target,
            target_piece=squares[target.index],
        )

    def to_uci(self) -> str:
        return f"{self.origin.to_text()}{self.target.to_text()}"

    def origin_index(self) -> int:
        return self.origin.index

    def target_index(self) -> int:
        return self.target.index

    def offset(self) -> int:
        """Linear distance travelled: +8 is one rank up the board, -1 is one file to the left, etc."""
        return self.target_index() - self.origin_index()

    def is_valid(self) -> bool:
        if not self.piece:
            return False
        return self.origin.is_valid() and self.target.is_valid()

    def is_capture(self) -> bool:
        return bool(self.target_piece)

    def to_notation(self) -> str:
        """
        Simplified algebraic notation
        ----

        * pawn moves: file the pawn left + the rank it arrives on ("e4"), or "x" + target square on a capture ("exd5").
        * other pieces: piece letter + optional "x" + target square ("Nf3", "Qxh7").

        NOTE: No disambiguation between two identical pieces reaching the same square,
        no check/mate suffixes, and no castling or promotion notation.
        """
        if not self.is_valid():
            return ""

        piece_type = type_of(self.piece)
        if piece_type == PieceType.PAWN:
            if self.is_capture():
                return f"{self.origin.to_text()[0]}x{self.target.to_text()}"
            return f"{self.origin.to_text()[0]}{self.target.to_text()[1]}"

        if piece_type not in TYPE_TO_SYMBOL:
            return ""
        capture = "x" if self.is_capture() else ""
        return f"{TYPE_TO_SYMBOL[piece_type]}{capture}{self.target.to_text()}"

    def __str__(self) -> str:
        return self.to_notation()
