"""Castling rights bookkeeping. Needs to be imported by both the FEN codec and the packed game state."""

from enum import Enum


class CastlingDirection(Enum):
    """The four castling directions. Values represent their encodings in FEN string."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"


CASTLING_ORDER: tuple[CastlingDirection, ...] = (
    CastlingDirection.WHITE_KING_SIDE,
    CastlingDirection.WHITE_QUEEN_SIDE,
    CastlingDirection.BLACK_KING_SIDE,
    CastlingDirection.BLACK_QUEEN_SIDE,
)

ALL_CASTLING_RIGHTS = "KQkq"


def castling_from_fen(castle_fen: str) -> dict[CastlingDirection, bool]:
    """Each direction is granted when its letter appears anywhere in the field ("-" grants none)"""
    return {
        direction: (direction.value in castle_fen) for direction in CastlingDirection
    }


def castling_to_fen(castling_rights: dict[CastlingDirection, bool]) -> str:
    """Letters of the retained rights in K, Q, k, q order, or "-" when every right is gone"""
    castling_chars = "".join(
        direction.value
        for direction in CASTLING_ORDER
        if castling_rights.get(direction, False)
    )
    return castling_chars or "-"
