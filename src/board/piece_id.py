"""
Piece codes: a piece is stored as a single small integer, (piece type | piece color).

bits 0-2: type, bits 3-4: color. Type codes 0 and 4 are unused, which lets the sliding
pieces (bishop, rook, queen) share bit 2 and the predicates below become single masks.
"""

from enum import IntEnum


class PieceType(IntEnum):
    NONE = 0  # 0b00000
    KING = 1  # 0b00001
    PAWN = 2  # 0b00010
    KNIGHT = 3  # 0b00011
    BISHOP = 5  # 0b00101
    ROOK = 6  # 0b00110
    QUEEN = 7  # 0b00111


class PieceColor(IntEnum):
    WHITE = 8  # 0b01000
    BLACK = 16  # 0b10000


TYPE_MASK = 0b00111
WHITE_MASK = 0b01000
BLACK_MASK = 0b10000
COLOR_MASK = WHITE_MASK | BLACK_MASK

# Read-only lookup tables keyed by the 3-bit type code
SYMBOL_TO_TYPE: dict[str, PieceType] = {
    "K": PieceType.KING,
    "Q": PieceType.QUEEN,
    "R": PieceType.ROOK,
    "B": PieceType.BISHOP,
    "N": PieceType.KNIGHT,
    "P": PieceType.PAWN,
}

TYPE_TO_SYMBOL: dict[int, str] = {value: key for key, value in SYMBOL_TO_TYPE.items()}

TYPE_TO_NAME: dict[int, str] = {
    PieceType.KING: "King",
    PieceType.QUEEN: "Queen",
    PieceType.ROOK: "Rook",
    PieceType.BISHOP: "Bishop",
    PieceType.KNIGHT: "Knight",
    PieceType.PAWN: "Pawn",
}


def make_piece(piece_type: int, color: int) -> int:
    return piece_type | color


def color_of(piece: int) -> int:
    return piece & COLOR_MASK


def type_of(piece: int) -> int:
    return piece & TYPE_MASK


def is_white(piece: int) -> bool:
    return (piece & COLOR_MASK) == PieceColor.WHITE


def is_rook_or_queen(piece: int) -> bool:
    return (piece & 0b110) == 0b110


def is_bishop_or_queen(piece: int) -> bool:
    return (piece & 0b101) == 0b101


def is_sliding(piece: int) -> bool:
    """Bishops, rooks and queens all have bit 2 of their type set"""
    return (piece & 0b100) == 0b100


def to_notation_char(piece: int) -> str:
    """FEN character of the piece: capital letters for White, lower case for Black. An empty square reads 'None'."""
    if piece == PieceType.NONE:
        return "None"
    symbol = TYPE_TO_SYMBOL[type_of(piece)]
    return symbol if is_white(piece) else symbol.lower()


def name_of(piece: int) -> str:
    """Full name of the piece type ('' for anything that is not a piece)"""
    return TYPE_TO_NAME.get(type_of(piece), "")


def color_name(piece: int) -> str:
    return "White" if is_white(piece) else "Black"
