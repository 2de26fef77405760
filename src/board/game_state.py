"""
The "irreversible" part of a position, packed into a single 32-bit word.

bits  0-3 : castling rights (1 = white king side, 2 = white queen side, 4 = black king side, 8 = black queen side)
bits  4-7 : file of the en passant square + 1 (0 = no en passant square)
bits  8-12: piece code of the piece captured by the last move (0 = nothing captured)
bits 13-20: half move clock
bits 21-31: full move number

Every field is masked to its width when packing, so an oversized counter can never spill into its neighbour.
"""

from src.board.castling import CastlingDirection

CASTLING_SHIFT = 0
EN_PASSANT_SHIFT = 4
CAPTURED_SHIFT = 8
HALF_MOVES_SHIFT = 13
FULL_MOVES_SHIFT = 21

CASTLING_MASK = 0b1111
EN_PASSANT_MASK = 0b1111
CAPTURED_MASK = 0b11111
HALF_MOVES_MASK = 0xFF
FULL_MOVES_MASK = 0x7FF

WORD_MASK = 0xFFFFFFFF

CASTLING_BITS: dict[CastlingDirection, int] = {
    CastlingDirection.WHITE_KING_SIDE: 0b0001,
    CastlingDirection.WHITE_QUEEN_SIDE: 0b0010,
    CastlingDirection.BLACK_KING_SIDE: 0b0100,
    CastlingDirection.BLACK_QUEEN_SIDE: 0b1000,
}

WHITE_CASTLING = (
    CASTLING_BITS[CastlingDirection.WHITE_KING_SIDE]
    | CASTLING_BITS[CastlingDirection.WHITE_QUEEN_SIDE]
)
BLACK_CASTLING = (
    CASTLING_BITS[CastlingDirection.BLACK_KING_SIDE]
    | CASTLING_BITS[CastlingDirection.BLACK_QUEEN_SIDE]
)

# Insertion points of the separators in game_state_string(): full | half | captured | en passant | castling
FIELD_BREAKS = (11, 19, 24, 28)


def pack(
    castling: int = 0,
    en_passant_file: int = 0,
    captured: int = 0,
    half_moves: int = 0,
    full_moves: int = 0,
) -> int:
    return (
        ((castling & CASTLING_MASK) << CASTLING_SHIFT)
        | ((en_passant_file & EN_PASSANT_MASK) << EN_PASSANT_SHIFT)
        | ((captured & CAPTURED_MASK) << CAPTURED_SHIFT)
        | ((half_moves & HALF_MOVES_MASK) << HALF_MOVES_SHIFT)
        | ((full_moves & FULL_MOVES_MASK) << FULL_MOVES_SHIFT)
    )


def castling_bits(state: int) -> int:
    return (state >> CASTLING_SHIFT) & CASTLING_MASK


def en_passant_file(state: int) -> int:
    """File index + 1 of the en passant square; 0 when there is none."""
    return (state >> EN_PASSANT_SHIFT) & EN_PASSANT_MASK


def captured_piece(state: int) -> int:
    return (state >> CAPTURED_SHIFT) & CAPTURED_MASK


def half_moves(state: int) -> int:
    return (state >> HALF_MOVES_SHIFT) & HALF_MOVES_MASK


def full_moves(state: int) -> int:
    return (state >> FULL_MOVES_SHIFT) & FULL_MOVES_MASK


def with_half_moves(state: int, value: int) -> int:
    cleared = state & ~(HALF_MOVES_MASK << HALF_MOVES_SHIFT)
    return cleared | ((value & HALF_MOVES_MASK) << HALF_MOVES_SHIFT)


def with_full_moves(state: int, value: int) -> int:
    cleared = state & ~(FULL_MOVES_MASK << FULL_MOVES_SHIFT)
    return (cleared | ((value & FULL_MOVES_MASK) << FULL_MOVES_SHIFT)) & WORD_MASK


def castling_rights(state: int) -> dict[CastlingDirection, bool]:
    bits = castling_bits(state)
    return {direction: bool(bits & bit) for direction, bit in CASTLING_BITS.items()}


def castling_bits_from_rights(rights: dict[CastlingDirection, bool]) -> int:
    return sum(bit for direction, bit in CASTLING_BITS.items() if rights.get(direction))


def game_state_string(state: int) -> str:
    """
    Binary dump of the packed word, most significant bit first, spaced at the field boundaries.

    ex) the starting position (all castling rights, full move 1):
    00000000001 00000000 00000 0000 1111
    """
    bits = format(state & WORD_MASK, "032b")
    groups: list[str] = []
    start = 0
    for stop in FIELD_BREAKS:
        groups.append(bits[start:stop])
        start = stop
    groups.append(bits[start:])
    return " ".join(groups)
