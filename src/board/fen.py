"""
Reading and writing FEN strings.
----

FEN, or Forsyth-Edwards Notation, is a standard notation for describing a particular board position of a chess game.

<board position> <active color> <castling rights> <en passant square> <half move clock> <full move number>

ex) The standard starting position has a FEN
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1

Parsing is lenient on purpose: every field after the board layout may be missing, and counters that
cannot be read default to zero. Only a board layout that cannot be placed on the board raises InvalidFENError.
"""

import random
from dataclasses import dataclass, field
from enum import StrEnum
from string import digits
from typing import Optional, Protocol, Sequence

from src.board import game_state
from src.board.castling import (
    ALL_CASTLING_RIGHTS,
    CastlingDirection,
    castling_from_fen,
    castling_to_fen,
)
from src.board.coordinate import (
    BOARD_DIMENSIONS,
    FILE_NAMES,
    NUM_SQUARES,
    square_index,
)
from src.board.piece_id import (
    SYMBOL_TO_TYPE,
    PieceColor,
    PieceType,
    make_piece,
    to_notation_char,
)
from src.core.exceptions import InvalidFENError

# Preselected positions
NEW_GAME = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
MATE_IN_2 = "1rb4r/pkPp3p/1b1P3n/1Q6/N3Pp2/8/P1P3PP/7K w - - 1 1"
MATE_IN_3 = "rn3rk1/p5pp/2p5/3Ppb2/2q5/1Q6/PPPB2PP/R3K1NR b - - 0 1"
MATE_IN_4 = "r5rk/2p1Nppp/3p3P/pp2p1P1/4P3/2qnPQK1/8/R6R w - - 1 1"


class Puzzle(StrEnum):
    MATE_IN_2 = "mate in 2"
    MATE_IN_3 = "mate in 3"
    MATE_IN_4 = "mate in 4"


PUZZLES: dict[Puzzle, str] = {
    Puzzle.MATE_IN_2: MATE_IN_2,
    Puzzle.MATE_IN_3: MATE_IN_3,
    Puzzle.MATE_IN_4: MATE_IN_4,
}


def random_puzzle(rng: Optional[random.Random] = None) -> str:
    """Grab the FEN of one of the preselected puzzles at random"""
    chooser = rng if rng is not None else random
    return PUZZLES[chooser.choice(list(Puzzle))]


# Rank of the en passant square, given the side to move *after* the double pawn push
EN_PASSANT_RANK_WHITE_TO_MOVE = "6"
EN_PASSANT_RANK_BLACK_TO_MOVE = "3"


class Board(Protocol):
    """Just the parts of a board the FEN writer needs"""

    squares: list[int]
    white_to_move: bool
    current_game_state: int

    @property
    def half_move_clock(self) -> int: ...

    @property
    def full_move_number(self) -> int: ...


@dataclass
class FenPosition:
    """Everything that can be read from a FEN string."""

    squares: list[int] = field(default_factory=lambda: [int(PieceType.NONE)] * NUM_SQUARES)
    white_to_move: bool = True
    castling_rights: dict[CastlingDirection, bool] = field(
        default_factory=lambda: castling_from_fen(ALL_CASTLING_RIGHTS)
    )
    en_passant_file: int = 0  # file index + 1, 0 = no en passant square
    half_moves: int = 0
    full_moves: int = 0


def parse(fen: str) -> FenPosition:
    """Parse the FEN into data. Fields are separated by single spaces."""
    sections = fen.split(" ")
    position = FenPosition()

    position.squares = parse_board(sections[0])

    # NOTE: The active color is only consulted when there are at least 3 fields. With just "<board> b" it is still white to move.
    position.white_to_move = sections[1] == "w" if len(sections) > 2 else True

    castling_str = sections[2] if len(sections) > 2 else ALL_CASTLING_RIGHTS
    position.castling_rights = castling_from_fen(castling_str)

    # only the file letter of the en passant square matters
    if len(sections) > 3:
        en_passant_file = sections[3][:1]
        if en_passant_file and en_passant_file in FILE_NAMES:
            position.en_passant_file = FILE_NAMES.index(en_passant_file) + 1

    if len(sections) > 4:
        position.half_moves = parse_counter(sections[4])
    if len(sections) > 5:
        position.full_moves = parse_counter(sections[5])
    return position


def parse_board(layout: str) -> list[int]:
    """
    Fill the 64 squares from the board part of a FEN string.

    FEN is read from top rank (8th) to bottom rank (1st), ranks separated by slashes.
    Within a rank the first character is the a-file. A digit denotes that many empty squares,
    a letter a piece (capital letters for White).
    """
    num_files, num_ranks = BOARD_DIMENSIONS
    squares = [int(PieceType.NONE)] * NUM_SQUARES
    file = 0
    rank = num_ranks - 1
    for symbol in layout:
        if symbol == "/":
            file = 0
            rank -= 1
        elif symbol in digits:
            file += int(symbol)
        else:
            piece_type = SYMBOL_TO_TYPE.get(symbol.upper())
            if piece_type is None:
                raise InvalidFENError(
                    f"Unknown piece {symbol!r} in FEN board layout: {layout!r}"
                )
            if not (0 <= file < num_files and 0 <= rank < num_ranks):
                raise InvalidFENError(
                    f"Piece {symbol!r} falls outside the board in FEN board layout: {layout!r}"
                )
            color = PieceColor.WHITE if symbol.isupper() else PieceColor.BLACK
            squares[square_index(file, rank)] = make_piece(piece_type, color)
            file += 1
    return squares


def parse_counter(counter: str) -> int:
    """Move counters that cannot be read (or are negative) count as zero"""
    try:
        value = int(counter)
    except ValueError:
        return 0
    return max(value, 0)


def serialize(board: Board) -> str:
    """reverse operation: write a FEN from the current state of the board"""
    position = serialize_board(board.squares)
    active_color = "w" if board.white_to_move else "b"
    castling_str = castling_to_fen(
        game_state.castling_rights(board.current_game_state)
    )

    en_passant_file = game_state.en_passant_file(board.current_game_state)
    if en_passant_file == 0:
        en_passant_algebraic = "-"
    else:
        en_passant_rank = (
            EN_PASSANT_RANK_WHITE_TO_MOVE
            if board.white_to_move
            else EN_PASSANT_RANK_BLACK_TO_MOVE
        )
        en_passant_algebraic = f"{FILE_NAMES[en_passant_file - 1]}{en_passant_rank}"

    return f"{position} {active_color} {castling_str} {en_passant_algebraic} {board.half_move_clock} {board.full_move_number}"


def serialize_board(squares: Sequence[int]) -> str:
    """Ranks are separated by slashes in FEN string."""
    return "/".join(
        _rank_to_fen(squares, rank) for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
    )


def _rank_to_fen(squares: Sequence[int], rank: int) -> str:
    """FEN string of a single rank"""
    fen_characters: list[str] = []
    empty_count = 0
    for file in range(BOARD_DIMENSIONS[0]):
        piece = squares[square_index(file, rank)]

        if piece != PieceType.NONE:
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(to_notation_char(piece))
        else:
            empty_count += 1

    # if the entire rank is empty, then we still place this number in the string
    if empty_count > 0:
        fen_characters.append(str(empty_count))
    return "".join(fen_characters)
