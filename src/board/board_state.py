"""
The board state is the entrypoint into the domain layer: a 64 square array of piece codes plus the packed game state word.

It is responsible for loading a position from FEN, executing moves, and writing the position back to FEN.
Moves are NOT checked against the rules of chess (no move generation, no check detection);
only the bookkeeping of castling rights, en passant file, captures and move counters is maintained.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Self

from src.board import fen, game_state
from src.board.castling import CastlingDirection
from src.board.coordinate import NUM_SQUARES, Coordinate
from src.board.move import MoveRecord
from src.board.piece_id import (
    PieceType,
    color_of,
    is_white,
    type_of,
)
from src.core.exceptions import InvalidSquareError, PositionStateError
from src.core.models import PositionModel

logger = logging.getLogger(__name__)

QUEEN_SIDE_ROOK_FILE = 0
KING_SIDE_ROOK_FILE = 7


@dataclass
class BoardState:
    # piece code for each square, indexed a1=0 ... h8=63
    squares: list[int] = field(default_factory=lambda: [0] * NUM_SQUARES)
    white_to_move: bool = True
    current_game_state: int = 0
    # packed game state before each executed move, most recent last
    game_state_history: list[int] = field(default_factory=list)
    move_history: list[MoveRecord] = field(default_factory=list)
    starting_fen: str = fen.NEW_GAME

    # --- counters live inside the packed word, so they can never drift from it ---
    @property
    def half_move_clock(self) -> int:
        return game_state.half_moves(self.current_game_state)

    @half_move_clock.setter
    def half_move_clock(self, value: int) -> None:
        self.current_game_state = game_state.with_half_moves(
            self.current_game_state, value
        )

    @property
    def full_move_number(self) -> int:
        return game_state.full_moves(self.current_game_state)

    @full_move_number.setter
    def full_move_number(self, value: int) -> None:
        self.current_game_state = game_state.with_full_moves(
            self.current_game_state, value
        )

    @property
    def can_undo(self) -> bool:
        return len(self.game_state_history) > 0

    @classmethod
    def new_game(cls, starting_fen: str = fen.NEW_GAME) -> Self:
        board = cls()
        board.initialize(starting_fen)
        return board

    # --- API CALLED BY THE PRESENTATION / SERVICE LAYER ---
    def initialize(self, fen_str: str = fen.NEW_GAME) -> None:
        """Start over from the given position (standard starting position by default)"""
        self.load_position(fen_str)

        logger.debug("GameState: %s", self.game_state_string())
        logger.debug("FEN: %s", self.save_position())

    def load_position(self, fen_str: str) -> None:
        """
        Set up the board according to the given FEN string. Raises InvalidFENError if the board layout is malformed.

        The loaded position becomes the new starting point: both histories are dropped,
        so nothing recorded against the previous position can be undone or replayed on this one.
        """
        loaded = fen.parse(fen_str)

        self.starting_fen = fen_str
        self.game_state_history.clear()
        self.move_history.clear()

        self.white_to_move = loaded.white_to_move
        self.current_game_state = game_state.pack(
            castling=game_state.castling_bits_from_rights(loaded.castling_rights),
            en_passant_file=loaded.en_passant_file,
            half_moves=loaded.half_moves,
            full_moves=loaded.full_moves,
        )
        self.squares = list(loaded.squares)

    def save_position(self) -> str:
        return fen.serialize(self)

    def create_move(self, origin: Coordinate, target: Coordinate) -> MoveRecord:
        """Convenience: a move record for whatever currently stands on origin / target."""
        return MoveRecord(
            origin=origin,
            piece=self.squares[origin.index] if origin.is_valid() else None,
            target=target,
            target_piece=self.squares[target.index] if target.is_valid() else None,
        )

    def is_valid_move(self, move: MoveRecord) -> bool:
        """
        Minimal sanity checks only.
        ----

        * a piece has to move
        * it has to go somewhere else
        * both squares have to be on the board
        * the piece has to be the one standing on the origin square
        * it cannot land on a piece of its own color
        """
        if not move.piece:
            return False

        if move.origin.compare(move.target) == 0:
            return False

        if not (move.origin.is_valid() and move.target.is_valid()):
            return False

        if self.squares[move.origin_index()] != move.piece:
            return False

        occupant = self.squares[move.target_index()]
        if occupant and color_of(occupant) == color_of(move.piece):
            return False

        return True

    def execute_move(self, move: MoveRecord) -> bool:
        """
        Attempt to make a move. Returns False (and leaves the board untouched) if the move is rejected.
        -----

        1. store the current game state, so it can be undone
        2. wipe everything but the castling rights from the game state, then rebuild it:
            castling rights, en passant file, captured piece, half move clock
        3. move the piece on the board
        4. pass the turn on (and count the full move after Black has moved)
        """
        if not self.is_valid_move(move):
            logger.debug("Rejected move: %s", move.to_uci())
            return False

        self.game_state_history.append(self.current_game_state)

        half_moves = self.half_move_clock
        full_moves = self.full_move_number
        castling = game_state.castling_bits(self.current_game_state)
        en_passant_file = 0

        origin = move.origin_index()
        target = move.target_index()
        piece = self.squares[origin]
        captured = self.squares[target]
        piece_type = type_of(piece)

        # Castling rights can only ever be revoked
        if piece_type == PieceType.KING:
            castling &= ~(
                game_state.WHITE_CASTLING if is_white(piece) else game_state.BLACK_CASTLING
            )
        elif piece_type == PieceType.ROOK:
            castling &= ~self._rook_castling_bit(piece, move.origin.file)
        elif piece_type == PieceType.PAWN and abs(move.offset()) > 8:
            # double push
            en_passant_file = move.origin.file + 1

        # Moving a pawn or capturing resets the half move clock
        if captured or piece_type == PieceType.PAWN:
            half_moves = 0
        else:
            half_moves += 1

        self.squares[target] = piece
        self.squares[origin] = int(PieceType.NONE)

        self.white_to_move = not self.white_to_move
        if self.white_to_move:
            full_moves += 1

        self.current_game_state = game_state.pack(
            castling=castling,
            en_passant_file=en_passant_file,
            captured=captured,
            half_moves=half_moves,
            full_moves=full_moves,
        )
        self.move_history.append(move)

        logger.debug("Move: %s", move.to_notation())
        logger.debug("GameState: %s", self.game_state_string())
        logger.debug("FEN: %s", self.save_position())
        return True

    def undo_move(self) -> bool:
        """
        Take back the last executed move. Returns False if there is nothing to undo.

        The captured piece is read back from the game state of the move being undone,
        everything else irreversible comes from the stored game state before the move.
        """
        if not self.can_undo:
            return False

        move = self.move_history.pop()
        captured = game_state.captured_piece(self.current_game_state)

        origin = move.origin_index()
        target = move.target_index()
        self.squares[origin] = self.squares[target]
        self.squares[target] = captured

        self.white_to_move = not self.white_to_move
        self.current_game_state = self.game_state_history.pop()

        logger.debug("Undo: %s", move.to_notation())
        logger.debug("FEN: %s", self.save_position())
        return True

    def game_state_string(self) -> str:
        return game_state.game_state_string(self.current_game_state)

    # --- CONVERSION FROM/TO TRANSPORT MODEL ---
    @classmethod
    def from_model(cls, model: PositionModel) -> Self:
        """Rebuild a board by replaying the stored moves from the starting position, so the undo history is restored too."""
        board = cls.new_game(model.starting_fen)
        for uci in model.moves_uci:
            try:
                move = MoveRecord.from_uci(uci, board.squares)
            except InvalidSquareError as e:
                raise PositionStateError(f"Stored move {uci!r} cannot be read.") from e
            if not board.execute_move(move):
                raise PositionStateError(
                    f"Stored move {uci!r} cannot be replayed on {board.save_position()!r}."
                )
        return board

    def to_model(self) -> PositionModel:
        """Encode back into a format the Service layer uses"""
        return PositionModel(
            starting_fen=self.starting_fen,
            current_fen=self.save_position(),
            moves_uci=[move.to_uci() for move in self.move_history],
            move_notation=[move.to_notation() for move in self.move_history],
            game_state=self.current_game_state,
        )

    # --- Internal helpers ---
    @staticmethod
    def _rook_castling_bit(rook: int, file: int) -> int:
        """The castling right a rook gives up by leaving its corner file"""
        white = is_white(rook)
        if file == QUEEN_SIDE_ROOK_FILE:
            return game_state.CASTLING_BITS[
                CastlingDirection.WHITE_QUEEN_SIDE
                if white
                else CastlingDirection.BLACK_QUEEN_SIDE
            ]
        if file == KING_SIDE_ROOK_FILE:
            return game_state.CASTLING_BITS[
                CastlingDirection.WHITE_KING_SIDE
                if white
                else CastlingDirection.BLACK_KING_SIDE
            ]
        return 0
