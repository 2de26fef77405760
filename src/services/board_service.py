"""Orchestration of communication from request models to the board and persistence layers (and the reverse direction)."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from src.api.models import (
    CreatePositionRequest,
    DeletePositionRequest,
    GetPositionRequest,
    MoveRequest,
    PositionResponse,
    UndoMoveRequest,
)
from src.board import game_state
from src.board.board_state import BoardState
from src.board.coordinate import Coordinate
from src.board.fen import NEW_GAME, PUZZLES
from src.core.config import Settings, configure_logging
from src.core.exceptions import IllegalMoveError, PositionStateError, RepositoryError
from src.core.models import PositionModel
from src.db.database import create_session_factory, get_db
from src.db.repository import PositionRepository
from src.db.sql_repository import SQLPositionRepository

logger = logging.getLogger(__name__)


class BoardService:
    """Orchestration of layers for a board."""

    def __init__(
        self, repository: PositionRepository, default_fen: str = NEW_GAME
    ) -> None:
        self.repo = repository
        self.default_fen = default_fen

    def create_position(self, request: CreatePositionRequest) -> PositionResponse:
        """Set up a new board and store it."""

        if request.puzzle is not None:
            starting_fen = PUZZLES[request.puzzle]
        else:
            starting_fen = request.fen or self.default_fen

        board = BoardState.new_game(starting_fen)
        stored_model, position_id = self.repo.create_position(board.to_model())

        logger.info("Created position %s from %r", position_id, starting_fen)
        return self._create_position_response(position_id, stored_model)

    def get_position(self, request: GetPositionRequest) -> PositionResponse:
        """Retrieve current state of the board."""
        position_model = self._fetch_position(request.position_id)
        return self._create_position_response(request.position_id, position_model)

    def make_move(self, request: MoveRequest) -> PositionResponse:
        """Make a move attempt. Raises IllegalMoveError if the board refuses it."""

        # Retrieve persisted PositionModel from repository, and rebuild the board (with its history)
        stored_model = self._fetch_position(request.position_id)
        board = BoardState.from_model(stored_model)

        move = board.create_move(
            Coordinate.from_text(request.from_square),
            Coordinate.from_text(request.to_square),
        )
        if not board.execute_move(move):
            logger.warning(
                "Rejected move %s on position %s", move.to_uci(), request.position_id
            )
            raise IllegalMoveError(
                f"Move not allowed: {request.from_square}{request.to_square}"
            )

        after_move = board.to_model()
        self.repo.update_position(request.position_id, after_move)

        logger.info("Position %s: %s", request.position_id, move.to_notation())
        return self._create_position_response(request.position_id, after_move)

    def undo_move(self, request: UndoMoveRequest) -> PositionResponse:
        """Take back the last move."""

        stored_model = self._fetch_position(request.position_id)
        board = BoardState.from_model(stored_model)
        if not board.undo_move():
            raise PositionStateError(
                f"No moves to undo for position {request.position_id}."
            )

        after_undo = board.to_model()
        self.repo.update_position(request.position_id, after_undo)

        logger.info("Position %s: undid last move", request.position_id)
        return self._create_position_response(request.position_id, after_undo)

    def delete_position(self, request: DeletePositionRequest) -> None:
        """Handle a request to delete a position record."""
        self.repo.delete_position(request.position_id)
        logger.info("Deleted position %s", request.position_id)

    # -- Internal helpers --
    def _create_position_response(
        self, position_id: UUID, model: PositionModel
    ) -> PositionResponse:
        """Convert info in PositionModel to a PositionResponse (for position with given ID.)"""
        return PositionResponse(
            position_id=position_id,
            fen=model.current_fen,
            starting_fen=model.starting_fen,
            white_to_move=model.current_fen.split(" ")[1] == "w",
            move_history=model.move_notation,
            game_state=game_state.game_state_string(model.game_state),
        )

    def _fetch_position(self, position_id: UUID) -> PositionModel:
        """Attempt to find the position in the repository and raise error if it fails."""
        position_model = self.repo.get_position(position_id)
        if position_model is None:
            raise RepositoryError(f"Position with {position_id=} not found.")
        return position_model


def create_board_service(db: Session, settings: Settings) -> BoardService:
    """Wire the service to a SQL backed repository using the given session"""
    return BoardService(SQLPositionRepository(db), default_fen=settings.default_fen)


@contextmanager
def open_board_service(settings: Optional[Settings] = None) -> Iterator[BoardService]:
    """
    Entry point for running the service outside of tests.

    Settings are read from the CHESSBASE_* environment variables unless given. Logging is configured,
    the database tables are created if needed, and the service is bound to one session that is closed on exit.
    """
    settings = settings if settings is not None else Settings.from_env()
    configure_logging(settings)

    sessions = get_db(create_session_factory(settings))
    db = next(sessions)
    try:
        yield create_board_service(db, settings)
    finally:
        sessions.close()
