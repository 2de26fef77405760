"""Unit tests for src/services/board_service.py"""

from typing import Generator
from unittest.mock import patch
from uuid import UUID, uuid4

import pytest
from sqlalchemy.orm import Session

from src.api.models import (
    CreatePositionRequest,
    DeletePositionRequest,
    GetPositionRequest,
    MoveRequest,
    PositionResponse,
    UndoMoveRequest,
)
from src.board.fen import MATE_IN_2, MATE_IN_4, NEW_GAME, Puzzle
from src.core.config import Settings
from src.core.exceptions import (
    IllegalMoveError,
    InvalidFENError,
    PositionStateError,
    RepositoryError,
)
from src.core.models import PositionModel
from src.services.board_service import (
    BoardService,
    create_board_service,
    open_board_service,
)


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the PositionRepository using a dictionary of position models."""

    def __init__(self) -> None:
        self._positions: dict[UUID, PositionModel] = {}

    def create_position(self, position: PositionModel) -> tuple[PositionModel, UUID]:
        position_id = uuid4()
        self._positions[position_id] = position
        return position, position_id

    def get_position(self, position_id: UUID) -> PositionModel | None:
        return self._positions.get(position_id)

    def update_position(
        self, position_id: UUID, position: PositionModel
    ) -> PositionModel | None:
        if position_id not in self._positions:
            return None
        self._positions[position_id] = position
        return position

    def delete_position(self, position_id: UUID) -> PositionModel | None:
        return self._positions.pop(position_id, None)

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._positions.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository) -> BoardService:
    return BoardService(mock_repository)


def new_position(service: BoardService, **kwargs) -> PositionResponse:
    return service.create_position(CreatePositionRequest(**kwargs))


def move(service: BoardService, position_id: UUID, uci: str) -> PositionResponse:
    return service.make_move(
        MoveRequest(position_id=position_id, from_square=uci[:2], to_square=uci[2:4])
    )


# --- SERVICE - CREATE POSITION ----
def test_create_default_position(
    service: BoardService, mock_repository: MockRepository
) -> None:
    response = new_position(service)
    assert response.fen == NEW_GAME
    assert response.starting_fen == NEW_GAME
    assert response.white_to_move
    assert response.move_history == []
    assert response.game_state == "00000000001 00000000 00000 0000 1111"

    stored = mock_repository.get_position(response.position_id)
    assert stored is not None
    assert stored.current_fen == NEW_GAME


def test_create_from_fen(service: BoardService) -> None:
    response = new_position(service, fen=MATE_IN_4)
    assert response.fen == MATE_IN_4
    assert response.starting_fen == MATE_IN_4


def test_create_from_puzzle(service: BoardService) -> None:
    response = new_position(service, puzzle=Puzzle.MATE_IN_2)
    assert response.fen == MATE_IN_2


def test_create_with_other_default(mock_repository: MockRepository) -> None:
    service = BoardService(mock_repository, default_fen=MATE_IN_4)
    assert new_position(service).fen == MATE_IN_4


def test_create_from_malformed_fen(
    service: BoardService, mock_repository: MockRepository
) -> None:
    with pytest.raises(InvalidFENError):
        new_position(service, fen="rnbqkbnr/ppppzppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
    assert mock_repository._positions == {}


# --- SERVICE - GET POSITION ----
def test_get_position(service: BoardService) -> None:
    created = new_position(service)
    response = service.get_position(GetPositionRequest(position_id=created.position_id))
    assert response == created


def test_get_unknown_position(service: BoardService) -> None:
    with pytest.raises(RepositoryError):
        service.get_position(GetPositionRequest(position_id=uuid4()))


# --- SERVICE - MAKE MOVE ----
def test_make_moves(service: BoardService, mock_repository: MockRepository) -> None:
    position_id = new_position(service).position_id

    response = move(service, position_id, "e2e4")
    assert response.fen == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
    assert not response.white_to_move
    assert response.move_history == ["e4"]

    move(service, position_id, "d7d5")
    response = move(service, position_id, "e4d5")
    assert response.move_history == ["e4", "d5", "exd5"]
    assert response.starting_fen == NEW_GAME

    stored = mock_repository.get_position(position_id)
    assert stored is not None
    assert stored.moves_uci == ["e2e4", "d7d5", "e4d5"]
    assert stored.current_fen == response.fen


def test_illegal_move(service: BoardService, mock_repository: MockRepository) -> None:
    """Landing on your own piece is refused and nothing is stored"""
    position_id = new_position(service).position_id
    with pytest.raises(IllegalMoveError):
        move(service, position_id, "a1a2")

    stored = mock_repository.get_position(position_id)
    assert stored is not None
    assert stored.current_fen == NEW_GAME
    assert stored.moves_uci == []


def test_move_from_empty_square(service: BoardService) -> None:
    position_id = new_position(service).position_id
    with pytest.raises(IllegalMoveError):
        move(service, position_id, "e4e5")


def test_move_on_unknown_position(service: BoardService) -> None:
    with pytest.raises(RepositoryError):
        move(service, uuid4(), "e2e4")


# --- SERVICE - UNDO ----
def test_undo_move(service: BoardService) -> None:
    position_id = new_position(service).position_id
    move(service, position_id, "e2e4")
    before = move(service, position_id, "d7d5")
    move(service, position_id, "e4d5")

    response = service.undo_move(UndoMoveRequest(position_id=position_id))
    assert response.fen == before.fen
    assert response.move_history == ["e4", "d5"]

    service.undo_move(UndoMoveRequest(position_id=position_id))
    response = service.undo_move(UndoMoveRequest(position_id=position_id))
    assert response.fen == NEW_GAME
    assert response.move_history == []


def test_undo_without_moves(service: BoardService) -> None:
    position_id = new_position(service).position_id
    with pytest.raises(PositionStateError):
        service.undo_move(UndoMoveRequest(position_id=position_id))


# --- SERVICE - DELETE ----
def test_delete_position(service: BoardService, mock_repository: MockRepository) -> None:
    position_id = new_position(service).position_id
    service.delete_position(DeletePositionRequest(position_id=position_id))
    assert mock_repository.get_position(position_id) is None


# --- SERVICE + SQL REPOSITORY ----
def test_with_sql_repository(db_session_repo: Session) -> None:
    service = create_board_service(db_session_repo, Settings(default_fen=MATE_IN_2))
    position_id = new_position(service).position_id

    response = move(service, position_id, "b5b6")
    assert response.move_history == ["Qxb6"]
    assert response.fen == "1rb4r/pkPp3p/1Q1P3n/8/N3Pp2/8/P1P3PP/7K b - - 0 1"

    response = service.get_position(GetPositionRequest(position_id=position_id))
    assert response.move_history == ["Qxb6"]

    response = service.undo_move(UndoMoveRequest(position_id=position_id))
    assert response.fen == MATE_IN_2


def test_open_board_service_from_environment() -> None:
    environ = {
        "CHESSBASE_DATABASE_URL": "sqlite:///:memory:",
        "CHESSBASE_LOG_LEVEL": "debug",
        "CHESSBASE_DEFAULT_FEN": MATE_IN_4,
    }
    with (
        patch.dict("os.environ", environ),
        patch("src.services.board_service.configure_logging") as configure_logging,
    ):
        with open_board_service() as service:
            position_id = new_position(service).position_id
            response = service.get_position(GetPositionRequest(position_id=position_id))
            db = service.repo.db

    assert response.fen == MATE_IN_4
    configure_logging.assert_called_once()
    assert configure_logging.call_args.args[0].log_level == "DEBUG"
    # session is handed back once the block is left
    assert not db.in_transaction()
