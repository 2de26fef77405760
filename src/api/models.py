"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from src.board.coordinate import FILE_NAMES, RANK_NAMES
from src.board.fen import Puzzle
from src.core.exceptions import InvalidRequestError


# --- REQUEST MODELS ---
class CreatePositionRequest(BaseModel):
    """Start from a FEN string, or from one of the preselected puzzles. Neither means the standard starting position."""

    fen: Optional[str] = None
    puzzle: Optional[Puzzle] = None

    @field_validator("fen")
    @classmethod
    def validate_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        if not value.strip():
            raise InvalidRequestError("FEN string cannot be empty.")
        return value

    @model_validator(mode="after")
    def validate_single_source(self) -> Self:
        if self.fen is not None and self.puzzle is not None:
            raise InvalidRequestError("Supply either a FEN string or a puzzle, not both.")
        return self


class GetPositionRequest(BaseModel):
    position_id: UUID


class MoveRequest(BaseModel):
    position_id: UUID
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        def _is_square_name(value: str) -> bool:
            return len(value) == 2 and value[0] in FILE_NAMES and value[1] in RANK_NAMES

        if not _is_square_name(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value


class UndoMoveRequest(BaseModel):
    position_id: UUID


class DeletePositionRequest(BaseModel):
    position_id: UUID


# --- RESPONSE MODELS ---
class PositionResponse(BaseModel):
    position_id: UUID
    fen: str
    starting_fen: str
    white_to_move: bool
    move_history: list[str]
    game_state: str
