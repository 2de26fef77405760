"""
Storage of saved positions.

A saved position is its starting FEN plus the moves played from it (UCI and notation), together with the
current FEN and packed game state as a snapshot. The board is always rebuilt by replaying the moves,
the snapshot only serves readers that do not want to replay.
"""

from typing import Protocol
from uuid import UUID

from src.core.models import PositionModel


class PositionRepository(Protocol):
    """Where saved positions live. Implemented on SQLAlchemy, a dictionary does in tests."""

    def get_position(self, position_id: UUID) -> PositionModel | None:
        """Get position by ID, if record exists."""
        ...

    def create_position(self, position: PositionModel) -> tuple[PositionModel, UUID]:
        """Store new position and return the stored data + newly created ID."""
        ...

    def update_position(
        self, position_id: UUID, position: PositionModel
    ) -> PositionModel | None:
        """Overwrite the record with the position after a move or an undo."""
        ...

    def delete_position(self, position_id: UUID) -> PositionModel | None:
        """Remove a position's record."""
        ...
