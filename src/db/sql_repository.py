"""Saved positions in a single SQL table (`positions`), one row per position, moves kept as JSON lists."""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import PositionModel
from src.db.schema import DBPosition


class SQLPositionRepository:
    """PositionRepository on an SQLAlchemy session. Every write is committed straight away."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_position(self, position_id: UUID) -> PositionModel | None:
        """Get position by ID, if record exists."""
        position_db = self._fetch_position(position_id)
        if position_db:
            return self._to_model(position_db)
        return None

    def create_position(self, position: PositionModel) -> tuple[PositionModel, UUID]:
        """Store new position and return the stored data + newly created ID."""

        new_id = uuid4()
        position_db = DBPosition(
            id=new_id,
            starting_fen=position.starting_fen,
            current_fen=position.current_fen,
            moves_uci=position.moves_uci,
            move_notation=position.move_notation,
            game_state=position.game_state,
        )
        self.db.add(position_db)
        self.db.commit()
        self.db.refresh(position_db)
        return self._to_model(position_db), new_id

    def update_position(
        self, position_id: UUID, position: PositionModel
    ) -> PositionModel | None:
        """Overwrite the record with the position after a move or an undo."""
        position_db = self._fetch_position(position_id)
        if not position_db:
            return None
        position_db.starting_fen = position.starting_fen
        position_db.current_fen = position.current_fen
        position_db.moves_uci = position.moves_uci
        position_db.move_notation = position.move_notation
        position_db.game_state = position.game_state
        self.db.commit()
        self.db.refresh(position_db)
        return self._to_model(position_db)

    def delete_position(self, position_id: UUID) -> PositionModel | None:
        """Remove a position's record."""
        position_db = self._fetch_position(position_id)
        if not position_db:
            return None
        position_model = self._to_model(position_db)
        self.db.delete(position_db)
        self.db.commit()
        return position_model

    def _fetch_position(self, position_id: UUID) -> DBPosition | None:
        query = select(DBPosition).where(DBPosition.id == position_id)
        return self.db.scalar(query)

    def _to_model(self, position_db: DBPosition) -> PositionModel:
        """Row to PositionModel. The move lists are copied so callers cannot mutate the JSON columns in place."""
        return PositionModel(
            starting_fen=position_db.starting_fen,
            current_fen=position_db.current_fen,
            moves_uci=list(position_db.moves_uci),
            move_notation=list(position_db.move_notation),
            game_state=position_db.game_state,
        )
