"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the service layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field


@dataclass
class PositionModel:
    """Transport-safe representation of a board used between Service, DB, and board layers."""

    starting_fen: str
    current_fen: str
    moves_uci: list[str] = field(default_factory=list)
    move_notation: list[str] = field(default_factory=list)
    game_state: int = 0
