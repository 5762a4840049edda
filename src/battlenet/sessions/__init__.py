"""Game sessions: the registry of live games and the operations over it."""

from .config import RegistryConfig
from .registry import DuplicateGame, GameNotFound, GameRegistry
from .service import GameService, PlaceShipRequest, ShotRequest

__all__ = [
    "DuplicateGame",
    "GameNotFound",
    "GameRegistry",
    "GameService",
    "PlaceShipRequest",
    "RegistryConfig",
    "ShotRequest",
]
