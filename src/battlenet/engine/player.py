"""A participant and the board they defend."""

from __future__ import annotations

from dataclasses import dataclass, field

from .board import Board
from .cell import Coordinate
from .ship import FLEET_SIZE, Orientation, Ship, ShipType


@dataclass(eq=False)
class Player:
    """Identity, readiness flag and owned board of one participant."""

    name: str
    id: str | None = None
    ready: bool = False
    board: Board = field(init=False)

    def __post_init__(self) -> None:
        self.board = Board(owner=self.name)

    def place_ship(self, ship: Ship) -> bool:
        return self.board.place_ship(ship)

    def place(
        self, ship_type: ShipType | str, row: int, col: int, horizontal: bool = True
    ) -> bool:
        """Place a ship of ``ship_type`` from ``(row, col)`` in one direction.

        A string type is resolved with :meth:`ShipType.from_name` and may
        raise :class:`~battlenet.engine.errors.UnknownShipType`.
        """
        resolved = ShipType.from_name(ship_type)
        ship = Ship.from_origin(resolved, Coordinate(row, col), Orientation.from_flag(horizontal))
        return self.place_ship(ship)

    @property
    def ships_count(self) -> int:
        return len(self.board.ships)

    def all_ships_placed(self) -> bool:
        # Count only; the types of the five ships are not checked.
        return self.ships_count == FLEET_SIZE
