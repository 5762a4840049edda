"""Ship domain model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable

from .cell import Coordinate
from .errors import InvalidShipGeometry, UnknownShipType

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


class Orientation(Enum):
    """Allowed ship orientations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def from_flag(cls, horizontal: bool) -> Orientation:
        return cls.HORIZONTAL if horizontal else cls.VERTICAL


class ShipType(Enum):
    """Ship classes of the canonical fleet with their length and label."""

    CARRIER = (5, "Portaaviones")
    BATTLESHIP = (4, "Acorazado")
    CRUISER = (3, "Crucero")
    SUBMARINE = (3, "Submarino")
    DESTROYER = (2, "Destructor")

    def __init__(self, length: int, label: str) -> None:
        self.length = length
        self.label = label

    @classmethod
    def from_name(cls, name: str) -> ShipType:
        """Look a type up by name, ignoring case and surrounding spaces."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise UnknownShipType(str(name))
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise UnknownShipType(name) from None


FLEET_SIZE = len(ShipType)


def cells_from_origin(length: int, origin: Coordinate, orientation: Orientation) -> list[Coordinate]:
    """Coordinates covered by a ship of ``length`` starting at ``origin``.

    Horizontal ships grow along the column axis, vertical ships along the row axis.
    """
    if orientation is Orientation.HORIZONTAL:
        return [Coordinate(origin.row, origin.col + offset) for offset in range(length)]
    return [Coordinate(origin.row + offset, origin.col) for offset in range(length)]


@dataclass
class Ship:
    """A ship placed (or about to be placed) on a board.

    The ship does not own any cells. It records the coordinates it covers
    and reads hit state from whichever board it was placed on.
    """

    cells: tuple[Coordinate, ...]
    ship_type: ShipType | None = None
    orientation: Orientation = Orientation.HORIZONTAL
    _coordinate_set: frozenset[Coordinate] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.cells = tuple(self.cells)
        if not self.cells:
            raise InvalidShipGeometry("A ship must cover at least one cell.")
        if self.ship_type is not None and len(self.cells) != self.ship_type.length:
            raise InvalidShipGeometry(
                f"{self.ship_type.name} needs {self.ship_type.length} cells, "
                f"got {len(self.cells)}."
            )
        self._coordinate_set = frozenset(self.cells)
        if len(self._coordinate_set) != len(self.cells):
            raise InvalidShipGeometry("A ship cannot cover the same cell twice.")

    @classmethod
    def from_origin(
        cls, ship_type: ShipType, origin: Coordinate, orientation: Orientation
    ) -> Ship:
        """Build a ship of ``ship_type`` extending from ``origin``."""
        return cls(
            cells=tuple(cells_from_origin(ship_type.length, origin, orientation)),
            ship_type=ship_type,
            orientation=orientation,
        )

    @classmethod
    def at(cls, coords: Iterable[tuple[int, int]]) -> Ship:
        """Build an untyped ship from raw ``(row, col)`` pairs."""
        return cls(cells=tuple(Coordinate(row, col) for row, col in coords))

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL

    @property
    def name(self) -> str:
        return self.ship_type.name if self.ship_type else f"SHIP_{self.size}"

    def coordinates(self) -> list[Coordinate]:
        """Return the ordered list of coordinates occupied by this ship."""
        return list(self.cells)

    def covers(self, coord: Coordinate) -> bool:
        return coord in self._coordinate_set

    def overlaps(self, other: Ship) -> bool:
        """Return True if any coordinate overlaps with another ship."""
        return bool(self._coordinate_set & other._coordinate_set)

    def hit_count(self, board: Board) -> int:
        """Number of this ship's cells that have been hit on ``board``."""
        count = 0
        for coord in self.cells:
            cell = board.get_cell(coord.row, coord.col)
            if cell is not None and cell.hit:
                count += 1
        return count

    def is_sunk(self, board: Board) -> bool:
        """Determine whether every cell of the ship has been hit on ``board``."""
        return self.hit_count(board) == self.size
