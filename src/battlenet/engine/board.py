"""Single-player board: the cell grid and the ships placed on it."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from battlenet.telemetry import get_meter, get_tracer

from .cell import Cell, CellState, Coordinate
from .ship import Orientation, Ship, ShipType

logger = logging.getLogger(__name__)
tracer = get_tracer("battlenet.engine.board")
meter = get_meter("battlenet.engine.board")

BOARD_SIZE = 10
MAX_PLACEMENT_ATTEMPTS = 1000

PLACEMENT_COUNTER = meter.create_counter(
    "battlenet_engine_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)

SHOT_COUNTER = meter.create_counter(
    "battlenet_engine_shots",
    unit="1",
    description="Shots received by a board",
)


@dataclass(frozen=True)
class ShipSnapshot:
    """Read-only view of one placed ship."""

    name: str
    label: str | None
    cells: tuple[Coordinate, ...]
    hits: int
    sunk: bool


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only view of a board for status display."""

    size: int
    cells: tuple[tuple[CellState, ...], ...]
    ships: tuple[ShipSnapshot, ...]

    def state_at(self, coord: Coordinate) -> CellState:
        return self.cells[coord.row][coord.col]


@dataclass
class Board:
    """A player's square grid and fleet.

    The board owns every :class:`Cell`. Ships only hold coordinates into
    the grid, so all occupancy and hit state lives here.
    """

    size: int = BOARD_SIZE
    owner: str = "unknown"
    grid: list[list[Cell]] = field(init=False, repr=False)
    ships: list[Ship] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError("Board size must be positive.")
        self.grid = [
            [Cell(Coordinate(row, col)) for col in range(self.size)]
            for row in range(self.size)
        ]

    def is_valid_coordinate(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies inside the board boundaries."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def get_cell(self, row: int, col: int) -> Cell | None:
        """Return the cell at ``(row, col)``, or None when off the board."""
        if 0 <= row < self.size and 0 <= col < self.size:
            return self.grid[row][col]
        return None

    def can_place_ship(self, ship: Ship) -> bool:
        """Whether every cell of ``ship`` is on the board and free."""
        for coord in ship.cells:
            if not self.is_valid_coordinate(coord):
                return False
            if self.grid[coord.row][coord.col].occupied:
                return False
        return True

    def place_ship(self, ship: Ship) -> bool:
        """Add ship to the board if placement is valid.

        Placement is all-or-nothing: a rejected ship leaves the grid and
        the fleet untouched.
        """
        with tracer.start_as_current_span("board.place_ship") as span:
            first = ship.cells[0]
            span.set_attribute("ship.type", ship.name)
            span.set_attribute("ship.length", ship.size)
            span.set_attribute("ship.start.row", first.row)
            span.set_attribute("ship.start.col", first.col)
            span.set_attribute("board.owner", self.owner)
            context = {
                "owner": self.owner,
                "ship_type": ship.name,
                "orientation": ship.orientation.name,
                "row": first.row,
                "col": first.col,
            }
            if not self.can_place_ship(ship):
                PLACEMENT_COUNTER.add(1, attributes={"result": "failed", "owner": self.owner})
                logger.warning("ship_placement_failed", extra=context)
                return False

            self.ships.append(ship)
            for coord in ship.cells:
                self.grid[coord.row][coord.col].set_occupied(True)
            PLACEMENT_COUNTER.add(1, attributes={"result": "success", "owner": self.owner})
            logger.info("ship_placed", extra=context)
            return True

    def shoot(self, row: int, col: int) -> bool:
        """Fire at ``(row, col)``; True on a hit.

        Off-board and already-resolved cells return False without changing
        anything.
        """
        with tracer.start_as_current_span("board.shoot") as span:
            span.set_attribute("shot.row", row)
            span.set_attribute("shot.col", col)
            span.set_attribute("board.owner", self.owner)
            context = {"row": row, "col": col, "owner": self.owner}
            cell = self.get_cell(row, col)
            if cell is None:
                span.set_attribute("shot.outcome", "rejected")
                logger.warning("shot_out_of_bounds", extra=context)
                return False
            if cell.hit:
                span.set_attribute("shot.outcome", "rejected")
                logger.warning("shot_duplicate", extra=context)
                return False

            cell.mark_hit()
            outcome = "hit" if cell.occupied else "miss"
            span.set_attribute("shot.outcome", outcome)
            SHOT_COUNTER.add(1, attributes={"outcome": outcome, "owner": self.owner})
            logger.info("shot_hit" if cell.occupied else "shot_miss", extra=context)
            return cell.occupied

    def ship_at(self, coord: Coordinate) -> Ship | None:
        for ship in self.ships:
            if ship.covers(coord):
                return ship
        return None

    def all_ships_sunk(self) -> bool:
        """Check whether the player has any surviving ships.

        An empty fleet counts as sunk, so only ask once ships are placed.
        """
        return all(ship.is_sunk(self) for ship in self.ships)

    def sunk_ships(self) -> list[Ship]:
        return [ship for ship in self.ships if ship.is_sunk(self)]

    def placed_types(self) -> set[ShipType]:
        return {ship.ship_type for ship in self.ships if ship.ship_type is not None}

    def random_placement(self, rng: random.Random) -> bool:
        """Randomly place one ship of every type not yet on the board.

        Returns False if some ship found no free spot.
        """
        with tracer.start_as_current_span("board.random_placement") as span:
            span.set_attribute("board.owner", self.owner)
            missing = [t for t in ShipType if t not in self.placed_types()]
            for ship_type in missing:
                for attempts in range(1, MAX_PLACEMENT_ATTEMPTS + 1):
                    orientation = rng.choice(list(Orientation))
                    origin = Coordinate(rng.randrange(self.size), rng.randrange(self.size))
                    candidate = Ship.from_origin(ship_type, origin, orientation)
                    if self.can_place_ship(candidate) and self.place_ship(candidate):
                        logger.debug(
                            "random_ship_placed",
                            extra={
                                "ship_type": ship_type.name,
                                "attempts": attempts,
                                "owner": self.owner,
                            },
                        )
                        break
                else:
                    logger.warning(
                        "random_placement_exhausted",
                        extra={"ship_type": ship_type.name, "owner": self.owner},
                    )
                    return False
            return True

    def snapshot(self) -> BoardSnapshot:
        ships = tuple(
            ShipSnapshot(
                name=ship.name,
                label=ship.ship_type.label if ship.ship_type else None,
                cells=ship.cells,
                hits=ship.hit_count(self),
                sunk=ship.is_sunk(self),
            )
            for ship in self.ships
        )
        cells = tuple(tuple(cell.state() for cell in row) for row in self.grid)
        return BoardSnapshot(size=self.size, cells=cells, ships=ships)
