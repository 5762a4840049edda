"""Grid positions and per-cell state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Coordinate:
    """Immutable board coordinate."""

    row: int
    col: int


class CellState(Enum):
    """What a cell shows, derived from its ship and hit flags."""

    EMPTY = "empty"
    SHIP = "ship"
    MISS = "miss"
    HIT = "hit"


@dataclass
class Cell:
    """One grid position on a board."""

    coordinate: Coordinate
    occupied: bool = field(default=False)
    hit: bool = field(default=False)

    def __setattr__(self, name: str, value: object) -> None:
        if name == "coordinate" and "coordinate" in self.__dict__:
            raise AttributeError("A cell's coordinate is fixed once created.")
        super().__setattr__(name, value)

    @property
    def row(self) -> int:
        return self.coordinate.row

    @property
    def col(self) -> int:
        return self.coordinate.col

    def mark_hit(self) -> None:
        self.hit = True

    def set_occupied(self, occupied: bool = True) -> None:
        self.occupied = occupied

    def state(self) -> CellState:
        if self.hit:
            return CellState.HIT if self.occupied else CellState.MISS
        return CellState.SHIP if self.occupied else CellState.EMPTY
