"""Tests for Ship domain logic."""

import pytest

from battlenet.engine.board import Board
from battlenet.engine.cell import Coordinate
from battlenet.engine.errors import InvalidShipGeometry, UnknownShipType
from battlenet.engine.ship import FLEET_SIZE, Orientation, Ship, ShipType


def test_fleet_has_five_distinct_types() -> None:
    assert FLEET_SIZE == 5
    assert [t.length for t in ShipType] == [5, 4, 3, 3, 2]
    assert ShipType.SUBMARINE is not ShipType.CRUISER
    assert ShipType.CARRIER.label == "Portaaviones"


def test_from_name_is_case_insensitive() -> None:
    assert ShipType.from_name(" destroyer ") is ShipType.DESTROYER
    assert ShipType.from_name(ShipType.CARRIER) is ShipType.CARRIER


def test_from_name_rejects_unknown_types() -> None:
    with pytest.raises(UnknownShipType) as excinfo:
        ShipType.from_name("DINGHY")
    assert excinfo.value.name == "DINGHY"


def test_ship_coordinates_horizontal() -> None:
    ship = Ship.from_origin(ShipType.DESTROYER, Coordinate(0, 0), Orientation.HORIZONTAL)
    assert ship.coordinates() == [Coordinate(0, 0), Coordinate(0, 1)]
    assert ship.horizontal


def test_ship_coordinates_vertical() -> None:
    ship = Ship.from_origin(ShipType.CRUISER, Coordinate(3, 3), Orientation.VERTICAL)
    assert ship.coordinates() == [Coordinate(3, 3), Coordinate(4, 3), Coordinate(5, 3)]
    assert not ship.horizontal


def test_length_mismatch_is_rejected() -> None:
    with pytest.raises(InvalidShipGeometry):
        Ship(cells=(Coordinate(0, 0),), ship_type=ShipType.DESTROYER)


def test_empty_and_repeated_cells_are_rejected() -> None:
    with pytest.raises(InvalidShipGeometry):
        Ship(cells=())
    with pytest.raises(InvalidShipGeometry):
        Ship.at([(1, 1), (1, 1)])


def test_untyped_ship_takes_size_from_cells() -> None:
    ship = Ship.at([(4, 4)])
    assert ship.size == 1
    assert ship.ship_type is None
    assert ship.name == "SHIP_1"


def test_hit_count_and_sunk_read_from_board() -> None:
    board = Board()
    ship = Ship.from_origin(ShipType.CRUISER, Coordinate(3, 3), Orientation.VERTICAL)
    assert board.place_ship(ship)
    for idx, coord in enumerate(ship.coordinates(), start=1):
        assert board.shoot(coord.row, coord.col) is True
        assert ship.hit_count(board) == idx
        assert ship.is_sunk(board) is (idx == ship.size)


def test_overlaps() -> None:
    first = Ship.from_origin(ShipType.CRUISER, Coordinate(0, 0), Orientation.HORIZONTAL)
    crossing = Ship.from_origin(ShipType.DESTROYER, Coordinate(0, 1), Orientation.VERTICAL)
    apart = Ship.from_origin(ShipType.DESTROYER, Coordinate(5, 5), Orientation.VERTICAL)
    assert first.overlaps(crossing)
    assert not first.overlaps(apart)
