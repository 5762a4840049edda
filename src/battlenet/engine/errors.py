"""Exceptions raised by the battlenet engine."""

from __future__ import annotations


class BattlenetError(Exception):
    """Base class for engine errors."""


class UnknownShipType(BattlenetError, ValueError):
    """A ship type name does not match any known class."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown ship type: {name!r}")
        self.name = name


class InvalidShipGeometry(BattlenetError, ValueError):
    """A ship's cells are inconsistent with its type."""
