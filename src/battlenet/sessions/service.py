"""Request/response operations over the game registry.

Every call returns a JSON-ready dict. Invalid requests and unknown games
come back as ``{"success": False, "message": ...}`` rather than raising.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from battlenet.engine.cell import CellState
from battlenet.engine.errors import UnknownShipType
from battlenet.engine.game import Game, GamePhase, ShotOutcome
from battlenet.engine.player import Player
from battlenet.engine.ship import ShipType

from .registry import GameNotFound, GameRegistry

logger = logging.getLogger(__name__)

Response = dict[str, Any]


class PlaceShipRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player: int
    ship_type: str = Field(alias="shipType")
    x: int
    y: int
    horizontal: bool = True


class ShotRequest(BaseModel):
    x: int
    y: int


def _rejected(message: str, **extra: Any) -> Response:
    return {"success": False, "message": message, **extra}


def _validation_message(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        where = ".".join(str(part) for part in error["loc"]) or "request"
        problems.append(f"{where}: {error['msg']}")
    return "Invalid request: " + "; ".join(problems)


def _known_game(method: Callable[..., Response]) -> Callable[..., Response]:
    """Turn a missing game id into a rejected response."""

    @functools.wraps(method)
    def wrapper(self: GameService, game_id: str, *args: Any, **kwargs: Any) -> Response:
        try:
            return method(self, game_id, *args, **kwargs)
        except GameNotFound:
            logger.warning("game_not_found", extra={"game_id": game_id})
            return _rejected("Game not found")

    return wrapper


def player_info(player: Player) -> Response:
    return {
        "id": player.id,
        "name": player.name,
        "ready": player.ready,
        "shipsPlaced": player.all_ships_placed(),
        "shipsCount": player.ships_count,
    }


def game_summary(game: Game) -> Response:
    return {
        "gameId": game.game_id,
        "state": game.state.value,
        "player1": player_info(game.player1),
        "player2": player_info(game.player2),
        "currentTurn": game.current_player.name,
        "currentPlayerId": game.current_player.id,
        "isGameOver": game.is_game_over(),
        "winner": game.winner.name if game.winner else None,
    }


class GameService:
    """The operations a front end needs to run games held in a registry."""

    def __init__(self, registry: GameRegistry | None = None) -> None:
        self.registry = registry if registry is not None else GameRegistry()

    def create_game(
        self, player1_name: str | None = None, player2_name: str | None = None
    ) -> Response:
        self.registry.evict_expired()
        game = self.registry.create(player1_name, player2_name)
        with self.registry.session(game.game_id) as game:
            return {
                "success": True,
                "gameId": game.game_id,
                "message": "Game created successfully",
                "game": game_summary(game),
            }

    @_known_game
    def game_info(self, game_id: str) -> Response:
        with self.registry.session(game_id) as game:
            return {"success": True, **game_summary(game)}

    @_known_game
    def place_ship(self, game_id: str, request: Mapping[str, Any]) -> Response:
        try:
            parsed = PlaceShipRequest.model_validate(request)
        except ValidationError as exc:
            return _rejected(_validation_message(exc))

        with self.registry.session(game_id) as game:
            if game.state is not GamePhase.SETUP:
                return _rejected("Ships can only be placed before the game starts")
            try:
                player = game.player(parsed.player)
            except ValueError:
                return _rejected(f"Invalid player number: {parsed.player}")
            try:
                ship_type = ShipType.from_name(parsed.ship_type)
            except UnknownShipType:
                return _rejected(f"Invalid ship type: {parsed.ship_type}")

            placed = player.place(ship_type, parsed.x, parsed.y, parsed.horizontal)
            if not placed:
                return _rejected(
                    "Invalid placement: Position occupied or out of bounds",
                    reason=(
                        "The position is either already occupied by another ship "
                        "or goes outside the board boundaries"
                    ),
                )
            return {
                "success": True,
                "message": "Ship placed successfully",
                "shipType": ship_type.name,
                "shipDisplayName": ship_type.label,
                "position": {"x": parsed.x, "y": parsed.y, "horizontal": parsed.horizontal},
                "shipsPlaced": player.ships_count,
                "allShipsPlaced": player.all_ships_placed(),
            }

    @_known_game
    def set_ready(self, game_id: str, player: int, ready: bool = True) -> Response:
        with self.registry.session(game_id) as game:
            try:
                target = game.player(player)
            except ValueError:
                return _rejected(f"Invalid player number: {player}")
            target.ready = ready
            return {"success": True, "player": player_info(target)}

    @_known_game
    def start_game(self, game_id: str) -> Response:
        with self.registry.session(game_id) as game:
            if game.is_game_over():
                return _rejected("Game is already finished", state=game.state.value)
            missing = [p.name for p in game.players if not p.all_ships_placed()]
            if missing:
                return _rejected(
                    "Game not ready: all ships must be placed before starting",
                    waitingFor=missing,
                    state=game.state.value,
                )
            for player in game.players:
                player.ready = True
            game.start_game()
            return {
                "success": True,
                "message": "Game started",
                "state": game.state.value,
                "currentTurn": game.current_player.name,
                "currentPlayerId": game.current_player.id,
            }

    @_known_game
    def shoot(self, game_id: str, request: Mapping[str, Any]) -> Response:
        try:
            parsed = ShotRequest.model_validate(request)
        except ValidationError as exc:
            return _rejected(_validation_message(exc))

        with self.registry.session(game_id) as game:
            shooter = game.current_player.name
            shooter_id = game.current_player.id
            result = game.shoot(parsed.x, parsed.y)
            return {
                "success": result.outcome is not ShotOutcome.NOT_READY,
                "shooter": shooter,
                "shooterId": shooter_id,
                "outcome": result.outcome.value,
                "message": result.message,
                "hit": result.hit,
                "sunkShip": result.sunk_ship.name if result.sunk_ship else None,
                "gameOver": result.game_over,
                "winner": result.winner_name,
                "currentTurn": game.current_player.name,
                "currentPlayerId": game.current_player.id,
            }

    @_known_game
    def board_view(self, game_id: str, player: int, reveal_ships: bool = True) -> Response:
        """Per-cell states of ``player``'s board, hiding intact ships if asked."""
        with self.registry.session(game_id) as game:
            try:
                owner = game.player(player)
            except ValueError:
                return _rejected(f"Invalid player number: {player}")
            snapshot = owner.board.snapshot()

            def shown(state: CellState) -> str:
                if state is CellState.SHIP and not reveal_ships:
                    return CellState.EMPTY.value
                return state.value

            ships = [
                {"type": ship.name, "label": ship.label, "sunk": ship.sunk, "hits": ship.hits}
                for ship in snapshot.ships
                if reveal_ships or ship.sunk
            ]
            return {
                "success": True,
                "player": owner.name,
                "size": snapshot.size,
                "cells": [[shown(state) for state in row] for row in snapshot.cells],
                "ships": ships,
                "shipsSunk": sum(1 for ship in snapshot.ships if ship.sunk),
            }
