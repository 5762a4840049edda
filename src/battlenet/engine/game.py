"""Two-player game controller: turn order, phases and win detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from battlenet.telemetry import get_meter, get_tracer

from .board import BoardSnapshot
from .cell import Coordinate
from .player import Player
from .ship import ShipType

logger = logging.getLogger(__name__)
tracer = get_tracer("battlenet.engine.game")
meter = get_meter("battlenet.engine.game")

MOVE_COUNTER = meter.create_counter(
    "battlenet_engine_moves",
    unit="1",
    description="Number of shots fired through Game.shoot",
)


class GamePhase(Enum):
    """Lifecycle of a match. Phases only ever move forward."""

    SETUP = "SETUP"
    PLAYING = "PLAYING"
    FINISHED = "FINISHED"


class ShotOutcome(Enum):
    MISS = "miss"
    HIT = "hit"
    GAME_OVER = "game_over"
    NOT_READY = "not_ready"


@dataclass(frozen=True)
class ShotResult:
    """What happened when a shot was fired."""

    outcome: ShotOutcome
    message: str
    game_over: bool = False
    winner_name: str | None = None
    sunk_ship: ShipType | None = None

    @property
    def hit(self) -> bool:
        return self.outcome in (ShotOutcome.HIT, ShotOutcome.GAME_OVER)


@dataclass(frozen=True)
class PlayerSnapshot:
    id: str | None
    name: str
    ready: bool
    ships_placed: bool
    board: BoardSnapshot


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of the current game."""

    game_id: str
    phase: GamePhase
    player1_turn: bool
    current_player: str
    winner: str | None
    players: tuple[PlayerSnapshot, PlayerSnapshot]


class Game:
    """Coordinates play between two players' boards.

    ``player1_turn`` is the only turn state; :attr:`current_player` and
    :attr:`opponent` are derived from it. A hit lets the shooter fire
    again, a miss passes the turn.
    """

    def __init__(self, game_id: str, player1_name: str, player2_name: str) -> None:
        self.game_id = game_id
        self.player1 = Player(player1_name, id="player1")
        self.player2 = Player(player2_name, id="player2")
        self.player1_turn: bool = True
        self.state: GamePhase = GamePhase.SETUP
        self.winner: Player | None = None

    @property
    def players(self) -> tuple[Player, Player]:
        return self.player1, self.player2

    @property
    def current_player(self) -> Player:
        return self.player1 if self.player1_turn else self.player2

    @property
    def opponent(self) -> Player:
        return self.player2 if self.player1_turn else self.player1

    def player(self, number: int) -> Player:
        """Return player 1 or 2."""
        if number == 1:
            return self.player1
        if number == 2:
            return self.player2
        raise ValueError(f"Player number must be 1 or 2, got {number!r}.")

    def start_game(self) -> None:
        """Move to PLAYING. Fleet completeness is the caller's concern."""
        if self.state is GamePhase.FINISHED:
            logger.warning("start_ignored_game_finished", extra={"game_id": self.game_id})
            return
        self.state = GamePhase.PLAYING
        logger.info(
            "game_started",
            extra={"game_id": self.game_id, "current_player": self.current_player.name},
        )

    def is_game_over(self) -> bool:
        return self.state is GamePhase.FINISHED

    def shoot(self, row: int, col: int) -> ShotResult:
        """Fire the current player's shot at the opponent's board."""
        with tracer.start_as_current_span("game.shoot") as span:
            span.set_attribute("game.id", self.game_id)
            span.set_attribute("row", row)
            span.set_attribute("col", col)
            if self.state is not GamePhase.PLAYING:
                logger.warning(
                    "shot_rejected_game_not_playing",
                    extra={"game_id": self.game_id, "phase": self.state.value},
                )
                return ShotResult(ShotOutcome.NOT_READY, "Game not ready!")

            shooter = self.current_player
            target = self.opponent
            span.set_attribute("player", shooter.name)
            hit = target.board.shoot(row, col)

            if not hit:
                self.player1_turn = not self.player1_turn
                span.set_attribute("next_player", self.current_player.name)
                MOVE_COUNTER.add(1, attributes={"result": "miss", "game_id": self.game_id})
                return ShotResult(ShotOutcome.MISS, "Miss!")

            ship = target.board.ship_at(Coordinate(row, col))
            sunk = ship.ship_type if ship is not None and ship.is_sunk(target.board) else None

            if target.board.all_ships_sunk():
                self.state = GamePhase.FINISHED
                self.winner = shooter
                span.set_attribute("game.winner", shooter.name)
                MOVE_COUNTER.add(1, attributes={"result": "game_over", "game_id": self.game_id})
                logger.info(
                    "game_finished", extra={"game_id": self.game_id, "winner": shooter.name}
                )
                return ShotResult(
                    ShotOutcome.GAME_OVER,
                    f"Hit! Game Over! Winner: {shooter.name}",
                    game_over=True,
                    winner_name=shooter.name,
                    sunk_ship=sunk,
                )

            MOVE_COUNTER.add(1, attributes={"result": "hit", "game_id": self.game_id})
            return ShotResult(ShotOutcome.HIT, "Hit!", sunk_ship=sunk)

    def get_state(self) -> GameState:
        """Return an immutable view of the current match."""
        players = tuple(
            PlayerSnapshot(
                id=player.id,
                name=player.name,
                ready=player.ready,
                ships_placed=player.all_ships_placed(),
                board=player.board.snapshot(),
            )
            for player in self.players
        )
        return GameState(
            game_id=self.game_id,
            phase=self.state,
            player1_turn=self.player1_turn,
            current_player=self.current_player.name,
            winner=self.winner.name if self.winner else None,
            players=players,  # type: ignore[arg-type]
        )
