"""Process-wide table of running games."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator

from battlenet.engine.errors import BattlenetError
from battlenet.engine.game import Game
from battlenet.engine.instrumented_game import InstrumentedGame
from battlenet.telemetry import get_meter

from .config import RegistryConfig

logger = logging.getLogger(__name__)
meter = get_meter("battlenet.sessions.registry")

SESSION_COUNTER = meter.create_up_down_counter(
    "battlenet_sessions_active",
    unit="1",
    description="Games currently held by the registry",
)


class GameNotFound(BattlenetError, KeyError):
    """No game is registered under the requested id."""

    def __init__(self, game_id: str) -> None:
        super().__init__(f"Game not found: {game_id}")
        self.game_id = game_id

    def __str__(self) -> str:
        return self.args[0]


class DuplicateGame(BattlenetError):
    """A game with the requested id already exists."""


@dataclass
class _Entry:
    game: Game
    lock: threading.RLock = field(default_factory=threading.RLock)
    last_access: float = 0.0


class GameRegistry:
    """Maps game ids to games and serializes access per game.

    The registry lock only guards the table. Each game carries its own
    lock, held for the duration of :meth:`session`.
    """

    def __init__(
        self,
        config: RegistryConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        game_factory: Callable[[str, str, str], Game] = InstrumentedGame,
    ) -> None:
        self.config = config or RegistryConfig()
        self._clock = clock
        self._game_factory = game_factory
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, game_id: object) -> bool:
        with self._lock:
            return game_id in self._entries

    def game_ids(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def create(
        self,
        player1_name: str | None = None,
        player2_name: str | None = None,
        game_id: str | None = None,
    ) -> Game:
        """Register and return a new game in SETUP."""
        game_id = game_id or str(uuid.uuid4())
        game = self._game_factory(
            game_id,
            player1_name or self.config.player1_name,
            player2_name or self.config.player2_name,
        )
        with self._lock:
            if game_id in self._entries:
                raise DuplicateGame(f"Game already exists: {game_id}")
            self._entries[game_id] = _Entry(game=game, last_access=self._clock())
        SESSION_COUNTER.add(1)
        logger.info("game_registered", extra={"game_id": game_id})
        return game

    def get(self, game_id: str) -> Game:
        return self._entry(game_id).game

    @contextmanager
    def session(self, game_id: str) -> Iterator[Game]:
        """Hold ``game_id``'s lock while the caller works on the game."""
        entry = self._entry(game_id)
        with entry.lock:
            yield entry.game

    def remove(self, game_id: str) -> Game:
        with self._lock:
            entry = self._entries.pop(game_id, None)
        if entry is None:
            raise GameNotFound(game_id)
        SESSION_COUNTER.add(-1)
        logger.info("game_removed", extra={"game_id": game_id})
        return entry.game

    def evict_expired(self, now: float | None = None) -> list[str]:
        """Drop games idle for longer than the configured TTL."""
        ttl = self.config.session_ttl_seconds
        if ttl is None:
            return []
        now = self._clock() if now is None else now
        with self._lock:
            expired = [
                game_id
                for game_id, entry in self._entries.items()
                if now - entry.last_access > ttl
            ]
            for game_id in expired:
                del self._entries[game_id]
        if expired:
            SESSION_COUNTER.add(-len(expired))
            logger.info("games_evicted", extra={"count": len(expired)})
        return expired

    def _entry(self, game_id: str) -> _Entry:
        with self._lock:
            entry = self._entries.get(game_id)
            if entry is None:
                raise GameNotFound(game_id)
            entry.last_access = self._clock()
            return entry
