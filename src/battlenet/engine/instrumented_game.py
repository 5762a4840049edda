"""Game subclass that reports spans, metrics and logs for a whole match."""

from __future__ import annotations

import time

from battlenet.engine.game import Game, GamePhase, ShotOutcome, ShotResult
from battlenet.telemetry import get_logger, get_tracer, record_game_metric


class InstrumentedGame(Game):
    """Wraps Game with tracing, metrics, and logging."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._logger = get_logger("battlenet.engine")
        self._tracer = get_tracer("battlenet.engine")
        self._started_at: float | None = None
        self._shots_fired = 0

    def start_game(self) -> None:
        with self._tracer.start_as_current_span("battlenet.engine.start_game") as span:
            span.set_attribute("game.id", self.game_id)
            was_setup = self.state is GamePhase.SETUP
            super().start_game()
            if was_setup and self.state is GamePhase.PLAYING:
                self._started_at = time.perf_counter()
                span.set_attribute("player1_ships", self.player1.ships_count)
                span.set_attribute("player2_ships", self.player2.ships_count)
                record_game_metric("battlenet_games_started_total", 1)
                self._logger.info("Game %s started", self.game_id)

    def shoot(self, row: int, col: int) -> ShotResult:
        with self._tracer.start_as_current_span("battlenet.engine.shoot") as span:
            shooter = self.current_player.name
            span.set_attribute("game.id", self.game_id)
            span.set_attribute("player", shooter)
            span.set_attribute("coord.row", row)
            span.set_attribute("coord.col", col)

            result = super().shoot(row, col)

            span.set_attribute("shot_outcome", result.outcome.name)
            span.set_attribute("sunk", result.sunk_ship is not None)
            if result.outcome is ShotOutcome.NOT_READY:
                record_game_metric(
                    "battlenet_game_rejected_shots_total", 1, {"reason": "not_ready"}
                )
                return result

            self._shots_fired += 1
            record_game_metric("battlenet_shots_total", 1, {"player": shooter})
            record_game_metric(
                "battlenet_shots_by_result_total",
                1,
                {"player": shooter, "result": "hit" if result.hit else "miss"},
            )
            self._logger.info(
                "shoot game=%s player=%s coord=(%d,%d) outcome=%s",
                self.game_id,
                shooter,
                row,
                col,
                result.outcome.name,
            )

            if result.game_over:
                span.set_attribute("winner", result.winner_name or "unknown")
                self._finish_game()
            return result

    def _finish_game(self) -> None:
        duration = (time.perf_counter() - self._started_at) if self._started_at else 0.0
        winner = self.winner.name if self.winner else "unknown"

        record_game_metric("battlenet_game_completed_total", 1, {"winner": winner})
        record_game_metric("battlenet_game_duration_seconds", duration, {"winner": winner})

        with self._tracer.start_as_current_span("battlenet.engine.game_complete") as span:
            span.set_attribute("game.id", self.game_id)
            span.set_attribute("winner", winner)
            span.set_attribute("shots", self._shots_fired)
            span.set_attribute("duration_ms", duration * 1000)

        self._logger.info(
            "Game %s finished. Winner=%s shots=%d duration_s=%.3f",
            self.game_id,
            winner,
            self._shots_fired,
            duration,
        )
