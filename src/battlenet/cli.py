"""Hot-seat command-line driver: two people sharing one terminal."""

from __future__ import annotations

import argparse
import logging
import random
from typing import Any, Sequence

from battlenet.engine.cell import CellState, Coordinate
from battlenet.engine.ship import Orientation, ShipType
from battlenet.sessions import GameRegistry, GameService, RegistryConfig
from battlenet.telemetry import init_console_logging, init_telemetry

ROW_LABELS = "ABCDEFGHIJ"

SYMBOLS = {
    CellState.EMPTY.value: ".",
    CellState.SHIP.value: "S",
    CellState.MISS.value: "o",
    CellState.HIT.value: "X",
}


def coordinate_from_input(text: str) -> Coordinate:
    """Parse ``A5`` or ``"0 4"`` style input into a zero-based coordinate."""
    cleaned = text.strip().upper()
    if not cleaned:
        raise ValueError("Empty coordinate.")
    if cleaned[0].isalpha():
        if cleaned[0] not in ROW_LABELS:
            raise ValueError("Row must be between A and J.")
        row = ROW_LABELS.index(cleaned[0])
        try:
            col = int(cleaned[1:]) - 1
        except ValueError as exc:
            raise ValueError("Column must be a number between 1 and 10.") from exc
    else:
        parts = cleaned.split()
        if len(parts) != 2:
            raise ValueError("Use formats like A5 or '3 7'.")
        try:
            row, col = map(int, parts)
        except ValueError as exc:
            raise ValueError("Row and column must be numbers.") from exc
    if row not in range(10) or col not in range(10):
        raise ValueError("Coordinates must be within the 10x10 board.")
    return Coordinate(row, col)


def label(coord: Coordinate) -> str:
    return f"{ROW_LABELS[coord.row]}{coord.col + 1}"


def format_board(view: dict[str, Any]) -> str:
    """Render a ``GameService.board_view`` response as text."""
    size = view["size"]
    header = "    " + " ".join(f"{col + 1:>2}" for col in range(size))
    rows = [header]
    for row, states in enumerate(view["cells"]):
        symbols = " ".join(f"{SYMBOLS[state]:>2}" for state in states)
        rows.append(f"{ROW_LABELS[row]} |{symbols}")
    return "\n".join(rows)


def _prompt_for_coordinate(prompt: str) -> Coordinate:
    while True:
        raw = input(prompt).strip()
        if raw.lower() == "q":
            raise SystemExit("Goodbye!")
        try:
            return coordinate_from_input(raw)
        except ValueError as exc:
            print(f"Invalid input: {exc}")


def _prompt_orientation(ship_type: ShipType) -> Orientation:
    while True:
        raw = (
            input(
                f"Place your {ship_type.name.title()} (length {ship_type.length}). "
                "Orientation [H/V]: "
            )
            .strip()
            .upper()
        )
        if raw in {"H", "HOR", "HORIZONTAL"}:
            return Orientation.HORIZONTAL
        if raw in {"V", "VER", "VERTICAL"}:
            return Orientation.VERTICAL
        print("Please enter H for horizontal or V for vertical.")


def _prompt_yes_no(question: str) -> bool:
    while True:
        raw = input(f"{question} [Y/n]: ").strip().lower()
        if raw in {"", "y", "yes"}:
            return True
        if raw in {"n", "no"}:
            return False
        print("Please answer with 'y' or 'n'.")


def _manual_ship_placement(service: GameService, game_id: str, number: int) -> None:
    for ship_type in ShipType:
        while True:
            print("\nCurrent layout:")
            print(format_board(service.board_view(game_id, number, reveal_ships=True)))
            orientation = _prompt_orientation(ship_type)
            start = _prompt_for_coordinate("Enter starting coordinate (e.g., A1): ")
            response = service.place_ship(
                game_id,
                {
                    "player": number,
                    "shipType": ship_type.name,
                    "x": start.row,
                    "y": start.col,
                    "horizontal": orientation is Orientation.HORIZONTAL,
                },
            )
            if response["success"]:
                break
            print(response["message"])


def _random_ship_placement(
    registry: GameRegistry, game_id: str, number: int, rng: random.Random
) -> None:
    with registry.session(game_id) as game:
        game.player(number).board.random_placement(rng)


def _describe_shot(shooter: str, coord: Coordinate, response: dict[str, Any]) -> str:
    outcome = "hit" if response["hit"] else "miss"
    if response["sunkShip"]:
        outcome = f"sank the opponent's {response['sunkShip'].lower()}!"
    return f"{shooter} fired at {label(coord)}: {outcome}"


def play_game(
    seed: int | None = None,
    auto_place: bool | None = None,
    player1: str | None = None,
    player2: str | None = None,
) -> str | None:
    """Run one game to completion and return the winner's name."""
    print("Welcome to Battlenet!\n")
    rng = random.Random(seed)
    registry = GameRegistry(RegistryConfig.from_env())
    service = GameService(registry)
    created = service.create_game(player1, player2)
    game_id = created["gameId"]

    for number in (1, 2):
        name = created["game"][f"player{number}"]["name"]
        print(f"\n{name}, set up your fleet.")
        manual = not auto_place if auto_place is not None else _prompt_yes_no(
            "Would you like to place your ships manually?"
        )
        if manual:
            _manual_ship_placement(service, game_id, number)
        else:
            _random_ship_placement(registry, game_id, number, rng)
            print("Your ships have been positioned automatically.")

    started = service.start_game(game_id)
    if not started["success"]:
        print(started["message"])
        return None

    info = service.game_info(game_id)
    while not info["isGameOver"]:
        shooter = info["currentTurn"]
        number = 1 if info["currentPlayerId"] == info["player1"]["id"] else 2
        opponent = 2 if number == 1 else 1
        print(f"\n--- {shooter}'s turn ---")
        print("Your Board:")
        print(format_board(service.board_view(game_id, number, reveal_ships=True)))
        enemy = service.board_view(game_id, opponent, reveal_ships=False)
        print("\nEnemy Waters:")
        print(format_board(enemy))

        while True:
            coord = _prompt_for_coordinate(
                "Enter target coordinate (e.g., A5) or 'q' to quit: "
            )
            if enemy["cells"][coord.row][coord.col] == CellState.EMPTY.value:
                break
            print("That cell has already been targeted. Choose another.")
        response = service.shoot(game_id, {"x": coord.row, "y": coord.col})
        print(_describe_shot(shooter, coord, response))
        info = service.game_info(game_id)

    print(f"\nCongratulations {info['winner']}, you won!")
    return info["winner"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Battlenet with two players at one terminal.")
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducibility."
    )
    parser.add_argument(
        "--auto-place",
        action="store_true",
        default=None,
        help="Place both fleets randomly without asking.",
    )
    parser.add_argument("--player1", default=None, help="Name of the first player.")
    parser.add_argument("--player2", default=None, help="Name of the second player.")
    parser.add_argument(
        "--telemetry", action="store_true", help="Enable exporters configured via OTEL_* vars."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show engine logs.")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    init_console_logging(logging.INFO if args.verbose else logging.WARNING)
    if args.telemetry:
        init_telemetry()
    play_game(
        seed=args.seed,
        auto_place=args.auto_place,
        player1=args.player1,
        player2=args.player2,
    )


if __name__ == "__main__":
    main()
