"""Tests for the request/response game service."""

import pytest

from battlenet.sessions import GameRegistry, GameService, RegistryConfig

FLEET = [
    ("CARRIER", 0),
    ("BATTLESHIP", 2),
    ("CRUISER", 4),
    ("SUBMARINE", 6),
    ("DESTROYER", 8),
]


@pytest.fixture
def service() -> GameService:
    return GameService(GameRegistry())


@pytest.fixture
def game_id(service: GameService) -> str:
    return service.create_game("Aitzol", "Xanet")["gameId"]


def _place_fleet(service: GameService, game_id: str, player: int) -> None:
    for ship_type, row in FLEET:
        response = service.place_ship(
            game_id, {"player": player, "shipType": ship_type, "x": row, "y": 0, "horizontal": True}
        )
        assert response["success"], response


def test_create_game(service: GameService) -> None:
    response = service.create_game()
    assert response["success"] is True
    assert response["message"] == "Game created successfully"
    game = response["game"]
    assert game["gameId"] == response["gameId"]
    assert game["state"] == "SETUP"
    assert game["player1"]["name"] == "player1"
    assert game["player2"]["shipsPlaced"] is False
    assert game["currentTurn"] == "player1"
    assert game["winner"] is None


def test_unknown_game(service: GameService) -> None:
    for response in (
        service.game_info("nope"),
        service.place_ship("nope", {"player": 1, "shipType": "CARRIER", "x": 0, "y": 0}),
        service.start_game("nope"),
        service.shoot("nope", {"x": 0, "y": 0}),
        service.board_view("nope", 1),
        service.set_ready("nope", 1),
    ):
        assert response == {"success": False, "message": "Game not found"}


def test_place_ship_success(service: GameService, game_id: str) -> None:
    response = service.place_ship(
        game_id, {"player": 1, "shipType": "CARRIER", "x": 0, "y": 0, "horizontal": False}
    )
    assert response["success"] is True
    assert response["shipType"] == "CARRIER"
    assert response["shipDisplayName"] == "Portaaviones"
    assert response["position"] == {"x": 0, "y": 0, "horizontal": False}
    assert response["shipsPlaced"] == 1
    assert response["allShipsPlaced"] is False

    view = service.board_view(game_id, 1)
    assert [view["cells"][row][0] for row in range(5)] == ["ship"] * 5
    assert view["cells"][0][1] == "empty"


def test_place_ship_rejections(service: GameService, game_id: str) -> None:
    bad_type = service.place_ship(game_id, {"player": 1, "shipType": "YACHT", "x": 0, "y": 0})
    assert bad_type == {"success": False, "message": "Invalid ship type: YACHT"}

    bad_player = service.place_ship(
        game_id, {"player": 3, "shipType": "CARRIER", "x": 0, "y": 0}
    )
    assert bad_player["success"] is False
    assert "player" in bad_player["message"].lower()

    off_board = service.place_ship(
        game_id, {"player": 1, "shipType": "CARRIER", "x": 0, "y": 7, "horizontal": True}
    )
    assert off_board["success"] is False
    assert off_board["message"].startswith("Invalid placement")

    malformed = service.place_ship(game_id, {"player": 1, "x": 0})
    assert malformed["success"] is False
    assert malformed["message"].startswith("Invalid request")

    assert service.game_info(game_id)["player1"]["shipsCount"] == 0


def test_start_requires_both_fleets(service: GameService, game_id: str) -> None:
    _place_fleet(service, game_id, 1)
    response = service.start_game(game_id)
    assert response["success"] is False
    assert response["waitingFor"] == ["Xanet"]
    assert service.game_info(game_id)["state"] == "SETUP"

    _place_fleet(service, game_id, 2)
    started = service.start_game(game_id)
    assert started["success"] is True
    info = service.game_info(game_id)
    assert info["state"] == "PLAYING"
    assert info["player1"]["ready"] and info["player2"]["ready"]


def test_shoot_before_start_is_not_ready(service: GameService, game_id: str) -> None:
    response = service.shoot(game_id, {"x": 0, "y": 0})
    assert response["success"] is False
    assert response["outcome"] == "not_ready"
    assert response["message"] == "Game not ready!"


def test_no_placement_after_start(service: GameService, game_id: str) -> None:
    _place_fleet(service, game_id, 1)
    _place_fleet(service, game_id, 2)
    service.start_game(game_id)
    response = service.place_ship(
        game_id, {"player": 1, "shipType": "DESTROYER", "x": 9, "y": 8}
    )
    assert response["success"] is False


def test_full_game_through_service(service: GameService, game_id: str) -> None:
    _place_fleet(service, game_id, 1)
    _place_fleet(service, game_id, 2)
    service.start_game(game_id)

    miss = service.shoot(game_id, {"x": 1, "y": 0})
    assert miss["outcome"] == "miss"
    assert miss["currentTurn"] == "Xanet"

    service.shoot(game_id, {"x": 9, "y": 9})

    last = None
    for ship_type, row in FLEET:
        length = {"CARRIER": 5, "BATTLESHIP": 4, "CRUISER": 3, "SUBMARINE": 3, "DESTROYER": 2}[
            ship_type
        ]
        for col in range(length):
            last = service.shoot(game_id, {"x": row, "y": col})
            assert last["hit"] is True
            assert last["shooter"] == "Aitzol"
        assert last["sunkShip"] == ship_type

    assert last["outcome"] == "game_over"
    assert last["gameOver"] is True
    assert last["winner"] == "Aitzol"

    info = service.game_info(game_id)
    assert info["isGameOver"] is True
    assert info["winner"] == "Aitzol"
    assert info["state"] == "FINISHED"
    assert service.start_game(game_id)["success"] is False


def test_board_view_hides_intact_ships(service: GameService, game_id: str) -> None:
    _place_fleet(service, game_id, 1)
    _place_fleet(service, game_id, 2)
    service.start_game(game_id)
    service.shoot(game_id, {"x": 8, "y": 0})
    service.shoot(game_id, {"x": 8, "y": 1})
    service.shoot(game_id, {"x": 0, "y": 0})

    hidden = service.board_view(game_id, 2, reveal_ships=False)
    flat = [state for row in hidden["cells"] for state in row]
    assert "ship" not in flat
    assert hidden["cells"][0][0] == "hit"
    assert hidden["ships"] == [
        {"type": "DESTROYER", "label": "Destructor", "sunk": True, "hits": 2}
    ]
    assert hidden["shipsSunk"] == 1

    revealed = service.board_view(game_id, 2, reveal_ships=True)
    assert revealed["cells"][0][1] == "ship"
    assert len(revealed["ships"]) == 5


def test_set_ready(service: GameService, game_id: str) -> None:
    response = service.set_ready(game_id, 2)
    assert response["success"] is True
    assert response["player"]["ready"] is True
    assert service.set_ready(game_id, 0)["success"] is False


def test_service_uses_the_registry_it_is_given() -> None:
    registry = GameRegistry(RegistryConfig(session_ttl_seconds=60, player1_name="north"))
    service = GameService(registry)
    assert service.registry is registry

    created = service.create_game()
    assert created["gameId"] in registry
    assert created["game"]["player1"]["name"] == "north"


def test_turn_is_reported_by_player_id(service: GameService) -> None:
    game_id = service.create_game("Sam", "Sam")["gameId"]
    _place_fleet(service, game_id, 1)
    _place_fleet(service, game_id, 2)
    assert service.start_game(game_id)["currentPlayerId"] == "player1"

    miss = service.shoot(game_id, {"x": 1, "y": 0})
    assert miss["shooterId"] == "player1"
    assert miss["currentPlayerId"] == "player2"
    assert service.game_info(game_id)["currentPlayerId"] == "player2"
