"""Tests for the hot-seat CLI helpers."""

import builtins
import itertools
import logging

import pytest

from battlenet import cli
from battlenet.engine.cell import Coordinate


@pytest.mark.parametrize(
    ("text", "expected"),
    [("A1", Coordinate(0, 0)), ("j10", Coordinate(9, 9)), (" 3 7 ", Coordinate(3, 7))],
)
def test_coordinate_from_input(text: str, expected: Coordinate) -> None:
    assert cli.coordinate_from_input(text) == expected


@pytest.mark.parametrize("text", ["", "K1", "A11", "Ax", "1 2 3", "a b"])
def test_coordinate_from_input_rejects_garbage(text: str) -> None:
    with pytest.raises(ValueError):
        cli.coordinate_from_input(text)


def test_format_board_renders_symbols() -> None:
    view = {
        "size": 2,
        "cells": [["empty", "ship"], ["miss", "hit"]],
    }
    lines = cli.format_board(view).splitlines()
    assert lines[0] == "     1  2"
    assert lines[1] == "A | .  S"
    assert lines[2] == "B | o  X"


def test_play_game_with_scripted_input(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    answers = itertools.cycle([f"{row}{col}" for row in "ABCDEFGHIJ" for col in range(1, 11)])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))

    winner = cli.play_game(seed=3, auto_place=True, player1="Ana", player2="Bo")

    assert winner in {"Ana", "Bo"}
    assert f"Congratulations {winner}" in capsys.readouterr().out


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args([])
    assert args.seed is None
    assert args.auto_place is None
    assert args.telemetry is False


def test_players_sharing_a_name_never_repeat_a_shot(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    answers = itertools.cycle([f"{row}{col}" for row in "ABCDEFGHIJ" for col in range(1, 11)])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))

    with caplog.at_level(logging.WARNING, logger="battlenet.engine.board"):
        winner = cli.play_game(seed=3, auto_place=True, player1="Sam", player2="Sam")

    assert winner == "Sam"
    assert "shot_duplicate" not in [record.getMessage() for record in caplog.records]
