"""Basic project scaffolding tests."""

import importlib


def test_package_importable() -> None:
    """Verify the top-level package is importable."""
    import battlenet  # noqa: F401  (import used to ensure availability)

    assert battlenet is not None


def test_submodules_exist() -> None:
    modules = [
        "battlenet.engine.cell",
        "battlenet.engine.ship",
        "battlenet.engine.board",
        "battlenet.engine.player",
        "battlenet.engine.game",
        "battlenet.engine.instrumented_game",
        "battlenet.sessions",
        "battlenet.telemetry",
        "battlenet.cli",
    ]

    for module in modules:
        assert importlib.import_module(module) is not None
