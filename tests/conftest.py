"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable

import pytest

from gambit.core.notation import STARTING_FEN, parse_san, state_from_fen
from gambit.core.state import GameState
from gambit.core.transition import make_move
from gambit.game.controller import GameController

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

PlayFn = Callable[..., GameState]


def _play(state: GameState, *sans: str) -> GameState:
    for san in sans:
        state = make_move(state, parse_san(state, san))
    return state


@pytest.fixture
def start_state() -> GameState:
    return state_from_fen(STARTING_FEN)


@pytest.fixture
def play() -> PlayFn:
    """``play(state, "e4", "e5", ...)`` applies SAN moves in order."""
    return _play


@pytest.fixture
def controller() -> GameController:
    return GameController()
