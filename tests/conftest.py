import pytest

from engine.board import Position


@pytest.fixture
def initial() -> Position:
    return Position.initial()
