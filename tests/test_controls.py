"""Tests for keyboard and touch input handling."""

import pytest

from canvas_snake.config import GameConfig
from canvas_snake.controls import (
    InputHandler,
    SwipeGesture,
    key_to_direction,
    parse_direction,
    swipe_direction,
)
from canvas_snake.engine import GameEngine
from canvas_snake.snake import Direction


@pytest.fixture()
def engine():
    return GameEngine(GameConfig(seed=0))


class TestKeyMapping:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("ArrowUp", Direction.UP),
            ("arrowdown", Direction.DOWN),
            ("ARROWLEFT", Direction.LEFT),
            ("ArrowRight", Direction.RIGHT),
            ("w", Direction.UP),
            ("S", Direction.DOWN),
            ("a", Direction.LEFT),
            ("D", Direction.RIGHT),
        ],
    )
    def test_known_keys(self, key, expected):
        assert key_to_direction(key) is expected

    def test_unknown_key(self):
        assert key_to_direction("x") is None
        assert key_to_direction("Enter") is None

    def test_parse_direction(self):
        assert parse_direction("Up") is Direction.UP
        assert parse_direction("sideways") is None


class TestSwipeDirection:
    def test_dead_zone(self):
        assert swipe_direction(5, 4) is None
        assert swipe_direction(-3, 6) is None

    def test_dominant_axis(self):
        assert swipe_direction(10, 0) is Direction.RIGHT
        assert swipe_direction(-12, 3) is Direction.LEFT
        assert swipe_direction(3, -9) is Direction.UP
        assert swipe_direction(2, 15) is Direction.DOWN


class TestSwipeGesture:
    def test_first_qualifying_move_only(self):
        gesture = SwipeGesture()
        gesture.start(100, 100)
        assert gesture.move(102, 102) is None
        assert gesture.active
        assert gesture.move(120, 105) is Direction.RIGHT
        assert not gesture.active
        assert gesture.move(100, 200) is None

    def test_move_without_start(self):
        assert SwipeGesture().move(50, 50) is None

    def test_end_cancels(self):
        gesture = SwipeGesture()
        gesture.start(0, 0)
        gesture.end()
        assert gesture.move(0, 50) is None


class TestInputHandler:
    def test_key_turns_onto_perpendicular_axis(self, engine):
        handler = InputHandler(engine)
        assert handler.on_key("ArrowUp")
        assert engine.state.pending_direction is Direction.UP

    def test_same_axis_keys_ignored(self, engine):
        handler = InputHandler(engine)
        assert not handler.on_key("a")
        assert not handler.on_key("d")
        assert engine.state.pending_direction is Direction.RIGHT

    def test_unknown_key_ignored(self, engine):
        assert not InputHandler(engine).on_key("q")

    def test_swipe_sets_pending(self, engine):
        handler = InputHandler(engine)
        handler.on_touch("start", 100, 100)
        assert handler.on_touch("move", 101, 60)
        assert engine.state.pending_direction is Direction.UP

    def test_rejected_swipe_still_ends_gesture(self, engine):
        handler = InputHandler(engine)
        handler.on_touch("start", 0, 0)
        assert not handler.on_touch("move", -40, 0)
        assert not handler.on_touch("move", 0, 40)
        assert engine.state.pending_direction is Direction.RIGHT

    def test_unknown_phase_ignored(self, engine):
        assert not InputHandler(engine).on_touch("hover", 1, 1)
