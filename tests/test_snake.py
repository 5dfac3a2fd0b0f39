"""Tests for directions and snake body helpers."""

import pytest

from classic_snake.snake import (
    Direction,
    initial_body,
    is_reversal,
    next_head,
)


class TestDirection:
    def test_vectors(self):
        assert Direction.UP.value == (0, -1)
        assert Direction.DOWN.value == (0, 1)
        assert Direction.LEFT.value == (-1, 0)
        assert Direction.RIGHT.value == (1, 0)

    def test_labels(self):
        assert [d.label for d in Direction] == ["up", "down", "left", "right"]

    @pytest.mark.parametrize("raw", ["up", "UP", " Up "])
    def test_parse_names(self, raw):
        assert Direction.parse(raw) is Direction.UP

    def test_parse_passes_through_direction(self):
        assert Direction.parse(Direction.LEFT) is Direction.LEFT

    @pytest.mark.parametrize("raw", ["north", "", None, 3, (0, 1)])
    def test_parse_unknown(self, raw):
        assert Direction.parse(raw) is None


class TestReversal:
    def test_opposites(self):
        assert is_reversal(Direction.UP, Direction.DOWN)
        assert is_reversal(Direction.LEFT, Direction.RIGHT)

    def test_same_and_perpendicular(self):
        assert not is_reversal(Direction.UP, Direction.UP)
        assert not is_reversal(Direction.UP, Direction.LEFT)


class TestBody:
    def test_initial_body_centered(self):
        assert initial_body(20) == ((10, 10), (9, 10), (8, 10))

    def test_initial_body_odd_grid(self):
        assert initial_body(5) == ((2, 2), (1, 2), (0, 2))

    def test_next_head(self):
        body = ((2, 2), (1, 2), (0, 2))
        assert next_head(body, Direction.RIGHT) == (3, 2)
        assert next_head(body, Direction.UP) == (2, 1)
        assert next_head(body, Direction.DOWN) == (2, 3)
