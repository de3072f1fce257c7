"""Tests for the snake random walk."""

import pytest

from terra_gen.core.alea_prng import AleaPRNG
from terra_gen.core.snake import IMPOSSIBLE_TURNS, STEPS, Acceptance, Compass, Snake


def is_step(a, b, width):
    dx = (b.x - a.x) % width
    return dx in (0, 1, width - 1) and abs(b.y - a.y) <= 1 and (a.x, a.y) != (b.x, b.y)


class TestSnake:
    @pytest.fixture
    def grid(self, make_grid):
        return make_grid(20, 20)

    def test_straight_leg(self, grid, rng):
        walked = Snake(grid, rng, initial_dir=Compass.E, legs=[1], tiles_per_leg=[4]).walk(grid.require(5, 5))
        assert [(t.x, t.y) for t in walked] == [(5, 5), (6, 5), (7, 5), (8, 5), (9, 5)]

    def test_all_blocked_still_terminates(self, grid, rng):
        snake = Snake(
            grid,
            rng,
            accept=lambda tile: Acceptance.BLOCKED,
            initial_dir=Compass.E,
            legs=[2],
            tiles_per_leg=[3],
        )
        walked = snake.walk(grid.require(10, 10))

        assert len(walked) == 7
        for a, b in zip(walked, walked[1:]):
            assert is_step(a, b, grid.width)

    def test_reject_halts_walk(self, grid, rng):
        snake = Snake(
            grid,
            rng,
            accept=lambda tile: Acceptance.REJECT if tile.x == 13 else Acceptance.ACCEPT,
            initial_dir=Compass.E,
            legs=[1],
            tiles_per_leg=[5],
        )
        walked = snake.walk(grid.require(10, 10))
        assert [t.x for t in walked] == [10, 11, 12]

    def test_rejected_start(self, grid, rng):
        snake = Snake(grid, rng, accept=lambda tile: Acceptance.REJECT)
        assert snake.walk(grid.require(3, 3)) == []

    def test_y_bound_halts(self, grid, rng):
        walked = Snake(grid, rng, initial_dir=Compass.N, legs=[3], tiles_per_leg=[3]).walk(grid.require(4, 0))
        assert walked == [grid.require(4, 0)]

    def test_wraps_x(self, grid, rng):
        walked = Snake(grid, rng, initial_dir=Compass.E, legs=[1], tiles_per_leg=[2]).walk(grid.require(19, 5))
        assert [t.x for t in walked] == [19, 0, 1]

    def test_reroutes_around_block(self, grid, rng):
        blocked = grid.require(11, 10)
        snake = Snake(
            grid,
            rng,
            accept=lambda tile: Acceptance.BLOCKED if tile is blocked else Acceptance.ACCEPT,
            initial_dir=Compass.E,
            legs=[1],
            tiles_per_leg=[1],
        )
        walked = snake.walk(grid.require(10, 10))

        assert len(walked) == 2
        assert walked[1] is not blocked
        assert (walked[1].x, walked[1].y) in {(10, 9), (11, 9), (11, 11), (10, 11)}

    def test_visit_once_per_entry(self, grid, rng):
        visits = []
        walked = Snake(grid, rng, on_visit=visits.append, legs=[3], tiles_per_leg=[2]).walk(grid.require(10, 10))
        assert visits == walked

    def test_never_turns_back(self, grid):
        for seed in range(20):
            walked = Snake(
                grid,
                AleaPRNG(f"walk_{seed}"),
                initial_dir=Compass.N,
                legs=[6],
                tiles_per_leg=[1],
            ).walk(grid.require(10, 19))
            for a, b in zip(walked, walked[1:]):
                step = ((b.x - a.x + 1) % grid.width - 1, b.y - a.y)
                heading = next(d for d, s in STEPS.items() if s == step)
                assert heading not in IMPOSSIBLE_TURNS[Compass.N]

    def test_empty_pools(self, grid, rng):
        with pytest.raises(ValueError):
            Snake(grid, rng, legs=[])
