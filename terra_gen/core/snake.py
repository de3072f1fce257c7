"""
Biased random walk ("snake") shared by mountain and river carving.

A walk is made of legs; each leg steps one compass tile at a time in the
current heading, and the heading turns 45 degrees between legs. Headings
never turn back more than 135 degrees from the initial direction.
"""

from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

import structlog

from .alea_prng import AleaPRNG
from .grid import Grid
from .tile import GenTile

logger = structlog.get_logger()


class Compass(str, Enum):
    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"
    NW = "nw"


class Acceptance(Enum):
    """Verdict of an acceptance callback for a candidate step."""

    ACCEPT = "accept"
    REJECT = "reject"  # halts the whole walk
    BLOCKED = "blocked"  # try to route around, else force through


STEPS: Dict[Compass, tuple] = {
    Compass.N: (0, -1),
    Compass.NE: (1, -1),
    Compass.E: (1, 0),
    Compass.SE: (1, 1),
    Compass.S: (0, 1),
    Compass.SW: (-1, 1),
    Compass.W: (-1, 0),
    Compass.NW: (-1, -1),
}

# Between legs: turn 45 degrees left or right
PREFERRED_TURNS: Dict[Compass, List[Compass]] = {
    Compass.N: [Compass.NW, Compass.NE],
    Compass.NE: [Compass.N, Compass.E],
    Compass.E: [Compass.NE, Compass.SE],
    Compass.SE: [Compass.E, Compass.S],
    Compass.S: [Compass.SE, Compass.SW],
    Compass.SW: [Compass.S, Compass.W],
    Compass.W: [Compass.SW, Compass.NW],
    Compass.NW: [Compass.W, Compass.N],
}

# Around a block: 45 and 90 degree turns, or straight on
ALL_TURNS: Dict[Compass, List[Compass]] = {
    Compass.N: [Compass.W, Compass.NW, Compass.N, Compass.NE, Compass.E],
    Compass.NE: [Compass.NW, Compass.N, Compass.NE, Compass.E, Compass.SE],
    Compass.E: [Compass.N, Compass.NE, Compass.E, Compass.SE, Compass.S],
    Compass.SE: [Compass.NE, Compass.E, Compass.SE, Compass.S, Compass.SW],
    Compass.S: [Compass.E, Compass.SE, Compass.S, Compass.SW, Compass.W],
    Compass.SW: [Compass.SE, Compass.S, Compass.SW, Compass.W, Compass.NW],
    Compass.W: [Compass.S, Compass.SW, Compass.W, Compass.NW, Compass.N],
    Compass.NW: [Compass.SW, Compass.W, Compass.NW, Compass.N, Compass.NE],
}

# Headings that point back against the initial direction
IMPOSSIBLE_TURNS: Dict[Compass, List[Compass]] = {
    Compass.N: [Compass.SE, Compass.S, Compass.SW],
    Compass.NE: [Compass.S, Compass.SW, Compass.W],
    Compass.E: [Compass.SW, Compass.W, Compass.NW],
    Compass.SE: [Compass.W, Compass.NW, Compass.N],
    Compass.S: [Compass.NW, Compass.N, Compass.NE],
    Compass.SW: [Compass.N, Compass.NE, Compass.E],
    Compass.W: [Compass.NE, Compass.E, Compass.SE],
    Compass.NW: [Compass.E, Compass.SE, Compass.S],
}

AcceptFn = Callable[[GenTile], Acceptance]
VisitFn = Callable[[GenTile], None]


class Snake:
    """
    Random walk over one grid level.

    Every tile the walk enters (the start included) is appended to the walked
    list and passed to ``on_visit`` exactly once per entry.
    """

    def __init__(
        self,
        grid: Grid,
        rng: AleaPRNG,
        accept: Optional[AcceptFn] = None,
        on_visit: Optional[VisitFn] = None,
        initial_dir: Optional[Compass] = None,
        legs: Sequence[int] = (2, 3),
        tiles_per_leg: Sequence[int] = (2, 3),
    ):
        """
        Initialize a walk.

        Args:
            grid: Level the walk moves over
            rng: Generation PRNG
            accept: Verdict per candidate tile; everything is accepted if omitted
            on_visit: Called for each tile walked into
            initial_dir: Starting heading; random if omitted
            legs: Pool the leg count is drawn from
            tiles_per_leg: Pool each leg's step count is drawn from
        """
        if not legs or not tiles_per_leg:
            raise ValueError("legs and tiles_per_leg pools must not be empty")
        self.grid = grid
        self.rng = rng
        self.accept = accept or (lambda tile: Acceptance.ACCEPT)
        self.on_visit = on_visit
        self.initial_dir = Compass(initial_dir) if initial_dir else rng.pick(list(Compass))
        self.legs = list(legs)
        self.tiles_per_leg = list(tiles_per_leg)

    def walk(self, start: GenTile) -> List[GenTile]:
        """
        Walk from ``start``.

        A Reject verdict, a step past the top/bottom row or a missing tile
        halts the whole walk. A Blocked verdict reroutes through a random
        allowed alternate heading, or forces through the blocked tile when no
        alternate is accepted.

        Returns:
            Walked tiles in order
        """
        walked: List[GenTile] = []

        # A blocked start has nowhere to reroute from, so it is entered anyway
        if self.accept(start) is Acceptance.REJECT:
            return walked
        self._enter(start, walked)

        prev = start
        direction = self.initial_dir
        legs_total = self.rng.pick(self.legs)
        for _ in range(legs_total):
            steps = self.rng.pick(self.tiles_per_leg)
            for _ in range(steps):
                step = self._next_tile(prev, direction)
                if step is None:
                    return walked

                verdict = self.accept(step)
                if verdict is Acceptance.REJECT:
                    return walked
                if verdict is Acceptance.BLOCKED:
                    step = self._reroute(prev, direction, step)

                self._enter(step, walked)
                prev = step

            direction = self.rng.pick(self._allowed(PREFERRED_TURNS[direction]))

        return walked

    def _enter(self, tile: GenTile, walked: List[GenTile]) -> None:
        walked.append(tile)
        if self.on_visit is not None:
            self.on_visit(tile)

    def _allowed(self, directions: List[Compass]) -> List[Compass]:
        impossible = IMPOSSIBLE_TURNS[self.initial_dir]
        return [d for d in directions if d not in impossible]

    def _reroute(self, prev: GenTile, direction: Compass, blocked: GenTile) -> GenTile:
        alternates = self.rng.shuffle(
            [d for d in self._allowed(ALL_TURNS[direction]) if d is not direction]
        )
        for alt in alternates:
            tile = self._next_tile(prev, alt)
            if tile is not None and self.accept(tile) is Acceptance.ACCEPT:
                return tile

        logger.debug("Snake forced through blocked tile", x=blocked.x, y=blocked.y)
        return blocked

    def _next_tile(self, tile: GenTile, direction: Compass) -> Optional[GenTile]:
        dx, dy = STEPS[direction]
        return self.grid.get(tile.x + dx, tile.y + dy)
