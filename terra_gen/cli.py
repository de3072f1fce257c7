"""
Command line entry point: generate a world and print a text map of one level.
"""

import logging
import sys
from typing import List, Optional

import structlog
from pydantic import ValidationError

from .config import get_settings
from .core.grid import Grid
from .core.terra_generator import TerraGenerator, WorldSize
from .core.tile import MAJOR, MINOR, GenTile

logger = structlog.get_logger()

LEVELS = ("strat", "reg", "game")


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Route structlog through stdlib logging on stderr, as JSON or console lines."""
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=getattr(logging, level.upper(), logging.INFO))
    renderer = structlog.processors.JSONRenderer() if fmt == "json" else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def tile_char(tile: GenTile, show_rivers: bool = False) -> str:
    """Single map character for a tile."""
    if tile.is_start == MAJOR:
        return "*"
    if tile.is_start == MINOR:
        return "+"
    if show_rivers and tile.river_key is not None and tile.is_land:
        return "="
    if tile.terrain.id == "ocean":
        return "~"
    if tile.terrain.id == "sea":
        return ":"
    return tile.terrain.id[0]


def render_grid(grid: Grid, show_rivers: bool = False) -> str:
    rows = []
    for y in range(grid.height):
        row = []
        for x in range(grid.width):
            tile = grid.get(x, y)
            row.append(" " if tile is None else tile_char(tile, show_rivers))
        rows.append("".join(row))
    return "\n".join(rows)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    import argparse

    settings = get_settings()

    parser = argparse.ArgumentParser(description="Generate a world and print a text map")
    parser.add_argument("--height", type=int, default=settings.default_height, help="World height in game tiles (multiple of 9)")
    parser.add_argument("--continents", type=int, default=settings.default_continents, help="Number of continents")
    parser.add_argument("--majors", type=int, default=settings.default_majors_per_continent, help="Major starts per continent")
    parser.add_argument("--minors", type=int, default=settings.default_minors_per_player, help="Minor starts per major start")
    parser.add_argument("--sea-level", type=int, choices=(1, 2, 3), default=settings.default_sea_level, help="Sea level tier")
    parser.add_argument("--seed", default=settings.default_seed, help="Seed (random if omitted)")
    parser.add_argument("--level", choices=LEVELS, default="game", help="Level to print")
    parser.add_argument("--flip-x", action="store_true", help="Mirror the preset layout horizontally")
    parser.add_argument("--flip-y", action="store_true", help="Mirror the preset layout vertically")
    parser.add_argument("--flip-climate", action="store_true", help="Mirror the climate bands")

    args = parser.parse_args(argv)

    configure_logging(settings.log_level, settings.log_format)

    try:
        size = WorldSize(
            name="cli",
            x=args.height * 2,
            y=args.height,
            continents=args.continents,
            majors_per_continent=args.majors,
            minors_per_player=args.minors,
            sea_level=args.sea_level,
        )
    except ValidationError as e:
        logger.error("Invalid world size", error=str(e))
        return 2

    gen = TerraGenerator(
        size,
        seed=args.seed,
        flip_x=args.flip_x,
        flip_y=args.flip_y,
        flip_climate=args.flip_climate,
    ).generate()

    grid = {"strat": gen.strat_tiles, "reg": gen.reg_tiles, "game": gen.game_tiles}[args.level]
    print(render_grid(grid, show_rivers=args.level == "game"))
    logger.info("World generated", seed=gen.seed, continents=len(gen.continents), rivers=len(gen.rivers))
    return 0


if __name__ == "__main__":
    sys.exit(main())
