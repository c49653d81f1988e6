"""
Command Line Interface for Lazy Diamond-Square

Usage:
    lazy-diamond-square generate --size 129 --roughness 0.5 --seed qwerty
    lazy-diamond-square generate --size 257 --area "0,0,64,64" --preview 8
    lazy-diamond-square info --size 1025 --roughness 0.4
"""

import json
import logging
import sys
from typing import Optional, Tuple

import click
import numpy as np
import structlog

from . import __version__
from .core.grid import GridStore
from .core.heightmap import HeightMap, HeightMapConfig
from .core.initializer import InitMode
from .core.validation import ValidationError


def configure_logging(verbose: bool = False) -> None:
    """Route structlog events to stderr; DEBUG when verbose, else WARNING."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def parse_seed(seed: Optional[str]):
    """Seeds that parse as integers are ints; anything else is hashed as text."""
    if seed is None:
        return None
    try:
        return int(seed)
    except ValueError:
        return seed


def parse_area(area: str) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """Parse "x0,y0,x1,y1" into two corners."""
    parts = area.split(',')
    if len(parts) != 4:
        raise ValueError(
            f"Area must have exactly 4 values (got {len(parts)}). "
            "Format: x0,y0,x1,y1"
        )

    try:
        x0, y0, x1, y1 = [int(p.strip()) for p in parts]
    except ValueError as e:
        raise ValueError(
            f"Area values must be integers. "
            f"Got: {parts}. Error: {e}"
        )

    return (x0, y0), (x1, y1)


@click.group()
@click.version_option(version=__version__)
def main():
    """Lazy Diamond-Square Height Map Tool

    Generate fractal height maps on demand: only the requested area
    and the cells it depends on are computed.
    """
    pass


@main.command()
@click.option('--size', '-s', default=129, help='Grid side length, 2^n + 1 (default: 129)')
@click.option('--roughness', '-r', default=0.5, help='Displacement decay per level (default: 0.5)')
@click.option('--seed', type=str, help='Seed (integer or text); random if omitted')
@click.option('--init-level', default=0, help='Level pre-seeded before generation (default: 0)')
@click.option('--init-mode', type=click.Choice([m.value for m in InitMode]),
              default=InitMode.SEED.value, help='How the base level is seeded')
@click.option('--init-value', default=0.0, help='Base height for --init-mode fixed')
@click.option('--area', '-a', type=str,
              help='Area to generate as "x0,y0,x1,y1" (default: whole grid)')
@click.option('--preview', default=0, help='Print up to N x N heights of the area')
@click.option('--json', 'as_json', is_flag=True, help='Print statistics as JSON')
@click.option('--verbose', '-v', is_flag=True, help='Show debug log events')
def generate(
    size: int,
    roughness: float,
    seed: Optional[str],
    init_level: int,
    init_mode: str,
    init_value: float,
    area: Optional[str],
    preview: int,
    as_json: bool,
    verbose: bool,
):
    """Generate a height map area and print its statistics.

    Examples:

        # Whole 129 x 129 grid
        lazy-diamond-square generate --seed qwerty

        # Only the top-left corner of a large grid
        lazy-diamond-square generate -s 1025 -a "0,0,31,31" --preview 8
    """
    configure_logging(verbose)

    try:
        config = HeightMapConfig(
            size=size,
            roughness=roughness,
            seed=parse_seed(seed),
            init_level=init_level,
            init_mode=InitMode(init_mode),
            init_value=init_value,
        )
        height_map = HeightMap(config)
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    max_coord = height_map.max_coord()
    if area:
        try:
            corner_a, corner_b = parse_area(area)
        except ValueError as e:
            click.echo(f"Error parsing area: {e}", err=True)
            click.echo('Example: --area "0,0,64,64" for the top-left 65x65 cells', err=True)
            sys.exit(1)
    else:
        corner_a, corner_b = (0, 0), (max_coord, max_coord)

    try:
        computed = height_map.generate_area(corner_a, corner_b)
    except ValidationError as e:
        click.echo(f"Error generating area: {e}", err=True)
        sys.exit(1)

    stats = height_map.statistics()

    if as_json:
        data = stats.to_dict()
        data["computed_cells"] = computed
        data["config"] = config.to_dict()
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(f"Generated area {corner_a} to {corner_b}: {computed:,} cells computed")
        click.echo("\n" + stats.summary())

    if preview > 0:
        (x0, y0), (x1, y1) = height_map.grid.normalize_rect(corner_a, corner_b)
        x1 = min(x1, x0 + preview - 1)
        y1 = min(y1, y0 + preview - 1)
        values = height_map.get_area((x0, y0), (x1, y1))

        click.echo(f"\nPreview ({x0},{y0}) to ({x1},{y1}):")
        for row in values:
            click.echo(" ".join(f"{'.':>9}" if np.isnan(v) else f"{v:9.3f}" for v in row))


@main.command()
@click.option('--size', '-s', default=129, help='Grid side length, 2^n + 1 (default: 129)')
@click.option('--roughness', '-r', default=0.5, help='Displacement decay per level (default: 0.5)')
def info(size: int, roughness: float):
    """Display the level layout of a grid size.

    Shows, per subdivision level, the sub-grid step, how many cells
    first appear on that level, and the displacement amplitude.
    """
    try:
        grid = GridStore(size, roughness, seed=0)
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo("=" * 50)
    click.echo("GRID INFO")
    click.echo("=" * 50)
    click.echo(f"Size:           {grid.size} x {grid.size}")
    click.echo(f"Cells:          {grid.total_cells:,}")
    click.echo(f"Max Coordinate: {grid.max_coord()}")
    click.echo(f"Levels:         0..{grid.levels}")
    click.echo(f"Roughness:      {grid.roughness}")
    click.echo("")
    click.echo(f"{'Level':>5} {'Step':>10} {'New Cells':>14} {'Amplitude':>14}")

    previous = 0
    for level in range(grid.levels + 1):
        step = grid.step(level)
        on_level = (grid.max_coord() // step + 1) ** 2
        click.echo(
            f"{level:>5} {step:>10} {on_level - previous:>14,} "
            f"{grid.amplitude(level):>14.4f}"
        )
        previous = on_level

    click.echo("=" * 50)


if __name__ == '__main__':
    main()
