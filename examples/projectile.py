#!/usr/bin/env python3
"""Plot a projectile's trajectory onto a canvas.

A projectile starts at (0, 1, 0) and is launched up and to the right. Each
tick adds its velocity to its position, then gravity and wind to its
velocity, until it falls back to the ground. Every position is drawn as a
small plus sign, with the canvas y axis flipped so "up" is up in the image.

Usage:
    python -m examples.projectile [--output OUTPUT]

Example:
    python -m examples.projectile --output trajectory.ppm
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from src.raycaster.core.canvas import Canvas
from src.raycaster.core.color import Color
from src.raycaster.core.tuple import Tuple, point, vector
from src.raycaster.preview.export import save_canvas

CANVAS_WIDTH = 900
CANVAS_HEIGHT = 550
PROJECTILE_COLOR = Color(1.0, 0.5, 0.5)

# Stop runaway simulations if the projectile never lands
MAX_TICKS = 10_000


@dataclass(frozen=True)
class Projectile:
    position: Tuple
    velocity: Tuple


@dataclass(frozen=True)
class Environment:
    gravity: Tuple
    wind: Tuple

    def tick(self, projectile: Projectile) -> Projectile:
        """Advance the projectile by one time step."""
        return Projectile(
            projectile.position + projectile.velocity,
            projectile.velocity + self.gravity + self.wind,
        )


def trace_trajectory(projectile: Projectile, environment: Environment) -> list[Tuple]:
    """Positions of the projectile from launch until it reaches the ground."""
    positions = []
    for _ in range(MAX_TICKS):
        if projectile.position.y <= 0.0:
            break
        positions.append(projectile.position)
        projectile = environment.tick(projectile)
    return positions


def plot_trajectory(canvas: Canvas, positions: list[Tuple], color: Color) -> int:
    """Draw each position as a plus sign, skipping pixels off the canvas.

    Returns:
        The number of pixels written.
    """
    written = 0
    for position in positions:
        col = int(position.x)
        row = canvas.height - int(position.y)
        for dc, dr in ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1)):
            x, y = col + dc, row + dr
            if 0 <= x < canvas.width and 0 <= y < canvas.height:
                canvas.write_pixel(x, y, color)
                written += 1
    return written


def render_trajectory() -> Canvas:
    """Simulate the standard launch and plot it on a 900x550 canvas."""
    projectile = Projectile(point(0.0, 1.0, 0.0), vector(1.0, 1.8, 0.0).normalize() * 11.25)
    environment = Environment(vector(0.0, -0.1, 0.0), vector(-0.01, 0.0, 0.0))

    positions = trace_trajectory(projectile, environment)
    logger.info("Projectile landed after {} ticks", len(positions))

    canvas = Canvas(CANVAS_WIDTH, CANVAS_HEIGHT)
    plot_trajectory(canvas, positions, PROJECTILE_COLOR)
    return canvas


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Plot a projectile trajectory.")
    parser.add_argument(
        "--output",
        type=str,
        default="projectile.ppm",
        help="Output file path, .ppm or .png (default: projectile.ppm)",
    )
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level="INFO")

    try:
        output_file = Path(args.output)
        save_canvas(render_trajectory(), output_file)
        logger.info("Saved to: {}", output_file.absolute())
        return 0
    except (ValueError, OSError) as e:
        logger.error("Error: {}", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
