#!/usr/bin/env python3
"""Render the showcase scene (or a scene file) to an image.

Both back ends produce the same image: ``python`` runs the double-precision
render loop in Camera.render, ``taichi`` runs the compiled single-precision
kernel.

Usage:
    python -m examples.render_showcase [options]

Options:
    --width WIDTH       Image width in pixels (default: 100)
    --height HEIGHT     Image height in pixels (default: 50)
    --fov RADIANS       Field of view in radians (default: pi/3)
    --backend NAME      Render back end: python or taichi (default: python)
    --scene PATH        Render a JSON scene file instead of the showcase
    --output OUTPUT     Output file path, .ppm or .png (default: showcase.ppm)
    --quiet             Suppress progress output

Example:
    python -m examples.render_showcase --width 400 --height 200 --backend taichi --output showcase.png
"""

from __future__ import annotations

import argparse
import math
import sys
from pathlib import Path

import taichi as ti
from loguru import logger


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the showcase scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=100,
        help="Image width in pixels (default: 100)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=50,
        help="Image height in pixels (default: 50)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=math.pi / 3,
        help="Field of view in radians (default: pi/3)",
    )
    parser.add_argument(
        "--backend",
        choices=("python", "taichi"),
        default="python",
        help="Render back end (default: python)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file to render instead of the showcase",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="showcase.ppm",
        help="Output file path, .ppm or .png (default: showcase.ppm)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def build_scene(width: int, height: int, fov: float, scene_path: str | None):
    """Create the world and camera to render.

    A scene file's own camera entry wins over the size and fov arguments.
    """
    from src.raycaster.scene.config import CameraConfig, load_scene
    from src.raycaster.scene.showcase import ShowcaseParams, create_showcase_scene

    if scene_path is None:
        return create_showcase_scene(ShowcaseParams(hsize=width, vsize=height, field_of_view=fov))

    world, camera_config = load_scene(scene_path)
    if camera_config is None:
        camera_config = CameraConfig(hsize=width, vsize=height, field_of_view=fov)
    return world, camera_config.build()


def render_showcase(
    width: int = 100,
    height: int = 50,
    fov: float = math.pi / 3,
    backend: str = "python",
    scene_path: str | None = None,
    output_path: str = "showcase.ppm",
    quiet: bool = False,
) -> Path:
    """Render the scene and save it to a file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in radians.
        backend: "python" or "taichi".
        scene_path: Optional JSON scene file.
        output_path: Output file path (.ppm or .png).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.raycaster.preview.export import save_canvas

    world, camera = build_scene(width, height, fov, scene_path)
    logger.info(
        "Rendering {} spheres at {}x{} with the {} back end",
        len(world.objects),
        camera.hsize,
        camera.vsize,
        backend,
    )

    if backend == "taichi":
        from src.raycaster.core.integrator import render_world

        canvas = render_world(world, camera)
    else:

        def progress_callback(rows_done: int, total_rows: int) -> None:
            if not quiet:
                print(f"\r  Progress: {rows_done}/{total_rows} rows", end="", flush=True)

        canvas = camera.render(world, callback=progress_callback)
        if not quiet:
            print()  # Newline after progress

    output_file = Path(output_path)
    save_canvas(canvas, output_file)
    logger.info("Saved to: {}", output_file.absolute())
    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logger.remove()
    logger.add(sys.stderr, level="WARNING" if args.quiet else "INFO")

    # The kernel loop is serialized, so the CPU back end is sufficient
    ti.init(arch=ti.cpu)

    try:
        render_showcase(
            width=args.width,
            height=args.height,
            fov=args.fov,
            backend=args.backend,
            scene_path=args.scene,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        logger.error("Error: {}", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
