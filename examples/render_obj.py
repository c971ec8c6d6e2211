#!/usr/bin/env python3
"""Render a Wavefront OBJ model.

Loads the model (and any material library it references), places it on a
checkered floor, frames it with a camera fitted to its bounding box and
renders it.

Usage:
    python -m examples.render_obj MODEL.obj [options]

Options:
    --width WIDTH       Image width in pixels (default: 400)
    --height HEIGHT     Image height in pixels (default: 225)
    --depth DEPTH       Reflection/refraction bounces (default: 5)
    --workers N         Worker processes (default: one per CPU)
    --output OUTPUT     Output file path, .png or .ppm (default: model.png)
    --strict            Fail on the first unusable OBJ line
    --quiet             Suppress progress output

Example:
    python -m examples.render_obj teapot.obj --width 320 --height 240
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
import time
from pathlib import Path

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from src.whitted.camera.pinhole import Camera, view_transform  # noqa: E402
from src.whitted.core.errors import RayTracerError  # noqa: E402
from src.whitted.core.matrix import translation  # noqa: E402
from src.whitted.core.renderer import ParallelRenderer, RenderSettings  # noqa: E402
from src.whitted.core.tuples import Color, Point, Vector  # noqa: E402
from src.whitted.geometry.group import Group  # noqa: E402
from src.whitted.geometry.plane import Plane  # noqa: E402
from src.whitted.materials.light import PointLight  # noqa: E402
from src.whitted.materials.material import Material  # noqa: E402
from src.whitted.materials.patterns import CheckersPattern  # noqa: E402
from src.whitted.preview.export import save_image  # noqa: E402
from src.whitted.scene.obj_parser import parse_obj_file  # noqa: E402
from src.whitted.scene.world import World  # noqa: E402

logger = logging.getLogger("render_obj")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a Wavefront OBJ model.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("model", type=str, help="Path to the .obj file")
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels (default: 400)")
    parser.add_argument("--height", type=int, default=225, help="Image height in pixels (default: 225)")
    parser.add_argument("--depth", type=int, default=5, help="Reflection/refraction bounces (default: 5)")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (default: one per CPU)")
    parser.add_argument("--output", type=str, default=None, help="Output file path (default: <model>.png)")
    parser.add_argument("--strict", action="store_true", help="Fail on the first unusable OBJ line")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args(argv)


def frame_model(model: Group, settings: RenderSettings) -> tuple[World, Camera]:
    """Stand the model on a floor and fit a camera to its bounds.

    Raises:
        ValueError: If the model has no triangles.
    """
    box = model.bounds()
    if box.is_empty:
        raise ValueError("model contains no triangles")
    lo, hi = box.min, box.max
    center = Point((lo.x + hi.x) / 2, (lo.y + hi.y) / 2, (lo.z + hi.z) / 2)
    radius = max((hi - center).magnitude(), 1e-3)

    # Drop the model so its lowest point rests on y = 0.
    holder = Group([model], transform=translation(-center.x, -lo.y, -center.z), name="model")
    target = Point(0, center.y - lo.y, 0)

    floor = Plane(
        material=Material(
            pattern=CheckersPattern(Color(0.8, 0.8, 0.8), Color(0.3, 0.3, 0.3)),
            specular=0.0,
        ),
        name="floor",
    )
    # Scale the checkers so the floor reads at any model size.
    floor.material.pattern.transform = floor.material.pattern.transform.scale(radius / 2, radius / 2, radius / 2)

    distance = radius / math.sin(settings.field_of_view / 2) * 1.1
    eye = Point(0, target.y + radius * 0.8, -distance)
    light = PointLight(Point(-distance, target.y + distance, -distance), Color(1, 1, 1))

    camera = Camera(
        settings.width,
        settings.height,
        settings.field_of_view,
        view_transform(eye, target, Vector(0, 1, 0)),
    )
    return World([floor, holder], light), camera


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = RenderSettings(width=args.width, height=args.height, max_depth=args.depth, workers=args.workers)
        parser = parse_obj_file(args.model, strict=args.strict)
        if parser.ignored_lines:
            logger.warning("Ignored %d unusable lines in %s", parser.ignored_lines, args.model)
        world, camera = frame_model(parser.to_group(), settings)

        start_time = time.time()

        def progress_callback(done: int, total: int) -> None:
            if not args.quiet:
                print(f"\r  Progress: {done}/{total} rows", end="", flush=True)

        canvas, stats = ParallelRenderer(world, camera, settings).render(progress_callback)
        if not args.quiet:
            print()

        output = Path(args.output) if args.output else Path(args.model).with_suffix(".png").name
        save_image(canvas, output)
        if not args.quiet:
            print(f"Saved to: {Path(output).absolute()} in {time.time() - start_time:.2f}s")
            print(f"{len(parser.vertices)} vertices, {stats.intersection_tests:,} intersection tests")
        return 0
    except (RayTracerError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
