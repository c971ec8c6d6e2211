#!/usr/bin/env python3
"""Render the showcase scene.

Builds the showcase world (checkered floor, glass and mirror spheres, a CSG
die, a hexagon group and a cone/cylinder lamp), renders it across worker
processes and writes a PPM or PNG depending on the output suffix.

Usage:
    python -m examples.render_showcase [options]

Options:
    --width WIDTH       Image width in pixels (default: 400)
    --height HEIGHT     Image height in pixels (default: 225)
    --depth DEPTH       Reflection/refraction bounces (default: 5)
    --workers N         Worker processes (default: one per CPU)
    --output OUTPUT     Output file path, .png or .ppm (default: showcase.png)
    --settings FILE     JSON file with render settings; flags override it
    --quiet             Suppress progress output

Example:
    python -m examples.render_showcase --width 320 --height 180 --workers 4
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from src.whitted.core.errors import RayTracerError  # noqa: E402
from src.whitted.core.renderer import ParallelRenderer, RenderSettings  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the showcase scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels (default: 400)")
    parser.add_argument("--height", type=int, default=None, help="Image height in pixels (default: 225)")
    parser.add_argument("--depth", type=int, default=None, help="Reflection/refraction bounces (default: 5)")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (default: one per CPU)")
    parser.add_argument(
        "--output",
        type=str,
        default="showcase.png",
        help="Output file path, .png or .ppm (default: showcase.png)",
    )
    parser.add_argument("--settings", type=str, default=None, help="JSON file with render settings")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> RenderSettings:
    """Merge the settings file (if any) with command-line overrides."""
    values: dict = {}
    if args.settings is not None:
        values.update(json.loads(Path(args.settings).read_text(encoding="utf-8")))
    overrides = {"width": args.width, "height": args.height, "max_depth": args.depth, "workers": args.workers}
    values.update({key: value for key, value in overrides.items() if value is not None})
    return RenderSettings.from_mapping(values)


def render_showcase(settings: RenderSettings, output_path: str = "showcase.png", quiet: bool = False) -> Path:
    """Render the showcase scene and save it.

    Args:
        settings: Image size, depth and worker settings.
        output_path: Output file path (PNG or PPM).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    from src.whitted.preview.export import save_image
    from src.whitted.scene.showcase import create_showcase_scene

    if not quiet:
        print(f"Creating showcase scene ({settings.width}x{settings.height})...")
    world, camera = create_showcase_scene(settings=settings)
    renderer = ParallelRenderer(world, camera, settings)

    start_time = time.time()

    def progress_callback(done: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            print(
                f"\r  Progress: {done}/{total} rows ({done / total * 100:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    canvas, stats = renderer.render(progress_callback)
    if not quiet:
        print()

    output_file = Path(output_path)
    save_image(canvas, output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Intersection tests: {stats.intersection_tests:,}")
        print(f"Total time: {time.time() - start_time:.2f}s")
    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        render_showcase(build_settings(args), args.output, args.quiet)
        return 0
    except (RayTracerError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
