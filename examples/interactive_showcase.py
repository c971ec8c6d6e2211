#!/usr/bin/env python3
"""Render the showcase scene into a live preview window.

The image fills in band by band as the worker processes finish, then stays
on screen until the window is closed. Taichi only drives the window; the
tracing runs on the CPU workers.

Usage:
    python -m examples.interactive_showcase [--width W] [--height H] [--depth D] [--workers N]

Controls:
    - Export PNG: Save the current image with a timestamped name
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import taichi as ti  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive showcase preview.")
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels (default: 400)")
    parser.add_argument("--height", type=int, default=225, help="Image height in pixels (default: 225)")
    parser.add_argument("--depth", type=int, default=5, help="Reflection/refraction bounces (default: 5)")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (default: one per CPU)")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the interactive preview.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # The window only needs the CPU backend.
    ti.init(arch=ti.cpu)

    from src.whitted.core.renderer import ParallelRenderer, RenderSettings
    from src.whitted.preview.interactive import InteractivePreview
    from src.whitted.scene.showcase import create_showcase_scene

    if not InteractivePreview.is_display_available():
        print("Error: No display available. Cannot run interactive preview.")
        print("Use examples/render_showcase.py to render to a file instead.")
        return 1

    settings = RenderSettings(width=args.width, height=args.height, max_depth=args.depth, workers=args.workers)
    world, camera = create_showcase_scene(settings=settings)
    preview = InteractivePreview(settings.width, settings.height, title="Whitted - Showcase")

    print("Rendering... close the window to exit.")
    try:
        preview.run_render(ParallelRenderer(world, camera, settings))
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        preview.close()
        print("Preview window closed.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
