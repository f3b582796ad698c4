#!/usr/bin/env python3
"""Render a preset sphere scene to a PNG file.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 400)
    --height HEIGHT     Image height in pixels (default: 200)
    --scene NAME        Preset scene: single or showcase (default: single)
    --mode MODE         Shading mode: first-hit or averaged (default: first-hit)
    --samples SAMPLES   Samples per pixel (default: 100)
    --jitter            Jitter sample offsets within each pixel
    --seed SEED         Seed for jittered offsets (default: 0)
    --output OUTPUT     Output file path (default: spheres.png)
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m examples.render_spheres --scene showcase --mode averaged --jitter
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti

MODES = {"first-hit": "FIRST_HIT", "averaged": "AVERAGED"}


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a preset sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels (default: 400)")
    parser.add_argument("--height", type=int, default=200, help="Image height in pixels (default: 200)")
    parser.add_argument(
        "--scene",
        choices=("single", "showcase"),
        default="single",
        help="Preset scene (default: single)",
    )
    parser.add_argument(
        "--mode",
        choices=tuple(MODES),
        default="first-hit",
        help="Shading mode (default: first-hit)",
    )
    parser.add_argument("--samples", type=int, default=100, help="Samples per pixel (default: 100)")
    parser.add_argument("--jitter", action="store_true", help="Jitter sample offsets within each pixel")
    parser.add_argument("--seed", type=int, default=0, help="Seed for jittered offsets (default: 0)")
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def render_spheres(
    width: int = 400,
    height: int = 200,
    scene_name: str = "single",
    mode: str = "first-hit",
    num_samples: int = 100,
    jitter: bool = False,
    seed: int = 0,
    output_path: str = "spheres.png",
    quiet: bool = False,
) -> Path:
    """Render a preset scene and save it as PNG.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from spheretrace.camera.pinhole import setup_camera
    from spheretrace.core.config import SamplingParams, ShadingMode
    from spheretrace.core.renderer import FrameRenderer
    from spheretrace.scene.presets import create_showcase_scene, create_single_sphere_scene

    sampling = SamplingParams(
        num_samples=num_samples,
        mode=ShadingMode[MODES[mode]],
        jitter=jitter,
        seed=seed,
    )
    # Validates the image size before it is used for the aspect ratio
    renderer = FrameRenderer(width, height, sampling)

    factory = create_single_sphere_scene if scene_name == "single" else create_showcase_scene
    scene, camera = factory(aspect_ratio=width / height)
    setup_camera(camera)

    if not quiet:
        print(f"Scene '{scene_name}' with {scene.get_sphere_count()} spheres ({width}x{height})")

    start_time = time.time()
    renderer.render()
    elapsed = time.time() - start_time

    output_file = Path(output_path)
    renderer.to_image().save(output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Render time: {elapsed:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
    except Exception:
        ti.init(arch=ti.cpu)

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            scene_name=args.scene,
            mode=args.mode,
            num_samples=args.samples,
            jitter=args.jitter,
            seed=args.seed,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
