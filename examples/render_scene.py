#!/usr/bin/env python3
"""Render one of the demo scenes.

Scenes:
    camera   Two flat-coloured spheres (red and blue) seen through a pinhole
             camera placed off-axis at (150, 150, 500). The spheres have no
             material, so every hit shows the colour of the sphere.
    shading  Three Matte spheres (red, blue, green) lit by a dim white
             ambient light and a strong directional light from the viewer,
             seen through an orthographic camera.

Usage:
    python examples/render_scene.py [options]

Options:
    --scene SCENE       Scene to render: camera or shading (default: shading)
    --width WIDTH       Image width in pixels (default: 600)
    --height HEIGHT     Image height in pixels (default: 600)
    --samples SAMPLES   Samples per pixel (default: 16 for camera, 4 for shading)
    --seed SEED         Random seed (default: drawn from system entropy)
    --arch ARCH         Taichi backend (default: cpu)
    --output OUTPUT     Output file path (default: <scene>.bmp)
    --preview           Show the image in a Matplotlib window
    --verbose           Log render progress
    --quiet             Suppress progress output

Example:
    python examples/render_scene.py --scene camera --width 200 --height 200 --seed 7
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

# Default samples per pixel of each scene
SCENE_SAMPLES = {"camera": 16, "shading": 4}


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render one of the demo scenes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=str,
        choices=sorted(SCENE_SAMPLES),
        default="shading",
        help="Scene to render (default: shading)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=600,
        help="Image width in pixels (default: 600)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=600,
        help="Image height in pixels (default: 600)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Samples per pixel (default: 16 for camera, 4 for shading)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: drawn from system entropy)",
    )
    parser.add_argument(
        "--arch",
        type=str,
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file path (default: <scene>.bmp)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the image in a Matplotlib window",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log render progress",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    scene: str = "shading",
    width: int = 600,
    height: int = 600,
    num_samples: int | None = None,
    seed: int | None = None,
    output_path: str | None = None,
    preview: bool = False,
    quiet: bool = False,
) -> Path:
    """Render a demo scene and save it to a file.

    Taichi must be initialized before calling this function.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from whitted.preview.display import show_preview
    from whitted.preview.export import save_world_image
    from whitted.scene.demo_scenes import create_camera_scene, create_shading_scene

    factories = {"camera": create_camera_scene, "shading": create_shading_scene}
    if num_samples is None:
        num_samples = SCENE_SAMPLES[scene]
    if output_path is None:
        output_path = f"{scene}.bmp"

    if not quiet:
        print(f"Creating {scene} scene ({width}x{height}, {num_samples} spp)...")

    world, camera = factories[scene](
        width=width, height=height, num_samples=num_samples, seed=seed
    )

    start_time = time.time()
    camera.render_scene(world)

    output_file = Path(output_path)
    save_world_image(world, str(output_file))

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    if preview:
        show_preview(world)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    from whitted.core.config import RenderConfig, init_taichi

    try:
        seed = init_taichi(
            RenderConfig(
                arch=args.arch,
                seed=args.seed,
                log_level="INFO" if args.verbose else "WARNING",
            )
        )
        if not args.quiet:
            print(f"Using {args.arch} backend, seed {seed}")

        render_scene(
            scene=args.scene,
            width=args.width,
            height=args.height,
            num_samples=args.samples,
            seed=seed,
            output_path=args.output,
            preview=args.preview,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
