"""Matplotlib-based preview display for rendered images.

Example:
    >>> from whitted.preview.display import show_preview
    >>> world, camera = create_camera_scene()
    >>> camera.render_scene(world)
    >>> show_preview(world)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from whitted.scene.world import World


def process_image_for_display(image: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
    """Clamp an image to the displayable [0, 1] range.

    Args:
        image: Image array of shape (H, W, 3).

    Returns:
        Clamped copy of the image (NaN becomes 0).
    """
    result = np.nan_to_num(image, nan=0.0)
    return np.clip(result, 0.0, 1.0).astype(np.float32)


def show_preview(
    world: World,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display the most recent render of world in a Matplotlib window.

    The image is shown with the orientation it is saved with (buffer row 0
    at the top).

    Args:
        world: World holding at least one rendered image.
        title: Custom title (default shows the image size and sample count).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(world.image_array())

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        spp = world.sampler.num_samples if world.sampler is not None else 0
        title = f"Render Preview - {world.width}x{world.height}, {spp} SPP"

    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
