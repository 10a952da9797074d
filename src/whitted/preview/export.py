"""Image export utilities for rendered images.

The exported image holds the render buffer exactly: every channel is
clipped to [0, 1] and scaled by 255 with truncation (no rounding, no gamma
correction). Buffer row 0 becomes the first row of the file. The file
format follows the extension; the demo scripts write BMP.

Example:
    >>> from whitted.preview.export import save_world_image
    >>> world, camera = create_shading_scene()
    >>> camera.render_scene(world)
    >>> save_world_image(world, "shading.bmp")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from whitted.scene.world import World


def image_to_uint8(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Convert a float image in [0, 1] to uint8.

    Values outside [0, 1] (and NaN, which becomes 0) are clipped first;
    the scaled value is truncated toward zero.

    Args:
        image: Float array of any shape.

    Returns:
        Array of the same shape with dtype uint8.
    """
    clipped = np.clip(np.nan_to_num(image, nan=0.0), 0.0, 1.0)
    return (clipped * 255).astype(np.uint8)


def save_image(
    filepath: str,
    width: int,
    height: int,
    image: npt.NDArray[np.float32],
) -> None:
    """Save a scan-order colour buffer as an 8-bit RGB image.

    Args:
        filepath: Output file path; the extension picks the format.
        width: Image width in pixels.
        height: Image height in pixels.
        image: Colours of shape (width * height, 3) or (height, width, 3),
            row 0 first.

    Raises:
        ValueError: If the buffer does not hold width * height colours.
    """
    image = np.asarray(image, dtype=np.float32)
    if image.size != width * height * 3:
        raise ValueError(
            f"Image buffer of shape {image.shape} does not match {width}x{height} RGB"
        )

    image_uint8 = image_to_uint8(image.reshape(height, width, 3))

    # Save using Pillow
    pil_image = PILImage.fromarray(image_uint8, mode="RGB")
    pil_image.save(filepath)


def save_world_image(world: World, filepath: str) -> None:
    """Save the most recent render held by world."""
    save_image(filepath, world.width, world.height, world.image_array())
