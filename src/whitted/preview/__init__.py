"""Preview module for output and visualization.

Components:
    display: Matplotlib-based preview of a rendered World
    export: 8-bit image export via Pillow

Example:
    >>> from whitted.preview import save_world_image, show_preview
    >>> camera.render_scene(world)
    >>> save_world_image(world, "output.bmp")
    >>> show_preview(world)
"""

from whitted.preview.display import process_image_for_display, show_preview
from whitted.preview.export import image_to_uint8, save_image, save_world_image

__all__ = [
    # Display functions
    "show_preview",
    "process_image_for_display",
    # Export functions
    "save_image",
    "save_world_image",
    "image_to_uint8",
]
