"""The World: everything a camera needs to render a scene.

A World aggregates the image dimensions, the background colour, one shared
sampler, an ordered list of shapes, an optional ambient light, an ordered
list of lights and the output image buffer.

Shapes, materials and lights are plain Python objects while the scene is
being built. upload() writes them into the Taichi field registries the
render kernel reads: spheres into whitted.scene.intersection, materials
into their type-specific registries plus the unified material table kept
here, lights into whitted.lights.registry. A material shared by several
shapes is registered once and all of them get the same material id.

The image buffer belongs to the World and only grows: each render appends
width * height colours in scan order (row 0 left to right, then row 1, ...).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.sampler import RegularSampler
    >>> from whitted.lights import AmbientLight, DirectionalLight
    >>> from whitted.materials import Matte
    >>> from whitted.scene.world import World
    >>> world = World(width=64, height=64, sampler=RegularSampler(1, 1))
    >>> red = Matte(kd=0.5, ka=0.05, color=(1.0, 0.0, 0.0))
    >>> world.add_sphere((0.0, 0.0, -600.0), 128.0, color=(1.0, 0.0, 0.0), material=red)
    >>> world.set_ambient(AmbientLight(radiance_scale=0.05))
    >>> world.add_light(DirectionalLight(direction=(0.0, 0.0, 1.0), radiance_scale=4.0))
"""

import logging
from dataclasses import dataclass
from enum import IntEnum

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.core.ray import vec3
from whitted.core.sampler import Sampler
from whitted.lights.light import Light
from whitted.lights.registry import add_light, clear_lights, set_ambient_light
from whitted.materials.matte import Matte, add_matte_material, clear_matte_materials
from whitted.scene.intersection import add_sphere, clear_scene

logger = logging.getLogger(__name__)

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048


class MaterialType(IntEnum):
    """Enumeration of supported material types.

    Used for material dispatch in the integrator to determine which
    shade function to call.
    """

    MATTE = 0


# Maximum number of materials across all types
MAX_MATERIALS = 256

# material_types[i] stores the MaterialType for material_id i
material_types = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
# material_type_indices[i] stores the type-local index for material_id i
material_type_indices = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())

# Colour returned for samples whose ray hits nothing
_background = ti.Vector.field(3, dtype=ti.f32, shape=())


def _clear_material_tracking() -> None:
    """Clear the unified material table."""
    num_materials[None] = 0


def register_material(material: Matte) -> int:
    """Store a material in its type registry and assign a unified id.

    Args:
        material: The material to register.

    Returns:
        The unified material id.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If the material type is not supported.
    """
    if not isinstance(material, Matte):
        raise ValueError(f"Unsupported material type: {type(material).__name__}")

    material_id = num_materials[None]
    if material_id >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    type_index = add_matte_material(material)
    material_types[material_id] = int(MaterialType.MATTE)
    material_type_indices[material_id] = type_index
    num_materials[None] = material_id + 1

    return material_id


def get_material_count() -> int:
    """Get the number of registered materials."""
    return int(num_materials[None])


@ti.func
def get_material_type(material_id: ti.i32) -> ti.i32:
    """Get the material type for a given material ID.

    Returns:
        The material type as an integer (see MaterialType enum), or -1 for
        an invalid id (including the -1 of shapes without a material).
    """
    result = -1
    if 0 <= material_id < num_materials[None]:
        result = material_types[material_id]
    return result


@ti.func
def get_material_type_index(material_id: ti.i32) -> ti.i32:
    """Get the index into the type-specific registry, or -1."""
    result = -1
    if 0 <= material_id < num_materials[None]:
        result = material_type_indices[material_id]
    return result


@ti.func
def get_background() -> vec3:
    """Background colour of the uploaded world."""
    return _background[None]


@dataclass
class SphereInfo:
    """A sphere in the world.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere (not validated).
        color: Flat colour, reported when the sphere has no material.
        material: Shared material, or None.
    """

    center: tuple[float, float, float]
    radius: float
    color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    material: Matte | None = None


class World:
    """Scene container and owner of the output image.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        background: Colour of samples that hit nothing.
        sampler: The sampler shared by every pixel.
        scene: Shapes in insertion order.
        ambient: The ambient light, or None for a black ambient term.
        lights: Lights in insertion order.
        image: Rendered colours, shape (k, 3), appended by every render.
    """

    def __init__(
        self,
        width: int = 600,
        height: int = 600,
        background: tuple[float, float, float] = (0.0, 0.0, 0.0),
        sampler: Sampler | None = None,
    ) -> None:
        """Create an empty world.

        Raises:
            ValueError: If a dimension is not positive or exceeds the maximum.
        """
        if width < 1 or height < 1:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({width}x{height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )

        self.width = width
        self.height = height
        self.background = tuple(float(c) for c in background)
        self.sampler = sampler
        self.scene: list[SphereInfo] = []
        self.ambient: Light | None = None
        self.lights: list[Light] = []
        self.image: npt.NDArray[np.float32] = np.zeros((0, 3), dtype=np.float32)

    # =========================================================================
    # Scene construction
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        color: tuple[float, float, float] = (0.0, 0.0, 0.0),
        material: Matte | None = None,
    ) -> SphereInfo:
        """Add a sphere to the scene.

        Returns:
            The SphereInfo added; it can be shared with other worlds.
        """
        info = SphereInfo(
            center=tuple(float(c) for c in center),
            radius=float(radius),
            color=tuple(float(c) for c in color),
            material=material,
        )
        self.scene.append(info)
        return info

    def set_ambient(self, light: Light | None) -> None:
        """Set (or with None, remove) the ambient light."""
        self.ambient = light

    def add_light(self, light: Light) -> None:
        """Append a light to the light list."""
        self.lights.append(light)

    # =========================================================================
    # Device upload
    # =========================================================================

    def upload(self) -> None:
        """Write the world into the Taichi field registries and bind the sampler.

        Raises:
            RuntimeError: If the world has no sampler or a registry is full.
        """
        if self.sampler is None:
            raise RuntimeError("World has no sampler. Set world.sampler before rendering.")

        clear_scene()
        clear_matte_materials()
        _clear_material_tracking()
        clear_lights()

        material_ids: dict[int, int] = {}
        for shape in self.scene:
            material_id = -1
            if shape.material is not None:
                key = id(shape.material)
                if key not in material_ids:
                    material_ids[key] = register_material(shape.material)
                material_id = material_ids[key]
            add_sphere(shape.center, shape.radius, shape.color, material_id)

        if self.ambient is not None:
            set_ambient_light(self.ambient)
        for light in self.lights:
            add_light(light)

        _background[None] = self.background
        self.sampler.bind()

        logger.debug(
            "Uploaded world: %d spheres, %d materials, %d lights, ambient=%s",
            len(self.scene),
            len(material_ids),
            len(self.lights),
            self.ambient is not None,
        )

    # =========================================================================
    # Image buffer
    # =========================================================================

    @property
    def num_pixels(self) -> int:
        """Pixels in one rendered image: width * height."""
        return self.width * self.height

    def append_image(self, colors: npt.NDArray[np.float32]) -> None:
        """Append rendered colours (shape (n, 3)) to the image buffer."""
        colors = np.asarray(colors, dtype=np.float32).reshape(-1, 3)
        self.image = np.concatenate([self.image, colors], axis=0)

    def clear_image(self) -> None:
        """Drop all rendered colours."""
        self.image = np.zeros((0, 3), dtype=np.float32)

    def image_array(self) -> npt.NDArray[np.float32]:
        """The most recent render as an array of shape (height, width, 3).

        Row 0 of the array is raster row 0 of the render.

        Raises:
            RuntimeError: If the buffer holds fewer than width * height colours.
        """
        if len(self.image) < self.num_pixels:
            raise RuntimeError(
                f"Image buffer holds {len(self.image)} colours, "
                f"a {self.width}x{self.height} image needs {self.num_pixels}"
            )
        return self.image[-self.num_pixels :].reshape(self.height, self.width, 3)
