"""Light interface shared by every light type.

Every light carries a colour and a radiance scale factor; its radiance is
their product, the same at every shading point. Concrete lights differ in
the direction they report for a shading point.

Python-side light objects only hold configuration. The World uploads them
into the device registry (whitted.lights.registry), where each entry is
tagged with its LightType for dispatch inside kernels.
"""

from __future__ import annotations

from enum import IntEnum

import numpy as np
import numpy.typing as npt


class LightType(IntEnum):
    """Enumeration of supported light types.

    Used for light dispatch in the shading functions.
    """

    AMBIENT = 0
    DIRECTIONAL = 1


class Light:
    """Base class for lights.

    Attributes:
        color: Light colour (R, G, B).
        radiance_scale: Scale factor applied to the colour.
    """

    light_type: LightType

    def __init__(
        self,
        color: tuple[float, float, float] = (1.0, 1.0, 1.0),
        radiance_scale: float = 1.0,
    ) -> None:
        self.color = tuple(float(c) for c in color)
        self.radiance_scale = float(radiance_scale)

    def scale_radiance(self, factor: float) -> None:
        """Set the radiance scale factor (replaces, does not multiply)."""
        self.radiance_scale = float(factor)

    def set_color(self, color: tuple[float, float, float]) -> None:
        """Set the light colour."""
        self.color = tuple(float(c) for c in color)

    def radiance(self) -> npt.NDArray[np.float64]:
        """Radiance delivered to any shading point: radiance_scale * color."""
        return self.radiance_scale * np.asarray(self.color, dtype=np.float64)

    def get_direction(self) -> npt.NDArray[np.float64]:
        """Direction toward the light, as used by the diffuse term."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(color={self.color}, "
            f"radiance_scale={self.radiance_scale})"
        )
