"""Runtime configuration, Taichi initialization and logging setup.

Randomness in a render comes from two places: the host-side generator
that builds a sampler's patterns and shuffle table, and Taichi's device
generator that picks a sample set for every pixel. Both are seeded from
an explicit value so a render can be reproduced; when no seed is given an
entropy-derived one is drawn and returned so it can be logged.

Example:
    >>> from whitted.core.config import RenderConfig, init_taichi
    >>> seed = init_taichi(RenderConfig(arch="cpu", seed=7))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import taichi as ti

logger = logging.getLogger(__name__)

# Taichi's random_seed must fit in a signed 32-bit integer
MAX_SEED = 2**31 - 1

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ARCHES = {
    "cpu": ti.cpu,
    "gpu": ti.gpu,
    "cuda": ti.cuda,
    "vulkan": ti.vulkan,
    "metal": ti.metal,
}


@dataclass
class RenderConfig:
    """Process-wide render settings.

    Attributes:
        arch: Taichi backend name ("cpu", "gpu", "cuda", "vulkan", "metal").
            The reference render loop is serial, so "cpu" is the default.
        seed: Seed for Taichi's device generator. None draws one from
            system entropy.
        debug: Enable Taichi debug mode (bounds checks in kernels).
        log_level: Level name for the "whitted" logger.
    """

    arch: str = "cpu"
    seed: int | None = None
    debug: bool = False
    log_level: str = "WARNING"


def resolve_seed(seed: int | None) -> int:
    """Return seed unchanged, or an entropy-derived seed when it is None.

    Raises:
        ValueError: If seed is outside [0, MAX_SEED].
    """
    if seed is None:
        return int(np.random.SeedSequence().generate_state(1)[0] & MAX_SEED)
    if seed < 0 or seed > MAX_SEED:
        raise ValueError(f"Seed must be in [0, {MAX_SEED}], got {seed}")
    return int(seed)


def init_taichi(config: RenderConfig | None = None) -> int:
    """Initialize the Taichi runtime from a RenderConfig.

    Must run before any module that declares Taichi fields is imported.

    Args:
        config: Settings to apply. Defaults to RenderConfig().

    Returns:
        The seed handed to Taichi's random generator.

    Raises:
        ValueError: If the arch name is unknown.
    """
    if config is None:
        config = RenderConfig()

    arch = _ARCHES.get(config.arch.lower())
    if arch is None:
        raise ValueError(
            f"Unknown Taichi arch '{config.arch}'. Expected one of {sorted(_ARCHES)}"
        )

    seed = resolve_seed(config.seed)
    configure_logging(config.log_level)
    ti.init(arch=arch, random_seed=seed, debug=config.debug)
    logger.info("Taichi initialized (arch=%s, seed=%d)", config.arch, seed)
    return seed


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Returns:
        The "whitted" logger.
    """
    package_logger = logging.getLogger("whitted")
    package_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    return package_logger
