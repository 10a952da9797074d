"""Multi-set sample patterns for anti-aliased pixel sampling.

A sampler pre-generates num_sets independent patterns of num_samples points
in the unit square, plus one random permutation of [0, num_samples) per
set. Every num_samples draws it jumps to a randomly chosen set and then
hands out that set's points in permuted order. Neighbouring pixels thus
see different patterns, and the same pattern position does not always land
on the same sub-pixel offset, which hides the aliasing a fixed jitter
pattern would produce.

Patterns and the shuffle table are built on the host with a seeded NumPy
generator and uploaded to Taichi fields. The draw cursor (count, jump)
also lives in a field and is advanced by sample_unit_square(), a Taichi
function called from the serial render kernel. Only one sampler is bound
to the fields at a time; binding another one saves the cursor of the
previous sampler first.

The cursor is shared mutable state with no synchronization: draws must
come from a single serial consumer.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, random_seed=0)
    >>> from whitted.core.sampler import RegularSampler
    >>> sampler = RegularSampler(num_samples=4, num_sets=1, seed=0)
    >>> point = sampler.sample_unit_square()  # One of the 2x2 grid points
"""

import logging
import math

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.core.ray import vec2

logger = logging.getLogger(__name__)

# Maximum num_sets * num_samples across one sampler (preallocated)
MAX_SAMPLER_POINTS = 65536

# Pattern storage: set k occupies [k * num_samples, (k + 1) * num_samples)
_samples = ti.Vector.field(2, dtype=ti.f32, shape=MAX_SAMPLER_POINTS)
_shuffled_indices = ti.field(dtype=ti.i32, shape=MAX_SAMPLER_POINTS)

_num_samples = ti.field(dtype=ti.i32, shape=())
_num_sets = ti.field(dtype=ti.i32, shape=())

# Draw cursor: count only increases, jump selects the active set
_count = ti.field(dtype=ti.i32, shape=())
_jump = ti.field(dtype=ti.i32, shape=())

# The Sampler instance whose data currently sits in the fields
_bound_sampler: "Sampler | None" = None


class Sampler:
    """Base class for multi-set samplers.

    Subclasses implement generate_samples(), which must return an array of
    shape (num_sets * num_samples, 2) with every point in [0, 1)^2.

    Attributes:
        num_samples: Samples per set.
        num_sets: Number of independent pre-generated sets.
        seed: Seed of the host generator (None means entropy).
    """

    def __init__(self, num_samples: int, num_sets: int, seed: int | None = None) -> None:
        """Generate the shuffle table and the sample sets.

        Args:
            num_samples: Samples per set (>= 1).
            num_sets: Number of sets (>= 1).
            seed: Seed for the host generator. None draws from system entropy,
                so two samplers built without a seed differ.

        Raises:
            ValueError: If a count is below 1 or the pattern does not fit in
                MAX_SAMPLER_POINTS.
        """
        if num_samples < 1:
            raise ValueError(f"num_samples must be >= 1, got {num_samples}")
        if num_sets < 1:
            raise ValueError(f"num_sets must be >= 1, got {num_sets}")

        self.num_samples = self._effective_num_samples(num_samples)
        self.num_sets = num_sets
        self.seed = seed

        if self.num_samples * self.num_sets > MAX_SAMPLER_POINTS:
            raise ValueError(
                f"Sampler needs {self.num_samples * self.num_sets} points, "
                f"maximum is {MAX_SAMPLER_POINTS}"
            )

        self._rng = np.random.default_rng(seed)
        self._count = 0
        self._jump = 0

        self._shuffled_indices = self._setup_shuffled_indices()
        self._samples = self.generate_samples().astype(np.float32)

        logger.debug(
            "%s built: %d samples x %d sets (seed=%s)",
            type(self).__name__,
            self.num_samples,
            self.num_sets,
            seed,
        )

    def _effective_num_samples(self, num_samples: int) -> int:
        """Number of samples per set the pattern actually provides."""
        return num_samples

    def _setup_shuffled_indices(self) -> npt.NDArray[np.int32]:
        """Build one random permutation of [0, num_samples) per set."""
        table = [self._rng.permutation(self.num_samples) for _ in range(self.num_sets)]
        return np.concatenate(table).astype(np.int32)

    def generate_samples(self) -> npt.NDArray[np.float64]:
        """Generate num_sets patterns of num_samples points each."""
        raise NotImplementedError

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def samples(self) -> npt.NDArray[np.float32]:
        """All pattern points, set after set, shape (num_sets * num_samples, 2)."""
        return self._samples.copy()

    @property
    def shuffled_indices(self) -> npt.NDArray[np.int32]:
        """Concatenated per-set permutation table."""
        return self._shuffled_indices.copy()

    @property
    def is_bound(self) -> bool:
        """Whether this sampler's data currently sits in the device fields."""
        return _bound_sampler is self

    @property
    def count(self) -> int:
        """Number of samples drawn so far."""
        if self.is_bound:
            return int(_count[None])
        return self._count

    @property
    def jump(self) -> int:
        """Offset of the active set in the pattern and shuffle table."""
        if self.is_bound:
            return int(_jump[None])
        return self._jump

    # =========================================================================
    # Device binding
    # =========================================================================

    def bind(self) -> None:
        """Upload this sampler's patterns and cursor into the device fields.

        No-op when the sampler is already bound.
        """
        global _bound_sampler

        if _bound_sampler is self:
            return
        if _bound_sampler is not None:
            _bound_sampler._save_cursor()

        total = self.num_samples * self.num_sets

        samples = np.zeros((MAX_SAMPLER_POINTS, 2), dtype=np.float32)
        samples[:total] = self._samples
        indices = np.zeros(MAX_SAMPLER_POINTS, dtype=np.int32)
        indices[:total] = self._shuffled_indices

        _samples.from_numpy(samples)
        _shuffled_indices.from_numpy(indices)
        _num_samples[None] = self.num_samples
        _num_sets[None] = self.num_sets
        _count[None] = self._count
        _jump[None] = self._jump

        _bound_sampler = self
        logger.debug("Bound %s (count=%d)", type(self).__name__, self._count)

    def _save_cursor(self) -> None:
        """Copy the device cursor back into this (bound) sampler."""
        self._count = int(_count[None])
        self._jump = int(_jump[None])

    def sample_unit_square(self) -> tuple[float, float]:
        """Draw the next sample point from the host.

        Runs a one-shot kernel around the device sample_unit_square(), so the
        cursor advances exactly as it does during a render.

        Returns:
            The (x, y) sample point in [0, 1)^2.
        """
        self.bind()
        point = _draw_sample()
        return (float(point[0]), float(point[1]))


class RegularSampler(Sampler):
    """Regular grid sampler.

    Each set is the same n x n grid of cell centres with n = floor(sqrt(N)).
    A num_samples that is not a perfect square is truncated to n^2; the
    truncated value is what num_samples reports.
    """

    def _effective_num_samples(self, num_samples: int) -> int:
        n = math.isqrt(num_samples)
        if n * n != num_samples:
            logger.debug(
                "RegularSampler: %d samples is not a perfect square, using %d",
                num_samples,
                n * n,
            )
        return n * n

    def generate_samples(self) -> npt.NDArray[np.float64]:
        n = math.isqrt(self.num_samples)
        points = []
        for _ in range(self.num_sets):
            for p in range(n):
                for q in range(n):
                    points.append(((q + 0.5) / n, (p + 0.5) / n))
        return np.array(points, dtype=np.float64).reshape(-1, 2)


class RandomSampler(Sampler):
    """Uniform random sampler: every point drawn independently in [0, 1)^2."""

    def generate_samples(self) -> npt.NDArray[np.float64]:
        return self._rng.random((self.num_sets * self.num_samples, 2))


# =============================================================================
# Device-side sampling
# =============================================================================


@ti.func
def get_num_samples() -> ti.i32:
    """Samples per set of the bound sampler."""
    return _num_samples[None]


@ti.func
def sample_unit_square() -> vec2:
    """Return the next sample point of the bound sampler.

    When the cursor sits on a set boundary a new set is chosen uniformly at
    random; the point is then looked up through that set's permutation.
    Advances the cursor by one.

    Returns:
        A sample point in [0, 1)^2.
    """
    n = _num_samples[None]

    if _count[None] % n == 0:
        num_sets = _num_sets[None]
        # ti.random(ti.f32) is in [0, 1); the clamp guards float rounding
        set_index = ti.min(ti.cast(ti.random(ti.f32) * num_sets, ti.i32), num_sets - 1)
        _jump[None] = set_index * n

    jump = _jump[None]
    point = _samples[jump + _shuffled_indices[jump + _count[None] % n]]
    _count[None] += 1

    return point


@ti.kernel
def _draw_sample() -> vec2:
    """Draw a single sample point (host entry point)."""
    return sample_unit_square()
