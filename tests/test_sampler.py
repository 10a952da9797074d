"""Unit tests for the multi-set samplers.

Tests cover:
- Pattern sizes and value ranges
- Regular grid layout and truncation of non-square counts
- Shuffle table permutations
- Set-wise drawing through the device cursor
- Argument validation and seeding
"""

import numpy as np
import pytest


class TestSamplerConstruction:
    """Tests for pattern generation on the host."""

    @pytest.mark.parametrize("cls_name", ["RegularSampler", "RandomSampler"])
    def test_pattern_size_and_range(self, cls_name):
        from whitted.core import sampler as sampler_module

        sampler = getattr(sampler_module, cls_name)(16, 5, seed=1)
        samples = sampler.samples

        assert samples.shape == (16 * 5, 2)
        assert np.all(samples >= 0.0)
        assert np.all(samples < 1.0)

    def test_regular_grid_layout(self):
        """Each set is the 2x2 grid of cell centres, p outer and q inner."""
        from whitted.core.sampler import RegularSampler

        sampler = RegularSampler(4, 2, seed=0)
        expected = np.array([[0.25, 0.25], [0.75, 0.25], [0.25, 0.75], [0.75, 0.75]])

        samples = sampler.samples
        assert np.allclose(samples[:4], expected)
        assert np.allclose(samples[4:], expected)

    def test_regular_truncates_non_square_count(self):
        from whitted.core.sampler import RegularSampler

        sampler = RegularSampler(10, 1, seed=0)
        assert sampler.num_samples == 9
        assert sampler.samples.shape == (9, 2)

    def test_shuffled_indices_are_permutations(self):
        from whitted.core.sampler import RandomSampler

        sampler = RandomSampler(8, 6, seed=3)
        table = sampler.shuffled_indices.reshape(6, 8)

        for row in table:
            assert sorted(row.tolist()) == list(range(8))

    def test_seed_reproduces_patterns(self):
        from whitted.core.sampler import RandomSampler

        a = RandomSampler(4, 3, seed=11)
        b = RandomSampler(4, 3, seed=11)

        assert np.array_equal(a.samples, b.samples)
        assert np.array_equal(a.shuffled_indices, b.shuffled_indices)

    @pytest.mark.parametrize("num_samples,num_sets", [(0, 1), (1, 0), (-4, 2)])
    def test_invalid_counts_raise(self, num_samples, num_sets):
        from whitted.core.sampler import RandomSampler

        with pytest.raises(ValueError):
            RandomSampler(num_samples, num_sets)

    def test_capacity_exceeded_raises(self):
        from whitted.core.sampler import MAX_SAMPLER_POINTS, RandomSampler

        with pytest.raises(ValueError, match="maximum"):
            RandomSampler(MAX_SAMPLER_POINTS, 2)


class TestSampleUnitSquare:
    """Tests for drawing samples through the device cursor."""

    def test_draws_visit_each_point_of_one_set_once(self):
        """num_samples draws from a set boundary return exactly one set."""
        from whitted.core.sampler import RandomSampler

        sampler = RandomSampler(4, 3, seed=5)
        sets = sampler.samples.reshape(3, 4, 2)

        for _ in range(3):
            drawn = np.array(
                [sampler.sample_unit_square() for _ in range(4)], dtype=np.float32
            )
            active = sets[sampler.jump // sampler.num_samples]

            assert sorted(map(tuple, drawn.tolist())) == sorted(map(tuple, active.tolist()))

    def test_cursor_advances(self):
        from whitted.core.sampler import RegularSampler

        sampler = RegularSampler(4, 2, seed=0)
        assert sampler.count == 0

        sampler.sample_unit_square()
        sampler.sample_unit_square()

        assert sampler.count == 2
        assert sampler.jump in (0, 4)

    def test_single_set_regular_draws_grid(self):
        from whitted.core.sampler import RegularSampler

        sampler = RegularSampler(4, 1, seed=0)
        drawn = {tuple(np.round(sampler.sample_unit_square(), 6)) for _ in range(4)}

        assert drawn == {(0.25, 0.25), (0.75, 0.25), (0.25, 0.75), (0.75, 0.75)}

    def test_binding_another_sampler_keeps_cursor(self):
        from whitted.core.sampler import RandomSampler, RegularSampler

        first = RegularSampler(4, 1, seed=0)
        first.sample_unit_square()
        first.sample_unit_square()

        second = RandomSampler(2, 2, seed=0)
        second.sample_unit_square()

        assert not first.is_bound
        assert first.count == 2
        assert second.count == 1

        first.sample_unit_square()
        assert first.is_bound
        assert first.count == 3
