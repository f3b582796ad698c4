"""Unit tests for render configuration.

Tests cover:
- SamplingParams defaults and validation
- Fixed and jittered sample offset tables
"""

import numpy as np
import pytest


class TestSamplingParams:
    """Tests for SamplingParams."""

    def test_defaults(self):
        """Test defaults: 100 samples, first-hit mode, fixed 0.01 offset."""
        from spheretrace.core.config import SamplingParams, ShadingMode

        params = SamplingParams()
        assert params.num_samples == 100
        assert params.mode == ShadingMode.FIRST_HIT
        assert params.jitter is False
        assert params.offset == pytest.approx(0.01)
        params.validate()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"num_samples": 0},
            {"num_samples": -3},
            {"num_samples": 1025},
            {"seed": -1},
            {"mode": 7},
        ],
    )
    def test_invalid_params_raise(self, kwargs):
        """Test out-of-range parameters raise RenderParamsValidationError."""
        from spheretrace.core.config import RenderParamsValidationError, SamplingParams

        with pytest.raises(RenderParamsValidationError):
            SamplingParams(**kwargs).validate()

    def test_validation_error_is_value_error(self):
        """Test the validation error can be caught as ValueError."""
        from spheretrace.core.config import RenderParamsValidationError

        assert issubclass(RenderParamsValidationError, ValueError)

    def test_max_samples_accepted(self):
        """Test the upper bound is inclusive."""
        from spheretrace.core.config import MAX_SAMPLES, SamplingParams

        SamplingParams(num_samples=MAX_SAMPLES).validate()


class TestSampleOffsets:
    """Tests for make_sample_offsets."""

    def test_fixed_offsets(self):
        """Test fixed offsets repeat the configured value on both axes."""
        from spheretrace.core.config import SamplingParams, make_sample_offsets

        offsets = make_sample_offsets(SamplingParams(num_samples=5), 200, 100)
        assert offsets.shape == (5, 2)
        assert offsets.dtype == np.float32
        np.testing.assert_allclose(offsets, 0.01)

    def test_jitter_reproducible_for_seed(self):
        """Test the same seed gives the same table."""
        from spheretrace.core.config import SamplingParams, make_sample_offsets

        params = SamplingParams(num_samples=16, jitter=True, seed=7)
        np.testing.assert_array_equal(
            make_sample_offsets(params, 64, 32),
            make_sample_offsets(params, 64, 32),
        )

    def test_jitter_differs_between_seeds(self):
        """Test different seeds give different tables."""
        from spheretrace.core.config import SamplingParams, make_sample_offsets

        a = make_sample_offsets(SamplingParams(num_samples=16, jitter=True, seed=1), 64, 32)
        b = make_sample_offsets(SamplingParams(num_samples=16, jitter=True, seed=2), 64, 32)
        assert not np.array_equal(a, b)

    def test_jitter_within_pixel_footprint(self):
        """Test jittered offsets stay inside one pixel in NDC units."""
        from spheretrace.core.config import SamplingParams, make_sample_offsets

        width, height = 64, 32
        offsets = make_sample_offsets(
            SamplingParams(num_samples=256, jitter=True, seed=3), width, height
        )
        assert offsets.shape == (256, 2)
        assert np.all(offsets >= 0.0)
        assert np.all(offsets[:, 0] <= 2.0 / width)
        assert np.all(offsets[:, 1] <= 2.0 / height)

    def test_invalid_params_raise(self):
        """Test the table is not built from invalid parameters."""
        from spheretrace.core.config import (
            RenderParamsValidationError,
            SamplingParams,
            make_sample_offsets,
        )

        with pytest.raises(RenderParamsValidationError):
            make_sample_offsets(SamplingParams(num_samples=0), 10, 10)
