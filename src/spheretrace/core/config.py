"""Render configuration: shading mode and per-pixel sampling parameters.

Sample offsets are produced on the Python side as a NumPy table and uploaded
to a Taichi field before each frame. Fixed offsets reproduce the classic
single-offset behaviour; jittered offsets come from a seeded
``numpy.random.Generator`` so renders stay reproducible.
"""

from dataclasses import dataclass
from enum import IntEnum

import numpy as np
import numpy.typing as npt

# Upper bound on samples per pixel (size of the offset table field)
MAX_SAMPLES = 1024

# Default samples per pixel
DEFAULT_NUM_SAMPLES = 100

# Fixed sample offset in NDC units, applied on both axes
DEFAULT_SAMPLE_OFFSET = 0.01

# Valid parametric range for primary rays (both bounds exclusive)
T_MIN = 0.0
T_MAX = float("inf")


class ShadingMode(IntEnum):
    """How the per-pixel resolver combines samples and spheres.

    FIRST_HIT: Decide on the first sample against the first sphere only.
    AVERAGED: Nearest hit across the world for every sample, then average.
    """

    FIRST_HIT = 0
    AVERAGED = 1


class RenderParamsValidationError(ValueError):
    """Raised when sampling parameters are out of range."""


@dataclass
class SamplingParams:
    """Per-pixel sampling configuration.

    Attributes:
        num_samples: Samples per pixel, in [1, MAX_SAMPLES].
        mode: Shading mode (see ShadingMode).
        jitter: If True, draw offsets uniformly within one pixel footprint
            instead of using the fixed offset.
        seed: Seed for the jitter generator.
        offset: Fixed NDC offset used when jitter is False.
    """

    num_samples: int = DEFAULT_NUM_SAMPLES
    mode: ShadingMode = ShadingMode.FIRST_HIT
    jitter: bool = False
    seed: int = 0
    offset: float = DEFAULT_SAMPLE_OFFSET

    def validate(self) -> None:
        """Check the parameters.

        Raises:
            RenderParamsValidationError: If num_samples is outside
                [1, MAX_SAMPLES], the mode is unknown, or the seed is negative.
        """
        if not 1 <= self.num_samples <= MAX_SAMPLES:
            raise RenderParamsValidationError(
                f"num_samples ({self.num_samples}) must be in [1, {MAX_SAMPLES}]"
            )
        if self.mode not in tuple(ShadingMode):
            raise RenderParamsValidationError(f"Unknown shading mode: {self.mode!r}")
        if self.seed < 0:
            raise RenderParamsValidationError(f"seed ({self.seed}) must be non-negative")


def make_sample_offsets(
    params: SamplingParams,
    width: int,
    height: int,
) -> npt.NDArray[np.float32]:
    """Build the per-sample NDC offset table for a frame.

    Args:
        params: Sampling configuration (validated here).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Array of shape (num_samples, 2) with (dx, dy) offsets in NDC units.
        Jittered offsets lie in [0, 2/width) x [0, 2/height), one pixel's
        footprint.

    Raises:
        RenderParamsValidationError: If params are invalid.
    """
    params.validate()
    n = params.num_samples

    if not params.jitter:
        return np.full((n, 2), params.offset, dtype=np.float32)

    rng = np.random.default_rng(params.seed)
    footprint = np.array([2.0 / width, 2.0 / height], dtype=np.float64)
    return (rng.random((n, 2)) * footprint).astype(np.float32)
