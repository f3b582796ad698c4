"""Per-pixel color resolution.

Two resolvers share the camera, the sample offset table and the world:

per_pixel (ShadingMode.FIRST_HIT)
    Walks spheres in world order and samples in table order, but decides on
    the very first (sphere, sample) pair: a hit returns that sample's normal
    color, a miss returns the background gradient. Later samples and spheres
    are never evaluated, so this mode renders only the first sphere and no
    averaging takes place. Kept for output compatibility with earlier renders.

per_pixel_averaged (ShadingMode.AVERAGED)
    For every sample, finds the nearest hit across the whole world, adds the
    normal color (or the background gradient on a miss) and averages the
    sum with write_color().

Both return black for an empty world.
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from spheretrace.camera.pinhole import get_ray
from spheretrace.core.color import (
    background_color,
    ndc_to_viewport,
    normal_to_color,
    rgb8,
    to_rgb8,
    write_color,
)
from spheretrace.core.config import MAX_SAMPLES, T_MAX, T_MIN
from spheretrace.core.ray import Ray, normalize
from spheretrace.geometry.sphere import get_ray_hit, trace_ray
from spheretrace.scene.world import closest_hit, get_sphere, num_spheres

vec3 = tm.vec3

# =============================================================================
# Sample Offset Table
# =============================================================================

_sample_offsets = ti.Vector.field(2, dtype=ti.f32, shape=MAX_SAMPLES)
_num_samples = ti.field(dtype=ti.i32, shape=())


def upload_sample_offsets(offsets: npt.NDArray[np.float32]) -> None:
    """Copy a (num_samples, 2) NDC offset table into the sampler fields.

    Args:
        offsets: Offsets as produced by make_sample_offsets().

    Raises:
        ValueError: If the table is not (n, 2) with 1 <= n <= MAX_SAMPLES.
    """
    offsets = np.asarray(offsets, dtype=np.float32)
    if offsets.ndim != 2 or offsets.shape[1] != 2:
        raise ValueError(f"Offsets must have shape (n, 2), got {offsets.shape}")
    n = offsets.shape[0]
    if not 1 <= n <= MAX_SAMPLES:
        raise ValueError(f"Offset count ({n}) must be in [1, {MAX_SAMPLES}]")

    padded = np.zeros((MAX_SAMPLES, 2), dtype=np.float32)
    padded[:n] = offsets
    _sample_offsets.from_numpy(padded)
    _num_samples[None] = n


def clear_sample_offsets() -> None:
    """Forget the uploaded offset table; set_data() refuses to run until the next upload."""
    _num_samples[None] = 0


def get_uploaded_sample_count() -> int:
    """Number of offsets currently uploaded (0 before the first upload)."""
    return int(_num_samples[None])


# =============================================================================
# Per-Pixel Resolvers
# =============================================================================


@ti.func
def _sample_ray(x: ti.f32, y: ti.f32, s: ti.i32) -> Ray:
    offset = _sample_offsets[s]
    return get_ray(ndc_to_viewport(x + offset.x), ndc_to_viewport(y + offset.y))


@ti.func
def per_pixel(x: ti.f32, y: ti.f32) -> rgb8:
    """Resolve the color of the pixel at NDC position (x, y), FIRST_HIT mode.

    Args:
        x: Horizontal NDC coordinate in [-1, 1].
        y: Vertical NDC coordinate in [-1, 1].

    Returns:
        The normal color of the first sphere if the first sample hits it,
        the background gradient if it misses, black if the world is empty.
    """
    color = rgb8(0, 0, 0)
    pixel_color = vec3(0.0, 0.0, 0.0)
    decided = 0

    for i in range(num_spheres[None]):
        if decided == 0:
            sphere = get_sphere(i)
            for s in range(_num_samples[None]):
                if decided == 0:
                    ray = _sample_ray(x, y, s)
                    t = trace_ray(ray, sphere, T_MIN, T_MAX)
                    rec = get_ray_hit(ray, sphere, t)
                    if rec.t >= 0.0:
                        pixel_color += 255.0 * normal_to_color(normalize(rec.n))
                        color = to_rgb8(pixel_color)
                    else:
                        color = to_rgb8(255.0 * background_color(x, y))
                    decided = 1

    return color


@ti.func
def per_pixel_averaged(x: ti.f32, y: ti.f32) -> rgb8:
    """Resolve the color of the pixel at NDC position (x, y), AVERAGED mode.

    Args:
        x: Horizontal NDC coordinate in [-1, 1].
        y: Vertical NDC coordinate in [-1, 1].

    Returns:
        The average over all samples of the nearest-hit normal color or the
        background gradient; black if the world is empty.
    """
    color = rgb8(0, 0, 0)

    if num_spheres[None] > 0:
        n = _num_samples[None]
        color_sum = vec3(0.0, 0.0, 0.0)
        for s in range(n):
            ray = _sample_ray(x, y, s)
            rec = closest_hit(ray, T_MIN, T_MAX)
            if rec.hit == 1:
                color_sum += normal_to_color(normalize(rec.n))
            else:
                color_sum += background_color(x, y)
        color = write_color(color_sum, n)

    return color
