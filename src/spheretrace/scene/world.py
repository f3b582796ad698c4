"""World storage and world-level intersection queries.

Spheres live in module-level Taichi fields using a structure-of-arrays
layout. The Python side appends spheres before rendering; kernels read them
through get_sphere() and closest_hit().

closest_hit() walks every sphere and keeps the nearest hit, shrinking the
search interval as it goes. The per-pixel resolver in FIRST_HIT mode does not
use it: that mode only ever evaluates the first sphere.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.scene.world import add_sphere, clear_world, closest_hit
    >>> clear_world()
    >>> add_sphere((0.0, 0.0, -1.0), 0.5)
    >>> add_sphere((0.0, -100.5, -1.0), 100.0)
    >>> # Use closest_hit within a Taichi kernel
"""

import logging
from collections.abc import Sequence

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import Ray, to_vec3
from spheretrace.geometry.sphere import NO_HIT, Sphere, get_ray_hit, trace_ray

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

logger = logging.getLogger(__name__)


@ti.dataclass
class WorldHit:
    """Nearest intersection of a ray with the world.

    Attributes:
        hit: 1 if any sphere was hit inside the interval, 0 otherwise.
        t: The hit parameter. Only valid if hit == 1.
        n: The unnormalized surface normal. Only valid if hit == 1.
        sphere_index: Index of the sphere hit, -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    n: vec3
    sphere_index: ti.i32


# Maximum number of spheres supported in the world
MAX_SPHERES = 256

sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_world() -> None:
    """Remove all spheres from the world.

    Resets the sphere count; stale field data is overwritten by later adds.
    """
    num_spheres[None] = 0


def add_sphere(center: Sequence[float], radius: float) -> int:
    """Append a sphere to the world.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere. Zero is accepted.

    Returns:
        The index of the added sphere.

    Raises:
        ValueError: If the radius is negative.
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    if radius < 0.0:
        raise ValueError(f"Sphere radius must be non-negative, got {radius}")
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")

    sphere_centers[idx] = to_vec3(center)
    sphere_radii[idx] = radius
    num_spheres[None] = idx + 1
    logger.debug("Added sphere %d at %s (r=%s)", idx, tuple(center), radius)
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the world."""
    return int(num_spheres[None])


@ti.func
def get_sphere(index: ti.i32) -> Sphere:
    """Load sphere ``index`` from the world fields."""
    return Sphere(center=sphere_centers[index], radius=sphere_radii[index])


@ti.func
def _make_miss_record() -> WorldHit:
    return WorldHit(hit=0, t=NO_HIT, n=vec3(0.0, 0.0, 0.0), sphere_index=-1)


@ti.func
def closest_hit(ray: Ray, t_min: ti.f32, t_max: ti.f32) -> WorldHit:
    """Find the nearest sphere hit along a ray across the whole world.

    Each sphere is traced over (t_min, closest_so_far); a hit narrows the
    interval for the remaining spheres, so insertion order does not matter.

    Args:
        ray: The ray to trace.
        t_min: Lower bound of the valid parameter range (exclusive).
        t_max: Upper bound of the valid parameter range (exclusive).

    Returns:
        A WorldHit for the nearest hit, or a miss record.
    """
    closest_t = t_max
    result = _make_miss_record()

    for i in range(num_spheres[None]):
        sphere = get_sphere(i)
        t = trace_ray(ray, sphere, t_min, closest_t)
        if t != NO_HIT:
            rec = get_ray_hit(ray, sphere, t)
            closest_t = t
            result = WorldHit(hit=1, t=rec.t, n=rec.n, sphere_index=i)

    return result
