"""Sphere primitive with ray-sphere intersection.

The ray-sphere intersection solves

    |origin + t * direction - center|^2 = radius^2

for t using the half-b form of the quadratic formula. The nearest root inside
the open interval (t_min, t_max) wins; the far root is the fallback.

Intersection failure is signalled with the sentinel ``NO_HIT`` (-1.0) rather
than a flag. This collides with a genuine hit at t == -1, which can only occur
for t_min < -1; every caller in this package traces over (0, inf).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.geometry.sphere import Sphere, trace_ray
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -1), radius=0.5)
    >>> # Use trace_ray / get_ray_hit within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import Ray, dot, ray_at

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Returned by trace_ray when no root lies inside (t_min, t_max)
NO_HIT = -1.0


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere. Zero degenerates to a point.
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Result of resolving a hit parameter against a sphere.

    Attributes:
        t: The hit parameter, or NO_HIT when the ray missed.
        n: The surface normal (hit point minus center). Not normalized, and
            meaningless unless t >= 0.
    """

    t: ti.f32
    n: vec3


@ti.func
def trace_ray(ray: Ray, sphere: Sphere, t_min: ti.f32, t_max: ti.f32) -> ti.f32:
    """Find the nearest ray parameter inside (t_min, t_max) hitting the sphere.

    Quadratic coefficients in half-b form:
        a = dot(direction, direction)
        half_b = dot(origin - center, direction)
        c = dot(origin - center, origin - center) - radius^2
        discriminant = half_b^2 - a*c

    A discriminant of exactly zero (tangent ray) is reported as a miss.
    Both interval bounds are exclusive.

    Args:
        ray: The ray to test. Its direction must be non-zero.
        sphere: The sphere to test against.
        t_min: Lower bound of the valid parameter range (exclusive).
        t_max: Upper bound of the valid parameter range (exclusive).

    Returns:
        The nearest valid root, the far root if only it is valid, or NO_HIT.
    """
    oc = ray.origin - sphere.center
    a = dot(ray.direction, ray.direction)
    half_b = dot(oc, ray.direction)
    c = dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    result = NO_HIT
    if discriminant > 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t_near = (-half_b - sqrt_d) / a
        t_far = (-half_b + sqrt_d) / a

        if t_min < t_near < t_max:
            result = t_near
        elif t_min < t_far < t_max:
            result = t_far

    return result


@ti.func
def get_ray_hit(ray: Ray, sphere: Sphere, t: ti.f32) -> HitRecord:
    """Resolve hit parameter t into a HitRecord.

    The record is produced whether or not t is a real hit; callers check
    ``t >= 0`` before trusting the normal.

    Args:
        ray: The traced ray.
        sphere: The sphere the parameter was computed against.
        t: The parameter returned by trace_ray (possibly NO_HIT).

    Returns:
        HitRecord with t and the unnormalized normal ray_at(t) - center.
    """
    point = ray_at(ray, t)
    return HitRecord(t=t, n=point - sphere.center)


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius inside a kernel."""
    return Sphere(center=center, radius=radius)
