"""Geometry module for the sphere primitive.

Components:
    sphere: Sphere and HitRecord dataclasses, ray-sphere intersection
        (trace_ray) and hit resolution (get_ray_hit)

Intersection routines are Taichi functions (@ti.func) callable from any
kernel. A miss is reported through the NO_HIT sentinel:
    t = trace_ray(ray, sphere, t_min, t_max)
    rec = get_ray_hit(ray, sphere, t)
"""

from .sphere import NO_HIT, HitRecord, Sphere, get_ray_hit, make_sphere, trace_ray

__all__ = [
    "NO_HIT",
    "Sphere",
    "HitRecord",
    "trace_ray",
    "get_ray_hit",
    "make_sphere",
]
