"""Taichi-based sphere ray caster with normal shading.

This package renders still images by casting one ray per pixel sample from a
pinhole camera and shading sphere hits by their surface normal, falling back
to a position-derived background gradient on a miss.

Subpackages:
    core: Vector utilities, rays, color mapping, shading and the frame renderer
    geometry: Sphere primitive and ray-sphere intersection
    scene: World storage, nearest-hit queries, scene manager and presets
    camera: Pinhole camera with viewport-based ray generation
"""

__version__ = "0.1.0"
