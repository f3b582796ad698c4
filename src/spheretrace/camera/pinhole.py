"""Pinhole camera model for viewport-based ray generation.

The camera stores an origin and a viewport rectangle (lower-left corner plus
horizontal and vertical extents). A ray through normalized viewport
coordinates (u, v) points from the origin to

    lower_left_corner + u * horizontal + v * vertical

The direction is left unnormalized. u and v are nominally in [0, 1]; values
outside that range extrapolate past the viewport edges.

Two ways to configure the viewport:
- setup_camera() derives it from look-at parameters and a vertical FOV,
  placing the image plane at focus_distance in front of the camera.
- set_viewport() stores explicit vectors.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>>
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 0.0),
    ...     lookat=(0.0, 0.0, -1.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=90.0,
    ...     aspect_ratio=2.0,
    ... )
    >>> setup_camera(camera)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(0.5, 0.5)  # Ray through image center
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import taichi as ti

from spheretrace.core.ray import Ray, make_ray, to_vec3, vec3

logger = logging.getLogger(__name__)

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees, in (0, 180).
        aspect_ratio: Width divided by height of the viewport.
        focus_distance: Distance from the camera to the image plane.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float
    focus_distance: float = 1.0


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())


# =============================================================================
# Camera Setup (Python-side)
# =============================================================================


def _validate_camera(camera: PinholeCamera) -> None:
    if not 0.0 < camera.vfov < 180.0:
        raise ValueError(f"vfov must be in (0, 180) degrees, got {camera.vfov}")
    if camera.aspect_ratio <= 0.0:
        raise ValueError(f"aspect_ratio must be positive, got {camera.aspect_ratio}")
    if camera.focus_distance <= 0.0:
        raise ValueError(f"focus_distance must be positive, got {camera.focus_distance}")


def setup_camera(camera: PinholeCamera) -> None:
    """Initialize camera state from look-at configuration.

    Builds the orthonormal basis (u right, v up, w backward) and places the
    viewport at focus_distance along -w:

        half_height = focus_distance * tan(vfov / 2)
        half_width = aspect_ratio * half_height
        lower_left = lookfrom - focus_distance * w - half_width * u - half_height * v
        horizontal = 2 * half_width * u
        vertical = 2 * half_height * v

    Args:
        camera: Camera configuration with position, orientation, and FOV.

    Raises:
        ValueError: If the FOV, aspect ratio or focus distance is out of
            range, lookfrom equals lookat, or vup is parallel to the view
            direction.
    """
    _validate_camera(camera)

    lookfrom = np.array(to_vec3(camera.lookfrom), dtype=np.float64)
    lookat = np.array(to_vec3(camera.lookat), dtype=np.float64)
    vup = np.array(to_vec3(camera.vup), dtype=np.float64)

    w = lookfrom - lookat
    w_norm = np.linalg.norm(w)
    if w_norm == 0.0:
        raise ValueError("lookfrom and lookat must differ")
    w = w / w_norm

    u = np.cross(vup, w)
    u_norm = np.linalg.norm(u)
    if u_norm < 1e-12:
        raise ValueError("vup must not be parallel to the view direction")
    u = u / u_norm
    v = np.cross(w, u)

    theta = math.radians(camera.vfov)
    half_height = camera.focus_distance * math.tan(theta / 2.0)
    half_width = camera.aspect_ratio * half_height

    horizontal = 2.0 * half_width * u
    vertical = 2.0 * half_height * v
    lower_left = lookfrom - camera.focus_distance * w - horizontal / 2.0 - vertical / 2.0

    _store_viewport(lookfrom, lower_left, horizontal, vertical)
    logger.debug(
        "Camera at %s looking at %s (vfov=%.1f, aspect=%.3f)",
        camera.lookfrom,
        camera.lookat,
        camera.vfov,
        camera.aspect_ratio,
    )


def set_viewport(
    origin: Sequence[float],
    lower_left_corner: Sequence[float],
    horizontal: Sequence[float],
    vertical: Sequence[float],
) -> None:
    """Store explicit viewport geometry.

    Args:
        origin: Camera position.
        lower_left_corner: World-space position of the viewport's (0, 0) corner.
        horizontal: Vector spanning the full viewport width.
        vertical: Vector spanning the full viewport height.

    Raises:
        ValueError: If horizontal or vertical has zero length.
    """
    h = np.array(to_vec3(horizontal), dtype=np.float64)
    v = np.array(to_vec3(vertical), dtype=np.float64)
    if not np.any(h) or not np.any(v):
        raise ValueError("Viewport extents must be non-zero")

    _store_viewport(
        np.array(to_vec3(origin), dtype=np.float64),
        np.array(to_vec3(lower_left_corner), dtype=np.float64),
        h,
        v,
    )
    logger.debug("Viewport set explicitly: lower_left=%s", tuple(lower_left_corner))


def _store_viewport(
    origin: np.ndarray,
    lower_left: np.ndarray,
    horizontal: np.ndarray,
    vertical: np.ndarray,
) -> None:
    _camera_origin[None] = origin.tolist()
    _lower_left_corner[None] = lower_left.tolist()
    _viewport_horizontal[None] = horizontal.tolist()
    _viewport_vertical[None] = vertical.tolist()


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def get_ray(u: ti.f32, v: ti.f32) -> Ray:
    """Generate a ray through normalized viewport coordinates (u, v).

    - u = 0: left edge, u = 1: right edge
    - v = 0: bottom edge, v = 1: top edge

    No clamping is applied.

    Args:
        u: Horizontal viewport coordinate.
        v: Vertical viewport coordinate.

    Returns:
        A Ray from the camera origin toward the viewport point. The direction
        is not normalized.
    """
    origin = _camera_origin[None]
    point_on_viewport = (
        _lower_left_corner[None] + u * _viewport_horizontal[None] + v * _viewport_vertical[None]
    )
    return make_ray(origin, point_on_viewport - origin)


@ti.func
def get_camera_origin() -> vec3:
    """Get the camera origin (position) in world space."""
    return _camera_origin[None]


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin, lower_left, horizontal and vertical.
    """
    fields = {
        "origin": _camera_origin,
        "lower_left": _lower_left_corner,
        "horizontal": _viewport_horizontal,
        "vertical": _viewport_vertical,
    }
    info = {}
    for name, f in fields.items():
        value = f[None]
        info[name] = (float(value[0]), float(value[1]), float(value[2]))
    return info
