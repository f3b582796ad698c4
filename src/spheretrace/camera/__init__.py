"""Camera module for view and ray generation.

Components:
    pinhole: Pinhole camera with look-at or explicit viewport setup

Ray generation uses normalized viewport coordinates:
    u in [0, 1]: left to right across the viewport
    v in [0, 1]: bottom to top across the viewport

Camera state is stored in Taichi fields so get_ray() can be called from any
kernel once setup_camera() or set_viewport() has run.
"""

from .pinhole import (
    PinholeCamera,
    get_camera_info,
    get_camera_origin,
    get_ray,
    set_viewport,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "set_viewport",
    "get_ray",
    "get_camera_origin",
    "get_camera_info",
]
