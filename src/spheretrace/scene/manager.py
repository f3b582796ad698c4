"""Scene manager mirroring the world fields on the Python side.

The world fields in spheretrace.scene.world are write-only from Python's
point of view. SceneManager keeps a parallel list of SphereInfo records so a
scene can be inspected, serialized to a plain configuration and rebuilt.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> scene.add_sphere(center=(0, 0, -1), radius=0.5)
    >>> config = scene.to_dict()
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from spheretrace.core.ray import to_vec3
from spheretrace.scene.world import MAX_SPHERES, add_sphere, clear_world, get_sphere_count

logger = logging.getLogger(__name__)


@dataclass
class SphereInfo:
    """Information about a sphere in the world.

    Attributes:
        sphere_index: The index in the sphere storage fields.
        center: The center of the sphere.
        radius: The radius of the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        spheres: Sphere configurations as {"center": [...], "radius": r},
            in world order.
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)


class SceneManager:
    """Builds the world and tracks what was put into it.

    Creating a SceneManager clears the world fields, so only one manager
    should be live per render.

    Attributes:
        spheres: List of SphereInfo for all spheres, in world order.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.spheres: list[SphereInfo] = []
        self.clear()

    def clear(self) -> None:
        """Clear the world fields and the local tracking list."""
        clear_world()
        self.spheres.clear()

    def add_sphere(self, center: Sequence[float], radius: float) -> int:
        """Add a sphere to the world.

        Args:
            center: The center point of the sphere.
            radius: The radius of the sphere (non-negative).

        Returns:
            The index of the sphere in the world fields.

        Raises:
            ValueError: If the radius is negative.
            RuntimeError: If the maximum number of spheres is exceeded.
        """
        idx = add_sphere(center, radius)
        self.spheres.append(SphereInfo(sphere_index=idx, center=to_vec3(center), radius=float(radius)))
        return idx

    def get_sphere_count(self) -> int:
        """Get the number of spheres stored in the world fields."""
        return get_sphere_count()

    def get_sphere_info(self, sphere_index: int) -> SphereInfo | None:
        """Look up a sphere by index, or None if out of range."""
        if 0 <= sphere_index < len(self.spheres):
            return self.spheres[sphere_index]
        return None

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene as a SceneConfig."""
        return SceneConfig(
            spheres=[{"center": list(s.center), "radius": s.radius} for s in self.spheres]
        )

    def from_config(self, config: SceneConfig) -> None:
        """Replace the current scene with the contents of a SceneConfig.

        Every entry is checked before the world is touched, so a failed
        load leaves the current scene in place.

        Raises:
            KeyError: If a sphere entry lacks "center" or "radius".
            ValueError: If a sphere entry is malformed.
            RuntimeError: If the config holds more than MAX_SPHERES spheres.
        """
        if len(config.spheres) > MAX_SPHERES:
            raise RuntimeError(
                f"Scene has {len(config.spheres)} spheres, maximum is {MAX_SPHERES}"
            )
        parsed = []
        for i, entry in enumerate(config.spheres):
            center = to_vec3(entry["center"])
            radius = float(entry["radius"])
            if radius < 0.0:
                raise ValueError(f"Sphere {i}: radius must be non-negative, got {radius}")
            parsed.append((center, radius))

        self.clear()
        for center, radius in parsed:
            self.add_sphere(center, radius)
        logger.debug("Loaded scene with %d spheres", len(self.spheres))

    def to_dict(self) -> dict[str, Any]:
        """Export the scene as a plain dictionary."""
        return {"spheres": self.to_config().spheres}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Replace the current scene with the contents of a dictionary."""
        self.from_config(SceneConfig(spheres=list(data.get("spheres", []))))

    @staticmethod
    def get_max_spheres() -> int:
        """Get the sphere capacity of the world fields."""
        return MAX_SPHERES
