"""Ready-made scenes with matching cameras.

Each factory clears the world, fills it through a SceneManager and returns
the manager with a PinholeCamera that frames the scene. The camera is not
applied; pass it to setup_camera() before rendering.
"""

from spheretrace.camera.pinhole import PinholeCamera
from spheretrace.scene.manager import SceneManager

# Single sphere looked at head-on
SINGLE_SPHERE_CENTER = (0.0, 0.0, -1.0)
SINGLE_SPHERE_RADIUS = 0.5

# Showcase spheres (center, radius); the ground comes first
SHOWCASE_SPHERES = [
    ((0.0, -500.0, -1.0), 500.0),
    ((0.0, 1.0, 0.0), 1.0),
    ((-5.0, 1.0, 0.0), 1.0),
    ((5.0, 0.8, 1.5), 0.8),
    ((5.0, 1.2, -1.5), 1.2),
]
SHOWCASE_EYE = (0.0, 0.0, 2.0)
SHOWCASE_LOOKAT = (0.0, 0.0, -1.0)
SHOWCASE_VFOV = 30.0


def create_single_sphere_scene(aspect_ratio: float = 2.0) -> tuple[SceneManager, PinholeCamera]:
    """Create one sphere of radius 0.5 at (0, 0, -1) seen from the origin.

    With the default 2:1 aspect ratio the camera reproduces the classic
    viewport: lower-left (-2, -1, -1), horizontal (4, 0, 0), vertical (0, 2, 0).

    Args:
        aspect_ratio: Viewport width divided by height.

    Returns:
        Tuple of (SceneManager, PinholeCamera).
    """
    scene = SceneManager()
    scene.add_sphere(SINGLE_SPHERE_CENTER, SINGLE_SPHERE_RADIUS)

    camera = PinholeCamera(
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        vfov=90.0,
        aspect_ratio=aspect_ratio,
    )
    return scene, camera


def create_showcase_scene(aspect_ratio: float = 1.0) -> tuple[SceneManager, PinholeCamera]:
    """Create a large ground sphere with four smaller spheres resting on it.

    The camera sits at (0, 0, 2) looking toward (0, 0, -1) with a 30 degree
    vertical FOV and the image plane at the look-at distance.

    Only AVERAGED shading resolves all five spheres; FIRST_HIT shading sees
    the ground sphere alone because it is first in the world.

    Args:
        aspect_ratio: Viewport width divided by height.

    Returns:
        Tuple of (SceneManager, PinholeCamera).
    """
    scene = SceneManager()
    for center, radius in SHOWCASE_SPHERES:
        scene.add_sphere(center, radius)

    focus_distance = abs(SHOWCASE_EYE[2] - SHOWCASE_LOOKAT[2])
    camera = PinholeCamera(
        lookfrom=SHOWCASE_EYE,
        lookat=SHOWCASE_LOOKAT,
        vup=(0.0, 1.0, 0.0),
        vfov=SHOWCASE_VFOV,
        aspect_ratio=aspect_ratio,
        focus_distance=focus_distance,
    )
    return scene, camera
