"""Core rendering module.

Components:
    ray: Ray data structure and vector utilities
    color: Pixel-to-NDC mapping and 8-bit color conversion
    config: Shading mode, sampling parameters and sample offset generation
    shading: Per-pixel color resolvers
    renderer: Image buffer and the frame fill loop

Per-pixel math runs inside Taichi kernels; configuration and buffer export
stay on the Python side.
"""

from .color import (
    background_color,
    coord_to_color,
    ndc_to_viewport,
    normal_to_color,
    rgb8,
    to_rgb8,
    write_color,
)
from .config import (
    DEFAULT_NUM_SAMPLES,
    DEFAULT_SAMPLE_OFFSET,
    MAX_SAMPLES,
    RenderParamsValidationError,
    SamplingParams,
    ShadingMode,
    make_sample_offsets,
)
from .ray import (
    Ray,
    dot,
    length,
    length_squared,
    make_ray,
    normalize,
    ray_at,
    to_vec3,
    vec3,
)

# Note: shading and renderer are NOT imported here to avoid circular imports.
# Import them directly:
#   from spheretrace.core.renderer import FrameRenderer, ImageBuffer, set_data

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "to_vec3",
    "dot",
    "length",
    "length_squared",
    "normalize",
    "rgb8",
    "coord_to_color",
    "ndc_to_viewport",
    "normal_to_color",
    "background_color",
    "to_rgb8",
    "write_color",
    "ShadingMode",
    "SamplingParams",
    "RenderParamsValidationError",
    "make_sample_offsets",
    "MAX_SAMPLES",
    "DEFAULT_NUM_SAMPLES",
    "DEFAULT_SAMPLE_OFFSET",
]
