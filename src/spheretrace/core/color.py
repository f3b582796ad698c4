"""Pixel coordinate mapping and 8-bit color conversion.

Colors are handled in two spaces:
- unit space: float components nominally in [0, 1]
- byte space: float components nominally in [0, 255], converted to u8 by
  truncation with saturation (negative -> 0, above 255 -> 255)

Pixel coordinates are mapped to normalized device coordinates (NDC) in
[-1, 1) by coord_to_color() and from NDC to viewport coordinates in [0, 1)
by ndc_to_viewport().
"""

import taichi as ti
import taichi.math as tm

vec3 = tm.vec3

# 8-bit RGB triple stored in the image buffer
rgb8 = ti.types.vector(3, ti.u8)

# Blue channel of the background gradient's start color, in unit space
BACKGROUND_BLUE = 25.0 / 255.0

# Blend factor toward white for the background gradient
BACKGROUND_BLEND = 0.1


@ti.func
def coord_to_color(coord: ti.i32, extent: ti.i32) -> ti.f32:
    """Map a pixel index in [0, extent) to NDC: (coord / extent) * 2 - 1."""
    return (ti.cast(coord, ti.f32) / ti.cast(extent, ti.f32)) * 2.0 - 1.0


@ti.func
def ndc_to_viewport(c: ti.f32) -> ti.f32:
    """Map an NDC value in [-1, 1] to a viewport coordinate in [0, 1]."""
    return (c + 1.0) / 2.0


@ti.func
def normal_to_color(n: vec3) -> vec3:
    """Map a unit normal from [-1, 1] per component to unit color space."""
    return 0.5 * (n + 1.0)


@ti.func
def background_color(x: ti.f32, y: ti.f32) -> vec3:
    """Background gradient for the pixel at NDC position (x, y).

    Blends (x, y, BACKGROUND_BLUE) 10% toward white. Components can be
    negative on the left and bottom of the image; byte conversion clamps them.
    """
    start = vec3(x, y, BACKGROUND_BLUE)
    return tm.mix(start, vec3(1.0, 1.0, 1.0), BACKGROUND_BLEND)


@ti.func
def to_rgb8(color: vec3) -> rgb8:
    """Convert a byte-space color to u8, truncating and saturating."""
    return ti.cast(tm.clamp(color, 0.0, 255.0), ti.u8)


@ti.func
def write_color(color_sum: vec3, n_samples: ti.i32) -> rgb8:
    """Average accumulated unit-space samples and convert to u8.

    Each channel is scaled by 1 / n_samples, clamped to [0, 0.999] and
    multiplied by 256 before truncation, so 1.0 maps to 255.
    """
    scale = 1.0 / ti.cast(n_samples, ti.f32)
    c = tm.clamp(color_sum * scale, 0.0, 0.999)
    return ti.cast(256.0 * c, ti.u8)
