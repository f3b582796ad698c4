"""Unit tests for the per-pixel resolvers.

Tests cover:
- Sample offset upload and validation
- FIRST_HIT resolution (first sample against the first sphere)
- AVERAGED resolution (nearest hit across the world, averaged)
- Empty world handling
"""

import numpy as np
import pytest
import taichi as ti

# Expected colors at the viewport center for a sphere of radius 0.5 at
# (0, 0, -1), sampled at NDC (0.01, 0.01). The unit normal there is about
# (0.0200, 0.0100, 0.9998).
CENTER_HIT_FIRST = (130, 128, 254)
CENTER_HIT_AVERAGED = (130, 129, 255)
# Background at NDC (0, 0): (0.1, 0.1, 0.9 * 25/255 + 0.1) scaled to bytes
CENTER_BACKGROUND = (25, 25, 48)


def _assert_rgb_close(actual, expected, tol=1):
    for a, e in zip(actual, expected):
        assert abs(int(a) - e) <= tol, f"{tuple(actual)} != {expected}"


def _resolve(x, y, averaged=False):
    """Run a per-pixel resolver at NDC (x, y) and return the u8 color."""
    from spheretrace.core.shading import per_pixel, per_pixel_averaged

    result = ti.Vector.field(3, dtype=ti.u8, shape=())

    @ti.kernel
    def test_kernel():
        if ti.static(averaged):
            result[None] = per_pixel_averaged(x, y)
        else:
            result[None] = per_pixel(x, y)

    test_kernel()
    c = result[None]
    return (int(c[0]), int(c[1]), int(c[2]))


def _upload_fixed(n=1, offset=0.01):
    from spheretrace.core.shading import upload_sample_offsets

    upload_sample_offsets(np.full((n, 2), offset, dtype=np.float32))


class TestSampleOffsetUpload:
    """Tests for the sample offset table."""

    def test_upload_sets_count(self):
        """Test the uploaded sample count follows the table length."""
        from spheretrace.core.shading import get_uploaded_sample_count

        assert get_uploaded_sample_count() == 0
        _upload_fixed(n=12)
        assert get_uploaded_sample_count() == 12

    def test_clear_resets_count(self):
        """Test clearing forgets the table."""
        from spheretrace.core.shading import clear_sample_offsets, get_uploaded_sample_count

        _upload_fixed(n=3)
        clear_sample_offsets()
        assert get_uploaded_sample_count() == 0

    @pytest.mark.parametrize(
        "shape",
        [(4,), (4, 3), (0, 2), (1025, 2)],
    )
    def test_invalid_shapes_raise(self, shape):
        """Test tables that are not (n, 2) with 1 <= n <= MAX_SAMPLES are rejected."""
        from spheretrace.core.shading import upload_sample_offsets

        with pytest.raises(ValueError):
            upload_sample_offsets(np.zeros(shape, dtype=np.float32))


class TestFirstHit:
    """Tests for per_pixel."""

    def test_empty_world_is_black(self, classic_viewport):
        """Test no spheres means black."""
        _upload_fixed()
        assert _resolve(0.0, 0.0) == (0, 0, 0)

    def test_center_hit_normal_color(self, classic_viewport):
        """Test a hit maps the unit normal to 255 * (n + 1) / 2."""
        from spheretrace.scene.world import add_sphere

        add_sphere((0.0, 0.0, -1.0), 0.5)
        _upload_fixed()
        _assert_rgb_close(_resolve(0.0, 0.0), CENTER_HIT_FIRST)

    def test_miss_uses_background(self, classic_viewport):
        """Test a miss returns the background gradient for the pixel position."""
        from spheretrace.scene.world import add_sphere

        add_sphere((0.0, 0.0, -1.0), 0.5)
        _upload_fixed()
        _assert_rgb_close(_resolve(-1.0, -1.0), (0, 0, 48))

    def test_only_first_sphere_considered(self, classic_viewport):
        """Test a miss on the first sphere decides the pixel even if a later one is hit."""
        from spheretrace.scene.world import add_sphere

        add_sphere((10.0, 0.0, -5.0), 1.0)
        add_sphere((0.0, 0.0, -1.0), 0.5)
        _upload_fixed()
        _assert_rgb_close(_resolve(0.0, 0.0), CENTER_BACKGROUND)

    def test_only_first_sample_considered(self, classic_viewport):
        """Test later samples do not change the result."""
        from spheretrace.core.shading import upload_sample_offsets
        from spheretrace.scene.world import add_sphere

        add_sphere((0.0, 0.0, -1.0), 0.5)
        offsets = np.array([[0.01, 0.01], [5.0, 5.0], [-5.0, -5.0]], dtype=np.float32)
        upload_sample_offsets(offsets)
        _assert_rgb_close(_resolve(0.0, 0.0), CENTER_HIT_FIRST)


class TestAveraged:
    """Tests for per_pixel_averaged."""

    def test_empty_world_is_black(self, classic_viewport):
        """Test no spheres means black."""
        _upload_fixed(n=4)
        assert _resolve(0.0, 0.0, averaged=True) == (0, 0, 0)

    def test_center_hit(self, classic_viewport):
        """Test the averaged normal color of identical samples."""
        from spheretrace.scene.world import add_sphere

        add_sphere((0.0, 0.0, -1.0), 0.5)
        _upload_fixed(n=1)
        _assert_rgb_close(_resolve(0.0, 0.0, averaged=True), CENTER_HIT_AVERAGED)

    def test_fixed_offsets_match_single_sample(self, classic_viewport):
        """Test averaging identical samples gives the single-sample color."""
        from spheretrace.scene.world import add_sphere

        add_sphere((0.0, 0.0, -1.0), 0.5)
        _upload_fixed(n=1)
        single = _resolve(0.0, 0.0, averaged=True)
        _upload_fixed(n=100)
        _assert_rgb_close(_resolve(0.0, 0.0, averaged=True), single)

    def test_nearest_sphere_across_world(self, classic_viewport):
        """Test a sphere after a missed one is still found."""
        from spheretrace.scene.world import add_sphere

        add_sphere((10.0, 0.0, -5.0), 1.0)
        add_sphere((0.0, 0.0, -1.0), 0.5)
        _upload_fixed()
        _assert_rgb_close(_resolve(0.0, 0.0, averaged=True), CENTER_HIT_AVERAGED)

    def test_hit_and_miss_samples_average(self, classic_viewport):
        """Test one hit and one miss sample average to the midpoint."""
        from spheretrace.core.shading import upload_sample_offsets
        from spheretrace.scene.world import add_sphere

        add_sphere((0.0, 0.0, -1.0), 0.5)
        # Second sample points far up and right, past the sphere
        upload_sample_offsets(np.array([[0.0, 0.0], [0.9, 0.9]], dtype=np.float32))
        r, g, b = _resolve(0.0, 0.0, averaged=True)
        # Hit normal (0, 0, 1) -> (0.5, 0.5, 1.0); background -> (0.1, 0.1, 0.188)
        _assert_rgb_close((r, g, b), (76, 76, 152))
