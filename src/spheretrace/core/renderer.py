"""Frame renderer: fills an image buffer one pixel at a time.

The render loop visits every pixel (rows outer, columns inner), converts
the pixel index to NDC with coord_to_color(), resolves its color with the
configured per-pixel resolver and writes the result into the buffer. Pixels
are independent, so the Taichi kernel parallelizes the outer loop.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.camera.pinhole import setup_camera
    >>> from spheretrace.core.renderer import FrameRenderer
    >>> from spheretrace.scene.presets import create_single_sphere_scene
    >>>
    >>> scene, camera = create_single_sphere_scene()
    >>> setup_camera(camera)
    >>> renderer = FrameRenderer(200, 100)
    >>> renderer.render()
    >>> pixels = renderer.to_numpy()  # (100, 200, 3) uint8, top row first
"""

import logging

import numpy as np
import numpy.typing as npt
import taichi as ti
from PIL import Image as PILImage

from spheretrace.core.color import coord_to_color
from spheretrace.core.config import SamplingParams, ShadingMode, make_sample_offsets
from spheretrace.core.shading import (
    get_uploaded_sample_count,
    per_pixel,
    per_pixel_averaged,
    upload_sample_offsets,
)

logger = logging.getLogger(__name__)

# Maximum supported image dimensions
MAX_IMAGE_WIDTH = 4096
MAX_IMAGE_HEIGHT = 4096

# Kernel template value selecting the averaged resolver
_AVERAGED = int(ShadingMode.AVERAGED)


class ImageBuffer:
    """An RGB u8 pixel buffer indexed by (x, y) with y = 0 at the bottom.

    The buffer is a Taichi vector field of shape (width, height). It is
    written only by set_data(); everything else reads it.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate a zeroed buffer.

        Args:
            width: Image width in pixels, in [1, MAX_IMAGE_WIDTH].
            height: Image height in pixels, in [1, MAX_IMAGE_HEIGHT].

        Raises:
            ValueError: If a dimension is non-positive or exceeds the maximum.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({width}x{height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        self._width = width
        self._height = height
        self._pixels = ti.Vector.field(3, dtype=ti.u8, shape=(width, height))

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def field(self) -> ti.MatrixField:
        """The underlying Taichi field, shape (width, height)."""
        return self._pixels

    def clear(self) -> None:
        """Set every pixel to black."""
        self._pixels.fill(0)

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Read the pixel at (x, y).

        Raises:
            IndexError: If (x, y) lies outside the buffer.
        """
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self._width}x{self._height} buffer")
        p = self._pixels[x, y]
        return (int(p[0]), int(p[1]), int(p[2]))

    def to_numpy(self) -> npt.NDArray[np.uint8]:
        """Get the buffer in standard image layout.

        Returns:
            uint8 array of shape (height, width, 3), top row first.
        """
        image = self._pixels.to_numpy()
        # (width, height, 3) -> (height, width, 3), then bottom-left origin -> top-left
        image = np.transpose(image, (1, 0, 2))
        return np.ascontiguousarray(np.flipud(image)).astype(np.uint8)

    def to_image(self) -> PILImage.Image:
        """Hand the buffer over as an in-memory Pillow RGB image."""
        return PILImage.fromarray(self.to_numpy())

    def __repr__(self) -> str:
        return f"ImageBuffer(width={self._width}, height={self._height})"


@ti.kernel
def _fill_buffer(image: ti.template(), width: ti.i32, height: ti.i32, mode: ti.template()):
    for y, x in ti.ndrange(height, width):
        u = coord_to_color(x, width)
        v = coord_to_color(y, height)
        if ti.static(mode == _AVERAGED):
            image[x, y] = per_pixel_averaged(u, v)
        else:
            image[x, y] = per_pixel(u, v)


def set_data(buffer: ImageBuffer, mode: ShadingMode = ShadingMode.FIRST_HIT) -> None:
    """Render every pixel of the buffer.

    Requires the camera, the world and the sample offset table to be set up.

    Args:
        buffer: The buffer to fill.
        mode: Which per-pixel resolver to use.

    Raises:
        RuntimeError: If no sample offsets have been uploaded.
    """
    if get_uploaded_sample_count() == 0:
        raise RuntimeError("Sample offsets not set up. Call upload_sample_offsets() first.")
    _fill_buffer(buffer.field, buffer.width, buffer.height, int(mode))


class FrameRenderer:
    """Owns an ImageBuffer and the sampling configuration for a frame.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        sampling: The sampling parameters used by render().
    """

    def __init__(self, width: int, height: int, sampling: SamplingParams | None = None) -> None:
        """Allocate the buffer and validate the sampling configuration.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            sampling: Sampling parameters; defaults to SamplingParams().

        Raises:
            ValueError: If the dimensions are invalid.
            RenderParamsValidationError: If the sampling parameters are invalid.
        """
        self.sampling = sampling if sampling is not None else SamplingParams()
        self.sampling.validate()
        self._buffer = ImageBuffer(width, height)
        self._frame_count = 0

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._buffer.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._buffer.height

    @property
    def image(self) -> ImageBuffer:
        """The buffer written by render()."""
        return self._buffer

    @property
    def frame_count(self) -> int:
        """Number of frames rendered so far."""
        return self._frame_count

    def render(self) -> ImageBuffer:
        """Render one frame with the current camera, world and sampling.

        Returns:
            The filled ImageBuffer.
        """
        offsets = make_sample_offsets(self.sampling, self.width, self.height)
        upload_sample_offsets(offsets)
        set_data(self._buffer, ShadingMode(self.sampling.mode))
        self._frame_count += 1
        logger.info(
            "Rendered frame %d (%dx%d, %s, %d spp)",
            self._frame_count,
            self.width,
            self.height,
            ShadingMode(self.sampling.mode).name,
            self.sampling.num_samples,
        )
        return self._buffer

    def to_numpy(self) -> npt.NDArray[np.uint8]:
        """Get the last frame as a (height, width, 3) uint8 array."""
        return self._buffer.to_numpy()

    def to_image(self) -> PILImage.Image:
        """Get the last frame as a Pillow RGB image."""
        return self._buffer.to_image()

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"FrameRenderer(width={self.width}, height={self.height}, "
            f"mode={ShadingMode(self.sampling.mode).name}, frames={self.frame_count})"
        )
