"""Opacity, corner masks and alpha compositing onto the canvas."""

import logging

import numpy as np
from PIL import Image, ImageChops, ImageDraw

from image_combiner.composite.geometry import centered_origin, intersect
from image_combiner.constants import MASK_SUPERSAMPLE

logger = logging.getLogger(__name__)


def apply_opacity(image: Image.Image, opacity: int) -> Image.Image:
    """
    Scale the alpha channel of `image` by ``opacity / 255``.

    Color channels are left untouched. An opacity of 255 returns an exact
    copy, 0 a fully transparent image of the same size. Values out of
    [0, 255] are not rejected; the resulting alpha is kept in 8 bits.

    :param image: Source image, converted to RGBA when needed.
    :param opacity: Opacity multiplier in [0, 255].
    :return: A new RGBA :py:class:`PIL.Image.Image`.
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    if image.width == 0 or image.height == 0:
        return image.copy()

    pixels = np.array(image)
    alpha = pixels[:, :, 3].astype(np.float64)
    alpha = np.rint(alpha * opacity / 255.0)
    pixels[:, :, 3] = np.clip(alpha, 0, 255).astype(np.uint8)
    return Image.fromarray(pixels)


def rounded_mask(size: tuple[int, int], radius: int) -> Image.Image:
    """
    Draw an anti-aliased rounded rectangle mask covering `size`.

    The radius is expected to be resolved already, see
    :py:func:`~image_combiner.composite.geometry.resolve_corner_radius`.

    :return: Mode ``L`` image, 255 inside the shape and 0 outside.
    """
    width, height = size
    scale = MASK_SUPERSAMPLE
    mask = Image.new("L", (width * scale, height * scale), 0)
    ImageDraw.Draw(mask).rounded_rectangle(
        (0, 0, width * scale - 1, height * scale - 1),
        radius=radius * scale,
        fill=255,
    )
    return mask.resize(size, Image.Resampling.BOX)


def apply_mask(image: Image.Image, mask: Image.Image) -> Image.Image:
    """Multiply the alpha channel of `image` by `mask`."""
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    else:
        image = image.copy()
    image.putalpha(ImageChops.multiply(image.getchannel("A"), mask))
    return image


def paste(canvas: Image.Image, image: Image.Image, position: tuple[int, int]) -> None:
    """
    Alpha-composite `image` onto `canvas` with its top-left at `position`.

    Parts falling outside of the canvas are clipped.
    """
    left, top = int(position[0]), int(position[1])
    bbox = (left, top, left + image.width, top + image.height)
    inter = intersect((0, 0, canvas.width, canvas.height), bbox)
    if inter == (0, 0, 0, 0):
        logger.debug("Image at %r is outside of the canvas" % (bbox,))
        return

    if image.mode != "RGBA":
        image = image.convert("RGBA")
    source = (inter[0] - left, inter[1] - top, inter[2] - left, inter[3] - top)
    canvas.alpha_composite(image, dest=inter[:2], source=source)


def paste_rotated(
    canvas: Image.Image,
    image: Image.Image,
    pivot: tuple[float, float],
    angle: float,
) -> None:
    """
    Rotate `image` clockwise by `angle` degrees and paste it centered on
    `pivot`.

    The rotated image is expanded to hold the whole source, so the center
    of the source always lands on the pivot. At angle 0 this is the same as
    :py:func:`paste` at the unrotated top-left.
    """
    rotated = image.rotate(-angle, resample=Image.Resampling.BICUBIC, expand=True)
    paste(canvas, rotated, centered_origin(pivot, rotated.size))


def fill(
    canvas: Image.Image, mask: Image.Image, color: tuple[int, int, int, int]
) -> None:
    """
    Composite a solid `color` onto `canvas` through a canvas-sized `mask`.

    The alpha of `color` scales the mask.
    """
    alpha = mask
    if color[3] != 255:
        alpha = ImageChops.multiply(mask, Image.new("L", mask.size, color[3]))
    layer = Image.new("RGBA", canvas.size, tuple(color[:3]) + (0,))
    layer.putalpha(alpha)
    canvas.alpha_composite(layer)
