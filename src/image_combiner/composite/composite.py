"""Element rendering onto the canvas."""

import logging
import math

from PIL import Image, ImageDraw

# Module import, elements depend on this package for layout math.
from image_combiner.api import elements
from image_combiner.api.fonts import Font
from image_combiner.composite.alpha import (
    apply_mask,
    apply_opacity,
    fill,
    paste,
    paste_rotated,
    rounded_mask,
)
from image_combiner.composite.geometry import resolve_corner_radius, rotation_pivot
from image_combiner.composite.text import wrap
from image_combiner.constants import (
    STRIKE_THROUGH_RATIO,
    STRIKE_THROUGH_WIDTH,
    STRIKE_THROUGH_WIDTH_SINGLE,
)

logger = logging.getLogger(__name__)


def draw_element(canvas: Image.Image, element: "elements.Element") -> None:
    """
    Draw `element` onto the RGBA `canvas` in place.

    The element itself is not modified, so drawing it again gives the same
    result.
    """
    if isinstance(element, elements.ImageElement):
        draw_image(canvas, element)
    elif isinstance(element, elements.TextElement):
        draw_text(canvas, element)
    elif isinstance(element, elements.RectangleElement):
        draw_rectangle(canvas, element)
    else:
        raise TypeError(f"Expected an element, got {type(element).__name__}")


def draw_image(canvas: Image.Image, element: "elements.ImageElement") -> None:
    """
    Draw an image element.

    The source is resized with Lanczos, clipped by the rounded corners,
    faded by the opacity and finally rotated about the center of its box.
    """
    width, height = element.size
    if width <= 0 or height <= 0:
        logger.warning("Skipping image element of size %dx%d" % (width, height))
        return

    image = element.image.resize((width, height), Image.Resampling.LANCZOS)
    radius = resolve_corner_radius(width, height, element.corner_radius)
    if radius > 0:
        image = apply_mask(image, rounded_mask(image.size, radius))
    image = apply_opacity(image, element.opacity)

    if element.rotation:
        pivot = rotation_pivot(element.x, element.y, width, height)
        paste_rotated(canvas, image, pivot, element.rotation)
    else:
        paste(canvas, image, (element.x, element.y))


def draw_text(canvas: Image.Image, element: "elements.TextElement") -> None:
    """
    Draw a text element.

    Lines are left aligned, one line height apart, starting from the
    baseline at (x, y).
    """
    if element.font_size <= 0:
        logger.warning("Skipping text of font size %r" % (element.font_size,))
        return

    font = element.font()
    if element.rotation:
        _draw_rotated_text(canvas, element, font)
        return

    lines = wrap(
        element.text, element.max_line_width, element.max_line_count, font.getlength
    )
    if not lines:
        return

    stroke = (
        STRIKE_THROUGH_WIDTH if element.max_line_width > 0
        else STRIKE_THROUGH_WIDTH_SINGLE
    )
    mask = Image.new("L", canvas.size, 0)
    draw = ImageDraw.Draw(mask)
    for index, line in enumerate(lines):
        baseline = element.y + index * element.effective_line_height
        draw.text((element.x, baseline), line, fill=255, font=font, anchor="ls")
        width = font.getlength(line)
        if element.strike_through and width > 0:
            y = baseline - element.font_size * STRIKE_THROUGH_RATIO
            draw.line(
                [(element.x, y), (element.x + width, y)],
                fill=255,
                width=stroke,
            )
    fill(canvas, mask, element.color)


def _draw_rotated_text(
    canvas: Image.Image, element: "elements.TextElement", font: Font
) -> None:
    # Draw into a square tile centered on the anchor so that any rotation
    # of the text stays inside it.
    left, top, right, bottom = font.getbbox(element.text, anchor="ls")
    radius = 1 + math.ceil(
        max(math.hypot(px, py) for px in (left, right) for py in (top, bottom))
    )
    tile = Image.new("L", (2 * radius, 2 * radius), 0)
    ImageDraw.Draw(tile).text(
        (radius, radius), element.text, fill=255, font=font, anchor="ls"
    )
    tile = tile.rotate(
        -element.rotation, resample=Image.Resampling.BICUBIC, center=(radius, radius)
    )

    mask = Image.new("L", canvas.size, 0)
    mask.paste(tile, (int(round(element.x)) - radius, int(round(element.y)) - radius))
    fill(canvas, mask, element.color)


def draw_rectangle(
    canvas: Image.Image, element: "elements.RectangleElement"
) -> None:
    """Draw a rectangle element, rounded when it has a corner radius."""
    width, height = element.width, element.height
    if width <= 0 or height <= 0:
        logger.warning("Skipping rectangle of size %dx%d" % (width, height))
        return

    box = (element.x, element.y, element.x + width - 1, element.y + height - 1)
    radius = resolve_corner_radius(width, height, element.corner_radius)
    mask = Image.new("L", canvas.size, 0)
    draw = ImageDraw.Draw(mask)
    if radius > 0:
        draw.rounded_rectangle(box, radius=radius, fill=255)
    else:
        draw.rectangle(box, fill=255)
    fill(canvas, mask, element.color)
