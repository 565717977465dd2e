"""Size, corner radius and rotation helpers for element rendering."""

import math

from image_combiner.constants import ZoomMode
from image_combiner.errors import DegenerateSourceError


def resolve_dimensions(
    orig_width: int,
    orig_height: int,
    width: int,
    height: int,
    zoom_mode: ZoomMode,
) -> tuple[int, int]:
    """
    Compute the drawn size of an image from its zoom mode.

    Proportional sizes are truncated toward zero.

    :param orig_width: Width of the source image.
    :param orig_height: Height of the source image.
    :param width: Requested width, used by ``WIDTH`` and ``WIDTH_HEIGHT``.
    :param height: Requested height, used by ``HEIGHT`` and ``WIDTH_HEIGHT``.
    :param zoom_mode: :py:class:`~image_combiner.constants.ZoomMode`.
    :return: `tuple` of (width, height).
    :raise DegenerateSourceError: when the aspect ratio is undefined.
    """
    zoom_mode = ZoomMode(zoom_mode)
    if zoom_mode == ZoomMode.ORIGIN:
        return orig_width, orig_height
    elif zoom_mode == ZoomMode.WIDTH:
        if orig_width == 0:
            raise DegenerateSourceError(
                "Cannot scale by width a source of size %dx%d"
                % (orig_width, orig_height)
            )
        return width, int(width * orig_height / orig_width)
    elif zoom_mode == ZoomMode.HEIGHT:
        if orig_height == 0:
            raise DegenerateSourceError(
                "Cannot scale by height a source of size %dx%d"
                % (orig_width, orig_height)
            )
        return int(height * orig_width / orig_height), height
    return width, height


def resolve_corner_radius(width: int, height: int, radius: int) -> int:
    """
    Clamp the corner radius to half of the shorter side.

    A clamped radius turns the box into a circle or a stadium.
    """
    return max(0, min(int(radius), min(width, height) // 2))


def rotation_pivot(x: int, y: int, width: int, height: int) -> tuple[float, float]:
    """Center of the box at (x, y) with the given size."""
    return x + width / 2, y + height / 2


def centered_origin(
    pivot: tuple[float, float], size: tuple[int, int]
) -> tuple[int, int]:
    """
    Top-left corner of a box of `size` centered on `pivot`.

    Half pixels always round up, so placement does not depend on the parity
    of the pivot.
    """
    return (
        math.floor(pivot[0] - size[0] / 2 + 0.5),
        math.floor(pivot[1] - size[1] / 2 + 0.5),
    )


def intersect(
    a: tuple[int, int, int, int], b: tuple[int, int, int, int]
) -> tuple[int, int, int, int]:
    """Calculate intersection of two bounding boxes."""
    inter = (max(a[0], b[0]), max(a[1], b[1]), min(a[2], b[2]), min(a[3], b[3]))
    if inter[0] >= inter[2] or inter[1] >= inter[3]:
        return (0, 0, 0, 0)
    return inter
