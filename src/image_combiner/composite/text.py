"""
Text layout: greedy line wrapping and width measurement.

Wrapping works on code points, so multi-byte characters such as CJK
ideographs are never split. The measuring function is injected, which
keeps this module independent of any font implementation::

    from PIL import ImageFont

    font = ImageFont.load_default(size=24)
    lines = wrap("ABCDEFGH", 40, 2, font.getlength)
    width = measured_width(lines, font.getlength)
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)

MeasureFunc = Callable[[str], float]


def wrap(
    text: str, max_width: float, max_lines: int, measure: MeasureFunc
) -> list[str]:
    """
    Break `text` into lines no wider than `max_width`.

    Code points are appended one at a time to the current line. When the
    measured width of the candidate line exceeds `max_width`, the current
    line is committed and the code point starts a new one. A code point
    that is wider than `max_width` on its own still gets a line.

    :param text: Text to wrap.
    :param max_width: Maximum line width in pixels. Zero or less disables
        wrapping and yields the whole text as one line.
    :param max_lines: Maximum number of lines, extra lines are dropped.
        Zero or less means unlimited.
    :param measure: Callable returning the pixel width of a string.
    :return: `list` of lines.
    """
    if max_width <= 0:
        lines = [text]
    else:
        lines = []
        current = ""
        for char in text:
            candidate = current + char
            if current and measure(candidate) > max_width:
                lines.append(current)
                current = char
            else:
                current = candidate
        if current:
            lines.append(current)

    if max_lines > 0 and len(lines) > max_lines:
        logger.debug("Truncating %d lines to %d" % (len(lines), max_lines))
        lines = lines[:max_lines]
    return lines


def measured_width(lines: list[str], measure: MeasureFunc) -> float:
    """Width of the widest line, 0 when there are no lines."""
    return max((measure(line) for line in lines), default=0)
