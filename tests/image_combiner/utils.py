import io
import logging

from PIL import Image

logging.basicConfig(level=logging.DEBUG)

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
WHITE = (255, 255, 255, 255)


class FixedFont(object):
    """Stand-in font where every code point is `advance` pixels wide."""

    def __init__(self, advance: float = 10):
        self.advance = advance

    def getlength(self, text: str) -> float:
        return self.advance * len(text)


def fixed_measure(advance: float = 10):
    return FixedFont(advance).getlength


def make_image(size=(40, 20), color=RED) -> Image.Image:
    return Image.new("RGBA", size, color)


def make_png(size=(40, 20), color=RED) -> bytes:
    with io.BytesIO() as f:
        make_image(size, color).save(f, format="PNG")
        return f.getvalue()
