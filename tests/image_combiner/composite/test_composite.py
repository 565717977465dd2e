import logging

import pytest
from PIL import Image, ImageChops

from image_combiner import ImageCombiner
from image_combiner.api.elements import ImageElement, RectangleElement, TextElement
from image_combiner.composite import draw_element
from image_combiner.composite.composite import draw_image, draw_rectangle, draw_text
from image_combiner.constants import ZoomMode
from image_combiner.errors import DegenerateSourceError

from ..utils import GREEN, RED, WHITE, make_image

logger = logging.getLogger(__name__)


def _blank(size=(100, 80)):
    return Image.new("RGBA", size, WHITE)


def _ink_bbox(canvas):
    """Bounding box of pixels that differ from white."""
    return ImageChops.difference(canvas, _blank(canvas.size)).getbbox()


def test_draw_rectangle(canvas):
    draw_rectangle(canvas, RectangleElement(10, 20, 30, 40, color=RED))
    assert canvas.getpixel((10, 20)) == RED
    assert canvas.getpixel((39, 59)) == RED
    assert canvas.getpixel((40, 60)) == WHITE
    assert _ink_bbox(canvas) == (10, 20, 40, 60)


def test_draw_rectangle_rounded(canvas):
    draw_rectangle(canvas, RectangleElement(0, 0, 40, 40, color=RED, corner_radius=15))
    assert canvas.getpixel((0, 0)) == WHITE
    assert canvas.getpixel((20, 20)) == RED
    assert canvas.getpixel((20, 0)) == RED


def test_draw_rectangle_clamped_radius():
    half, huge = _blank(), _blank()
    draw_rectangle(half, RectangleElement(5, 5, 30, 20, color=RED, corner_radius=10))
    draw_rectangle(huge, RectangleElement(5, 5, 30, 20, color=RED, corner_radius=99))
    assert half.tobytes() == huge.tobytes()


def test_draw_rectangle_translucent(canvas):
    draw_rectangle(canvas, RectangleElement(0, 0, 10, 10, color=(0, 0, 255, 100)))
    r, g, b, a = canvas.getpixel((5, 5))
    assert a == 255
    assert b == 255
    assert 150 <= r <= 160


@pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-5, 10)])
def test_draw_rectangle_empty(canvas, width, height):
    draw_rectangle(canvas, RectangleElement(10, 10, width, height, color=RED))
    assert _ink_bbox(canvas) is None


def test_draw_image_origin(canvas):
    element = ImageElement(make_image((20, 10), RED), 5, 6, width=50, height=50)
    draw_image(canvas, element)
    assert _ink_bbox(canvas) == (5, 6, 25, 16)


@pytest.mark.parametrize(
    "zoom_mode, width, height, expected",
    [
        (ZoomMode.WIDTH, 40, 0, (0, 0, 40, 20)),
        (ZoomMode.HEIGHT, 0, 30, (0, 0, 60, 30)),
        (ZoomMode.WIDTH_HEIGHT, 15, 35, (0, 0, 15, 35)),
    ],
)
def test_draw_image_zoom(canvas, zoom_mode, width, height, expected):
    element = ImageElement(
        make_image((20, 10), RED), zoom_mode=zoom_mode, width=width, height=height
    )
    draw_image(canvas, element)
    assert _ink_bbox(canvas) == expected
    assert canvas.getpixel((expected[2] // 2, expected[3] // 2)) == RED


def test_draw_image_leaves_element_unchanged(canvas):
    source = make_image((20, 10), RED)
    data = source.tobytes()
    element = ImageElement(
        source, zoom_mode=ZoomMode.WIDTH, width=60, opacity=100, corner_radius=5,
        rotation=30,
    )
    draw_image(canvas, element)
    first = canvas.copy()
    draw_image(canvas, element)
    assert element.image.tobytes() == data
    assert element.image.size == (20, 10)
    assert element.width == 60
    assert first.size == canvas.size


def test_draw_image_corner_radius(canvas):
    draw_image(canvas, ImageElement(make_image((40, 40), RED), corner_radius=100))
    assert canvas.getpixel((0, 0)) == WHITE
    assert canvas.getpixel((39, 39)) == WHITE
    assert canvas.getpixel((20, 20)) == RED
    assert canvas.getpixel((20, 0))[1] < 255


def test_draw_image_transparent(canvas):
    draw_image(canvas, ImageElement(make_image((40, 40), RED), opacity=0))
    assert _ink_bbox(canvas) is None


def test_draw_image_opacity(canvas):
    draw_image(canvas, ImageElement(make_image((40, 40), (0, 0, 0, 255)), opacity=128))
    r, g, b, a = canvas.getpixel((10, 10))
    assert a == 255
    assert 120 <= r <= 135


def test_draw_image_rotation_zero_matches_direct():
    image = make_image((21, 13), GREEN)
    image.putpixel((3, 4), RED)
    direct, pivoted = _blank(), _blank()
    draw_image(direct, ImageElement(image, 17, 9))
    draw_image(pivoted, ImageElement(image, 17, 9, rotation=360))
    assert direct.tobytes() == pivoted.tobytes()


def test_draw_image_rotation(canvas):
    element = ImageElement(make_image((40, 10), RED), 30, 35, rotation=90)
    draw_image(canvas, element)
    assert canvas.getpixel((50, 22)) == RED
    assert canvas.getpixel((35, 40)) == WHITE


def test_draw_image_degenerate(canvas):
    element = ImageElement(Image.new("RGBA", (0, 10)), zoom_mode="width", width=10)
    with pytest.raises(DegenerateSourceError):
        draw_image(canvas, element)


def test_draw_image_empty_size(canvas):
    element = ImageElement(make_image(), zoom_mode="width_height", width=0, height=5)
    draw_image(canvas, element)
    assert _ink_bbox(canvas) is None


def test_draw_text(fonts):
    canvas = _blank((200, 100))
    draw_text(canvas, TextElement("Hello", 24, 20, 50, color=RED, fonts=fonts))
    bbox = _ink_bbox(canvas)
    assert bbox is not None
    left, top, right, bottom = bbox
    assert left >= 18
    assert top < 50
    assert bottom <= 56


def test_draw_text_wrap_and_truncate(fonts):
    full, truncated = _blank((200, 300)), _blank((200, 300))
    element = TextElement("ABCDEFGH", 20, 10, 30, max_line_width=1, fonts=fonts)
    draw_text(full, element)
    element.max_line_count = 2
    draw_text(truncated, element)
    full_bbox, truncated_bbox = _ink_bbox(full), _ink_bbox(truncated)
    # Two baselines 30px apart, glyphs sit above the baseline.
    assert truncated_bbox[3] <= 30 + 30 + 6
    assert full_bbox[3] > 30 + 6 * 30
    assert full_bbox[2] < 10 + 25


def test_draw_text_line_height(fonts):
    canvas = _blank((200, 300))
    element = TextElement(
        "AB", 20, 10, 30, max_line_width=1, line_height=100, fonts=fonts
    )
    draw_text(canvas, element)
    assert _ink_bbox(canvas)[3] > 120
    assert _ink_bbox(canvas.crop((0, 40, 200, 100))) is None


def test_draw_text_strike_through(fonts):
    canvas = _blank((200, 100))
    element = TextElement("    ", 20, 10, 50, strike_through=True, fonts=fonts)
    draw_text(canvas, element)
    left, top, right, bottom = _ink_bbox(canvas)
    strike_y = 50 - 20 * 0.4
    assert top >= strike_y - 2
    assert bottom <= strike_y + 3
    assert left >= 9
    assert abs(right - (10 + element.measure_width())) <= 2


def test_draw_text_strike_through_empty(fonts):
    canvas = _blank((200, 100))
    element = TextElement("", 20, 10, 50, strike_through=True, fonts=fonts)
    draw_text(canvas, element)
    assert _ink_bbox(canvas) is None


@pytest.mark.parametrize("font_size", [0, -12])
def test_draw_text_non_positive_size(fonts, font_size):
    combiner = ImageCombiner(100, 100, fonts=fonts)
    element = combiner.add_text("Hi", font_size, 10, 50)
    element.strike_through = True
    assert combiner.render().tobytes() == _blank((100, 100)).tobytes()
    element.rotation = 30
    assert combiner.render().tobytes() == _blank((100, 100)).tobytes()


@pytest.mark.parametrize(
    "settings",
    [
        {"font_size": 0},
        {"font_size": -5.5, "max_line_width": 40},
        {"max_line_count": -3, "max_line_width": 20},
        {"line_height": -10, "max_line_width": 20},
        {"max_line_width": -1, "strike_through": True},
        {"rotation": -720, "line_height": -1},
    ],
)
def test_draw_text_degenerate_settings(fonts, settings):
    combiner = ImageCombiner(120, 120, fonts=fonts)
    element = combiner.add_text("Degenerate text", 16, 10, 60)
    for key, value in settings.items():
        setattr(element, key, value)
    image = combiner.render()
    assert image.size == (120, 120)
    assert element.lines() is not None


def test_draw_text_rotated(fonts):
    upright, rotated = _blank((200, 200)), _blank((200, 200))
    draw_text(upright, TextElement("Rotated", 24, 100, 100, fonts=fonts))
    draw_text(rotated, TextElement("Rotated", 24, 100, 100, rotation=90, fonts=fonts))
    up, rot = _ink_bbox(upright), _ink_bbox(rotated)
    assert up[2] - up[0] > up[3] - up[1]
    assert rot[3] - rot[1] > rot[2] - rot[0]
    # Clockwise around the start of the baseline: the text runs downward.
    assert rot[1] >= 95


def test_draw_text_rotated_ignores_strike_through(fonts):
    plain, striked = _blank((200, 200)), _blank((200, 200))
    draw_text(plain, TextElement("    ", 24, 100, 100, rotation=45, fonts=fonts))
    draw_text(
        striked,
        TextElement(
            "    ", 24, 100, 100, rotation=45, strike_through=True, fonts=fonts
        ),
    )
    assert plain.tobytes() == striked.tobytes()


def test_draw_element_dispatch(canvas):
    draw_element(canvas, RectangleElement(0, 0, 10, 10, color=RED))
    assert canvas.getpixel((5, 5)) == RED


def test_draw_element_unknown(canvas):
    with pytest.raises(TypeError):
        draw_element(canvas, object())  # type: ignore[arg-type]
