"""
PIL IO module.

Decoding of image sources, color normalization and encoding of the
rendered canvas.
"""
import io
import logging
import os
from typing import Any, BinaryIO, Optional, Union

import requests
from PIL import Image, ImageColor

from image_combiner.constants import (
    DEFAULT_QUALITY,
    DEFAULT_TIMEOUT,
    WHITE,
    OutputFormat,
)
from image_combiner.errors import (
    EncodeError,
    SourceLoadError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)

Color = Union[str, tuple[int, ...], list]

#: File suffixes and format names mapped to output formats.
FORMAT_NAMES = {
    "png": OutputFormat.PNG,
    "jpg": OutputFormat.JPG,
    "jpeg": OutputFormat.JPG,
}


def get_color(value: Color) -> tuple[int, int, int, int]:
    """
    Normalize a color to an RGBA tuple.

    Accepts RGB or RGBA sequences and any color string known to
    :py:mod:`PIL.ImageColor`, such as ``'red'`` or ``'#ff000080'``.
    """
    if isinstance(value, str):
        return ImageColor.getcolor(value, "RGBA")  # type: ignore[return-value]
    value = tuple(value)
    if len(value) == 3:
        return value + (255,)  # type: ignore[return-value]
    if len(value) != 4:
        raise ValueError("Expected an RGB or RGBA color, got %r" % (value,))
    return value  # type: ignore[return-value]


def get_output_format(value: Union[OutputFormat, str]) -> OutputFormat:
    """Convert a format name such as ``'png'`` or ``'JPEG'`` to OutputFormat."""
    if isinstance(value, OutputFormat):
        return value
    name = str(value).lower().lstrip(".")
    if name not in FORMAT_NAMES:
        raise UnsupportedFormatError("Unsupported output format: %s" % (value,))
    return FORMAT_NAMES[name]


def guess_output_format(path: Union[str, os.PathLike]) -> Optional[OutputFormat]:
    """Output format from a file suffix, or None if the suffix is unknown."""
    suffix = os.path.splitext(os.fspath(path))[1].lower().lstrip(".")
    return FORMAT_NAMES.get(suffix)


def load_image(
    source: Union[str, bytes, os.PathLike, BinaryIO, Image.Image],
    timeout: float = DEFAULT_TIMEOUT,
) -> Image.Image:
    """
    Load and decode an image source into an RGBA image.

    :param source: Local path, ``http://`` or ``https://`` URL, encoded
        bytes, binary file object, or an already decoded
        :py:class:`PIL.Image.Image`.
    :param timeout: Timeout in seconds for remote sources.
    :return: RGBA :py:class:`PIL.Image.Image` fully loaded in memory.
    :raise SourceLoadError: if the source cannot be fetched or decoded.
    """
    if isinstance(source, Image.Image):
        return source.convert("RGBA")

    try:
        if isinstance(source, str) and source.startswith(("http://", "https://")):
            logger.debug("Fetching %s" % source)
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
            fp: Any = io.BytesIO(response.content)
        elif isinstance(source, bytes):
            fp = io.BytesIO(source)
        else:
            fp = source
        with Image.open(fp) as image:
            image.load()
            return image.convert("RGBA")
    except (OSError, ValueError, requests.RequestException) as e:
        raise SourceLoadError(
            "Failed to load image %s: %s" % (_describe(source), e)
        ) from e


def _describe(source: Any) -> str:
    if isinstance(source, bytes):
        return "<%d bytes>" % len(source)
    if isinstance(source, (str, os.PathLike)):
        return repr(os.fspath(source))
    return repr(source)


def write(
    image: Image.Image,
    fp: Union[str, os.PathLike, BinaryIO],
    output_format: Union[OutputFormat, str],
    quality: float = DEFAULT_QUALITY,
    background: tuple[int, int, int, int] = WHITE,
) -> None:
    """
    Encode `image` into `fp`.

    :param image: Image to encode.
    :param fp: filename or file-like object.
    :param output_format: :py:class:`~image_combiner.constants.OutputFormat`
        or its name.
    :param quality: Quality in [0.0, 1.0], only used by lossy formats.
    :param background: Color transparent pixels are flattened onto for
        formats without alpha.
    :raise UnsupportedFormatError: for an unknown format.
    :raise EncodeError: if the encoder fails.
    """
    output_format = get_output_format(output_format)
    options: dict[str, Any] = {}
    if output_format.lossy:
        options["quality"] = int(quality * 100)
        if image.mode in ("RGBA", "LA", "P"):
            flat = Image.new("RGBA", image.size, background)
            flat.alpha_composite(image.convert("RGBA"))
            image = flat
        image = image.convert("RGB")
    logger.debug("Encoding %s with %r" % (output_format.pil_format, options))
    try:
        image.save(fp, format=output_format.pil_format, **options)
    except (OSError, ValueError) as e:
        raise EncodeError("Failed to encode %s: %s" % (output_format.value, e)) from e


def encode(
    image: Image.Image,
    output_format: Union[OutputFormat, str],
    quality: float = DEFAULT_QUALITY,
    background: tuple[int, int, int, int] = WHITE,
) -> bytes:
    """Encode `image` and return the bytes, see :py:func:`write`."""
    with io.BytesIO() as f:
        write(image, f, output_format, quality, background)
        return f.getvalue()
