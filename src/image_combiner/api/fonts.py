"""
Font face resolution with an ordered fallback chain.

A :py:class:`FontResolver` tries each candidate in turn and ends with the
face built into Pillow, so resolving a size never fails in practice.
Candidates are either font file names/paths, looked up by
:py:func:`PIL.ImageFont.truetype`, or callables taking the size and
returning a font::

    resolver = FontResolver(["NotoSansCJK-Regular.ttc", "/opt/fonts/brand.ttf"])
    font = resolver.resolve(24)
"""

import logging
import os
from typing import Callable, Iterable, Optional, Union

from PIL import ImageFont

from image_combiner.errors import FontLoadError

logger = logging.getLogger(__name__)

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]
FontStrategy = Union[str, os.PathLike, Callable[[float], Font]]

#: Faces tried before the built-in default.
DEFAULT_FONTS: tuple[FontStrategy, ...] = (
    "Alibaba-PuHuiTi-Medium.ttf",
    "Arial.ttf",
    "PingFang.ttc",
)


class FontResolver(object):
    """
    Resolve font faces by size through an ordered list of strategies.

    Resolved faces are cached per size.
    """

    def __init__(self, candidates: Optional[Iterable[FontStrategy]] = None):
        if candidates is None:
            candidates = DEFAULT_FONTS
        self._candidates = list(candidates)
        self._cache: dict[float, Font] = {}

    @property
    def candidates(self) -> list[FontStrategy]:
        return list(self._candidates)

    def resolve(self, size: float) -> Font:
        """
        Get a font face of `size`.

        :raise FontLoadError: only if the built-in default face fails.
        """
        if size not in self._cache:
            self._cache[size] = self._load(size)
        return self._cache[size]

    def _load(self, size: float) -> Font:
        for candidate in self._candidates:
            try:
                if callable(candidate):
                    return candidate(size)
                return ImageFont.truetype(os.fspath(candidate), size)
            except (OSError, ValueError) as e:
                logger.debug("Font %r is not available: %s" % (candidate, e))

        if self._candidates:
            logger.warning("No font candidate found, using the built-in font")
        try:
            return ImageFont.load_default(size=size)
        except (OSError, ValueError) as e:
            raise FontLoadError("Failed to load the built-in font: %s" % e) from e

    def __repr__(self) -> str:
        return "%s(%r)" % (self.__class__.__name__, self._candidates)
