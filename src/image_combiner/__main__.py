import argparse
import logging
from typing import Optional

from image_combiner import ImageCombiner
from image_combiner.errors import ImageCombinerError
from image_combiner.version import __version__

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="image-combiner command line utility."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser(
        "render", help="Render a JSON layout to an image"
    )
    render_parser.add_argument("layout_file", help="Input JSON layout file")
    render_parser.add_argument("output_file", help="Output image file")
    render_parser.add_argument(
        "--format", dest="output_format", choices=["png", "jpg", "jpeg"],
        help="Output format, guessed from the output file name by default",
    )
    render_parser.add_argument(
        "--quality", type=float, default=None, help="JPEG quality in [0.0, 1.0]"
    )
    render_parser.add_argument(
        "--font", dest="fonts", action="append", default=None,
        help="Font file to try before the built-in font, may be repeated",
    )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    if args.verbose:
        logging.getLogger("image_combiner").setLevel(logging.DEBUG)
    else:
        logging.getLogger("image_combiner").setLevel(logging.INFO)

    if args.command == "render":
        try:
            combiner = ImageCombiner.open(args.layout_file, fonts=args.fonts)
            combiner.save(args.output_file, args.output_format, args.quality)
        except (ImageCombinerError, OSError, ValueError) as e:
            logger.error(str(e))
            return 1
        logger.info("Saved %s" % args.output_file)

    return None


if __name__ == "__main__":
    main()
