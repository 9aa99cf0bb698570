"""
Console front end: load a bitmap, preview it as text, draw both diagonals
in white, preview again and save the result.

  python console.py in.bmp out.bmp
  python console.py            # prompts for both paths
"""
import argparse
import logging
import sys

import draw
from bmp_errors import BMPIOError, InvalidDepthError, InvalidFormatError, OutOfBoundsError, UnsupportedError
from bmp_image import RGB, BMPImage
from preview import display

logger = logging.getLogger(__name__)


def process(image, out=None):
    out = out or sys.stdout
    out.write("\n")
    display(out, image)
    out.write("\n")

    draw.diagonals(image, RGB.splat(255))

    display(out, image)
    out.write("\n")


def run(source=None, output=None, out=None, ask=input) -> int:
    out = out or sys.stdout
    path = source
    try:
        if source is None:
            source = path = ask("bmp file path: ")

        image = BMPImage.load(source)
        process(image, out=out)

        if output is None:
            output = ask("out file path: ")
        path = output
        image.save(output)
        logger.info("Saved %s", output)
    except InvalidFormatError:
        out.write("error: invalid bmp file\n")
    except InvalidDepthError:
        out.write("error: unsupported depth\n")
    except UnsupportedError:
        out.write("error: unsupported bmp variant\n")
    except OutOfBoundsError as e:
        out.write(f"error: {e}\n")
    except BMPIOError as e:
        out.write(f"file `{path}` error: {e}\n")
    except (EOFError, KeyboardInterrupt):
        out.write("\nerror: aborted\n")
    else:
        return 0
    return 1


def main(argv=None):
    ap = argparse.ArgumentParser(description="Preview a 24/32-bit BMP and draw its diagonals.")
    ap.add_argument("input", nargs="?", help="bitmap to load (prompted if omitted)")
    ap.add_argument("output", nargs="?", help="where to save the result (prompted if omitted)")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    return run(args.input, args.output)


if __name__ == "__main__":
    sys.exit(main())
