class BMPError(Exception):
    """Base class for everything the bitmap codec raises."""


class InvalidFormatError(BMPError, ValueError):
    # Stream does not start with 'BM'
    def __init__(self, magic=b""):
        self.magic = magic
        super().__init__(f"Not a BMP file (magic {magic!r})")


class InvalidDepthError(BMPError, ValueError):
    def __init__(self, depth):
        self.depth = depth
        super().__init__(f"Unsupported bit depth: {depth}")


class UnsupportedError(BMPError, ValueError):
    """A recognised bitmap variant that is not handled, e.g. top-down rows."""


class OutOfBoundsError(BMPError, IndexError):
    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        super().__init__(f"Pixel ({x}, {y}) outside {width}x{height} image")


class BMPIOError(BMPError, OSError):
    """Reading, seeking or writing the underlying stream failed."""
