import io
import logging
import os
from typing import NamedTuple, Optional, Tuple

from bmp_errors import BMPIOError, OutOfBoundsError
from bmp_header import read_headers, write_headers

logger = logging.getLogger(__name__)


class RGB(NamedTuple):
    r: int
    g: int
    b: int

    @classmethod
    def splat(cls, value):
        return cls(value, value, value)


def row_padding(width, bytes_per_pixel):
    # Each row is padded to a multiple of 4 bytes
    return (4 - (width * bytes_per_pixel) % 4) % 4


class BMPImage:
    """
    An uncompressed 24- or 32-bit bitmap held as its on-disk pixel array.

    Rows are kept in file order, so row 0 is the bottom row of the picture.
    Geometry is fixed at load time; only pixel contents change afterwards.
    """

    def __init__(self, width, height, bit_depth, row_pad, pixels, file_header, info_header):
        self._width = width
        self._height = height
        self._bit_depth = bit_depth
        self._row_pad = row_pad
        self._pixels = pixels
        self.file_header = file_header
        self.info_header = info_header

    @classmethod
    def load(cls, source) -> "BMPImage":
        # source is a filesystem path or a binary stream positioned at the file start
        if isinstance(source, (str, bytes, os.PathLike)):
            try:
                with open(source, "rb") as f:
                    return cls._load_stream(f)
            except BMPIOError:
                raise
            except OSError as e:
                raise BMPIOError(f"Cannot open {os.fsdecode(source)}: {e.strerror or e}") from e
        return cls._load_stream(source)

    @classmethod
    def from_bytes(cls, data: bytes) -> "BMPImage":
        return cls._load_stream(io.BytesIO(data))

    @classmethod
    def _load_stream(cls, f):
        file_header, info_header = read_headers(f)

        width = info_header.width
        height = info_header.height
        bit_depth = info_header.bit_depth

        bytes_per_pixel = bit_depth // 8
        row_pad = row_padding(width, bytes_per_pixel)
        row_size = width * bytes_per_pixel + row_pad
        expected = row_size * height

        try:
            f.seek(file_header.offset)
            pixels = bytearray(f.read(expected))
        except OSError as e:
            raise BMPIOError(f"Failed to read pixel data: {e}") from e
        if len(pixels) != expected:
            raise BMPIOError(
                f"Truncated pixel data: expected {expected} bytes at offset "
                f"{file_header.offset}, got {len(pixels)}")

        logger.debug("Loaded %dx%d %d-bit image, row padding %d, %d pixel bytes",
                     width, height, bit_depth, row_pad, expected)
        return cls(width, height, bit_depth, row_pad, pixels, file_header, info_header)

    def copy(self) -> "BMPImage":
        return BMPImage(self._width, self._height, self._bit_depth, self._row_pad,
                        bytearray(self._pixels),
                        type(self.file_header).from_bytes(self.file_header.to_bytes()),
                        type(self.info_header).from_bytes(self.info_header.to_bytes()))

    def width(self) -> int:
        return self._width

    def height(self) -> int:
        return self._height

    def depth(self) -> int:
        return self._bit_depth

    def dimension(self) -> Tuple[int, int]:
        return self._width, self._height

    @property
    def row_pad(self) -> int:
        return self._row_pad

    @property
    def bytes_per_pixel(self) -> int:
        return self._bit_depth // 8

    @property
    def row_size(self) -> int:
        return self._width * self.bytes_per_pixel + self._row_pad

    @property
    def pixels(self) -> bytearray:
        return self._pixels

    def in_bounds(self, x, y) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def pixel_index(self, x, y) -> int:
        return y * self.row_size + x * self.bytes_per_pixel

    def get_pixel(self, x, y) -> Optional[RGB]:
        if not self.in_bounds(x, y):
            return None
        i = self.pixel_index(x, y)
        b, g, r = self._pixels[i:i + 3]
        return RGB(r, g, b)

    def pixel(self, x, y) -> RGB:
        # For callers that already checked bounds
        color = self.get_pixel(x, y)
        if color is None:
            raise OutOfBoundsError(x, y, self._width, self._height)
        return color

    def set_pixel(self, x, y, color):
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self._width, self._height)
        i = self.pixel_index(x, y)
        r, g, b = color
        # Fourth channel is always cleared at 32 bit
        data = bytes((b, g, r, 0)[:self.bytes_per_pixel])
        self._pixels[i:i + len(data)] = data

    def save(self, sink):
        """
        Write the headers as loaded, then the pixel array at the header's offset.

        The size and offset fields are not recomputed; a failed save leaves
        the target partially written.
        """
        if isinstance(sink, (str, bytes, os.PathLike)):
            try:
                with open(sink, "wb") as f:
                    self._save_stream(f)
            except BMPIOError:
                raise
            except OSError as e:
                raise BMPIOError(f"Cannot write {os.fsdecode(sink)}: {e.strerror or e}") from e
        else:
            self._save_stream(sink)

    def to_bytes(self) -> bytes:
        out = io.BytesIO()
        self._save_stream(out)
        return out.getvalue()

    def _save_stream(self, f):
        write_headers(f, self.file_header, self.info_header)
        try:
            f.seek(self.file_header.offset)
            f.write(self._pixels)
        except OSError as e:
            raise BMPIOError(f"Failed to write pixel data: {e}") from e
        logger.debug("Wrote %d pixel bytes at offset %d", len(self._pixels), self.file_header.offset)

    def __repr__(self):
        return f"<BMPImage {self._width}x{self._height} {self._bit_depth}-bit>"
