import logging

from bmp_errors import BMPIOError, InvalidDepthError, InvalidFormatError, UnsupportedError

logger = logging.getLogger(__name__)

BMP_MAGIC = b"BM"
FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
HEADER_SIZE = FILE_HEADER_SIZE + INFO_HEADER_SIZE
SUPPORTED_DEPTHS = (24, 32)


def _unpack(record, fields, data):
    # fields: (name, offset, size, signed), offsets relative to the record
    for name, offset, size, signed in fields:
        value = int.from_bytes(data[offset:offset + size], "little", signed=signed)
        setattr(record, name, value)
    return record


def _pack(record, fields, size):
    out = bytearray(size)
    for name, offset, length, signed in fields:
        out[offset:offset + length] = getattr(record, name).to_bytes(length, "little", signed=signed)
    return bytes(out)


class FileHeader:
    # 14 bytes, packed
    FIELDS = (
        ("type", 0, 2, False),
        ("size", 2, 4, False),
        ("reserved1", 6, 2, False),
        ("reserved2", 8, 2, False),
        ("offset", 10, 4, False),
    )

    def __init__(self, type=0x4D42, size=0, reserved1=0, reserved2=0, offset=HEADER_SIZE):
        self.type = type
        self.size = size
        self.reserved1 = reserved1
        self.reserved2 = reserved2
        self.offset = offset

    @classmethod
    def from_bytes(cls, data: bytes) -> "FileHeader":
        return _unpack(cls(), cls.FIELDS, data)

    def to_bytes(self) -> bytes:
        return _pack(self, self.FIELDS, FILE_HEADER_SIZE)

    @property
    def magic(self) -> bytes:
        return self.type.to_bytes(2, "little")

    def __eq__(self, other):
        if not isinstance(other, FileHeader):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __repr__(self):
        return f"FileHeader(magic={self.magic!r}, size={self.size}, offset={self.offset})"


class InfoHeader:
    # 40 bytes, packed; offsets are relative to byte 14 of the file
    FIELDS = (
        ("size", 0, 4, False),
        ("width", 4, 4, True),
        ("height", 8, 4, True),
        ("planes", 12, 2, False),
        ("bit_depth", 14, 2, False),
        ("compression", 16, 4, False),
        ("size_image", 20, 4, False),
        ("x_pels_per_meter", 24, 4, True),
        ("y_pels_per_meter", 28, 4, True),
        ("colors_used", 32, 4, False),
        ("colors_important", 36, 4, False),
    )

    def __init__(self, size=INFO_HEADER_SIZE, width=0, height=0, planes=1, bit_depth=24,
                 compression=0, size_image=0, x_pels_per_meter=0, y_pels_per_meter=0,
                 colors_used=0, colors_important=0):
        self.size = size
        self.width = width
        self.height = height
        self.planes = planes
        self.bit_depth = bit_depth
        self.compression = compression
        self.size_image = size_image
        self.x_pels_per_meter = x_pels_per_meter
        self.y_pels_per_meter = y_pels_per_meter
        self.colors_used = colors_used
        self.colors_important = colors_important

    @classmethod
    def from_bytes(cls, data: bytes) -> "InfoHeader":
        return _unpack(cls(), cls.FIELDS, data)

    def to_bytes(self) -> bytes:
        return _pack(self, self.FIELDS, INFO_HEADER_SIZE)

    def __eq__(self, other):
        if not isinstance(other, InfoHeader):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __repr__(self):
        return (f"InfoHeader(width={self.width}, height={self.height}, "
                f"bit_depth={self.bit_depth}, compression={self.compression})")

    def metadata(self) -> dict:
        return {name: getattr(self, name) for name, _, _, _ in self.FIELDS}


def _read_exact(source, count, what):
    try:
        data = source.read(count)
    except OSError as e:
        raise BMPIOError(f"Failed to read {what}: {e}") from e
    if len(data) != count:
        raise BMPIOError(f"Truncated {what}: expected {count} bytes, got {len(data)}")
    return data


def read_headers(source):
    """
    Read the file header and info header from the start of a binary stream.

    Raises InvalidFormatError, InvalidDepthError or UnsupportedError for
    streams that are not a supported bitmap, and BMPIOError when the stream
    ends before the 54-byte prefix is complete.
    """
    file_header = FileHeader.from_bytes(_read_exact(source, FILE_HEADER_SIZE, "file header"))
    if file_header.magic != BMP_MAGIC:
        raise InvalidFormatError(file_header.magic)

    info_header = InfoHeader.from_bytes(_read_exact(source, INFO_HEADER_SIZE, "info header"))
    if info_header.bit_depth not in SUPPORTED_DEPTHS:
        raise InvalidDepthError(info_header.bit_depth)

    if info_header.width < 0 or info_header.height < 0:
        raise UnsupportedError(
            f"Negative dimensions ({info_header.width}x{info_header.height}) "
            "are not supported (top-down bitmaps)")

    logger.debug("Parsed %r, %r", file_header, info_header)
    return file_header, info_header


def write_headers(sink, file_header, info_header):
    # Written verbatim: size and offset are never recomputed
    try:
        sink.write(file_header.to_bytes())
        sink.write(info_header.to_bytes())
    except OSError as e:
        raise BMPIOError(f"Failed to write headers: {e}") from e
