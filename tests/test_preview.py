import io

from bmp_image import RGB, BMPImage
from preview import display, render
from tests.bmp_factory import solid_bmp


def test_white_image_is_blank():
    image = BMPImage.from_bytes(solid_bmp(3, 2))
    assert render(image) == "      \n      \n"


def test_black_and_other_colours():
    image = BMPImage.from_bytes(solid_bmp(3, 2))
    image.set_pixel(0, 0, RGB(0, 0, 0))
    image.set_pixel(2, 1, RGB(255, 0, 0))
    assert render(image) == "*     \n    ? \n"


def test_rows_follow_storage_order():
    # row 0 is the first stored row, printed first
    image = BMPImage.from_bytes(solid_bmp(2, 3, color=(0, 0, 0)))
    image.set_pixel(1, 2, RGB.splat(255))
    assert render(image).splitlines() == ["* * ", "* * ", "*   "]


def test_display_writes_to_stream():
    image = BMPImage.from_bytes(solid_bmp(1, 1, depth=32, color=(1, 1, 1)))
    out = io.StringIO()
    display(out, image)
    assert out.getvalue() == "? \n"


def test_empty_image():
    assert render(BMPImage.from_bytes(solid_bmp(0, 0))) == ""
