import pytest

from tests.bmp_factory import solid_bmp


@pytest.fixture
def white_5x4():
    return solid_bmp(5, 4)


@pytest.fixture
def white_4x4_32():
    return solid_bmp(4, 4, depth=32)
