import numpy as np
import pytest

from ppmblur.models.image import Image
from ppmblur.repositories.image_repository import ImageRepository


def make_image(width, height, values, max_value=255):
    return Image(width, height, max_value, np.asarray(values, dtype=np.int64).reshape(-1))


@pytest.fixture
def image_repository(monkeypatch):
    monkeypatch.delenv("PPM_VALUES_PER_LINE", raising=False)
    return ImageRepository()
