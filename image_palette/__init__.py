from typing import List, Tuple

from PIL import Image
from pydantic import BaseModel, Field

from .configs import SharedConfig
from .errors import InvalidConfiguration, PaletteError, UnreadableSource, UnsupportedPixelFormat
from .image_data import ImageData, StrPath
from .quantize.quantizer_octree import Record, check_max_color, quantize

__all__ = [
  'CONFIG', 'Config', 'ImageData', 'InvalidConfiguration', 'PaletteError', 'Record',
  'UnreadableSource', 'UnsupportedPixelFormat', 'load', 'load_with_max_color',
  'palette_from_image', 'quantize',
]

Palette = Tuple[List[Record], int, int]


class Config(BaseModel):
  max_color: int = Field(16, ge=1)


CONFIG = SharedConfig("palette", Config)


def palette_from_image(image: Image.Image, max_color: int) -> Palette:
  '''
  Get the dominant colors of an already opened image.
  :param image: RGB, RGBA or palette image
  :param max_color: the leaf budget, a lower number of colors may be returned
  :return: records sorted by descending count, the width and the height of the image
  '''
  check_max_color(max_color)
  data = ImageData.from_image(image)
  return quantize(data.pixels, max_color), data.width, data.height


def load_with_max_color(path: StrPath, max_color: int) -> Palette:
  '''
  Open the image located at the path specified, return at most max_color dominant colors.
  '''
  check_max_color(max_color)
  data = ImageData.open(path)
  return quantize(data.pixels, max_color), data.width, data.height


def load(path: StrPath) -> Palette:
  '''Like load_with_max_color, with the budget taken from configs/palette.yaml (16 by default).'''
  return load_with_max_color(path, CONFIG().max_color)
