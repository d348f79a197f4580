import os
from dataclasses import dataclass, field
from typing import Any, List, Tuple, Union, cast

from loguru import logger
from PIL import Image, UnidentifiedImageError

from .color_utils import RGB
from .errors import UnreadableSource, UnsupportedPixelFormat

__all__ = ["ImageData", "StrPath"]

StrPath = Union[str, "os.PathLike[str]"]


def _normalize_mode(im: Image.Image) -> Image.Image:
  # 解码器会把调色板图片展开成 RGB 或者 RGBA，CMYK 的 JPEG 解码为 RGB
  if im.mode == "P":
    return im.convert("RGBA" if "transparency" in im.info else "RGB")
  if im.mode == "PA":
    return im.convert("RGBA")
  if im.mode == "CMYK":
    return im.convert("RGB")
  return im


@dataclass
class ImageData:
  width: int
  height: int
  pixels: List[RGB] = field(default_factory=list)

  @classmethod
  def from_image(cls, im: Image.Image, source: str = "") -> "ImageData":
    '''
    Reads the pixels of an RGB or RGBA image row by row. Fully transparent pixels are dropped.
    '''
    im = _normalize_mode(im)
    width, height = im.size
    if im.mode not in ("RGB", "RGBA"):
      raise UnsupportedPixelFormat(im.mode, source or None)
    px = cast(Any, im.load())
    pixels: List[RGB] = []
    if im.mode == "RGB":
      for y in range(height):
        for x in range(width):
          pixels.append(cast(RGB, px[x, y]))
    else:
      for y in range(height):
        for x in range(width):
          r, g, b, a = cast(Tuple[int, int, int, int], px[x, y])
          if a > 0:
            pixels.append((r, g, b))
    logger.debug(f"读取了 {width}x{height} 的 {im.mode} 图片，{len(pixels)} 个不透明像素")
    return cls(width, height, pixels)

  @classmethod
  def open(cls, path: StrPath) -> "ImageData":
    source = os.fspath(path)
    try:
      with Image.open(source) as im:
        im.load()
        return cls.from_image(im, source)
    except (
      UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, EOFError,
    ) as e:
      # Pillow 对损坏的文件也可能抛出 SyntaxError 或 EOFError，超大图片抛出 DecompressionBombError
      raise UnreadableSource(source, str(e)) from e
