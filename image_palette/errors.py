# pyright: strict
from typing import Optional

__all__ = ["InvalidConfiguration", "PaletteError", "UnreadableSource", "UnsupportedPixelFormat"]


class PaletteError(Exception):
  pass


class UnreadableSource(PaletteError):
  '''The file could not be opened or decoded.'''

  def __init__(self, source: str, reason: str = "") -> None:
    super().__init__(f"无法读取图片 {source}: {reason}" if reason else f"无法读取图片 {source}")
    self.source = source


class UnsupportedPixelFormat(PaletteError):
  '''The decoded image is not 3- or 4-channel 8 bit.'''

  def __init__(self, mode: str, source: Optional[str] = None) -> None:
    where = f" ({source})" if source else ""
    super().__init__(f"不支持的像素格式: {mode}{where}")
    self.mode = mode
    self.source = source


class InvalidConfiguration(PaletteError, ValueError):
  '''The color budget is not a positive integer.'''
