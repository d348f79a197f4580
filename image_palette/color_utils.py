# pyright: strict
import math
import re
from typing import Tuple

from .math_utils import Mat3x3f, Vec3f, clamp, matrix_multiply

'''
Color science utilities.

Conversions between 8-bit RGB triples, their #RRGGBB form and CIE L*a*b*.
'''

RGB = Tuple[int, int, int]

_SRGB_TO_XYZ: Mat3x3f = (
  (0.41233895, 0.35762064, 0.18051042),
  (0.2126, 0.7152, 0.0722),
  (0.01932141, 0.11916382, 0.95034478),
)
WHITE_POINT_D65: Vec3f = (95.047, 100.0, 108.883)
_HEX_RE = re.compile(r"#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")


def hex_from_rgb(rgb: RGB) -> str:
  '''Formats a color as #RRGGBB, uppercase and zero padded.'''
  r, g, b = rgb
  return f"#{r:02X}{g:02X}{b:02X}"


def rgb_from_hex(hex_code: str) -> RGB:
  '''
  Parses a color in #RRGGBB form.
  :param hex_code: 7 characters, leading '#' followed by 3 hex pairs, case insensitive
  :return: the (r, g, b) triple
  '''
  match = _HEX_RE.fullmatch(hex_code.strip())
  if match is None:
    raise ValueError(f"Invalid hex color: {hex_code!r}")
  r, g, b = match.groups()
  return (int(r, 16), int(g, 16), int(b, 16))


def linearized(rgb_component: int) -> float:
  '''
  Linearizes an RGB component.
  :param rgb_component: 0 <= rgb_component <= 255, represents R/G/B channel
  :return: 0.0 <= output <= 100.0, color channel converted to linear RGB space
  '''
  normalized = clamp(0, 255, rgb_component) / 255.0
  if normalized <= 0.040449936:
    return normalized / 12.92 * 100.0
  else:
    return math.pow((normalized + 0.055) / 1.055, 2.4) * 100.0


def xyz_from_rgb(rgb: RGB) -> Vec3f:
  '''Converts a color from RGB to XYZ.'''
  r, g, b = rgb
  return matrix_multiply((linearized(r), linearized(g), linearized(b)), _SRGB_TO_XYZ)


def lab_f(t: float) -> float:
  e = 216.0 / 24389.0
  kappa = 24389.0 / 27.0
  if t > e:
    return math.pow(t, 1.0 / 3.0)
  else:
    return (kappa * t + 16) / 116


def lab_from_rgb(rgb: RGB) -> Vec3f:
  '''
  Converts a color from RGB representation to L*a*b* representation.
  :param rgb: the (r, g, b) triple of a color
  :return: (L*, a*, b*), L* in [0, 100]
  '''
  x, y, z = xyz_from_rgb(rgb)
  whitePoint = WHITE_POINT_D65
  fx = lab_f(x / whitePoint[0])
  fy = lab_f(y / whitePoint[1])
  fz = lab_f(z / whitePoint[2])
  l = 116.0 * fy - 16
  a = 500.0 * (fx - fy)
  b = 200.0 * (fy - fz)
  return (l, a, b)
