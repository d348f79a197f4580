"""Tests for hex and L*a*b* conversions."""

from __future__ import annotations

import pytest

from image_palette.color_utils import hex_from_rgb, lab_from_rgb, rgb_from_hex


def test_hex_is_uppercase_and_padded() -> None:
  assert hex_from_rgb((0, 0, 0)) == "#000000"
  assert hex_from_rgb((10, 171, 255)) == "#0AABFF"


def test_hex_parsing() -> None:
  assert rgb_from_hex("#0AABFF") == (10, 171, 255)
  assert rgb_from_hex("#0aabff") == (10, 171, 255)
  assert rgb_from_hex(hex_from_rgb((1, 2, 3))) == (1, 2, 3)


@pytest.mark.parametrize("text", ["0AABFF", "#0AABF", "#0AABFFF", "#GGGGGG", ""])
def test_malformed_hex_is_rejected(text: str) -> None:
  with pytest.raises(ValueError):
    rgb_from_hex(text)


def test_lab_reference_points() -> None:
  white = lab_from_rgb((255, 255, 255))
  black = lab_from_rgb((0, 0, 0))
  red = lab_from_rgb((255, 0, 0))

  assert white == pytest.approx((100.0, 0.0, 0.0), abs=0.05)
  assert black == pytest.approx((0.0, 0.0, 0.0), abs=1e-9)
  assert red[0] == pytest.approx(53.24, abs=0.1)
  assert red[1] > 70
  assert red[2] > 60
