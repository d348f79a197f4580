"""Shared fixtures: every test gets its own configs/ directory."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from loguru import logger

from image_palette.configs import SharedConfig


@pytest.fixture(autouse=True)
def _isolated_configs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
  config_dir = tmp_path / "configs"
  monkeypatch.setattr(SharedConfig, "base_dir", str(config_dir))
  for config in SharedConfig.all:
    config.cache = None
  yield config_dir
  for config in SharedConfig.all:
    config.cache = None
  logger.remove()
  logger.add(lambda _: None)
