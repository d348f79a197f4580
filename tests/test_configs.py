"""Tests for YAML backed configuration objects."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

import pytest
import yaml
from pydantic import BaseModel, ValidationError

from image_palette import CONFIG, Config
from image_palette.configs import SharedConfig


class Sample(BaseModel):
  name: str = "default"
  size: int = 1


def test_missing_file_gives_defaults(_isolated_configs: Path) -> None:
  assert not (_isolated_configs / "palette.yaml").exists()

  assert CONFIG().max_color == 16


def test_values_are_read_from_yaml(_isolated_configs: Path) -> None:
  _isolated_configs.mkdir()
  (_isolated_configs / "palette.yaml").write_text("max_color: 4\n")

  assert CONFIG().max_color == 4


def test_empty_file_gives_defaults(_isolated_configs: Path) -> None:
  _isolated_configs.mkdir()
  (_isolated_configs / "palette.yaml").write_text("")

  assert CONFIG() == Config()


def test_zero_budget_fails_validation(_isolated_configs: Path) -> None:
  _isolated_configs.mkdir()
  (_isolated_configs / "palette.yaml").write_text("max_color: 0\n")

  with pytest.raises(ValidationError):
    CONFIG()


def test_dump_writes_current_values(_isolated_configs: Path) -> None:
  config = SharedConfig("sample_dump", Sample)
  config().size = 5

  config.dump()

  data = yaml.safe_load((_isolated_configs / "sample_dump.yaml").read_text())
  assert data == {"name": "default", "size": 5}


def test_lazy_reload(_isolated_configs: Path) -> None:
  config = SharedConfig("sample_lazy", Sample)
  assert config().size == 1
  _isolated_configs.mkdir()
  (_isolated_configs / "sample_lazy.yaml").write_text("size: 3\n")

  assert config().size == 1
  config.reload()

  assert config().size == 3


def test_eager_reload_runs_handlers(_isolated_configs: Path) -> None:
  config = SharedConfig("sample_eager", Sample, "eager")
  calls: List[Tuple[Optional[int], int]] = []

  @config.onload()
  def handler(old: Optional[Sample], cur: Sample) -> None:
    calls.append((old.size if old else None, cur.size))

  config()
  _isolated_configs.mkdir()
  (_isolated_configs / "sample_eager.yaml").write_text("size: 7\n")
  config.reload()

  assert calls == [(None, 1), (1, 7)]


def test_reload_can_be_disabled() -> None:
  config = SharedConfig("sample_fixed", Sample, False)

  with pytest.raises(ValueError):
    config.reload()
