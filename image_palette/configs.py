import os
from threading import Lock
from typing import Any, Callable, ClassVar, Generic, List, Literal, Optional, Type, TypeVar

import yaml
from loguru import logger
from pydantic import BaseModel

try:
  from yaml import CSafeDumper as SafeDumper, CSafeLoader as SafeLoader
except ImportError:
  logger.info("似乎没有安装libyaml，将使用纯Python的YAML解析器")
  from yaml import SafeDumper, SafeLoader

__all__ = ["CacheItem", "LoadHandler", "Reloadable", "SharedConfig"]

TModel = TypeVar("TModel", bound=BaseModel)
LoadHandler = Callable[[Optional[TModel], TModel], None]
Reloadable = Literal[False, "eager", "lazy"]


class CacheItem(Generic[TModel]):
  def __init__(self, item: TModel) -> None:
    self.item = item
    self.need_reload = False


class SharedConfig(Generic[TModel]):
  '''
  A pydantic model loaded from configs/<name>.yaml on first use. A missing file means all defaults.
  '''
  category: ClassVar = "配置"
  base_dir: ClassVar = "configs"
  all: ClassVar[List["SharedConfig[Any]"]] = []

  def __init__(self, name: str, model: Type[TModel], reloadable: Reloadable = "lazy") -> None:
    self.name = name
    self.model = model
    self.cache: Optional[CacheItem[TModel]] = None
    self.reloadable: Reloadable = reloadable
    self.handlers: List[LoadHandler[TModel]] = []
    self.lock = Lock()
    self.all.append(self)

  def get_file(self) -> str:
    return os.path.join(self.base_dir, f"{self.name}.yaml")

  def __call__(self) -> TModel:
    if self.cache is None or self.cache.need_reload:
      with self.lock:
        if self.cache is None or self.cache.need_reload:
          self.load()
    assert self.cache is not None
    return self.cache.item

  def load(self) -> None:
    file = self.get_file()
    if os.path.exists(file):
      logger.info(f"加载{self.category}文件: {file}")
      with open(file) as f:
        new_config = self.model.model_validate(yaml.load(f, SafeLoader) or {})
    else:
      logger.info(f"{self.category}文件不存在: {file}")
      new_config = self.model()
    if self.cache is None:
      old_config = None
      self.cache = CacheItem(new_config)
    else:
      old_config = self.cache.item
      self.cache.item = new_config
      self.cache.need_reload = False
    for handler in self.handlers:
      handler(old_config, new_config)

  def dump(self) -> None:
    if self.cache is None:
      return
    file = self.get_file()
    os.makedirs(os.path.dirname(file) or ".", exist_ok=True)
    with open(file, "w") as f:
      yaml.dump(self.cache.item.model_dump(mode="json"), f, SafeDumper, allow_unicode=True)

  def onload(self) -> Callable[[LoadHandler[TModel]], LoadHandler[TModel]]:
    def decorator(handler: LoadHandler[TModel]) -> LoadHandler[TModel]:
      self.handlers.append(handler)
      return handler
    return decorator

  def reload(self) -> None:
    if self.reloadable == "eager":
      if self.cache is not None:
        self.load()
    elif self.reloadable == "lazy":
      if self.cache is not None:
        self.cache.need_reload = True
    else:
      raise ValueError(f"{self.name} 不可重载")
