import sys
from datetime import time, timedelta
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Literal, Optional, TextIO, Union

from loguru import logger
from pydantic import BaseModel, Field

from .configs import SharedConfig

if TYPE_CHECKING:
  from loguru import Message

__all__ = ["CONFIG", "Config", "Sink", "init"]

Level = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
DEFAULT_FORMAT = "<g>{time:HH:mm:ss}</g>|<lvl>{level:8}</lvl>| <c>palette</c> - {message}"


class Sink(BaseModel):
  '''
  One loguru sink. target is "stdout", "stderr", "syslog" or a file path; the rotation, retention
  and compression options only apply to files.
  '''
  target: str = "stderr"
  level: Union[Level, int] = "INFO"
  format: str = DEFAULT_FORMAT
  colorize: Optional[bool] = None
  rotation: Union[str, int, time, timedelta, None] = None
  retention: Union[str, int, timedelta, None] = None
  compression: Optional[str] = None


class Config(BaseModel):
  sinks: List[Sink] = Field(default_factory=lambda: [Sink()])


CONFIG = SharedConfig("log", Config, "eager")


def _syslog(message: "Message") -> None:
  import syslog  # Windows 上没有 syslog

  levelno = message.record["level"].no
  for threshold, priority in (
    (50, syslog.LOG_CRIT), (40, syslog.LOG_ERR), (30, syslog.LOG_WARNING), (20, syslog.LOG_INFO),
  ):
    if levelno >= threshold:
      break
  else:
    priority = syslog.LOG_DEBUG
  syslog.syslog(priority, message.record["message"])


def _resolve(sink: Sink) -> Union[TextIO, Callable[["Message"], None], str]:
  if sink.target == "stdout":
    return sys.stdout
  elif sink.target == "stderr":
    return sys.stderr
  elif sink.target == "syslog":
    return _syslog
  return sink.target


@CONFIG.onload()
def config_onload(_: Optional[Config], cur: Config) -> None:
  logger.remove()
  for sink in cur.sinks:
    kw: Dict[str, Any] = {}
    if sink.target not in ("stdout", "stderr", "syslog"):
      kw = {
        "rotation": sink.rotation,
        "retention": sink.retention,
        "compression": sink.compression,
        "encoding": "utf8",
      }
    logger.add(
      _resolve(sink), level=sink.level, format=sink.format, colorize=sink.colorize, **kw
    )


def init() -> None:
  CONFIG()
