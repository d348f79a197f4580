import argparse
import json
import sys
from typing import List, Optional

from loguru import logger

from . import CONFIG, PaletteError, load_with_max_color, log


def main(argv: Optional[List[str]] = None) -> int:
  parser = argparse.ArgumentParser(
    prog="image-palette", description="提取图片的主要颜色",
  )
  parser.add_argument("image", help="图片路径")
  parser.add_argument("-n", "--max-color", type=int, help="颜色数量上限，默认读取 configs/palette.yaml")
  parser.add_argument("--lab", action="store_true", help="同时输出 L*a*b* 值")
  parser.add_argument("--json", action="store_true", help="输出 JSON")
  args = parser.parse_args(argv)

  log.init()
  max_color = CONFIG().max_color if args.max_color is None else args.max_color
  try:
    records, width, height = load_with_max_color(args.image, max_color)
  except PaletteError as e:
    logger.error(str(e))
    return 1

  if args.json:
    colors = []
    for record in records:
      item = {"color": record.hex, "count": record.count}
      if args.lab:
        item["lab"] = [round(x, 2) for x in record.lab]
      colors.append(item)
    json.dump({"width": width, "height": height, "colors": colors}, sys.stdout, indent=2)
    print()
    return 0

  print(f"total: {width * height}")
  for record in records:
    if args.lab:
      l, a, b = record.lab
      print(f"{record.hex}: {record.count} (L={l:.2f}, a={a:.2f}, b={b:.2f})")
    else:
      print(f"{record.hex}: {record.count}")
  return 0


if __name__ == "__main__":
  sys.exit(main())
