# pyright: strict
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, OrderedDict

from loguru import logger

from ..color_utils import RGB, hex_from_rgb, lab_from_rgb
from ..errors import InvalidConfiguration
from ..math_utils import Vec3f

'''
An image quantizer that buckets colors into an octree keyed by successive bit-planes of the red,
green and blue channels, merging the most recently split branch of the deepest level whenever the
number of leaves grows past the budget.

Reduction happens while colors are still being inserted, so memory stays bounded by the budget
rather than by the number of distinct colors in the image.
'''

MAX_DEPTH = 7
'''Depth of the leaves. The root is at depth 0.'''


@dataclass
class Node:
  '''
  Either an accumulating leaf or a branch. Only leaves carry sums and pixel counts, a branch keeps
  zeroes until it is reduced into a leaf.
  '''
  is_leaf: bool = False
  sum_r: int = 0
  sum_g: int = 0
  sum_b: int = 0
  pixel_count: int = 0
  children: List[Optional[int]] = field(default_factory=lambda: [None] * 8)
  '''Arena indices of the children, by octant.'''


@dataclass(frozen=True)
class Record:
  '''A representative color and the number of source pixels it stands for.'''
  rgb: RGB
  count: int

  @property
  def hex(self) -> str:
    return hex_from_rgb(self.rgb)

  @property
  def lab(self) -> Vec3f:
    return lab_from_rgb(self.rgb)


def octant_index(color: RGB, depth: int) -> int:
  '''
  :param depth: 0 <= depth < MAX_DEPTH
  :return: the child slot a color descends into, red is the high bit and blue the low bit.
  '''
  shift = 7 - depth
  r, g, b = color
  return (r >> shift & 1) << 2 | (g >> shift & 1) << 1 | (b >> shift & 1)


class OcTree:
  def __init__(self, max_color: int) -> None:
    self.max_color = max_color
    self.leaf_num = 0
    self.nodes: List[Node] = []
    self.free: List[int] = []
    self.reducible: List[List[int]] = [[] for _ in range(MAX_DEPTH + 1)]
    self.root = self.create_node(0)

  def _alloc(self) -> int:
    if self.free:
      index = self.free.pop()
      self.nodes[index] = Node()
      return index
    self.nodes.append(Node())
    return len(self.nodes) - 1

  def create_node(self, depth: int) -> int:
    index = self._alloc()
    if depth == MAX_DEPTH:
      self.nodes[index].is_leaf = True
      self.leaf_num += 1
    else:
      level = self.reducible[depth]
      level.append(index)
      # 排序只在登记新节点时进行，之后计数变化不会重新排序
      level.sort(key=lambda i: self.nodes[i].pixel_count)
    return index

  def insert(self, color: RGB) -> None:
    index = self.root
    depth = 0
    while True:
      node = self.nodes[index]
      if node.is_leaf:
        r, g, b = color
        node.sum_r += r
        node.sum_g += g
        node.sum_b += b
        node.pixel_count += 1
        return
      octant = octant_index(color, depth)
      child = node.children[octant]
      if child is None:
        child = self.create_node(depth + 1)
        node.children[octant] = child
      index = child
      depth += 1

  def reduce(self) -> bool:
    '''
    Merges the last registered branch of the deepest nonempty level into a leaf.
    :return: False if there was nothing left to reduce.
    '''
    for level in reversed(self.reducible[:MAX_DEPTH]):
      if level:
        break
    else:
      return False
    node = self.nodes[level[-1]]
    if all(child is None for child in node.children):
      # 只有空树的根节点没有子节点
      return False
    level.pop()
    for i, child in enumerate(node.children):
      if child is None:
        continue
      child_node = self.nodes[child]
      node.sum_r += child_node.sum_r
      node.sum_g += child_node.sum_g
      node.sum_b += child_node.sum_b
      node.pixel_count += child_node.pixel_count
      self.leaf_num -= 1
      node.children[i] = None
      self.free.append(child)
    node.is_leaf = True
    self.leaf_num += 1
    return True

  def leaves(self) -> Iterable[Node]:
    '''Leaves reachable from the root, children visited in octant order.'''
    stack = [self.root]
    while stack:
      node = self.nodes[stack.pop()]
      if node.is_leaf:
        yield node
      else:
        stack.extend(i for i in reversed(node.children) if i is not None)


def collect(tree: OcTree) -> OrderedDict[RGB, int]:
  '''
  :return: Map with keys of the mean color of each leaf, and values of the number of pixels folded
           into it. Leaves whose truncated means coincide share one entry.
  '''
  countByColor = OrderedDict[RGB, int]()
  for leaf in tree.leaves():
    n = leaf.pixel_count
    rgb = (leaf.sum_r // n, leaf.sum_g // n, leaf.sum_b // n)
    countByColor[rgb] = countByColor.get(rgb, 0) + n
  return countByColor


def rank(colors_to_count: OrderedDict[RGB, int]) -> List[Record]:
  '''Records sorted by descending count, ties keep the order of the map.'''
  records = [Record(rgb, count) for rgb, count in colors_to_count.items()]
  records.sort(key=lambda x: x.count, reverse=True)
  return records


def check_max_color(max_color: int) -> None:
  if isinstance(max_color, bool) or not isinstance(max_color, int):
    raise InvalidConfiguration(f"max_color 必须是整数: {max_color!r}")
  if max_color < 1:
    raise InvalidConfiguration(f"max_color 必须大于 0: {max_color}")


def quantize(pixels: Iterable[RGB], max_color: int) -> List[Record]:
  '''
  :param pixels: Opaque colors as (r, g, b).
  :param max_color: The maximum number of leaves kept at any time. A lower number of colors may be
                    returned.
  :return: Records sorted by descending count.
  '''
  check_max_color(max_color)
  tree = OcTree(max_color)
  pixelCount = 0
  reductions = 0
  for pixel in pixels:
    tree.insert(pixel)
    pixelCount += 1
    while tree.leaf_num > max_color and tree.reduce():
      reductions += 1
  result = rank(collect(tree))
  logger.debug(f"量化了 {pixelCount} 个像素，合并 {reductions} 次，得到 {len(result)} 种颜色")
  return result
