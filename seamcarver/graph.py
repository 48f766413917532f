"""
Implicit pixel DAG used for seam search.

Nodes are the real pixels of a W x H image plus two sentinels per
direction:

- horizontal seams run from LEFT (joined to every pixel of column 0)
  to RIGHT (joined from every pixel of column W-1)
- vertical seams run from TOP (joined to every pixel of row 0)
  to BOTTOM (joined from every pixel of row H-1)

Edges only ever advance one column (horizontal) or one row (vertical),
so the graph is acyclic by construction.

Sentinels sit on synthetic coordinates outside the image. BOTTOM and RIGHT
share the coordinate (W, H), so nodes are always told apart by type and
never by coordinate.
"""

import enum
import functools
from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union


@functools.total_ordering
@dataclass(frozen=True)
class Pixel:
    """Real pixel at column x, row y. Ordered row-major (y, then x)."""
    x: int
    y: int

    def __lt__(self, other):
        if not isinstance(other, Pixel):
            return NotImplemented
        return (self.y, self.x) < (other.y, other.x)

    def __str__(self):
        return f"({self.x},{self.y})"


class Sentinel(enum.Enum):
    """Virtual source/sink nodes bordering the image."""
    TOP = 'top'
    BOTTOM = 'bottom'
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def direction(self) -> str:
        if self in (Sentinel.TOP, Sentinel.BOTTOM):
            return 'vertical'
        return 'horizontal'

    def coordinate(self, width: int, height: int) -> Tuple[int, int]:
        """Synthetic (x, y) of this sentinel in the (W+1) x (H+1) grid."""
        if self is Sentinel.TOP:
            return width, 0
        if self is Sentinel.LEFT:
            return 0, height
        # BOTTOM and RIGHT coincide
        return width, height


Node = Union[Pixel, Sentinel]


class PixelGraph:
    """
    Successor model for one seam direction.

    Every node has a dense integer id so traversal state can live in flat
    arrays: pixel (x, y) -> y * W + x, source -> W * H, sink -> W * H + 1.
    """

    def __init__(self, width: int, height: int, direction: str = 'vertical'):
        """
        Args:
            width: Image width W (>= 1)
            height: Image height H (>= 1)
            direction: 'vertical' or 'horizontal'
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Graph needs at least a 1x1 image, got {width}x{height}")

        if direction == 'vertical':
            self.source, self.sink = Sentinel.TOP, Sentinel.BOTTOM
        elif direction == 'horizontal':
            self.source, self.sink = Sentinel.LEFT, Sentinel.RIGHT
        else:
            raise ValueError(f"Invalid direction: {direction}")

        self.width = width
        self.height = height
        self.direction = direction
        self.num_nodes = width * height + 2

    def pixels(self) -> Iterator[Pixel]:
        """All real pixels in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Pixel(x, y)

    def index(self, node: Node) -> int:
        if isinstance(node, Sentinel):
            self._check_sentinel(node)
            if node is self.source:
                return self.width * self.height
            return self.width * self.height + 1
        self._check_pixel(node)
        return node.y * self.width + node.x

    def node(self, index: int) -> Node:
        n_pixels = self.width * self.height
        if index == n_pixels:
            return self.source
        if index == n_pixels + 1:
            return self.sink
        if not 0 <= index < n_pixels:
            raise IndexError(f"Node id {index} outside [0, {self.num_nodes})")
        y, x = divmod(index, self.width)
        return Pixel(x, y)

    def coordinate(self, node: Node) -> Tuple[int, int]:
        """(x, y) position of a node in the (W+1) x (H+1) energy grid."""
        if isinstance(node, Sentinel):
            self._check_sentinel(node)
            return node.coordinate(self.width, self.height)
        self._check_pixel(node)
        return node.x, node.y

    def successors(self, node: Node) -> List[Node]:
        """
        Directed successors of a node, in a fixed order.

        Candidates are listed from the high coordinate down:
        Horizontal: (x+1, y+1), (x+1, y), (x+1, y-1)
        Vertical:   (x+1, y+1), (x, y+1), (x-1, y+1)
        The source fans out to the last column/row first. Candidates off
        the image are omitted; the last column/row leads to the sink, and
        the sink has no successors.
        """
        if isinstance(node, Sentinel):
            self._check_sentinel(node)
            if node is self.sink:
                return []
            if self.direction == 'horizontal':
                return [Pixel(0, y) for y in reversed(range(self.height))]
            return [Pixel(x, 0) for x in reversed(range(self.width))]

        self._check_pixel(node)
        x, y = node.x, node.y

        if self.direction == 'horizontal':
            if x == self.width - 1:
                return [self.sink]
            successors = []
            if y < self.height - 1:
                successors.append(Pixel(x + 1, y + 1))
            successors.append(Pixel(x + 1, y))
            if y > 0:
                successors.append(Pixel(x + 1, y - 1))
            return successors

        if y == self.height - 1:
            return [self.sink]
        successors = []
        if x < self.width - 1:
            successors.append(Pixel(x + 1, y + 1))
        successors.append(Pixel(x, y + 1))
        if x > 0:
            successors.append(Pixel(x - 1, y + 1))
        return successors

    def _check_sentinel(self, node: Sentinel):
        if node.direction != self.direction:
            raise ValueError(f"{node.name} sentinel does not belong to a {self.direction} graph")

    def _check_pixel(self, node):
        if not isinstance(node, Pixel):
            raise ValueError(f"Not a graph node: {node!r}")
        if not (0 <= node.x < self.width and 0 <= node.y < self.height):
            raise IndexError(f"Pixel {node} outside {self.width}x{self.height} image")

    def __repr__(self):
        return f"PixelGraph({self.width}x{self.height}, direction={self.direction!r})"
