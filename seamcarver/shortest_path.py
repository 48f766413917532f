"""
Single-source shortest paths over the pixel DAG.

Because the graph is acyclic, relaxing every edge once in topological
order yields exact shortest distances. The weight of an edge p -> q is the
energy of q, so a path's length is the total energy of the pixels on it
(sentinels weigh 0).
"""

import logging
from typing import List, Optional

import numpy as np
import torch

from .graph import Node, Pixel, PixelGraph
from .topological import topological_order

logger = logging.getLogger(__name__)


class ShortestPaths:
    """
    Shortest paths from the graph's source sentinel to every node.

    Distances and predecessors are dense arrays indexed by node id.
    Ties keep the first path found: a later path of equal cost never
    replaces it.
    """

    def __init__(self, graph: PixelGraph, energy: torch.Tensor,
                 order: Optional[List[Node]] = None):
        """
        Args:
            graph: Pixel DAG for one seam direction
            energy: Energy grid (H + 1, W + 1) indexed [y, x]
            order: Topological order of `graph` (computed if omitted)
        """
        expected = (graph.height + 1, graph.width + 1)
        if tuple(energy.shape) != expected:
            raise ValueError(f"Energy grid shape {tuple(energy.shape)} does not match "
                             f"expected {expected}")
        if order is None:
            order = topological_order(graph)

        self.graph = graph
        self.dist_to = np.full(graph.num_nodes, np.inf, dtype=np.float64)
        self.edge_to = np.full(graph.num_nodes, -1, dtype=np.int64)
        self.dist_to[graph.index(graph.source)] = 0.0

        weights = energy.tolist()
        for p in order:
            p_id = graph.index(p)
            for q in graph.successors(p):
                self._relax(p_id, q, weights)

    def _relax(self, p_id: int, q: Node, weights) -> None:
        q_id = self.graph.index(q)
        x, y = self.graph.coordinate(q)
        candidate = self.dist_to[p_id] + weights[y][x]
        if candidate < self.dist_to[q_id]:
            self.dist_to[q_id] = candidate
            self.edge_to[q_id] = p_id

    def distance_to(self, node: Node) -> float:
        return float(self.dist_to[self.graph.index(node)])

    def has_path_to(self, node: Node) -> bool:
        return self.distance_to(node) < np.inf

    def path_to(self, node: Node) -> List[Node]:
        """
        Nodes on the shortest path to `node`, in path order.

        The source sentinel is excluded; `node` itself is the last entry.
        """
        if not self.has_path_to(node):
            raise ValueError(f"No path from {self.graph.source.name} to {node}")

        path = []
        node_id = self.graph.index(node)
        while self.edge_to[node_id] != -1:
            path.append(self.graph.node(node_id))
            node_id = int(self.edge_to[node_id])
        path.reverse()
        return path


def shortest_seam(graph: PixelGraph, energy: torch.Tensor,
                  order: Optional[List[Node]] = None) -> torch.Tensor:
    """
    Find the minimum-energy seam between the graph's sentinels.

    Args:
        graph: Pixel DAG for one seam direction
        energy: Energy grid (H + 1, W + 1) indexed [y, x]
        order: Topological order of `graph` (computed if omitted)

    Returns:
        Seam indices - for vertical: (H,) with column index per row
                      for horizontal: (W,) with row index per column
    """
    paths = ShortestPaths(graph, energy, order)
    path = paths.path_to(graph.sink)

    if graph.direction == 'horizontal':
        seam = torch.zeros(graph.width, dtype=torch.long)
        for node in path:
            if isinstance(node, Pixel):
                seam[node.x] = node.y
    else:
        seam = torch.zeros(graph.height, dtype=torch.long)
        for node in path:
            if isinstance(node, Pixel):
                seam[node.y] = node.x

    logger.debug("Found %s seam with energy %.1f", graph.direction,
                 paths.distance_to(graph.sink))
    return seam
