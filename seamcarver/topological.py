"""
Topological ordering of the pixel DAG.

Depth-first search from the source sentinel, then from any pixel still
unvisited (row-major). Nodes are recorded when they finish and the
finish order is reversed, which puts every edge source before its
destination.

The search keeps its own stack of frames instead of recursing, so a
few-hundred-pixel image (tens of thousands of nodes deep) does not hit
Python's recursion limit.
"""

from typing import List

import numpy as np

from .graph import Node, PixelGraph


def _depth_first(graph: PixelGraph, start: Node, visited: np.ndarray,
                 finished: List[Node]) -> None:
    """Iterative DFS from `start`, appending nodes to `finished` in post-order."""
    visited[graph.index(start)] = True
    # Frame: [node, successors, cursor into successors]
    stack = [[start, graph.successors(start), 0]]

    while stack:
        frame = stack[-1]
        node, successors, cursor = frame

        if cursor < len(successors):
            frame[2] = cursor + 1
            child = successors[cursor]
            child_id = graph.index(child)
            if not visited[child_id]:
                visited[child_id] = True
                stack.append([child, graph.successors(child), 0])
        else:
            stack.pop()
            finished.append(node)


def topological_order(graph: PixelGraph) -> List[Node]:
    """
    Compute a topological order of every node in the graph.

    Args:
        graph: Pixel DAG for one seam direction

    Returns:
        List of all W*H pixels plus the source and sink sentinels, each
        exactly once, such that every edge points forward in the list.
        The source sentinel always comes first.
    """
    visited = np.zeros(graph.num_nodes, dtype=bool)
    finished = []

    _depth_first(graph, graph.source, visited, finished)
    for pixel in graph.pixels():
        if not visited[graph.index(pixel)]:
            _depth_first(graph, pixel, visited, finished)

    finished.reverse()
    return finished
