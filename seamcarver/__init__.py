"""
Seam identification for content-aware image resizing.

Scores pixels by dual-gradient energy and finds the minimum-energy
horizontal or vertical seam as a shortest path through a pixel DAG.
"""

__version__ = "0.1.0"

from .picture import Picture
from .energy import BORDER_ENERGY, dual_gradient_energy, energy_field, pixel_energy
from .graph import Pixel, Sentinel, PixelGraph
from .topological import topological_order
from .shortest_path import ShortestPaths, shortest_seam
from .carver import SeamCarver, validate_seam

__all__ = [
    'Picture',
    'BORDER_ENERGY',
    'dual_gradient_energy',
    'energy_field',
    'pixel_energy',
    'Pixel',
    'Sentinel',
    'PixelGraph',
    'topological_order',
    'ShortestPaths',
    'shortest_seam',
    'SeamCarver',
    'validate_seam',
]
