"""
SeamCarver: the public entry point tying energy, graph and path search together.
"""

import threading
from typing import Sequence, Union

import numpy as np
import torch
from PIL import Image

from .energy import energy_field
from .graph import PixelGraph
from .picture import Picture
from .shortest_path import shortest_seam
from .topological import topological_order


def validate_seam(seam: Union[torch.Tensor, Sequence[int]], direction: str,
                  width: int, height: int) -> torch.Tensor:
    """
    Check that a seam fits a W x H image.

    Args:
        seam: Seam indices (one per column for horizontal, per row for vertical)
        direction: 'vertical' or 'horizontal'
        width: Image width
        height: Image height

    Returns:
        The seam as a long tensor
    """
    if direction == 'vertical':
        length, limit = height, width
    elif direction == 'horizontal':
        length, limit = width, height
    else:
        raise ValueError(f"Invalid direction: {direction}")

    seam = torch.as_tensor(seam)
    if seam.is_floating_point() or seam.is_complex() or seam.dtype == torch.bool:
        raise ValueError(f"Seam entries must be integers, got {seam.dtype}")
    seam = seam.long()
    if seam.dim() != 1 or seam.shape[0] != length:
        raise ValueError(f"{direction.capitalize()} seam must have length {length}, "
                         f"got shape {tuple(seam.shape)}")
    if (seam < 0).any() or (seam >= limit).any():
        raise ValueError(f"Seam entries must lie in [0, {limit})")
    if length > 1 and (seam[1:] - seam[:-1]).abs().max() > 1:
        raise ValueError("Adjacent seam entries must differ by at most 1")
    return seam


class SeamCarver:
    """
    Finds minimum-energy horizontal and vertical seams in a picture.

    The picture is copied on construction, so later changes to the caller's
    image never affect results. The energy grid is computed once, on first
    use, and shared by both seam directions.

    Seam queries rebuild their traversal state on every call and are not
    safe to run concurrently on one instance.
    """

    def __init__(self, picture: Union[Picture, torch.Tensor, np.ndarray, Image.Image]):
        """
        Args:
            picture: Picture, RGB tensor (3, H, W), RGB array (H, W, 3)
                     or PIL image
        """
        if picture is None:
            raise ValueError("SeamCarver requires a picture")

        if isinstance(picture, Picture):
            self._picture = picture.copy()
        elif isinstance(picture, Image.Image):
            self._picture = Picture.from_pil(picture)
        else:
            self._picture = Picture(picture)

        self._energy = None
        self._energy_lock = threading.Lock()

    @property
    def picture(self) -> Picture:
        """The private snapshot taken at construction."""
        return self._picture

    @property
    def width(self) -> int:
        return self._picture.width

    @property
    def height(self) -> int:
        return self._picture.height

    def _energy_field(self) -> torch.Tensor:
        if self._energy is None:
            with self._energy_lock:
                if self._energy is None:
                    self._energy = energy_field(self._picture)
        return self._energy

    def energy_map(self) -> torch.Tensor:
        """Copy of the energy grid (H + 1, W + 1), indexed [y, x]."""
        return self._energy_field().clone()

    def energy(self, x: int, y: int) -> float:
        """Energy of pixel (x, y); x == width or y == height are sentinels (0)."""
        if not (0 <= x <= self.width and 0 <= y <= self.height):
            raise IndexError(f"Coordinate ({x}, {y}) outside "
                             f"[0, {self.width}] x [0, {self.height}]")
        return self._energy_field()[y, x].item()

    def find_seam(self, direction: str = 'vertical') -> torch.Tensor:
        """
        Compute the minimum-energy seam.

        Args:
            direction: 'vertical' or 'horizontal'

        Returns:
            Seam indices - for vertical: (H,) with column index per row
                          for horizontal: (W,) with row index per column
        """
        graph = PixelGraph(self.width, self.height, direction)
        order = topological_order(graph)
        return shortest_seam(graph, self._energy_field(), order)

    def find_horizontal_seam(self) -> torch.Tensor:
        return self.find_seam('horizontal')

    def find_vertical_seam(self) -> torch.Tensor:
        return self.find_seam('vertical')

    def seam_energy(self, seam: Union[torch.Tensor, Sequence[int]],
                    direction: str = 'vertical') -> float:
        """Total energy of the pixels on a seam."""
        seam = validate_seam(seam, direction, self.width, self.height)
        energy = self._energy_field()
        if direction == 'vertical':
            rows = torch.arange(self.height)
            return energy[rows, seam].sum().item()
        cols = torch.arange(self.width)
        return energy[seam, cols].sum().item()

    def __repr__(self):
        return f"SeamCarver({self.width}x{self.height})"
