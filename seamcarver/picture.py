"""
Read-only RGB picture snapshot.

The engine never touches the caller's image: every Picture owns a private
int64 tensor of shape (3, H, W) with channels in [0, 255].
"""

import threading
from typing import Tuple, Union

import numpy as np
import torch
from PIL import Image


class Picture:
    """
    Immutable RGB picture.

    Pixels are addressed as (x, y) = (column, row), matching seam output.
    """

    def __init__(self, pixels: Union[torch.Tensor, np.ndarray]):
        """
        Args:
            pixels: RGB image with integer values in [0, 255], either a
                    channels-first tensor (3, H, W) or a channels-last
                    array (H, W, 3) as produced by PIL
        """
        if isinstance(pixels, np.ndarray):
            if pixels.ndim != 3 or pixels.shape[2] != 3:
                raise ValueError(f"Expected an (H, W, 3) RGB array, got shape {pixels.shape}")
            pixels = torch.from_numpy(np.ascontiguousarray(pixels)).permute(2, 0, 1)
        if not isinstance(pixels, torch.Tensor):
            raise ValueError(f"Unsupported picture type: {type(pixels).__name__}")
        if pixels.dim() != 3 or pixels.shape[0] != 3:
            raise ValueError(f"Expected a (3, H, W) RGB tensor, got shape {tuple(pixels.shape)}")

        _, H, W = pixels.shape
        if H == 0 or W == 0:
            raise ValueError(f"Picture must be at least 1x1, got {W}x{H}")
        if pixels.is_floating_point():
            raise ValueError("Picture channels must be integers in [0, 255]")

        data = pixels.detach().to(device='cpu', dtype=torch.int64).clone()
        if data.min().item() < 0 or data.max().item() > 255:
            raise ValueError("Picture channels must be integers in [0, 255]")

        self._data = data
        self._rows = None
        self._rows_lock = threading.Lock()

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> 'Picture':
        """Create a picture from an (H, W, 3) array."""
        return cls(array)

    @classmethod
    def from_pil(cls, image: Image.Image) -> 'Picture':
        """Create a picture from a PIL image (converted to RGB)."""
        return cls(np.array(image.convert('RGB'), dtype=np.uint8))

    @classmethod
    def open(cls, path: str) -> 'Picture':
        """Load a picture from disk with Pillow."""
        with Image.open(path) as img:
            return cls.from_pil(img)

    @property
    def width(self) -> int:
        return self._data.shape[2]

    @property
    def height(self) -> int:
        return self._data.shape[1]

    def get(self, x: int, y: int) -> Tuple[int, int, int]:
        """Return the (red, green, blue) channels of pixel (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} picture")
        r, g, b = self._pixel_rows()[y][x]
        return r, g, b

    def _pixel_rows(self):
        # (H, W, 3) nested lists for fast scalar reads, built once
        if self._rows is None:
            with self._rows_lock:
                if self._rows is None:
                    self._rows = self._data.permute(1, 2, 0).tolist()
        return self._rows

    def to_tensor(self) -> torch.Tensor:
        """Return a copy of the pixels as a (3, H, W) int64 tensor."""
        return self._data.clone()

    def to_pil(self) -> Image.Image:
        array = self._data.permute(1, 2, 0).numpy().astype(np.uint8)
        return Image.fromarray(array)

    def copy(self) -> 'Picture':
        return Picture(self._data)

    def __eq__(self, other):
        if not isinstance(other, Picture):
            return NotImplemented
        return torch.equal(self._data, other._data)

    def __repr__(self):
        return f"Picture({self.width}x{self.height})"
