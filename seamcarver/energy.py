"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

We use the dual-gradient energy: the squared RGB difference between the
left/right neighbours plus the squared RGB difference between the
above/below neighbours. Border pixels get the largest value the gradient
can take so seams stay away from the image frame.
"""

import logging

import torch

from .picture import Picture

logger = logging.getLogger(__name__)

# 255^2 * 3: maximum squared difference over three 8-bit channels
BORDER_ENERGY = 195075.0


def _squared_difference(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    return ((a - b) ** 2).sum(dim=0).to(torch.float64)


def dual_gradient_energy(image: torch.Tensor) -> torch.Tensor:
    """
    Compute dual-gradient energy for every real pixel.

    E(x, y) = Δx²(x, y) + Δy²(x, y)
    Δx²(x, y) = Σ_c (I_c(x+1, y) - I_c(x-1, y))²
    Δy²(x, y) = Σ_c (I_c(x, y+1) - I_c(x, y-1))²

    Pixels on the outer boundary get BORDER_ENERGY.

    Args:
        image: RGB tensor (3, H, W) with integer channels in [0, 255]

    Returns:
        Energy map (H, W), float64
    """
    if image.dim() != 3 or image.shape[0] != 3:
        raise ValueError(f"Expected RGB image (3, H, W), got shape {tuple(image.shape)}")

    _, H, W = image.shape
    image = image.to(torch.int64)

    energy = torch.full((H, W), BORDER_ENERGY, dtype=torch.float64, device=image.device)
    if H < 3 or W < 3:
        # No interior pixels
        return energy

    # Shifted neighbours of the interior block [1:-1, 1:-1]
    right = image[:, 1:-1, 2:]
    left = image[:, 1:-1, :-2]
    below = image[:, 2:, 1:-1]
    above = image[:, :-2, 1:-1]

    energy[1:-1, 1:-1] = (_squared_difference(right, left) +
                          _squared_difference(below, above))
    return energy


def energy_field(picture: Picture) -> torch.Tensor:
    """
    Energy grid including the sentinel row and column.

    The returned tensor has shape (H + 1, W + 1) and is indexed [y, x].
    Row H and column W hold the (zero) energy of the sentinel nodes.

    Args:
        picture: Picture to score

    Returns:
        Energy grid (H + 1, W + 1), float64
    """
    H, W = picture.height, picture.width
    field = torch.zeros(H + 1, W + 1, dtype=torch.float64)
    field[:H, :W] = dual_gradient_energy(picture.to_tensor())
    logger.debug("Computed energy field for %dx%d picture", W, H)
    return field


def pixel_energy(picture: Picture, x: int, y: int) -> float:
    """Energy of a single coordinate, including the sentinel row/column.

    Args:
        picture: Picture to read
        x: column in [0, width]
        y: row in [0, height]

    Returns:
        0 on the sentinel row/column, BORDER_ENERGY on the image boundary,
        otherwise the dual-gradient energy.
    """
    W, H = picture.width, picture.height
    if not (0 <= x <= W and 0 <= y <= H):
        raise IndexError(f"Coordinate ({x}, {y}) outside [0, {W}] x [0, {H}]")

    if x == W or y == H:
        return 0.0
    if x == 0 or x == W - 1 or y == 0 or y == H - 1:
        return BORDER_ENERGY

    return float(_delta(picture, x + 1, y, x - 1, y) + _delta(picture, x, y + 1, x, y - 1))


def _delta(picture: Picture, x1: int, y1: int, x2: int, y2: int) -> int:
    r1, g1, b1 = picture.get(x1, y1)
    r2, g2, b2 = picture.get(x2, y2)
    return (r1 - r2) ** 2 + (g1 - g2) ** 2 + (b1 - b2) ** 2
