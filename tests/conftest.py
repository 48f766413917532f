"""Shared test fixtures for the seamcarver test suite."""

import itertools
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarver.picture import Picture


# 4 rows x 3 columns, (x, y) -> rows[y][x]; interior energies are
# (1, 1) = 52225 and (1, 2) = 52024.
SAMPLE_ROWS = [
    [(255, 101, 51), (255, 101, 153), (255, 101, 255)],
    [(255, 153, 51), (255, 153, 153), (255, 153, 255)],
    [(255, 203, 51), (255, 204, 153), (255, 205, 255)],
    [(255, 255, 51), (255, 255, 153), (255, 255, 255)],
]


@pytest.fixture
def sample_picture():
    """The 3x4 sample picture above."""
    return make_picture(SAMPLE_ROWS)


def make_picture(rows):
    """Picture from nested rows of (r, g, b) tuples, rows[y][x]."""
    pixels = torch.tensor(rows, dtype=torch.int64)  # (H, W, 3)
    return Picture(pixels.permute(2, 0, 1))


def make_solid_picture(H, W, color=(128, 64, 32)):
    pixels = torch.tensor(color, dtype=torch.int64).view(3, 1, 1).expand(3, H, W)
    return Picture(pixels)


def make_random_picture(H, W, seed=42):
    torch.manual_seed(seed)
    return Picture(torch.randint(0, 256, (3, H, W)))


def brute_force_min_energy(energy, direction='vertical'):
    """Lowest total energy over every connected seam, by enumeration.

    Args:
        energy: Energy map (H, W) of the real pixels
        direction: 'vertical' or 'horizontal'
    """
    if direction == 'horizontal':
        energy = energy.t()
    n_lines, n_positions = energy.shape
    best = float('inf')
    for start in range(n_positions):
        for steps in itertools.product((-1, 0, 1), repeat=n_lines - 1):
            pos = start
            total = energy[0, pos].item()
            valid = True
            for i, step in enumerate(steps, start=1):
                pos += step
                if not 0 <= pos < n_positions:
                    valid = False
                    break
                total += energy[i, pos].item()
            if valid:
                best = min(best, total)
    return best
