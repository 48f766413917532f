"""
Find and draw the minimum-energy seams of an image.

Usage:
    python find_seams.py input.png [output.png]

With no input, a synthetic picture (two soft blobs on a gradient) is used.
"""

import sys
sys.path.insert(0, '..')

import torch
import matplotlib.pyplot as plt

from seamcarver import Picture, SeamCarver


def synthetic_picture(height: int = 120, width: int = 160) -> Picture:
    """Horizontal gradient background with two bright blobs."""
    y = torch.arange(height, dtype=torch.float32)
    x = torch.arange(width, dtype=torch.float32)
    yy, xx = torch.meshgrid(y, x, indexing='ij')

    background = xx / (width - 1) * 120
    blob_a = 200 * torch.exp(-((xx - 45) ** 2 + (yy - 40) ** 2) / 300)
    blob_b = 200 * torch.exp(-((xx - 110) ** 2 + (yy - 85) ** 2) / 500)

    red = (background + blob_a).clamp(0, 255)
    green = (background + blob_b).clamp(0, 255)
    blue = background.clamp(0, 255)
    return Picture(torch.stack([red, green, blue]).round().to(torch.int64))


def visualize_seams(picture: Picture, vertical: torch.Tensor,
                    horizontal: torch.Tensor) -> torch.Tensor:
    """Paint the vertical seam red and the horizontal seam blue."""
    img_vis = picture.to_tensor()
    for row, col in enumerate(vertical.tolist()):
        img_vis[:, row, col] = torch.tensor([255, 0, 0])
    for col, row in enumerate(horizontal.tolist()):
        img_vis[:, row, col] = torch.tensor([0, 0, 255])
    return img_vis


def main():
    if len(sys.argv) > 1:
        print(f"Loading {sys.argv[1]}...")
        picture = Picture.open(sys.argv[1])
    else:
        print("Using synthetic picture...")
        picture = synthetic_picture()
    output = sys.argv[2] if len(sys.argv) > 2 else 'seams.png'

    carver = SeamCarver(picture)
    print(f"Picture size: {carver.width} x {carver.height}")

    print("Computing vertical seam...")
    vertical = carver.find_vertical_seam()
    print(f"  energy: {carver.seam_energy(vertical, 'vertical'):.0f}")

    print("Computing horizontal seam...")
    horizontal = carver.find_horizontal_seam()
    print(f"  energy: {carver.seam_energy(horizontal, 'horizontal'):.0f}")

    energy = carver.energy_map()[:carver.height, :carver.width]
    img_vis = visualize_seams(carver.picture, vertical, horizontal)

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    axes[0].imshow(img_vis.permute(1, 2, 0).to(torch.uint8).numpy())
    axes[0].set_title('Seams (vertical red, horizontal blue)')
    axes[1].imshow(torch.log1p(energy).numpy(), cmap='inferno')
    axes[1].set_title('log(1 + energy)')
    for ax in axes:
        ax.axis('off')
    plt.tight_layout()
    plt.savefig(output, dpi=120)
    print(f"Saved: {output}")


if __name__ == '__main__':
    main()
