"""Tests for the Picture snapshot."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import threading
import time

import numpy as np
import torch
import pytest
from PIL import Image
from seamcarver.picture import Picture

from conftest import make_random_picture, SAMPLE_ROWS


class TestConstruction:
    def test_from_tensor(self):
        picture = Picture(torch.zeros(3, 4, 6, dtype=torch.uint8))
        assert picture.width == 6
        assert picture.height == 4

    def test_from_numpy_is_channels_last(self):
        array = np.array(SAMPLE_ROWS, dtype=np.uint8)  # (4, 3, 3)
        picture = Picture.from_numpy(array)
        assert (picture.width, picture.height) == (3, 4)
        assert picture.get(1, 2) == (255, 204, 153)

    def test_from_pil(self):
        image = Image.new('RGB', (5, 2), color=(10, 20, 30))
        picture = Picture.from_pil(image)
        assert (picture.width, picture.height) == (5, 2)
        assert picture.get(4, 1) == (10, 20, 30)

    def test_open_roundtrip(self, tmp_path):
        """A PNG written from a picture loads back pixel-exact."""
        picture = make_random_picture(7, 9)
        path = tmp_path / 'picture.png'
        picture.to_pil().save(path)
        assert Picture.open(str(path)) == picture

    @pytest.mark.parametrize('shape', [(3, 0, 4), (3, 4, 0)])
    def test_rejects_empty(self, shape):
        with pytest.raises(ValueError):
            Picture(torch.zeros(shape, dtype=torch.int64))

    def test_rejects_wrong_channel_count(self):
        with pytest.raises(ValueError):
            Picture(torch.zeros(4, 5, 5, dtype=torch.int64))
        with pytest.raises(ValueError):
            Picture(np.zeros((5, 5, 4), dtype=np.uint8))

    def test_rejects_float_pixels(self):
        with pytest.raises(ValueError):
            Picture(torch.rand(3, 4, 4))

    def test_rejects_out_of_range_channels(self):
        pixels = torch.zeros(3, 2, 2, dtype=torch.int64)
        pixels[1, 0, 0] = 256
        with pytest.raises(ValueError):
            Picture(pixels)

    def test_rejects_unsupported_type(self):
        with pytest.raises(ValueError):
            Picture([[0, 0, 0]])


class TestSnapshot:
    def test_source_mutation_does_not_leak(self):
        pixels = torch.zeros(3, 3, 3, dtype=torch.int64)
        picture = Picture(pixels)
        pixels[0, 1, 1] = 200
        assert picture.get(1, 1) == (0, 0, 0)

    def test_to_tensor_returns_copy(self):
        picture = make_random_picture(4, 4)
        tensor = picture.to_tensor()
        tensor.zero_()
        assert picture.to_tensor().sum() > 0

    def test_copy_is_equal(self):
        picture = make_random_picture(4, 5)
        assert picture.copy() == picture

    def test_concurrent_first_get_builds_rows_once(self, monkeypatch):
        """Threads racing on the first read all see one row cache."""
        picture = make_random_picture(6, 5)
        expected = picture.to_tensor()
        H, W = picture.height, picture.width
        built = []
        real_tolist = torch.Tensor.tolist

        def slow_tolist(tensor):
            built.append(tensor.shape)
            time.sleep(0.05)
            return real_tolist(tensor)

        monkeypatch.setattr(torch.Tensor, 'tolist', slow_tolist)
        results = []

        def read_pixels():
            results.append([picture.get(x, y) for y in range(H) for x in range(W)])

        threads = [threading.Thread(target=read_pixels) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        monkeypatch.undo()
        want = [tuple(expected[:, y, x].tolist()) for y in range(H) for x in range(W)]
        assert len(built) == 1
        assert len(results) == 8
        assert all(r == want for r in results)

    def test_get_out_of_range(self):
        picture = make_random_picture(4, 5)
        with pytest.raises(IndexError):
            picture.get(5, 0)
        with pytest.raises(IndexError):
            picture.get(0, -1)
