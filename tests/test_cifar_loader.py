"""Tests for the CIFAR-10 binary batch reader."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
import torch

from cifar_resnet.data.cifar import (
    BYTES_PER_RECORD,
    TEST_FILE,
    CifarLoadError,
    load_dir,
    read_batch_file,
)

Writer = Callable[[Path, torch.Tensor, torch.Tensor], None]


class TestReadBatchFile:
    def test_decodes_label_and_channel_planes(
        self, tmp_path: Path, batch_writer: Writer
    ) -> None:
        """Label byte first, then full R, G and B planes in that order."""
        pixels = torch.zeros(1, 3, 32, 32, dtype=torch.uint8)
        pixels[0, 0] = 255
        pixels[0, 2] = 51
        pixels[0, 1, 0, 1] = 102  # row 0, column 1 of the green plane
        path = tmp_path / "one.bin"
        batch_writer(path, torch.tensor([3], dtype=torch.uint8), pixels)

        images, labels = read_batch_file(path)

        assert labels.tolist() == [3]
        assert labels.dtype == torch.int64
        assert images.dtype == torch.float32
        assert images.shape == (1, 3, 32, 32)
        assert torch.all(images[0, 0] == 1.0)
        assert torch.allclose(images[0, 2], torch.full((32, 32), 0.2))
        assert images[0, 1, 0, 1].item() == pytest.approx(0.4)
        assert images[0, 1, 0, 0].item() == 0.0

    def test_multiple_records(self, tmp_path: Path, batch_writer: Writer) -> None:
        labels = torch.tensor([0, 9, 4], dtype=torch.uint8)
        pixels = torch.randint(0, 256, (3, 3, 32, 32))
        path = tmp_path / "three.bin"
        batch_writer(path, labels, pixels)

        images, decoded = read_batch_file(path)

        assert decoded.tolist() == [0, 9, 4]
        assert torch.allclose(images, pixels.float() / 255.0)
        assert images.min() >= 0.0
        assert images.max() <= 1.0

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CifarLoadError, match="not found"):
            read_batch_file(tmp_path / "nope.bin")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.bin"
        path.write_bytes(b"")
        with pytest.raises(CifarLoadError):
            read_batch_file(path)

    def test_truncated_record(self, tmp_path: Path) -> None:
        path = tmp_path / "short.bin"
        path.write_bytes(bytes(BYTES_PER_RECORD + 10))
        with pytest.raises(CifarLoadError, match="multiple"):
            read_batch_file(path)

    def test_label_out_of_range(self, tmp_path: Path, batch_writer: Writer) -> None:
        path = tmp_path / "bad_label.bin"
        batch_writer(
            path,
            torch.tensor([1, 10], dtype=torch.uint8),
            torch.zeros(2, 3, 32, 32, dtype=torch.uint8),
        )
        with pytest.raises(CifarLoadError, match="label 10"):
            read_batch_file(path)

    def test_load_error_is_runtime_error(self) -> None:
        assert issubclass(CifarLoadError, RuntimeError)


class TestLoadDir:
    def test_concatenates_train_batches(self, cifar_dir: Path) -> None:
        splits = load_dir(cifar_dir)
        assert splits.train_images.shape == (100, 3, 32, 32)
        assert splits.train_labels.shape == (100,)
        assert splits.test_images.shape == (20, 3, 32, 32)
        assert splits.test_labels.shape == (20,)
        assert int(splits.train_labels.max()) <= 9
        assert int(splits.train_labels.min()) >= 0

    def test_train_files_in_order(self, cifar_dir: Path) -> None:
        splits = load_dir(cifar_dir)
        first_images, first_labels = read_batch_file(cifar_dir / "data_batch_1.bin")
        last_images, _ = read_batch_file(cifar_dir / "data_batch_5.bin")
        assert torch.equal(splits.train_labels[:20], first_labels)
        assert torch.equal(splits.train_images[:20], first_images)
        assert torch.equal(splits.train_images[80:], last_images)

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(CifarLoadError, match="directory not found"):
            load_dir(tmp_path / "missing")

    def test_missing_test_batch(self, cifar_dir: Path) -> None:
        (cifar_dir / TEST_FILE).unlink()
        with pytest.raises(CifarLoadError, match=TEST_FILE):
            load_dir(cifar_dir)

    def test_missing_train_batch(self, cifar_dir: Path) -> None:
        (cifar_dir / "data_batch_3.bin").unlink()
        with pytest.raises(CifarLoadError, match="data_batch_3.bin"):
            load_dir(cifar_dir)
