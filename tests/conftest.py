"""Shared pytest fixtures for cifar_resnet tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
import torch

from cifar_resnet.data.cifar import BYTES_PER_RECORD, TEST_FILE, TRAIN_FILES


def write_batch_file(path: Path, labels: torch.Tensor, pixels: torch.Tensor) -> None:
    """Write records in the CIFAR-10 binary layout.

    labels: (N,); pixels: (N, 3, 32, 32); integer values in [0, 255].
    """
    records = torch.cat(
        [labels.view(-1, 1).long(), pixels.reshape(len(labels), -1).long()], dim=1
    )
    assert records.shape[1] == BYTES_PER_RECORD
    path.write_bytes(bytes(records.to(torch.uint8).flatten().tolist()))


def _random_batch(
    n: int, generator: torch.Generator
) -> tuple[torch.Tensor, torch.Tensor]:
    labels = torch.randint(0, 10, (n,), generator=generator)
    pixels = torch.randint(0, 256, (n, 3, 32, 32), generator=generator)
    return labels, pixels


@pytest.fixture()
def make_cifar_dir(tmp_path: Path) -> Callable[[int, int], Path]:
    """Factory writing a synthetic CIFAR-10 directory.

    ``train_per_file`` records go into each of the five train batches and
    ``test_size`` records into the test batch. Labels and pixels are random
    but seeded, so the same arguments always produce the same bytes.
    """

    def _make(train_per_file: int = 20, test_size: int = 20) -> Path:
        root = tmp_path / f"cifar_{train_per_file}_{test_size}"
        root.mkdir()
        generator = torch.Generator().manual_seed(1234)
        for name in TRAIN_FILES:
            write_batch_file(root / name, *_random_batch(train_per_file, generator))
        write_batch_file(root / TEST_FILE, *_random_batch(test_size, generator))
        return root

    return _make


@pytest.fixture()
def cifar_dir(make_cifar_dir: Callable[[int, int], Path]) -> Path:
    """100 train images (5 files x 20) and 20 test images."""
    return make_cifar_dir(20, 20)


@pytest.fixture()
def batch_writer() -> Callable[[Path, torch.Tensor, torch.Tensor], None]:
    """Expose :func:`write_batch_file` to tests that craft their own records."""
    return write_batch_file
