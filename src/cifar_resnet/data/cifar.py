"""Reader for the CIFAR-10 binary batch files."""

from __future__ import annotations

from pathlib import Path

import torch
from loguru import logger

from cifar_resnet.types import CifarSplits

IMAGE_SHAPE: tuple[int, int, int] = (3, 32, 32)
# 1 label byte followed by 32*32 R, G and B planes.
BYTES_PER_RECORD = 1 + 3 * 32 * 32
NUM_CLASSES = 10

TRAIN_FILES: tuple[str, ...] = tuple(f"data_batch_{i}.bin" for i in range(1, 6))
TEST_FILE = "test_batch.bin"

CIFAR10_CLASSES: list[str] = [
    "airplane",
    "automobile",
    "bird",
    "cat",
    "deer",
    "dog",
    "frog",
    "horse",
    "ship",
    "truck",
]


class CifarLoadError(RuntimeError):
    """The CIFAR-10 directory or one of its batch files is missing or malformed."""


def read_batch_file(path: Path) -> tuple[torch.Tensor, torch.Tensor]:
    """Decode one CIFAR-10 binary batch file.

    Args:
        path: Path to a ``*.bin`` batch file.

    Returns:
        ``(images, labels)`` where images is float32 ``(N, 3, 32, 32)`` scaled
        to ``[0, 1]`` and labels is int64 ``(N,)``.

    Raises:
        CifarLoadError: If the file is missing, empty, truncated, or holds a
            label outside ``[0, 9]``.
    """
    if not path.is_file():
        raise CifarLoadError(f"CIFAR-10 batch file not found: {path}")
    raw = path.read_bytes()
    if not raw or len(raw) % BYTES_PER_RECORD != 0:
        raise CifarLoadError(
            f"{path} has {len(raw)} bytes, expected a positive multiple "
            f"of {BYTES_PER_RECORD}"
        )

    records = torch.frombuffer(bytearray(raw), dtype=torch.uint8).view(
        -1, BYTES_PER_RECORD
    )
    labels = records[:, 0].to(torch.int64)
    if int(labels.max()) >= NUM_CLASSES:
        raise CifarLoadError(
            f"{path} contains label {int(labels.max())}, "
            f"expected [0, {NUM_CLASSES - 1}]"
        )
    images = records[:, 1:].reshape(-1, *IMAGE_SHAPE).to(torch.float32) / 255.0
    return images, labels


def load_dir(data_dir: Path) -> CifarSplits:
    """Load the five training batches and the test batch from ``data_dir``.

    Training batches are concatenated in file order.
    """
    if not data_dir.is_dir():
        raise CifarLoadError(f"CIFAR-10 data directory not found: {data_dir}")

    test_images, test_labels = read_batch_file(data_dir / TEST_FILE)
    train_parts = [read_batch_file(data_dir / name) for name in TRAIN_FILES]
    train_images = torch.cat([images for images, _ in train_parts])
    train_labels = torch.cat([labels for _, labels in train_parts])

    logger.info(
        f"Loaded CIFAR-10 from {data_dir}: train={len(train_labels)}, "
        f"test={len(test_labels)} samples"
    )
    return CifarSplits(train_images, train_labels, test_images, test_labels)
