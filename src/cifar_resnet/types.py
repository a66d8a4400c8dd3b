"""Type aliases and TypedDicts for cifar_resnet inter-module contracts."""

from typing import NamedTuple, TypedDict

import torch


class ClassificationBatch(TypedDict):
    """A single batch from a classification DataLoader.

    images: Float tensor of shape (B, 3, 32, 32), values in [0, 1].
    labels: Long tensor of shape (B,), integer class indices.
    """

    images: torch.Tensor
    labels: torch.Tensor


class CifarSplits(NamedTuple):
    """In-memory CIFAR-10 train and test splits."""

    train_images: torch.Tensor
    train_labels: torch.Tensor
    test_images: torch.Tensor
    test_labels: torch.Tensor
