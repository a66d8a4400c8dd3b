"""Data pipeline for cifar_resnet."""

from cifar_resnet.data.cifar import CIFAR10_CLASSES, CifarLoadError, load_dir
from cifar_resnet.data.datamodule import CifarDataModule

__all__ = [
    "CIFAR10_CLASSES",
    "CifarDataModule",
    "CifarLoadError",
    "load_dir",
]
