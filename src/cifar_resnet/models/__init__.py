"""Classification model implementations."""

from cifar_resnet.models.base import BaseClassificationModel
from cifar_resnet.models.fast_resnet import (
    LogitScale,
    ResidualLayer,
    conv_bn,
    fast_resnet,
)
from cifar_resnet.models.resnet import FastResNetClassificationModel

__all__ = [
    "BaseClassificationModel",
    "FastResNetClassificationModel",
    "LogitScale",
    "ResidualLayer",
    "conv_bn",
    "fast_resnet",
]
