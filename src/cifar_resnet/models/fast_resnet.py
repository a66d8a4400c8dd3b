"""Fast ResNet backbone for 32x32 CIFAR-10 images."""

from __future__ import annotations

from collections import OrderedDict

import torch
import torch.nn as nn
import torch.nn.functional as F


def conv_bn(c_in: int, c_out: int) -> nn.Sequential:
    """3x3 conv (stride 1, padding 1, no bias) -> BatchNorm2d -> ReLU.

    Spatial size is preserved. The conv carries no bias because the
    batch-norm shift replaces it.
    """
    return nn.Sequential(
        OrderedDict(
            [
                ("conv", nn.Conv2d(c_in, c_out, kernel_size=3, padding=1, bias=False)),
                ("bn", nn.BatchNorm2d(c_out)),
                ("relu", nn.ReLU()),
            ]
        )
    )


class ResidualLayer(nn.Module):
    """Projection + 2x2 max-pool followed by a two-block residual branch.

    ``out = pool(pre(x)) + block2(block1(pool(pre(x))))``; halves H and W.
    """

    def __init__(self, c_in: int, c_out: int) -> None:
        super().__init__()
        self.pre = conv_bn(c_in, c_out)
        self.block1 = conv_bn(c_out, c_out)
        self.block2 = conv_bn(c_out, c_out)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        pre = F.max_pool2d(self.pre(x), 2)
        return pre + self.block2(self.block1(pre))


class LogitScale(nn.Module):
    """Multiply the input by a fixed constant."""

    def __init__(self, factor: float) -> None:
        super().__init__()
        self.factor = factor

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return x * self.factor

    def extra_repr(self) -> str:
        return f"factor={self.factor}"


def fast_resnet(num_classes: int = 10, logit_scale: float = 0.125) -> nn.Sequential:
    """Build the fast ResNet: (B, 3, 32, 32) -> (B, num_classes) logits.

    Spatial size goes 32 -> 16 (layer1) -> 8 (pool1) -> 4 (layer2) -> 1 (pool2),
    so ``linear`` always sees 512 features.
    """
    return nn.Sequential(
        OrderedDict(
            [
                ("pre", conv_bn(3, 64)),
                ("layer1", ResidualLayer(64, 128)),
                ("inter", conv_bn(128, 256)),
                ("pool1", nn.MaxPool2d(2)),
                ("layer2", ResidualLayer(256, 512)),
                ("pool2", nn.MaxPool2d(4)),
                ("flatten", nn.Flatten()),
                ("linear", nn.Linear(512, num_classes)),
                ("scale", LogitScale(logit_scale)),
            ]
        )
    )
