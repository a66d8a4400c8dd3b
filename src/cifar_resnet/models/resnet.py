"""Fast ResNet classification model for CIFAR-10."""

from __future__ import annotations

from typing import Any

import torch

from cifar_resnet.config import ModelConfig
from cifar_resnet.models.base import BaseClassificationModel
from cifar_resnet.models.fast_resnet import fast_resnet
from cifar_resnet.utils.hydra import register


@register(
    name="fast_resnet",
    num_classes=10,
    learning_rate=1e-4,
    logit_scale=0.125,
)
class FastResNetClassificationModel(BaseClassificationModel):
    """Fast ResNet backbone trained from scratch.

    Logits are scaled by ``logit_scale`` before the loss. Input must be
    (B, 3, 32, 32); output is (B, num_classes).
    """

    def __init__(
        self,
        num_classes: int = 10,
        learning_rate: float = 1e-4,
        logit_scale: float = 0.125,
        **kwargs: Any,
    ) -> None:
        config = ModelConfig(
            num_classes=num_classes,
            learning_rate=learning_rate,
            logit_scale=logit_scale,
        )
        super().__init__(
            num_classes=config.num_classes, learning_rate=config.learning_rate
        )
        self.model = fast_resnet(
            num_classes=config.num_classes, logit_scale=config.logit_scale
        )

    def forward(self, images: torch.Tensor) -> torch.Tensor:
        return self.model(images)  # type: ignore[no-any-return]
