"""Base LightningModule for CIFAR-10 classification models."""

from __future__ import annotations

import lightning as L
import torch
from torchmetrics.classification import MulticlassAccuracy

from cifar_resnet.types import ClassificationBatch


class BaseClassificationModel(L.LightningModule):
    """Cross-entropy classifier trained with Adam.

    Subclasses must set ``self.model`` (nn.Module backbone) in ``__init__``
    and implement ``forward()``. The test split is wired in as the
    validation set, so ``val/*`` metrics are test-set metrics.
    """

    def __init__(
        self,
        num_classes: int = 10,
        learning_rate: float = 1e-4,
    ) -> None:
        super().__init__()
        self.save_hyperparameters()
        self.loss_fn = torch.nn.CrossEntropyLoss()

        # Pattern A metrics: update in step, compute+log+reset in epoch_end.
        # top_k_5 guard: MulticlassAccuracy raises ValueError if
        # top_k > num_classes.
        top_k_5 = min(5, num_classes)
        self.val_top1 = MulticlassAccuracy(
            num_classes=num_classes, top_k=1, average="micro"
        )
        self.val_top5 = MulticlassAccuracy(
            num_classes=num_classes, top_k=top_k_5, average="micro"
        )
        self.val_per_cls = MulticlassAccuracy(
            num_classes=num_classes, top_k=1, average="none"
        )

    def training_step(
        self, batch: ClassificationBatch, batch_idx: int
    ) -> torch.Tensor:
        images, labels = batch["images"], batch["labels"]
        logits = self(images)
        loss: torch.Tensor = self.loss_fn(logits, labels)
        self.log("train/loss", loss, on_step=True, on_epoch=False, prog_bar=True)
        return loss

    def validation_step(
        self, batch: ClassificationBatch, batch_idx: int
    ) -> None:
        images, labels = batch["images"], batch["labels"]
        logits = self(images)
        loss = self.loss_fn(logits, labels)
        self.log("val/loss", loss, on_step=False, on_epoch=True)
        self.val_top1.update(logits, labels)
        self.val_top5.update(logits, labels)
        self.val_per_cls.update(logits, labels)

    def on_validation_epoch_end(self) -> None:
        self.log("val/acc_top1", self.val_top1.compute(), prog_bar=True)
        self.log("val/acc_top5", self.val_top5.compute())
        per_cls: torch.Tensor = self.val_per_cls.compute()
        for i, acc in enumerate(per_cls):
            self.log(f"val/acc_class_{i}", acc)
        self.val_top1.reset()
        self.val_top5.reset()
        self.val_per_cls.reset()

    def configure_optimizers(self) -> torch.optim.Optimizer:
        # Default betas (0.9, 0.999) and eps 1e-8; no schedule.
        return torch.optim.Adam(
            self.parameters(), lr=self.hparams["learning_rate"]
        )
