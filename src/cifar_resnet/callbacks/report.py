"""Console progress report and per-step loss history."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import lightning as L
import torch
from loguru import logger


def _step_loss(outputs: Any) -> torch.Tensor | None:
    """Pull the loss tensor out of a training_step output."""
    if isinstance(outputs, torch.Tensor):
        return outputs.detach()
    if isinstance(outputs, Mapping) and "loss" in outputs:
        return outputs["loss"].detach()  # type: ignore[no-any-return]
    return None


def format_report(iteration: int, loss: float, accuracy: float) -> str:
    """Render one progress line; ``accuracy`` is a fraction in [0, 1]."""
    return (
        f"epoch: {iteration:4} train loss: {loss:8.5f} "
        f"test acc: {100.0 * accuracy:5.2f}%"
    )


class TrainingReportCallback(L.Callback):
    """Print iteration, current train loss and test accuracy to stdout.

    A line is printed after each validation run that lands on an iteration
    divisible by ``eval_every``. The loss shown is that of the latest
    training step, the accuracy is ``val/acc_top1`` (test split).

    Args:
        eval_every: Report cadence in training iterations. Should match the
            trainer's ``val_check_interval``.
    """

    def __init__(self, eval_every: int = 50) -> None:
        super().__init__()
        self.eval_every = eval_every
        self.history: list[tuple[int, float, float]] = []
        self._last_loss: torch.Tensor | None = None

    def on_train_batch_end(
        self,
        trainer: L.Trainer,
        pl_module: L.LightningModule,
        outputs: Any,
        batch: Any,
        batch_idx: int,
    ) -> None:
        loss = _step_loss(outputs)
        if loss is not None:
            self._last_loss = loss

    def on_validation_end(
        self, trainer: L.Trainer, pl_module: L.LightningModule
    ) -> None:
        if trainer.sanity_checking or self._last_loss is None:
            return
        iteration = trainer.global_step
        if iteration % self.eval_every != 0:
            return
        acc = trainer.callback_metrics.get("val/acc_top1")
        if acc is None:
            logger.warning(
                f"No val/acc_top1 logged at iteration {iteration}; skipping report"
            )
            return
        loss_value = float(self._last_loss)
        acc_value = float(acc)
        self.history.append((iteration, loss_value, acc_value))
        print(format_report(iteration, loss_value, acc_value), flush=True)


class LossHistoryCallback(L.Callback):
    """Record the training loss of every optimizer step."""

    def __init__(self) -> None:
        super().__init__()
        self.losses: list[float] = []

    def on_train_batch_end(
        self,
        trainer: L.Trainer,
        pl_module: L.LightningModule,
        outputs: Any,
        batch: Any,
        batch_idx: int,
    ) -> None:
        loss = _step_loss(outputs)
        if loss is not None:
            self.losses.append(float(loss))
