"""Dataset statistics callback — prints class distribution at training start."""

from __future__ import annotations

import lightning as L
import torch
from loguru import logger
from rich import box
from rich.console import Console
from rich.table import Table


class DatasetStatisticsCallback(L.Callback):
    """Print a rich table of the train and test class distributions.

    Reads ``trainer.datamodule.splits`` and ``class_names``; skips with a
    warning when the datamodule has not been set up.
    """

    def on_fit_start(self, trainer: L.Trainer, pl_module: L.LightningModule) -> None:
        """Compute and display class distribution at training start."""
        datamodule = getattr(trainer, "datamodule", None)
        if datamodule is None:
            logger.warning("No datamodule found. Skipping dataset statistics.")
            return

        try:
            splits = datamodule.splits
        except RuntimeError:
            logger.warning(
                "Datamodule has no loaded splits. Skipping dataset statistics."
            )
            return

        class_names: list[str] = datamodule.class_names
        train_counts = torch.bincount(
            splits.train_labels, minlength=len(class_names)
        ).tolist()
        test_counts = torch.bincount(
            splits.test_labels, minlength=len(class_names)
        ).tolist()
        train_total = len(splits.train_labels)
        test_total = len(splits.test_labels)
        logger.info(
            f"Dataset: train={train_total}, test={test_total} samples, "
            f"{len(class_names)} classes"
        )

        console = Console()
        table = Table(
            title="Dataset Class Distribution",
            header_style="bold magenta",
            box=box.SQUARE,
            show_lines=True,
        )
        table.add_column("Class Name", style="cyan")
        table.add_column("Index", justify="right")
        table.add_column("Train", justify="right", style="green")
        table.add_column("Train %", justify="right", style="yellow")
        table.add_column("Test", justify="right", style="green")

        for idx, name in enumerate(class_names):
            count = train_counts[idx]
            pct = count / train_total * 100 if train_total > 0 else 0.0
            table.add_row(
                name, str(idx), str(count), f"{pct:.1f}%", str(test_counts[idx])
            )

        console.print(table)
